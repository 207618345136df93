"""
CLI entry point for bulk analysis of a solver over known secrets.

This script:
  1) Instantiates the requested solver with the requested feedback rule.
  2) Plays every secret in the chosen range (a preset or --start/--count)
     with a live progress indicator.
  3) Prints the move distribution and writes:
       - CSV:  per-case results + guess/pattern history columns
       - JSON: manifest with config, the aggregated report, git commit, etc.

Presets:
  quick   first 100 secrets
  medium  first 1000 secrets
  full    all 10000 secrets
  debug   first 10 secrets, DEBUG logging
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

from tqdm import tqdm

from codebreaker.engine import MAX_MOVES, RULES
from codebreaker.harness import pretty_summary, run_case, secret_range, summarize
from codebreaker.harness.io import write_csv, write_manifest, timestamp_id, git_commit_or_unknown
from codebreaker.solvers import AdvisorConfig, create_solver, get_solver_ids

PRESETS = {
    "quick": 100,
    "medium": 1000,
    "full": 10_000,
    "debug": 10,
}


def add_common_args(ap: argparse.ArgumentParser) -> None:
    """Flags shared by the analysis apps: engine config, range, output, logging."""
    ap.add_argument("--rule", choices=sorted(RULES), default="duplicate_aware",
                    help="feedback rule used to referee and filter")
    ap.add_argument("--max-depth", type=int, help="win-probability recursion budget")
    ap.add_argument("--sample-cap", type=int, help="candidates sampled into large pools")
    ap.add_argument("--correct-pair-bonus", action="store_true",
                    help="favour guesses that can lock in two Correct slots")
    ap.add_argument("--workers", type=int, help="threads used to score guess pools")
    ap.add_argument("--preset", choices=sorted(PRESETS), default="quick")
    ap.add_argument("--start", type=int, default=0, help="first secret (as a number, 0-9999)")
    ap.add_argument("--count", type=int, help="number of secrets (overrides the preset size)")
    ap.add_argument("--seed", type=int, default=123, help="base RNG seed (for reproducibility)")
    ap.add_argument("--outdir", default="reports", help="directory for output files")
    ap.add_argument(
        "--progress",
        choices=["auto", "bar", "plain", "off"],
        default="auto",
        help="Show run progress (auto=bar on a terminal, else plain text)."
    )
    ap.add_argument("--log-level", default="WARNING",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"])


def config_from_args(args: argparse.Namespace) -> AdvisorConfig:
    return AdvisorConfig(rule=args.rule).with_overrides(
        max_depth=args.max_depth,
        sample_cap=args.sample_cap,
        correct_pair_bonus=args.correct_pair_bonus or None,
        workers=args.workers,
    )


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def progress_mode(mode: str) -> str:
    if mode == "auto":
        return "bar" if sys.stderr.isatty() else "plain"
    return mode


def play_all(solver, cases, *, base_seed: int, mode: str, label: str = "Running"):
    """Play every case with progress reporting; returns the list of result dicts."""
    results = []
    total = len(cases)
    start = time.time()
    last_print = 0.0

    iterator = tqdm(cases, ncols=80, desc=label, unit="game") if mode == "bar" else cases

    for idx, secret in enumerate(iterator, 1):
        # Derive a per-game seed so runs are reproducible and independent
        per_seed = base_seed + idx * 1013904223  # LCG-ish stride to avoid collisions
        results.append(run_case(solver, secret, seed=per_seed))

        if mode == "plain":
            now = time.time()
            if (now - last_print >= 1.0) or (idx == total):
                elapsed = now - start
                rate = (idx / elapsed) if elapsed > 0 else 0.0
                remaining = (total - idx) / rate if rate > 0 else 0.0
                pct = 100.0 * idx / max(1, total)
                sys.stderr.write(
                    f"\r[{label}] {idx}/{total} {pct:5.1f}% | elapsed {elapsed:6.1f}s | ETA {remaining:5.1f}s"
                )
                sys.stderr.flush()
                last_print = now

    if mode == "plain":
        sys.stderr.write("\n")
        sys.stderr.flush()
    return results


def write_outputs(results, report, *, outdir: Path, config: dict, solver_id: str):
    run_id = timestamp_id()
    outdir.mkdir(parents=True, exist_ok=True)
    csv_path = outdir / f"run_{run_id}.csv"
    manifest_path = outdir / f"run_{run_id}_manifest.json"

    write_csv(results, str(csv_path), max_moves=MAX_MOVES)
    manifest = {
        "run_id": run_id,
        "git_commit": git_commit_or_unknown(),
        "config": config,
        "report": report,
        "num_cases": len(results),
        "solver_id": solver_id,
    }
    write_manifest(manifest, str(manifest_path))
    return csv_path, manifest_path


def main():
    """
    Parse CLI args, run the batch with progress, print the report, write outputs.
    """
    solver_choices = ", ".join(get_solver_ids())

    ap = argparse.ArgumentParser(description="codebreaker: analyze a solver over known secrets")
    ap.add_argument("--solver", default="minimax_entropy",
                    help=f"solver id (one of: {solver_choices})")
    add_common_args(ap)
    args = ap.parse_args()

    if args.preset == "debug":
        args.log_level = "DEBUG"
    setup_logging(args.log_level)

    config = config_from_args(args)
    solver = create_solver(args.solver, config)

    count = args.count if args.count is not None else PRESETS[args.preset]
    count = min(count, 10_000 - args.start)
    cases = secret_range(args.start, count)
    print(f"Testing {len(cases)} secrets with {solver.id} ({config.rule})")

    results = play_all(solver, cases, base_seed=args.seed, mode=progress_mode(args.progress))
    report = summarize(results)
    print(pretty_summary(report))

    csv_path, manifest_path = write_outputs(
        results, report, outdir=Path(args.outdir), config=vars(args), solver_id=solver.id,
    )
    print(f"Wrote: {csv_path}")
    print(f"Wrote: {manifest_path}")


if __name__ == "__main__":
    main()
