"""
Run several solvers over the same secrets in one shot.

Writes per-solver outputs to: <outdir>/<solver_id>/run_<timestamp>.csv + _manifest.json
and prints one report per solver.

Usage:
    python -m apps.cli.compare --solvers ALL --preset quick
"""

from __future__ import annotations
import argparse
from pathlib import Path

from codebreaker.harness import pretty_summary, secret_range, summarize
from codebreaker.solvers import create_solver, get_solver_ids

from apps.cli.analyze import (
    PRESETS, add_common_args, config_from_args, play_all, progress_mode, setup_logging,
    write_outputs,
)


def main():
    registered = get_solver_ids()
    ap = argparse.ArgumentParser(description="codebreaker: compare solvers on shared secrets")
    ap.add_argument("--solvers", nargs="+", required=True,
                    help=f"list of solver ids or 'ALL'. Registered: {', '.join(registered)}")
    ap.add_argument("--exclude", nargs="*", default=[],
                    help="solver ids to skip (only if --solvers ALL)")
    add_common_args(ap)
    ap.set_defaults(outdir="reports/batch")
    args = ap.parse_args()
    setup_logging(args.log_level)

    # 1) expand solvers
    if len(args.solvers) == 1 and args.solvers[0].lower() == "all":
        todo = [s for s in registered if s not in set(args.exclude)]
    else:
        todo = args.solvers
        missing = [s for s in todo if s not in registered]
        if missing:
            raise SystemExit(f"Unknown solver ids: {missing}. Registered: {registered}")

    # 2) shared cases and config
    count = args.count if args.count is not None else PRESETS[args.preset]
    cases = secret_range(args.start, min(count, 10_000 - args.start))
    config = config_from_args(args)
    outdir = Path(args.outdir)

    # 3) run each solver sequentially
    for sid in todo:
        if args.progress != "off":
            print(f"\n=== Running {sid} on {len(cases)} secrets ({config.rule}) ===")
        solver = create_solver(sid, config)
        results = play_all(solver, cases, base_seed=args.seed,
                           mode=progress_mode(args.progress), label=sid)
        report = summarize(results)
        print(pretty_summary(report))
        csv_path, manifest_path = write_outputs(
            results, report, outdir=outdir / sid,
            config={**vars(args), "solver": sid}, solver_id=solver.id,
        )
        print(f"Wrote: {csv_path}")
        print(f"Wrote: {manifest_path}")


if __name__ == "__main__":
    main()
