"""
Run artifacts written by the analysis apps.

A run named <id> (a UTC timestamp from timestamp_id) produces two files side by side:

  <outdir>/run_<id>.csv             one row per secret: outcome, move count,
                                    then guess_i / patt_i for every move played
  <outdir>/run_<id>_manifest.json   CLI config, summarize() report, commit

`compare` nests one such pair per solver under <outdir>/<solver_id>/.

Codes are written with a leading apostrophe ("'0123") so spreadsheets keep
them as text instead of turning 0123 into the number 123.
"""

from __future__ import annotations

import csv
import datetime as dt
import json
import subprocess
from pathlib import Path
from typing import Dict, List, Optional

BASE_COLUMNS = ["solver", "secret", "success", "guesses", "error", "time_ms"]
RUN_ID_FORMAT = "%Y%m%dT%H%M%SZ"


def _as_text(code: str) -> str:
    return f"'{code}" if code else code


def write_csv(results: List[Dict], path: str, max_moves: int) -> str:
    """Write harness results to `path`, padding short games with empty move columns."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    move_columns = [f"{kind}_{i}" for i in range(1, max_moves + 1) for kind in ("guess", "patt")]

    with p.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=BASE_COLUMNS + move_columns, restval="")
        w.writeheader()
        for r in results:
            row = {
                "solver": r.get("solver_id", "?"),
                "secret": _as_text(r["secret"]),
                "success": r["success"],
                "guesses": r["guesses"],
                "error": r.get("error") or "",
                "time_ms": round(float(r["time_ms"]), 3),
            }
            for i, (guess, patt) in enumerate(r.get("history", [])[:max_moves], 1):
                row[f"guess_{i}"] = _as_text(guess)
                row[f"patt_{i}"] = patt
            w.writerow(row)

    return str(p)


def write_manifest(manifest: Dict, path: str) -> str:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(manifest, indent=2), encoding="utf-8")
    return str(p)


def timestamp_id(when: Optional[dt.datetime] = None) -> str:
    """Run id for file names, e.g. 20250820T024121Z. Naive datetimes are taken as UTC."""
    when = when or dt.datetime.now(dt.timezone.utc)
    if when.tzinfo is not None:
        when = when.astimezone(dt.timezone.utc)
    return when.strftime(RUN_ID_FORMAT)


def git_commit_or_unknown(cwd: Optional[str] = None) -> str:
    """Short HEAD hash of the checkout at `cwd`, or 'unknown' outside a git work tree."""
    try:
        proc = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],
            cwd=cwd, capture_output=True, text=True, check=False,
        )
    except OSError:
        return "unknown"
    commit = proc.stdout.strip()
    return commit if proc.returncode == 0 and commit else "unknown"
