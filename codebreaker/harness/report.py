"""
Aggregate a batch of game results into a move-count report.

summarize() returns a plain dict (JSON-ready, goes into the run manifest);
pretty_summary() renders it as the short text block the CLI prints.
"""

from __future__ import annotations
from typing import Dict, List

import numpy as np


def summarize(results: List[Dict]) -> Dict:
    """
    Keys:
      total_cases, success_count, error_count, success_rate (percent),
      average_moves, median_moves, max_moves (over successes),
      move_distribution {moves: count}, errors {label: count},
      four_or_less, five_or_less, eight_plus, total_time_ms
    """
    total = len(results)
    moves = np.array([r["guesses"] for r in results if r["success"]], dtype=int)
    errors: Dict[str, int] = {}
    for r in results:
        if not r["success"]:
            label = r.get("error") or "unknown"
            errors[label] = errors.get(label, 0) + 1

    if moves.size:
        counts = np.bincount(moves)
        distribution = {int(k): int(c) for k, c in enumerate(counts) if c}
        average = float(moves.mean())
        median = float(np.median(moves))
        worst = int(moves.max())
    else:
        distribution, average, median, worst = {}, 0.0, 0.0, 0

    return {
        "total_cases": total,
        "success_count": int(moves.size),
        "error_count": total - int(moves.size),
        "success_rate": (100.0 * moves.size / total) if total else 0.0,
        "average_moves": average,
        "median_moves": median,
        "max_moves": worst,
        "move_distribution": distribution,
        "errors": errors,
        "four_or_less": int((moves <= 4).sum()),
        "five_or_less": int((moves <= 5).sum()),
        "eight_plus": int((moves >= 8).sum()),
        "total_time_ms": float(sum(float(r.get("time_ms", 0.0)) for r in results)),
    }


def pretty_summary(report: Dict) -> str:
    total = max(1, report["total_cases"])
    lines = [
        f"cases={report['total_cases']} success={report['success_rate']:.2f}% "
        f"avg={report['average_moves']:.2f} median={report['median_moves']:.1f} "
        f"worst={report['max_moves']}",
    ]
    for moves, count in sorted(report["move_distribution"].items()):
        lines.append(f"  {moves:>2} moves: {count:>6} ({100.0 * count / total:5.2f}%)")
    lines.append(f"  <=4 moves: {report['four_or_less']} ({100.0 * report['four_or_less'] / total:.2f}%)")
    lines.append(f"  <=5 moves: {report['five_or_less']} ({100.0 * report['five_or_less'] / total:.2f}%)")
    if report["errors"]:
        lines.append("  errors: " + ", ".join(f"{k}={v}" for k, v in sorted(report["errors"].items())))
    return "\n".join(lines)
