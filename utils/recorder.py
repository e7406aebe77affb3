from __future__ import annotations

import csv
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence


PROJECT_ROOT = Path(__file__).resolve().parents[1]
RESULTS_ROOT = PROJECT_ROOT / "data" / "results"

PROBLEMS = {"golinski", "iris"}
CONVERGENCE_FIELDS = ["iter", "gbest_f", "f_mean", "feasible"]


def _ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def create_run_dir(problem: str, root: Path | None = None) -> Path:
    """
    Create and return a unique directory for a single run:
        {root}/{problem}/run_YYYYmmdd_HHMMSS_XXXX/
    """
    if problem not in PROBLEMS:
        raise ValueError(f"Unknown problem: {problem}")

    base = (root or RESULTS_ROOT) / problem
    _ensure_dir(base)

    now = datetime.now()
    # microsecond suffix avoids collisions between runs started in the same second
    run_dir = base / f"run_{now.strftime('%Y%m%d_%H%M%S')}_{now.strftime('%f')[-4:]}"
    _ensure_dir(run_dir)
    return run_dir


class ConvergenceLog:
    """Step callback that keeps one row per optimizer step."""

    def __init__(self):
        self.rows: List[Dict[str, Any]] = []

    def __call__(self, step: int, state: Mapping[str, Any]) -> None:
        self.rows.append({
            "iter": step,
            "gbest_f": state["gbest_f"],
            "f_mean": state["f_mean"],
            "feasible": state["feasible"],
        })


def save_convergence_csv(run_dir: Path, rows: Sequence[Mapping[str, Any]]) -> Path:
    """
    Save convergence history to CSV:
        iter, gbest_f, f_mean, feasible
    """
    path = Path(run_dir) / "convergence.csv"
    with path.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=CONVERGENCE_FIELDS)
        writer.writeheader()
        for row in rows:
            writer.writerow({k: row[k] for k in CONVERGENCE_FIELDS})
    return path


def save_run_metadata(run_dir: Path, meta: Mapping[str, Any]) -> Path:
    path = Path(run_dir) / "metadata.json"
    with path.open("w") as f:
        json.dump(dict(meta), f, indent=2, default=str)
    return path
