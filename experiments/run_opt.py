# experiments/run_opt.py
import argparse
import logging
import time
from pathlib import Path
from typing import Any, Dict, Optional

from swarm.pso import Optimizer
from utils.recorder import ConvergenceLog, create_run_dir, save_convergence_csv, save_run_metadata
from experiments.plotting import plot_convergence, plot_feasible


def add_common_args(parser: argparse.ArgumentParser, pop: int, local: int, wait: float) -> None:
    parser.add_argument("--pop", type=int, default=pop, help="Population size")
    parser.add_argument("--local", type=int, default=local, help="Particles per local group")
    parser.add_argument("--jobs", type=int, default=None, help="Worker threads (default: CPU count)")
    parser.add_argument("--wait", type=float, default=wait, help="Wait magnitude for the stall rule")
    parser.add_argument("--rate", type=float, default=1e-6, help="Minimum progress per step")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--out", type=str, default=None, help="Results root (default: data/results)")
    parser.add_argument("--plot", action="store_true", help="Write convergence figures next to the CSV")
    parser.add_argument("--verbose", action="store_true", help="Log every step")


def common_options(args: argparse.Namespace) -> Dict[str, Any]:
    return dict(
        population_size=args.pop,
        local_size=args.local,
        parallelism=args.jobs,
        wait_magnitude=args.wait,
        seed=args.seed,
        verbose=args.verbose,
    )


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="[%(asctime)s] %(levelname)s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )


def optimize(
    opt: Optimizer,
    problem: str,
    progress_rate: float = 1e-6,
    out: Optional[str] = None,
    plot: bool = False,
    extra: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Run opt to convergence and record the run. Returns a summary dict."""
    log = ConvergenceLog()
    t0 = time.time()
    steps = opt.step_until(progress_rate, callback=log)
    elapsed = time.time() - t0

    run_dir = create_run_dir(problem, Path(out) if out else None)
    csv_path = save_convergence_csv(run_dir, log.rows)

    st = opt.state()
    summary = {
        "problem": problem,
        "steps": steps,
        "evals_total": st["evals_total"],
        "gbest_f": st["gbest_f"],
        "x_best": opt.best().tolist(),
        "time_sec": round(elapsed, 3),
        "population_size": opt.options.population_size,
        "local_size": opt.options.local_size,
        "parallelism": opt.options.parallelism,
        "wait_magnitude": opt.options.wait_magnitude,
        "progress_rate": progress_rate,
        "seed": opt.options.seed,
    }
    summary.update(extra or {})
    save_run_metadata(run_dir, summary)

    if plot:
        plot_convergence(str(csv_path), title=f"Convergence ({problem})")
        plot_feasible(str(csv_path))

    summary["run_dir"] = str(run_dir)
    return summary
