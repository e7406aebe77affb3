import os

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import pandas as pd


def _ensure_dir(path: str):
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)


def read_log(csv_path: str) -> pd.DataFrame:
    """Read a convergence.csv written by utils.recorder and coerce columns."""
    df = pd.read_csv(csv_path)
    for c in ["gbest_f", "f_mean"]:
        df[c] = pd.to_numeric(df[c], errors="coerce")
    return df


def plot_convergence(csv_path: str, outpath: str = None, title: str = "Convergence"):
    """
    Best-so-far fitness against step. Semilogy unless the curve reaches
    non-positive values. Steps before the first feasible point are skipped.
    """
    df = read_log(csv_path)
    df = df[df["gbest_f"].abs() != float("inf")]

    fig = plt.figure()
    ax = plt.gca()
    vals = df["gbest_f"]
    if (vals <= 0).any():
        ax.plot(df["iter"], vals)
    else:
        ax.semilogy(df["iter"], vals)
    ax.set_xlabel("Step")
    ax.set_ylabel("Best fitness")
    ax.grid(True, which="both", linestyle=":")
    ax.set_title(title)

    if outpath is None:
        outpath = os.path.join(os.path.dirname(csv_path), "convergence.png")
    _ensure_dir(outpath)
    fig.savefig(outpath, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return outpath


def plot_feasible(csv_path: str, outpath: str = None):
    """Number of particles scored (feasible) at each step."""
    df = read_log(csv_path)

    fig = plt.figure()
    ax = plt.gca()
    ax.plot(df["iter"], df["feasible"])
    ax.set_xlabel("Step")
    ax.set_ylabel("Feasible particles")
    ax.set_ylim(bottom=0)
    ax.grid(True, linestyle=":")
    ax.set_title("Feasible particles per step")

    if outpath is None:
        outpath = os.path.join(os.path.dirname(csv_path), "feasible.png")
    _ensure_dir(outpath)
    fig.savefig(outpath, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return outpath
