from __future__ import annotations
from dataclasses import dataclass

import numpy as np
from sklearn.datasets import load_iris


@dataclass
class IrisSplit:
    X_train: np.ndarray
    y_train: np.ndarray
    X_test: np.ndarray
    y_test: np.ndarray


def load_split(test_every: int = 10) -> IrisSplit:
    """
    Iris measurements and labels (0 setosa, 1 versicolor, 2 virginica).
    Every test_every-th row, starting with the first, is held out for testing.
    """
    if test_every < 2:
        raise ValueError(f"test_every must be >= 2, got {test_every}")
    data = load_iris()
    X = np.asarray(data.data, dtype=float)
    y = np.asarray(data.target, dtype=int)

    test = np.arange(len(y)) % test_every == 0
    return IrisSplit(X_train=X[~test], y_train=y[~test], X_test=X[test], y_test=y[test])
