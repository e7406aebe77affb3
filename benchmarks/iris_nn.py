"""
Tiny feed-forward classifier for the Iris dataset, trained by swarm search.

Network: 4 inputs + bias -> 4 tanh + bias -> 4 tanh + bias -> 3 tanh -> softmax.
Weights are a flat vector of 5*4 + 5*4 + 5*3 = 55 values, one row of 5
per node.
"""
from __future__ import annotations
from typing import Callable

import numpy as np
from scipy.special import softmax

N_INPUTS = 4
N_HIDDEN = 4
N_CLASSES = 3
N_WEIGHTS = (N_INPUTS + 1) * N_HIDDEN + (N_HIDDEN + 1) * N_HIDDEN + (N_HIDDEN + 1) * N_CLASSES


def _with_bias(a: np.ndarray) -> np.ndarray:
    return np.hstack([a, np.ones((a.shape[0], 1))])


def feed_forward(weights: np.ndarray, X: np.ndarray) -> np.ndarray:
    """Class probabilities, shape (n_samples, 3)."""
    w = np.asarray(weights, dtype=float)
    if w.size != N_WEIGHTS:
        raise ValueError(f"expected {N_WEIGHTS} weights, got {w.size}")
    X = np.atleast_2d(np.asarray(X, dtype=float))

    h0 = (N_INPUTS + 1) * N_HIDDEN
    h1 = h0 + (N_HIDDEN + 1) * N_HIDDEN
    W0 = w[:h0].reshape(N_HIDDEN, N_INPUTS + 1)
    W1 = w[h0:h1].reshape(N_HIDDEN, N_HIDDEN + 1)
    W2 = w[h1:].reshape(N_CLASSES, N_HIDDEN + 1)

    h = np.tanh(_with_bias(X) @ W0.T)
    r = np.tanh(_with_bias(h) @ W1.T)
    o = np.tanh(_with_bias(r) @ W2.T)
    return softmax(o, axis=1)


def training_loss(weights: np.ndarray, X: np.ndarray, y: np.ndarray) -> float:
    """Negative total probability assigned to the true class."""
    p = feed_forward(weights, X)
    return float(-np.sum(p[np.arange(len(y)), y]))


def accuracy(weights: np.ndarray, X: np.ndarray, y: np.ndarray) -> float:
    predicted = np.argmax(feed_forward(weights, X), axis=1)
    return float(np.mean(predicted == y))


def make_fitness(X: np.ndarray, y: np.ndarray) -> Callable[[np.ndarray], float]:
    X = np.asarray(X, dtype=float)
    y = np.asarray(y, dtype=int)

    def fitness(weights: np.ndarray) -> float:
        return training_loss(weights, X, y)

    return fitness
