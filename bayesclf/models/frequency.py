"""
Observation storage and co-occurrence counting.

ValueCountedMatrix holds the integer observation matrix together with the
arity (number of distinct values) of each feature. FrequencyTable accumulates
the class population counts and the (class, feature, value) co-occurrence
counts that the classifiers turn into probabilities.

The conditional counts live in one flat (k, width) array where width is the
sum of all arities. Feature j owns the column slice

    offsets[j] : offsets[j] + value_counts[j]

so a (class, feature, value) triple maps to counts[class, offsets[feature] + value].
"""

import numpy as np
import pandas as pd
from scipy.sparse import issparse

from bayesclf.errors import ConfigurationError


def as_2d_array(X):
    if issparse(X):
        X = X.toarray()
    elif isinstance(X, pd.DataFrame):
        X = X.to_numpy()
    X = np.asarray(X)
    if X.ndim != 2:
        raise ConfigurationError(f"observations must be 2-dimensional, got shape {X.shape}")
    return X


def as_int_array(X, what="observations"):
    X = np.asarray(X)
    if X.dtype.kind in "iub":
        return X.astype(np.int64)
    if X.dtype.kind != "f" or not np.all(np.isfinite(X)) or np.any(X != np.round(X)):
        raise ConfigurationError(f"{what} must be integers")
    return X.astype(np.int64)


class ValueCountedMatrix:
    """
    An m x n matrix of non-negative integers with per-column arity bounds.

    Parameters
    ----------
    X : array-like or sparse matrix of shape (m, n)
        Observations; every value in column j must lie in [0, value_counts[j]).
    value_counts : sequence of int of length n, optional
        Arity of each feature. Defaults to 2 (binary) for every feature.
    feature_names : sequence of str of length n, optional
        Display names. Defaults to x0 .. x{n-1}.
    """

    def __init__(self, X, value_counts=None, feature_names=None):
        X = as_int_array(as_2d_array(X))
        m, n = X.shape
        if n == 0:
            raise ConfigurationError("observations need at least one feature")

        if value_counts is None:
            value_counts = np.full(n, 2, dtype=np.int64)
        value_counts = as_int_array(np.atleast_1d(value_counts), "value_counts")
        if value_counts.ndim != 1 or len(value_counts) != n:
            raise ConfigurationError(
                f"value_counts has length {value_counts.size} but there are {n} features"
            )
        if np.any(value_counts < 1):
            raise ConfigurationError("every feature needs an arity of at least 1")

        if feature_names is None:
            feature_names = [f"x{j}" for j in range(n)]
        feature_names = list(feature_names)
        if len(feature_names) != n:
            raise ConfigurationError(
                f"got {len(feature_names)} feature names for {n} features"
            )

        bad = (X < 0) | (X >= value_counts)
        if bad.any():
            i, j = np.argwhere(bad)[0]
            raise IndexError(
                f"value {X[i, j]} at row {i}, feature {j} is outside [0, {value_counts[j]})"
            )

        self.X             = X
        self.value_counts  = value_counts
        self.feature_names = feature_names
        self.offsets       = np.concatenate([[0], np.cumsum(value_counts)[:-1]]).astype(np.int64)
        self.width         = int(value_counts.sum())

    @property
    def n_samples(self):
        return self.X.shape[0]

    @property
    def n_features(self):
        return self.X.shape[1]

    def row(self, i):
        return self.X[i]

    def check_observation(self, observation):
        """Validate one query row and return it as an int array."""
        x = np.asarray(observation).ravel()
        if x.size != self.n_features:
            raise ConfigurationError(
                f"observation has {x.size} values, expected {self.n_features}"
            )
        x = as_int_array(x, "observation values")
        bad = np.flatnonzero((x < 0) | (x >= self.value_counts))
        if bad.size:
            j = bad[0]
            raise IndexError(
                f"value {x[j]} for feature {j} ({self.feature_names[j]}) "
                f"is outside [0, {self.value_counts[j]})"
            )
        return x

    def __repr__(self):
        return (f"ValueCountedMatrix(m={self.n_samples}, n={self.n_features}, "
                f"value_counts={self.value_counts.tolist()})")


def as_value_counted(X, value_counts=None, feature_names=None):
    """X as a ValueCountedMatrix; arities and names may only be given for raw input."""
    if not isinstance(X, ValueCountedMatrix):
        return ValueCountedMatrix(X, value_counts, feature_names)
    if value_counts is not None or feature_names is not None:
        raise ConfigurationError(
            "value_counts and feature_names come from the ValueCountedMatrix; "
            "pass them to its constructor instead"
        )
    return X


def check_labels(labels, m, n_classes):
    """Validate a label vector against the row count and class count."""
    y = as_int_array(np.asarray(labels).ravel(), "labels")
    if len(y) != m:
        raise ConfigurationError(f"got {len(y)} labels for {m} observation rows")
    bad = np.flatnonzero((y < 0) | (y >= n_classes))
    if bad.size:
        raise IndexError(
            f"label {y[bad[0]]} at row {bad[0]} is outside [0, {n_classes})"
        )
    return y


def row_mask(predicate, m):
    """Boolean mask of the rows for which predicate(i) holds (all rows if None)."""
    if predicate is None:
        return np.ones(m, dtype=bool)
    return np.fromiter((bool(predicate(i)) for i in range(m)), dtype=bool, count=m)


class FrequencyTable:
    """
    Class population and (class, feature, value) co-occurrence counts.

    Parameters
    ----------
    matrix : ValueCountedMatrix
        Training observations; fixes the table shape.
    labels : array-like of shape (m,)
        Class index of each row, in [0, n_classes).
    n_classes : int
        Number of classes k.
    """

    def __init__(self, matrix, labels, n_classes):
        self.matrix    = matrix
        self.n_classes = int(n_classes)
        self.labels    = check_labels(labels, matrix.n_samples, self.n_classes)

        self.population = np.zeros(self.n_classes, dtype=np.int64)
        self.counts     = np.zeros((self.n_classes, matrix.width), dtype=np.int64)

    def reset(self):
        """Zero every count in place."""
        self.population.fill(0)
        self.counts.fill(0)

    def frequencies(self, predicate=None):
        """
        Recount from a zeroed table over the rows where predicate(i) holds.

        Returns the number of rows counted.
        """
        self.reset()
        mask = row_mask(predicate, self.matrix.n_samples)
        X, y = self.matrix.X[mask], self.labels[mask]

        self.population += np.bincount(y, minlength=self.n_classes)
        for j, offset in enumerate(self.matrix.offsets):
            np.add.at(self.counts, (y, offset + X[:, j]), 1)
        return int(mask.sum())

    def _check_index(self, i, j, v=None):
        if not 0 <= i < self.n_classes:
            raise IndexError(f"class {i} is outside [0, {self.n_classes})")
        if not 0 <= j < self.matrix.n_features:
            raise IndexError(f"feature {j} is outside [0, {self.matrix.n_features})")
        if v is not None and not 0 <= v < self.matrix.value_counts[j]:
            raise IndexError(
                f"value {v} for feature {j} is outside [0, {self.matrix.value_counts[j]})"
            )

    def count(self, i, j, v):
        """Number of counted rows with class i and feature j equal to v."""
        self._check_index(i, j, v)
        return int(self.counts[i, self.matrix.offsets[j] + v])

    def feature_counts(self, j):
        """(k, value_counts[j]) count block of feature j."""
        self._check_index(0, j)
        start = self.matrix.offsets[j]
        return self.counts[:, start:start + self.matrix.value_counts[j]]
