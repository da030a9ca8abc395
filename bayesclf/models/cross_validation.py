"""
Contiguous k-fold cross-validation.

Rows are split, in order, into n_folds contiguous held-out ranges
[start, end). For each fold the classifier is trained on every other row
and then asked to classify each held-out row.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from bayesclf.errors import ConfigurationError
from bayesclf.models.base import BaseBayesClassifier


@dataclass
class CrossValidationResult:
    accuracy: float
    correct: int
    total: int
    fold_accuracies: List[float] = field(default_factory=list)
    predictions: Optional[np.ndarray] = None     # out-of-fold class index per row


def fold_bounds(n_samples: int, n_folds: int) -> List[Tuple[int, int]]:
    """Contiguous [start, end) ranges covering 0..n_samples, sizes within one of each other."""
    if n_folds < 2 or n_folds > n_samples:
        raise ConfigurationError(
            f"n_folds must be between 2 and the number of rows ({n_samples}), got {n_folds}"
        )
    edges = [f * n_samples // n_folds for f in range(n_folds + 1)]
    return list(zip(edges[:-1], edges[1:]))


def excluding(start: int, end: int):
    """Training-row predicate that holds outside the held-out range [start, end)."""
    return lambda i: not start <= i < end


def cross_validate(classifier, n_folds: int = 10) -> CrossValidationResult:
    """
    Accuracy of `classifier` over contiguous folds.

    Folds run one after another on the same instance; train() recomputes
    every table from zero, so no estimate carries over between folds. The
    classifier is left trained on the complement of the last fold.

    Only single-label classifiers are accepted; cross-validate a
    MultiLabelEnsemble one label column at a time.
    """
    if not isinstance(classifier, BaseBayesClassifier):
        raise ConfigurationError(
            f"cross_validate needs a single-label classifier, got {type(classifier).__name__}"
        )
    n = classifier.n_samples
    y = classifier.labels
    predictions = np.empty(n, dtype=np.int64)
    fold_accuracies = []

    for start, end in fold_bounds(n, n_folds):
        classifier.train(excluding(start, end))
        for i in range(start, end):
            predictions[i] = classifier.classify(classifier.row(i)).class_index
        fold_accuracies.append(float(np.mean(predictions[start:end] == y[start:end])))

    correct = int((predictions == y).sum())
    return CrossValidationResult(
        accuracy=correct / n,
        correct=correct,
        total=n,
        fold_accuracies=fold_accuracies,
        predictions=predictions,
    )
