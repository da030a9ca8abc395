"""
Base class for the Naive Bayes classifiers.

This module defines the interface every classifier in the family implements
(train / classify / reset) and the helpers built on top of it.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, NamedTuple, Optional, Sequence

import numpy as np
from scipy.special import logsumexp

from bayesclf.errors import ConfigurationError, NotTrainedError
from bayesclf.models.estimation import check_smoothing
from bayesclf.models.frequency import as_int_array, check_labels


class Prediction(NamedTuple):
    class_index: int
    class_name: str
    score: float


def resolve_class_count(labels: np.ndarray,
                        class_names: Optional[Sequence[str]] = None,
                        n_classes: Optional[int] = None) -> int:
    """
    Number of classes k, from class_names, n_classes, or the largest label.

    class_names and n_classes must agree when both are given.
    """
    if class_names is not None and n_classes is not None and len(class_names) != n_classes:
        raise ConfigurationError(
            f"got {len(class_names)} class names but n_classes={n_classes}"
        )
    if class_names is not None:
        return len(class_names)
    if n_classes is not None:
        return int(n_classes)
    return int(labels.max()) + 1 if labels.size else 1


class BaseBayesClassifier(ABC):
    """
    Abstract base class for the Naive Bayes classifiers.

    Concrete classifiers own their count tables and implement train(),
    reset() and log_scores(); classification, batch prediction and accuracy are
    shared here.

    Parameters
    ----------
    n_samples : int
        Number of observation rows m.
    labels : array-like of shape (m,)
        Class index of each row.
    class_names : sequence of str, optional
        Display name of each class. Defaults to "0" .. "k-1".
    n_classes : int, optional
        Number of classes k when class_names is not given. Defaults to
        max(labels) + 1.
    smoothing : float, default=3.0
        m-estimate pseudo-count.
        - smoothing = 0: Maximum Likelihood Estimation (MLE)
        - smoothing > 0: every conditional probability strictly positive

    Raises
    ------
    ConfigurationError
        If k >= m: with at least as many classes as rows the estimate is
        meaningless.
    """

    def __init__(self, n_samples: int, labels, class_names: Optional[Sequence[str]] = None,
                 n_classes: Optional[int] = None, smoothing: float = 3.0):
        y = as_int_array(np.asarray(labels).ravel(), "labels")
        k = resolve_class_count(y, class_names, n_classes)
        if k >= n_samples:
            raise ConfigurationError(
                f"{k} classes for {n_samples} rows: need fewer classes than rows"
            )

        self.n_samples   = n_samples
        self.n_classes   = k
        self.labels      = check_labels(y, n_samples, k)
        self.class_names = [str(c) for c in class_names] if class_names is not None \
            else [str(i) for i in range(k)]
        self.smoothing   = check_smoothing(smoothing)
        self.is_fitted   = False

        # Set during training
        self.class_prior_: Optional[np.ndarray] = None
        self.n_train_: int = 0

    @abstractmethod
    def train(self, predicate=None) -> None:
        """
        Estimate priors and conditionals from the rows where predicate(i) holds.

        Every call starts from zeroed counts and overwrites the previous
        estimates.
        """

    @abstractmethod
    def reset(self) -> None:
        """Zero the count tables in place."""

    @abstractmethod
    def log_scores(self, observation) -> np.ndarray:
        """
        Log of the unnormalised posterior,
        log P(class) + sum_j log P(x_j | class), per class.

        A zero probability maps to -inf.

        Returns
        -------
        log_scores : np.ndarray of shape (n_classes,)
        """

    @abstractmethod
    def row(self, i: int) -> np.ndarray:
        """Training observation i, as accepted by classify()."""

    def fit(self, predicate=None) -> 'BaseBayesClassifier':
        self.train(predicate)
        return self

    def scores(self, observation) -> np.ndarray:
        """Unnormalised posterior P(class) * prod_j P(x_j | class) per class."""
        return np.exp(self.log_scores(observation))

    def best_class(self, observation):
        """(class_index, log_score) of the highest log score; ties go to the lowest index."""
        s = self.log_scores(observation)
        i = int(np.argmax(s))
        return i, float(s[i])

    def classify(self, observation) -> Prediction:
        """
        Most probable class for one observation.

        The argmax is taken in log space, so it stays correct when every
        class's product underflows. The returned score is exp of the winning
        log score and is not normalised over classes; use predict_proba for
        calibrated probabilities.
        """
        i, log_score = self.best_class(observation)
        return Prediction(i, self.class_names[i], float(np.exp(log_score)))

    def _check_fitted(self):
        if not self.is_fitted:
            raise NotTrainedError(f"{type(self).__name__} has not been trained")

    def joint_log_scores(self, X) -> np.ndarray:
        """Stacked log_scores() for every row of X, shape (n_rows, n_classes)."""
        rows = [self.log_scores(x) for x in np.asarray(X)]
        return np.array(rows).reshape(len(rows), self.n_classes)

    def posterior_scores(self, X) -> np.ndarray:
        """Stacked scores() for every row of X, shape (n_rows, n_classes)."""
        return np.exp(self.joint_log_scores(X))

    def predict(self, X) -> np.ndarray:
        return self.joint_log_scores(X).argmax(axis=1)

    def predict_log_proba(self, X) -> np.ndarray:
        """
        Normalised log posteriors, shape (n_rows, n_classes).

        Normalised with log-sum-exp over the log scores, so rows whose
        products underflow still get finite log probabilities.
        """
        log_scores = self.joint_log_scores(X)
        return log_scores - logsumexp(log_scores, axis=1, keepdims=True)

    def predict_proba(self, X) -> np.ndarray:
        return np.exp(self.predict_log_proba(X))

    def score(self, X, y) -> float:
        """Calculate accuracy."""
        y = np.asarray(y).ravel()
        return float(np.mean(self.predict(X) == y))

    def get_params(self) -> Dict[str, Any]:
        """
        Get model parameters.

        Returns
        -------
        params : dict
            Hyperparameters and fitted state
        """
        return {
            'smoothing': self.smoothing,
            'n_classes': self.n_classes,
            'class_names': self.class_names,
            'is_fitted': self.is_fitted,
            'class_prior': self.class_prior_,
        }
