import numpy as np
import pandas as pd

from bayesclf.errors import ConfigurationError, DegenerateEstimateError
from bayesclf.models.base import BaseBayesClassifier
from bayesclf.models.estimation import class_priors, m_estimate
from bayesclf.models.frequency import as_2d_array, row_mask

THRESHOLD = 0.5


def binarize(X, threshold=THRESHOLD):
    """Map every value >= threshold to 1 and everything else to 0."""
    X = np.asarray(X, dtype=float)
    if np.isnan(X).any():
        raise ConfigurationError("cannot binarize NaN values")
    return (X >= threshold).astype(np.int8)


class BernoulliNaiveBayes(BaseBayesClassifier):
    """
    Naive Bayes where every feature is binary.

    Inputs, both training rows and queries, are binarised with x >= 0.5, so
    continuous features are accepted. Instead of a value-indexed count table
    the model keeps two (k, n) arrays: rows where a feature is present and
    rows where it is absent. With the m-estimate at arity 2

        P(x_j=1 | c) = (present(c, j) + smoothing/2) / (n_c + smoothing)
        P(x_j=0 | c) = (absent(c, j)  + smoothing/2) / (n_c + smoothing)

    which gives exactly the generic classifier's estimates on the binarised
    data. Unlike Multinomial NB, absence of a feature contributes its own
    factor to the score.
    """

    def __init__(self, X, y, class_names=None, feature_names=None, n_classes=None,
                 smoothing=3.0, threshold=THRESHOLD):
        self.threshold = threshold
        self.X = binarize(as_2d_array(X), threshold)
        super().__init__(self.X.shape[0], y, class_names, n_classes, smoothing)

        n_features = self.X.shape[1]
        if n_features == 0:
            raise ConfigurationError("observations need at least one feature")
        if feature_names is None:
            feature_names = [f"x{j}" for j in range(n_features)]
        self.feature_names = list(feature_names)
        if len(self.feature_names) != n_features:
            raise ConfigurationError(
                f"got {len(self.feature_names)} feature names for {n_features} features"
            )

        self.population       = np.zeros(self.n_classes, dtype=np.int64)
        self.feature_present_ = np.zeros((self.n_classes, n_features), dtype=np.int64)
        self.feature_absent_  = np.zeros((self.n_classes, n_features), dtype=np.int64)

        self.feature_prob_     = None      # P(x_j=1 | c)
        self.feature_prob_neg_ = None      # P(x_j=0 | c)

        self.class_log_prior_      = None
        self.feature_log_prob_     = None
        self.feature_log_prob_neg_ = None

    @property
    def n_features(self):
        return self.X.shape[1]

    def row(self, i):
        return self.X[i]

    def reset(self):
        self.population.fill(0)
        self.feature_present_.fill(0)
        self.feature_absent_.fill(0)

    def frequencies(self, predicate=None):
        """Recount present/absent rows per class; returns the number of rows counted."""
        self.reset()
        mask = row_mask(predicate, self.n_samples)
        X, y = self.X[mask], self.labels[mask]

        for k in range(self.n_classes):
            X_c = X[y == k]
            self.population[k]       = len(X_c)
            self.feature_present_[k] = X_c.sum(axis=0)
            self.feature_absent_[k]  = len(X_c) - self.feature_present_[k]
        return int(mask.sum())

    def train(self, predicate=None):
        n_train = self.frequencies(predicate)
        if n_train == 0:
            raise DegenerateEstimateError("no training rows selected")

        prior = class_priors(self.population)
        p     = m_estimate(self.feature_present_, self.population, self.smoothing, 2)
        p_neg = m_estimate(self.feature_absent_, self.population, self.smoothing, 2)

        self.class_prior_      = prior
        self.feature_prob_     = p
        self.feature_prob_neg_ = p_neg
        with np.errstate(divide="ignore"):
            self.class_log_prior_      = np.log(prior)
            self.feature_log_prob_     = np.log(p)
            self.feature_log_prob_neg_ = np.log(p_neg)
        self.n_train_          = n_train
        self.is_fitted         = True

    def log_scores(self, observation):
        self._check_fitted()
        x = np.asarray(observation).ravel()
        if x.size != self.n_features:
            raise ConfigurationError(
                f"observation has {x.size} values, expected {self.n_features}"
            )
        x = binarize(x, self.threshold).astype(bool)
        log_likelihood = np.where(x, self.feature_log_prob_, self.feature_log_prob_neg_)
        return self.class_log_prior_ + log_likelihood.sum(axis=1)

    def summary(self):
        """P(x_j=1 | c) per feature as a DataFrame, with the priors in the first row."""
        self._check_fitted()
        return pd.DataFrame(
            np.vstack([self.class_prior_, self.feature_prob_.T]),
            index=["prior"] + self.feature_names,
            columns=self.class_names,
        )

    def get_params(self):
        params = super().get_params()
        params.update({
            'threshold': self.threshold,
            'feature_names': self.feature_names,
        })
        return params
