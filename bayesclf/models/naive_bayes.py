import numpy as np
import pandas as pd

from bayesclf.errors import DegenerateEstimateError
from bayesclf.models.base import BaseBayesClassifier
from bayesclf.models.estimation import class_priors, m_estimate
from bayesclf.models.frequency import FrequencyTable, as_value_counted


class NaiveBayesClassifier(BaseBayesClassifier):
    """
    Naive Bayes over categorical features with m-estimate smoothing.

    Feature j takes values in [0, value_counts[j]). Training estimates

        P(class=i)            = n_i / N
        P(x_j = v | class=i)  = (count(i, j, v) + smoothing / value_counts[j])
                                / (n_i + smoothing)

    and classification picks the class maximising

        P(class=i) * prod_j P(x_j | class=i)

    The product is the unnormalised posterior; the evidence term is the
    same for every class and cancels in the argmax. It is evaluated as a
    sum of logs, so wide inputs do not underflow the comparison.

    smoothing=0 is pure MLE: one unseen feature value zeroes the score of a
    class. Any smoothing > 0 keeps every conditional strictly positive.
    """

    def __init__(self, X, y, value_counts=None, class_names=None, feature_names=None,
                 n_classes=None, smoothing=3.0):
        X = as_value_counted(X, value_counts, feature_names)
        super().__init__(X.n_samples, y, class_names, n_classes, smoothing)

        self.matrix = X
        self.table  = FrequencyTable(X, self.labels, self.n_classes)

        # flat (k, width) layout shared with the frequency table
        self.cond_prob_     = None
        self.log_prior_     = None
        self.log_cond_prob_ = None
        self._arity         = np.repeat(X.value_counts, X.value_counts)

    @property
    def feature_names(self):
        return self.matrix.feature_names

    @property
    def value_counts(self):
        return self.matrix.value_counts

    def row(self, i):
        return self.matrix.row(i)

    def frequencies(self, predicate=None):
        return self.table.frequencies(predicate)

    def reset(self):
        self.table.reset()

    def train(self, predicate=None):
        n_train = self.table.frequencies(predicate)
        if n_train == 0:
            raise DegenerateEstimateError("no training rows selected")

        # compute both before assigning so a failure leaves the old estimates intact
        prior = class_priors(self.table.population)
        cond  = m_estimate(self.table.counts, self.table.population, self.smoothing, self._arity)

        self.class_prior_ = prior
        self.cond_prob_   = cond
        with np.errstate(divide="ignore"):
            self.log_prior_     = np.log(prior)
            self.log_cond_prob_ = np.log(cond)
        self.n_train_     = n_train
        self.is_fitted    = True

    def log_scores(self, observation):
        self._check_fitted()
        x = self.matrix.check_observation(observation)
        return self.log_prior_ + self.log_cond_prob_[:, self.matrix.offsets + x].sum(axis=1)

    def conditional(self, i, j, v):
        """Estimated P(x_j = v | class = i)."""
        self._check_fitted()
        self.table._check_index(i, j, v)
        return float(self.cond_prob_[i, self.matrix.offsets[j] + v])

    def conditional_table(self, j):
        """(k, value_counts[j]) conditional probabilities of feature j."""
        self._check_fitted()
        self.table._check_index(0, j)
        start = self.matrix.offsets[j]
        return self.cond_prob_[:, start:start + self.matrix.value_counts[j]]

    def summary(self, value_names=None):
        """
        Conditional probability table as a DataFrame, for inspection.

        Rows are (feature, value) pairs, columns are class names, and a
        leading "prior" row holds the class priors. value_names optionally
        maps each feature to the display names of its values.
        """
        self._check_fitted()
        index, rows = [("prior", "")], [self.class_prior_]
        for j, name in enumerate(self.feature_names):
            names = value_names[j] if value_names is not None else range(self.value_counts[j])
            for v, value_name in enumerate(names):
                index.append((name, str(value_name)))
                rows.append(self.cond_prob_[:, self.matrix.offsets[j] + v])
        return pd.DataFrame(
            np.vstack(rows),
            index=pd.MultiIndex.from_tuples(index, names=["feature", "value"]),
            columns=self.class_names,
        )

    def get_params(self):
        params = super().get_params()
        params.update({
            'value_counts': self.value_counts.tolist(),
            'feature_names': self.feature_names,
        })
        return params
