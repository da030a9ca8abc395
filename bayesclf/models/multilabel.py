import numpy as np

from bayesclf.errors import ConfigurationError, NotTrainedError
from bayesclf.models.base import Prediction
from bayesclf.models.frequency import as_2d_array, as_value_counted
from bayesclf.models.naive_bayes import NaiveBayesClassifier


def _per_label_names(class_names, n_labels):
    """Accept None, one shared list of class names, or one list per label."""
    if class_names is None:
        return [None] * n_labels
    class_names = list(class_names)
    if class_names and all(not isinstance(c, str) and hasattr(c, "__len__") for c in class_names):
        if len(class_names) != n_labels:
            raise ConfigurationError(
                f"got class names for {len(class_names)} labels, expected {n_labels}"
            )
        return [list(c) for c in class_names]
    return [class_names] * n_labels


class MultiLabelEnsemble:
    """
    One independent classifier per label column, queried as a whole.

    The target is a vector of L labels per row (Y has shape (m, L)). Training
    builds a fresh classifier for every label column over the shared feature
    matrix; no count or probability table is shared between them.

    classify() evaluates every label's classifier on the observation and
    returns the single (class_index, class_name, score) triple with the
    highest score across labels: the best matching label-class, not one
    prediction per label. Ties go to the lowest label index. Use
    classify_with_label() to see which label won, or classify_each() for
    every label's own prediction.

    Parameters
    ----------
    X : array-like or ValueCountedMatrix of shape (m, n)
    Y : array-like of shape (m, L)
        Label matrix; column l holds the class index of label l.
    class_names : list of str, or list of L lists of str, optional
        Shared or per-label class names.
    label_names : list of str, optional
    classifier_cls : class, default=NaiveBayesClassifier
        A BaseBayesClassifier subclass. Labels are compared on their log
        scores, so the pick is unaffected by underflow.
    """

    def __init__(self, X, Y, value_counts=None, class_names=None, feature_names=None,
                 label_names=None, smoothing=3.0, classifier_cls=NaiveBayesClassifier):
        Y = np.asarray(Y)
        if Y.ndim == 1:
            Y = Y[:, None]
        if Y.ndim != 2:
            raise ConfigurationError(f"label matrix must be 2-dimensional, got shape {Y.shape}")

        self.classifier_cls = classifier_cls
        if issubclass(classifier_cls, NaiveBayesClassifier):
            X = as_value_counted(X, value_counts, feature_names)
            n_samples = X.n_samples
            self._extra = {}
        else:
            if value_counts is not None:
                raise ConfigurationError(
                    f"value_counts only applies to categorical members, not {classifier_cls.__name__}"
                )
            X = as_2d_array(X)
            n_samples = X.shape[0]
            self._extra = {"feature_names": feature_names}

        if Y.shape[0] != n_samples:
            raise ConfigurationError(f"got {Y.shape[0]} label rows for {n_samples} observation rows")

        self.X         = X
        self.Y         = Y
        self.n_labels  = Y.shape[1]
        self.smoothing = smoothing
        self.label_names = list(label_names) if label_names is not None \
            else [f"y{l}" for l in range(self.n_labels)]
        if len(self.label_names) != self.n_labels:
            raise ConfigurationError(
                f"got {len(self.label_names)} label names for {self.n_labels} label columns"
            )
        self.class_names = _per_label_names(class_names, self.n_labels)

        self.classifiers_ = []

    def _build(self, l):
        return self.classifier_cls(
            self.X, self.Y[:, l],
            class_names=self.class_names[l],
            smoothing=self.smoothing,
            **self._extra,
        )

    def train(self, predicate=None):
        classifiers = [self._build(l) for l in range(self.n_labels)]
        for clf in classifiers:
            clf.train(predicate)
        self.classifiers_ = classifiers

    def fit(self, predicate=None):
        self.train(predicate)
        return self

    def reset(self):
        for clf in self.classifiers_:
            clf.reset()

    def classify_each(self, observation):
        """Each label classifier's own Prediction, in label order."""
        if not self.classifiers_:
            raise NotTrainedError("MultiLabelEnsemble has not been trained")
        return [clf.classify(observation) for clf in self.classifiers_]

    def classify_with_label(self, observation):
        """(label_index, Prediction) of the highest-scoring label-class pair."""
        if not self.classifiers_:
            raise NotTrainedError("MultiLabelEnsemble has not been trained")
        picks = [clf.best_class(observation) for clf in self.classifiers_]
        best  = max(range(len(picks)), key=lambda l: picks[l][1])
        i, log_score = picks[best]
        name = self.classifiers_[best].class_names[i]
        return best, Prediction(i, name, float(np.exp(log_score)))

    def classify(self, observation) -> Prediction:
        return self.classify_with_label(observation)[1]
