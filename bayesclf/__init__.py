from bayesclf.errors import (
    BayesClassifierError,
    ConfigurationError,
    DegenerateEstimateError,
    NotTrainedError,
)
from bayesclf.models.base import Prediction
from bayesclf.models.bernoulli_nb import BernoulliNaiveBayes
from bayesclf.models.cross_validation import cross_validate, excluding, fold_bounds
from bayesclf.models.frequency import FrequencyTable, ValueCountedMatrix
from bayesclf.models.multilabel import MultiLabelEnsemble
from bayesclf.models.naive_bayes import NaiveBayesClassifier

__all__ = [
    "BayesClassifierError",
    "ConfigurationError",
    "DegenerateEstimateError",
    "NotTrainedError",
    "Prediction",
    "ValueCountedMatrix",
    "FrequencyTable",
    "NaiveBayesClassifier",
    "BernoulliNaiveBayes",
    "MultiLabelEnsemble",
    "cross_validate",
    "excluding",
    "fold_bounds",
]
