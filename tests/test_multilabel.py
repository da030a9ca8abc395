import numpy as np
import pytest

from bayesclf.errors import ConfigurationError, NotTrainedError
from bayesclf.models.bernoulli_nb import BernoulliNaiveBayes
from bayesclf.models.frequency import ValueCountedMatrix
from bayesclf.models.multilabel import MultiLabelEnsemble
from bayesclf.models.naive_bayes import NaiveBayesClassifier

INSURED = np.array([1, 1, 1, 0, 0, 0, 1, 0, 1, 0])


def _ensemble(car_X, car_y, **kwargs):
    Y = np.column_stack([car_y, INSURED])
    return MultiLabelEnsemble(car_X, Y, class_names=["No", "Yes"],
                              label_names=["Stolen", "Insured"], **kwargs)


def test_best_label_class_matches_independent_classifiers(car_X, car_y):
    ensemble = _ensemble(car_X, car_y).fit()
    stolen  = NaiveBayesClassifier(car_X, car_y, class_names=["No", "Yes"]).fit()
    insured = NaiveBayesClassifier(car_X, INSURED, class_names=["No", "Yes"]).fit()

    for x in [[1, 0, 1], [1, 1, 1], [0, 1, 0], [0, 0, 0]]:
        candidates = [stolen.classify(x), insured.classify(x)]
        best = max(candidates, key=lambda p: p.score)
        pred = ensemble.classify(x)
        assert pred.class_index == best.class_index
        assert pred.class_name == best.class_name
        assert pred.score == pytest.approx(best.score)

        label, same = ensemble.classify_with_label(x)
        assert same == pred
        assert candidates[label].score == pytest.approx(pred.score)


def test_classify_each(car_X, car_y):
    ensemble = _ensemble(car_X, car_y).fit()
    each = ensemble.classify_each([1, 0, 1])
    assert len(each) == 2
    assert each[0].class_name == "Yes"
    assert ensemble.classify([1, 0, 1]).score == max(p.score for p in each)


def test_ties_go_to_lowest_label(car_X, car_y):
    ensemble = MultiLabelEnsemble(car_X, np.column_stack([car_y, car_y])).fit()
    label, _ = ensemble.classify_with_label([1, 0, 1])
    assert label == 0


def test_train_builds_independent_classifiers(car_X, car_y):
    ensemble = _ensemble(car_X, car_y).fit()
    first = list(ensemble.classifiers_)
    assert first[0].table is not first[1].table
    assert first[0].matrix is first[1].matrix

    ensemble.train()
    assert ensemble.classifiers_[0] is not first[0]


def test_reset_resets_every_classifier(car_X, car_y):
    ensemble = _ensemble(car_X, car_y).fit()
    ensemble.reset()
    for clf in ensemble.classifiers_:
        assert not clf.table.population.any()
        assert not clf.table.counts.any()


def test_per_label_class_names(car_X, car_y):
    Y = np.column_stack([car_y, INSURED])
    ensemble = MultiLabelEnsemble(car_X, Y, class_names=[["not stolen", "stolen"], ["uninsured", "insured"]])
    ensemble.train()
    names = {p.class_name for p in ensemble.classify_each([1, 0, 1])}
    assert names <= {"not stolen", "stolen", "uninsured", "insured"}


def test_bernoulli_members(car_X, car_y):
    ensemble = _ensemble(car_X, car_y, classifier_cls=BernoulliNaiveBayes).fit()
    assert all(isinstance(c, BernoulliNaiveBayes) for c in ensemble.classifiers_)
    reference = _ensemble(car_X, car_y).fit()
    assert ensemble.classify([1, 1, 1]).score == pytest.approx(reference.classify([1, 1, 1]).score)


def test_errors(car_X, car_y):
    ensemble = _ensemble(car_X, car_y)
    with pytest.raises(NotTrainedError):
        ensemble.classify([1, 0, 1])
    with pytest.raises(ConfigurationError):
        MultiLabelEnsemble(car_X, np.column_stack([car_y, INSURED])[:9])
    with pytest.raises(ConfigurationError):
        MultiLabelEnsemble(car_X, np.column_stack([car_y, INSURED]), label_names=["only one"])
    with pytest.raises(ConfigurationError):
        MultiLabelEnsemble(car_X, np.column_stack([car_y, INSURED]), class_names=[["a", "b"]])


def test_matrix_with_separate_value_counts_rejected(car_X, car_y):
    Y = np.column_stack([car_y, INSURED])
    matrix = ValueCountedMatrix(car_X, feature_names=["Color", "Type", "Origin"])
    with pytest.raises(ConfigurationError):
        MultiLabelEnsemble(matrix, Y, value_counts=[2, 2, 2])
    with pytest.raises(ConfigurationError):
        MultiLabelEnsemble(matrix, Y, feature_names=["a", "b", "c"])
    with pytest.raises(ConfigurationError):
        MultiLabelEnsemble(car_X, Y, value_counts=[2, 2, 2], classifier_cls=BernoulliNaiveBayes)

    ensemble = MultiLabelEnsemble(matrix, Y).fit()
    assert ensemble.classifiers_[0].feature_names == ["Color", "Type", "Origin"]


def test_wide_input_picks_label_in_log_space():
    rng = np.random.default_rng(0)
    y = rng.integers(0, 2, size=200)
    X = rng.integers(0, 2, size=(200, 1200))
    X[:, :50] = y[:, None]
    noise = rng.integers(0, 2, size=200)
    ensemble = MultiLabelEnsemble(X, np.column_stack([noise, y])).fit()

    label, pred = ensemble.classify_with_label(X[0])
    assert label == 1
    assert pred.class_index == y[0]
