import numpy as np
import pytest

from bayesclf.errors import ConfigurationError, NotTrainedError
from bayesclf.models.bernoulli_nb import BernoulliNaiveBayes, binarize
from bayesclf.models.naive_bayes import NaiveBayesClassifier


def _make(m=150, n=6, seed=0):
    rng = np.random.default_rng(seed)
    X = rng.integers(0, 2, size=(m, n))
    y = (X[:, 0] | (rng.random(m) < 0.2)).astype(int)
    return X, y


def test_matches_generic_classifier():
    X, y = _make()
    bern = BernoulliNaiveBayes(X, y, smoothing=3).fit()
    generic = NaiveBayesClassifier(X, y, smoothing=3).fit()

    np.testing.assert_allclose(bern.class_prior_, generic.class_prior_)
    for row in X[:25]:
        np.testing.assert_allclose(bern.scores(row), generic.scores(row))
        assert bern.classify(row).class_index == generic.classify(row).class_index


def test_worked_example(car_X, car_y, car_names):
    bern = BernoulliNaiveBayes(car_X, car_y, class_names=car_names["classes"]).fit()
    assert bern.classify([1, 0, 1]).class_name == "Yes"
    assert bern.classify([1, 1, 1]).class_name == "No"


def test_present_and_absent_counts(car_X, car_y):
    bern = BernoulliNaiveBayes(car_X, car_y)
    bern.frequencies()
    assert bern.population.tolist() == [5, 5]
    assert bern.feature_present_.tolist() == [[2, 3, 3], [3, 1, 2]]
    np.testing.assert_array_equal(
        bern.feature_present_ + bern.feature_absent_, bern.population[:, None].repeat(3, axis=1)
    )


def test_probabilities_complement():
    X, y = _make()
    bern = BernoulliNaiveBayes(X, y, smoothing=0.5).fit()
    np.testing.assert_allclose(bern.feature_prob_ + bern.feature_prob_neg_, 1.0)


def test_continuous_inputs_are_thresholded(car_X, car_y):
    noisy = car_X * 0.8 + 0.1          # 1 -> 0.9, 0 -> 0.1
    bern = BernoulliNaiveBayes(noisy, car_y).fit()
    exact = BernoulliNaiveBayes(car_X, car_y).fit()

    np.testing.assert_array_equal(bern.X, car_X)
    assert bern.classify([0.7, 0.2, 0.5]) == exact.classify([1, 0, 1])
    assert bern.classify([0.5, 0.49, 0.51]) == exact.classify([1, 0, 1])


def test_binarize_threshold():
    assert binarize([0.0, 0.49, 0.5, 2.0]).tolist() == [0, 0, 1, 1]
    with pytest.raises(ConfigurationError):
        binarize([np.nan])


def test_reset_and_retrain(car_X, car_y):
    bern = BernoulliNaiveBayes(car_X, car_y).fit()
    p = bern.feature_prob_.copy()
    bern.reset()
    assert not bern.feature_present_.any()
    bern.train()
    bern.train()
    np.testing.assert_array_equal(bern.feature_prob_, p)


def test_errors(car_X, car_y):
    bern = BernoulliNaiveBayes(car_X, car_y)
    with pytest.raises(NotTrainedError):
        bern.classify([1, 0, 1])
    bern.train()
    with pytest.raises(ConfigurationError):
        bern.classify([1, 0])
    with pytest.raises(ConfigurationError):
        BernoulliNaiveBayes(car_X, car_y, feature_names=["a", "b"])
    with pytest.raises(ConfigurationError):
        BernoulliNaiveBayes(car_X[:2], car_y[:2])


def test_summary(car_X, car_y, car_names):
    bern = BernoulliNaiveBayes(car_X, car_y, class_names=car_names["classes"],
                               feature_names=car_names["features"]).fit()
    table = bern.summary()
    assert list(table.index) == ["prior", "Color", "Type", "Origin"]
    assert table.loc["Color", "Yes"] == pytest.approx(4.5 / 8)


def test_wide_input_does_not_underflow():
    rng = np.random.default_rng(1)
    y = rng.integers(0, 2, size=200)
    X = rng.random((200, 1200))
    X[:, :50] = y[:, None]
    bern = BernoulliNaiveBayes(X, y).fit()

    assert np.all(np.isfinite(bern.log_scores(X[0])))
    assert bern.score(X, y) == 1.0
    assert np.all(np.isfinite(bern.predict_log_proba(X[:5])))


def test_no_features_rejected():
    with pytest.raises(ConfigurationError):
        BernoulliNaiveBayes(np.empty((4, 0)), [0, 1, 0, 1])
