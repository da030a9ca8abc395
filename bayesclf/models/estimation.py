import numpy as np

from bayesclf.errors import ConfigurationError, DegenerateEstimateError


def check_smoothing(smoothing):
    """Validate the m-estimate parameter and return it as a float."""
    smoothing = float(smoothing)
    if not np.isfinite(smoothing) or smoothing < 0:
        raise ConfigurationError(f"smoothing must be a finite value >= 0, got {smoothing}")
    return smoothing


def class_priors(population):
    """
    MLE class prior from per-class row counts:

        P(class=i) = n_i / N

    Raises DegenerateEstimateError when N is zero instead of producing NaN.
    """
    population = np.asarray(population, dtype=float)
    total = population.sum()
    if total == 0:
        raise DegenerateEstimateError("cannot estimate class priors from zero training rows")
    return population / total


def m_estimate(freq, population, smoothing, arity):
    """
    Smoothed conditional probability P(feature=v | class=i).

    The m-estimate spreads `smoothing` pseudo-counts uniformly across the
    feature's `arity` values:

        P(v | i) = (count(v, i) + smoothing / arity) / (n_i + smoothing)

    This is a symmetric Dirichlet(smoothing / arity) prior. smoothing=0
    reduces to maximum likelihood count(v, i) / n_i.

    `freq` is (k, arity) or (k, n) and `population` is (k,); the result has
    the shape of `freq`. For a fixed class each row over the `arity` values
    sums to one.
    """
    freq       = np.asarray(freq, dtype=float)
    population = np.asarray(population, dtype=float)

    denom = population + smoothing
    empty = np.flatnonzero(denom == 0)
    if empty.size:
        raise DegenerateEstimateError(
            f"class(es) {empty.tolist()} have no training rows and smoothing is 0"
        )
    return (freq + smoothing / arity) / denom[:, None]
