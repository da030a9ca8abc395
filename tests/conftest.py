import numpy as np
import pytest

from bayesclf.data.examples import FEATURES, stolen_cars
from bayesclf.data.loader import encode_frame

# Color (Yellow=0, Red=1), Type (Sports=0, SUV=1), Origin (Imported=0, Domestic=1)
CAR_X = np.array([
    [1, 0, 1],
    [1, 0, 1],
    [1, 0, 1],
    [0, 0, 1],
    [0, 0, 0],
    [0, 1, 0],
    [0, 1, 0],
    [0, 1, 1],
    [1, 1, 0],
    [1, 0, 0],
])
# Stolen: No=0, Yes=1
CAR_Y = np.array([1, 0, 1, 0, 1, 0, 1, 0, 0, 1])


@pytest.fixture
def car_X():
    return CAR_X.copy()


@pytest.fixture
def car_y():
    return CAR_Y.copy()


@pytest.fixture
def car_names():
    return {"features": ["Color", "Type", "Origin"], "classes": ["No", "Yes"]}


@pytest.fixture
def cars():
    return encode_frame(stolen_cars(), "Stolen", feature_columns=FEATURES)


@pytest.fixture
def cars_multilabel():
    return encode_frame(stolen_cars(), ["Stolen", "Insured"], feature_columns=FEATURES)
