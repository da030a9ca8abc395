"""
Small bundled datasets.

stolen_cars() is the classic ten-row car theft example: three binary
features (Color, Type, Origin) and whether the car was stolen. The extra
"Insured" column is a second label for the multi-label ensemble.
"""

import pandas as pd

COLOR  = ["Yellow", "Red"]
TYPE   = ["Sports", "SUV"]
ORIGIN = ["Imported", "Domestic"]
NO_YES = ["No", "Yes"]

FEATURES = ["Color", "Type", "Origin"]
LABELS   = ["Stolen", "Insured"]

_ROWS = [
    # Color,   Type,     Origin,     Stolen, Insured
    ("Red",    "Sports", "Domestic", "Yes", "Yes"),
    ("Red",    "Sports", "Domestic", "No",  "Yes"),
    ("Red",    "Sports", "Domestic", "Yes", "Yes"),
    ("Yellow", "Sports", "Domestic", "No",  "No"),
    ("Yellow", "Sports", "Imported", "Yes", "No"),
    ("Yellow", "SUV",    "Imported", "No",  "No"),
    ("Yellow", "SUV",    "Imported", "Yes", "Yes"),
    ("Yellow", "SUV",    "Domestic", "No",  "No"),
    ("Red",    "SUV",    "Imported", "No",  "Yes"),
    ("Red",    "Sports", "Imported", "Yes", "No"),
]


def stolen_cars():
    """
    The car theft table as a DataFrame of categorical columns.

    Codes: Color Yellow=0 Red=1, Type Sports=0 SUV=1,
    Origin Imported=0 Domestic=1, No=0 Yes=1. Stolen is therefore
    [1, 0, 1, 0, 1, 0, 1, 0, 0, 1].

    Encode with feature_columns=FEATURES: otherwise the label column not
    chosen as target would be taken as a feature.
    """
    df = pd.DataFrame(_ROWS, columns=FEATURES + LABELS)
    for col, categories in [("Color", COLOR), ("Type", TYPE), ("Origin", ORIGIN),
                            ("Stolen", NO_YES), ("Insured", NO_YES)]:
        df[col] = pd.Categorical(df[col], categories=categories)
    return df
