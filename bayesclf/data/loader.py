"""
Tabular data source: turns categorical columns into integer-coded matrices.

Every column becomes integer codes 0 .. arity-1. Columns that are already a
pandas Categorical keep their category order; any other column is ordered
by its sorted distinct values.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from bayesclf.errors import ConfigurationError


@dataclass
class EncodedDataset:
    X: np.ndarray                      # (m, n) integer codes
    Y: np.ndarray                      # (m, L) integer codes, one column per label
    feature_names: List[str]
    value_names: List[List[str]]       # per feature, code -> original value
    label_names: List[str]
    label_class_names: List[List[str]] # per label, code -> original value

    @property
    def value_counts(self):
        return np.array([len(v) for v in self.value_names], dtype=np.int64)

    # single-label helpers refer to the first label column
    @property
    def labels(self):
        return self.Y[:, 0]

    @property
    def class_names(self):
        return self.label_class_names[0]


def clean_value(value):
    return " ".join(str(value).split())


def encode_column(s):
    """Integer codes and category names of one column."""
    if not isinstance(s.dtype, pd.CategoricalDtype):
        s = s.astype(pd.CategoricalDtype(sorted(s.dropna().unique())))
    codes = s.cat.codes.to_numpy()
    if (codes < 0).any():
        raise ConfigurationError(f"column {s.name!r} has missing or unknown values")
    return codes.astype(np.int64), [str(c) for c in s.cat.categories]


def encode_frame(df, label_columns, feature_columns: Optional[Sequence[str]] = None):
    """
    Encode a DataFrame of categorical columns.

    label_columns is one column name or a list of names. feature_columns
    defaults to every column that is not a label.
    """
    if isinstance(label_columns, str):
        label_columns = [label_columns]
    label_columns = list(label_columns)

    missing = [c for c in label_columns if c not in df.columns]
    if missing:
        raise ConfigurationError(f"label column(s) not found: {missing}")
    if feature_columns is None:
        feature_columns = [c for c in df.columns if c not in label_columns]
    feature_columns = list(feature_columns)
    missing = [c for c in feature_columns if c not in df.columns]
    if missing:
        raise ConfigurationError(f"feature column(s) not found: {missing}")
    if not feature_columns:
        raise ConfigurationError("no feature columns to encode")

    X_cols, value_names = zip(*(encode_column(df[c]) for c in feature_columns))
    Y_cols, class_names = zip(*(encode_column(df[c]) for c in label_columns))

    return EncodedDataset(
        X=np.column_stack(X_cols),
        Y=np.column_stack(Y_cols),
        feature_names=[str(c) for c in feature_columns],
        value_names=list(value_names),
        label_names=[str(c) for c in label_columns],
        label_class_names=list(class_names),
    )


def load_csv(path, label_columns, feature_columns=None):
    """Read a CSV of categorical columns (all read as text) and encode it."""
    df = pd.read_csv(Path(path), dtype=str, skipinitialspace=True)
    df = df.apply(lambda col: col.map(clean_value, na_action="ignore"))
    return encode_frame(df, label_columns, feature_columns)
