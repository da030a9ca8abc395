"""
Shared setup for all experiments: defaults, data loading and CLI options.
Centralising this ensures every experiment uses identical data and folds.
"""

import argparse

import numpy as np
from pathlib import Path

from bayesclf.data.examples import FEATURES as EXAMPLE_FEATURES, stolen_cars
from bayesclf.data.loader import encode_frame, load_csv

DATA_DIR    = Path(__file__).parent.parent.parent / "data"
RESULTS_DIR = Path(__file__).parent.parent.parent / "results"

DEFAULT_SMOOTHING = 3.0
DEFAULT_FOLDS     = 10
SMOOTHING_GRID    = np.concatenate([[0.0], np.logspace(-2, 2, 25)])  # MLE, then 0.01 → 100

EXAMPLE_LABELS = ["Stolen"]


def load_dataset(csv=None, labels=None, features=None):
    """Encoded CSV, or the bundled car theft example when no path is given."""
    if csv is None:
        return encode_frame(stolen_cars(), labels or EXAMPLE_LABELS, features or EXAMPLE_FEATURES)
    if not labels:
        raise SystemExit("--label is required together with --csv")
    return load_csv(csv, labels, features)


def build_parser(description):
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--csv", type=Path, default=None,
                        help="CSV of categorical columns (default: bundled car theft example)")
    parser.add_argument("--label", action="append", dest="labels", default=None,
                        help="label column; repeat for a multi-label target")
    parser.add_argument("--feature", action="append", dest="features", default=None,
                        help="feature column (default: every non-label column)")
    parser.add_argument("--folds", type=int, default=DEFAULT_FOLDS)
    return parser
