"""
Smoothing sensitivity sweep: how does the m-estimate parameter affect accuracy?

Sweeps smoothing from 0 (MLE) across four orders of magnitude and records
cross-validated accuracy for the generic classifier and, when every
feature is binary, the Bernoulli variant.
Results saved to results/metrics/smoothing_sweep.csv.
"""

import pandas as pd

from bayesclf.errors import DegenerateEstimateError
from bayesclf.models.bernoulli_nb import BernoulliNaiveBayes
from bayesclf.models.cross_validation import cross_validate
from bayesclf.models.naive_bayes import NaiveBayesClassifier
from bayesclf.experiments.setup import RESULTS_DIR, SMOOTHING_GRID, build_parser, load_dataset


def cv_accuracy(clf, folds):
    # MLE can leave a class without rows in some fold
    try:
        return cross_validate(clf, n_folds=folds).accuracy
    except DegenerateEstimateError:
        return float("nan")


def run_sweep(data, smoothings=SMOOTHING_GRID, folds=10):
    """One row per smoothing value with the cross-validated accuracies."""
    binary = bool((data.value_counts == 2).all())
    rows = []
    for s in smoothings:
        clf = NaiveBayesClassifier(
            data.X, data.labels,
            value_counts=data.value_counts,
            class_names=data.class_names,
            smoothing=s,
        )
        row = {"smoothing": float(s), "nb_accuracy": cv_accuracy(clf, folds)}
        if binary:
            bern = BernoulliNaiveBayes(data.X, data.labels, class_names=data.class_names,
                                       smoothing=s)
            row["bernoulli_accuracy"] = cv_accuracy(bern, folds)
        rows.append(row)
    return pd.DataFrame(rows)


def main(argv=None):
    args = build_parser(__doc__.strip().splitlines()[0]).parse_args(argv)

    print("Loading data...")
    data  = load_dataset(args.csv, args.labels, args.features)
    folds = min(args.folds, len(data.X))

    print(f"Sweeping {len(SMOOTHING_GRID)} smoothing values from {SMOOTHING_GRID[0]:g} "
          f"to {SMOOTHING_GRID[-1]:g} ({folds}-fold CV)...\n")
    results = run_sweep(data, SMOOTHING_GRID, folds)

    out_dir = RESULTS_DIR / "metrics"
    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / "smoothing_sweep.csv"
    results.to_csv(out_path, index=False)
    print(f"✓ Saved to {out_path}\n")

    print(f"{'Model':<12} {'Best smoothing':>15}  {'Accuracy':>10}")
    print("-" * 40)
    for label, col in [("generic", "nb_accuracy"), ("bernoulli", "bernoulli_accuracy")]:
        if col not in results or results[col].isna().all():
            continue
        best = results.loc[results[col].idxmax()]
        print(f"{label:<12} {best['smoothing']:>15.4f}  {best[col]:>10.4f}")


if __name__ == "__main__":
    main()
