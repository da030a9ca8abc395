"""
Train the categorical Naive Bayes classifier and cross-validate it.

    python -m bayesclf.experiments.train_nb
    python -m bayesclf.experiments.train_nb --csv data/cars.csv --label Stolen
    python -m bayesclf.experiments.train_nb --label Stolen --label Insured

With one label column the generic classifier is trained, its probability
tables printed and its out-of-fold predictions reported. With several label
columns each label is cross-validated on its own and the multi-label
ensemble's best label-class pick is shown per row.
"""

import numpy as np
from sklearn.metrics import accuracy_score, classification_report, f1_score

from bayesclf.models.bernoulli_nb import BernoulliNaiveBayes
from bayesclf.models.cross_validation import cross_validate
from bayesclf.models.multilabel import MultiLabelEnsemble
from bayesclf.models.naive_bayes import NaiveBayesClassifier
from bayesclf.experiments.setup import DEFAULT_SMOOTHING, build_parser, load_dataset


def evaluate(y, preds, class_names, label=""):
    acc = accuracy_score(y, preds)
    f1  = f1_score(y, preds, average="macro", labels=list(range(len(class_names))), zero_division=0)
    print(f"{label:10s}  accuracy={acc:.4f}  F1(macro)={f1:.4f}")
    return acc, f1


def single_label(data, smoothing, folds):
    clf = NaiveBayesClassifier(
        data.X, data.labels,
        value_counts=data.value_counts,
        class_names=data.class_names,
        feature_names=data.feature_names,
        smoothing=smoothing,
    )
    clf.train()

    print("=" * 60)
    print(f"Naive Bayes  (smoothing={smoothing:g}) on all {clf.n_train_} rows")
    print("=" * 60)
    print(clf.summary(value_names=data.value_names).to_string(float_format=lambda p: f"{p:.4f}"))

    print(f"\n{folds}-fold cross-validation (contiguous folds)")
    cv = cross_validate(clf, n_folds=folds)
    print(f"  correct={cv.correct}/{cv.total}  accuracy={cv.accuracy:.4f}")
    print(f"  per fold: {np.round(cv.fold_accuracies, 3).tolist()}")
    evaluate(data.labels, cv.predictions, data.class_names, "out-of-fold")
    print(classification_report(
        data.labels, cv.predictions,
        labels=list(range(len(data.class_names))), target_names=data.class_names,
        digits=3, zero_division=0,
    ))

    if (data.value_counts == 2).all():
        bern = BernoulliNaiveBayes(
            data.X, data.labels,
            class_names=data.class_names,
            feature_names=data.feature_names,
            smoothing=smoothing,
        )
        bern_cv = cross_validate(bern, n_folds=folds)
        print(f"Bernoulli variant: accuracy={bern_cv.accuracy:.4f} "
              f"(agrees with generic on {np.mean(bern_cv.predictions == cv.predictions):.0%} of rows)")


def multi_label(data, smoothing, folds):
    print("=" * 60)
    print(f"Per-label cross-validation  (smoothing={smoothing:g})")
    print("=" * 60)
    for l, name in enumerate(data.label_names):
        clf = NaiveBayesClassifier(
            data.X, data.Y[:, l],
            value_counts=data.value_counts,
            class_names=data.label_class_names[l],
            smoothing=smoothing,
        )
        cv = cross_validate(clf, n_folds=folds)
        print(f"  {name:<20} accuracy={cv.accuracy:.4f}")

    ensemble = MultiLabelEnsemble(
        data.X, data.Y,
        value_counts=data.value_counts,
        class_names=data.label_class_names,
        feature_names=data.feature_names,
        label_names=data.label_names,
        smoothing=smoothing,
    )
    ensemble.train()

    print("\nBest label-class per row (ensemble trained on all rows):")
    print(f"  {'row':>4}  {'label':<20} {'class':<15} {'score':>10}")
    for i, x in enumerate(data.X):
        l, pred = ensemble.classify_with_label(x)
        print(f"  {i:>4}  {data.label_names[l]:<20} {pred.class_name:<15} {pred.score:>10.6f}")


def main(argv=None):
    parser = build_parser(__doc__.strip().splitlines()[0])
    parser.add_argument("--smoothing", type=float, default=DEFAULT_SMOOTHING)
    args = parser.parse_args(argv)

    print("Loading data...")
    data  = load_dataset(args.csv, args.labels, args.features)
    folds = min(args.folds, len(data.X))
    print(f"  {data.X.shape[0]:,} rows × {data.X.shape[1]} features, "
          f"arities {data.value_counts.tolist()}\n")

    if data.Y.shape[1] == 1:
        single_label(data, args.smoothing, folds)
    else:
        multi_label(data, args.smoothing, folds)


if __name__ == "__main__":
    main()
