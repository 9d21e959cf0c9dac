"""
Storing and loading boosted tree ensembles.

An ensemble is stored as {"numLabels": K, "weakLearners": [tree, ...], "weights": [w, ...]} where each tree is the
dictionary produced by DecisionTree.to_dict and the two lists have the same length.
"""
import json
import logging
from pathlib import Path
from adaboost import BoostedMulticlassClassifier
from decision_tree import DecisionTree
from errors import InvalidArgument

logger = logging.getLogger(__name__)


def ensemble_to_dict(classifier):
    weak_learners, weights = [], []
    for weak_classifier, weight in classifier.weak_classifiers:
        # TODO: support weak learner types other than decision trees once a second one exists.
        if not isinstance(weak_classifier, DecisionTree):
            raise InvalidArgument(f"Cannot store weak classifier of type {type(weak_classifier).__name__}.")
        weak_learners.append(weak_classifier.to_dict())
        weights.append(float(weight))
    return {"numLabels": int(classifier.num_labels), "weakLearners": weak_learners, "weights": weights}


def ensemble_from_dict(blob):
    try:
        num_labels, weak_learners, weights = blob["numLabels"], blob["weakLearners"], blob["weights"]
    except KeyError as e:
        raise InvalidArgument(f"Stored ensemble is missing {e.args[0]!r}.") from e
    if len(weak_learners) != len(weights):
        raise InvalidArgument(f"Stored ensemble has {len(weak_learners)} weak learners but {len(weights)} weights.")
    weighted = [(DecisionTree.from_dict(tree), float(weight)) for tree, weight in zip(weak_learners, weights)]
    return BoostedMulticlassClassifier(weighted, int(num_labels))


def save_ensemble(classifier, fn):
    fn = Path(fn)
    fn.parent.mkdir(parents=True, exist_ok=True)
    with fn.open("w", encoding="utf-8") as f:
        json.dump(ensemble_to_dict(classifier), f)
    logger.info("Saved ensemble of %d weak learners to %s", len(classifier.weak_classifiers), fn)


def load_ensemble(fn):
    with Path(fn).open("r", encoding="utf-8") as f:
        return ensemble_from_dict(json.load(f))
