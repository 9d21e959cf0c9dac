import logging
import math
import numpy as np
from decision_tree import DecisionTreeTrainer
from errors import DomainError, InvalidArgument

logger = logging.getLogger(__name__)


def check_inputs(x, y, num_labels, max_iterations):
    if len(x) != len(y):
        raise InvalidArgument(f"Got {len(x)} feature vectors but {len(y)} labels.")
    if len(y) == 0:
        raise InvalidArgument("Cannot train on an empty training set.")
    if num_labels < 2:
        raise InvalidArgument(f"Need at least 2 labels, got {num_labels}.")
    if max_iterations < 1:
        raise InvalidArgument(f"Need at least 1 iteration, got {max_iterations}.")
    labels = np.asarray(y).reshape(-1)
    if not np.issubdtype(labels.dtype, np.integer) and np.any(labels != np.round(labels)):
        raise InvalidArgument("Labels must be integers.")
    if labels.min() < 0 or labels.max() >= num_labels:
        raise InvalidArgument(f"Labels must lie in [0, {num_labels}).")


def classifier_weight(error_rate, num_labels):
    """
    SAMME confidence ln((1 - err) / err) + ln(K - 1). For K = 2 this is the binary AdaBoost weight.
    Note: for K > 2 this literal form is known to boost less accurately than the published SAMME results.
    """
    if error_rate >= 1.0:
        raise DomainError(f"Weak classifier misclassified every instance (error rate {error_rate}).")
    return math.log((1.0 - error_rate) / error_rate) + math.log(num_labels - 1)


def train_adaboost_ensemble(x, y, num_labels, max_iterations, train_weak_classifier):
    """
    Trains a weighted ensemble of weak classifiers with multiclass AdaBoost.
    :param x: N feature vectors.
    :param y: N integer labels in [0, num_labels).
    :param num_labels: Number of classes K (at least 2).
    :param max_iterations: Training stops once more than this many iterations have run.
    :param train_weak_classifier: Function taking a length N weight vector (summing to 1) and returning a trained
    classifier with a classify(features) method.
    :return: List of (weak classifier, classifier weight) pairs in the order they were trained.
    """
    check_inputs(x, y, num_labels, max_iterations)
    labels = np.asarray(y).reshape(-1)
    num_instances = labels.size
    instance_weights = np.ones(num_instances, dtype=np.float64) / num_instances
    weighted_classifiers, iteration, converged = [], 0, False
    while not converged:
        current_classifier = train_weak_classifier(np.copy(instance_weights))
        predictions = np.array([current_classifier.classify(features) for features in x])
        is_fail = predictions != labels
        error_rate = float(np.sum(instance_weights[is_fail]))
        iteration += 1
        if is_fail.all():
            # The summed weights can land just below 1.0, so decide from the mask.
            raise DomainError(f"Weak classifier {iteration} misclassified every instance.")
        if error_rate == 0.0:
            # A perfect classifier would get an infinite weight, so it replaces the whole ensemble.
            if iteration > 1:
                logger.warning("Weak classifier %d has zero training error, returning it alone.", iteration)
            return [(current_classifier, 1.0)]
        alpha = classifier_weight(error_rate, num_labels)
        if alpha < 0:
            logger.warning("Weak classifier %d is worse than chance (error rate %.4f, weight %.4f).",
                           iteration, error_rate, alpha)
        logger.debug("Iteration %d: error rate %.6f, classifier weight %.6f", iteration, error_rate, alpha)
        instance_weights[is_fail] *= np.exp(alpha)
        instance_weights /= np.sum(np.abs(instance_weights))
        weighted_classifiers.append((current_classifier, alpha))
        converged = iteration > max_iterations
    return weighted_classifiers


def score_ensemble(ensemble, features, num_labels):
    # Weighted sum of the weak classifiers' per-label score vectors.
    scores = np.zeros(num_labels, dtype=np.float64)
    for classifier, weight in ensemble:
        scores += weight * np.asarray(classifier.score(features), dtype=np.float64)
    return scores


def predict_ensemble(ensemble, features, num_labels):
    return int(np.argmax(score_ensemble(ensemble, features, num_labels)))


def predict_adaboost_ensemble(x, ensemble, num_labels):
    return np.array([predict_ensemble(ensemble, features, num_labels) for features in x], dtype=np.int64)


class BoostedMulticlassClassifier:
    def __init__(self, weak_classifiers, num_labels):
        self.weak_classifiers = weak_classifiers
        self.num_labels = num_labels

    def score(self, features):
        return score_ensemble(self.weak_classifiers, features, self.num_labels)

    def classify(self, features):
        return predict_ensemble(self.weak_classifiers, features, self.num_labels)

    def predict(self, x):
        return predict_adaboost_ensemble(x, self.weak_classifiers, self.num_labels)


class BoostedBinaryClassifier:
    """
    Weighted ensemble of binary classifiers whose score(features) returns a single margin. Positive total scores are
    classified as 1, all others as 0.
    """

    def __init__(self, weak_classifiers):
        self.weak_classifiers = weak_classifiers

    def score(self, features):
        return sum(classifier.score(features) * weight for classifier, weight in self.weak_classifiers)

    def classify(self, features):
        return 1 if self.score(features) > 0.0 else 0


class BoostingMulticlassTrainer:
    def __init__(self, num_weak_learners=100, train_weak_learner=None):
        """
        :param num_weak_learners: Passed on as the iteration cap of the AdaBoost loop.
        :param train_weak_learner: Object with a train(x, y, sample_weights) method. Defaults to a decision stump.
        """
        self.num_weak_learners = num_weak_learners
        self.train_weak_learner = train_weak_learner

    def train(self, x, y, num_labels, evaluate=None):
        weak_learner = self.train_weak_learner
        if weak_learner is None:
            weak_learner = DecisionTreeTrainer(num_labels, num_leaves=2)
        logger.info("Boosting up to %d weak learners on %d instances.", self.num_weak_learners, len(y))
        weak_classifiers = train_adaboost_ensemble(
            x, y, num_labels, self.num_weak_learners,
            lambda weights: weak_learner.train(x, y, weights))
        classifier = BoostedMulticlassClassifier(weak_classifiers, num_labels)
        if evaluate is not None:
            evaluate(classifier)
        return classifier
