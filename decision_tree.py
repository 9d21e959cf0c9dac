import numpy as np
import numba


@numba.njit()
def weighted_gini_impurity(ys, weights, num_classes):
    # Gini impurity of the weighted label distribution.
    totals = np.zeros(num_classes, dtype=np.float64)
    for i in range(ys.size):
        totals[ys[i]] += weights[i]
    total = np.sum(totals)
    if total <= 0.0:
        return 0.0
    return 1.0 - np.sum(np.square(totals / total))


@numba.njit()
def find_best_split(xs, ys, weights, num_classes):
    """
    Searches all features and thresholds for the split x[:, feature] < value that reduces the weighted Gini impurity
    the most. Returns (-1, 0.0) if no split reduces it.
    """
    num_examples, num_features = xs.shape
    total_weight = np.sum(weights)
    best_feature, best_split_value, best_impurity_loss = -1, 0.0, 0.0
    if total_weight <= 0.0:
        return best_feature, best_split_value
    current_impurity = weighted_gini_impurity(ys, weights, num_classes)
    for feature in range(num_features):
        column = xs[:, feature].copy()
        feature_values = np.unique(column)
        # Splitting at the smallest value would leave the left partition empty.
        for split_value in feature_values[1:]:
            partition_l = column < split_value
            partition_eh = ~partition_l
            weight_l = np.sum(weights[partition_l])
            weight_eh = total_weight - weight_l
            impurity_l = weighted_gini_impurity(ys[partition_l], weights[partition_l], num_classes)
            impurity_eh = weighted_gini_impurity(ys[partition_eh], weights[partition_eh], num_classes)
            impurity_loss = current_impurity - (weight_l * impurity_l + weight_eh * impurity_eh) / total_weight
            if impurity_loss > best_impurity_loss:
                best_feature = feature
                best_split_value = split_value
                best_impurity_loss = impurity_loss
    return best_feature, best_split_value


def label_distribution(ys, weights, num_classes):
    distribution = np.bincount(ys, weights=weights, minlength=num_classes).astype(np.float64)
    if distribution.sum() <= 0.0:
        # All instances in this leaf carry zero weight, fall back to plain counts.
        distribution = np.bincount(ys, minlength=num_classes).astype(np.float64)
    if distribution.sum() <= 0.0:
        return np.ones(num_classes, dtype=np.float64) / num_classes
    return distribution / distribution.sum()


class TreeNode:
    def __init__(self, parent=None):
        self.parent = parent
        self.left_child = None
        self.right_child = None
        self.split_feature = None
        self.split_value = None
        self.distribution = None
        self.majority_class = None

    def set_criterion(self, feature, value):
        self.split_feature = feature
        self.split_value = value
        self.left_child = TreeNode(self)
        self.right_child = TreeNode(self)

    def set_distribution(self, distribution):
        self.distribution = distribution
        self.majority_class = int(np.argmax(distribution))

    def is_leaf(self):
        return self.left_child is None

    def to_dict(self):
        if self.is_leaf():
            return {"distribution": [float(p) for p in self.distribution]}
        return {"feature": int(self.split_feature), "value": float(self.split_value),
                "left": self.left_child.to_dict(), "right": self.right_child.to_dict()}

    @classmethod
    def from_dict(cls, blob, parent=None):
        node = cls(parent)
        if "distribution" in blob:
            node.set_distribution(np.array(blob["distribution"], dtype=np.float64))
            return node
        node.set_criterion(blob["feature"], blob["value"])
        node.left_child = cls.from_dict(blob["left"], node)
        node.right_child = cls.from_dict(blob["right"], node)
        return node


class DecisionTree:
    """
    Multiclass decision tree trained on weighted instances. Leaves hold the normalised weighted label distribution
    of the training instances that reach them, which doubles as the tree's per-label score vector.
    """

    def __init__(self, num_labels, num_leaves):
        self.num_labels = num_labels
        self.num_leaves = num_leaves
        self.root = TreeNode()

    def fit(self, x, y, sample_weights=None):
        x = np.ascontiguousarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.int64).reshape(-1)
        if sample_weights is None:
            sample_weights = np.ones(y.size, dtype=np.float64) / y.size
        sample_weights = np.ascontiguousarray(sample_weights, dtype=np.float64)
        # Grow breadth-first: expand nodes in the order they were created until the leaf budget is used up.
        nodes, current_num_leaves = [(self.root, np.arange(y.size))], 1
        while nodes and current_num_leaves < self.num_leaves:
            current_node, indices = nodes.pop(0)
            current_x, current_y, current_weights = x[indices], y[indices], sample_weights[indices]
            current_node.set_distribution(label_distribution(current_y, current_weights, self.num_labels))
            split_feature, split_value = find_best_split(current_x, current_y, current_weights, self.num_labels)
            if split_feature >= 0:
                current_node.set_criterion(split_feature, split_value)
                current_num_leaves += 1
                mask = current_x[:, split_feature] < split_value
                nodes.append((current_node.left_child, indices[mask]))
                nodes.append((current_node.right_child, indices[~mask]))
        for node, indices in nodes:
            node.set_distribution(label_distribution(y[indices], sample_weights[indices], self.num_labels))
        return self

    def leaf(self, features):
        node = self.root
        while not node.is_leaf():
            node = node.left_child if features[node.split_feature] < node.split_value else node.right_child
        return node

    def score(self, features):
        return np.copy(self.leaf(np.asarray(features).reshape(-1)).distribution)

    def classify(self, features):
        return self.leaf(np.asarray(features).reshape(-1)).majority_class

    def predict(self, x):
        return np.array([self.classify(features) for features in x], dtype=np.int64)

    def to_dict(self):
        return {"numLabels": self.num_labels, "numLeaves": self.num_leaves, "root": self.root.to_dict()}

    @classmethod
    def from_dict(cls, blob):
        tree = cls(blob["numLabels"], blob["numLeaves"])
        tree.root = TreeNode.from_dict(blob["root"])
        return tree


class DecisionTreeTrainer:
    """
    Weak learner for boosting. With num_leaves=2 every trained tree is a decision stump.
    """

    def __init__(self, num_labels, num_leaves=2):
        self.num_labels = num_labels
        self.num_leaves = num_leaves

    def train(self, x, y, sample_weights=None):
        return DecisionTree(self.num_labels, self.num_leaves).fit(x, y, sample_weights)

    def weak_learner(self, x, y):
        # Adapts train to the weights -> classifier callable the AdaBoost loop expects.
        return lambda weights: self.train(x, y, weights)
