import numpy as np
import pytest

from decision_tree import DecisionTree, DecisionTreeTrainer, find_best_split, weighted_gini_impurity


def test_weighted_gini_impurity():
    ys = np.array([0, 1, 1], dtype=np.int64)
    assert weighted_gini_impurity(ys, np.array([0.5, 0.25, 0.25]), 2) == pytest.approx(0.5)
    assert weighted_gini_impurity(ys, np.array([1.0, 0.0, 0.0]), 2) == pytest.approx(0.0)
    assert weighted_gini_impurity(ys, np.zeros(3), 2) == 0.0


def test_find_best_split_on_separable_feature():
    xs = np.array([[5.0, 0.0], [5.0, 1.0], [5.0, 2.0], [5.0, 3.0]])
    ys = np.array([0, 0, 1, 1], dtype=np.int64)
    feature, value = find_best_split(xs, ys, np.full(4, 0.25), 2)
    assert feature == 1
    assert value == 2.0


def test_find_best_split_without_gain():
    xs = np.array([[0.0], [1.0], [2.0]])
    ys = np.array([1, 1, 1], dtype=np.int64)
    feature, _ = find_best_split(xs, ys, np.full(3, 1.0 / 3.0), 2)
    assert feature == -1


def test_stump_classifies_separable_data():
    x = np.array([[0.0], [1.0], [2.0], [3.0]])
    y = np.array([0, 0, 1, 1])
    tree = DecisionTree(2, 2).fit(x, y)
    assert tree.root.split_feature == 0
    assert tree.root.split_value == 2.0
    assert tree.predict(x).tolist() == [0, 0, 1, 1]
    assert tree.score(np.array([3.0])) == pytest.approx(np.array([0.0, 1.0]))


def test_zero_weight_instances_are_ignored():
    x = np.array([[0.0], [1.0], [2.0], [3.0]])
    y = np.array([0, 0, 1, 0])
    weights = np.array([1.0, 1.0, 1.0, 0.0]) / 3.0
    tree = DecisionTree(2, 2).fit(x, y, weights)
    assert tree.root.split_value == 2.0
    assert tree.classify(np.array([3.0])) == 1


def test_single_leaf_predicts_weighted_majority():
    x = np.array([[0.0], [1.0], [2.0]])
    y = np.array([0, 1, 1])
    tree = DecisionTree(3, 1).fit(x, y, np.array([0.8, 0.1, 0.1]))
    assert tree.root.is_leaf()
    assert tree.predict(x).tolist() == [0, 0, 0]
    assert tree.score(x[0]) == pytest.approx(np.array([0.8, 0.2, 0.0]))


def test_pure_labels_are_not_split():
    x = np.array([[0.0], [1.0], [2.0]])
    tree = DecisionTree(2, 4).fit(x, np.array([1, 1, 1]))
    assert tree.root.is_leaf()
    assert tree.classify(np.array([10.0])) == 1


def test_three_leaves_separate_three_classes():
    x = np.arange(9, dtype=np.float64).reshape(-1, 1)
    y = np.array([0, 0, 0, 1, 1, 1, 2, 2, 2])
    tree = DecisionTree(3, 3).fit(x, y)
    assert tree.predict(x).tolist() == y.tolist()
    for features in x:
        assert tree.score(features).sum() == pytest.approx(1.0)


def test_leaf_budget_expands_nodes_in_creation_order():
    # Both root children have the same gain, the left one was created first.
    x = np.array([[0.0, 0.0], [0.0, 0.0], [0.0, 1.0], [0.0, 1.0], [1.0, 0.0], [1.0, 0.0], [1.0, 1.0], [1.0, 1.0]])
    y = np.array([0, 0, 1, 1, 2, 2, 3, 3])
    tree = DecisionTree(4, 3).fit(x, y)
    assert tree.root.split_feature == 0
    assert not tree.root.left_child.is_leaf()
    assert tree.root.right_child.is_leaf()
    assert tree.predict(x).tolist() == [0, 0, 1, 1, 2, 2, 2, 2]


def test_dict_round_trip_keeps_predictions():
    x = np.arange(9, dtype=np.float64).reshape(-1, 1)
    y = np.array([0, 0, 0, 1, 1, 1, 2, 2, 2])
    tree = DecisionTree(3, 3).fit(x, y)
    restored = DecisionTree.from_dict(tree.to_dict())
    assert restored.num_labels == 3
    assert restored.predict(x).tolist() == tree.predict(x).tolist()


def test_trainer_weak_learner_closure():
    x = np.array([[0.0], [1.0], [2.0], [3.0]])
    y = np.array([0, 0, 1, 1])
    train = DecisionTreeTrainer(2).weak_learner(x, y)
    tree = train(np.full(4, 0.25))
    assert isinstance(tree, DecisionTree)
    assert tree.num_leaves == 2
    assert tree.predict(x).tolist() == [0, 0, 1, 1]
