import argparse
import logging
from pathlib import Path
import numpy as np
from rich.logging import RichHandler
from tqdm import tqdm
from adaboost import BoostingMulticlassTrainer
from data import read_data, generate_blobs, random_split_indices
from decision_tree import DecisionTreeTrainer
from plotter import plot_confusion_matrix, plot_error_curves
from serialization import save_ensemble
from utils import classification_error, generate_absolute_confusion_matrix, merge_confusion_matrices, \
    errors_to_latex_table, matrices_to_latex_table

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = [1, 5, 10, 25, 50]
DEFAULT_SPLITS = 20
TRAINING_PROPORTION = 0.8


def setup(data_fn=None, num_labels=None):
    # Load the data set, or generate a synthetic one if no file was given.
    if data_fn is None:
        x_data, y_data = generate_blobs(500, num_labels or 3, num_features=2, spread=1.5)
    else:
        x_data, y_data = read_data(data_fn)
    num_labels = num_labels or int(y_data.max()) + 1
    return x_data, y_data, num_labels


def task_boosting_rounds(x_data, y_data, num_labels, rounds, num_splits=DEFAULT_SPLITS, num_leaves=2):
    """
    Trains boosted trees with different numbers of boosting rounds on random train/test splits.
    :return: (train errors, test errors), each a list of (mean, std) pairs with one entry per value in rounds.
    """
    indices = np.arange(0, x_data.shape[0])
    index_splits = [random_split_indices(indices, TRAINING_PROPORTION) for i in range(num_splits)]
    train_errors = {i: [] for i in range(len(rounds))}
    test_errors = {i: [] for i in range(len(rounds))}
    weak_learner = DecisionTreeTrainer(num_labels, num_leaves=num_leaves)
    for index, num_rounds in enumerate(rounds):
        logger.info("Evaluating %d boosting rounds", num_rounds)
        trainer = BoostingMulticlassTrainer(num_weak_learners=num_rounds, train_weak_learner=weak_learner)
        for split in tqdm(range(num_splits)):
            train_indices, test_indices = index_splits[split]
            classifier = trainer.train(x_data[train_indices], y_data[train_indices], num_labels)
            train_errors[index].append(
                classification_error(classifier.predict(x_data[train_indices]), y_data[train_indices]))
            test_errors[index].append(
                classification_error(classifier.predict(x_data[test_indices]), y_data[test_indices]))
    # Analyse results.
    train_errors_mean_std = [(np.around(np.average(errors), 3), np.around(np.std(errors), 3)) for errors in
                             train_errors.values()]
    test_errors_mean_std = [(np.around(np.average(errors), 3), np.around(np.std(errors), 3)) for errors in
                            test_errors.values()]
    return train_errors_mean_std, test_errors_mean_std


def task_confusion(x_data, y_data, num_labels, num_rounds, num_splits=DEFAULT_SPLITS, num_leaves=2):
    # Merged confusion matrix of the boosted classifier over random train/test splits.
    indices = np.arange(0, x_data.shape[0])
    trainer = BoostingMulticlassTrainer(num_weak_learners=num_rounds,
                                        train_weak_learner=DecisionTreeTrainer(num_labels, num_leaves=num_leaves))
    confusion_matrices, classifier = [], None
    for _ in tqdm(range(num_splits)):
        train_indices, test_indices = random_split_indices(indices, TRAINING_PROPORTION)
        classifier = trainer.train(x_data[train_indices], y_data[train_indices], num_labels)
        predictions = classifier.predict(x_data[test_indices])
        confusion_matrices.append(generate_absolute_confusion_matrix(
            predictions, y_data[test_indices].astype(np.int64), num_labels))
    mean_matrix, std_matrix = merge_confusion_matrices(confusion_matrices)
    return mean_matrix, std_matrix, classifier


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Evaluate boosted decision trees (multiclass AdaBoost).")
    parser.add_argument("--data", type=Path, default=None,
                        help="Whitespace separated data file with the label in the first column. "
                             "Synthetic clusters are used if omitted.")
    parser.add_argument("--labels", type=int, default=None, help="Number of classes (default: inferred).")
    parser.add_argument("--rounds", type=int, nargs="+", default=DEFAULT_ROUNDS,
                        help="Numbers of boosting rounds to evaluate.")
    parser.add_argument("--splits", type=int, default=DEFAULT_SPLITS, help="Number of random train/test splits.")
    parser.add_argument("--leaves", type=int, default=2, help="Leaves per weak tree (2 means decision stumps).")
    parser.add_argument("--plot-dir", type=Path, default=None, help="Directory to write plots to.")
    parser.add_argument("--save-model", type=Path, default=None,
                        help="Write the last ensemble trained for the confusion matrix to this JSON file.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every boosting iteration.")
    return parser.parse_args(argv)


def setup_logging(verbose=False):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format="%(message)s",
                        datefmt="[%X]", handlers=[RichHandler(show_path=False, rich_tracebacks=True)])


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.verbose)
    x_data, y_data, num_labels = setup(args.data, args.labels)
    logger.info("Loaded %d examples with %d features and %d classes", x_data.shape[0], x_data.shape[1], num_labels)
    train_errors, test_errors = task_boosting_rounds(x_data, y_data, num_labels, args.rounds, args.splits,
                                                     args.leaves)
    errors_to_latex_table(train_errors, test_errors, args.rounds)
    mean_matrix, std_matrix, classifier = task_confusion(x_data, y_data, num_labels, max(args.rounds), args.splits,
                                                         args.leaves)
    matrices_to_latex_table(mean_matrix, std_matrix)
    if args.plot_dir is not None:
        args.plot_dir.mkdir(parents=True, exist_ok=True)
        plot_error_curves(args.rounds, train_errors, test_errors, args.plot_dir / "boosting_errors.pdf")
        plot_confusion_matrix(mean_matrix, std_matrix, num_labels, "Boosted trees",
                              args.plot_dir / "boosting_confusion_matrix.pdf")
    if args.save_model is not None:
        save_ensemble(classifier, args.save_model)
    return train_errors, test_errors


if __name__ == '__main__':
    main()
