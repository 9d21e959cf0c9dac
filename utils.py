import numpy as np
import numba


def classification_error(predictions, y):
    # Percentage of wrong predictions.
    return (np.asarray(predictions).reshape(-1) != np.asarray(y).reshape(-1)).mean() * 100.0


def errors_to_latex_table(train_errors, test_errors, parameters):
    # Print a latex table based on the given parameters, train errors, and test errors.
    for i, k in enumerate(parameters):
        (train_error, train_std), (test_error, test_std) = train_errors[i], test_errors[i]
        print(f"\t{k} & ${train_error} \\pm {train_std}$ & ${test_error} \\pm {test_std}$ \\\\")


@numba.njit()
def generate_absolute_confusion_matrix(predictions, y, num_classes):
    """
    Row i holds the percentage of examples of class i that were predicted as class j. The diagonal stays zero, and
    rows of classes without examples stay zero.
    """
    confusion_matrix = np.zeros((num_classes, num_classes), dtype=np.float64)
    counts = np.zeros(num_classes, dtype=np.float64)
    for i in range(predictions.shape[0]):
        counts[y[i]] += 1.0
        if y[i] != predictions[i]:
            confusion_matrix[y[i], predictions[i]] += 1.0
    for i in range(num_classes):
        if counts[i] > 0.0:
            for j in range(num_classes):
                confusion_matrix[i, j] = confusion_matrix[i, j] * 100.0 / counts[i]
    return confusion_matrix


def merge_confusion_matrices(confusion_matrices):
    # Merge multiple confusion matrices into a single one containing the mean, and one containing the std. deviations.
    merged_matrix = np.around(np.average(np.array(confusion_matrices), axis=0), 2)
    std_matrix = np.around(np.array(confusion_matrices).std(axis=0), 2)
    return merged_matrix, std_matrix


def matrices_to_latex_table(mean_matrix, std_matrix):
    # Generate a single latex table for a matrix containing the confusion means, and one containing the std. deviations.
    for i in range(mean_matrix.shape[0]):
        row_string = [f"${mean_matrix[i][j]} \\pm {std_matrix[i][j]}$" for j in range(mean_matrix.shape[1])]
        row_string = " & ".join(row_string)
        print("\t", row_string, "\\\\")
