import numpy as np

from plotter import plot_confusion_matrix, plot_error_curves


def test_error_curves_are_written(tmp_path):
    plot_error_curves([1, 2], [(10.0, 1.0), (5.0, 0.5)], [(12.0, 2.0), (8.0, 1.0)], tmp_path / "errors.pdf")
    assert (tmp_path / "errors.pdf").exists()


def test_confusion_matrix_is_written(tmp_path):
    plot_confusion_matrix(np.zeros((2, 2)), np.zeros((2, 2)), 2, "test", tmp_path / "confusion.pdf")
    assert (tmp_path / "confusion.pdf").exists()
