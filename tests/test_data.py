import numpy as np

from data import generate_blobs, random_split_indices, read_data


def test_read_data_splits_off_label_column(tmp_path):
    fn = tmp_path / "train.dat"
    fn.write_text("1 0.5 2.0\n0 -1.0 3.5\n2 4.0 0.0\n")
    x, y = read_data(fn)
    assert x.shape == (3, 2)
    assert x.dtype == np.float64
    assert y.tolist() == [1, 0, 2]


def test_random_split_indices_are_disjoint():
    indices = np.arange(50)
    train, test = random_split_indices(indices, 0.8)
    assert len(train) == 40
    assert len(test) == 10
    assert set(train.tolist()).isdisjoint(test.tolist())
    assert sorted(np.concatenate([train, test]).tolist()) == indices.tolist()


def test_generate_blobs():
    x, y = generate_blobs(30, 4, num_features=3)
    assert x.shape == (30, 3)
    assert y.shape == (30,)
    assert y.min() >= 0 and y.max() < 4
