# tests/test_matrices.py
import numpy as np

from pygkl.matrices import (
    diagonal_operator,
    random_upper_triangular,
    first_order_difference,
    first_order_difference_svdvals,
)



def test_first_order_difference_singular_values():
    for N in [2, 5, 20]:
        D = first_order_difference(N)
        assert D.shape == (N - 1, N)
        np.testing.assert_allclose(
            first_order_difference_svdvals(N),
            np.linalg.svd(D.toarray(), compute_uv=False),
            atol=1e-12,
        )



def test_diagonal_and_triangular():
    D = diagonal_operator([1.0, -2.0, 3.0])
    np.testing.assert_array_equal(D.toarray(), np.diag([1.0, -2.0, 3.0]))

    T = random_upper_triangular(10, rng=0)
    assert T.shape == (10, 10)
    np.testing.assert_array_equal(np.tril(T, k=-1), np.zeros((10, 10)))
