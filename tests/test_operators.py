# tests/test_operators.py
import numpy as np
import pytest
import scipy.sparse as sps
from scipy.sparse.linalg import LinearOperator

from pygkl.operators import GKLOperator, as_gkl_operator, default_threshold



def test_frobenius_norm_agrees_across_representations():
    rng = np.random.default_rng(3)
    A = rng.standard_normal((70, 90))
    expected = np.linalg.norm(A, "fro")
    matrix_free = LinearOperator(A.shape, matvec=lambda x: A @ x, rmatvec=lambda y: A.T @ y, dtype=A.dtype)

    assert GKLOperator(A).fro_norm() == pytest.approx(expected, rel=1e-12)
    assert GKLOperator(sps.csr_matrix(A)).fro_norm() == pytest.approx(expected, rel=1e-12)
    assert GKLOperator(matrix_free).fro_norm() == pytest.approx(expected, rel=1e-12)
    assert GKLOperator(matrix_free, fro_norm=2.0).fro_norm() == 2.0



def test_products_and_shape():
    A = np.arange(12.0).reshape(3, 4) + 1j
    op = GKLOperator(A)

    x = np.ones(4)
    y = np.ones(3)
    assert op.shape == (3, 4)
    np.testing.assert_allclose(op.matvec(x), A @ x)
    np.testing.assert_allclose(op.rmatvec(y), A.conj().T @ y)



def test_element_type_and_threshold():
    op = GKLOperator(np.eye(4, dtype=int))
    assert op.dtype == np.float64
    assert op.eps == np.finfo(np.float64).eps

    assert default_threshold(np.float64) == pytest.approx(0.1*np.sqrt(np.finfo(np.float64).eps))
    assert default_threshold(np.float32) > default_threshold(np.float64)
    assert default_threshold(np.complex128) == default_threshold(np.float64)



def test_as_gkl_operator_passes_wrapped_operators_through():
    op = GKLOperator(np.eye(3))
    assert as_gkl_operator(op) is op
    assert as_gkl_operator(op, fro_norm=5.0).fro_norm() == 5.0

    with pytest.raises(ValueError):
        GKLOperator(np.eye(3), fro_norm=-1.0)
