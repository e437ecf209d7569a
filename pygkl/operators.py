import logging

import numpy as np
import scipy.sparse as sps
from scipy.sparse.linalg import LinearOperator, aslinearoperator
from scipy.sparse.linalg import norm as sparse_norm


logger = logging.getLogger(__name__)



def working_dtype(dtype):
    """Promotes integer/bool element types to float64, keeps inexact ones.
    """
    dtype = np.dtype(dtype)
    if np.issubdtype(dtype, np.inexact):
        return dtype
    return np.dtype(np.float64)



def default_threshold(dtype):
    """Default threshold 0.1*sqrt(eps) for the precision of the given element type.
    """
    return 0.1*np.sqrt(np.finfo(working_dtype(dtype)).eps)




class GKLOperator:
    """Represents the operator A (m×n) consumed by the GKL estimator.

    Exposes the shape, A x, A^H y, the element type, and the Frobenius norm of A.

    A: dense ndarray, scipy sparse matrix, or scipy LinearOperator.
    fro_norm: Frobenius norm of A, if known. Only needed for matrix-free operators.
    """

    def __init__(self, A, fro_norm=None):

        # Bind
        self.A = A
        self.op = aslinearoperator(A)
        self.M = self.op.shape[0]
        self.N = self.op.shape[1]
        self.shape = (self.M, self.N)
        self.dtype = working_dtype(self.op.dtype)
        self.eps = np.finfo(self.dtype).eps

        if fro_norm is not None:
            if not np.isfinite(fro_norm) or fro_norm < 0:
                raise ValueError("fro_norm must be a nonnegative finite number.")
        self._fro_norm = fro_norm



    def matvec(self, x):
        """Evaluates A x.
        """
        return np.asarray(self.op.matvec(x)).reshape(-1)



    def rmatvec(self, y):
        """Evaluates A^H y.
        """
        return np.asarray(self.op.rmatvec(y)).reshape(-1)



    def fro_norm(self, block_size=64):
        """Returns the Frobenius norm of A, computed once and cached.

        For matrix-free operators without a given norm, A is applied to blocks of
        identity columns, which costs N products.
        """
        if self._fro_norm is not None:
            return self._fro_norm

        if sps.issparse(self.A):
            self._fro_norm = float(sparse_norm(self.A, "fro"))
        elif isinstance(self.A, LinearOperator):
            logger.debug("Computing Frobenius norm of a %d x %d operator from %d products", self.M, self.N, self.N)
            total = 0.0
            for start in range(0, self.N, block_size):
                stop = min(start + block_size, self.N)
                E = np.zeros((self.N, stop - start), dtype=self.dtype)
                E[np.arange(start, stop), np.arange(stop - start)] = 1.0
                total += np.linalg.norm(self.op.matmat(E), "fro")**2
            self._fro_norm = float(np.sqrt(total))
        else:
            self._fro_norm = float(np.linalg.norm(np.asarray(self.A), "fro"))

        return self._fro_norm




def as_gkl_operator(A, fro_norm=None):
    """Wraps A as a GKLOperator, passing GKLOperator instances through.
    """
    if isinstance(A, GKLOperator):
        if fro_norm is not None:
            return GKLOperator(A.A, fro_norm=fro_norm)
        return A
    return GKLOperator(A, fro_norm=fro_norm)
