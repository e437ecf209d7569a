import numpy as np
from scipy.linalg import svd



def orthogonalize(vec, basis, passes=1):
    """Orthogonalize 'vec' against the vectors in 'basis' using MGS, 'passes' times.

    The vectors in 'basis' are assumed to have unit norm and are visited in the
    order they were accumulated. 'vec' is modified in place and returned.
    """
    if len(basis) == 0:
        return vec
    for _ in range(passes):
        for w in basis:
            vec -= np.vdot(w, vec) * w
    return vec



def upper_bidiagonal(alphas, betas):
    """Builds the k×k upper bidiagonal matrix with alphas on the diagonal and
    betas[:k-1] on the superdiagonal.
    """
    alphas = np.asarray(alphas)
    k = len(alphas)
    if len(betas) < k - 1:
        raise ValueError("Need at least k-1 betas to build a k×k bidiagonal matrix.")

    B = np.zeros((k, k), dtype=np.result_type(alphas, float))
    if k == 0:
        return B
    B[np.arange(k), np.arange(k)] = alphas
    B[np.arange(k - 1), np.arange(1, k)] = np.asarray(betas)[:k - 1]
    return B



def ritz_error_bounds(B, alpha, beta):
    """
    Ritz values of the bidiagonal B together with error bounds on each of them.

    The bound for the i-th Ritz value is taken from the last entries of its left
    and right singular vectors,

        dsigma_i = min( d |U[-1, i]|, d |Vt[i, -1]| ),   d = sqrt(alpha * beta),

    where alpha and beta are the most recent Lanczos coefficients.

    Parameters
    ----------
    B : ndarray, shape (k, k)
        Upper bidiagonal matrix from the first k steps.
    alpha : float
        Latest diagonal entry alpha_k.
    beta : float
        Latest norm beta_k (the not yet used superdiagonal entry).

    Returns
    -------
    sigma : ndarray, shape (k,)
        Ritz values in descending order.
    dsigma : ndarray, shape (k,)
        Error bounds aligned with sigma.
    """
    U, sigma, Vt = svd(B)
    d = np.sqrt(alpha * beta)
    e1 = np.abs(U[-1, :])
    e2 = np.abs(Vt[:, -1])
    dsigma = np.minimum(d * e1, d * e2)
    return sigma, dsigma
