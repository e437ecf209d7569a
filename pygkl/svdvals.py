import logging

import numpy as np

from .factorizations import orthogonalize, upper_bidiagonal, ritz_error_bounds
from .operators import as_gkl_operator, default_threshold


logger = logging.getLogger(__name__)


# Termination states, all of them normal returns
INVARIANT_SUBSPACE = "invariant_subspace"
TARGET_COUNT = "target_count"
MAXITER = "maxiter"



def reorth_passes(reorth):
    """Normalizes the reorthogonalization flag and returns (flag, number of MGS passes).
    """
    # backward-compatible with bools
    if reorth is True:
        reorth = "mgs"
    if reorth is False:
        reorth = "none"
    if reorth not in {"none", "mgs", "mgs2"}:
        raise ValueError("reorth must be one of {'none','mgs','mgs2', True, False}.")

    passes = 0 if reorth == "none" else (1 if reorth == "mgs" else 2)
    return reorth, passes




def svdvals_gkl(A, nvals=6, v0=None, maxiter=None, beta_th=None, sigma_th=None, reorth=True,
                callback=None, rng=None, fro_norm=None, full_output=False):
    """
    Compute the largest singular values of A using the Golub–Kahan–Lanczos
    bidiagonalization method.

    Complete one-sided reorthogonalization (right vectors if m >= n, left vectors
    otherwise, as suggested by Simon and Zha) is used to avoid loss of convergence
    due to roundoff. After each step the Ritz values of the current bidiagonal
    matrix are recomputed together with error bounds, and the values whose bound is
    at most beta_th are taken as converged.

    The iteration stops when
      - beta_k <= beta_th: an invariant subspace has been found, and all Ritz
        values of the bidiagonal matrix are returned;
      - at least nvals values have converged;
      - maxiter steps have been taken (the values converged so far are returned).

    Parameters
    ----------
    A : ndarray, sparse matrix, scipy.sparse.linalg.LinearOperator or GKLOperator
        The m×n operator. Only A x and A^H y are used.
    nvals : int, default 6
        Number of singular values requested.
    v0 : ndarray, shape (n,), optional
        Nonzero starting vector, normalized internally. Default: standard normal.
    maxiter : int, optional
        Maximum number of steps. Default (and upper limit): min(m, n).
    beta_th : float, optional
        Threshold on beta below which an invariant subspace is deemed found, and
        on the error bounds below which a Ritz value is deemed converged.
        Default: 0.1*sqrt(eps) for the element type of A.
    sigma_th : float, optional
        Nominal convergence tolerance on the singular values. Accepted and reported
        but not used by the convergence test, which is gated by beta_th.
        Default: 0.1*sqrt(eps).
    reorth : {True, False, "mgs", "mgs2", "none"}, default True
        Reorthogonalization mode:
          - True or "mgs" : complete reorthogonalization, single-pass MGS
          - "mgs2"        : complete reorthogonalization, double-pass MGS
          - False or "none" : plain Lanczos recurrence
    callback : callable, optional
        Called after every step with a dict describing the current state.
    rng : int or numpy.random.Generator, optional
        Seed or generator for the default starting vector.
    fro_norm : float, optional
        Frobenius norm of A, used to seed the approximation error omega^2.
    full_output : bool, default False
        Also return a dict of diagnostics.

    Returns
    -------
    values : ndarray
        Converged singular value estimates in descending order. Not trimmed to
        nvals: if several values converge in the same step, all of them are
        returned, so the length can exceed nvals. On an invariant subspace all
        Ritz values are returned, which may be fewer than nvals.
    B : ndarray, shape (k, k)
        Upper bidiagonal matrix after the k steps taken.
    data : dict
        Only if full_output is True.
    """

    reorth, passes = reorth_passes(reorth)
    op = as_gkl_operator(A, fro_norm=fro_norm)
    m, n = op.shape
    kmax = min(m, n)

    # Check parameters
    if int(nvals) != nvals or nvals < 1:
        raise ValueError("nvals must be a positive integer.")
    if maxiter is None:
        maxiter = kmax
    if int(maxiter) != maxiter or maxiter < 1:
        raise ValueError("maxiter must be a positive integer.")
    maxiter = int(maxiter)
    if maxiter > kmax:
        logger.debug("maxiter = %d exceeds min(m, n), using %d", maxiter, kmax)
        maxiter = kmax
    if beta_th is None:
        beta_th = default_threshold(op.dtype)
    if sigma_th is None:
        sigma_th = default_threshold(op.dtype)
    if not beta_th > 0 or not sigma_th > 0:
        raise ValueError("beta_th and sigma_th must be positive.")

    # Starting vector
    if v0 is None:
        v0 = np.random.default_rng(rng).standard_normal(n)
    v0 = np.asarray(v0).reshape(-1)
    if v0.size != n:
        raise ValueError("Invalid starting vector: v0 has incompatible length with A.")
    if not np.all(np.isfinite(v0)):
        raise ValueError("Invalid starting vector: v0 has non-finite entries.")
    dtype = np.result_type(op.dtype, v0.dtype, float)
    p = v0.astype(dtype, copy=True)
    beta = np.linalg.norm(p)
    if beta == 0:
        raise ValueError("Invalid starting vector: v0 must be nonzero.")

    alphas = []
    betas = []
    alpha = np.inf
    u = None

    converged_vectors = []
    converged_values = np.zeros(0)
    converged_errors = np.zeros(0)
    sigma = np.zeros(0)
    dsigma = np.zeros(0)

    omega_sq = omega_sq0 = op.fro_norm()**2
    omega_sq_history = []
    status = MAXITER

    for k in range(1, maxiter + 1):

        # Purge right vectors against the previous ones
        if passes and m >= n:
            p = orthogonalize(p, converged_vectors, passes)
            beta = np.linalg.norm(p)
            if k > 1 and beta <= beta_th:
                # p lies in the span of the previous v's
                logger.info("Invariant subspace of dimension %d found", k - 1)
                converged_values, converged_errors = sigma, dsigma
                status = INVARIANT_SUBSPACE
                break

        v = p / beta

        # r = A v_k - beta_{k-1} u_{k-1}
        r = np.array(op.matvec(v), dtype=dtype)
        if k > 1:
            r -= betas[-1] * u

        # Purge left vectors against the previous ones
        if passes and m < n:
            r = orthogonalize(r, converged_vectors, passes)

        alpha = np.linalg.norm(r)
        breakdown = alpha <= beta_th
        if breakdown:
            # A v_k lies in the span of the previous u's, so there is no new
            # left vector. The step is kept with beta_k = 0, which makes B_k
            # carry the (near) zero singular value and ends the iteration.
            beta = 0.0
        else:
            u = r / alpha

            # p = A^H u_k - alpha_k v_k
            p = op.rmatvec(u) - alpha * v
            beta = np.linalg.norm(p)
        alphas.append(alpha)
        betas.append(beta)

        # Update Simon–Zha approximation error
        omega_sq -= alpha**2
        if len(betas) > 1:
            omega_sq -= betas[-2]**2
        omega_sq_history.append(omega_sq)

        # Error bars on the Ritz values
        B = upper_bidiagonal(alphas, betas)
        sigma, dsigma = ritz_error_bounds(B, alpha, beta)

        # Converged values are rederived from the current B every step
        is_converged = dsigma <= beta_th
        converged_values = sigma[is_converged]
        converged_errors = dsigma[is_converged]

        if passes and m >= n:
            converged_vectors.append(v)
        elif passes and not breakdown:
            converged_vectors.append(u)

        if callback is not None:
            callback({
                "k": k,
                "alpha": alpha,
                "beta": beta,
                "omega_sq": omega_sq,
                "ritz_values": sigma,
                "ritz_errors": dsigma,
                "n_converged": len(converged_values),
                "n_reorth_vectors": len(converged_vectors),
            })

        if beta <= beta_th:
            if k != kmax:
                # In exact arithmetic Lanczos ends with an invariant subspace of
                # dimension rank(A). Anything smaller is spanned by v0 alone, and
                # a different starting vector may reach more of the spectrum.
                logger.info("Invariant subspace of dimension %d found", k)
            converged_values, converged_errors = sigma, dsigma
            status = INVARIANT_SUBSPACE
            break

        if len(converged_values) >= nvals:
            status = TARGET_COUNT
            break

    niter = len(alphas)
    B = upper_bidiagonal(alphas, betas)

    order = np.argsort(-converged_values, kind="stable")
    values = converged_values[order]
    errors = converged_errors[order]

    percent = 100.0*omega_sq/omega_sq0 if omega_sq0 > 0 else 0.0
    logger.info("Convergence summary")
    logger.info("Number of iterations: %d", niter)
    logger.info("Final approximation error: omega^2 = %g (%g%%)", omega_sq, percent)
    logger.info("Final Lanczos beta = %g", beta)

    if not full_output:
        return values, B

    data = {
        "niter": niter,
        "status": status,
        "errors": errors,
        "ritz_values": sigma,
        "ritz_errors": dsigma,
        "alphas": np.asarray(alphas),
        "betas": np.asarray(betas),
        "omega_sq": omega_sq,
        "omega_sq0": omega_sq0,
        "omega_sq_history": np.asarray(omega_sq_history),
        "beta": beta,
        "n_reorth_vectors": len(converged_vectors),
        "beta_th": beta_th,
        "sigma_th": sigma_th,
        "reorth": reorth,
    }

    return values, B, data
