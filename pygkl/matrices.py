import numpy as np

import scipy.sparse as sps



def diagonal_operator(entries):
    """Constructs a sparse square diagonal matrix. Its singular values are the
    absolute values of the entries.
    """
    entries = np.asarray(entries)
    return sps.diags(entries, 0, shape=(len(entries), len(entries)), format="csr")



def random_upper_triangular(n, rng=None):
    """Dense n×n upper triangular matrix with uniform [0, 1) entries.
    """
    rng = np.random.default_rng(rng)
    return np.triu(rng.random((n, n)))



def first_order_difference(N):
    """Constructs the sparse (N-1)×N matrix that extracts the (1D) discrete gradient
    of an input signal, with no boundary condition. Wide, so m < n.
    """
    assert N >= 2, "Need at least two grid points."

    d_mat = sps.eye(N)
    d_mat.setdiag(-1, k=1)
    d_mat = d_mat.tolil()
    d_mat = d_mat[:-1, :]

    return sps.csr_matrix(d_mat)



def first_order_difference_svdvals(N):
    """Exact singular values 2 sin(j pi / (2N)), j = 1, ..., N-1, of
    first_order_difference(N), in descending order.
    """
    j = np.arange(N - 1, 0, -1)
    return 2.0*np.sin(j*np.pi/(2.0*N))
