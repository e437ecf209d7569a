from .svdvals import svdvals_gkl
from .operators import GKLOperator, as_gkl_operator, default_threshold
from .factorizations import orthogonalize, upper_bidiagonal, ritz_error_bounds
