import matplotlib.pyplot as plt
import numpy as np



def plot_convergence(data, plot_path=None):
    """Generates a plot of the convergence data returned by svdvals_gkl(..., full_output=True).

    Left: relative approximation error omega^2/omega_0^2 per step.
    Right: final Ritz values against their error bounds, with the beta_th line.
    """

    fig, axs = plt.subplots(1, 2, figsize=(12, 5))

    ### approximation error
    history = data["omega_sq_history"]
    steps = np.arange(1, len(history) + 1)
    if data["omega_sq0"] > 0:
        rel = np.abs(history)/data["omega_sq0"]
    else:
        rel = np.abs(history)
    axs[0].semilogy(steps, np.maximum(rel, np.finfo(float).tiny), marker="o", markersize=3)
    axs[0].set_xlabel("iteration $k$")
    axs[0].set_ylabel("$\\omega_k^2 / \\omega_0^2$")
    axs[0].set_title("Approximation error ({} steps, {})".format(data["niter"], data["status"]))

    ### Ritz values and error bounds
    sigma = data["ritz_values"]
    dsigma = data["ritz_errors"]
    converged = dsigma <= data["beta_th"]
    floor = np.finfo(float).tiny
    axs[1].scatter(sigma[~converged], np.maximum(dsigma[~converged], floor), color="k", marker="o", s=15.0, label="not converged")
    axs[1].scatter(sigma[converged], np.maximum(dsigma[converged], floor), color="red", marker="x", s=25.0, label="converged")
    axs[1].axhline(data["beta_th"], linestyle="dashed", color="k")
    axs[1].set_yscale("log")
    axs[1].set_xlabel("Ritz value $\\sigma_i$")
    axs[1].set_ylabel("error bound $\\Delta\\sigma_i$")
    axs[1].legend()

    fig.tight_layout()

    if plot_path is not None:
        fig.savefig(plot_path, dpi=150)

    return fig
