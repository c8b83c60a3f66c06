#!/usr/bin/env python3
"""Portfolio optimization with gurobiqp.

Classic mean-variance optimization:
    maximize    μ^T w - (γ/2) w^T Σ w
    subject to  1^T w = 1              (budget constraint)
                0 <= w <= w_max        (long-only, position limits)

written as the minimization of (γ/2) w^T Σ w - μ^T w. The same dense
adapter is reused across risk-aversion levels to trace the efficient
frontier.
"""

import jax
import jax.numpy as jnp
import numpy as np
from typing import Tuple

import gurobiqp as gq


def generate_market_data(n_assets: int = 10, n_periods: int = 252, seed: int = 42) -> Tuple[np.ndarray, np.ndarray]:
    """Generate synthetic expected returns and covariance.
    
    Args:
        n_assets: Number of assets.
        n_periods: Number of time periods for return history.
        seed: Random seed.
        
    Returns:
        Tuple of (expected_returns, covariance_matrix).
    """
    key = jax.random.PRNGKey(seed)
    key1, key2, key3 = jax.random.split(key, 3)

    n_factors = min(3, n_assets // 2)
    factor_loadings = jax.random.normal(key1, (n_assets, n_factors)) * 0.3
    factor_returns = jax.random.normal(key2, (n_periods, n_factors)) * 0.02
    idiosyncratic_vol = 0.01 + 0.02 * jax.random.uniform(key3, (n_assets,))
    idiosyncratic_returns = jax.random.normal(key3, (n_periods, n_assets)) * idiosyncratic_vol

    returns = factor_returns @ factor_loadings.T + idiosyncratic_returns
    returns = returns + (0.05 + 0.10 * jax.random.uniform(key1, (n_assets,))) / 252

    return np.asarray(jnp.mean(returns, axis=0)), np.asarray(jnp.cov(returns.T))


def efficient_frontier(mu: np.ndarray, Sigma: np.ndarray, gammas, w_max: float = 0.4):
    """Solve the mean-variance problem for each risk aversion in ``gammas``."""
    n = mu.shape[0]
    points = []
    with gq.GurobiDense(n, 1, 0) as qp:
        qp.warm_start(gq.WarmStatus.DUAL)
        for gamma in gammas:
            ok = qp.solve(
                gamma * Sigma, -mu,
                np.ones((1, n)), np.ones(1),
                np.zeros((0, n)), np.zeros(0),
                np.zeros(n), np.full(n, w_max),
            )
            if not ok:
                print(f"gamma={gamma:g}: {qp.status_description()}")
                continue
            w = qp.result()
            points.append((gamma, float(mu @ w), float(np.sqrt(w @ Sigma @ w)), w))
    return points


def main():
    mu, Sigma = generate_market_data()
    print("Portfolio optimization with gurobiqp")
    print("=" * 40)
    for gamma, ret, risk, w in efficient_frontier(mu, Sigma, [1.0, 10.0, 100.0, 1000.0]):
        print(f"gamma={gamma:8.1f}  return={ret:.5f}  risk={risk:.5f}  max weight={w.max():.3f}")


if __name__ == "__main__":
    main()
