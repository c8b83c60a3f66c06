"""High-level entry point: solve QPData with Gurobi and return a Solution."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import gurobipy as gp
import jax.numpy as jnp
import numpy as np

from gurobiqp.qp_data import QPData, Solution
from gurobiqp.solvers.common import GurobiCommon
from gurobiqp.solvers.dense import GurobiDense
from gurobiqp.solvers.sparse import GurobiSparse
from gurobiqp.status import WarmStatus, status_name
from gurobiqp.utils.checking import check_tolerance


@dataclass(frozen=True)
class GurobiOptions:
    """Solver configuration applied before each solve.

    Args:
        verbose: Print Gurobi's log and a one-line summary.
        feasibility_tol: Primal feasibility tolerance, None keeps Gurobi's default.
        optimality_tol: Dual feasibility tolerance, None keeps Gurobi's default.
        warm_start: Warm-start strategy.
        time_limit: Time limit in seconds, None for no limit.
        params: Extra Gurobi model parameters, e.g. ``{"Method": 2}``.
        env_params: Parameters applied to the environment before it starts.

    Example:
        >>> opts = GurobiOptions(feasibility_tol=1e-8, params={"Threads": 1})
    """
    verbose: bool = False
    feasibility_tol: Optional[float] = None
    optimality_tol: Optional[float] = None
    warm_start: WarmStatus = WarmStatus.DEFAULT
    time_limit: Optional[float] = None
    params: Dict[str, Any] = field(default_factory=dict)
    env_params: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.feasibility_tol is not None:
            check_tolerance("feasibility_tol", self.feasibility_tol)
        if self.optimality_tol is not None:
            check_tolerance("optimality_tol", self.optimality_tol)
        if self.time_limit is not None and self.time_limit <= 0:
            raise ValueError(f"time_limit must be positive, got {self.time_limit}")

    def apply(self, solver: GurobiCommon) -> None:
        """Push these options into a solver instance."""
        solver.display_output(self.verbose)
        if self.feasibility_tol is not None:
            solver.feasibility_tolerance(self.feasibility_tol)
        if self.optimality_tol is not None:
            solver.optimality_tolerance(self.optimality_tol)
        solver.warm_start(self.warm_start)
        if self.time_limit is not None:
            solver.set_param("TimeLimit", self.time_limit)
        for name, value in self.params.items():
            solver.set_param(name, value)


def solve_qp(qp_data: QPData, options: Optional[GurobiOptions] = None) -> Solution:
    """Solve QP data with Gurobi.

    Sparse data goes through ``GurobiSparse``, dense data through
    ``GurobiDense``. Unsuccessful solves do not raise; the returned
    solution carries NaN vectors and the Gurobi status name.

    Args:
        qp_data: Problem built with ``build_qp_data``.
        options: Solver configuration.

    Returns:
        Solution object with optimal values and solver information.
    """
    options = options or GurobiOptions()
    solver_cls = GurobiSparse if qp_data.is_sparse else GurobiDense

    with solver_cls(
        qp_data.n_vars,
        qp_data.n_eq,
        qp_data.n_ineq,
        verbose=options.verbose,
        env_params=options.env_params,
    ) as solver:
        options.apply(solver)
        solver.solve(
            qp_data.Q, qp_data.q,
            qp_data.A_eq, qp_data.b_eq,
            qp_data.A_ineq, qp_data.b_ineq,
            qp_data.lb, qp_data.ub,
        )

        info = {
            "iterations": solver.iter(),
            "simplex_iterations": solver.simplex_iterations,
            "runtime": solver.runtime,
            "status_code": int(solver.status),
            "status_description": solver.status_description(),
            "solver": "gurobi",
        }

        if solver.success():
            x = jnp.asarray(solver.result())
            dual_eq = jnp.asarray(solver.dual_eq())
            dual_ineq = jnp.asarray(solver.dual_ineq())
            obj_value = solver.objective_value
        else:
            x = jnp.full(qp_data.n_vars, jnp.nan)
            dual_eq = jnp.full(qp_data.n_eq, jnp.nan)
            dual_ineq = jnp.full(qp_data.n_ineq, jnp.nan)
            obj_value = float("inf")

        status = status_name(solver.status)

    if options.verbose:
        print(f"gurobiqp: {status} after {info['iterations']} barrier iterations, objective {obj_value:.6g}")

    return Solution(
        status=status,
        obj_value=obj_value,
        x=x,
        dual_eq=dual_eq,
        dual_ineq=dual_ineq,
        info=info,
    )


def check_gurobi_available() -> bool:
    """Check if a Gurobi environment can be started.

    Returns:
        True if gurobipy is installed and a licence is usable, False otherwise.
    """
    try:
        env = gp.Env(empty=True)
        env.setParam("OutputFlag", 0)
        env.start()
        env.dispose()
        return True
    except gp.GurobiError:
        return False


def evaluate_objective(qp_data: QPData, x: Any) -> float:
    """Evaluate (1/2) x^T Q x + q^T x for a candidate point."""
    x = np.asarray(x, dtype=np.float64)
    return float(0.5 * x @ (qp_data.Q @ x) + qp_data.q @ x)
