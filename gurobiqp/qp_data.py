"""QP problem and solution containers.

Represents the problem:
    minimize    (1/2) x^T Q x + q^T x
    subject to  A_eq x = b_eq
               A_ineq x <= b_ineq
               lb <= x <= ub
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import jax.numpy as jnp
import numpy as np
from jax import tree_util

from gurobiqp.utils.checking import check_bounds, check_finite_arrays, check_problem_dimensions
from gurobiqp.utils.shapes import (
    as_dense_matrix,
    as_dense_vector,
    as_sparse_matrix,
    is_sparse,
    vector_length,
)


@dataclass(frozen=True)
class QPData:
    """Standard quadratic program data.
    
    Args:
        Q: Quadratic cost matrix (n x n).
        q: Linear cost vector (n,).
        A_eq: Equality constraint matrix (m_eq x n).
        b_eq: Equality constraint vector (m_eq,).
        A_ineq: Inequality constraint matrix (m_ineq x n).
        b_ineq: Inequality constraint vector (m_ineq,).
        lb: Lower bounds (n,), -inf for unbounded.
        ub: Upper bounds (n,), +inf for unbounded.
        n_vars: Number of variables.
        n_eq: Number of equality constraints.
        n_ineq: Number of inequality constraints.
        is_sparse: Whether the matrices are ``scipy.sparse`` (CSC) matrices.
    """
    Q: Any
    q: np.ndarray
    A_eq: Any
    b_eq: np.ndarray
    A_ineq: Any
    b_ineq: np.ndarray
    lb: np.ndarray
    ub: np.ndarray
    n_vars: int
    n_eq: int
    n_ineq: int
    is_sparse: bool = False


# Register QPData as JAX pytree
tree_util.register_pytree_node(
    QPData,
    lambda qp: (
        (qp.Q, qp.q, qp.A_eq, qp.b_eq, qp.A_ineq, qp.b_ineq, qp.lb, qp.ub),
        {"n_vars": qp.n_vars, "n_eq": qp.n_eq, "n_ineq": qp.n_ineq, "is_sparse": qp.is_sparse},
    ),
    lambda aux, children: QPData(*children, **aux),
)


@dataclass(frozen=True)
class Solution:
    """Solution returned by ``solve_qp``.
    
    Args:
        status: Lower-case Gurobi status name, e.g. "optimal" or "infeasible".
        obj_value: Optimal objective value, inf when no solution is available.
        x: Primal solution.
        dual_eq: Dual values of the equality constraints.
        dual_ineq: Dual values of the inequality constraints.
        info: Additional solver information.
    """
    status: str
    obj_value: float
    x: jnp.ndarray
    dual_eq: jnp.ndarray
    dual_ineq: jnp.ndarray
    info: Dict[str, Any]

    @property
    def success(self) -> bool:
        return self.status in ("optimal", "suboptimal")


# Register Solution as a JAX pytree
tree_util.register_pytree_node(
    Solution,
    lambda s: ((s.obj_value, s.x, s.dual_eq, s.dual_ineq, s.info), {"status": s.status}),
    lambda aux, children: Solution(aux["status"], *children),
)


def build_qp_data(
    Q: Any,
    q: Any,
    A_eq: Optional[Any] = None,
    b_eq: Optional[Any] = None,
    A_ineq: Optional[Any] = None,
    b_ineq: Optional[Any] = None,
    lb: Optional[Any] = None,
    ub: Optional[Any] = None,
) -> QPData:
    """Build validated QP data from dense or sparse inputs.
    
    If ``Q`` is a scipy sparse matrix the problem is kept sparse and all
    matrices are converted to CSC; otherwise everything becomes float64
    numpy arrays. Missing constraint blocks become empty (0 x n) matrices
    and missing bounds become -inf / +inf.
    
    Args:
        Q: Quadratic cost matrix (n x n).
        q: Linear cost vector (n,).
        A_eq: Equality constraint matrix.
        b_eq: Equality constraint RHS.
        A_ineq: Inequality constraint matrix.
        b_ineq: Inequality constraint RHS.
        lb: Lower bounds.
        ub: Upper bounds.
        
    Returns:
        QPData with conformant shapes.
        
    Raises:
        ValueError: If the dimensions are inconsistent or data holds NaN.
    """
    sparse = is_sparse(Q)
    q = as_dense_vector(q, "q")
    n = q.shape[0]

    if (A_eq is None) != (b_eq is None):
        raise ValueError("A_eq and b_eq must be given together")
    if (A_ineq is None) != (b_ineq is None):
        raise ValueError("A_ineq and b_ineq must be given together")

    b_eq = np.zeros(0) if b_eq is None else as_dense_vector(b_eq, "b_eq")
    b_ineq = np.zeros(0) if b_ineq is None else as_dense_vector(b_ineq, "b_ineq")
    n_eq = vector_length(b_eq)
    n_ineq = vector_length(b_ineq)

    if sparse:
        Q = as_sparse_matrix(Q)
        A_eq = as_sparse_matrix(A_eq, shape=(0, n))
        A_ineq = as_sparse_matrix(A_ineq, shape=(0, n))
    else:
        Q = as_dense_matrix(Q, "Q", n_cols=n)
        A_eq = as_dense_matrix(A_eq, "A_eq", n_cols=n)
        A_ineq = as_dense_matrix(A_ineq, "A_ineq", n_cols=n)

    lb = np.full(n, -np.inf) if lb is None else as_dense_vector(lb, "lb")
    ub = np.full(n, np.inf) if ub is None else as_dense_vector(ub, "ub")

    check_problem_dimensions(n, Q, q, A_eq, b_eq, A_ineq, b_ineq, lb, ub)
    check_finite_arrays(Q, q, A_eq, b_eq, A_ineq, b_ineq)
    check_bounds(lb, ub)

    return QPData(
        Q=Q,
        q=q,
        A_eq=A_eq,
        b_eq=b_eq,
        A_ineq=A_ineq,
        b_ineq=b_ineq,
        lb=lb,
        ub=ub,
        n_vars=n,
        n_eq=n_eq,
        n_ineq=n_ineq,
        is_sparse=sparse,
    )
