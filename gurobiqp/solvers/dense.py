"""Dense QP adapter: numpy (or JAX) matrices mapped onto a Gurobi model."""

from typing import Any, List

import gurobipy as gp
import numpy as np

from gurobiqp.solvers.common import GurobiCommon
from gurobiqp.utils.checking import check_bounds, check_finite_arrays, check_problem_dimensions
from gurobiqp.utils.shapes import as_dense_matrix, as_dense_vector


class GurobiDense(GurobiCommon):
    """Gurobi QP adapter taking dense problem data.
    
    Args:
        nrvar: Number of variables. When given together with ``nreq`` and
            ``nrineq``, the problem is allocated immediately.
        nreq: Number of equality constraints.
        nrineq: Number of inequality constraints.
        **kwargs: Forwarded to ``GurobiCommon`` (``verbose``, ``env_params``).
        
    Example:
        >>> qp = GurobiDense(2, 1, 0)
        >>> qp.solve(np.eye(2), np.zeros(2), np.ones((1, 2)), np.ones(1),
        ...          np.zeros((0, 2)), np.zeros(0), -np.ones(2), np.ones(2))
        True
        >>> qp.result()
        array([0.5, 0.5])
    """

    def __init__(self, nrvar: int | None = None, nreq: int = 0, nrineq: int = 0, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        if nrvar is not None:
            self.problem(nrvar, nreq, nrineq)

    def _update_constr(self, constrs: List[gp.Constr], A: np.ndarray, b: np.ndarray) -> None:
        """Write every coefficient of ``A`` column by column, then the RHS."""
        if constrs:
            for i, var in enumerate(self._vars):
                column = A[:, i]
                for row, constr in enumerate(constrs):
                    self._model.chgCoeff(constr, var, float(column[row]))
        self._set_rhs(constrs, b)

    def solve(
        self,
        Q: Any,
        C: Any,
        Aeq: Any,
        Beq: Any,
        Aineq: Any,
        Bineq: Any,
        XL: Any,
        XU: Any,
    ) -> bool:
        """Solve the QP with the current problem layout.
        
        Args:
            Q: Quadratic cost matrix (nrvar x nrvar).
            C: Linear cost vector (nrvar,).
            Aeq: Equality constraint matrix (nreq x nrvar).
            Beq: Equality constraint RHS (nreq,).
            Aineq: Inequality constraint matrix (nrineq x nrvar).
            Bineq: Inequality constraint RHS (nrineq,).
            XL: Variable lower bounds (nrvar,).
            XU: Variable upper bounds (nrvar,).
            
        Returns:
            True if Gurobi reported an optimal or sub-optimal solution.
        """
        self._open_model()
        n = self._nrvar
        Q = as_dense_matrix(Q, "Q", n_cols=n)
        C = as_dense_vector(C, "C")
        Aeq = as_dense_matrix(Aeq, "Aeq", n_cols=n)
        Beq = as_dense_vector(Beq, "Beq")
        Aineq = as_dense_matrix(Aineq, "Aineq", n_cols=n)
        Bineq = as_dense_vector(Bineq, "Bineq")
        XL = as_dense_vector(XL, "XL")
        XU = as_dense_vector(XU, "XU")

        check_problem_dimensions(
            n, Q, C, Aeq, Beq, Aineq, Bineq, XL, XU,
            n_eq=self._nreq, n_ineq=self._nrineq,
        )
        check_finite_arrays(Q, C, Aeq, Beq, Aineq, Bineq)
        check_bounds(XL, XU)

        # Objective
        qexpr = gp.QuadExpr()
        if n > 0:
            qexpr.addTerms(Q.ravel().tolist(), self._lvars, self._rvars)
        lexpr = gp.LinExpr(C.tolist(), self._vars)
        self._model.setObjective(0.5 * qexpr + lexpr)

        self._set_bounds(XL, XU)

        self._update_constr(self._eq_constrs, Aeq, Beq)
        self._update_constr(self._ineq_constrs, Aineq, Bineq)

        return self._optimize()
