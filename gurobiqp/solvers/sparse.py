"""Sparse QP adapter: scipy.sparse matrices mapped onto a Gurobi model."""

from typing import Any, List, Tuple

import gurobipy as gp
import numpy as np
import scipy.sparse as sp

from gurobiqp.solvers.common import GurobiCommon
from gurobiqp.utils.checking import check_bounds, check_finite_arrays, check_problem_dimensions
from gurobiqp.utils.shapes import (
    as_dense_vector,
    as_sparse_matrix,
    sparse_vector_entries,
    sparse_vector_to_dense,
)

_Entries = Tuple[np.ndarray, np.ndarray]


def _no_entries() -> _Entries:
    return np.zeros(0, dtype=np.int64), np.zeros(0, dtype=np.int64)


class GurobiSparse(GurobiCommon):
    """Gurobi QP adapter taking ``scipy.sparse`` problem data.
    
    Only stored entries are sent to Gurobi. Coefficients written by a
    previous ``solve`` that are absent from the new matrices are reset to
    zero, so the same instance can be reused with changing sparsity
    patterns.
    """

    def __init__(self, nrvar: int | None = None, nreq: int = 0, nrineq: int = 0, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._eq_written = _no_entries()
        self._ineq_written = _no_entries()
        if nrvar is not None:
            self.problem(nrvar, nreq, nrineq)

    def problem(self, nrvar: int, nreq: int, nrineq: int) -> None:
        super().problem(nrvar, nreq, nrineq)
        self._eq_written = _no_entries()
        self._ineq_written = _no_entries()

    def _update_constr(
        self,
        constrs: List[gp.Constr],
        written: _Entries,
        A: sp.csc_matrix,
        b: Any,
    ) -> _Entries:
        """Write the stored entries of ``A`` and the RHS ``b``.
        
        Returns:
            Row and column indices of the coefficients now held by the model.
        """
        if not constrs:
            return _no_entries()

        for row, col in zip(*written):
            self._model.chgCoeff(constrs[row], self._vars[col], 0.0)

        rows = []
        cols = []
        for k in range(A.shape[1]):
            var = self._vars[k]
            for idx in range(A.indptr[k], A.indptr[k + 1]):
                row = A.indices[idx]
                self._model.chgCoeff(constrs[row], var, float(A.data[idx]))
                rows.append(row)
                cols.append(k)

        self._set_rhs(constrs, sparse_vector_to_dense(b))
        return np.asarray(rows, dtype=np.int64), np.asarray(cols, dtype=np.int64)

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
            Q: Sparse quadratic cost matrix (nrvar x nrvar).
            C: Sparse linear cost vector, one row or one column.
            Aeq: Sparse equality constraint matrix (nreq x nrvar).
            Beq: Sparse equality constraint RHS.
            Aineq: Sparse inequality constraint matrix (nrineq x nrvar).
            Bineq: Sparse inequality constraint RHS.
            XL: Dense variable lower bounds (nrvar,).
            XU: Dense variable upper bounds (nrvar,).
            
        Returns:
            True if Gurobi reported an optimal or sub-optimal solution.
        """
        self._open_model()
        n = self._nrvar
        Q = as_sparse_matrix(Q, shape=(n, n))
        Aeq = as_sparse_matrix(Aeq, shape=(self._nreq, n))
        Aineq = as_sparse_matrix(Aineq, shape=(self._nrineq, n))
        XL = as_dense_vector(XL, "XL")
        XU = as_dense_vector(XU, "XU")

        check_problem_dimensions(
            n, Q, C, Aeq, Beq, Aineq, Bineq, XL, XU,
            n_eq=self._nreq, n_ineq=self._nrineq,
        )
        check_finite_arrays(Q, C, Aeq, Beq, Aineq, Bineq)
        check_bounds(XL, XU)

        # Objective: quadratic terms
        qexpr = gp.QuadExpr()
        coo = Q.tocoo()
        if coo.nnz > 0:
            qexpr.addTerms(
                (0.5 * coo.data).tolist(),
                [self._vars[i] for i in coo.row],
                [self._vars[j] for j in coo.col],
            )

        # Objective: linear terms
        idx, vals = sparse_vector_entries(C)
        lexpr = gp.LinExpr(vals.tolist(), [self._vars[i] for i in idx])
        self._model.setObjective(qexpr + lexpr)

        self._set_bounds(XL, XU)

        self._eq_written = self._update_constr(self._eq_constrs, self._eq_written, Aeq, Beq)
        self._ineq_written = self._update_constr(self._ineq_constrs, self._ineq_written, Aineq, Bineq)

        return self._optimize()
