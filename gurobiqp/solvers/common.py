"""Shared Gurobi model bookkeeping for the dense and sparse QP adapters.

Both adapters solve

    minimize    (1/2) x^T Q x + c^T x
    subject to  Aeq x = beq
                Aineq x <= bineq
                xl <= x <= xu

on a single Gurobi model whose variable and constraint handles are
allocated once per problem size and reused across solves.
"""

from __future__ import annotations

import warnings
from typing import Any, Dict, List, Optional

import gurobipy as gp
import numpy as np
from gurobipy import GRB

from gurobiqp.status import Status, WarmStatus, describe_status, is_success, to_status
from gurobiqp.utils.checking import check_problem_size, check_tolerance

VARIABLE_TYPES = (GRB.CONTINUOUS, GRB.BINARY, GRB.INTEGER, GRB.SEMICONT, GRB.SEMIINT)


class GurobiQPError(Exception):
    """Base class for errors raised by gurobiqp."""


class UnsuccessfulSolveError(GurobiQPError, RuntimeError):
    """Raised when results are requested from a solve that did not succeed."""

    def __init__(self, what: str, status: int) -> None:
        super().__init__(f"solve unsuccessful; unable to retrieve {what}")
        self.what = what
        self.status = status


class GurobiCommon:
    """Base adapter owning a Gurobi environment and model.

    Args:
        verbose: Enable Gurobi's log output.
        env_params: Extra parameters applied to the environment before it
            starts, e.g. licence settings (``WLSACCESSID``, ``LICENSEID``...).
    """

    def __init__(self, verbose: bool = False, env_params: Optional[Dict[str, Any]] = None) -> None:
        self._env = gp.Env(empty=True)
        self._env.setParam("OutputFlag", int(verbose))
        for name, value in (env_params or {}).items():
            self._env.setParam(name, value)
        self._env.start()
        self._model = gp.Model("gurobiqp", env=self._env)

        self._vars: List[gp.Var] = []
        self._eq_constrs: List[gp.Constr] = []
        self._ineq_constrs: List[gp.Constr] = []
        # Row/column variable of each entry of a row-major flattened Q.
        self._lvars: List[gp.Var] = []
        self._rvars: List[gp.Var] = []

        self._nrvar = 0
        self._nreq = 0
        self._nrineq = 0
        self._status = 0
        self._iter = 0

        self._x = np.zeros(0)
        self._y_eq = np.zeros(0)
        self._y_ineq = np.zeros(0)

    # Problem layout

    def problem(self, nrvar: int, nreq: int, nrineq: int) -> None:
        """Allocate variables and constraints for a new problem size.

        Handles from a previous call are removed from the model first.

        Args:
            nrvar: Number of variables.
            nreq: Number of equality constraints.
            nrineq: Number of inequality constraints.
        """
        check_problem_size(nrvar, nreq, nrineq)
        nrvar, nreq, nrineq = int(nrvar), int(nreq), int(nrineq)
        model = self._open_model()

        stale = self._vars + self._eq_constrs + self._ineq_constrs
        if stale:
            model.remove(stale)

        self._nrvar = nrvar
        self._nreq = nreq
        self._nrineq = nrineq
        self._status = 0
        self._iter = 0

        self._x = np.zeros(nrvar)
        self._y_eq = np.zeros(nreq)
        self._y_ineq = np.zeros(nrineq)

        self._vars = [model.addVar(vtype=GRB.CONTINUOUS) for _ in range(nrvar)]
        self._lvars = [self._vars[i // nrvar] for i in range(nrvar * nrvar)]
        self._rvars = [self._vars[i % nrvar] for i in range(nrvar * nrvar)]

        self._eq_constrs = [
            model.addLConstr(gp.LinExpr(), GRB.EQUAL, 0.0) for _ in range(nreq)
        ]
        self._ineq_constrs = [
            model.addLConstr(gp.LinExpr(), GRB.LESS_EQUAL, 0.0) for _ in range(nrineq)
        ]
        model.update()

    @property
    def nrvar(self) -> int:
        return self._nrvar

    @property
    def nreq(self) -> int:
        return self._nreq

    @property
    def nrineq(self) -> int:
        return self._nrineq

    @property
    def model(self) -> gp.Model:
        """The underlying ``gurobipy.Model``."""
        return self._model

    def set_variable_type(self, index: int, vtype: str) -> None:
        """Set the Gurobi type of one variable.

        Args:
            index: Variable index.
            vtype: One of ``GRB.CONTINUOUS``, ``GRB.BINARY``, ``GRB.INTEGER``,
                ``GRB.SEMICONT`` or ``GRB.SEMIINT``.
        """
        if vtype not in VARIABLE_TYPES:
            raise ValueError(f"Unknown variable type {vtype!r}. Valid options: {VARIABLE_TYPES}")
        if not 0 <= index < self._nrvar:
            raise IndexError(f"Variable index {index} out of range for {self._nrvar} variables")
        self._open_model()
        self._vars[index].VType = vtype

    # Solve state

    def iter(self) -> int:
        """Barrier iteration count of the last solve."""
        return self._iter

    @property
    def iterations(self) -> int:
        return self._iter

    @property
    def status(self) -> Status | int:
        """Status of the last solve; ``Status.NOT_SOLVED`` before the first one."""
        status = to_status(self._status)
        return self._status if status is None else status

    def success(self) -> bool:
        return is_success(self._status)

    def result(self) -> np.ndarray:
        """Primal solution of the last solve.

        Raises:
            UnsuccessfulSolveError: If the last solve did not succeed.
        """
        if self.success():
            return self._x
        raise UnsuccessfulSolveError("result", self._status)

    def dual_eq(self) -> np.ndarray:
        """Dual values of the equality constraints."""
        if self.success():
            return self._y_eq
        raise UnsuccessfulSolveError("dual_eq", self._status)

    def dual_ineq(self) -> np.ndarray:
        """Dual values of the inequality constraints."""
        if self.success():
            return self._y_ineq
        raise UnsuccessfulSolveError("dual_ineq", self._status)

    @property
    def objective_value(self) -> float:
        if self.success():
            return float(self._open_model().ObjVal)
        raise UnsuccessfulSolveError("objective_value", self._status)

    @property
    def simplex_iterations(self) -> int:
        if self._status == 0:
            return 0
        return int(self._open_model().IterCount)

    @property
    def runtime(self) -> float:
        if self._status == 0:
            return 0.0
        return float(self._open_model().Runtime)

    def status_description(self) -> str:
        return describe_status(self._status)

    def inform(self) -> None:
        """Print the description of the current status."""
        print(self.status_description())

    # Parameters

    def warm_start(self, warm_status: Optional[WarmStatus] = None) -> WarmStatus | None:
        """Get or set the warm-start strategy.

        Called without argument, returns the current strategy; otherwise
        stores ``warm_status`` and returns None.
        """
        if warm_status is None:
            return WarmStatus(self._open_model().Params.MultiObjMethod)
        self._open_model().setParam("MultiObjMethod", int(WarmStatus(warm_status)))
        return None

    def display_output(self, do_display: bool) -> None:
        self._open_model().setParam("OutputFlag", int(do_display))

    def feasibility_tolerance(self, tol: Optional[float] = None) -> float | None:
        """Get or set Gurobi's primal feasibility tolerance."""
        if tol is None:
            return float(self._open_model().Params.FeasibilityTol)
        check_tolerance("FeasibilityTol", tol)
        self._open_model().setParam("FeasibilityTol", tol)
        return None

    def optimality_tolerance(self, tol: Optional[float] = None) -> float | None:
        """Get or set Gurobi's dual feasibility (optimality) tolerance."""
        if tol is None:
            return float(self._open_model().Params.OptimalityTol)
        check_tolerance("OptimalityTol", tol)
        self._open_model().setParam("OptimalityTol", tol)
        return None

    def set_param(self, name: str, value: Any) -> None:
        """Set any Gurobi parameter on the model."""
        self._open_model().setParam(name, value)

    def get_param(self, name: str) -> Any:
        return getattr(self._open_model().Params, name)

    # Shared solve steps

    def _set_bounds(self, XL: np.ndarray, XU: np.ndarray) -> None:
        if self._nrvar == 0:
            return
        self._open_model().setAttr("LB", self._vars, XL.tolist())
        self._open_model().setAttr("UB", self._vars, XU.tolist())

    def _set_rhs(self, constrs: List[gp.Constr], b: np.ndarray) -> None:
        if constrs:
            self._open_model().setAttr("RHS", constrs, b.tolist())

    def _get_values(self, attr: str, handles: list) -> np.ndarray:
        if not handles:
            return np.zeros(0)
        return np.asarray(self._open_model().getAttr(attr, handles), dtype=np.float64)

    def _optimize(self) -> bool:
        """Run Gurobi and copy the solution state out of the model."""
        model = self._open_model()
        model.optimize()

        self._status = model.Status
        self._iter = int(model.BarIterCount)
        if self.success():
            self._x = self._get_values("X", self._vars)
            if model.IsMIP:
                warnings.warn(
                    "Model has integer variables; dual values are not available",
                    RuntimeWarning,
                )
                self._y_eq = np.full(self._nreq, np.nan)
                self._y_ineq = np.full(self._nrineq, np.nan)
            else:
                self._y_eq = self._get_values("Pi", self._eq_constrs)
                self._y_ineq = self._get_values("Pi", self._ineq_constrs)

        return self.success()

    # Resource handling

    def _open_model(self) -> gp.Model:
        if self._model is None:
            raise GurobiQPError("model has been closed")
        return self._model

    def close(self) -> None:
        """Dispose the Gurobi model and environment."""
        if self._model is not None:
            self._model.dispose()
            self._env.dispose()
            self._model = None

    def __enter__(self) -> "GurobiCommon":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
