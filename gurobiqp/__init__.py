"""gurobiqp: dense and sparse quadratic programs solved with Gurobi."""

from gurobiqp.api import GurobiOptions, check_gurobi_available, evaluate_objective, solve_qp
from gurobiqp.qp_data import QPData, Solution, build_qp_data
from gurobiqp.solvers.common import GurobiCommon, GurobiQPError, UnsuccessfulSolveError
from gurobiqp.solvers.dense import GurobiDense
from gurobiqp.solvers.sparse import GurobiSparse
from gurobiqp.status import Status, WarmStatus, describe_status

__version__ = "0.1.0"

__all__ = [
    "GurobiCommon",
    "GurobiDense",
    "GurobiSparse",
    "GurobiOptions",
    "GurobiQPError",
    "UnsuccessfulSolveError",
    "QPData",
    "Solution",
    "Status",
    "WarmStatus",
    "build_qp_data",
    "check_gurobi_available",
    "describe_status",
    "evaluate_objective",
    "solve_qp",
]
