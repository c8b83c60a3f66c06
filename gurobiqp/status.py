"""Gurobi optimization status vocabulary."""

from enum import IntEnum

from gurobipy import GRB


class Status(IntEnum):
    """Optimization status codes reported by Gurobi.

    ``NOT_SOLVED`` is not a Gurobi code; it marks a model that was never
    optimized.
    """
    NOT_SOLVED = 0
    LOADED = GRB.LOADED
    OPTIMAL = GRB.OPTIMAL
    INFEASIBLE = GRB.INFEASIBLE
    INF_OR_UNBD = GRB.INF_OR_UNBD
    UNBOUNDED = GRB.UNBOUNDED
    CUTOFF = GRB.CUTOFF
    ITERATION_LIMIT = GRB.ITERATION_LIMIT
    NODE_LIMIT = GRB.NODE_LIMIT
    TIME_LIMIT = GRB.TIME_LIMIT
    SOLUTION_LIMIT = GRB.SOLUTION_LIMIT
    INTERRUPTED = GRB.INTERRUPTED
    NUMERIC = GRB.NUMERIC
    SUBOPTIMAL = GRB.SUBOPTIMAL
    INPROGRESS = GRB.INPROGRESS
    USER_OBJ_LIMIT = GRB.USER_OBJ_LIMIT
    WORK_LIMIT = GRB.WORK_LIMIT
    MEM_LIMIT = GRB.MEM_LIMIT


class WarmStatus(IntEnum):
    """Warm-start strategy, stored in Gurobi's ``MultiObjMethod`` parameter."""
    DEFAULT = -1
    PRIMAL = 0
    DUAL = 1
    NONE = 2


_NOT_RUN = "The solver has not been run yet."

_DESCRIPTIONS = {
    Status.LOADED: "Model is loaded, but no solution information is available.",
    Status.OPTIMAL: (
        "Model was solved to optimality (subject to tolerances), "
        "and an optimal solution is available."
    ),
    Status.INFEASIBLE: "Model was proven to be infeasible.",
    Status.INF_OR_UNBD: (
        "Model was proven to be either infeasible or unbounded. "
        "To obtain a more definitive conclusion, set the DualReductions "
        "parameter to 0 and reoptimize."
    ),
    Status.UNBOUNDED: (
        "Model was proven to be unbounded. "
        "Important note: an unbounded status indicates the presence of an unbounded ray "
        "that allows the objective to improve without limit. "
        "It says nothing about whether the model has a feasible solution. "
        "If you require information on feasibility, you should set the objective "
        "to zero and reoptimize."
    ),
    Status.CUTOFF: (
        "Optimal objective for model was proven to be worse than the value specified "
        "in the Cutoff parameter. No solution information is available."
    ),
    Status.ITERATION_LIMIT: (
        "Optimization terminated because the total number of simplex iterations "
        "performed exceeded the value specified in the IterationLimit parameter, "
        "or because the total number of barrier iterations exceeded the value "
        "specified in the BarIterLimit parameter."
    ),
    Status.NODE_LIMIT: (
        "Optimization terminated because the total number of branch-and-cut nodes "
        "explored exceeded the value specified in the NodeLimit parameter."
    ),
    Status.TIME_LIMIT: (
        "Optimization terminated because the time expended exceeded the value "
        "specified in the TimeLimit parameter."
    ),
    Status.SOLUTION_LIMIT: (
        "Optimization terminated because the number of solutions found reached "
        "the value specified in the SolutionLimit parameter."
    ),
    Status.INTERRUPTED: "Optimization was terminated by the user.",
    Status.NUMERIC: "Optimization was terminated due to unrecoverable numerical difficulties.",
    Status.SUBOPTIMAL: "Unable to satisfy optimality tolerances; a sub-optimal solution is available.",
    Status.INPROGRESS: (
        "An asynchronous optimization call was made, but the associated "
        "optimization run is not yet complete."
    ),
    Status.USER_OBJ_LIMIT: (
        "User specified an objective limit (a bound on either the best objective "
        "or the best bound), and that limit has been reached."
    ),
    Status.WORK_LIMIT: (
        "Optimization terminated because the work expended exceeded the value "
        "specified in the WorkLimit parameter."
    ),
    Status.MEM_LIMIT: (
        "Optimization terminated because the total amount of allocated memory "
        "exceeded the value specified in the SoftMemLimit parameter."
    ),
}


def to_status(code: int) -> Status | None:
    """Convert a raw status code to ``Status``, or None if Gurobi added a new one."""
    try:
        return Status(code)
    except ValueError:
        return None


def describe_status(code: int) -> str:
    """Human-readable description of a Gurobi status code.
    
    Args:
        code: Raw status code or ``Status`` member.
        
    Returns:
        Description of the status; codes without one (including
        ``NOT_SOLVED``) report that the solver has not been run.
    """
    status = to_status(code)
    return _DESCRIPTIONS.get(status, _NOT_RUN)


def status_name(code: int) -> str:
    """Lower-case status name, e.g. ``"optimal"`` or ``"time_limit"``."""
    status = to_status(code)
    if status is None:
        return "unknown"
    return status.name.lower()


def is_success(code: int) -> bool:
    """Whether a status carries a usable solution."""
    return code in (Status.OPTIMAL, Status.SUBOPTIMAL)
