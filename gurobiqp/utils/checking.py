"""Validation and checking utilities."""

from typing import Any, Tuple

import numpy as np
import scipy.sparse as sp

from gurobiqp.utils.shapes import vector_length

MIN_TOLERANCE = 1e-9
MAX_TOLERANCE = 1e-2


def _shape(value: Any) -> Tuple[int, ...]:
    if sp.issparse(value):
        return tuple(value.shape)
    return tuple(np.shape(value))


def check_tolerance(name: str, tol: float) -> None:
    """Check that a solver tolerance lies in Gurobi's accepted range.
    
    Args:
        name: Parameter name, used in the error message.
        tol: Tolerance value.
        
    Raises:
        ValueError: If ``tol`` is outside [1e-9, 1e-2].
    """
    if not MIN_TOLERANCE <= tol <= MAX_TOLERANCE:
        raise ValueError(
            create_error_message(
                "invalid tolerance",
                {"parameter": name, "value": tol},
                f"use a value between {MIN_TOLERANCE:g} and {MAX_TOLERANCE:g}",
            )
        )


def check_problem_size(nrvar: int, nreq: int, nrineq: int) -> None:
    """Check that problem sizes are non-negative integers."""
    for name, value in (("nrvar", nrvar), ("nreq", nreq), ("nrineq", nrineq)):
        if int(value) != value or value < 0:
            raise ValueError(f"{name} must be a non-negative integer, got {value}")


def check_matrix_shape(name: str, A: Any, rows: int, cols: int) -> None:
    """Check a constraint or cost matrix has shape (rows, cols).
    
    An empty block (no rows) is accepted whatever its column count.
    """
    shape = _shape(A)
    if rows == 0 and (len(shape) == 0 or shape[0] == 0 or 0 in shape):
        return
    if shape != (rows, cols):
        raise ValueError(
            create_error_message(
                "dimension mismatch",
                {"argument": name, "expected": (rows, cols), "got": shape},
            )
        )


def check_vector_length(name: str, v: Any, length: int) -> None:
    """Check a vector has ``length`` entries."""
    got = vector_length(v)
    if got != length:
        raise ValueError(
            create_error_message(
                "dimension mismatch",
                {"argument": name, "expected": length, "got": got},
            )
        )


def check_problem_dimensions(
    n: int,
    Q: Any,
    q: Any,
    A_eq: Any,
    b_eq: Any,
    A_ineq: Any,
    b_ineq: Any,
    lb: Any,
    ub: Any,
    n_eq: int | None = None,
    n_ineq: int | None = None,
) -> None:
    """Check problem dimensions for consistency.
    
    Args:
        n: Number of variables.
        Q: Quadratic cost matrix.
        q: Linear cost vector.
        A_eq: Equality constraint matrix.
        b_eq: Equality constraint RHS.
        A_ineq: Inequality constraint matrix.
        b_ineq: Inequality constraint RHS.
        lb: Lower bounds.
        ub: Upper bounds.
        n_eq: Expected number of equality constraints; defaults to the
            length of ``b_eq``.
        n_ineq: Expected number of inequality constraints; defaults to the
            length of ``b_ineq``.
        
    Raises:
        ValueError: On the first non-conformant argument.
    """
    if n_eq is None:
        n_eq = vector_length(b_eq)
    if n_ineq is None:
        n_ineq = vector_length(b_ineq)

    check_matrix_shape("Q", Q, n, n)
    check_vector_length("q", q, n)
    check_matrix_shape("A_eq", A_eq, n_eq, n)
    check_vector_length("b_eq", b_eq, n_eq)
    check_matrix_shape("A_ineq", A_ineq, n_ineq, n)
    check_vector_length("b_ineq", b_ineq, n_ineq)
    check_vector_length("lb", lb, n)
    check_vector_length("ub", ub, n)


def check_finite_arrays(*arrays: Any) -> None:
    """Check that cost and constraint arrays hold only finite values.
    
    Args:
        *arrays: Arrays to check.
        
    Raises:
        ValueError: If any array holds a NaN or an infinite entry.
    """
    for i, arr in enumerate(arrays):
        data = arr.data if sp.issparse(arr) else np.asarray(arr, dtype=np.float64)
        if not np.isfinite(data).all():
            raise ValueError(f"Argument {i} contains NaN or infinite values")


def check_bounds(lb: Any, ub: Any) -> None:
    """Check variable bounds.
    
    Infinite entries are allowed; Gurobi treats them as missing bounds.
    
    Raises:
        ValueError: If a bound is NaN or a lower bound exceeds its upper bound.
    """
    lb = np.asarray(lb, dtype=np.float64)
    ub = np.asarray(ub, dtype=np.float64)
    if np.isnan(lb).any() or np.isnan(ub).any():
        raise ValueError("Bounds contain NaN values")
    if np.any(lb > ub):
        raise ValueError("Lower bounds must not exceed upper bounds")


def create_error_message(
    error_type: str,
    context: dict,
    suggestion: str | None = None,
) -> str:
    """Create informative error message.
    
    Args:
        error_type: Type of error.
        context: Context information.
        suggestion: Optional suggestion for fixing.
        
    Returns:
        Formatted error message.
    """
    message = f"gurobiqp {error_type}:"
    
    for key, value in context.items():
        message += f"\n  {key}: {value}"
    
    if suggestion:
        message += f"\n\nSuggestion: {suggestion}"
    
    return message
