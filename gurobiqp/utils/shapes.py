"""Array coercion helpers shared by the dense and sparse adapters."""

from typing import Any, Tuple

import numpy as np
import scipy.sparse as sp


def is_sparse(value: Any) -> bool:
    """Check whether ``value`` is a scipy sparse matrix or array."""
    return sp.issparse(value)


def as_dense_vector(value: Any, name: str = "vector") -> np.ndarray:
    """Convert array-like input (numpy, JAX, list, sparse) to a 1D float64 array.
    
    Column and row vectors of shape (n, 1) / (1, n) are flattened.
    
    Raises:
        ValueError: If the input is not vector shaped.
    """
    if sp.issparse(value):
        return sparse_vector_to_dense(value, name=name)
    arr = np.asarray(value, dtype=np.float64)
    if arr.ndim == 2 and 1 in arr.shape:
        arr = arr.reshape(-1)
    if arr.ndim != 1:
        raise ValueError(f"{name} must be a vector, got shape {arr.shape}")
    return arr


def as_dense_matrix(value: Any, name: str = "matrix", n_cols: int | None = None) -> np.ndarray:
    """Convert array-like input to a 2D float64 array.
    
    Args:
        value: Matrix data. ``None`` or an empty sequence yields a (0, n_cols) matrix.
        name: Name used in error messages.
        n_cols: Expected number of columns, used to shape empty inputs.
        
    Raises:
        ValueError: If the input is not a matrix.
    """
    if value is None:
        return np.zeros((0, n_cols or 0))
    if sp.issparse(value):
        return np.asarray(value.toarray(), dtype=np.float64)
    arr = np.asarray(value, dtype=np.float64)
    if arr.size == 0 and n_cols is not None:
        return arr.reshape(0, n_cols)
    if arr.ndim != 2:
        raise ValueError(f"{name} must be a 2D matrix, got shape {arr.shape}")
    return arr


def as_sparse_matrix(value: Any, shape: Tuple[int, int] | None = None) -> sp.csc_matrix:
    """Convert input to a CSC matrix with summed duplicates.
    
    CSC keeps the column-wise traversal the adapters use when writing
    constraint coefficients.
    """
    if value is None:
        return sp.csc_matrix(shape or (0, 0))
    mat = sp.csc_matrix(value, dtype=np.float64)
    mat.sum_duplicates()
    return mat


def sparse_vector_to_dense(value: Any, name: str = "vector") -> np.ndarray:
    """Densify a sparse vector stored as a one-row or one-column sparse matrix.
    
    Dense 1D input is passed through unchanged.
    """
    if not sp.issparse(value):
        return as_dense_vector(value, name=name)
    if 1 not in value.shape and value.shape != (0, 0):
        raise ValueError(f"{name} must have a single row or column, got shape {value.shape}")
    return np.asarray(value.toarray(), dtype=np.float64).reshape(-1)


def sparse_vector_entries(value: Any) -> Tuple[np.ndarray, np.ndarray]:
    """Indices and values of the stored entries of a sparse vector."""
    if not sp.issparse(value):
        arr = as_dense_vector(value)
        idx = np.flatnonzero(arr)
        return idx, arr[idx]
    coo = sp.coo_matrix(value)
    coo.sum_duplicates()
    idx = coo.col if coo.shape[0] == 1 else coo.row
    return idx.astype(np.int64), coo.data.astype(np.float64)


def vector_length(value: Any) -> int:
    """Length of a dense or sparse vector."""
    if sp.issparse(value):
        rows, cols = value.shape
        if rows == 1:
            return cols
        return rows if cols == 1 else 0
    return int(np.asarray(value).reshape(-1).shape[0])
