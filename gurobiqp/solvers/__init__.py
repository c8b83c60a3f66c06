"""Gurobi adapters for dense and sparse problem data."""

from gurobiqp.solvers import common, dense, sparse

__all__ = ["common", "dense", "sparse"]
