#!/usr/bin/env python3
"""Quickstart example: Simple quadratic programming with gurobiqp.

Problem:
    minimize    (1/2) x^T Q x + q^T x
    subject to  A x = b
               x >= 0

Where:
    Q = [[2, 1], [1, 2]]  (positive definite)
    q = [1, 1]
    A = [[1, 1]]          (budget constraint)
    b = [1]
    x >= 0                (non-negativity)

Expected solution: x ≈ [0.5, 0.5], obj ≈ 1.75
"""

import numpy as np

import gurobiqp as gq


def main():
    """Run the quickstart example."""
    print("gurobiqp Quickstart Example")
    print("=" * 40)

    Q = np.array([[2.0, 1.0], [1.0, 2.0]])
    q = np.array([1.0, 1.0])
    A = np.array([[1.0, 1.0]])
    b = np.array([1.0])

    # Low-level adapter: allocate once, solve, read vectors back
    qp = gq.GurobiDense(2, 1, 0)
    qp.feasibility_tolerance(1e-8)
    ok = qp.solve(Q, q, A, b, np.zeros((0, 2)), np.zeros(0), np.zeros(2), np.full(2, np.inf))

    qp.inform()
    print(f"Success: {ok}")
    if ok:
        print(f"Optimal solution x: {qp.result()}")
        print(f"Equality duals: {qp.dual_eq()}")
        print(f"Objective: {qp.objective_value:.6f}")
        print(f"Barrier iterations: {qp.iter()}")
    qp.close()
    print()

    # High-level bridge
    qp_data = gq.build_qp_data(Q, q, A_eq=A, b_eq=b, lb=np.zeros(2))
    solution = gq.solve_qp(qp_data)
    print(f"Status: {solution.status}")
    print(f"Optimal objective value: {solution.obj_value:.6f}")
    print(f"Optimal solution x: {solution.x}")
    print(f"Runtime: {solution.info['runtime']:.4f}s")


if __name__ == "__main__":
    main()
