"""Test the dense Gurobi adapter."""

import numpy as np
import pytest
from gurobipy import GRB

from gurobiqp import GurobiDense, GurobiQPError, Status, UnsuccessfulSolveError, WarmStatus, check_gurobi_available

pytestmark = pytest.mark.skipif(not check_gurobi_available(), reason="Gurobi not available")


def _no_ineq(n):
    return np.zeros((0, n)), np.zeros(0)


class TestGurobiDense:
    """Test dense QP solving through Gurobi."""

    def setup_method(self):
        """Set up test environment."""
        self.qp = GurobiDense()

    def teardown_method(self):
        self.qp.close()

    def test_initial_state(self):
        """Nothing can be read before the first solve."""
        assert self.qp.status == Status.NOT_SOLVED
        assert not self.qp.success()
        assert self.qp.iter() == 0
        assert self.qp.status_description() == "The solver has not been run yet."

        with pytest.raises(UnsuccessfulSolveError, match="unable to retrieve result"):
            self.qp.result()
        with pytest.raises(UnsuccessfulSolveError, match="dual_eq"):
            self.qp.dual_eq()
        with pytest.raises(UnsuccessfulSolveError, match="dual_ineq"):
            self.qp.dual_ineq()

    def test_equality_constrained_qp(self):
        """minimize (1/2)||x||^2 subject to x1 + x2 = 1."""
        self.qp.problem(2, 1, 0)
        # Barrier without presolve so the iteration count is meaningful
        self.qp.set_param("Method", 2)
        self.qp.set_param("Presolve", 0)
        Aineq, Bineq = _no_ineq(2)

        ok = self.qp.solve(
            np.eye(2), np.zeros(2),
            np.array([[1.0, 1.0]]), np.array([1.0]),
            Aineq, Bineq,
            np.full(2, -10.0), np.full(2, 10.0),
        )

        assert ok
        assert self.qp.status == Status.OPTIMAL
        np.testing.assert_allclose(self.qp.result(), [0.5, 0.5], atol=1e-5)
        # d(obj)/d(rhs) = rhs / 2
        np.testing.assert_allclose(self.qp.dual_eq(), [0.5], atol=1e-5)
        assert self.qp.dual_ineq().shape == (0,)
        assert abs(self.qp.objective_value - 0.25) < 1e-5
        assert self.qp.iter() > 0
        assert self.qp.iterations == self.qp.iter()

    def test_inequality_constrained_qp(self):
        """minimize (1/2)||x||^2 - x1 - x2 subject to x1 + x2 <= 1."""
        qp = GurobiDense(2, 0, 1)
        try:
            ok = qp.solve(
                np.eye(2), -np.ones(2),
                np.zeros((0, 2)), np.zeros(0),
                np.array([[1.0, 1.0]]), np.array([1.0]),
                np.full(2, -GRB.INFINITY), np.full(2, GRB.INFINITY),
            )

            assert ok
            np.testing.assert_allclose(qp.result(), [0.5, 0.5], atol=1e-5)
            np.testing.assert_allclose(qp.dual_ineq(), [-0.5], atol=1e-5)
            assert abs(qp.objective_value + 0.75) < 1e-5
        finally:
            qp.close()

    def test_bounds(self):
        """Bounds clip the unconstrained minimizer (2, 0) to (1, 0)."""
        self.qp.problem(2, 0, 0)
        Aeq, Beq = _no_ineq(2)

        assert self.qp.solve(
            np.eye(2), np.array([-2.0, 0.0]),
            Aeq, Beq, Aeq, Beq,
            np.zeros(2), np.ones(2),
        )
        np.testing.assert_allclose(self.qp.result(), [1.0, 0.0], atol=1e-5)

    def test_resolve_overwrites_coefficients(self):
        """A second solve replaces every coefficient of the first one."""
        self.qp.problem(2, 1, 0)
        Aineq, Bineq = _no_ineq(2)
        XL, XU = np.full(2, -10.0), np.full(2, 10.0)

        assert self.qp.solve(np.eye(2), np.zeros(2), np.array([[1.0, 1.0]]), np.array([1.0]),
                             Aineq, Bineq, XL, XU)
        np.testing.assert_allclose(self.qp.result(), [0.5, 0.5], atol=1e-5)

        # x1 = 0.2, x2 is free
        assert self.qp.solve(np.eye(2), np.zeros(2), np.array([[1.0, 0.0]]), np.array([0.2]),
                             Aineq, Bineq, XL, XU)
        np.testing.assert_allclose(self.qp.result(), [0.2, 0.0], atol=1e-5)

    def test_problem_resize(self):
        """problem() discards the previous layout."""
        self.qp.problem(2, 1, 1)
        self.qp.problem(3, 1, 0)
        assert (self.qp.nrvar, self.qp.nreq, self.qp.nrineq) == (3, 1, 0)
        assert self.qp.model.NumVars == 3
        assert self.qp.model.NumConstrs == 1

        Aineq, Bineq = _no_ineq(3)
        assert self.qp.solve(
            np.eye(3), np.zeros(3),
            np.ones((1, 3)), np.array([3.0]),
            Aineq, Bineq,
            np.full(3, -10.0), np.full(3, 10.0),
        )
        np.testing.assert_allclose(self.qp.result(), np.ones(3), atol=1e-5)

    def test_infeasible(self):
        """x1 + x2 = 1 and x1 + x2 <= 0 with x >= 0 cannot both hold."""
        self.qp.problem(2, 1, 1)

        ok = self.qp.solve(
            np.eye(2), np.zeros(2),
            np.array([[1.0, 1.0]]), np.array([1.0]),
            np.array([[1.0, 1.0]]), np.array([0.0]),
            np.zeros(2), np.full(2, 10.0),
        )

        assert not ok
        assert self.qp.status in (Status.INFEASIBLE, Status.INF_OR_UNBD)
        assert "infeasible" in self.qp.status_description()
        with pytest.raises(UnsuccessfulSolveError) as excinfo:
            self.qp.result()
        assert excinfo.value.status == self.qp.status
        with pytest.raises(UnsuccessfulSolveError, match="objective_value"):
            self.qp.objective_value

    def test_problem_resets_solve_state(self):
        """A new layout has no solution until it is solved."""
        self.qp.problem(2, 0, 0)
        Aeq, Beq = _no_ineq(2)
        assert self.qp.solve(np.eye(2), -np.ones(2), Aeq, Beq, Aeq, Beq,
                             np.full(2, -10.0), np.full(2, 10.0))

        self.qp.problem(3, 0, 0)

        assert not self.qp.success()
        assert self.qp.status == Status.NOT_SOLVED
        assert self.qp.iter() == 0
        with pytest.raises(UnsuccessfulSolveError):
            self.qp.result()

    def test_negative_problem_size(self):
        with pytest.raises(ValueError):
            self.qp.problem(-1, 0, 0)
        with pytest.raises(ValueError):
            GurobiDense(2, -1, 0)

    def test_non_finite_data(self):
        """Infinite costs or coefficients are rejected before reaching Gurobi."""
        self.qp.problem(1, 1, 0)
        Aineq, Bineq = _no_ineq(1)
        XL, XU = np.full(1, -np.inf), np.full(1, np.inf)

        with pytest.raises(ValueError, match="infinite"):
            self.qp.solve(np.array([[np.inf]]), np.zeros(1), np.ones((1, 1)), np.ones(1),
                          Aineq, Bineq, XL, XU)
        with pytest.raises(ValueError):
            self.qp.solve(np.eye(1), np.zeros(1), np.array([[-np.inf]]), np.ones(1),
                          Aineq, Bineq, XL, XU)
        with pytest.raises(ValueError):
            self.qp.solve(np.eye(1), np.zeros(1), np.ones((1, 1)), np.array([np.nan]),
                          Aineq, Bineq, XL, XU)
        assert self.qp.status == Status.NOT_SOLVED

        # Infinite bounds remain valid
        assert self.qp.solve(np.eye(1), np.zeros(1), np.ones((1, 1)), np.ones(1),
                             Aineq, Bineq, XL, XU)
        np.testing.assert_allclose(self.qp.result(), [1.0], atol=1e-5)

    def test_dimension_mismatch(self):
        self.qp.problem(2, 1, 0)
        Aineq, Bineq = _no_ineq(2)

        with pytest.raises(ValueError):
            self.qp.solve(np.eye(3), np.zeros(2), np.ones((1, 2)), np.ones(1),
                          Aineq, Bineq, np.zeros(2), np.ones(2))
        with pytest.raises(ValueError):
            self.qp.solve(np.eye(2), np.zeros(2), np.ones((2, 2)), np.ones(2),
                          Aineq, Bineq, np.zeros(2), np.ones(2))

    def test_integer_variable(self):
        """An integer variable turns the model into a MIQP without duals."""
        self.qp.problem(2, 0, 0)
        self.qp.set_variable_type(0, GRB.INTEGER)
        Aeq, Beq = _no_ineq(2)

        with pytest.warns(RuntimeWarning, match="dual values"):
            ok = self.qp.solve(
                np.eye(2), np.array([-1.4, 0.0]),
                Aeq, Beq, Aeq, Beq,
                np.full(2, -5.0), np.full(2, 5.0),
            )

        assert ok
        np.testing.assert_allclose(self.qp.result(), [1.0, 0.0], atol=1e-5)

    def test_set_variable_type_errors(self):
        self.qp.problem(2, 0, 0)
        with pytest.raises(IndexError):
            self.qp.set_variable_type(2, GRB.BINARY)
        with pytest.raises(ValueError):
            self.qp.set_variable_type(0, "X")


class TestGurobiParameters:
    """Test parameter accessors."""

    def setup_method(self):
        self.qp = GurobiDense(1, 0, 0)

    def teardown_method(self):
        self.qp.close()

    def test_tolerances(self):
        self.qp.feasibility_tolerance(1e-8)
        self.qp.optimality_tolerance(1e-7)

        assert self.qp.feasibility_tolerance() == pytest.approx(1e-8)
        assert self.qp.optimality_tolerance() == pytest.approx(1e-7)

    def test_tolerance_out_of_range(self):
        with pytest.raises(ValueError):
            self.qp.feasibility_tolerance(1.0)
        with pytest.raises(ValueError):
            self.qp.optimality_tolerance(1e-12)

    def test_warm_start(self):
        assert self.qp.warm_start() == WarmStatus.DEFAULT
        self.qp.warm_start(WarmStatus.DUAL)
        assert self.qp.warm_start() == WarmStatus.DUAL

    def test_generic_params(self):
        self.qp.set_param("TimeLimit", 5.0)
        assert self.qp.get_param("TimeLimit") == 5.0

        self.qp.display_output(False)
        assert self.qp.get_param("OutputFlag") == 0

    def test_inform(self, capsys):
        self.qp.inform()
        assert "not been run" in capsys.readouterr().out

    def test_context_manager(self):
        with GurobiDense(2, 0, 0) as qp:
            assert qp.nrvar == 2
        assert qp.model is None

    def test_closed_model(self):
        """A closed adapter raises a package error instead of touching Gurobi."""
        qp = GurobiDense(1, 0, 0)
        qp.close()
        qp.close()

        with pytest.raises(GurobiQPError, match="closed"):
            qp.problem(2, 0, 0)
        with pytest.raises(GurobiQPError, match="closed"):
            qp.solve(np.eye(1), np.zeros(1), np.zeros((0, 1)), np.zeros(0),
                     np.zeros((0, 1)), np.zeros(0), np.zeros(1), np.ones(1))
        with pytest.raises(GurobiQPError):
            qp.feasibility_tolerance()
        with pytest.raises(GurobiQPError):
            qp.set_variable_type(0, GRB.INTEGER)
