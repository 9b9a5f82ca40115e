"""Tests for integrators, trajectories and step callbacks."""

import numpy as np
import pytest

from nbodysim.errors import (
    IntegrationError,
    OutOfDomainError,
    UnsupportedIntegratorError,
)
from nbodysim.integrators import (
    CallbackSet,
    DiscreteCallback,
    FlatTrajectory,
    IntegratorFamily,
    IntegratorKind,
    ManifoldProjection,
    ODEProblem,
    PartitionedState,
    PartitionedTrajectory,
    ScipyIntegrator,
    SecondOrderODEProblem,
    StepState,
    TrajectoryLayout,
    VelocityVerletIntegrator,
    Yoshida4Integrator,
    create_integrator,
)


def harmonic_rhs(t, u):
    """Flat (3, 2) oscillator: velocities in column 0, positions in column 1."""
    return np.column_stack([-u[:, 1], u[:, 0]])


@pytest.fixture
def flat_oscillator():
    """Unit oscillator starting at x = 1, v = 0 on every axis."""
    u0 = np.column_stack([np.zeros(3), np.ones(3)])
    return ODEProblem(harmonic_rhs, u0, (0.0, 1.0))


@pytest.fixture
def second_order_oscillator():
    return SecondOrderODEProblem(
        lambda x: -x, np.zeros((3, 1)), np.ones((3, 1)), (0.0, 1.0)
    )


class TestIntegratorKind:
    """Test integrator kind resolution."""

    def test_families(self):
        assert IntegratorKind.RK45.family is IntegratorFamily.GENERIC
        assert IntegratorKind.DOP853.family is IntegratorFamily.GENERIC
        assert IntegratorKind.VELOCITY_VERLET.family is IntegratorFamily.SYMPLECTIC
        assert IntegratorKind.YOSHIDA4.family is IntegratorFamily.SYMPLECTIC

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("RK45", IntegratorKind.RK45),
            ("rk23", IntegratorKind.RK23),
            ("velocity_verlet", IntegratorKind.VELOCITY_VERLET),
            ("VELOCITY_VERLET", IntegratorKind.VELOCITY_VERLET),
            (IntegratorKind.YOSHIDA4, IntegratorKind.YOSHIDA4),
        ],
    )
    def test_parse(self, value, expected):
        assert IntegratorKind.parse(value) is expected

    @pytest.mark.parametrize("value", ["Tsit5", "euler", "", None, 3])
    def test_parse_unsupported(self, value):
        with pytest.raises(UnsupportedIntegratorError):
            IntegratorKind.parse(value)

    def test_create_integrator(self):
        assert isinstance(create_integrator("RK45"), ScipyIntegrator)
        assert isinstance(
            create_integrator("velocity_verlet", dt=0.1), VelocityVerletIntegrator
        )
        assert isinstance(create_integrator("yoshida4", dt=0.1), Yoshida4Integrator)

    def test_create_unsupported(self):
        with pytest.raises(UnsupportedIntegratorError):
            create_integrator("leapfrog")


class TestTrajectories:
    """Test trajectory interpolation and domain handling."""

    @pytest.fixture
    def linear_motion(self):
        """Two bodies in uniform motion, recorded at t = 0, 1, 2."""
        t = np.array([0.0, 1.0, 2.0])
        x0 = np.array([[0.0, 1.0], [0.0, 2.0], [0.0, 3.0]])
        v = np.array([[1.0, -1.0], [0.5, 0.0], [0.0, 2.0]])
        positions = np.array([x0 + v * ti for ti in t])
        velocities = np.array([v for _ in t])
        accelerations = np.zeros_like(positions)
        return t, x0, v, positions, velocities, accelerations

    def test_partitioned_interpolation(self, linear_motion):
        t, x0, v, positions, velocities, accelerations = linear_motion
        trajectory = PartitionedTrajectory(t, velocities, positions, accelerations)

        state = trajectory(0.5)

        assert trajectory.layout is TrajectoryLayout.PARTITIONED
        assert isinstance(state, PartitionedState)
        assert np.allclose(state.positions, x0 + 0.5 * v)
        assert np.allclose(state.velocities, v)

    def test_flat_interpolation(self, linear_motion):
        t, x0, v, positions, velocities, accelerations = linear_motion
        u = np.concatenate([velocities, positions], axis=2)
        du = np.concatenate([accelerations, velocities], axis=2)
        trajectory = FlatTrajectory(t, u, du)

        state = trajectory(1.25)

        assert trajectory.layout is TrajectoryLayout.FLAT
        assert state.shape == (3, 4)
        assert np.allclose(state[:, :2], v)
        assert np.allclose(state[:, 2:], x0 + 1.25 * v)

    def test_recorded_times_exact(self, linear_motion):
        t, _, _, positions, velocities, accelerations = linear_motion
        trajectory = PartitionedTrajectory(t, velocities, positions, accelerations)

        for k, ti in enumerate(t):
            assert np.array_equal(trajectory(ti).positions, positions[k])

    @pytest.mark.parametrize("time", [-1e-9, 2.000001, np.nan])
    def test_out_of_domain(self, linear_motion, time):
        t, _, _, positions, velocities, accelerations = linear_motion
        trajectory = PartitionedTrajectory(t, velocities, positions, accelerations)

        with pytest.raises(OutOfDomainError):
            trajectory(time)

    def test_grid_and_span(self, linear_motion):
        t, _, _, positions, velocities, accelerations = linear_motion
        trajectory = PartitionedTrajectory(t, velocities, positions, accelerations)

        assert len(trajectory) == 3
        assert trajectory.t_span == (0.0, 2.0)
        assert np.array_equal(trajectory.t, t)

    def test_read_only(self, linear_motion):
        t, _, _, positions, velocities, accelerations = linear_motion
        trajectory = PartitionedTrajectory(t, velocities, positions, accelerations)

        with pytest.raises(ValueError):
            trajectory.positions[0, 0, 0] = 1.0
        with pytest.raises(ValueError):
            trajectory.t[0] = 1.0

        # Returned states are copies
        state = trajectory(0.0)
        state.positions[0, 0] = 99.0
        assert trajectory(0.0).positions[0, 0] == 0.0

    def test_times_must_increase(self):
        block = np.zeros((2, 3, 1))
        with pytest.raises(ValueError):
            PartitionedTrajectory([1.0, 1.0], block, block, block)

    def test_shape_mismatch(self):
        with pytest.raises(ValueError):
            FlatTrajectory([0.0, 1.0], np.zeros((2, 3, 2)), np.zeros((3, 3, 2)))

    def test_single_step(self):
        block = np.ones((1, 3, 2))
        trajectory = PartitionedTrajectory([0.0], block, block, block)

        assert np.array_equal(trajectory(0.0).positions, np.ones((3, 2)))
        with pytest.raises(OutOfDomainError):
            trajectory(0.1)


class TestStepCallbacks:
    """Test callback composition."""

    def test_step_state(self):
        step = StepState(1.5, 1.0, np.zeros(3))
        assert step.dt == pytest.approx(0.5)
        assert not step.modified
        step.mark_modified()
        assert step.modified

    def test_discrete_callback_condition(self):
        calls = []
        callback = DiscreteCallback(
            lambda step: step.t > 1.0, lambda step: calls.append(step.t)
        )

        callback(StepState(0.5, 0.0, None))
        callback(StepState(1.5, 0.5, None))

        assert calls == [1.5]

    def test_callback_set_order(self):
        calls = []
        first = DiscreteCallback(lambda step: True, lambda step: calls.append("a"))
        second = DiscreteCallback(lambda step: True, lambda step: calls.append("b"))
        callbacks = CallbackSet(first, second)

        callbacks(StepState(1.0, 0.0, None))

        assert calls == ["a", "b"]
        assert len(callbacks) == 2
        assert not CallbackSet()


class TestManifoldProjection:
    """Test projection onto a residual's zero set."""

    def test_projects_masked_components(self):
        u = np.zeros((3, 2))
        mask = np.zeros((3, 2), dtype=bool)
        mask[:, 0] = True
        projection = ManifoldProjection(lambda x: x.sum() - 3.0, mask=mask)

        step = StepState(1.0, 0.0, u)
        projection(step)

        assert step.modified
        assert u.sum() == pytest.approx(3.0, abs=1e-9)
        assert np.array_equal(u[:, 1], np.zeros(3))

    def test_analytic_gradient(self):
        """Test projection of a vector onto the unit sphere."""
        u = np.array([[3.0], [4.0], [0.0]])
        projection = ManifoldProjection(
            lambda x: float(np.sum(x**2)) - 1.0,
            gradient=lambda x: 2.0 * x,
            abstol=1e-12,
        )

        projection(StepState(1.0, 0.0, u))

        assert np.linalg.norm(u) == pytest.approx(1.0, abs=1e-10)
        # Direction is preserved
        assert np.allclose(u[:, 0], [0.6, 0.8, 0.0])

    def test_already_on_manifold(self):
        u = np.ones((3, 1))
        step = StepState(1.0, 0.0, u)
        ManifoldProjection(lambda x: x.sum() - 3.0)(step)
        assert not step.modified

    def test_zero_gradient_raises(self):
        projection = ManifoldProjection(lambda x: 1.0)
        with pytest.raises(IntegrationError):
            projection(StepState(1.0, 0.0, np.zeros((3, 1))))


class TestScipyIntegrator:
    """Test the adaptive Runge-Kutta integrators."""

    @pytest.mark.parametrize("method", ["RK23", "RK45", "DOP853"])
    def test_harmonic_oscillator(self, flat_oscillator, method):
        integrator = ScipyIntegrator(method=method, rtol=1e-10, atol=1e-12)

        trajectory = integrator.solve(flat_oscillator)

        assert trajectory.layout is TrajectoryLayout.FLAT
        assert trajectory.t_span == (0.0, 1.0)
        final = trajectory(1.0)
        assert np.allclose(final[:, 1], np.cos(1.0), atol=1e-7)
        assert np.allclose(final[:, 0], -np.sin(1.0), atol=1e-7)

    def test_dense_between_steps(self, flat_oscillator):
        trajectory = ScipyIntegrator(rtol=1e-10, atol=1e-12).solve(flat_oscillator)

        state = trajectory(0.37)

        assert np.allclose(state[:, 1], np.cos(0.37), atol=1e-4)

    def test_start_state_exact(self, flat_oscillator):
        trajectory = ScipyIntegrator().solve(flat_oscillator)
        assert np.array_equal(trajectory(0.0), flat_oscillator.u0)

    def test_callback_once_per_accepted_step(self, flat_oscillator):
        calls = []
        callback = DiscreteCallback(
            lambda step: True, lambda step: calls.append(step.t)
        )

        trajectory = ScipyIntegrator().solve(flat_oscillator, callback=callback)

        assert len(calls) == len(trajectory) - 1
        assert np.array_equal(calls, trajectory.t[1:])

    def test_modified_state_recorded(self, flat_oscillator):
        """Test that a callback's modification is recorded and continued from."""

        def stop(step):
            step.u[:, 0] = 0.0
            step.u[:, 1] = 1.0
            step.mark_modified()

        callback = DiscreteCallback(lambda step: True, stop)
        trajectory = ScipyIntegrator().solve(flat_oscillator, callback=callback)

        assert np.allclose(trajectory(1.0)[:, 1], 1.0)

    def test_max_steps(self, flat_oscillator):
        with pytest.raises(IntegrationError):
            ScipyIntegrator(rtol=1e-10, atol=1e-12).solve(flat_oscillator, max_steps=1)

    def test_unknown_method(self):
        with pytest.raises(ValueError):
            ScipyIntegrator(method="Euler")


class TestSymplecticIntegrators:
    """Test velocity Verlet and Yoshida integrators."""

    def test_time_grid(self, second_order_oscillator):
        trajectory = VelocityVerletIntegrator(dt=0.3).solve(second_order_oscillator)

        assert trajectory.layout is TrajectoryLayout.PARTITIONED
        assert np.allclose(trajectory.t, [0.0, 0.3, 0.6, 0.9, 1.0])
        assert trajectory.t[-1] == 1.0

    def test_exact_grid(self, second_order_oscillator):
        trajectory = VelocityVerletIntegrator(dt=0.1).solve(second_order_oscillator)
        assert len(trajectory) == 11

    def test_span_shorter_than_step(self):
        """Test that a span far below dt still records the start state."""
        problem = SecondOrderODEProblem(
            lambda x: -x, np.zeros((3, 1)), np.ones((3, 1)), (0.0, 1e-12)
        )
        trajectory = VelocityVerletIntegrator(dt=0.01).solve(problem)

        assert np.array_equal(trajectory.t, [0.0, 1e-12])
        assert np.array_equal(trajectory(0.0).positions, np.ones((3, 1)))

    def test_velocity_verlet_accuracy(self, second_order_oscillator):
        trajectory = VelocityVerletIntegrator(dt=0.001).solve(second_order_oscillator)

        state = trajectory(1.0)

        assert np.allclose(state.positions, np.cos(1.0), atol=1e-5)
        assert np.allclose(state.velocities, -np.sin(1.0), atol=1e-5)

    def test_yoshida_accuracy(self, second_order_oscillator):
        trajectory = Yoshida4Integrator(dt=0.01).solve(second_order_oscillator)

        state = trajectory(1.0)

        assert np.allclose(state.positions, np.cos(1.0), atol=1e-6)

    def test_yoshida_weights_sum_to_one(self):
        assert sum(Yoshida4Integrator.weights) == pytest.approx(1.0)

    def test_energy_bounded(self):
        """Test that oscillator energy does not drift over many periods."""
        problem = SecondOrderODEProblem(
            lambda x: -x, np.zeros((3, 1)), np.ones((3, 1)), (0.0, 100.0)
        )
        trajectory = VelocityVerletIntegrator(dt=0.05).solve(problem)

        energy = 0.5 * (trajectory.velocities**2 + trajectory.positions**2)

        assert np.max(np.abs(energy - 0.5)) < 1e-3

    def test_callback_receives_partitioned_state(self, second_order_oscillator):
        seen = []

        def affect(step):
            seen.append((step.t, step.t_prev, type(step.u)))

        callback = DiscreteCallback(lambda step: True, affect)
        trajectory = VelocityVerletIntegrator(dt=0.25).solve(
            second_order_oscillator, callback=callback
        )

        assert len(seen) == len(trajectory) - 1
        assert seen[0] == (0.25, 0.0, PartitionedState)

    def test_velocity_reset_by_callback(self, second_order_oscillator):
        """Test in-place velocity changes are recorded."""

        def freeze(step):
            step.u.velocities[:] = 0.0
            step.mark_modified()

        callback = DiscreteCallback(lambda step: True, freeze)
        trajectory = VelocityVerletIntegrator(dt=0.1).solve(
            second_order_oscillator, callback=callback
        )

        assert np.array_equal(trajectory.velocities[1:], np.zeros((10, 3, 1)))

    def test_invalid_dt(self):
        with pytest.raises(ValueError):
            VelocityVerletIntegrator(dt=0.0)

    def test_max_steps(self, second_order_oscillator):
        with pytest.raises(IntegrationError):
            VelocityVerletIntegrator(dt=0.001).solve(
                second_order_oscillator, max_steps=10
            )

    def test_invalid_span(self):
        with pytest.raises(ValueError):
            SecondOrderODEProblem(
                lambda x: -x, np.zeros((3, 1)), np.ones((3, 1)), (1.0, 0.0)
            )
