import math

import numpy as np
import pytest

from orbit_probe.config import settings
from orbit_probe.physics.forces import (
    CompositeForce,
    DegenerateStateError,
    NewtonianGravity,
    TangentialThrust,
    default_force_model,
)
from orbit_probe.physics.solver import RK4Solver, TaylorSolver, make_solver
from orbit_probe.physics.state import State
from orbit_probe.physics.thrust import ThrustCommand
from orbit_probe.physics.utils import (
    angular_momentum,
    circular_speed,
    orbital_period,
    radius,
    specific_energy,
    speed,
)

ISS_RADIUS = settings.EARTH_RADIUS + 408_000.0


def _reference_rk4(x, y, vx, vy, dt, gm, command=0, thrust=0.0):
    """Scalar RK4 with the command held over all four stages, independent of the package's vector types."""
    def f(px, py, qx, qy):
        r3 = (px * px + py * py) ** 1.5
        ax, ay = -gm * px / r3, -gm * py / r3
        if command:
            v = math.hypot(qx, qy)
            ax += command * thrust * qx / v
            ay += command * thrust * qy / v
        return qx, qy, ax, ay

    k1 = f(x, y, vx, vy)
    k2 = f(x + dt / 2 * k1[0], y + dt / 2 * k1[1], vx + dt / 2 * k1[2], vy + dt / 2 * k1[3])
    k3 = f(x + dt / 2 * k2[0], y + dt / 2 * k2[1], vx + dt / 2 * k2[2], vy + dt / 2 * k2[3])
    k4 = f(x + dt * k3[0], y + dt * k3[1], vx + dt * k3[2], vy + dt * k3[3])
    return tuple(
        s + dt / 6 * (a + 2 * b + 2 * c + d)
        for s, a, b, c, d in zip((x, y, vx, vy), k1, k2, k3, k4)
    )


def _circular_state(r):
    return State((0.0, r), (circular_speed(r), 0.0))


def test_single_step_golden_values():
    solver = RK4Solver(default_force_model(), dt=10.0)
    start = State((0.0, 6_779_000.0), (8426.0, 0.0))

    nxt = solver.step(start, ThrustCommand.NONE)

    # tangential motion carries x forward, gravity pulls y inward
    assert nxt.x > start.x
    assert nxt.y < start.y

    # Taylor series of the two-body motion about t=0 (terms beyond these are < 1 cm)
    assert nxt.x == pytest.approx(84258.203, abs=0.05)
    assert nxt.y == pytest.approx(6778566.325, abs=0.1)
    assert nxt.vx == pytest.approx(8425.461, abs=0.02)
    assert nxt.vy == pytest.approx(-86.735, abs=0.02)

    expected = _reference_rk4(0.0, 6_779_000.0, 8426.0, 0.0, 10.0, settings.GM)
    assert nxt.as_tuple() == pytest.approx(expected, rel=1e-12, abs=1e-9)


@pytest.mark.parametrize("command", [ThrustCommand.PROGRADE, ThrustCommand.RETROGRADE])
def test_thrust_held_across_all_rk4_stages(command):
    solver = RK4Solver(CompositeForce(NewtonianGravity(), TangentialThrust(2.0)), dt=30.0)
    start = State((1.0e6, 6.7e6), (7000.0, -1500.0))

    nxt = solver.step(start, command)

    expected = _reference_rk4(1.0e6, 6.7e6, 7000.0, -1500.0, 30.0, settings.GM, int(command), 2.0)
    assert nxt.as_tuple() == pytest.approx(expected, rel=1e-12, abs=1e-9)


def test_rk4_accepts_a_single_force_model():
    solver = RK4Solver(NewtonianGravity(), dt=10.0)

    nxt = solver.step(State((0.0, 6_779_000.0), (8426.0, 0.0)))

    expected = _reference_rk4(0.0, 6_779_000.0, 8426.0, 0.0, 10.0, settings.GM)
    assert nxt.as_tuple() == pytest.approx(expected, rel=1e-12, abs=1e-9)


def test_taylor_step_is_constant_acceleration():
    dt = 7.0
    solver = TaylorSolver(CompositeForce(NewtonianGravity(), TangentialThrust(2.0)), dt)
    x, y, vx, vy = 0.0, 6_779_000.0, 8426.0, 0.0

    nxt = solver.step(State((x, y), (vx, vy)), ThrustCommand.PROGRADE)

    g = settings.GM / y**2
    ax, ay = 2.0, -g
    expected = (
        x + vx * dt + 0.5 * ax * dt * dt,
        y + vy * dt + 0.5 * ay * dt * dt,
        vx + ax * dt,
        vy + ay * dt,
    )
    assert nxt.as_tuple() == pytest.approx(expected, rel=1e-12, abs=1e-9)


def test_circular_orbit_radius_holds_over_one_period():
    dt = 10.0
    solver = RK4Solver(default_force_model(), dt=dt)
    state = _circular_state(ISS_RADIUS)
    steps = math.ceil(orbital_period(ISS_RADIUS) / dt)

    radii = []
    for _ in range(steps):
        state = solver.step(state, ThrustCommand.NONE)
        radii.append(radius(state))

    deviation = np.max(np.abs(np.array(radii) - ISS_RADIUS)) / ISS_RADIUS
    assert deviation < 1e-3


def test_circular_orbit_energy_and_angular_momentum_drift_small():
    dt = 10.0
    solver = RK4Solver(default_force_model(), dt=dt)
    state = _circular_state(ISS_RADIUS)
    e0, h0 = specific_energy(state), angular_momentum(state)

    for _ in range(math.ceil(orbital_period(ISS_RADIUS) / dt)):
        state = solver.step(state)

    assert abs((specific_energy(state) - e0) / e0) < 1e-6
    assert abs((angular_momentum(state) - h0) / h0) < 1e-6


def test_rk4_tracks_circle_better_than_constant_acceleration_step():
    dt = 10.0
    force = default_force_model()
    rk4 = RK4Solver(force, dt)
    taylor = TaylorSolver(force, dt)
    s_rk4 = s_taylor = _circular_state(ISS_RADIUS)

    worst_rk4 = worst_taylor = 0.0
    for _ in range(math.ceil(orbital_period(ISS_RADIUS) / dt)):
        s_rk4 = rk4.step(s_rk4)
        s_taylor = taylor.step(s_taylor)
        worst_rk4 = max(worst_rk4, abs(radius(s_rk4) - ISS_RADIUS))
        worst_taylor = max(worst_taylor, abs(radius(s_taylor) - ISS_RADIUS))

    assert worst_rk4 < worst_taylor


def test_prograde_thrust_increases_speed():
    solver = RK4Solver(default_force_model(), dt=settings.DT)
    start = State((0.0, ISS_RADIUS), (8426.0, 0.0))

    coast = burn = retro = start
    for _ in range(50):
        coast = solver.step(coast, ThrustCommand.NONE)
        burn = solver.step(burn, ThrustCommand.PROGRADE)
        retro = solver.step(retro, ThrustCommand.RETROGRADE)

    assert speed(burn) > speed(coast)
    assert speed(retro) < speed(coast)


def test_step_returns_new_state_and_leaves_input_untouched():
    solver = RK4Solver(default_force_model(), dt=5.0)
    start = State((0.0, ISS_RADIUS), (8426.0, 0.0))
    before = start.as_tuple()

    nxt = solver.step(start, ThrustCommand.PROGRADE)

    assert nxt is not start
    assert start.as_tuple() == before


def test_step_from_origin_propagates_degenerate_error():
    solver = RK4Solver(default_force_model(), dt=1.0)
    with pytest.raises(DegenerateStateError):
        solver.step(State((0.0, 0.0), (1.0, 0.0)))


@pytest.mark.parametrize("dt", [0.0, -1.0, float("nan"), float("inf")])
def test_invalid_time_step_rejected_at_construction(dt):
    with pytest.raises(ValueError):
        RK4Solver(default_force_model(), dt)
    with pytest.raises(ValueError):
        TaylorSolver(default_force_model(), dt)


def test_make_solver_selects_by_name():
    force = default_force_model()
    assert isinstance(make_solver("rk4", force, 1.0), RK4Solver)
    assert isinstance(make_solver("TAYLOR", force, 1.0), TaylorSolver)
    with pytest.raises(ValueError):
        make_solver("euler", force, 1.0)
