"""
Classic 4th-order Runge-Kutta stepper.

The state can be anything that supports ``state + state`` and
``state * float``: floats, numpy arrays or Vec2. The stepper never
subdivides ``dt``; callers that may see long frames substep themselves.
"""

from typing import Callable, TypeVar

State = TypeVar('State')
Derivative = Callable[[State, float], State]


def rk4_step(state: State, derivative: Derivative, dt: float, t: float = 0.0) -> State:
    """
    Advance ``state`` by one step of size ``dt``.

    Args:
        state: Current state vector
        derivative: f(state, t) -> d(state)/dt
        dt: Step size in seconds
        t: Time at the start of the step

    Returns:
        State at ``t + dt`` (local truncation error O(dt^5))
    """
    half = dt * 0.5

    k1 = derivative(state, t)
    k2 = derivative(state + k1 * half, t + half)
    k3 = derivative(state + k2 * half, t + half)
    k4 = derivative(state + k3 * dt, t + dt)

    return state + (k1 + k2 * 2.0 + k3 * 2.0 + k4) * (dt / 6.0)


def integrate(
    state: State,
    derivative: Derivative,
    dt: float,
    steps: int,
    t0: float = 0.0
) -> State:
    """Apply ``steps`` fixed RK4 steps starting at time ``t0``"""
    t = t0
    for _ in range(steps):
        state = rk4_step(state, derivative, dt, t)
        t += dt
    return state
