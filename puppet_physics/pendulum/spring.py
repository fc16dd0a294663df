"""
Spring Pendulum - a unit mass hanging from the anchor on a damped spring.

The bob rests ``length`` pixels straight below the anchor. The spring
constant comes from the resonant frequency, ``k = (2*pi*f)^2``, and each
world axis is damped as a fraction of critical damping:

- horizontal (x) by the angle damping ratio
- vertical (y) by the length damping ratio

Gravity pulls the bob down, and the spring's unloaded rest point is raised
by ``g / k`` so the hanging equilibrium stays at the rest length.

Each tick is split into as many RK4 steps as the stiffest decay mode
needs, so stiff or heavily damped springs stay stable and never overshoot.
"""

import math
from dataclasses import dataclass, field
from typing import ClassVar, Optional

import numpy as np

from ..core.props import SimplePhysicsProps
from ..core.runge_kutta import rk4_step
from ..core.vector import Vec2


@dataclass
class SpringPendulumSystem:
    """
    Damped mass-spring hanging from a moving anchor.

    The bob lives in the anchor's space (world or local), so moving the
    anchor stretches the spring and the bob follows with lag.
    """
    # Upper bound on integrator steps inside one tick
    MAX_SUBSTEPS: ClassVar[int] = 1024

    bob: Optional[Vec2] = None
    dbob: Vec2 = field(default_factory=Vec2)

    def tick(
        self,
        anchor: Vec2,
        props: SimplePhysicsProps,
        dt: float,
        gravity_scale: float = 1.0
    ) -> Vec2:
        """Advance the spring by ``dt`` and return the new bob position"""
        if not anchor.is_finite():
            return self.bob if self.bob is not None else Vec2()

        if self.bob is None:
            self.bob = self.equilibrium(anchor, props)
            self.dbob = Vec2()

        if dt <= 0:
            return self.bob

        steps = self.substeps(props, dt)
        step_dt = dt / steps
        derivative = self._derivative(props, anchor, gravity_scale)

        state = np.array([self.bob.x, self.bob.y, self.dbob.x, self.dbob.y], dtype=np.float64)
        for _ in range(steps):
            state = rk4_step(state, derivative, step_dt)

        self.bob = Vec2(float(state[0]), float(state[1]))
        self.dbob = Vec2(float(state[2]), float(state[3]))
        return self.bob

    def substeps(self, props: SimplePhysicsProps, dt: float) -> int:
        """
        Number of RK4 steps for a tick of ``dt`` seconds.

        Keeps ``step_dt * rate <= 1`` where ``rate`` is the magnitude of the
        fastest eigenvalue of the damped spring. In that range every RK4
        multiplier of a critically or over-damped axis is positive, so the
        response approaches its target without crossing it.
        """
        omega = 2.0 * math.pi * props.final_frequency()
        zeta = max(props.final_angle_damping(), props.final_length_damping(), 0.0)
        rate = omega * max(1.0, zeta + math.sqrt(max(zeta * zeta - 1.0, 0.0)))
        return min(max(1, math.ceil(dt * rate)), self.MAX_SUBSTEPS)

    def equilibrium(self, anchor: Vec2, props: SimplePhysicsProps) -> Vec2:
        """Where the bob hangs at rest below ``anchor``"""
        return anchor + Vec2(0.0, props.final_length())

    def _derivative(self, props: SimplePhysicsProps, anchor: Vec2, gravity_scale: float):
        """Equation of motion for (x, y, vx, vy)"""
        omega = 2.0 * math.pi * props.final_frequency()
        k = omega * omega
        crit_damp = 2.0 * omega
        damp_x = props.final_angle_damping() * crit_damp
        damp_y = props.final_length_damping() * crit_damp
        g = props.final_gravity() * gravity_scale

        # Unloaded rest point, lifted so gravity and spring balance at the rest length
        rest = self.equilibrium(anchor, props) - Vec2(0.0, g / k)

        def eval_state(state: np.ndarray, t: float) -> np.ndarray:
            x, y, vx, vy = state
            ax = -k * (x - rest.x) - damp_x * vx
            ay = -k * (y - rest.y) - damp_y * vy + g
            return np.array([vx, vy, ax, ay])

        return eval_state

    def amplitude(self, anchor: Vec2, props: SimplePhysicsProps) -> float:
        """Undamped oscillation amplitude about the hanging equilibrium"""
        if self.bob is None:
            return 0.0
        omega = 2.0 * math.pi * props.final_frequency()
        offset = self.bob - self.equilibrium(anchor, props)
        return float(np.sqrt(offset.dot(offset) + self.dbob.dot(self.dbob) / (omega * omega)))
