"""
Rigid Pendulum - a single rod swinging under gravity from a moving pivot.

Angle 0 hangs straight down (+y). The bob sits at
``anchor + length * (sin(angle), cos(angle))``.

Moving the pivot drives the rod through the pseudo-force of an
accelerating frame. The pivot acceleration is estimated from two
consecutive finite-difference velocities, so a pivot that keeps a
constant velocity stops driving the rod once the rod has caught up.
"""

import math
from dataclasses import dataclass, field
from typing import ClassVar, Optional

import numpy as np

from ..core.props import SimplePhysicsProps
from ..core.runge_kutta import rk4_step
from ..core.vector import Vec2


@dataclass
class RigidPendulumSystem:
    """
    Rigid rod pendulum.

    Example:
        system = RigidPendulumSystem(angle=0.5)
        props = SimplePhysicsProps(length=100)

        # Each frame
        bob = system.tick(anchor, props, dt, gravity_scale=9800)
    """
    MAX_ANGULAR_VELOCITY: ClassVar[float] = 200.0

    angle: float = 0.0
    dangle: float = 0.0
    bob: Vec2 = field(default_factory=Vec2)

    # Pivot as seen on the previous tick
    anchor: Optional[Vec2] = None
    anchor_velocity: Vec2 = field(default_factory=Vec2)

    def tick(
        self,
        anchor: Vec2,
        props: SimplePhysicsProps,
        dt: float,
        gravity_scale: float = 1.0
    ) -> Vec2:
        """
        Advance the pendulum by ``dt`` and return the new bob position.

        Args:
            anchor: Pivot position this tick
            props: Driver parameter set
            dt: Timestep in seconds (0 re-places the bob without integrating)
            gravity_scale: Puppet gravity in px/s^2

        Returns:
            Bob position in the same space as ``anchor``
        """
        if not anchor.is_finite():
            return self.bob

        length = props.final_length()

        if self.anchor is None:
            self.anchor = anchor

        if dt > 0:
            velocity = (anchor - self.anchor) / dt
            accel = (velocity - self.anchor_velocity) / dt
            self.anchor_velocity = velocity
            self.anchor = anchor

            state = np.array([self.angle, self.dangle], dtype=np.float64)
            state = rk4_step(state, self._derivative(props, length, gravity_scale, accel), dt)

            # Short rods are stiff; keep the state bounded
            self.angle = math.remainder(float(state[0]), 2 * math.pi)
            self.dangle = float(np.clip(state[1], -self.MAX_ANGULAR_VELOCITY, self.MAX_ANGULAR_VELOCITY))
        else:
            self.anchor = anchor

        self.bob = anchor + Vec2.from_angle(self.angle, length)
        return self.bob

    def _derivative(
        self,
        props: SimplePhysicsProps,
        length: float,
        gravity_scale: float,
        accel: Vec2
    ):
        """Equation of motion for (angle, angular velocity)"""
        ratio = props.final_gravity() * gravity_scale / length
        damping = props.final_angle_damping() * 2.0 * np.sqrt(abs(ratio))
        ax = accel.x / length
        ay = accel.y / length

        def eval_state(state: np.ndarray, t: float) -> np.ndarray:
            angle, dangle = state
            s, c = np.sin(angle), np.cos(angle)
            ddangle = -ratio * s - damping * dangle - (ax * c - ay * s)
            return np.array([dangle, ddangle])

        return eval_state
