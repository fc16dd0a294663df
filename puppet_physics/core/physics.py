"""
Simple Physics - secondary motion drivers for rigged 2D puppets

Dangling parts (hair, cloth, accessories) get their per-frame offset from
a tiny simulation that reacts to the motion of an anchor point:

- SimplePhysicsSystem: the closed set of physics models (rigid or spring
  pendulum) with exhaustive dispatch
- SimplePhysics: a driver binding one model to a parameter set, a mapping
  mode and the animation parameter it writes
- update_physics: the per-frame pass over every driver of a puppet

Example:
    driver = SimplePhysics(
        param=hair_param_id,
        system=SimplePhysicsSystem.new_spring_pendulum(),
        map_mode=ParamMapMode.XY,
        props=SimplePhysicsProps(length=80, frequency=2.0),
    )

    # Each frame
    value = driver.update(dt, anchor, gravity_scale=9800)
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

import numpy as np

from .config import DEFAULT_SETTINGS, SimulationSettings
from .props import ParamMapMode, SimplePhysicsProps
from .vector import Vec2
from ..pendulum.rigid import RigidPendulumSystem
from ..pendulum.spring import SpringPendulumSystem


logger = logging.getLogger(__name__)


# =============================================================================
# Model Dispatch
# =============================================================================

class SystemKind(Enum):
    """The physics models a driver can run. There are exactly two."""
    RIGID_PENDULUM = "rigid_pendulum"
    SPRING_PENDULUM = "spring_pendulum"


SYSTEM_NAMES = {
    'rigid_pendulum': SystemKind.RIGID_PENDULUM,
    'rigid': SystemKind.RIGID_PENDULUM,
    'pendulum': SystemKind.RIGID_PENDULUM,  # Alias
    'spring_pendulum': SystemKind.SPRING_PENDULUM,
    'spring': SystemKind.SPRING_PENDULUM,
    'springy': SystemKind.SPRING_PENDULUM,  # Alias
}


def get_system_kind(name: str) -> SystemKind:
    """Get a system kind by name"""
    key = name.lower().replace('-', '_')
    if key not in SYSTEM_NAMES:
        raise ValueError(f"Unknown physics system: {name}. Available: {sorted(SYSTEM_NAMES)}")
    return SYSTEM_NAMES[key]


PendulumModel = Union[RigidPendulumSystem, SpringPendulumSystem]


@dataclass
class SimplePhysicsSystem:
    """Tagged union over the two pendulum models"""
    kind: SystemKind
    model: PendulumModel

    def __post_init__(self):
        expected = {
            SystemKind.RIGID_PENDULUM: RigidPendulumSystem,
            SystemKind.SPRING_PENDULUM: SpringPendulumSystem,
        }[self.kind]
        if not isinstance(self.model, expected):
            raise TypeError(
                f"{self.kind.value} needs a {expected.__name__}, got {type(self.model).__name__}"
            )

    @classmethod
    def new_rigid_pendulum(cls) -> 'SimplePhysicsSystem':
        """Rigid pendulum hanging at rest"""
        return cls(SystemKind.RIGID_PENDULUM, RigidPendulumSystem())

    @classmethod
    def new_spring_pendulum(cls) -> 'SimplePhysicsSystem':
        """Spring pendulum that settles at its rest position on the first tick"""
        return cls(SystemKind.SPRING_PENDULUM, SpringPendulumSystem())

    @classmethod
    def from_kind(cls, kind: SystemKind) -> 'SimplePhysicsSystem':
        if kind is SystemKind.RIGID_PENDULUM:
            return cls.new_rigid_pendulum()
        else:  # SystemKind.SPRING_PENDULUM
            return cls.new_spring_pendulum()

    def tick(
        self,
        anchor: Vec2,
        props: SimplePhysicsProps,
        dt: float,
        gravity_scale: float = 1.0
    ) -> Vec2:
        """Advance the model by ``dt`` and return the bob position"""
        if self.kind is SystemKind.RIGID_PENDULUM:
            return self.model.tick(anchor, props, dt, gravity_scale)
        else:  # SystemKind.SPRING_PENDULUM
            return self.model.tick(anchor, props, dt, gravity_scale)


# =============================================================================
# Output Mapping
# =============================================================================

def map_output(
    bob: Vec2,
    anchor: Vec2,
    props: SimplePhysicsProps,
    map_mode: ParamMapMode
) -> Vec2:
    """
    Convert a bob position into a parameter value.

    The bob offset is normalized by the rest length first, so the rest
    pose (straight down, one length away) maps to (0, 0) in XY mode and
    to (0, 1) in AngleLength mode.

    Args:
        bob: Bob position
        anchor: Anchor position in the same space
        props: Parameter set (length and output scale)
        map_mode: Mapping rule

    Returns:
        Scaled 2D parameter value
    """
    local = (bob - anchor) / props.final_length()

    if map_mode is ParamMapMode.XY:
        # Param Y goes up
        value = Vec2(local.x, 1.0 - local.y)
    else:  # ParamMapMode.ANGLE_LENGTH
        angle = float(np.arctan2(local.x, local.y)) / math.pi
        value = Vec2(angle, local.length)

    return value.scale(props.final_output_scale())


# =============================================================================
# Driver
# =============================================================================

@dataclass
class SimplePhysics:
    """
    One physics-enabled node: a model, its parameters and its output target.

    Owns all mutable simulation state. The update pass is the only caller
    that mutates it.
    """
    param: Any
    system: SimplePhysicsSystem = field(default_factory=SimplePhysicsSystem.new_rigid_pendulum)
    map_mode: ParamMapMode = ParamMapMode.ANGLE_LENGTH
    props: SimplePhysicsProps = field(default_factory=SimplePhysicsProps)

    # Whether the anchor comes from the node's local transform only
    local_only: bool = False

    anchor: Optional[Vec2] = None
    bob: Vec2 = field(default_factory=Vec2)
    output: Vec2 = field(default_factory=Vec2)

    def update(
        self,
        dt: float,
        anchor: Vec2,
        gravity_scale: float = 1.0,
        settings: Optional[SimulationSettings] = None
    ) -> Vec2:
        """
        Advance the driver by one frame.

        Long frames are clamped to ``settings.max_dt`` and split into
        equal substeps; the anchor moves linearly across them.

        Args:
            dt: Frame time in seconds
            anchor: Anchor position this frame
            gravity_scale: Puppet gravity in px/s^2
            settings: Timestep policy (defaults apply when None)

        Returns:
            The mapped output (the previous one when the frame is skipped)
        """
        settings = settings or DEFAULT_SETTINGS

        if not anchor.is_finite():
            logger.debug(f"Driver {self.param}: non-finite anchor {anchor}, holding output")
            return self.output
        if not math.isfinite(dt) or dt <= 0:
            logger.debug(f"Driver {self.param}: skipping frame with dt={dt}")
            return self.output

        dt = settings.clamp_dt(dt)
        steps = settings.substeps(dt)
        step_dt = dt / steps
        start = self.anchor if self.anchor is not None else anchor

        for i in range(steps):
            step_anchor = start.lerp(anchor, (i + 1) / steps)
            self.bob = self.system.tick(step_anchor, self.props, step_dt, gravity_scale)

        self.anchor = anchor
        self.output = self.calc_output()
        return self.output

    def calc_output(self) -> Vec2:
        """Map the current bob position through the driver's mapping mode"""
        if self.anchor is None:
            return Vec2()
        return map_output(self.bob, self.anchor, self.props, self.map_mode)

    def reset(self) -> None:
        """Drop all simulation state; the next update starts from rest"""
        self.system = SimplePhysicsSystem.from_kind(self.system.kind)
        self.anchor = None
        self.bob = Vec2()
        self.output = Vec2()


# =============================================================================
# Per-Frame Update Pass
# =============================================================================

def update_physics(puppet, dt: float, settings: Optional[SimulationSettings] = None) -> int:
    """
    Tick every physics driver of a puppet and write the results back.

    The puppet supplies ``drivers`` (node ids), ``nodes`` (id -> node with a
    ``data`` attribute), ``render_ctx`` (id -> NodeRenderCtx), ``physics``
    (PuppetPhysics) and ``set_param(param, value)``. Drivers whose node or
    render context is missing are skipped for this frame.

    Args:
        puppet: The rig being animated
        dt: Frame time in seconds
        settings: Timestep policy

    Returns:
        Number of drivers updated
    """
    gravity_scale = puppet.physics.gravity_scale()
    updated = 0

    for driver_uuid in list(puppet.drivers):
        node = puppet.nodes.get(driver_uuid)
        if node is None:
            logger.debug(f"Skipping driver {driver_uuid}: node not found")
            continue

        driver = node.data
        if not isinstance(driver, SimplePhysics):
            logger.debug(f"Skipping driver {driver_uuid}: node has no physics")
            continue

        nrc = puppet.render_ctx.get(driver_uuid)
        if nrc is None:
            logger.debug(f"Skipping driver {driver_uuid}: no render context")
            continue

        output = driver.update(dt, nrc.anchor(driver.local_only), gravity_scale, settings)
        puppet.set_param(driver.param, output)
        updated += 1

    return updated
