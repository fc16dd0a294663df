"""
Puppet - a minimal in-memory rig around the physics drivers.

Holds just what the update pass needs from the outside world: nodes with
render contexts (transforms) to read anchors from, and 2D animation
parameters to write results into. Rig loading, parameter blending and
rendering live elsewhere.

Example:
    puppet = Puppet()
    hair = puppet.add_param("hair_sway")
    puppet.add_physics_node(
        "hair",
        SimplePhysics(param=hair.uuid, system=SimplePhysicsSystem.new_spring_pendulum()),
    )

    # Each frame
    puppet.set_node_transform("hair", head_x, head_y)
    puppet.update_physics(dt)
    value = puppet.get_param(hair.uuid)
"""

import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np

from .core.config import SimulationSettings
from .core.physics import SimplePhysics, update_physics
from .core.props import PuppetPhysics
from .core.vector import Vec2


logger = logging.getLogger(__name__)

_uuids = itertools.count(1)


def _translation(x: float, y: float) -> np.ndarray:
    trans = np.eye(3, dtype=np.float64)
    trans[0, 2] = x
    trans[1, 2] = y
    return trans


@dataclass
class NodeRenderCtx:
    """Transforms computed for a node by the node graph this frame"""
    trans: np.ndarray = field(default_factory=lambda: np.eye(3, dtype=np.float64))
    trans_offset: Vec2 = field(default_factory=Vec2)

    def anchor(self, local_only: bool = False) -> Vec2:
        """Node origin in world space, or its local translation"""
        if local_only:
            return Vec2(self.trans_offset.x, self.trans_offset.y)
        origin = self.trans @ np.array([0.0, 0.0, 1.0])
        return Vec2(float(origin[0]), float(origin[1]))


@dataclass
class Node:
    """A rig node; physics nodes carry a SimplePhysics driver as data"""
    uuid: int
    name: str
    data: Any = None


@dataclass
class Param:
    """A 2D animation parameter"""
    uuid: int
    name: str
    value: Vec2 = field(default_factory=Vec2)
    min: Vec2 = field(default_factory=lambda: Vec2(-1.0, -1.0))
    max: Vec2 = field(default_factory=lambda: Vec2(1.0, 1.0))

    def set(self, value: Vec2) -> None:
        self.value = Vec2(
            float(np.clip(value.x, self.min.x, self.max.x)),
            float(np.clip(value.y, self.min.y, self.max.y)),
        )


class Puppet:
    """Nodes, parameters and the physics drivers that connect them"""

    def __init__(self, physics: Optional[PuppetPhysics] = None):
        self.physics = physics or PuppetPhysics()
        self.nodes: Dict[int, Node] = {}
        self.params: Dict[int, Param] = {}
        self.render_ctx: Dict[int, NodeRenderCtx] = {}
        self.drivers: List[int] = []
        self._names: Dict[str, int] = {}

    # -------------------------------------------------------------------------
    # Building
    # -------------------------------------------------------------------------

    def add_node(self, name: str, data: Any = None, x: float = 0.0, y: float = 0.0) -> Node:
        """Add a node with a render context at (x, y)"""
        node = Node(uuid=next(_uuids), name=name, data=data)
        self.nodes[node.uuid] = node
        self._names[name] = node.uuid
        self.render_ctx[node.uuid] = NodeRenderCtx(trans=_translation(x, y), trans_offset=Vec2(x, y))
        return node

    def add_physics_node(self, name: str, driver: SimplePhysics, x: float = 0.0, y: float = 0.0) -> Node:
        """Add a node driven by simple physics and register its driver"""
        node = self.add_node(name, driver, x, y)
        self.drivers.append(node.uuid)
        return node

    def add_param(
        self,
        name: str,
        min_value: tuple = (-1.0, -1.0),
        max_value: tuple = (1.0, 1.0)
    ) -> Param:
        param = Param(
            uuid=next(_uuids),
            name=name,
            min=Vec2.from_sequence(min_value),
            max=Vec2.from_sequence(max_value),
        )
        self.params[param.uuid] = param
        return param

    def remove_node(self, uuid: int) -> bool:
        """Remove a node; its driver (if any) is dropped with it"""
        node = self.nodes.pop(uuid, None)
        if node is None:
            return False
        self.render_ctx.pop(uuid, None)
        self._names.pop(node.name, None)
        if uuid in self.drivers:
            self.drivers.remove(uuid)
        return True

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def get_node(self, name: str) -> Optional[Node]:
        uuid = self._names.get(name)
        return self.nodes.get(uuid) if uuid is not None else None

    def get_driver(self, name: str) -> Optional[SimplePhysics]:
        node = self.get_node(name)
        if node is None or not isinstance(node.data, SimplePhysics):
            return None
        return node.data

    def get_param(self, uuid: int) -> Optional[Vec2]:
        param = self.params.get(uuid)
        return param.value if param else None

    # -------------------------------------------------------------------------
    # Frame state
    # -------------------------------------------------------------------------

    def set_node_transform(
        self,
        name: str,
        x: float,
        y: float,
        parent: Optional[np.ndarray] = None
    ) -> None:
        """
        Place a node at local (x, y), optionally under a parent world transform.

        Args:
            name: Node name
            x, y: Local translation
            parent: 3x3 parent world transform (identity when None)
        """
        uuid = self._names[name]
        local = _translation(x, y)
        trans = parent @ local if parent is not None else local
        self.render_ctx[uuid] = NodeRenderCtx(trans=trans, trans_offset=Vec2(x, y))

    def set_param(self, uuid: int, value: Vec2) -> None:
        param = self.params.get(uuid)
        if param is None:
            logger.warning(f"Physics output for unknown parameter {uuid} ignored")
            return
        param.set(value)

    def update_physics(self, dt: float, settings: Optional[SimulationSettings] = None) -> int:
        """Run the per-frame physics pass over this puppet"""
        return update_physics(self, dt, settings)
