"""
Shared fixtures for the physics tests
"""

import pytest

from puppet_physics import (
    Puppet, SimplePhysics, SimplePhysicsProps, SimplePhysicsSystem,
)
from puppet_physics.core import PresetManager


@pytest.fixture
def props():
    """Undamped 100 px pendulum"""
    return SimplePhysicsProps(length=100.0, angle_damping=0.0, length_damping=0.0)


@pytest.fixture
def preset_manager(tmp_path):
    """Preset manager whose user directory lives in a temp dir"""
    presets_dir = tmp_path / "presets"
    presets_dir.mkdir()
    return PresetManager(presets_dir)


@pytest.fixture
def puppet():
    """Puppet with one rigid pendulum driving a parameter"""
    rig = Puppet()
    param = rig.add_param("hair_sway")
    rig.add_physics_node(
        "hair",
        SimplePhysics(param=param.uuid, system=SimplePhysicsSystem.new_rigid_pendulum()),
    )
    return rig
