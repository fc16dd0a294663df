"""
Puppet Physics - Secondary motion for rigged 2D characters
"""

from .core import (
    Vec2, SimplePhysicsProps, ParamMapMode, PuppetPhysics,
    SimulationSettings, SystemKind, SimplePhysicsSystem, SimplePhysics,
    update_physics, PresetManager, get_preset, list_presets,
    SimulationTrace, TraceExporter, generate_path, record_trace,
)
from .pendulum import RigidPendulumSystem, SpringPendulumSystem
from .puppet import Puppet, Node, Param, NodeRenderCtx

__version__ = "0.1.0"
__all__ = [
    'Vec2',
    'SimplePhysicsProps',
    'ParamMapMode',
    'PuppetPhysics',
    'SimulationSettings',
    'SystemKind',
    'SimplePhysicsSystem',
    'SimplePhysics',
    'RigidPendulumSystem',
    'SpringPendulumSystem',
    'update_physics',
    'Puppet',
    'Node',
    'Param',
    'NodeRenderCtx',
    'get_preset',
    'list_presets',
    'simulate',
]


def simulate(
    preset: str = "hair_long",
    motion: str = "sway",
    duration: float = 2.0,
    fps: float = 60.0,
    amplitude: float = None,
    output_path: str = None,
    format: str = 'json',
    settings: SimulationSettings = None,
    physics: PuppetPhysics = None,
    presets: PresetManager = None,
    **motion_kwargs
) -> SimulationTrace:
    """
    Run a preset driver against a scripted anchor motion.

    Args:
        preset: Preset name
        motion: Anchor path name ('sway', 'step', 'shake', ...)
        duration: Clip length in seconds
        fps: Frames per second (dt = 1 / fps)
        amplitude: Anchor motion size in pixels (path default if None)
        output_path: Export the trace here when given
        format: Export format ('json', 'csv', 'gif')
        settings: Timestep policy
        physics: Puppet gravity (defaults to earth gravity at 1000 px/m)
        presets: Preset manager to look the preset up in
        **motion_kwargs: Extra anchor path parameters (frequency, seed, ...)

    Returns:
        The recorded trace
    """
    manager = presets or PresetManager()
    physics = physics or PuppetPhysics()

    physics_preset = manager.get(preset)
    if physics_preset is None:
        raise ValueError(f"Unknown preset: {preset}. Available: {manager.list_all()}")

    frames = max(int(round(duration * fps)), 1)
    dt = 1.0 / fps
    anchors = generate_path(motion, frames, fps, amplitude, **motion_kwargs)

    driver = physics_preset.build_driver(param=preset)
    trace = record_trace(
        driver,
        anchors,
        dt,
        gravity_scale=physics.gravity_scale(),
        settings=settings,
        name=f"{preset}_{motion}",
    )

    if output_path is not None:
        TraceExporter.export(trace, output_path, format)

    return trace
