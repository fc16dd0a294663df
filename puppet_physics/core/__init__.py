"""
Puppet Physics - Core simulation
"""

from .vector import Vec2
from .runge_kutta import rk4_step, integrate
from .props import (
    SimplePhysicsProps, ParamMapMode, PuppetPhysics,
    MIN_LENGTH, MIN_FREQUENCY,
)
from .config import SimulationSettings, DEFAULT_SETTINGS, load_settings
from .physics import (
    # Model dispatch
    SystemKind, SimplePhysicsSystem, get_system_kind, SYSTEM_NAMES,
    # Driver
    SimplePhysics, map_output,
    # Per-frame pass
    update_physics,
)
from .presets import (
    PhysicsPreset, PresetManager, BUILTIN_PRESETS,
    get_preset_manager, get_preset, list_presets, search_presets,
)
from .anchor_paths import ANCHOR_PATHS, get_anchor_path, generate_path
from .trace import TraceSample, SimulationTrace, record_trace
from .exporter import TraceExporter

__all__ = [
    'Vec2',
    'rk4_step', 'integrate',
    'SimplePhysicsProps', 'ParamMapMode', 'PuppetPhysics', 'MIN_LENGTH', 'MIN_FREQUENCY',
    'SimulationSettings', 'DEFAULT_SETTINGS', 'load_settings',
    'SystemKind', 'SimplePhysicsSystem', 'get_system_kind', 'SYSTEM_NAMES',
    'SimplePhysics', 'map_output', 'update_physics',
    'PhysicsPreset', 'PresetManager', 'BUILTIN_PRESETS',
    'get_preset_manager', 'get_preset', 'list_presets', 'search_presets',
    'ANCHOR_PATHS', 'get_anchor_path', 'generate_path',
    'TraceSample', 'SimulationTrace', 'record_trace',
    'TraceExporter',
]
