"""
Anchor Paths - scripted anchor motion for previews, demos and tests

Each path is a function of (frames, fps, amplitude, **kwargs) returning one
anchor position per frame, starting at the origin. Paths are deterministic;
the random ones take a seed.

Paths:
- still: Anchor never moves
- step: Anchor jumps sideways once and stays
- sway: Side-to-side sine motion
- shake: Jittery noise that calms down over time
- circle: Constant-speed circle
- dash: Eased move sideways and back again
"""

import numpy as np
from typing import Callable, Dict, List

from .vector import Vec2


# =============================================================================
# Easing
# =============================================================================

def ease_in_out_sine(t: float) -> float:
    """Sinusoidal ease in/out"""
    return 0.5 * (1 - np.cos(np.pi * t))


def ease_in_out_cubic(t: float) -> float:
    """Cubic S-curve, sharper start and stop than sine"""
    if t < 0.5:
        return 4 * t * t * t
    t1 = 2 * t - 2
    return 0.5 * t1 * t1 * t1 + 1


# =============================================================================
# Paths
# =============================================================================

def still(frames: int, fps: float = 60.0, amplitude: float = 0.0, **kwargs) -> List[Vec2]:
    return [Vec2() for _ in range(frames)]


def step(
    frames: int,
    fps: float = 60.0,
    amplitude: float = 50.0,
    at: float = 0.25,
    angle: float = 0.0,
    **kwargs
) -> List[Vec2]:
    """
    Jump by ``amplitude`` pixels once.

    Args:
        at: Fraction of the clip at which the jump happens
        angle: Jump direction in radians (0 = +x)
    """
    jump_frame = int(frames * at)
    target = Vec2(float(np.cos(angle)), float(np.sin(angle))) * amplitude
    return [target if i >= jump_frame else Vec2() for i in range(frames)]


def sway(
    frames: int,
    fps: float = 60.0,
    amplitude: float = 30.0,
    frequency: float = 1.0,
    **kwargs
) -> List[Vec2]:
    """Horizontal sine sway at ``frequency`` Hz"""
    t = np.arange(frames) / fps
    xs = amplitude * np.sin(2 * np.pi * frequency * t)
    return [Vec2(float(x), 0.0) for x in xs]


def shake(
    frames: int,
    fps: float = 60.0,
    amplitude: float = 10.0,
    decay: float = 3.0,
    seed: int = 0,
    **kwargs
) -> List[Vec2]:
    """Random jitter with exponential calm-down, reproducible per seed"""
    rng = np.random.default_rng(seed)
    offsets = rng.uniform(-1.0, 1.0, size=(frames, 2))
    t = np.arange(frames) / fps
    envelope = amplitude * np.exp(-decay * t)
    return [Vec2(float(dx * e), float(dy * e)) for (dx, dy), e in zip(offsets, envelope)]


def circle(
    frames: int,
    fps: float = 60.0,
    amplitude: float = 20.0,
    frequency: float = 0.5,
    **kwargs
) -> List[Vec2]:
    """Circle of radius ``amplitude`` through the origin"""
    t = np.arange(frames) / fps
    phase = 2 * np.pi * frequency * t
    return [
        Vec2(float(amplitude * (np.cos(p) - 1.0)), float(amplitude * np.sin(p)))
        for p in phase
    ]


def dash(
    frames: int,
    fps: float = 60.0,
    amplitude: float = 80.0,
    **kwargs
) -> List[Vec2]:
    """Ease out to ``amplitude`` over the first half, then ease back"""
    half = max(frames // 2, 1)
    path = []
    for i in range(frames):
        if i < half:
            x = amplitude * ease_in_out_cubic(i / half)
        else:
            x = amplitude * (1.0 - ease_in_out_sine((i - half) / max(frames - half, 1)))
        path.append(Vec2(float(x), 0.0))
    return path


# Path registry for easy access
ANCHOR_PATHS: Dict[str, Callable[..., List[Vec2]]] = {
    'still': still,
    'step': step,
    'jump': step,  # Alias
    'sway': sway,
    'shake': shake,
    'circle': circle,
    'dash': dash,
}


def get_anchor_path(name: str) -> Callable[..., List[Vec2]]:
    """Get anchor path function by name"""
    name = name.lower()
    if name not in ANCHOR_PATHS:
        raise ValueError(f"Unknown anchor path: {name}. Available: {sorted(ANCHOR_PATHS)}")
    return ANCHOR_PATHS[name]


def generate_path(
    name: str,
    frames: int,
    fps: float = 60.0,
    amplitude: float = None,
    **kwargs
) -> List[Vec2]:
    """Generate ``frames`` anchor positions for the named path"""
    path_fn = get_anchor_path(name)
    if amplitude is not None:
        kwargs['amplitude'] = amplitude
    return path_fn(frames, fps, **kwargs)
