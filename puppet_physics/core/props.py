"""
Physics Parameter Set

Tunables for one physics driver. Every quantity has an authored base
value and a multiplicative offset that the animation-parameter system
may vary at runtime; models only ever see the product of the two.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict

from .vector import Vec2


# Smallest rest length (pixels) and frequency (Hz) a model will use
MIN_LENGTH = 1e-4
MIN_FREQUENCY = 1e-4


class ParamMapMode(Enum):
    """How a bob position becomes a 2D parameter value"""
    ANGLE_LENGTH = "angle_length"
    XY = "xy"

    @classmethod
    def from_name(cls, name: str) -> 'ParamMapMode':
        key = name.lower().replace('-', '_')
        for mode in cls:
            if mode.value == key:
                return mode
        raise ValueError(f"Unknown map mode: {name}. Available: {[m.value for m in cls]}")


@dataclass
class SimplePhysicsProps:
    """Base values and multiplicative offsets for a physics driver"""

    # Gravity scale (1.0 = puppet gravity)
    gravity: float = 1.0
    offset_gravity: float = 1.0

    # Pendulum/spring rest length (pixels)
    length: float = 100.0
    offset_length: float = 1.0

    # Resonant frequency (Hz)
    frequency: float = 1.0
    offset_frequency: float = 1.0

    # Damping ratios (0 = free, 1 = critical)
    angle_damping: float = 0.5
    offset_angle_damping: float = 1.0
    length_damping: float = 0.5
    offset_length_damping: float = 1.0

    output_scale: Vec2 = field(default_factory=lambda: Vec2(1.0, 1.0))
    offset_output_scale: Vec2 = field(default_factory=lambda: Vec2(1.0, 1.0))

    def final_gravity(self) -> float:
        return self.gravity * self.offset_gravity

    def final_length(self) -> float:
        return max(self.length * self.offset_length, MIN_LENGTH)

    def final_frequency(self) -> float:
        return max(self.frequency * self.offset_frequency, MIN_FREQUENCY)

    def final_angle_damping(self) -> float:
        return self.angle_damping * self.offset_angle_damping

    def final_length_damping(self) -> float:
        return self.length_damping * self.offset_length_damping

    def final_output_scale(self) -> Vec2:
        return self.output_scale.scale(self.offset_output_scale)

    def reset_offsets(self) -> None:
        """Put every offset back to the identity"""
        self.offset_gravity = 1.0
        self.offset_length = 1.0
        self.offset_frequency = 1.0
        self.offset_angle_damping = 1.0
        self.offset_length_damping = 1.0
        self.offset_output_scale = Vec2(1.0, 1.0)

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict for YAML serialization (vectors become [x, y])"""
        data = {}
        for f in fields(self):
            value = getattr(self, f.name)
            data[f.name] = list(value.to_tuple()) if isinstance(value, Vec2) else value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SimplePhysicsProps':
        """Create from a dict, ignoring unknown keys"""
        vector_fields = {'output_scale', 'offset_output_scale'}
        valid_fields = {f.name for f in fields(cls)}

        kwargs = {}
        for key, value in data.items():
            if key not in valid_fields:
                continue
            if key in vector_fields:
                kwargs[key] = value if isinstance(value, Vec2) else Vec2.from_sequence(value)
            else:
                kwargs[key] = float(value)

        return cls(**kwargs)


@dataclass
class PuppetPhysics:
    """World gravity shared by every driver of a puppet"""
    pixels_per_meter: float = 1000.0
    gravity: float = 9.8

    def gravity_scale(self) -> float:
        """Gravity in pixels per second squared"""
        return self.gravity * self.pixels_per_meter
