"""
2D vector type shared by the physics models, the driver and the puppet.

Positions are in puppet pixels with +y pointing down (screen space).
"""

import numpy as np
from dataclasses import dataclass
from typing import Tuple


@dataclass
class Vec2:
    """2D vector with physics operations"""
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: 'Vec2') -> 'Vec2':
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Vec2') -> 'Vec2':
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> 'Vec2':
        return Vec2(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> 'Vec2':
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float) -> 'Vec2':
        return Vec2(self.x / scalar, self.y / scalar) if scalar != 0 else Vec2()

    def __neg__(self) -> 'Vec2':
        return Vec2(-self.x, -self.y)

    @property
    def length(self) -> float:
        return float(np.hypot(self.x, self.y))

    def normalized(self) -> 'Vec2':
        l = self.length
        return Vec2(self.x / l, self.y / l) if l > 1e-10 else Vec2()

    def dot(self, other: 'Vec2') -> float:
        return self.x * other.x + self.y * other.y

    def scale(self, other: 'Vec2') -> 'Vec2':
        """Component-wise product"""
        return Vec2(self.x * other.x, self.y * other.y)

    def distance(self, other: 'Vec2') -> float:
        return (self - other).length

    def lerp(self, other: 'Vec2', t: float) -> 'Vec2':
        return Vec2(
            self.x + (other.x - self.x) * t,
            self.y + (other.y - self.y) * t
        )

    def is_finite(self) -> bool:
        return bool(np.isfinite(self.x) and np.isfinite(self.y))

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=np.float64)

    @staticmethod
    def from_angle(angle: float, length: float = 1.0) -> 'Vec2':
        """Unit vector for a pendulum angle (0 = straight down), scaled by length"""
        return Vec2(float(np.sin(angle)) * length, float(np.cos(angle)) * length)

    @staticmethod
    def from_sequence(values) -> 'Vec2':
        """Build from an (x, y) pair or a bare scalar applied to both axes"""
        if isinstance(values, (int, float)):
            return Vec2(float(values), float(values))
        x, y = values
        return Vec2(float(x), float(y))
