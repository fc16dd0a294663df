"""
Pendulum Models - the two physics systems a driver can run
"""

from .rigid import RigidPendulumSystem
from .spring import SpringPendulumSystem

__all__ = [
    'RigidPendulumSystem',
    'SpringPendulumSystem',
]
