"""
Simulation traces - the frame-by-frame record of one driver's response
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

import numpy as np

from .config import SimulationSettings
from .physics import SimplePhysics
from .vector import Vec2


@dataclass
class TraceSample:
    """One frame of a trace"""
    time: float
    anchor: Vec2
    bob: Vec2
    output: Vec2


@dataclass
class SimulationTrace:
    """Recorded anchor, bob and output for consecutive frames"""
    name: str
    dt: float
    map_mode: str
    samples: List[TraceSample] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.samples)

    @property
    def times(self) -> np.ndarray:
        return np.array([s.time for s in self.samples])

    @property
    def anchors(self) -> np.ndarray:
        return np.array([s.anchor.to_tuple() for s in self.samples]).reshape(-1, 2)

    @property
    def bobs(self) -> np.ndarray:
        return np.array([s.bob.to_tuple() for s in self.samples]).reshape(-1, 2)

    @property
    def outputs(self) -> np.ndarray:
        return np.array([s.output.to_tuple() for s in self.samples]).reshape(-1, 2)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'dt': self.dt,
            'map_mode': self.map_mode,
            'frames': len(self.samples),
            'samples': [
                {
                    'time': s.time,
                    'anchor': list(s.anchor.to_tuple()),
                    'bob': list(s.bob.to_tuple()),
                    'output': list(s.output.to_tuple()),
                }
                for s in self.samples
            ],
        }


def record_trace(
    driver: SimplePhysics,
    anchors: Iterable[Vec2],
    dt: float,
    gravity_scale: float = 1.0,
    settings: Optional[SimulationSettings] = None,
    name: str = "trace"
) -> SimulationTrace:
    """
    Feed an anchor sequence through a driver, one frame per anchor.

    Args:
        driver: Driver to advance (mutated)
        anchors: Anchor position per frame
        dt: Frame time in seconds
        gravity_scale: Puppet gravity in px/s^2
        settings: Timestep policy
        name: Label stored on the trace

    Returns:
        The recorded trace
    """
    trace = SimulationTrace(name=name, dt=dt, map_mode=driver.map_mode.value)

    for i, anchor in enumerate(anchors):
        output = driver.update(dt, anchor, gravity_scale, settings)
        trace.samples.append(TraceSample(
            time=(i + 1) * dt,
            anchor=anchor,
            bob=driver.bob,
            output=output,
        ))

    return trace
