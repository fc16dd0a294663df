"""
Simulation settings - how a driver turns one frame's dt into integrator steps.

Settings can be loaded from YAML:

    max_dt: 10.0        # longest frame the simulation will honour (seconds)
    max_substep: 0.0333 # longest single integrator step (seconds)
    max_substeps: 32    # cap on integrator steps per frame
"""

import logging
import math
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


logger = logging.getLogger(__name__)


@dataclass
class SimulationSettings:
    """Timestep policy applied by every driver"""
    max_dt: float = 10.0
    max_substep: float = 1.0 / 30.0
    max_substeps: int = 32

    def __post_init__(self):
        if not (self.max_dt > 0 and math.isfinite(self.max_dt)):
            raise ValueError(f"max_dt must be positive and finite, got {self.max_dt}")
        if not (self.max_substep > 0 and math.isfinite(self.max_substep)):
            raise ValueError(f"max_substep must be positive and finite, got {self.max_substep}")
        if int(self.max_substeps) < 1:
            raise ValueError(f"max_substeps must be at least 1, got {self.max_substeps}")
        self.max_substeps = int(self.max_substeps)

    def substeps(self, dt: float) -> int:
        """Number of equal integrator steps for a frame of ``dt`` seconds"""
        count = max(1, math.ceil(dt / self.max_substep))
        return min(count, self.max_substeps)

    def clamp_dt(self, dt: float) -> float:
        return min(dt, self.max_dt)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SimulationSettings':
        """Create from a dict, ignoring unknown keys"""
        valid_fields = {f.name for f in fields(cls)}
        unknown = set(data) - valid_fields
        if unknown:
            logger.warning(f"Ignoring unknown simulation settings: {sorted(unknown)}")
        return cls(**{k: v for k, v in data.items() if k in valid_fields})

    @classmethod
    def from_yaml(cls, path: str | Path) -> 'SimulationSettings':
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Settings file {path} must contain a mapping")
        return cls.from_dict(data)

    def to_yaml(self, path: str | Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)
        return path


DEFAULT_SETTINGS = SimulationSettings()


def load_settings(path: Optional[str | Path] = None) -> SimulationSettings:
    """Load settings from a YAML file, or the defaults when no path is given"""
    if path is None:
        return SimulationSettings()
    settings = SimulationSettings.from_yaml(path)
    logger.debug(f"Loaded simulation settings from {path}: {settings}")
    return settings
