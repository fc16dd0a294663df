"""
Physics Presets Library - Pre-configured drivers for common dangling parts
Lets riggers attach hair, earrings or capes with a single name
"""

import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .physics import SimplePhysics, SimplePhysicsSystem, get_system_kind
from .props import ParamMapMode, SimplePhysicsProps


logger = logging.getLogger(__name__)


# ============================================================================
# Preset Data Structures
# ============================================================================

@dataclass
class PhysicsPreset:
    """A single driver preset"""

    name: str
    description: str = ""

    system: str = "rigid_pendulum"
    map_mode: str = "angle_length"
    local_only: bool = False

    # SimplePhysicsProps fields, vectors as [x, y]
    props: Dict[str, Any] = field(default_factory=dict)

    tags: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for YAML serialization"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PhysicsPreset':
        """Create from dictionary, validating system and mapping names"""
        valid_fields = {f for f in cls.__dataclass_fields__}
        filtered = {k: v for k, v in data.items() if k in valid_fields}
        preset = cls(**filtered)

        get_system_kind(preset.system)
        ParamMapMode.from_name(preset.map_mode)
        return preset

    def build_props(self) -> SimplePhysicsProps:
        return SimplePhysicsProps.from_dict(self.props)

    def build_system(self) -> SimplePhysicsSystem:
        return SimplePhysicsSystem.from_kind(get_system_kind(self.system))

    def build_driver(self, param: Any) -> SimplePhysics:
        """Create a fresh driver writing to ``param``"""
        return SimplePhysics(
            param=param,
            system=self.build_system(),
            map_mode=ParamMapMode.from_name(self.map_mode),
            props=self.build_props(),
            local_only=self.local_only,
        )


# ============================================================================
# Built-in Presets
# ============================================================================

BUILTIN_PRESETS: Dict[str, Dict[str, Any]] = {
    # ==================== HAIR ====================
    "hair_long": {
        "name": "hair_long",
        "description": "Long hair strand with slow, heavy swing",
        "system": "rigid_pendulum",
        "map_mode": "angle_length",
        "props": {"length": 160.0, "angle_damping": 0.35},
        "tags": ["hair", "heavy"],
    },

    "hair_short": {
        "name": "hair_short",
        "description": "Short springy hair tuft",
        "system": "spring_pendulum",
        "map_mode": "xy",
        "props": {"length": 40.0, "frequency": 4.0, "angle_damping": 0.4, "length_damping": 0.6},
        "tags": ["hair", "bouncy"],
    },

    "bangs": {
        "name": "bangs",
        "description": "Front bangs that follow head turns in local space",
        "system": "rigid_pendulum",
        "map_mode": "angle_length",
        "local_only": True,
        "props": {"length": 60.0, "angle_damping": 0.6, "output_scale": [1.0, 0.5]},
        "tags": ["hair", "local"],
    },

    # ==================== ACCESSORIES ====================
    "earring": {
        "name": "earring",
        "description": "Dangling earring, lightly damped",
        "system": "rigid_pendulum",
        "map_mode": "angle_length",
        "props": {"length": 25.0, "angle_damping": 0.15},
        "tags": ["accessory", "jewelry"],
    },

    "antenna": {
        "name": "antenna",
        "description": "Stiff bobbing antenna",
        "system": "spring_pendulum",
        "map_mode": "xy",
        "props": {"length": 50.0, "frequency": 6.0, "gravity": 0.0,
                  "angle_damping": 0.3, "length_damping": 0.3},
        "tags": ["accessory", "bouncy"],
    },

    # ==================== CLOTH ====================
    "ribbon": {
        "name": "ribbon",
        "description": "Light ribbon fluttering behind motion",
        "system": "spring_pendulum",
        "map_mode": "angle_length",
        "props": {"length": 70.0, "frequency": 2.5, "gravity": 0.2,
                  "angle_damping": 0.25, "length_damping": 0.8},
        "tags": ["cloth", "light"],
    },

    "cape": {
        "name": "cape",
        "description": "Heavy cape, critically damped so it never flaps back",
        "system": "spring_pendulum",
        "map_mode": "xy",
        "props": {"length": 200.0, "frequency": 1.5, "gravity": 0.1,
                  "angle_damping": 1.0, "length_damping": 1.0},
        "tags": ["cloth", "heavy"],
    },

    # ==================== CREATURE ====================
    "tail": {
        "name": "tail",
        "description": "Swishy tail with a wide swing",
        "system": "rigid_pendulum",
        "map_mode": "xy",
        "props": {"length": 120.0, "angle_damping": 0.2, "output_scale": [1.5, 1.0]},
        "tags": ["creature"],
    },
}


# ============================================================================
# Preset Manager
# ============================================================================

class PresetManager:
    """
    Manages loading and saving driver presets.
    """

    def __init__(self, user_presets_dir: Optional[Path] = None):
        """
        Initialize preset manager.

        Args:
            user_presets_dir: Directory for user presets (default: ~/.puppet-physics/presets)
        """
        self.user_presets_dir = Path(user_presets_dir or Path.home() / '.puppet-physics' / 'presets')

        self._builtin: Dict[str, PhysicsPreset] = {}
        self._user: Dict[str, PhysicsPreset] = {}

        self._load_builtin_presets()
        self._load_user_presets()

    def _load_builtin_presets(self) -> None:
        for name, data in BUILTIN_PRESETS.items():
            self._builtin[name] = PhysicsPreset.from_dict(data)

    def _load_user_presets(self) -> None:
        """Load user-defined presets from YAML files"""
        if not self.user_presets_dir.is_dir():
            return

        for yaml_file in sorted(self.user_presets_dir.glob('*.yaml')):
            try:
                with open(yaml_file, 'r') as f:
                    data = yaml.safe_load(f)

                if not isinstance(data, dict):
                    logger.warning(f"Skipping preset file {yaml_file}: not a mapping")
                    continue

                if 'presets' in data:
                    # Multiple presets in one file
                    for name, preset_data in data['presets'].items():
                        preset_data['name'] = name
                        self._user[name] = PhysicsPreset.from_dict(preset_data)
                else:
                    data['name'] = yaml_file.stem
                    self._user[yaml_file.stem] = PhysicsPreset.from_dict(data)
            except (OSError, yaml.YAMLError, TypeError, ValueError, AttributeError) as e:
                logger.warning(f"Could not load preset file {yaml_file}: {e}")

    def get(self, name: str) -> Optional[PhysicsPreset]:
        """
        Get a preset by name.
        User presets override built-in presets with same name.
        """
        return self._user.get(name) or self._builtin.get(name)

    def exists(self, name: str) -> bool:
        return name in self._user or name in self._builtin

    def list_all(self) -> List[str]:
        return sorted(set(self._builtin) | set(self._user))

    def _all(self) -> Dict[str, PhysicsPreset]:
        return {**self._builtin, **self._user}

    def list_by_tag(self, tag: str) -> List[str]:
        return sorted(
            name for name, preset in self._all().items()
            if tag.lower() in [t.lower() for t in preset.tags]
        )

    def list_by_system(self, system: str) -> List[str]:
        """List presets running a given physics system (aliases accepted)"""
        kind = get_system_kind(system)
        return sorted(
            name for name, preset in self._all().items()
            if get_system_kind(preset.system) is kind
        )

    def list_tags(self) -> List[str]:
        tags = set()
        for preset in self._all().values():
            tags.update(preset.tags)
        return sorted(tags)

    def save_preset(self, preset: PhysicsPreset, filename: Optional[str] = None) -> Path:
        """
        Save a user preset to YAML file.

        Args:
            preset: The preset to save
            filename: Optional filename (default: preset.name.yaml)

        Returns:
            Path to saved file
        """
        filename = filename or f"{preset.name}.yaml"
        if not filename.endswith('.yaml'):
            filename += '.yaml'

        self.user_presets_dir.mkdir(parents=True, exist_ok=True)
        filepath = self.user_presets_dir / filename
        with open(filepath, 'w') as f:
            yaml.dump(preset.to_dict(), f, default_flow_style=False, sort_keys=False)

        self._user[preset.name] = preset
        return filepath

    def delete_preset(self, name: str) -> bool:
        """
        Delete a user preset.

        Returns:
            True if deleted, False if not found or is builtin
        """
        if name not in self._user:
            return False

        for yaml_file in self.user_presets_dir.glob('*.yaml'):
            if yaml_file.stem == name:
                yaml_file.unlink()
                break

        del self._user[name]
        return True

    def search(self, query: str) -> List[str]:
        """Search presets by name, description, or tags"""
        query = query.lower()
        return sorted(
            name for name, preset in self._all().items()
            if (query in name.lower() or
                query in preset.description.lower() or
                any(query in tag.lower() for tag in preset.tags))
        )

    def get_preset_info(self, name: str) -> Optional[Dict[str, Any]]:
        """Get detailed info about a preset"""
        preset = self.get(name)
        if not preset:
            return None

        info = preset.to_dict()
        info['props'] = preset.build_props().to_dict()
        info['is_builtin'] = name in self._builtin
        info['is_user'] = name in self._user
        return info


# ============================================================================
# Global Instance & Convenience Functions
# ============================================================================

_manager: Optional[PresetManager] = None


def get_preset_manager() -> PresetManager:
    """Get or create global preset manager"""
    global _manager
    if _manager is None:
        _manager = PresetManager()
    return _manager


def get_preset(name: str) -> Optional[PhysicsPreset]:
    return get_preset_manager().get(name)


def list_presets(tag: Optional[str] = None, system: Optional[str] = None) -> List[str]:
    """List available presets, optionally filtered"""
    manager = get_preset_manager()

    if tag:
        return manager.list_by_tag(tag)
    elif system:
        return manager.list_by_system(system)
    return manager.list_all()


def search_presets(query: str) -> List[str]:
    return get_preset_manager().search(query)
