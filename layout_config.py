# layout_config.py

import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from typing import Any, Mapping

from graph_errors import InvalidLayoutConfig

# Wire names used by the rendering side.
_CAMEL_CASE_KEYS = {
    "laneWidth": "lane_width",
    "rowHeight": "row_height",
    "nodeRadius": "node_radius",
    "leftPadding": "left_padding",
    "topPadding": "top_padding",
    "tension": "tension",
}


@dataclass(frozen=True)
class LayoutConfig:
    lane_width: float = 22
    row_height: float = 28
    node_radius: float = 6
    left_padding: float = 20
    top_padding: float = 14
    tension: float = 0.35  # 0 = sharp bend, 1 = widest S-curve

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidLayoutConfig(f.name, f"expected a number, got {value!r}")
            if value < 0:
                raise InvalidLayoutConfig(f.name, "must not be negative")
        # Frozen: clamp through object.__setattr__.
        object.__setattr__(self, "tension", min(1.0, max(0.0, float(self.tension))))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LayoutConfig":
        known = {f.name for f in fields(cls)}
        options = {}
        for key, value in data.items():
            name = _CAMEL_CASE_KEYS.get(key, key)
            if name not in known:
                raise InvalidLayoutConfig(key, "unknown option")
            options[name] = value
        return cls(**options)

    @classmethod
    def load(cls, path: str) -> "LayoutConfig":
        """Read overrides from a JSON file; missing keys keep their defaults."""
        if not os.path.exists(path):
            raise InvalidLayoutConfig(path, "config file does not exist")
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidLayoutConfig(path, f"not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise InvalidLayoutConfig(path, "top level must be an object")
        logging.debug("Loaded layout config from %s: %s", path, data)
        return cls.from_dict(data)

    def to_dict(self):
        return asdict(self)


DEFAULT_CONFIG = LayoutConfig()
