"""Immutable render configuration shared by every call site."""

from __future__ import annotations

from dataclasses import dataclass, field

from .devices import DeviceCatalog
from .themes import ThemeCatalog

# Gap between dots as a fraction of the cell edge. One value for export and
# preview so the two never drift apart.
GAP_RATIO = 0.2


@dataclass(frozen=True)
class RenderConfig:
    """Device table, palette table and grid constants.

    Built once at process start and passed by reference into the engine.
    """

    devices: DeviceCatalog = field(default_factory=DeviceCatalog)
    themes: ThemeCatalog = field(default_factory=ThemeCatalog)
    gap_ratio: float = GAP_RATIO

    def __post_init__(self):
        if not 0.0 <= self.gap_ratio < 1.0:
            raise ValueError(f"gap_ratio must be in [0, 1), got {self.gap_ratio}")


DEFAULT_CONFIG = RenderConfig()
