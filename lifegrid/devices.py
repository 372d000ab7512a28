"""Device profiles for supported lock screens.

All values are physical pixels at the native resolution. Safe areas are the
point values from Apple's HIG multiplied by the device scale factor (3x on
every modern iPhone). ``clock_height`` is the band occupied by the lock
screen clock and date, measured from the top edge, and already includes the
Dynamic Island / notch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterator, Mapping, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeviceProfile:
    """Screen geometry of one phone model."""

    id: str
    name: str
    width: int
    height: int
    safe_area_top: int
    safe_area_bottom: int
    clock_height: int
    has_dynamic_island: bool = False
    has_notch: bool = False

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"{self.id}: dimensions must be positive ({self.width}x{self.height})")
        for field_name in ("safe_area_top", "safe_area_bottom", "clock_height"):
            value = getattr(self, field_name)
            if value < 0 or value > self.height:
                raise ValueError(f"{self.id}: {field_name}={value} outside 0..{self.height}")

    @property
    def cutout(self) -> str:
        """Top cutout style: 'dynamic-island', 'notch' or 'none'."""
        if self.has_dynamic_island:
            return "dynamic-island"
        if self.has_notch:
            return "notch"
        return "none"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "width": self.width,
            "height": self.height,
            "safeAreaTop": self.safe_area_top,
            "safeAreaBottom": self.safe_area_bottom,
            "clockHeight": self.clock_height,
            "hasDynamicIsland": self.has_dynamic_island,
            "hasNotch": self.has_notch,
        }


DEFAULT_DEVICE_ID = "iphone-16-pro"

_PROFILES = (
    # iPhone 17 series (2025)
    DeviceProfile("iphone-17-pro-max", "iPhone 17 Pro Max", 1320, 2868, 186, 102, 330, True),
    DeviceProfile("iphone-17-pro", "iPhone 17 Pro", 1206, 2622, 186, 102, 300, True),
    DeviceProfile("iphone-17", "iPhone 17", 1206, 2622, 186, 102, 300, True),
    DeviceProfile("iphone-17-air", "iPhone 17 Air", 1260, 2736, 204, 87, 310, True),
    # iPhone 16 series (2024)
    DeviceProfile("iphone-16-pro-max", "iPhone 16 Pro Max", 1320, 2868, 186, 102, 330, True),
    DeviceProfile("iphone-16-pro", "iPhone 16 Pro", 1206, 2622, 186, 102, 300, True),
    DeviceProfile("iphone-16-plus", "iPhone 16 Plus", 1290, 2796, 177, 102, 320, True),
    DeviceProfile("iphone-16", "iPhone 16", 1179, 2556, 177, 102, 290, True),
    # iPhone 15 series (2023)
    DeviceProfile("iphone-15-pro-max", "iPhone 15 Pro Max", 1290, 2796, 177, 102, 320, True),
    DeviceProfile("iphone-15-pro", "iPhone 15 Pro", 1179, 2556, 177, 102, 290, True),
    DeviceProfile("iphone-15-plus", "iPhone 15 Plus", 1290, 2796, 177, 102, 320, True),
    DeviceProfile("iphone-15", "iPhone 15", 1179, 2556, 177, 102, 290, True),
    # iPhone 14 series (2022)
    DeviceProfile("iphone-14-pro-max", "iPhone 14 Pro Max", 1290, 2796, 177, 102, 320, True),
    DeviceProfile("iphone-14-pro", "iPhone 14 Pro", 1179, 2556, 177, 102, 290, True),
    DeviceProfile("iphone-14-plus", "iPhone 14 Plus", 1284, 2778, 141, 102, 310, False, True),
    DeviceProfile("iphone-14", "iPhone 14", 1170, 2532, 141, 102, 280, False, True),
    # Older notch models
    DeviceProfile("iphone-13", "iPhone 13/12", 1170, 2532, 141, 102, 280, False, True),
    # Home button, no cutout
    DeviceProfile("iphone-se", "iPhone SE", 750, 1334, 60, 0, 180),
)

DEVICE_PROFILES: Mapping[str, DeviceProfile] = MappingProxyType({p.id: p for p in _PROFILES})


class DeviceCatalog:
    """Read-only device table with a designated fallback profile.

    Built once at startup and shared by the export and preview renderers so
    both always resolve the same geometry for the same id.
    """

    def __init__(self, profiles: Mapping[str, DeviceProfile] = DEVICE_PROFILES,
                 default_id: str = DEFAULT_DEVICE_ID):
        if default_id not in profiles:
            raise ValueError(f"Default device {default_id!r} missing from table")
        self._profiles = MappingProxyType(dict(profiles))
        self._default_id = default_id

    @property
    def default_id(self) -> str:
        return self._default_id

    @property
    def default(self) -> DeviceProfile:
        return self._profiles[self._default_id]

    def get(self, device_id: str) -> Optional[DeviceProfile]:
        return self._profiles.get(device_id)

    def resolve(self, device_id: Optional[str]) -> DeviceProfile:
        """Return the profile for ``device_id`` or the default profile."""
        profile = self._profiles.get(device_id) if device_id else None
        if profile is None:
            logger.debug("Unknown device %r, falling back to %s", device_id, self._default_id)
            return self.default
        return profile

    def ids(self) -> list[str]:
        return list(self._profiles)

    def __contains__(self, device_id: object) -> bool:
        return device_id in self._profiles

    def __iter__(self) -> Iterator[DeviceProfile]:
        return iter(self._profiles.values())

    def __len__(self) -> int:
        return len(self._profiles)
