"""Color themes for the wallpaper."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Iterator, Mapping

from PIL import ImageColor

from .errors import ValidationError

if TYPE_CHECKING:
    from .settings import Settings

CUSTOM_THEME_ID = "custom"
DEFAULT_THEME_ID = "light"

COLOR_KEYS = ("background", "lived", "future", "text")


def parse_color(value: str, field: str = "color") -> tuple[int, int, int]:
    """Parse a CSS-style color string into an RGB tuple.

    Raises:
        ValidationError: If the value is not a string Pillow understands
    """
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} must be a color string")
    try:
        rgb = ImageColor.getrgb(value)
    except ValueError as exc:
        raise ValidationError(f"{field} is not a valid color: {value!r}") from exc
    return rgb[:3]


def is_dark(color: str) -> bool:
    """True when the color's perceived luminance is below mid-gray."""
    r, g, b = parse_color(color)
    return (0.299 * r + 0.587 * g + 0.114 * b) < 128


@dataclass(frozen=True)
class ThemeColors:
    """The four colors of a wallpaper."""

    background: str
    lived: str
    future: str
    text: str

    def __post_init__(self):
        for key in COLOR_KEYS:
            parse_color(getattr(self, key), f"customColors.{key}")

    @classmethod
    def from_dict(cls, data: object) -> "ThemeColors":
        if not isinstance(data, dict):
            raise ValidationError("customColors must be an object")
        unknown = set(data) - set(COLOR_KEYS)
        if unknown:
            raise ValidationError(f"customColors has unknown keys: {', '.join(sorted(unknown))}")
        missing = [key for key in COLOR_KEYS if key not in data]
        if missing:
            raise ValidationError(f"customColors missing: {', '.join(missing)}")
        return cls(**{key: data[key] for key in COLOR_KEYS})

    def to_dict(self) -> dict:
        return {key: getattr(self, key) for key in COLOR_KEYS}


@dataclass(frozen=True)
class Theme:
    id: str
    name: str
    colors: ThemeColors


_THEMES = (
    Theme("light", "Light", ThemeColors("#f5f2ed", "#d35233", "#d9d4cc", "#141414")),
    Theme("dark", "Dark", ThemeColors("#0a0c10", "#c9a24d", "#1e2128", "#f2f0eb")),
    Theme("midnight", "Midnight", ThemeColors("#0f0f1a", "#6366f1", "#1e1e2e", "#e2e8f0")),
    Theme("sepia", "Sepia", ThemeColors("#f4ecd8", "#8b4513", "#d4c4a8", "#3d2914")),
    Theme("ocean", "Ocean", ThemeColors("#0c1929", "#0ea5e9", "#1e3a5f", "#e0f2fe")),
    Theme("forest", "Forest", ThemeColors("#0f1a0f", "#22c55e", "#1a2e1a", "#dcfce7")),
    # Seed colors shown by the picker before the user edits anything
    Theme(CUSTOM_THEME_ID, "Custom", ThemeColors("#ffffff", "#000000", "#e5e5e5", "#000000")),
)

THEMES: Mapping[str, Theme] = MappingProxyType({t.id: t for t in _THEMES})
THEME_IDS = frozenset(THEMES)


class ThemeCatalog:
    """Read-only palette table."""

    def __init__(self, themes: Mapping[str, Theme] = THEMES, default_id: str = DEFAULT_THEME_ID):
        if default_id not in themes or default_id == CUSTOM_THEME_ID:
            raise ValueError(f"Invalid default theme {default_id!r}")
        self._themes = MappingProxyType(dict(themes))
        self._default_id = default_id

    @property
    def default(self) -> Theme:
        return self._themes[self._default_id]

    def get(self, theme_id: str) -> Theme:
        return self._themes.get(theme_id, self.default)

    def resolve_colors(self, settings: "Settings") -> ThemeColors:
        """Palette to draw with for ``settings``.

        A custom theme without stored colors renders with the default palette.
        """
        if settings.theme == CUSTOM_THEME_ID:
            return settings.custom_colors or self.default.colors
        return self.get(settings.theme).colors

    def __iter__(self) -> Iterator[Theme]:
        return iter(self._themes.values())

    def __len__(self) -> int:
        return len(self._themes)


def resolve_colors(settings: "Settings", themes: ThemeCatalog = None) -> ThemeColors:
    return (themes or ThemeCatalog()).resolve_colors(settings)
