"""Wallpaper settings and their wire schema.

The wire form is the camelCase JSON object the web form posts and the token
carries. Validation is strict: a dict either becomes a complete ``Settings``
or raises ``ValidationError``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Any, Optional

from .errors import ValidationError
from .themes import CUSTOM_THEME_ID, DEFAULT_THEME_ID, THEME_IDS, ThemeCatalog, ThemeColors

SHAPES = ("circle", "rounded", "square")
WIDGET_POSITIONS = ("none", "top", "bottom")

MIN_LIFE_EXPECTANCY = 1
MAX_LIFE_EXPECTANCY = 150

# Canonical wire order; the token codec serializes in exactly this order.
WIRE_FIELDS = (
    "birthDate",
    "lifeExpectancy",
    "device",
    "shape",
    "widgetPosition",
    "theme",
    "customColors",
    "showLabels",
)
_OPTIONAL_FIELDS = {"customColors", "showLabels"}
_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")


@dataclass(frozen=True)
class Settings:
    """Everything needed to draw one wallpaper.

    ``theme`` is the discriminant for ``custom_colors``: the colors are only
    drawn when ``theme == "custom"`` and are otherwise kept for when the user
    switches back.
    """

    birth_date: date
    life_expectancy: int
    device: str
    shape: str = "circle"
    widget_position: str = "none"
    theme: str = DEFAULT_THEME_ID
    custom_colors: Optional[ThemeColors] = None
    show_labels: bool = True

    def __post_init__(self):
        if not isinstance(self.birth_date, date) or isinstance(self.birth_date, datetime):
            raise ValidationError("birthDate must be a calendar date")
        if isinstance(self.life_expectancy, bool) or not isinstance(self.life_expectancy, int):
            raise ValidationError("lifeExpectancy must be an integer")
        if not MIN_LIFE_EXPECTANCY <= self.life_expectancy <= MAX_LIFE_EXPECTANCY:
            raise ValidationError(
                f"lifeExpectancy must be between {MIN_LIFE_EXPECTANCY} and {MAX_LIFE_EXPECTANCY}"
            )
        if not isinstance(self.device, str):
            raise ValidationError("device must be a string")
        _check_choice(self.shape, SHAPES, "shape")
        _check_choice(self.widget_position, WIDGET_POSITIONS, "widgetPosition")
        _check_choice(self.theme, THEME_IDS, "theme")
        if self.custom_colors is not None and not isinstance(self.custom_colors, ThemeColors):
            raise ValidationError("customColors must be ThemeColors")
        if not isinstance(self.show_labels, bool):
            raise ValidationError("showLabels must be a boolean")

    @property
    def is_custom(self) -> bool:
        return self.theme == CUSTOM_THEME_ID


def _check_choice(value: Any, choices, field: str) -> None:
    if not isinstance(value, str) or value not in choices:
        raise ValidationError(f"{field} must be one of: {', '.join(sorted(choices))}")


def parse_birth_date(value: Any) -> date:
    """Parse an ISO ``YYYY-MM-DD`` string (no time component)."""
    if not isinstance(value, str) or not _ISO_DATE.fullmatch(value):
        raise ValidationError("birthDate must be a YYYY-MM-DD string")
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise ValidationError(f"birthDate is not a valid date: {value!r}") from exc


def settings_from_dict(data: Any) -> Settings:
    """Validate a decoded JSON object into ``Settings``.

    Raises:
        ValidationError: On unknown or missing keys, wrong types or enum values
    """
    if not isinstance(data, dict):
        raise ValidationError("Settings must be a JSON object")

    unknown = set(data) - set(WIRE_FIELDS)
    if unknown:
        raise ValidationError(f"Unknown settings: {', '.join(sorted(map(str, unknown)))}")
    missing = [key for key in WIRE_FIELDS if key not in data and key not in _OPTIONAL_FIELDS]
    if missing:
        raise ValidationError(f"Missing settings: {', '.join(missing)}")

    custom = data.get("customColors")
    return Settings(
        birth_date=parse_birth_date(data["birthDate"]),
        life_expectancy=data["lifeExpectancy"],
        device=data["device"],
        shape=data["shape"],
        widget_position=data["widgetPosition"],
        theme=data["theme"],
        custom_colors=ThemeColors.from_dict(custom) if custom is not None else None,
        show_labels=data.get("showLabels", True),
    )


def settings_to_dict(settings: Settings) -> dict:
    """Canonical wire dict in ``WIRE_FIELDS`` order."""
    data = {
        "birthDate": settings.birth_date.isoformat(),
        "lifeExpectancy": settings.life_expectancy,
        "device": settings.device,
        "shape": settings.shape,
        "widgetPosition": settings.widget_position,
        "theme": settings.theme,
    }
    if settings.custom_colors is not None:
        data["customColors"] = settings.custom_colors.to_dict()
    data["showLabels"] = settings.show_labels
    return data


def default_settings(today: Optional[date] = None) -> Settings:
    """Initial form state: a 30 year old on an iPhone 15 Pro."""
    today = today or date.today()
    try:
        birth = today.replace(year=today.year - 30)
    except ValueError:  # 29 February
        birth = today.replace(year=today.year - 30, day=28)
    return Settings(birth_date=birth, life_expectancy=77, device="iphone-15-pro")


def switch_theme(settings: Settings, theme_id: str, themes: Optional[ThemeCatalog] = None) -> Settings:
    """Apply a theme picker selection.

    Choosing ``custom`` without stored colors seeds them from the palette that
    was on screen just before the switch, so the wallpaper does not jump.
    """
    _check_choice(theme_id, THEME_IDS, "theme")
    if theme_id == CUSTOM_THEME_ID and settings.custom_colors is None:
        current = (themes or ThemeCatalog()).resolve_colors(settings)
        return replace(settings, theme=theme_id, custom_colors=current)
    return replace(settings, theme=theme_id)
