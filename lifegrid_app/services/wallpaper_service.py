"""Wallpaper export service: settings/token in, PNG bytes out"""

import logging
from typing import Any, Optional

from lifegrid import RenderConfig, Settings, codec, settings_from_dict
from lifegrid.renderer import render_wallpaper
from lifegrid.weeks import Moment

logger = logging.getLogger(__name__)


class WallpaperService:
    """Full-resolution wallpaper generation for the token endpoint"""

    def __init__(self, config: RenderConfig):
        self.config = config

    def settings_from_token(self, token: str) -> Settings:
        """Decode a token (raises InvalidTokenError)."""
        return codec.decode(token)

    def create_token(self, payload: Any) -> tuple[str, Settings]:
        """Validate a JSON settings payload and encode it.

        Raises:
            ValidationError: If the payload does not match the settings schema
        """
        settings = settings_from_dict(payload)
        return codec.encode(settings), settings

    def generate_png(self, settings: Settings, now: Optional[Moment] = None) -> bytes:
        """Render at the device's native resolution and encode as PNG.

        Raises:
            RenderError: If the surface cannot be allocated or drawn
        """
        device = self.config.devices.resolve(settings.device)
        if device.id != settings.device:
            logger.info(f"Unknown device '{settings.device}', using {device.id}")
        surface = render_wallpaper(settings, self.config, now=now)
        png = surface.to_png()
        logger.info(
            f"Generated wallpaper: device={device.id}, {surface.width}x{surface.height}, "
            f"theme={settings.theme}, shape={settings.shape}, bytes={len(png)}"
        )
        return png
