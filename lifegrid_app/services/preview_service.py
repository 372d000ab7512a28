"""
Preview Service - interactive wallpaper preview

Renders the same layout as the export path at a thumbnail resolution:
- screen: wallpaper only, at PREVIEW_WIDTH x PREVIEW_HEIGHT * pixel ratio
- mockup: screen inside a phone frame with Dynamic Island / notch chrome

PreviewSession keeps the form state and re-renders on every change.
"""

from dataclasses import fields, replace
from pathlib import Path
from typing import Optional

from PIL import Image, ImageDraw
import logging

from lifegrid import RasterSurface, RenderConfig, Settings, ValidationError, switch_theme
from lifegrid.devices import DeviceProfile
from lifegrid.renderer import render_wallpaper
from lifegrid.themes import is_dark
from lifegrid.weeks import Moment, percent_lived, total_weeks, weeks_lived
from ..constants import AppConstants
from ..utils import export_filename

logger = logging.getLogger(__name__)


class PreviewService:
    """Thumbnail renderer sharing the export engine"""

    def __init__(self, config: RenderConfig):
        self.config = config

    def render_preview(self, settings: Settings, now: Optional[Moment] = None,
                       mockup: bool = False, width: Optional[int] = None) -> RasterSurface:
        """
        Render a preview of ``settings``

        Args:
            settings: Validated settings
            now: Reference moment for the lived/future split
            mockup: Wrap the screen in phone chrome
            width: Screen width in CSS pixels (height follows the 260x560 frame)

        Returns:
            RasterSurface at ``width * PREVIEW_PIXEL_RATIO`` wide
        """
        ratio = AppConstants.PREVIEW_PIXEL_RATIO
        css_width = width or AppConstants.PREVIEW_WIDTH_PX
        css_height = round(css_width * AppConstants.PREVIEW_HEIGHT_PX / AppConstants.PREVIEW_WIDTH_PX)

        screen = render_wallpaper(
            settings, self.config, width=css_width * ratio, height=css_height * ratio, now=now,
        )
        if not mockup:
            return screen

        device = self.config.devices.resolve(settings.device)
        colors = self.config.themes.resolve_colors(settings)
        return RasterSurface(PreviewService._draw_mockup(screen.image, device, colors.background, colors.text, ratio))

    @staticmethod
    def stats(settings: Settings, now: Optional[Moment] = None) -> dict:
        lived = weeks_lived(settings.birth_date, now)
        total = total_weeks(settings.life_expectancy)
        return {"weeksLived": lived, "totalWeeks": total, "percentLived": percent_lived(lived, total)}

    @staticmethod
    def _draw_mockup(screen: Image.Image, device: DeviceProfile, background: str,
                     text_color: str, ratio: int) -> Image.Image:
        """Compose screen + bezel + cutout + home indicator.

        Chrome is decorative only; the grid geometry inside the screen is the
        export geometry scaled down.
        """
        bezel = AppConstants.MOCKUP_BEZEL_PX * ratio
        width = screen.width + 2 * bezel
        height = screen.height + 2 * bezel
        frame_color = AppConstants.COLOR_FRAME_DARK if is_dark(background) else AppConstants.COLOR_FRAME_LIGHT

        frame = Image.new("RGBA", (width, height), (0, 0, 0, 0))
        draw = ImageDraw.Draw(frame)
        draw.rounded_rectangle((0, 0, width - 1, height - 1),
                               radius=AppConstants.MOCKUP_OUTER_RADIUS_PX * ratio, fill=frame_color)

        # Screen with rounded corners
        mask = Image.new("L", screen.size, 0)
        ImageDraw.Draw(mask).rounded_rectangle(
            (0, 0, screen.width - 1, screen.height - 1),
            radius=AppConstants.MOCKUP_SCREEN_RADIUS_PX * ratio, fill=255,
        )
        frame.paste(screen.convert("RGBA"), (bezel, bezel), mask)

        center_x = width / 2
        if device.has_dynamic_island:
            w = AppConstants.ISLAND_WIDTH_PX * ratio
            h = AppConstants.ISLAND_HEIGHT_PX * ratio
            top = bezel + AppConstants.ISLAND_TOP_PX * ratio
            draw.rounded_rectangle((center_x - w / 2, top, center_x + w / 2, top + h),
                                   radius=h // 2, fill=AppConstants.COLOR_CUTOUT)
        elif device.has_notch:
            w = AppConstants.NOTCH_WIDTH_PX * ratio
            h = AppConstants.NOTCH_HEIGHT_PX * ratio
            draw.rounded_rectangle((center_x - w / 2, bezel - h, center_x + w / 2, bezel + h),
                                   radius=AppConstants.NOTCH_RADIUS_PX * ratio, fill=AppConstants.COLOR_CUTOUT)
            # Square off the top half so only the bottom corners look rounded
            draw.rectangle((center_x - w / 2, bezel - h, center_x + w / 2, bezel), fill=frame_color)

        # Home indicator
        w = AppConstants.HOME_INDICATOR_WIDTH_PX * ratio
        h = AppConstants.HOME_INDICATOR_HEIGHT_PX * ratio
        bottom = bezel + screen.height - AppConstants.HOME_INDICATOR_BOTTOM_PX * ratio
        draw.rounded_rectangle((center_x - w / 2, bottom, center_x + w / 2, bottom + h),
                               radius=h // 2, fill=text_color)

        return frame


class PreviewSession:
    """Interactive preview state.

    Every change produces new immutable settings and a fresh render; nothing
    is reused across renders.
    """

    def __init__(self, service: PreviewService, settings: Settings, mockup: bool = False):
        self.service = service
        self.mockup = mockup
        self._settings = settings
        self._surface = self._render()

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def surface(self) -> RasterSurface:
        return self._surface

    @property
    def stats(self) -> dict:
        return PreviewService.stats(self._settings)

    def _render(self) -> RasterSurface:
        return self.service.render_preview(self._settings, mockup=self.mockup)

    def update(self, **changes) -> RasterSurface:
        """Apply field changes (Settings attribute names) and re-render.

        Raises:
            ValidationError: If a field name is unknown or the change makes the
                settings invalid; the previous settings and surface are kept
        """
        unknown = set(changes) - {f.name for f in fields(Settings)}
        if unknown:
            raise ValidationError(f"Unknown settings: {', '.join(sorted(unknown))}")
        if "theme" in changes:
            settings = switch_theme(self._settings, changes.pop("theme"), self.service.config.themes)
        else:
            settings = self._settings
        self._settings = replace(settings, **changes)
        self._surface = self._render()
        return self._surface

    def select_theme(self, theme_id: str) -> RasterSurface:
        return self.update(theme=theme_id)

    def export_png(self, path: Path) -> Path:
        """Save the full-resolution wallpaper locally (no network).

        A directory gets a timestamped file name inside it.
        """
        path = Path(path)
        if path.is_dir():
            path = path / export_filename()
        surface = render_wallpaper(self._settings, self.service.config)
        logger.info(f"Exported wallpaper to {path}")
        return surface.save(path)
