from datetime import date, datetime, timezone

import pytest
from PIL import Image
from lifegrid import DEFAULT_CONFIG, Settings, ValidationError
from lifegrid.themes import THEMES
from lifegrid_app.services import PreviewService, PreviewSession
from lifegrid_app.services.wallpaper_service import WallpaperService

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def service():
    return PreviewService(DEFAULT_CONFIG)


@pytest.fixture
def settings():
    return Settings(birth_date=date(1990, 5, 1), life_expectancy=80, device="iphone-16-pro", theme="ocean")


def test_screen_preview_size(service, settings):
    surface = service.render_preview(settings, now=NOW)
    assert surface.size == (520, 1120)


def test_custom_width(service, settings):
    assert service.render_preview(settings, now=NOW, width=130).size == (260, 560)


def test_mockup_adds_bezel(service, settings):
    surface = service.render_preview(settings, now=NOW, mockup=True)
    assert surface.size == (560, 1160)
    # Rounded frame leaves the outer corner transparent
    assert surface.image.getpixel((0, 0))[3] == 0
    assert surface.image.getpixel((surface.width // 2, surface.height // 2))[3] == 255


@pytest.mark.parametrize("device_id", ["iphone-16-pro", "iphone-14", "iphone-se"])
def test_mockup_for_each_cutout(service, settings, device_id):
    from dataclasses import replace
    surface = service.render_preview(replace(settings, device=device_id), now=NOW, mockup=True)
    assert surface.size == (560, 1160)


def test_stats(settings):
    stats = PreviewService.stats(settings, NOW)
    assert stats["totalWeeks"] == 80 * 52
    assert 0 < stats["weeksLived"] < stats["totalWeeks"]
    assert stats["percentLived"] == round(stats["weeksLived"] * 100 / stats["totalWeeks"])


def test_session_rerenders_on_change(service, settings):
    session = PreviewSession(service, settings)
    before = session.surface
    session.update(shape="square", widget_position="top")
    assert session.settings.shape == "square"
    assert session.settings.widget_position == "top"
    assert session.surface is not before


def test_session_keeps_state_on_invalid_change(service, settings):
    session = PreviewSession(service, settings)
    surface = session.surface
    with pytest.raises(ValidationError):
        session.update(life_expectancy=0)
    assert session.settings == settings
    assert session.surface is surface


def test_session_custom_theme_seeded_from_current(service, settings):
    """Switching to custom keeps the palette that was on screen."""
    session = PreviewSession(service, settings)
    session.select_theme("custom")
    assert session.settings.theme == "custom"
    assert session.settings.custom_colors == THEMES["ocean"].colors


def test_session_export(service, settings, tmp_path):
    session = PreviewSession(service, settings)
    out = session.export_png(tmp_path)
    assert out.parent == tmp_path and out.suffix == ".png"
    with Image.open(out) as image:
        assert image.size == (1206, 2622)

    named = session.export_png(tmp_path / "mine.png")
    assert named.name == "mine.png" and named.exists()


def test_export_matches_token_endpoint_render(settings):
    """Preview export and the token endpoint produce the same bytes."""
    wallpaper = WallpaperService(DEFAULT_CONFIG)
    token, decoded = wallpaper.create_token({
        "birthDate": "1990-05-01", "lifeExpectancy": 80, "device": "iphone-16-pro",
        "shape": "circle", "widgetPosition": "none", "theme": "ocean",
    })
    assert decoded == settings
    assert wallpaper.settings_from_token(token) == settings
    assert wallpaper.generate_png(settings, now=NOW) == wallpaper.generate_png(decoded, now=NOW)


def test_session_rejects_unknown_field(service, settings):
    session = PreviewSession(service, settings)
    surface = session.surface
    with pytest.raises(ValidationError):
        session.update(colour="red")
    assert session.settings == settings
    assert session.surface is surface
