"""
Flask app for life calendar wallpapers

Token-driven wallpaper endpoint (for iOS Shortcuts) plus the JSON API the
settings form uses for tokens and live previews.
Access at http://<host>:8080
"""

from flask import Flask, request, jsonify, Response
from werkzeug.exceptions import HTTPException
import logging
import os

from lifegrid import DEFAULT_CONFIG, InvalidTokenError, RenderError, ValidationError, settings_from_dict
from lifegrid.codec import wallpaper_url
from lifegrid.weeks import COUNTRY_LIFE_EXPECTANCY
from .constants import AppConstants
from .services import WallpaperService, PreviewService
from .utils import safe_int, parse_bool, iso_timestamp

LOG_LEVEL = os.getenv("LIFEGRID_LOG_LEVEL", "INFO").upper()
HOST = os.getenv("LIFEGRID_HOST", "0.0.0.0")
PORT = int(os.getenv("LIFEGRID_PORT", "8080"))
PUBLIC_URL = os.getenv("LIFEGRID_PUBLIC_URL", "")

logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))
logger = logging.getLogger(__name__)

app = Flask(__name__)


def _error(message: str, code: str, status: int):
    return jsonify({"error": {"message": message, "code": code}}), status


@app.errorhandler(Exception)
def handle_unexpected_error(err):
    """Ensure API endpoints always return JSON, even for unhandled failures."""
    if request.path.startswith("/api/"):
        status = 500
        message = "Internal Server Error"
        if isinstance(err, HTTPException):
            status = err.code or 500
            message = err.description or message
        if status >= 500:
            logger.exception("Unhandled API error on %s: %s", request.path, err)
        code = "INTERNAL_ERROR" if status >= 500 else "HTTP_ERROR"
        return _error(message, code, status)

    if isinstance(err, HTTPException):
        return err
    logger.exception("Unhandled web error on %s: %s", request.path, err)
    return "Internal Server Error", 500


# Render configuration is built once; services share it by reference
render_config = DEFAULT_CONFIG
wallpaper_service = WallpaperService(render_config)
preview_service = PreviewService(render_config)

logger.info(f"=== Lifegrid Startup Configuration ===")
logger.info(f"Devices: {len(render_config.devices)} (default {render_config.devices.default_id})")
logger.info(f"Gap ratio: {render_config.gap_ratio}")
logger.info(f"Public URL: {PUBLIC_URL or 'request host'}")
logger.info(f"======================================")


def _public_base_url() -> str:
    return PUBLIC_URL or request.host_url


def _wallpaper_response(token: str):
    if not token:
        return _error("Missing token", "MISSING_TOKEN", 400)
    try:
        settings = wallpaper_service.settings_from_token(token)
    except InvalidTokenError as e:
        logger.info(f"Rejected token: {e}")
        return _error("Invalid token", "INVALID_TOKEN", 400)

    try:
        png = wallpaper_service.generate_png(settings)
    except RenderError as e:
        logger.error(f"Wallpaper generation failed: {e}")
        return _error("Failed to generate wallpaper", "GENERATION_ERROR", 500)

    if parse_bool(request.args.get("download")):
        disposition = f'attachment; filename="{AppConstants.EXPORT_FILENAME}"'
    else:
        disposition = f'inline; filename="{AppConstants.WALLPAPER_FILENAME}"'
    return Response(png, mimetype="image/png", headers={
        "Content-Disposition": disposition,
        "Cache-Control": AppConstants.NO_CACHE,
    })


@app.route("/api/wallpaper", methods=["GET"])
def wallpaper_by_query():
    return _wallpaper_response(request.args.get("token", ""))


@app.route("/api/wallpaper/<token>", methods=["GET"])
def wallpaper_by_path(token):
    return _wallpaper_response(token)


@app.route("/api/wallpaper/token", methods=["POST"])
def create_token():
    payload = request.get_json(silent=True)
    try:
        token, _ = wallpaper_service.create_token(payload)
    except ValidationError as e:
        logger.info(f"Invalid settings: {e}")
        return _error("Invalid settings", "INVALID_SETTINGS", 400)
    return jsonify({"data": {"token": token, "url": wallpaper_url(_public_base_url(), token)}})


@app.route("/api/wallpaper/preview", methods=["POST"])
def preview():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return _error("Invalid settings", "INVALID_SETTINGS", 400)
    try:
        settings = settings_from_dict(data.get("settings"))
        width = safe_int(data.get("width"), "width",
                         min_value=AppConstants.PREVIEW_MIN_WIDTH_PX,
                         max_value=AppConstants.PREVIEW_MAX_WIDTH_PX,
                         default=AppConstants.PREVIEW_WIDTH_PX)
    except ValueError as e:
        logger.info(f"Invalid preview request: {e}")
        return _error("Invalid settings", "INVALID_SETTINGS", 400)

    try:
        surface = preview_service.render_preview(settings, mockup=parse_bool(data.get("mockup")), width=width)
    except RenderError as e:
        logger.error(f"Preview generation failed: {e}")
        return _error("Failed to generate wallpaper", "GENERATION_ERROR", 500)

    return jsonify({"data": {
        "image": surface.to_data_url(),
        "width": surface.width,
        "height": surface.height,
        **PreviewService.stats(settings),
    }})


@app.route("/api/devices", methods=["GET"])
def list_devices():
    return jsonify({"data": [
        {**device.to_dict(), "default": device.id == render_config.devices.default_id}
        for device in render_config.devices
    ]})


@app.route("/api/themes", methods=["GET"])
def list_themes():
    return jsonify({"data": [
        {"id": theme.id, "name": theme.name, "colors": theme.colors.to_dict()}
        for theme in render_config.themes
    ]})


@app.route("/api/countries", methods=["GET"])
def list_countries():
    return jsonify({"data": [
        {"code": code, "name": name, "lifeExpectancy": years}
        for code, (name, years) in COUNTRY_LIFE_EXPECTANCY.items()
    ]})


@app.route("/api/health", methods=["GET"])
def health():
    return jsonify({"data": {"status": "ok", "timestamp": iso_timestamp()}})


def main():
    app.run(host=HOST, port=PORT, threaded=True)


if __name__ == "__main__":
    main()
