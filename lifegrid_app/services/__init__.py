"""Service layer for wallpaper export and preview"""

from .wallpaper_service import WallpaperService
from .preview_service import PreviewService, PreviewSession

__all__ = ['WallpaperService', 'PreviewService', 'PreviewSession']
