"""Shared utilities"""

from .validators import safe_int, parse_bool
from .timestamps import export_filename, file_timestamp, iso_timestamp

__all__ = ['safe_int', 'parse_bool', 'export_filename', 'file_timestamp', 'iso_timestamp']
