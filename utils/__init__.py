"""
Utilidades del sistema.
"""
from .datetime_utils import get_local_now, to_local_time, format_local

__all__ = ["get_local_now", "to_local_time", "format_local"]
