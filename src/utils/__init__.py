"""
Utility helpers for the knob controller
"""

from .logger import get_logger, configure_logger

__all__ = [
    'get_logger',
    'configure_logger',
]
