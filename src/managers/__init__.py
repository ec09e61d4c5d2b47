"""
Managers for configuration
"""

from .config_manager import ConfigManager, build_arg_parser

__all__ = ['ConfigManager', 'build_arg_parser']
