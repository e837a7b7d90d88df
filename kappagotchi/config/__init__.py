"""
Configuration management for kappagotchi.
"""

from .config import load_config, load_rules, save_config, get_state_path, DEFAULTS_PATH

__all__ = [
    'load_config',
    'load_rules',
    'save_config',
    'get_state_path',
    'DEFAULTS_PATH',
]
