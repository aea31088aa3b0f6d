"""
Configuration package for the software reviews service.

Holds environment settings and logging configuration.
"""

from reviews_api.config.settings import Settings, get_settings, settings

__all__ = ['Settings', 'get_settings', 'settings']
