"""
Configuration package.

Exports the settings module and utilities for easy importing.
"""

from pdf_query_quest.config.settings import settings, Settings
from pdf_query_quest.config.utils import read_config

__all__ = ["settings", "Settings", "read_config"]
