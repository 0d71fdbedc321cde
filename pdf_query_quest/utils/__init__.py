"""
Utility functions for the PDF Query Quest service.
"""

from .logging import setup_logger, preview

__all__ = [
    "setup_logger",
    "preview",
]
