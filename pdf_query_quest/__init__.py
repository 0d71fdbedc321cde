"""
PDF Query Quest: ask questions about a PDF's extracted text.
"""

__version__ = "1.0.0"
