"""
Command-line interface for the heapdiff package.
"""

from .main import main_cli

__all__ = [
    "main_cli",
]
