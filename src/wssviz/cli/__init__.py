"""
Command-line interface for the wssviz package.

This module provides the main CLI entry point for the visualizer.
"""

from .main import main_cli

__all__ = [
    "main_cli",
]
