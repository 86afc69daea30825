"""
Utility module for the loudness model.

Contains helper functions used by the core stages.
"""

from .formatting import (
    format_frequency,
    format_milliseconds,
    format_cam,
    format_bank_shape,
)

__all__ = [
    "format_frequency",
    "format_milliseconds",
    "format_cam",
    "format_bank_shape",
]
