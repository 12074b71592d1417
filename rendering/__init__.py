"""Rendering module for presentation concerns.

This module handles the stats card SVG and its number/date formatting,
keeping presentation separate from the streak logic in services.
"""

from rendering.stats_card import format_number, format_range, render_stats_card

__all__ = [
    "format_number",
    "format_range",
    "render_stats_card",
]
