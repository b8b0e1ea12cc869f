"""Presentation CLI exports."""
from .lookup_command import LookupCommand
from .formatting import format_number, render_overall, render_report

__all__ = [
    "LookupCommand",
    "format_number",
    "render_overall",
    "render_report",
]
