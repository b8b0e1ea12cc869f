"""Presentation layer - command line interface."""
from .cli import LookupCommand

__all__ = [
    'LookupCommand',
]
