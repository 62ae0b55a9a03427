"""Debounced auto-save of shop and product edits."""

from .auto_saver import AutoSaver
from .debouncer import Debouncer, Throttler

__all__ = ['AutoSaver', 'Debouncer', 'Throttler']
