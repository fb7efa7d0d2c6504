from .base import HistorySource, PresetStore
from .http import HttpHistorySource, HttpPresetStore
from .memory import InMemoryHistorySource, InMemoryPresetStore

__all__ = [
    "HistorySource",
    "HttpHistorySource",
    "HttpPresetStore",
    "InMemoryHistorySource",
    "InMemoryPresetStore",
    "PresetStore",
]
