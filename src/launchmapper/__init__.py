"""Launchmapper: note layouts and saxophone fingerings for MIDI grid controllers."""

__version__ = "0.1.0"

# Core engine
from .core import FingeringResolver, MappingEngine

# Tables
from .models import MappingTable

__all__ = [
    "FingeringResolver",
    "MappingEngine",
    "MappingTable",
]
