"""CLI commands for launchmapper."""

from .config import config
from .generate import generate
from .mapping import recolor, validate
from .midi import midi_group
from .notes import finger, note

__all__ = ["config", "finger", "generate", "midi_group", "note", "recolor", "validate"]
