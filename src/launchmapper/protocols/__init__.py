"""Protocols for the sound and lighting collaborators of the engine."""

from .observers import LightObserver, SoundObserver

__all__ = [
    "LightObserver",
    "SoundObserver",
]
