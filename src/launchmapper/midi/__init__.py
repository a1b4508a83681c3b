"""MIDI input translation and output sinks (mido)."""

from .sinks import MidiLightSink, MidiSoundSink
from .translator import MidiTranslator

__all__ = ["MidiLightSink", "MidiSoundSink", "MidiTranslator"]
