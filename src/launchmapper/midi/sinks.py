"""
MIDI output for the engine's collaborators.

``MidiLightSink`` shows pad colors by sending ``note_on(note=key,
velocity=color)``, the Launchpad palette convention. ``MidiSoundSink``
forwards the engine's notes to a synth as plain note and pitch wheel
messages. Both hand their messages to a ``send`` callable, usually the
``send`` method of an open mido output port.
"""

import logging
from collections.abc import Callable

import mido

from launchmapper.models import Waveform

logger = logging.getLogger(__name__)

SendFunction = Callable[[mido.Message], None]

PITCHWHEEL_MIN = -8192
PITCHWHEEL_MAX = 8191


class MidiLightSink:
    """LightObserver that drives pad LEDs."""

    def __init__(self, send: SendFunction, channel: int = 0):
        self._send = send
        self.channel = channel

    def on_key_color(self, key: int, color: int) -> None:
        self._send(mido.Message("note_on", channel=self.channel, note=key, velocity=color))


class MidiSoundSink:
    """
    SoundObserver that plays the engine's notes on an external synth.

    Pitch bends are taken as semitones and scaled to the pitch wheel
    using ``bend_range`` (the synth's bend range in semitones). Waveform
    changes have no MIDI equivalent and are only logged.
    """

    def __init__(self, send: SendFunction, channel: int = 0, bend_range: int = 2):
        """
        Args:
            send: Callable that sends one message
            channel: MIDI channel of the synth (0-15)
            bend_range: Synth bend range in semitones, must be positive

        Raises:
            ValueError: If bend_range is not positive
        """
        if bend_range <= 0:
            raise ValueError(f"bend_range must be positive, got {bend_range}")
        self._send = send
        self.channel = channel
        self.bend_range = bend_range

    def on_note_start(self, note: int, velocity: float) -> None:
        midi_velocity = max(1, min(127, round(velocity * 127)))
        self._send(mido.Message("note_on", channel=self.channel, note=note, velocity=midi_velocity))

    def on_note_stop(self, note: int) -> None:
        self._send(mido.Message("note_off", channel=self.channel, note=note))

    def on_pitch_bend(self, bend: int) -> None:
        pitch = round(bend / self.bend_range * PITCHWHEEL_MAX)
        pitch = max(PITCHWHEEL_MIN, min(PITCHWHEEL_MAX, pitch))
        self._send(mido.Message("pitchwheel", channel=self.channel, pitch=pitch))

    def on_waveform_change(self, waveform: Waveform) -> None:
        logger.info(f"Waveform changed to {waveform.value} (not sent over MIDI)")

    def on_all_notes_off(self) -> None:
        # All Notes Off controller
        self._send(mido.Message("control_change", channel=self.channel, control=123, value=0))
