"""Observer protocols for the collaborators driven by the engine.

The engine never produces audio or talks to a device itself. It reports
what should sound to a ``SoundObserver`` and what each pad should show to
a ``LightObserver``. Observers are called synchronously on the thread
that fed the event into the engine.
"""

from typing import Protocol, runtime_checkable

from launchmapper.models.enums import Waveform


@runtime_checkable
class SoundObserver(Protocol):
    """
    Observer that turns note activity into sound.

    A note gets exactly one ``on_note_start`` when it becomes active and
    exactly one ``on_note_stop`` when its last holder releases it, however
    many pads hold it in between.
    """

    def on_note_start(self, note: int, velocity: float) -> None:
        """
        Start sounding a note.

        Args:
            note: MIDI note number (0-127)
            velocity: Normalised velocity (0.0-1.0)
        """
        ...

    def on_note_stop(self, note: int) -> None:
        """Stop sounding a note."""
        ...

    def on_pitch_bend(self, bend: int) -> None:
        """The summed bend of all held pitch pads changed."""
        ...

    def on_waveform_change(self, waveform: Waveform) -> None:
        """A timbre pad selected a different waveform."""
        ...

    def on_all_notes_off(self) -> None:
        """Everything was stopped; silence any remaining voice."""
        ...


@runtime_checkable
class LightObserver(Protocol):
    """Observer that shows pad colors on a device."""

    def on_key_color(self, key: int, color: int) -> None:
        """
        Show a color on a pad.

        Args:
            key: Pad key
            color: Palette index (0x00-0x7F)
        """
        ...
