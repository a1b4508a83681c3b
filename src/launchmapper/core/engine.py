"""
Mapping engine - device and audio agnostic.

The engine is the single ingestion point for pad events. It looks the pad
up in the current mapping table, keeps the activity state, and reports to
its collaborators:

- SoundObserver: which notes start and stop, pitch bend, waveform
- LightObserver: which color every pad should show

The engine is single-threaded and does no locking of its own. Observers
are notified synchronously, before ``key_down``/``key_up`` return.
"""

import logging

from launchmapper.core.activity import ActivityTracker
from launchmapper.core.fingering import FingeringResolver
from launchmapper.model_manager import ObserverManager
from launchmapper.models import (
    NEUTRAL_COLOR,
    AppConfig,
    FingeringKey,
    FingeringMapping,
    Mapping,
    MappingTable,
    NoteMapping,
    PitchBendMapping,
    ShowSameNote,
    TimbreMapping,
    Waveform,
)
from launchmapper.models.notes import is_valid_note
from launchmapper.protocols import LightObserver, SoundObserver

logger = logging.getLogger(__name__)


class MappingEngine:
    """
    Turns pad presses into sound and light events.

    Responsibilities:
    - Note activity: a note starts when its first holder presses and stops
      when its last holder releases
    - Pitch bend: the sum of the bends of all held pitch pads
    - Timbre: the waveform selected by the last timbre pad pressed
    - Fingering voice: the note resolved from the held fingering keys
    - Pad colors: rest or pressed, per the show-same-note mode

    NOT responsible for:
    - Reading MIDI input (see ``launchmapper.midi.MidiTranslator``)
    - Producing audio or driving LEDs (observers do that)
    - Editing or persisting tables
    """

    def __init__(self, table: MappingTable | None = None, config: AppConfig | None = None):
        """
        Initialize engine.

        Args:
            table: Initial mapping table (empty if None)
            config: Application configuration (defaults if None)
        """
        self.config = config or AppConfig()
        self._table = table or MappingTable.empty()
        self._resolver = FingeringResolver(base_octave=self.config.base_octave)
        self._show_same_note = self.config.show_same_note

        # Activity state
        self._pressed: dict[int, Mapping] = {}
        self._notes = ActivityTracker[int](name="notes")
        self._fingering = ActivityTracker[FingeringKey](name="fingering")

        # Fingering voice
        self._gated = self._maps_play_key(self._table)
        self._voice_note: int | None = None
        self._voice_velocity = 1.0

        self._pitch_bend = 0
        self._waveform = self.config.sound.waveform

        # Last color sent per key; call sync_lights() once observers are registered
        self._colors: dict[int, int] = {
            key: entry.color.rest for key, entry in self._table.items()
        }

        self._sound_observers = ObserverManager[SoundObserver](observer_type_name="sound")
        self._light_observers = ObserverManager[LightObserver](observer_type_name="light")

        logger.info(f"Mapping engine initialized with {len(self._table)} mapped pad(s)")

    # =================================================================
    # Observers
    # =================================================================

    def register_sound_observer(self, observer: SoundObserver) -> None:
        self._sound_observers.register(observer)

    def unregister_sound_observer(self, observer: SoundObserver) -> None:
        self._sound_observers.unregister(observer)

    def register_light_observer(self, observer: LightObserver) -> None:
        self._light_observers.register(observer)

    def unregister_light_observer(self, observer: LightObserver) -> None:
        self._light_observers.unregister(observer)

    # =================================================================
    # State accessors
    # =================================================================

    @property
    def table(self) -> MappingTable:
        """The installed mapping table."""
        return self._table

    @property
    def waveform(self) -> Waveform:
        return self._waveform

    @property
    def pitch_bend(self) -> int:
        return self._pitch_bend

    @property
    def show_same_note(self) -> ShowSameNote:
        return self._show_same_note

    def active_notes(self) -> list[int]:
        """Notes currently sounding, ascending."""
        return sorted(self._notes)

    def note_count(self, note: int) -> int:
        """Number of holders keeping a note active."""
        return self._notes.count(note)

    def held_fingering_keys(self) -> set[FingeringKey]:
        return self._fingering.held()

    def fingering_note(self) -> int | None:
        """Note held by the fingering voice, or None if it is silent."""
        return self._voice_note

    def is_pressed(self, key: int) -> bool:
        return key in self._pressed

    # =================================================================
    # Key events
    # =================================================================

    def key_down(self, key: int, velocity: float = 1.0) -> None:
        """
        Handle a pad press.

        Args:
            key: Pad key
            velocity: Normalised velocity (0.0-1.0)
        """
        entry = self._table.get(key)
        if entry is None:
            logger.debug(f"Ignoring press of unmapped pad {key}")
            return
        if key in self._pressed:
            logger.debug(f"Ignoring repeated press of pad {key}")
            return

        mapping = entry.mapping
        self._pressed[key] = mapping
        logger.debug(f"Pad {key} down: {mapping.type} {mapping.describe()}")

        if isinstance(mapping, NoteMapping):
            self._hold_note(mapping.target, velocity)
        elif isinstance(mapping, PitchBendMapping):
            self._update_pitch_bend()
        elif isinstance(mapping, TimbreMapping):
            self._set_waveform(mapping.waveform)
        elif isinstance(mapping, FingeringMapping):
            self._fingering.increment(mapping.key)
            self._voice_velocity = velocity
            self._update_voice()

        self._refresh_lights()

    def key_up(self, key: int) -> None:
        """Handle a pad release. The mapping in effect at press time is released."""
        mapping = self._pressed.pop(key, None)
        if mapping is None:
            logger.debug(f"Ignoring release of pad {key} that is not held")
            return

        if isinstance(mapping, NoteMapping):
            self._release_note(mapping.target)
        elif isinstance(mapping, PitchBendMapping):
            self._update_pitch_bend()
        elif isinstance(mapping, FingeringMapping):
            self._fingering.decrement(mapping.key)
            self._update_voice()

        self._refresh_lights()

    # =================================================================
    # Global operations
    # =================================================================

    def stop_everything(self) -> None:
        """Silence every note, release every pad and resync the lights."""
        self._silence()
        self.sync_lights()

    def set_table(self, table: MappingTable) -> None:
        """
        Install a new mapping table.

        Everything sounding is stopped first. Pads the new table leaves
        unmapped are switched off.
        """
        self._silence()

        for key in [key for key in self._colors if key not in table]:
            del self._colors[key]
            self._light_observers.notify("on_key_color", key, NEUTRAL_COLOR)

        self._table = table
        self._gated = self._maps_play_key(table)
        logger.info(f"Installed mapping table with {len(table)} mapped pad(s)")
        self.sync_lights()

    def set_show_same_note(self, mode: ShowSameNote) -> None:
        """Change which note pads light while a note sounds."""
        self._show_same_note = mode
        self._refresh_lights()

    def sync_lights(self) -> None:
        """Send the current color of every mapped pad, changed or not."""
        for key, entry in self._table.items():
            color = entry.color.for_state(self._is_lit(key, entry.mapping))
            self._colors[key] = color
            self._light_observers.notify("on_key_color", key, color)

    # =================================================================
    # Sound
    # =================================================================

    def _hold_note(self, note: int, velocity: float) -> None:
        if not is_valid_note(note):
            logger.warning(f"Ignoring note {note} outside the MIDI range")
            return
        if self._notes.increment(note):
            self._sound_observers.notify("on_note_start", note, velocity)

    def _release_note(self, note: int) -> None:
        if not is_valid_note(note):
            return
        if self._notes.decrement(note):
            self._sound_observers.notify("on_note_stop", note)

    def _update_voice(self) -> None:
        """Move the fingering voice to the note of the held keys."""
        if self._gated:
            sounding = self._resolver.is_gate_open(self._fingering)
        else:
            sounding = len(self._fingering) > 0

        note = self._resolver.resolve(self._fingering) if sounding else None
        if note == self._voice_note:
            return

        logger.debug(f"Fingering voice: {self._voice_note} -> {note}")
        if self._voice_note is not None:
            self._release_note(self._voice_note)
        self._voice_note = note
        if note is not None:
            self._hold_note(note, self._voice_velocity)

    def _update_pitch_bend(self) -> None:
        bend = sum(m.bend for m in self._pressed.values() if isinstance(m, PitchBendMapping))
        if bend != self._pitch_bend:
            self._pitch_bend = bend
            self._sound_observers.notify("on_pitch_bend", bend)

    def _set_waveform(self, waveform: Waveform) -> None:
        if waveform != self._waveform:
            self._waveform = waveform
            self._sound_observers.notify("on_waveform_change", waveform)

    def _silence(self) -> None:
        """Drain all activity and tell the sound observers."""
        for note in self._notes.drain_all():
            self._sound_observers.notify("on_note_stop", note)
        self._fingering.drain_all()
        self._pressed.clear()
        self._voice_note = None

        self._sound_observers.notify("on_all_notes_off")
        if self._pitch_bend != 0:
            self._pitch_bend = 0
            self._sound_observers.notify("on_pitch_bend", 0)
        logger.info("Stopped everything")

    # =================================================================
    # Lights
    # =================================================================

    def _is_lit(self, key: int, mapping: Mapping) -> bool:
        """Whether a pad shows its pressed color."""
        if isinstance(mapping, NoteMapping):
            if self._show_same_note == ShowSameNote.NO:
                return key in self._pressed
            if self._show_same_note == ShowSameNote.YES:
                return self._notes.is_active(mapping.target)
            pitch_class = mapping.target % 12
            return any(note % 12 == pitch_class for note in self._notes)
        if isinstance(mapping, FingeringMapping):
            return self._fingering.is_active(mapping.key)
        if isinstance(mapping, (PitchBendMapping, TimbreMapping)):
            return key in self._pressed
        raise TypeError(f"Unknown mapping type: {type(mapping).__name__}")

    def _refresh_lights(self) -> None:
        """Send the colors that changed since the last update."""
        for key, entry in self._table.items():
            color = entry.color.for_state(self._is_lit(key, entry.mapping))
            if self._colors.get(key) != color:
                self._colors[key] = color
                self._light_observers.notify("on_key_color", key, color)

    @staticmethod
    def _maps_play_key(table: MappingTable) -> bool:
        return bool(
            table.keys_where(
                lambda m: isinstance(m, FingeringMapping) and m.key == FingeringKey.PLAY
            )
        )
