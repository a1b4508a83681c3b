"""Application configuration model."""

from pathlib import Path

from pydantic import BaseModel, Field

from launchmapper.model_manager.persistence import PydanticPersistence

from .color import MAX_COLOR, MIN_COLOR, ColorPair
from .enums import GridSize, ShowSameNote, Waveform
from .mapping import FingeringMapping, Mapping, NoteMapping, PitchBendMapping, TimbreMapping
from .notes import is_black_key

DEFAULT_CONFIG_DIR = Path.home() / ".launchmapper"
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.json"


def _color_field(default: int, description: str):
    return Field(default=default, ge=MIN_COLOR, le=MAX_COLOR, description=description)


class ColorScheme(BaseModel):
    """Default pad colors by mapping kind.

    ``color_for`` is the default color rule used when layouts are generated
    or recolored.
    """

    single_color: bool = Field(
        default=False,
        description="Use the white-key colors for every note and the main colors for every fingering key",
    )

    white_rest: int = _color_field(0x00, "Rest color of natural notes")
    white_pressed: int = _color_field(0x25, "Pressed color of natural notes")
    black_rest: int = _color_field(0x03, "Rest color of sharp notes")
    black_pressed: int = _color_field(0x24, "Pressed color of sharp notes")

    fingering_rest: int = _color_field(0x23, "Rest color of main fingering keys")
    fingering_pressed: int = _color_field(0x27, "Pressed color of main fingering keys")
    side_rest: int = _color_field(0x74, "Rest color of auxiliary and control fingering keys")
    side_pressed: int = _color_field(0x77, "Pressed color of auxiliary and control fingering keys")

    other_rest: int = _color_field(0x00, "Rest color of pitch bend and timbre pads")
    other_pressed: int = _color_field(0x25, "Pressed color of pitch bend and timbre pads")

    def color_for(self, mapping: Mapping) -> ColorPair:
        """Pick the colors for a mapping."""
        if isinstance(mapping, NoteMapping):
            if not self.single_color and is_black_key(mapping.target):
                return ColorPair(rest=self.black_rest, pressed=self.black_pressed)
            return ColorPair(rest=self.white_rest, pressed=self.white_pressed)
        if isinstance(mapping, FingeringMapping):
            if self.single_color or mapping.key.is_main:
                return ColorPair(rest=self.fingering_rest, pressed=self.fingering_pressed)
            return ColorPair(rest=self.side_rest, pressed=self.side_pressed)
        if isinstance(mapping, (PitchBendMapping, TimbreMapping)):
            return ColorPair(rest=self.other_rest, pressed=self.other_pressed)
        raise TypeError(f"Unknown mapping type: {type(mapping).__name__}")


class SoundSettings(BaseModel):
    """Settings handed to the sound driver."""

    volume: float = Field(default=0.2, ge=0.0, le=1.0, description="Master volume (0.0-1.0)")
    waveform: Waveform = Field(default=Waveform.SQUARE, description="Initial oscillator waveform")
    attack_ms: int = Field(default=10, ge=0, description="Attack time in milliseconds")
    release_ms: int = Field(default=100, ge=0, description="Release time in milliseconds")


class IsomorphicSettings(BaseModel):
    """Parameters of the generated isomorphic layout."""

    start_note: int = Field(default=39, ge=0, le=127, description="Note of the bottom-left pad (D#2)")
    horizontal_step: int = Field(default=2, description="Semitones per column (Wicky-Hayden: 2)")
    vertical_step: int = Field(default=5, description="Semitones per row (Wicky-Hayden: 5)")


class AppConfig(BaseModel):
    """Application configuration and settings."""

    grid: GridSize = Field(default=GridSize.GRID_9X9, description="Controller surface size")
    base_octave: int = Field(
        default=4, ge=-1, le=9, description="Octave added to fingering combo results"
    )
    show_same_note: ShowSameNote = Field(
        default=ShowSameNote.YES, description="Which note pads light while a note sounds"
    )
    isomorphic: IsomorphicSettings = Field(default_factory=IsomorphicSettings)
    colors: ColorScheme = Field(default_factory=ColorScheme)
    sound: SoundSettings = Field(default_factory=SoundSettings)

    # Panic button settings
    panic_button_cc_control: int = Field(
        default=19, ge=0, le=127, description="MIDI CC control number for panic button (stop everything)"
    )
    panic_button_cc_value: int = Field(
        default=127, ge=0, le=127, description="MIDI CC value for panic button trigger"
    )

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> "AppConfig":
        """
        Load config from file or return default.

        Args:
            path: Path to config file. If None, uses ~/.launchmapper/config.json.

        Raises:
            ConfigFileInvalidError: If config file has invalid JSON syntax
            ConfigValidationError: If config values fail validation
        """
        return PydanticPersistence.load_json_or_default(path or DEFAULT_CONFIG_PATH, cls)

    def save(self, path: Path | None = None) -> None:
        """Save config to file (atomic, keeps a .bak of the previous file)."""
        PydanticPersistence.save_json(self, path or DEFAULT_CONFIG_PATH)
