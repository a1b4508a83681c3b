"""Pad color model.

Colors are Launchpad palette indices (0x00-0x7F) sent as the velocity of a
note-on message. A pad has one color at rest and one while pressed.
"""

from pydantic import BaseModel, ConfigDict, Field

MIN_COLOR = 0x00
MAX_COLOR = 0x7F

# Used for fields a mapping document leaves out
NEUTRAL_COLOR = 0x00


class ColorPair(BaseModel):
    """Rest and pressed palette colors of a pad.

    The model is frozen so mapping tables can share entries between edits.
    """

    model_config = ConfigDict(frozen=True)

    rest: int = Field(ge=MIN_COLOR, le=MAX_COLOR, description="Palette index while released")
    pressed: int = Field(ge=MIN_COLOR, le=MAX_COLOR, description="Palette index while held")

    @classmethod
    def neutral(cls) -> "ColorPair":
        """Both states use the neutral color."""
        return cls(rest=NEUTRAL_COLOR, pressed=NEUTRAL_COLOR)

    def for_state(self, pressed: bool) -> int:
        """Pick the color for a pad state."""
        return self.pressed if pressed else self.rest

    def to_hex_codes(self) -> tuple[str, str]:
        """Format both colors as two-digit hex codes.

        Example:
            >>> ColorPair(rest=0x4E, pressed=0x15).to_hex_codes()
            ('4E', '15')
        """
        return (f"{self.rest:02X}", f"{self.pressed:02X}")
