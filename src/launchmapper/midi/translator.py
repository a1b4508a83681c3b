"""
MIDI input translation.

Turns messages from the controller into engine events:

- ``note_on`` with velocity > 0: ``key_down(note, velocity / 127)``
- ``note_off``, or ``note_on`` with velocity 0: ``key_up(note)``
- ``control_change`` matching the panic button: ``stop_everything()``

Everything else is ignored. In Programmer mode the note of a message is
the pad key, so no index conversion is done here.
"""

import logging

import mido

from launchmapper.core.engine import MappingEngine
from launchmapper.models import AppConfig

logger = logging.getLogger(__name__)

MAX_VELOCITY = 127


class MidiTranslator:
    """Feeds mido messages into a ``MappingEngine``."""

    def __init__(self, engine: MappingEngine, config: AppConfig | None = None):
        """
        Args:
            engine: Engine receiving the key events
            config: Source of the panic button settings (engine config if None)
        """
        self.engine = engine
        self.config = config or engine.config

    def is_panic(self, msg: mido.Message) -> bool:
        """True if the message is the configured panic button."""
        return (
            msg.type == "control_change"
            and msg.control == self.config.panic_button_cc_control
            and msg.value == self.config.panic_button_cc_value
        )

    def handle(self, msg: mido.Message) -> bool:
        """
        Translate one message.

        Returns:
            True if the message reached the engine
        """
        if msg.type == "note_on":
            # Note on with velocity 0 is actually note off
            if msg.velocity > 0:
                self.engine.key_down(msg.note, msg.velocity / MAX_VELOCITY)
            else:
                self.engine.key_up(msg.note)
            return True

        if msg.type == "note_off":
            self.engine.key_up(msg.note)
            return True

        if self.is_panic(msg):
            logger.info("Panic button pressed, stopping everything")
            self.engine.stop_everything()
            return True

        if msg.type != "clock":
            logger.debug(f"Ignoring MIDI message: {msg}")
        return False
