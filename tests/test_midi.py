"""Tests for MIDI translation and output sinks."""

from unittest.mock import Mock

import mido
import pytest

from conftest import make_table
from launchmapper.core import MappingEngine
from launchmapper.midi import MidiLightSink, MidiSoundSink, MidiTranslator
from launchmapper.models import AppConfig, NoteMapping, PitchBendMapping, Waveform
from launchmapper.protocols import LightObserver, SoundObserver


@pytest.fixture
def engine():
    return Mock(spec=MappingEngine)


@pytest.fixture
def translator(engine):
    return MidiTranslator(engine, AppConfig(panic_button_cc_control=19, panic_button_cc_value=127))


@pytest.mark.unit
class TestMidiTranslator:
    """Test message to engine event translation."""

    def test_note_on_presses(self, translator, engine):
        assert translator.handle(mido.Message("note_on", note=11, velocity=127))
        engine.key_down.assert_called_once_with(11, 1.0)

    def test_velocity_is_normalised(self, translator, engine):
        translator.handle(mido.Message("note_on", note=42, velocity=64))
        key, velocity = engine.key_down.call_args.args
        assert key == 42
        assert velocity == pytest.approx(64 / 127)

    def test_note_on_zero_velocity_releases(self, translator, engine):
        assert translator.handle(mido.Message("note_on", note=11, velocity=0))
        engine.key_up.assert_called_once_with(11)
        engine.key_down.assert_not_called()

    def test_note_off_releases(self, translator, engine):
        assert translator.handle(mido.Message("note_off", note=11))
        engine.key_up.assert_called_once_with(11)

    def test_panic_button(self, translator, engine):
        assert translator.handle(mido.Message("control_change", control=19, value=127))
        engine.stop_everything.assert_called_once_with()

    def test_other_control_change_ignored(self, translator, engine):
        assert not translator.handle(mido.Message("control_change", control=19, value=0))
        assert not translator.handle(mido.Message("control_change", control=20, value=127))
        engine.stop_everything.assert_not_called()

    def test_clock_and_other_messages_ignored(self, translator, engine):
        assert not translator.handle(mido.Message("clock"))
        assert not translator.handle(mido.Message("pitchwheel", pitch=100))
        assert engine.method_calls == []

    def test_config_defaults_to_engine_config(self):
        engine = MappingEngine(config=AppConfig(panic_button_cc_control=64))
        translator = MidiTranslator(engine)
        assert translator.is_panic(mido.Message("control_change", control=64, value=127))


@pytest.mark.unit
class TestMidiSinks:
    """Test the messages the sinks send."""

    def test_sinks_satisfy_observer_protocols(self):
        assert isinstance(MidiSoundSink(Mock()), SoundObserver)
        assert isinstance(MidiLightSink(Mock()), LightObserver)

    def test_light_sink(self):
        send = Mock()
        MidiLightSink(send).on_key_color(11, 0x15)
        send.assert_called_once_with(mido.Message("note_on", channel=0, note=11, velocity=0x15))

    def test_note_start_and_stop(self):
        send = Mock()
        sink = MidiSoundSink(send, channel=3)
        sink.on_note_start(60, 0.5)
        sink.on_note_stop(60)
        assert [call.args[0] for call in send.call_args_list] == [
            mido.Message("note_on", channel=3, note=60, velocity=64),
            mido.Message("note_off", channel=3, note=60),
        ]

    def test_note_start_velocity_never_zero(self):
        send = Mock()
        MidiSoundSink(send).on_note_start(60, 0.0)
        assert send.call_args.args[0].velocity == 1

    @pytest.mark.parametrize(
        "bend,pitch",
        [(0, 0), (2, 8191), (-2, -8191), (1, 4096), (-4, -8192), (5, 8191)],
    )
    def test_pitch_bend_scaling(self, bend, pitch):
        send = Mock()
        MidiSoundSink(send, bend_range=2).on_pitch_bend(bend)
        assert send.call_args.args[0] == mido.Message("pitchwheel", channel=0, pitch=pitch)

    @pytest.mark.parametrize("bend_range", [0, -2])
    def test_bend_range_must_be_positive(self, bend_range):
        with pytest.raises(ValueError, match="bend_range"):
            MidiSoundSink(Mock(), bend_range=bend_range)

    def test_waveform_change_sends_nothing(self):
        send = Mock()
        MidiSoundSink(send).on_waveform_change(Waveform.SINE)
        send.assert_not_called()

    def test_all_notes_off(self):
        send = Mock()
        MidiSoundSink(send).on_all_notes_off()
        send.assert_called_once_with(mido.Message("control_change", channel=0, control=123, value=0))


@pytest.mark.integration
class TestMidiRoundTrip:
    """Controller messages in, synth and LED messages out."""

    def test_press_release_and_panic(self):
        table = make_table({11: NoteMapping(target=60), 12: PitchBendMapping(bend=2)})
        engine = MappingEngine(table)
        sound_out, light_out = Mock(), Mock()
        engine.register_sound_observer(MidiSoundSink(sound_out))
        engine.register_light_observer(MidiLightSink(light_out))
        translator = MidiTranslator(engine)

        translator.handle(mido.Message("note_on", note=11, velocity=100))
        translator.handle(mido.Message("note_on", note=12, velocity=100))
        translator.handle(mido.Message("control_change", control=19, value=127))

        sent = [call.args[0] for call in sound_out.call_args_list]
        assert sent == [
            mido.Message("note_on", note=60, velocity=100),
            mido.Message("pitchwheel", pitch=8191),
            mido.Message("note_off", note=60),
            mido.Message("control_change", control=123, value=0),
            mido.Message("pitchwheel", pitch=0),
        ]
        assert engine.active_notes() == []
        assert light_out.call_args.args[0].type == "note_on"
