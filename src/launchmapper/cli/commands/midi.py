"""MIDI command implementations."""

import logging
from pathlib import Path
from typing import Optional

import click
import mido

from launchmapper import serialization
from launchmapper.core.engine import MappingEngine
from launchmapper.exceptions import MappingParseError
from launchmapper.midi import MidiLightSink, MidiSoundSink, MidiTranslator

from .common import fail, load_config

logger = logging.getLogger(__name__)


def _find_port(names: list[str], wanted: str, kind: str) -> str:
    """First port whose name contains ``wanted`` (case-insensitive)."""
    for name in names:
        if wanted.lower() in name.lower():
            return name
    raise click.BadParameter(f"No MIDI {kind} port matching {wanted!r}. Run 'launchmapper midi list'.")


@click.group(name="midi")
def midi_group():
    """MIDI device commands."""
    pass


@midi_group.command(name="list")
def list_midi():
    """List available MIDI ports."""
    inputs = mido.get_input_names()
    outputs = mido.get_output_names()

    click.echo("MIDI Input Ports:\n")
    if not inputs:
        click.echo("  No MIDI input ports found.")
    for i, port in enumerate(inputs):
        click.echo(f"  [{i}] {port}")

    click.echo("\nMIDI Output Ports:\n")
    if not outputs:
        click.echo("  No MIDI output ports found.")
    for i, port in enumerate(outputs):
        click.echo(f"  [{i}] {port}")


@midi_group.command(name="run")
@click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--input', '-i', 'input_name', required=True, help='Controller input port (substring match)')
@click.option('--lights', '-l', 'lights_name', default=None, help='Controller output port for pad colors (default: same name as input)')
@click.option('--synth', '-s', 'synth_name', default=None, help='Output port that receives the notes')
@click.option('--channel', type=click.IntRange(0, 15), default=0, help='Synth MIDI channel (0-15)')
@click.pass_context
def run(ctx, file: Path, input_name: str, lights_name: Optional[str], synth_name: Optional[str], channel: int):
    """
    Play FILE on a controller.

    Pad presses from the input port drive the mapping; pad colors go back
    to the controller and notes go to the synth port. Press Ctrl+C to stop.
    """
    config = load_config(ctx)
    try:
        table = serialization.load(file)
    except MappingParseError as e:
        fail(e)

    outputs = mido.get_output_names()
    input_port_name = _find_port(mido.get_input_names(), input_name, "input")
    lights_port_name = _find_port(outputs, lights_name or input_name, "output")

    engine = MappingEngine(table, config)
    translator = MidiTranslator(engine, config)
    ports = []

    try:
        lights_port = mido.open_output(lights_port_name)
        ports.append(lights_port)
        engine.register_light_observer(MidiLightSink(lights_port.send))

        if synth_name:
            synth_port = mido.open_output(_find_port(outputs, synth_name, "output"))
            ports.append(synth_port)
            engine.register_sound_observer(MidiSoundSink(synth_port.send, channel=channel))

        input_port = mido.open_input(input_port_name)
        ports.append(input_port)

        engine.sync_lights()
        click.echo(f"Playing {file} ({len(table)} pads) from {input_port_name}. Press Ctrl+C to stop.")
        for msg in input_port:
            translator.handle(msg)

    except KeyboardInterrupt:
        click.echo("\nStopping...")
    except OSError as e:
        fail(e)
    finally:
        engine.stop_everything()
        for port in reversed(ports):
            port.close()
        logger.info("MIDI ports closed")
