"""Note and fingering lookup commands."""

import logging

import click

from launchmapper.core.fingering import DEFAULT_BASE_OCTAVE, FingeringResolver
from launchmapper.exceptions import InvalidNoteFormatError
from launchmapper.models import FingeringKey, format_note, is_black_key, note_to_repr, parse_note_text
from launchmapper.models.notes import is_valid_note

from .common import fail

logger = logging.getLogger(__name__)


@click.command(name="note")
@click.argument('value')
def note(value: str):
    """
    Show a note by number (60) or by name (C4, F#3, Bb2).
    """
    if value.lstrip("-").isdigit():
        number = int(value)
    else:
        try:
            number = parse_note_text(value)
        except InvalidNoteFormatError as e:
            fail(e)

    note_repr = note_to_repr(number)
    click.echo(f"Note:    {number}")
    click.echo(f"Name:    {format_note(number)}")
    click.echo(f"Octave:  {note_repr.octave}")
    click.echo(f"Key:     {'black' if is_black_key(number) else 'white'}")
    if not is_valid_note(number):
        click.echo("Warning: outside the MIDI range (0-127)")


@click.command(name="finger")
@click.argument('keys', nargs=-1)
@click.option(
    '--base-octave',
    '-b',
    type=int,
    default=DEFAULT_BASE_OCTAVE,
    show_default=True,
    help='Octave added to the combo result'
)
def finger(keys: tuple[str, ...], base_octave: int):
    """
    Resolve a saxophone fingering.

    KEYS are fingering key names such as B, A, "Low Bb", "G#" or "Oct 1".
    With no keys the open fingering is resolved.

    \b
    Example:
      launchmapper finger B A G F E D C
    """
    held = set()
    for name in keys:
        key = FingeringKey.lookup(name)
        if key is None:
            valid = ", ".join(k.value for k in FingeringKey)
            raise click.BadParameter(f"Unknown fingering key {name!r}. Valid keys: {valid}")
        held.add(key)

    resolver = FingeringResolver(base_octave=base_octave)
    combo = resolver.match(held)
    result = resolver.resolve(held)

    click.echo(f"Combo:   {combo}")
    shift = resolver.octave_shift(held)
    if shift:
        click.echo(f"Octave:  +{shift}")
    if result is None:
        click.echo(f"Note:    {resolver.resolve_repr(held)} (outside the MIDI range, no sound)")
    else:
        click.echo(f"Note:    {format_note(result)} ({result})")
    if FingeringKey.PLAY in held:
        click.echo("Gate:    open")
