"""MIDI command implementations."""

import contextlib
import logging
import time
from datetime import datetime
from typing import Optional

import click
import mido

from lumamap.midi import MidiInputManager, decode, note_name, port_filter

logger = logging.getLogger(__name__)

COMMAND_LABELS = {0x8: "note off", 0x9: "note on"}


@click.group(name="midi")
def midi_group():
    """MIDI device commands."""
    pass


@midi_group.command(name="list")
def list_midi():
    """List available MIDI input ports."""
    ports = MidiInputManager.list_ports()

    click.echo("MIDI Input Ports:\n")
    if not ports:
        click.echo("  No MIDI input ports found.")
        return

    for i, port in enumerate(ports):
        click.echo(f"  [{i}] {port}")


def format_message(msg: mido.Message) -> Optional[str]:
    """One display line for a note message, None for anything else."""
    decoded = decode(msg.bytes())
    if decoded is None or decoded.command not in COMMAND_LABELS:
        return None

    label = COMMAND_LABELS[decoded.command]
    if decoded.is_note_on and decoded.intensity == 0:
        label = "note off (vel 0)"
    return (
        f"ch{decoded.channel:>2}  {label:<16} {decoded.note:>3} "
        f"({note_name(decoded.note):>4})  vel {decoded.intensity:>3}"
    )


@midi_group.command(name="monitor")
@click.option("--port", "-p", default=None, help="Input port name (substring, default: first available)")
def monitor_midi(port: Optional[str]):
    """
    Print decoded note events from a MIDI input.

    Press Ctrl+C to stop monitoring.
    """
    manager = MidiInputManager(device_filter=port_filter(port), poll_interval=2.0)

    def on_message(msg: mido.Message) -> None:
        line = format_message(msg)
        if line is None:
            return
        timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
        click.echo(f"[{timestamp}] {line}")

    manager.on_message(on_message)
    manager.on_connection_changed(
        lambda connected, name: click.echo(f"Connected: {name}" if connected else "Disconnected")
    )

    click.echo("Press Ctrl+C to stop\n")
    try:
        manager.start()
        while True:
            time.sleep(0.1)
    except KeyboardInterrupt:
        click.echo("\n\nStopping monitor...")
    finally:
        with contextlib.suppress(Exception):
            manager.stop()
