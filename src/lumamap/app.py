"""
Headless application host.

Wires the MIDI input, the activation engine, the region registry and the
authoring state machine together. A graphical front end drives the
interaction state machine and calls `render()` once per frame; the CLI
`run` command uses the same object without any authoring input.

Architecture:
    LumaMapApplication
    ├── MidiInputManager ──> ActivationEngine ──> ActivationStore
    ├── RegionRegistry <── InteractionStateMachine
    ├── ProjectService (open/save)
    └── render() = registry + store snapshot + interaction ──> RenderFrame
"""

import logging
from pathlib import Path
from typing import Optional

import mido

from lumamap.core import ActivationEngine, InteractionStateMachine, RenderFrame, render_frame
from lumamap.exceptions import ErrorContext, MidiPortError, handle_errors
from lumamap.midi import MidiInputManager, port_filter
from lumamap.models import AppConfig, Project, Region
from lumamap.services import ProjectService, RegionRegistry

logger = logging.getLogger(__name__)


class LumaMapApplication:
    """Top-level object owning every LumaMap component."""

    def __init__(self, config: AppConfig, midi_input: Optional[MidiInputManager] = None):
        """
        Initialize the application.

        Args:
            config: Application configuration
            midi_input: Input manager to use; one is built from the config if None
        """
        self.config = config
        self.project = Project.create_empty("untitled")

        self.engine = ActivationEngine()
        self.registry = RegionRegistry(defaults=config.region_defaults)
        self.interaction = InteractionStateMachine(self.registry)
        self.projects = ProjectService(config)

        self.midi_input = midi_input or MidiInputManager(
            device_filter=port_filter(config.input_port),
            poll_interval=config.midi_poll_interval,
        )
        self.midi_input.on_message(self._on_midi_message)
        self.midi_input.on_connection_changed(self._on_connection_changed)
        self._running = False

    # =================================================================
    # Lifecycle
    # =================================================================

    def start(self) -> None:
        """Start listening for MIDI input."""
        if self._running:
            return
        with ErrorContext("start MIDI input", logger_instance=logger):
            self.midi_input.start()
        self._running = True
        logger.info("LumaMap started")

    def stop(self) -> None:
        """Stop listening and forget sounding notes."""
        if not self._running:
            return
        self.midi_input.stop()
        self.engine.clear()
        self._running = False
        logger.info("LumaMap stopped")

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()

    # =================================================================
    # MIDI
    # =================================================================

    def require_input(self, port_name: Optional[str]) -> str:
        """
        Check that an input matching `port_name` is plugged in right now.

        Returns:
            Name of the first matching port

        Raises:
            MidiPortError: If no available input matches
        """
        matches = port_filter(port_name)
        available = self.midi_input.list_ports()
        for name in available:
            if matches(name):
                return name
        raise MidiPortError(port_name, f"available inputs: {', '.join(available) or 'none'}")

    def select_input(self, port_name: Optional[str]) -> None:
        """
        Switch to another MIDI input.

        Notes held on the previous device will never see their note-off,
        so the activation store is cleared.
        """
        self.engine.clear()
        self.midi_input.select_device(port_filter(port_name))
        logger.info(f"Selected MIDI input: {port_name or 'first available'}")

    def _on_midi_message(self, msg: mido.Message) -> None:
        self.engine.handle_message(msg)

    def _on_connection_changed(self, connected: bool, port_name: Optional[str]) -> None:
        if connected:
            logger.info(f"MIDI input ready: {port_name}")
        else:
            # Held notes from a vanished device would stay lit forever
            self.engine.clear()

    # =================================================================
    # Projects
    # =================================================================

    @handle_errors(operation_name="open project")
    def open_project(self, path: Path) -> Project:
        """Load a project file and make its regions current."""
        project = self.projects.load(path)
        self.project = project
        self.registry.replace_all(project.regions)
        self.config.last_project = project.name
        return project

    def save_project(self, path: Optional[Path] = None) -> Path:
        """Write the current regions to disk."""
        self.project.regions = self.registry.list()
        return self.projects.save(self.project, path)

    # =================================================================
    # Rendering
    # =================================================================

    def render(self) -> RenderFrame:
        """Compute this tick's frame."""
        return render_frame(self.registry.list(), self.engine.snapshot(), self.interaction)

    def active_regions(self) -> list[Region]:
        """Regions currently lit, in draw order."""
        frame = self.render()
        lit = {rendered.id for rendered in frame.regions if rendered.fill_opacity > 0}
        return [region for region in self.registry.list() if region.id in lit]
