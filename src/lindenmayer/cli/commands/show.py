from pathlib import Path
from typing import Annotated

import pygame
import typer

from lindenmayer.cli.commands.common import DEFAULT_PRESET, resolve_definition
from lindenmayer.interpreter import TurtleInterpreter
from lindenmayer.rendering.surface import PygameSurface
from lindenmayer.runtime.coordinator import RenderCoordinator
from lindenmayer.runtime.viewer import Viewer
from lindenmayer.utilities.env import Configuration


def show_command(
    preset: Annotated[str, typer.Option("--preset")] = DEFAULT_PRESET,
    definition: Annotated[
        Path | None, typer.Option("--definition", help="JSON definition file")
    ] = None,
    angle: Annotated[
        float | None, typer.Option("--angle", help="Override the turn angle")
    ] = None,
) -> None:
    """Open an interactive window (N: next generation, R: render, Q: quit)."""

    resolved = resolve_definition(preset, definition)
    surface = PygameSurface(
        pygame.Surface(Configuration.canvas_size()),
        debug_axes=Configuration.debug_axes(),
    )
    interpreter = TurtleInterpreter(
        turn_angle=angle if angle is not None else resolved.angle,
        progress_step=Configuration.progress_step(),
    )
    coordinator = RenderCoordinator(resolved.build(), surface, interpreter=interpreter)
    Viewer(coordinator, title=resolved.name).run()
