from pathlib import Path
from typing import Annotated

import pygame
import typer

from lindenmayer.cli.commands.common import DEFAULT_PRESET, resolve_definition
from lindenmayer.interpreter import TurtleInterpreter
from lindenmayer.rendering.surface import PygameSurface
from lindenmayer.runtime.coordinator import RenderCoordinator
from lindenmayer.utilities.env import Configuration
from lindenmayer.utilities.logging import get_logger

logger = get_logger(__name__)


def render_command(
    output: Annotated[Path, typer.Argument(help="PNG file to write")],
    generations: Annotated[int, typer.Option("--generations", "-n", min=0)] = 4,
    preset: Annotated[str, typer.Option("--preset")] = DEFAULT_PRESET,
    definition: Annotated[
        Path | None, typer.Option("--definition", help="JSON definition file")
    ] = None,
    angle: Annotated[
        float | None, typer.Option("--angle", help="Override the turn angle")
    ] = None,
    width: Annotated[int | None, typer.Option("--width", min=1)] = None,
    height: Annotated[int | None, typer.Option("--height", min=1)] = None,
) -> None:
    """Iterate an L-system and render its last generation to a PNG file."""

    resolved = resolve_definition(preset, definition)
    default_width, default_height = Configuration.canvas_size()
    size = (width or default_width, height or default_height)

    surface = PygameSurface(
        pygame.Surface(size), debug_axes=Configuration.debug_axes()
    )
    interpreter = TurtleInterpreter(
        turn_angle=angle if angle is not None else resolved.angle,
        progress_step=Configuration.progress_step(),
    )
    errors: list[str] = []
    with RenderCoordinator(
        resolved.build(), surface, interpreter=interpreter
    ) as coordinator:
        subscription = coordinator.errors.subscribe(errors.append)
        for _ in range(generations):
            coordinator.iterate()
        coordinator.wait()
        coordinator.render()
        coordinator.wait()
        subscription.dispose()
        generation = coordinator.cached_generation

    if errors:
        typer.echo(f"Rendering failed: {errors[0]}", err=True)
        raise typer.Exit(code=1)

    pygame.image.save(surface.frame(), str(output))
    logger.info("Wrote generation %d of %s to %s", generation, resolved.name, output)
    typer.echo(f"Wrote generation {generation} of {resolved.name} to {output}")
