from pathlib import Path
from typing import Annotated

import typer

from lindenmayer.cli.commands.common import DEFAULT_PRESET, resolve_definition
from lindenmayer.grammar import advance


def expand_command(
    generations: Annotated[int, typer.Option("--generations", "-n", min=0)] = 3,
    preset: Annotated[str, typer.Option("--preset")] = DEFAULT_PRESET,
    definition: Annotated[
        Path | None, typer.Option("--definition", help="JSON definition file")
    ] = None,
    lengths_only: bool = typer.Option(
        False, "--lengths-only", help="Print sequence lengths instead of sequences"
    ),
) -> None:
    """Print every generation from the axiom up to ``--generations``."""

    resolved = resolve_definition(preset, definition)
    grammar = resolved.grammar()
    state = resolved.axiom
    for generation in range(generations + 1):
        if generation:
            state = advance(state, grammar)
        typer.echo(f"{generation}: {len(state) if lengths_only else state}")
