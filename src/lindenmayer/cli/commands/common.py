from __future__ import annotations

from pathlib import Path

import typer

from lindenmayer.definitions import LSystemDefinition, get_preset, load_definition
from lindenmayer.errors import DefinitionError
from lindenmayer.utilities.logging import get_logger

logger = get_logger(__name__)

DEFAULT_PRESET = "plant"


def resolve_definition(preset: str, definition: Path | None) -> LSystemDefinition:
    try:
        if definition is not None:
            return load_definition(definition)
        return get_preset(preset)
    except (DefinitionError, OSError) as exc:
        logger.error("Could not load L-system: %s", exc)
        raise typer.Exit(code=1) from exc
