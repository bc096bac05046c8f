"""Named L-systems and JSON definition files.

A definition file is a JSON object::

    {"name": "plant", "axiom": "F", "rules": {"F": "F[+F]F[-F][F]"}, "angle": 20}

``name`` and ``angle`` are optional.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from lindenmayer.errors import DefinitionError, GrammarError
from lindenmayer.grammar import Grammar
from lindenmayer.lsystem import LSystem
from lindenmayer.utilities.env.turtle import DEFAULT_TURN_ANGLE


@dataclass(frozen=True)
class LSystemDefinition:
    name: str
    axiom: str
    rules: Mapping[str, str] = field(default_factory=dict)
    angle: float = DEFAULT_TURN_ANGLE

    def __post_init__(self) -> None:
        object.__setattr__(self, "rules", MappingProxyType(dict(self.rules)))

    def grammar(self) -> Grammar:
        return Grammar(self.rules)

    def build(self, progress_step: int | None = None) -> LSystem:
        return LSystem(self.axiom, self.grammar(), progress_step=progress_step)


PRESETS: dict[str, LSystemDefinition] = {
    definition.name: definition
    for definition in (
        LSystemDefinition("plant", "F", {"F": "F[+F]F[-F][F]"}, 20.0),
        LSystemDefinition("algae", "A", {"A": "AB", "B": "A"}),
        LSystemDefinition("sierpinski", "F", {"F": "G-F-G", "G": "F+G+F"}, 60.0),
        LSystemDefinition(
            "fractal-plant", "X", {"X": "F+[[X]-X]-F[-FX]+X", "F": "FF"}, 25.0
        ),
        LSystemDefinition("koch", "F", {"F": "F+F--F+F"}, 60.0),
    )
}


def get_preset(name: str) -> LSystemDefinition:
    try:
        return PRESETS[name]
    except KeyError:
        known = ", ".join(sorted(PRESETS))
        raise DefinitionError(f"unknown preset {name!r} (known: {known})") from None


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise DefinitionError(message)


def parse_definition(data: Any, default_name: str = "custom") -> LSystemDefinition:
    _require(isinstance(data, dict), "definition must be a JSON object")
    axiom = data.get("axiom")
    _require(isinstance(axiom, str) and axiom != "", "axiom must be a non-empty string")
    rules = data.get("rules", {})
    _require(isinstance(rules, dict), "rules must be an object")
    angle = data.get("angle", DEFAULT_TURN_ANGLE)
    _require(
        isinstance(angle, (int, float)) and not isinstance(angle, bool),
        "angle must be a number",
    )
    name = data.get("name", default_name)
    _require(isinstance(name, str), "name must be a string")

    definition = LSystemDefinition(name, axiom, rules, float(angle))
    try:
        definition.grammar()
    except GrammarError as exc:
        raise DefinitionError(str(exc)) from exc
    return definition


def load_definition(path: str | Path) -> LSystemDefinition:
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise DefinitionError(f"{path}: invalid JSON ({exc})") from exc
    return parse_definition(data, default_name=path.stem)
