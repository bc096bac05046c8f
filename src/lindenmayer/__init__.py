"""Lindenmayer system rewriting and two-pass turtle rendering."""

from lindenmayer.definitions import (PRESETS,  # noqa: F401
                                     LSystemDefinition, get_preset,
                                     load_definition)
from lindenmayer.errors import (DefinitionError, GrammarError,  # noqa: F401
                                LSystemError, StackUnderflowError,
                                TurtleProtocolError)
from lindenmayer.grammar import Grammar, advance, expand  # noqa: F401
from lindenmayer.interpreter import (BoundingBox,  # noqa: F401
                                     InterpretMode, InterpretResult,
                                     TurtleInterpreter)
from lindenmayer.lsystem import LSystem  # noqa: F401
from lindenmayer.scale import ScaleContext, resolve_scale  # noqa: F401
from lindenmayer.turtle import TurtleFrame, VirtualTurtle  # noqa: F401
