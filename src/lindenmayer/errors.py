"""Exception hierarchy shared by the rewrite and interpretation stages."""

from __future__ import annotations


class LSystemError(Exception):
    """Base class for every error raised by :mod:`lindenmayer`."""


class GrammarError(LSystemError, ValueError):
    """Raised when production rules cannot form a valid grammar."""


class DefinitionError(LSystemError, ValueError):
    """Raised when an L-system definition file is malformed."""


class TurtleProtocolError(LSystemError):
    """Raised when a sequence violates the turtle command protocol."""


class StackUnderflowError(TurtleProtocolError):
    def __init__(self, index: int) -> None:
        self.index = index
        super().__init__(
            f"cannot pop empty turtle stack (']' at symbol {index})"
        )
