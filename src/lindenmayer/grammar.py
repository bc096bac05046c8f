"""Production rules and the one-generation rewrite engine."""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from lindenmayer.errors import GrammarError
from lindenmayer.progress import ProgressCallback, ProgressThrottle, notify

State = str
Symbol = str

RULE_SEPARATORS = ("->", "=")


class Grammar(Mapping[Symbol, str]):
    """Immutable ``symbol -> replacement`` table.

    Symbols without a rule rewrite to themselves.
    """

    def __init__(self, rules: Mapping[Symbol, str] | None = None) -> None:
        validated: dict[Symbol, str] = {}
        for symbol, replacement in (rules or {}).items():
            if not isinstance(symbol, str) or len(symbol) != 1:
                raise GrammarError(
                    f"rule symbol must be a single character, got {symbol!r}"
                )
            if not isinstance(replacement, str):
                raise GrammarError(
                    f"replacement for {symbol!r} must be a string, "
                    f"got {type(replacement).__name__}"
                )
            validated[symbol] = replacement
        self._rules = MappingProxyType(validated)
        self._table = str.maketrans(validated)

    @classmethod
    def from_rules(cls, rules: Iterable[str]) -> "Grammar":
        """Build a grammar from ``"F=F+F"`` or ``"F->F+F"`` strings."""

        parsed: dict[Symbol, str] = {}
        for rule in rules:
            for separator in RULE_SEPARATORS:
                if separator in rule:
                    symbol, replacement = rule.split(separator, 1)
                    break
            else:
                raise GrammarError(f"rule {rule!r} has no '=' or '->' separator")
            symbol = symbol.strip()
            if symbol in parsed:
                raise GrammarError(f"duplicate rule for {symbol!r}")
            parsed[symbol] = replacement.strip()
        return cls(parsed)

    def __getitem__(self, symbol: Symbol) -> str:
        return self._rules[symbol]

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"Grammar({dict(self._rules)!r})"

    @property
    def variables(self) -> frozenset[Symbol]:
        return frozenset(self._rules)

    def replacement(self, symbol: Symbol) -> str:
        return self._rules.get(symbol, symbol)

    def translate(self, sequence: State) -> State:
        return sequence.translate(self._table)


def advance(
    sequence: State,
    grammar: Grammar,
    on_progress: ProgressCallback | None = None,
    progress_step: int = 5,
) -> State:
    """Return the next generation of ``sequence``.

    Progress tracks input symbols consumed, so it stays linear whatever the
    expansion factor of the grammar.
    """

    total = len(sequence)
    throttle = ProgressThrottle(total, progress_step)
    if total == 0:
        notify(on_progress, throttle.finish())
        return sequence

    chunk_size = max(1, math.ceil(total * progress_step / 100))
    parts: list[str] = []
    for start in range(0, total, chunk_size):
        end = min(total, start + chunk_size)
        parts.append(grammar.translate(sequence[start:end]))
        notify(on_progress, throttle.update(end))
    return "".join(parts)


def expand(axiom: State, grammar: Grammar, generations: int) -> State:
    if generations < 0:
        raise ValueError("generations must be non-negative")
    state = axiom
    for _ in range(generations):
        state = advance(state, grammar)
    return state
