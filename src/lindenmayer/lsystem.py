"""The current generation of an L-system and the lock that guards it."""

from __future__ import annotations

import threading
import time

import reactivex
from reactivex.subject import Subject

from lindenmayer.grammar import Grammar, State, advance
from lindenmayer.utilities.env import Configuration
from lindenmayer.utilities.logging import get_logger

logger = get_logger(__name__)


class LSystem:
    """Own a sequence and its generation counter.

    ``iterate`` builds the next generation into a fresh string outside the
    state lock and swaps it in under the lock, so readers never wait on a
    rewrite and always see a matching ``(state, generation)`` pair.
    """

    def __init__(
        self,
        axiom: State,
        grammar: Grammar,
        progress_step: int | None = None,
    ) -> None:
        self._lock = threading.Lock()
        self._iterate_lock = threading.Lock()
        self._axiom = axiom
        self._state = axiom
        self._grammar = grammar
        self._generation = 0
        self._progress_step = (
            progress_step
            if progress_step is not None
            else Configuration.progress_step()
        )
        self._progress_subject: Subject[int] = Subject()
        self._finished_subject: Subject[int] = Subject()

    @property
    def axiom(self) -> State:
        return self._axiom

    @property
    def grammar(self) -> Grammar:
        return self._grammar

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    @property
    def state(self) -> State:
        with self._lock:
            return self._state

    def snapshot(self) -> tuple[State, int]:
        with self._lock:
            return self._state, self._generation

    @property
    def iteration_progressed(self) -> reactivex.Observable[int]:
        return self._progress_subject

    @property
    def iteration_finished(self) -> reactivex.Observable[int]:
        return self._finished_subject

    def iterate(self) -> int:
        """Rewrite one generation and return the new generation number."""

        started = time.perf_counter()
        with self._iterate_lock:
            current, _ = self.snapshot()
            new_state = advance(
                current,
                self._grammar,
                on_progress=self._progress_subject.on_next,
                progress_step=self._progress_step,
            )
            with self._lock:
                self._state = new_state
                self._generation += 1
                generation = self._generation

        logger.info(
            "Iterated to generation %d (%d symbols) in %.1f ms",
            generation,
            len(new_state),
            (time.perf_counter() - started) * 1000.0,
        )
        self._finished_subject.on_next(generation)
        return generation
