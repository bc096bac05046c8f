"""Background orchestration of rewrite, bounds, scale and draw passes."""

from __future__ import annotations

import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import wait as wait_futures
from functools import partial
from enum import StrEnum
from types import TracebackType
from typing import Callable

import reactivex
from reactivex.disposable import CompositeDisposable
from reactivex.subject import BehaviorSubject, Subject

from lindenmayer.errors import LSystemError
from lindenmayer.grammar import State
from lindenmayer.interpreter import BoundingBox, InterpretMode, TurtleInterpreter
from lindenmayer.lsystem import LSystem
from lindenmayer.rendering.surface import DrawingSurface
from lindenmayer.scale import ScaleContext, resolve_scale
from lindenmayer.utilities.env import Configuration
from lindenmayer.utilities.logging import get_logger

logger = get_logger(__name__)

REWRITE_THREAD_PREFIX = "lindenmayer-rewrite"
RENDER_THREAD_PREFIX = "lindenmayer-render"


class PipelineState(StrEnum):
    IDLE = "idle"
    COMPUTING_BOUNDS = "computing_bounds"
    SCALING = "scaling"
    DRAWING = "drawing"
    ERROR = "error"


class RenderCoordinator:
    """Run ``iterate`` and ``render`` jobs off the caller's thread.

    Each job runs to completion on its own single-thread executor. Both
    take the same pass lock, so a rewrite never starts while an
    interpretation pass is still reading the previous generation. A render
    waits for the rewrites queued before it, so it always draws at least the
    generation requested up to the call.

    The bounding box of the last measured generation is cached; rendering
    that generation again skips the bounds pass.
    """

    def __init__(
        self,
        lsystem: LSystem,
        surface: DrawingSurface,
        interpreter: TurtleInterpreter | None = None,
        base_distance: float | None = None,
    ) -> None:
        self.lsystem = lsystem
        self.surface = surface
        self.interpreter = interpreter or TurtleInterpreter(
            turn_angle=Configuration.turn_angle(),
            progress_step=Configuration.progress_step(),
        )
        self.base_distance = (
            base_distance if base_distance is not None else Configuration.base_distance()
        )

        self._pass_lock = threading.Lock()
        self._cache_lock = threading.Lock()
        self._futures_lock = threading.Lock()
        self._futures: list[Future[None]] = []
        self._rewrite_futures: list[Future[None]] = []

        self._cached_generation: int | None = None
        self._cached_bounds: BoundingBox | None = None
        self._cached_scale: tuple[int, tuple[int, int], ScaleContext] | None = None
        self._bounds_passes = 0

        self._rewrite_executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix=REWRITE_THREAD_PREFIX
        )
        self._render_executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix=RENDER_THREAD_PREFIX
        )

        self._state_subject: BehaviorSubject[PipelineState] = BehaviorSubject(
            PipelineState.IDLE
        )
        self._status_subject: Subject[str] = Subject()
        self._progress_subject: Subject[int] = Subject()
        self._rendered_subject: Subject[None] = Subject()
        self._error_subject: Subject[str] = Subject()
        self._iteration_progress_subject: Subject[int] = Subject()
        self._iteration_finished_subject: Subject[int] = Subject()

        self._subscriptions = CompositeDisposable(
            lsystem.iteration_progressed.subscribe(
                self._iteration_progress_subject.on_next
            ),
            lsystem.iteration_finished.subscribe(self._on_iteration_finished),
        )

    ###
    # Notifications
    ###
    @property
    def state_changes(self) -> reactivex.Observable[PipelineState]:
        return self._state_subject

    @property
    def status_changed(self) -> reactivex.Observable[str]:
        return self._status_subject

    @property
    def progress_changed(self) -> reactivex.Observable[int]:
        return self._progress_subject

    @property
    def rendered(self) -> reactivex.Observable[None]:
        return self._rendered_subject

    @property
    def errors(self) -> reactivex.Observable[str]:
        return self._error_subject

    @property
    def iteration_progress(self) -> reactivex.Observable[int]:
        return self._iteration_progress_subject

    @property
    def iteration_finished(self) -> reactivex.Observable[int]:
        return self._iteration_finished_subject

    ###
    # Accessors
    ###
    @property
    def state(self) -> PipelineState:
        return self._state_subject.value

    @property
    def generation(self) -> int:
        return self.lsystem.generation

    @property
    def sequence(self) -> State:
        return self.lsystem.state

    @property
    def cached_generation(self) -> int | None:
        with self._cache_lock:
            return self._cached_generation

    @property
    def bounds_passes(self) -> int:
        with self._cache_lock:
            return self._bounds_passes

    @property
    def last_scale(self) -> ScaleContext | None:
        with self._cache_lock:
            return self._cached_scale[2] if self._cached_scale else None

    ###
    # Jobs
    ###
    def iterate(self) -> None:
        with self._futures_lock:
            future = self._submit(self._rewrite_executor, self._iterate_job)
            self._rewrite_futures = [
                pending for pending in self._rewrite_futures if not pending.done()
            ]
            self._rewrite_futures.append(future)

    def render(self) -> None:
        with self._futures_lock:
            upstream = [
                pending for pending in self._rewrite_futures if not pending.done()
            ]
            self._submit(self._render_executor, partial(self._render_job, upstream))

    def wait(self, timeout: float | None = None) -> None:
        """Block until every submitted job finished, re-raising job failures."""

        deadline = None if timeout is None else time.monotonic() + timeout
        while True:
            with self._futures_lock:
                pending = list(self._futures)
            if not pending:
                return
            for future in pending:
                remaining = (
                    None if deadline is None else max(0.0, deadline - time.monotonic())
                )
                try:
                    future.result(timeout=remaining)
                finally:
                    with self._futures_lock:
                        if future.done() and future in self._futures:
                            self._futures.remove(future)

    def shutdown(self, wait: bool = True) -> None:
        self._rewrite_executor.shutdown(wait=wait)
        self._render_executor.shutdown(wait=wait)
        self._subscriptions.dispose()

    def __enter__(self) -> "RenderCoordinator":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.shutdown(wait=True)

    def _submit(
        self, executor: ThreadPoolExecutor, job: Callable[[], None]
    ) -> Future[None]:
        # Caller holds _futures_lock.
        future = executor.submit(job)
        self._futures.append(future)
        return future

    def _iterate_job(self) -> None:
        with self._pass_lock:
            self.lsystem.iterate()

    def _on_iteration_finished(self, generation: int) -> None:
        with self._cache_lock:
            self._cached_generation = None
            self._cached_bounds = None
        self._iteration_finished_subject.on_next(generation)

    def _render_job(self, upstream: list[Future[None]]) -> None:
        # Rewrite failures surface through their own futures.
        wait_futures(upstream)
        with self._pass_lock:
            sequence, generation = self.lsystem.snapshot()
            try:
                self._run_pipeline(sequence, generation)
            except LSystemError as exc:
                logger.warning("Rendering generation %d failed: %s", generation, exc)
                self._publish_failure(str(exc))
                return
            except Exception as exc:
                logger.exception("Rendering generation %d crashed", generation)
                self._publish_failure(str(exc) or type(exc).__name__)
                raise
        self._set_state(PipelineState.IDLE)
        self._rendered_subject.on_next(None)

    def _run_pipeline(self, sequence: State, generation: int) -> None:
        size = self.surface.size
        with self._cache_lock:
            bounds = (
                self._cached_bounds
                if self._cached_generation == generation
                else None
            )

        if bounds is None:
            bounds = self._compute_bounds(sequence, generation)

        self._set_state(PipelineState.SCALING)
        scale = self._resolve_scale(bounds, generation, size)
        self._progress_subject.on_next(100)

        self._set_state(PipelineState.DRAWING)
        started = time.perf_counter()
        result = self.interpreter.run(
            sequence,
            InterpretMode.DRAW,
            scale.distance,
            origin=scale.canvas_origin(),
            on_progress=self._progress_subject.on_next,
        )
        self.surface.draw(result.segments)
        elapsed_ms = (time.perf_counter() - started) * 1000.0
        logger.info(
            "Rendered generation %d: %d segments in %.1f ms",
            generation,
            len(result.segments),
            elapsed_ms,
        )
        self._status_subject.on_next(f"Rendering done in {elapsed_ms:.0f} ms")

    def _compute_bounds(self, sequence: State, generation: int) -> BoundingBox:
        self._set_state(PipelineState.COMPUTING_BOUNDS)
        self._status_subject.on_next("Computing boundaries...")
        started = time.perf_counter()
        result = self.interpreter.run(
            sequence,
            InterpretMode.BOUNDS,
            self.base_distance,
            on_progress=self._progress_subject.on_next,
        )
        elapsed_ms = (time.perf_counter() - started) * 1000.0
        bounds = result.bounds
        assert bounds is not None
        logger.debug("Generation %d bounding box: %s", generation, bounds)

        with self._cache_lock:
            self._bounds_passes += 1
            self._cached_generation = generation
            self._cached_bounds = bounds
        self._status_subject.on_next(
            f"Computing boundaries done in {elapsed_ms:.0f} ms"
        )
        return bounds

    def _resolve_scale(
        self, bounds: BoundingBox, generation: int, size: tuple[int, int]
    ) -> ScaleContext:
        with self._cache_lock:
            cached = self._cached_scale
        if cached is not None and cached[0] == generation and cached[1] == size:
            return cached[2]

        width, height = size
        scale = resolve_scale(bounds, width, height, self.base_distance)
        with self._cache_lock:
            self._cached_scale = (generation, size, scale)
        return scale

    def _publish_failure(self, message: str) -> None:
        self._set_state(PipelineState.ERROR)
        self._error_subject.on_next(message)
        self._status_subject.on_next(message)
        self._set_state(PipelineState.IDLE)

    def _set_state(self, state: PipelineState) -> None:
        self._state_subject.on_next(state)
