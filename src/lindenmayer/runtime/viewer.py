from __future__ import annotations

import threading
from enum import StrEnum

import pygame

from lindenmayer.rendering.surface import IVORY, PygameSurface
from lindenmayer.runtime.coordinator import RenderCoordinator
from lindenmayer.utilities.logging import get_logger

logger = get_logger(__name__)

FRAMES_PER_SECOND = 30
WAITING_MESSAGE = "Rendering initial image, please wait..."


class ViewerCommand(StrEnum):
    NEXT_GENERATION = "next_generation"
    RENDER = "render"
    QUIT = "quit"


KEY_COMMANDS: dict[int, ViewerCommand] = {
    pygame.K_n: ViewerCommand.NEXT_GENERATION,
    pygame.K_SPACE: ViewerCommand.NEXT_GENERATION,
    pygame.K_r: ViewerCommand.RENDER,
    pygame.K_q: ViewerCommand.QUIT,
    pygame.K_ESCAPE: ViewerCommand.QUIT,
}


def command_for_event(event: pygame.event.Event) -> ViewerCommand | None:
    if event.type == pygame.QUIT:
        return ViewerCommand.QUIT
    if event.type == pygame.KEYDOWN:
        return KEY_COMMANDS.get(event.key)
    return None


class ViewerStatus:
    """Latest notifications, written by worker threads and read by the loop."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._message = "Press N to iterate, R to render"
        self._progress = 0
        self._busy_iterating = False
        self._frame_ready = False

    @property
    def message(self) -> str:
        with self._lock:
            return self._message

    @property
    def progress(self) -> int:
        with self._lock:
            return self._progress

    @property
    def busy_iterating(self) -> bool:
        with self._lock:
            return self._busy_iterating

    @property
    def frame_ready(self) -> bool:
        with self._lock:
            return self._frame_ready

    def update(
        self,
        message: str | None = None,
        progress: int | None = None,
        busy_iterating: bool | None = None,
        frame_ready: bool | None = None,
    ) -> None:
        with self._lock:
            if message is not None:
                self._message = message
            if progress is not None:
                self._progress = progress
            if busy_iterating is not None:
                self._busy_iterating = busy_iterating
            if frame_ready is not None:
                self._frame_ready = frame_ready

    def begin_iteration(self) -> bool:
        """Mark an iteration as running; False when one already is."""

        with self._lock:
            if self._busy_iterating:
                return False
            self._busy_iterating = True
            self._message = "Iterating..."
            return True

    def caption(self, title: str, generation: int) -> str:
        with self._lock:
            return (
                f"{title} - generation {generation} - {self._progress}% - {self._message}"
            )


class Viewer:
    def __init__(self, coordinator: RenderCoordinator, title: str = "L-system") -> None:
        if not isinstance(coordinator.surface, PygameSurface):
            raise TypeError("Viewer requires a coordinator drawing on a PygameSurface")
        self.coordinator = coordinator
        self.title = title
        self.status = ViewerStatus()
        self._subscriptions = [
            coordinator.status_changed.subscribe(self._on_status),
            coordinator.progress_changed.subscribe(self._on_progress),
            coordinator.iteration_progress.subscribe(self._on_progress),
            coordinator.iteration_finished.subscribe(self._on_iterated),
            coordinator.rendered.subscribe(self._on_rendered),
        ]

    def _on_status(self, message: str) -> None:
        self.status.update(message=message)

    def _on_progress(self, progress: int) -> None:
        self.status.update(progress=progress)

    def _on_iterated(self, generation: int) -> None:
        self.status.update(
            message=f"Iterated to generation {generation}", busy_iterating=False
        )
        self.coordinator.render()

    def _on_rendered(self, _: None) -> None:
        self.status.update(frame_ready=True)

    def handle(self, command: ViewerCommand) -> bool:
        if command is ViewerCommand.QUIT:
            return False
        if command is ViewerCommand.NEXT_GENERATION:
            if self.status.begin_iteration():
                self.coordinator.iterate()
            else:
                logger.info("Iteration in progress; ignoring request")
        elif command is ViewerCommand.RENDER:
            self.coordinator.render()
        return True

    def run(self) -> None:  # pragma: no cover - needs a display
        pygame.init()
        window = pygame.display.set_mode(self.coordinator.surface.size)
        font = pygame.font.Font(None, 24)
        clock = pygame.time.Clock()
        self.coordinator.render()

        running = True
        while running:
            for event in pygame.event.get():
                command = command_for_event(event)
                if command is not None:
                    running = self.handle(command) and running

            if self.status.frame_ready:
                window.blit(self.coordinator.surface.frame(), (0, 0))
            else:
                window.fill(IVORY)
                text = font.render(WAITING_MESSAGE, True, (0, 0, 0))
                window.blit(text, text.get_rect(center=window.get_rect().center))
            pygame.display.set_caption(
                self.status.caption(self.title, self.coordinator.generation)
            )
            pygame.display.flip()
            clock.tick(FRAMES_PER_SECOND)

        if self.status.busy_iterating:
            logger.info("Waiting for the running iteration before closing")
        for subscription in self._subscriptions:
            subscription.dispose()
        self.coordinator.shutdown(wait=True)
        pygame.quit()
