import os
import tempfile

os.environ.setdefault(
    "LINDENMAYER_LOG_DIR", os.path.join(tempfile.gettempdir(), "lindenmayer-test-logs")
)

import pygame
import pytest
from hypothesis import HealthCheck, settings

from lindenmayer.grammar import Grammar
from lindenmayer.interpreter import TurtleInterpreter
from lindenmayer.lsystem import LSystem
from lindenmayer.rendering.surface import RecordingSurface
from lindenmayer.runtime.coordinator import RenderCoordinator

settings.register_profile(
    "default",
    suppress_health_check=[HealthCheck.function_scoped_fixture],
    deadline=None,
)
settings.load_profile("default")


@pytest.fixture(autouse=True)
def dummy_sdl_video_driver(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    yield


@pytest.fixture(autouse=True)
def init_pygame() -> None:
    pygame.init()


@pytest.fixture()
def plant_lsystem() -> LSystem:
    return LSystem("F", Grammar({"F": "F[+F]F[-F][F]"}), progress_step=5)


@pytest.fixture()
def recording_surface() -> RecordingSurface:
    return RecordingSurface(200, 100)


@pytest.fixture()
def coordinator(plant_lsystem: LSystem, recording_surface: RecordingSurface):
    coordinator = RenderCoordinator(
        plant_lsystem,
        recording_surface,
        interpreter=TurtleInterpreter(turn_angle=20.0, progress_step=5),
        base_distance=10.0,
    )
    yield coordinator
    coordinator.shutdown(wait=True)
