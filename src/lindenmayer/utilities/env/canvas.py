from lindenmayer.utilities.env.parsing import _env_flag, _env_int

DEFAULT_CANVAS_WIDTH = 800
DEFAULT_CANVAS_HEIGHT = 600


class CanvasConfiguration:
    @classmethod
    def canvas_size(cls) -> tuple[int, int]:
        width = _env_int(
            "LINDENMAYER_CANVAS_WIDTH", default=DEFAULT_CANVAS_WIDTH, minimum=1
        )
        height = _env_int(
            "LINDENMAYER_CANVAS_HEIGHT", default=DEFAULT_CANVAS_HEIGHT, minimum=1
        )
        return width, height

    @classmethod
    def debug_axes(cls) -> bool:
        return _env_flag("LINDENMAYER_DEBUG_AXES")
