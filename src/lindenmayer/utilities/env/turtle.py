from lindenmayer.utilities.env.parsing import _env_float, _env_int

DEFAULT_TURN_ANGLE = 20.0
DEFAULT_BASE_DISTANCE = 10.0
DEFAULT_PROGRESS_STEP = 5


class TurtleConfiguration:
    @classmethod
    def turn_angle(cls) -> float:
        return _env_float("LINDENMAYER_TURN_ANGLE", default=DEFAULT_TURN_ANGLE)

    @classmethod
    def base_distance(cls) -> float:
        return _env_float(
            "LINDENMAYER_BASE_DISTANCE",
            default=DEFAULT_BASE_DISTANCE,
            minimum=0.0,
            exclusive_minimum=True,
        )

    @classmethod
    def progress_step(cls) -> int:
        """Percentage points between two progress notifications."""

        return _env_int(
            "LINDENMAYER_PROGRESS_STEP",
            default=DEFAULT_PROGRESS_STEP,
            minimum=1,
            maximum=100,
        )
