from lindenmayer.utilities.env.canvas import CanvasConfiguration
from lindenmayer.utilities.env.turtle import TurtleConfiguration


class Configuration(TurtleConfiguration, CanvasConfiguration):
    """Aggregate environment configuration helpers."""
