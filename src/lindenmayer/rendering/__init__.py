from lindenmayer.rendering.surface import (DrawingSurface,  # noqa: F401
                                           PygameSurface, RecordingSurface)
