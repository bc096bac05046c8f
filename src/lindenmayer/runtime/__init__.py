from lindenmayer.runtime.coordinator import (PipelineState,  # noqa: F401
                                             RenderCoordinator)
