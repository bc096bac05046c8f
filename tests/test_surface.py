import numpy as np
import pygame

from lindenmayer.rendering.surface import (BLACK, IVORY, PygameSurface,
                                           RecordingSurface, to_screen)


class TestPygameSurface:
    """Validate rasterisation so cartesian drawings appear upright on screen."""

    def test_to_screen_flips_y(self) -> None:
        """Verify y is mirrored against the surface height and x is untouched."""
        segments = np.array([[[0.0, 0.0], [10.0, 40.0]]])

        screen = to_screen(segments, height=50)

        np.testing.assert_allclose(screen, [[[0.0, 50.0], [10.0, 10.0]]])
        np.testing.assert_allclose(segments, [[[0.0, 0.0], [10.0, 40.0]]])

    def test_draw_fills_background_and_strokes(self) -> None:
        """Confirm draw() clears to the background and paints the segments."""
        surface = PygameSurface(pygame.Surface((20, 20)))
        surface.draw(np.array([[[10.0, 0.0], [10.0, 20.0]]]))

        assert surface.size == (20, 20)
        assert tuple(surface.surface.get_at((2, 2)))[:3] == IVORY
        assert tuple(surface.surface.get_at((10, 10)))[:3] != IVORY

    def test_draw_empty_segments(self) -> None:
        """Ensure a draw pass with no strokes just clears the canvas."""
        surface = PygameSurface(pygame.Surface((8, 8)), background=BLACK)
        surface.draw(np.empty((0, 2, 2)))

        assert tuple(surface.surface.get_at((4, 4)))[:3] == BLACK

    def test_draw_swaps_in_a_new_frame(self) -> None:
        """Verify a draw pass paints a fresh frame and leaves the previous one untouched."""
        surface = PygameSurface(pygame.Surface((20, 20)))
        surface.draw(np.empty((0, 2, 2)))
        previous = surface.frame()

        surface.draw(np.array([[[10.0, 0.0], [10.0, 20.0]]]))

        assert surface.frame() is not previous
        assert tuple(previous.get_at((10, 10)))[:3] == IVORY
        assert tuple(surface.frame().get_at((10, 10)))[:3] != IVORY


class TestRecordingSurface:
    """Check the in-memory sink used by headless runs."""

    def test_records_last_segments(self) -> None:
        """Verify the last segments and the number of draws are kept."""
        surface = RecordingSurface(5, 6)
        surface.draw(np.zeros((1, 2, 2)))
        surface.draw(np.ones((2, 2, 2)))

        assert surface.size == (5, 6)
        assert surface.draw_count == 2
        assert surface.segments.shape == (2, 2, 2)
