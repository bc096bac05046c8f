import numpy as np
import pytest
from hypothesis import given
from hypothesis import strategies as st

from lindenmayer.errors import StackUnderflowError, TurtleProtocolError
from lindenmayer.interpreter import BoundingBox, InterpretMode, TurtleInterpreter


@pytest.fixture()
def interpreter() -> TurtleInterpreter:
    return TurtleInterpreter(turn_angle=90.0, progress_step=5)


class TestBoundsPass:
    """Validate the dry bounds pass so scaling is computed from the true extent."""

    def test_empty_sequence_yields_degenerate_box(
        self, interpreter: TurtleInterpreter
    ) -> None:
        """Confirm the box starts at the origin so an empty pass is zero-sized, not uninitialised."""
        result = interpreter.run("", InterpretMode.BOUNDS, 10.0)

        assert result.bounds == BoundingBox(0.0, 0.0, 0.0, 0.0)
        assert result.segments.shape == (0, 2, 2)

    def test_turn_left_then_forward_heads_east(
        self, interpreter: TurtleInterpreter
    ) -> None:
        """Verify '+' rotates left (heading 0) so F moves along +x."""
        bounds = interpreter.run("+F", InterpretMode.BOUNDS, 10.0).bounds

        assert bounds.max_x == pytest.approx(10.0)
        assert bounds.max_y == pytest.approx(0.0, abs=1e-9)

    def test_turn_right_then_forward_heads_west(
        self, interpreter: TurtleInterpreter
    ) -> None:
        """Verify '-' rotates right (heading 180) so F moves along -x."""
        bounds = interpreter.run("-F", InterpretMode.BOUNDS, 10.0).bounds

        assert bounds.min_x == pytest.approx(-10.0)
        assert bounds.width == pytest.approx(10.0)

    def test_branches_extend_box_in_both_directions(
        self, interpreter: TurtleInterpreter
    ) -> None:
        """Ensure pushed branches contribute to the box and popping restores the trunk."""
        bounds = interpreter.run("F[+F][-F]F", InterpretMode.BOUNDS, 1.0).bounds

        assert bounds.min_x == pytest.approx(-1.0)
        assert bounds.max_x == pytest.approx(1.0)
        assert bounds.min_y == pytest.approx(0.0)
        assert bounds.max_y == pytest.approx(2.0)
        assert bounds.bottom_left == pytest.approx((-1.0, 0.0))

    def test_inert_symbols_do_not_move(self, interpreter: TurtleInterpreter) -> None:
        """Check that symbols outside the command table are no-ops."""
        result = interpreter.run("XYZAB", InterpretMode.BOUNDS, 10.0)

        assert result.bounds == BoundingBox()
        assert result.symbols == 5


class TestDrawPass:
    """Validate the draw pass so the renderer receives exactly the turtle's strokes."""

    def test_forward_appends_segments(self, interpreter: TurtleInterpreter) -> None:
        """Confirm each F becomes one segment from the old to the new position."""
        segments = interpreter.run("F+F", InterpretMode.DRAW, 2.0).segments

        expected = np.array([[[0.0, 0.0], [0.0, 2.0]], [[0.0, 2.0], [2.0, 2.0]]])
        np.testing.assert_allclose(segments, expected, atol=1e-9)
        assert interpreter.run("F", InterpretMode.DRAW, 1.0).bounds is None

    def test_pop_restarts_from_saved_position(
        self, interpreter: TurtleInterpreter
    ) -> None:
        """Ensure strokes after ']' start at the restored position with no connecting line."""
        segments = interpreter.run("[+F]F", InterpretMode.DRAW, 1.0).segments

        np.testing.assert_allclose(segments[0], [[0.0, 0.0], [1.0, 0.0]], atol=1e-9)
        np.testing.assert_allclose(segments[1], [[0.0, 0.0], [0.0, 1.0]], atol=1e-9)

    def test_origin_shifts_every_point(self, interpreter: TurtleInterpreter) -> None:
        """Verify the draw pass can start from an offset origin."""
        segments = interpreter.run("F", InterpretMode.DRAW, 1.0, origin=(3.0, 4.0)).segments

        np.testing.assert_allclose(segments[0], [[3.0, 4.0], [3.0, 5.0]], atol=1e-9)


class TestStackDiscipline:
    """Guard the push/pop protocol so unbalanced sequences never produce output."""

    @pytest.mark.parametrize("mode", list(InterpretMode))
    @pytest.mark.parametrize(
        ("sequence", "index"), [("]", 0), ("F]", 1), ("[F]]", 3), ("[[]]]F", 4)]
    )
    def test_unmatched_pop_raises(
        self,
        interpreter: TurtleInterpreter,
        mode: InterpretMode,
        sequence: str,
        index: int,
    ) -> None:
        """Confirm a ']' with an empty stack aborts the pass with a stack underflow."""
        with pytest.raises(StackUnderflowError) as excinfo:
            interpreter.run(sequence, mode, 1.0)

        assert excinfo.value.index == index
        assert "empty turtle stack" in str(excinfo.value)
        assert isinstance(excinfo.value, TurtleProtocolError)

    @given(prefix=st.text(alphabet="F+-X", max_size=30), suffix=st.text(alphabet="F+-[]", max_size=30))
    def test_leading_unmatched_pop_always_fails(self, prefix: str, suffix: str) -> None:
        """Any ']' before the first '[' fails, whatever surrounds it."""
        interpreter = TurtleInterpreter(turn_angle=25.0)

        with pytest.raises(StackUnderflowError):
            interpreter.run(prefix + "]" + suffix, InterpretMode.BOUNDS, 1.0)

    def test_progress_stops_at_failure(self, interpreter: TurtleInterpreter) -> None:
        """Ensure a failed pass never reports completion."""
        events: list[int] = []
        with pytest.raises(StackUnderflowError):
            interpreter.run("F" * 50 + "]" + "F" * 49, InterpretMode.DRAW, 1.0, on_progress=events.append)

        assert 100 not in events


class TestInterpreterProgress:
    """Check progress throttling so long sequences do not flood listeners."""

    def test_progress_is_throttled_and_complete(
        self, interpreter: TurtleInterpreter
    ) -> None:
        """Verify progress is monotonic, step-spaced and ends at exactly one 100."""
        events: list[int] = []
        interpreter.run("F+" * 5000, InterpretMode.BOUNDS, 1.0, on_progress=events.append)

        assert events == sorted(events)
        assert events[-1] == 100
        assert events.count(100) == 1
        assert all(b - a >= 5 for a, b in zip(events, events[1:]))
        assert len(events) <= 21

    def test_empty_sequence_reports_completion(
        self, interpreter: TurtleInterpreter
    ) -> None:
        """Ensure an empty pass still reports 100."""
        events: list[int] = []
        interpreter.run("", InterpretMode.DRAW, 1.0, on_progress=events.append)

        assert events == [100]
