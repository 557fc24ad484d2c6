"""
Tests for engine.py - Session creation and the per-tick transition.
"""

import random

import pytest

from serpent.domain import Direction, Food, GameState, Snake, UP, DOWN, LEFT, RIGHT
from serpent.engine import Session, TickOutcome, TickStatus, new_session, tick
from serpent.exceptions import ConfigurationError
from serpent.settings import GameSettings


def make_session(positions, direction, food, width=10, height=10, **settings_kwargs):
    """Build a session around a hand-placed snake and food item."""
    settings = GameSettings(width=width, height=height, initial_length=1, **settings_kwargs)
    board = settings.board()
    return Session(settings, board, Snake(positions, direction), Food(food), rng=random.Random(0))


@pytest.fixture
def small_settings():
    return GameSettings(width=10, height=10, initial_length=3)


class TestTickOutcome:
    """Tests for TickOutcome."""

    def test_continued(self):
        outcome = TickOutcome.continued()
        assert outcome.status is TickStatus.CONTINUED
        assert outcome.final_score is None
        assert not outcome.is_over

    def test_ended_carries_score(self):
        outcome = TickOutcome.ended(7)
        assert outcome.status is TickStatus.ENDED
        assert outcome.final_score == 7
        assert outcome.is_over


class TestNewSession:
    """Tests for new_session()."""

    def test_new_session_initial_state(self, small_settings):
        """A new session is running with a centred snake and food off the body."""
        session = new_session(small_settings, rng=random.Random(3))
        assert session.alive
        assert session.score == 0
        assert session.tick_number == 0
        assert session.tick_interval == small_settings.tick_interval
        assert list(session.snake.positions) == [(5, 5), (5, 6), (5, 7)]
        assert session.snake.direction is UP
        assert session.board.contains(session.food.position)
        assert not session.snake.occupies(session.food.position)

    def test_new_session_defaults(self):
        """Without settings the default 40x30 board and length 5 are used."""
        session = new_session()
        assert (session.board.width, session.board.height) == (40, 30)
        assert len(session.snake) == 5
        assert session.snake.head == (20, 15)

    def test_new_session_rejects_oversized_snake(self):
        """A snake that does not fit is rejected before any tick runs."""
        with pytest.raises(ConfigurationError):
            new_session(GameSettings(width=10, height=10, initial_length=8))

    def test_new_session_rejects_tiny_board(self):
        with pytest.raises(ConfigurationError):
            new_session(GameSettings(width=3, height=10, initial_length=1))

    def test_restart_builds_fresh_state(self, small_settings):
        """Each session owns its own snake and food."""
        first = new_session(small_settings)
        tick(first)
        second = new_session(small_settings)
        assert second.snake is not first.snake
        assert second.food is not first.food
        assert second.tick_number == 0

    def test_snapshot(self, small_settings):
        """snapshot() copies the render-worthy state."""
        session = new_session(small_settings, rng=random.Random(1))
        state = session.snapshot()
        assert isinstance(state, GameState)
        assert state.snake_positions == list(session.snake.positions)
        assert state.food == session.food.position
        assert state.direction is UP
        assert state.alive is True
        assert state.score == 0
        session.snake.advance()
        assert state.snake_positions != list(session.snake.positions)


class TestTick:
    """Tests for tick()."""

    def test_eating_food_grows_and_scores(self, small_settings):
        """Head moves onto the food: length +1, score +1, food moves elsewhere."""
        session = new_session(small_settings, rng=random.Random(5))
        session.food = Food((5, 4))

        session, outcome = tick(session)

        assert outcome == TickOutcome.continued()
        assert session.snake.head == (5, 4)
        assert len(session.snake) == 4
        assert session.score == 1
        assert session.food.position != (5, 4)
        assert not session.snake.occupies(session.food.position)

    def test_reverse_request_is_ignored(self):
        """Asking to go DOWN while heading UP keeps going UP."""
        session = make_session([(5, 5), (5, 6), (5, 7), (5, 8), (5, 9)], UP, food=(1, 1))

        session, outcome = tick(session, DOWN)

        assert not outcome.is_over
        assert session.snake.direction is UP
        assert session.snake.head == (5, 4)
        assert len(session.snake) == 5

    def test_turn_is_applied_before_moving(self):
        session = make_session([(5, 5), (5, 6)], UP, food=(1, 1))
        session, _ = tick(session, RIGHT)
        assert list(session.snake.positions) == [(6, 5), (5, 5)]

    def test_wall_death_leaves_snake_untouched(self):
        """Entering column 0 ends the session without moving the body."""
        positions = [(1, 5), (2, 5), (3, 5)]
        session = make_session(positions, LEFT, food=(8, 8))

        session, outcome = tick(session)

        assert outcome == TickOutcome.ended(0)
        assert list(session.snake.positions) == positions
        assert session.snake.alive is False
        assert session.snake.death_reason == "wall"
        assert session.food.position == (8, 8)

    @pytest.mark.parametrize("positions,direction", [
        ([(10, 5)], RIGHT),
        ([(5, 1)], UP),
        ([(5, 10)], DOWN),
    ])
    def test_every_border_is_fatal(self, positions, direction):
        session = make_session(positions, direction, food=(3, 3))
        _, outcome = tick(session)
        assert outcome.is_over
        assert session.snake.death_reason == "wall"

    def test_self_collision_ends_session(self):
        """Moving into a body segment that stays put kills the snake."""
        # Head (5,5) going DOWN into (5,6), which is not the tail
        positions = [(5, 5), (6, 5), (6, 6), (5, 6), (4, 6)]
        session = make_session(positions, DOWN, food=(1, 1))

        session, outcome = tick(session)

        assert outcome == TickOutcome.ended(0)
        assert session.snake.head == (5, 6)
        assert session.snake.occupies((5, 6), include_head=False)
        assert session.snake.death_reason == "self"

    def test_moving_into_vacating_tail_is_safe(self):
        """The cell the tail leaves this tick is free for the head."""
        positions = [(5, 5), (6, 5), (6, 6), (5, 6)]
        session = make_session(positions, DOWN, food=(1, 1))

        session, outcome = tick(session)

        assert not outcome.is_over
        assert list(session.snake.positions) == [(5, 6), (5, 5), (6, 5), (6, 6)]

    def test_growing_into_tail_is_fatal(self):
        """When the snake grows the tail stays, so running into it kills."""
        positions = [(5, 5), (6, 5), (6, 6), (5, 6)]
        session = make_session(positions, DOWN, food=(5, 6))
        # Food never sits on the snake during play; force the overlap here
        session, outcome = tick(session)
        assert outcome.is_over
        assert session.snake.death_reason == "self"

    def test_tick_after_death_is_a_noop(self):
        """Ticking an ended session returns the same outcome and mutates nothing."""
        session = make_session([(1, 5), (2, 5)], LEFT, food=(8, 8))
        session, first = tick(session)
        positions = list(session.snake.positions)
        tick_number = session.tick_number

        for direction in (None, UP, RIGHT):
            session, again = tick(session, direction)
            assert again == first
            assert list(session.snake.positions) == positions
            assert session.tick_number == tick_number
            assert session.snake.direction is LEFT

    def test_tick_number_counts_ticks(self):
        session = make_session([(5, 5)], UP, food=(1, 1))
        tick(session)
        tick(session)
        assert session.tick_number == 2

    def test_speed_up_is_capped(self):
        """Each meal shortens the interval, never below the minimum."""
        session = make_session(
            [(5, 9)], UP, food=(5, 8),
            tick_interval=0.1, min_tick_interval=0.09, speedup=0.003,
        )
        intervals = []
        for _ in range(5):
            session.food = Food(session.snake.peek_next_head())
            session, outcome = tick(session)
            assert not outcome.is_over
            intervals.append(session.tick_interval)

        assert intervals[0] == pytest.approx(0.097)
        assert intervals[-1] == pytest.approx(0.09)
        assert all(a >= b for a, b in zip(intervals, intervals[1:]))
        assert session.score == 5

    def test_full_board_ends_session(self):
        """Eating the last free cell ends the session instead of hanging."""
        settings = GameSettings(width=5, height=5, initial_length=1)
        board = settings.board()
        path = []
        for y in range(1, 6):
            xs = range(1, 6) if y % 2 else range(5, 0, -1)
            path.extend((x, y) for x in xs)
        # Head at (2,1) heading LEFT onto the only free cell (1,1)
        session = Session(settings, board, Snake(path[1:], LEFT), Food((1, 1)))

        session, outcome = tick(session)

        assert outcome == TickOutcome.ended(1)
        assert len(session.snake) == 25
        assert session.snake.death_reason == "board_full"

    def test_random_play_preserves_invariants(self):
        """Length and score follow the growth rule over long random games."""
        rng = random.Random(2024)
        settings = GameSettings(width=12, height=12, initial_length=3)

        for _ in range(20):
            session = new_session(settings, rng=random.Random(rng.random()))
            outcome = TickOutcome.continued()
            while not outcome.is_over:
                before = len(session.snake)
                requested = rng.choice([None] + list(Direction))
                previous = session.snake.direction
                expected = previous if requested in (None, previous.opposite) else requested
                hx, hy = session.snake.head
                dx, dy = expected.vector
                will_eat = session.food.is_at((hx + dx, hy + dy))

                session, outcome = tick(session, requested)

                assert session.snake.direction is expected

                assert session.snake.direction is not previous.opposite
                if outcome.is_over and session.snake.death_reason == "wall":
                    assert len(session.snake) == before
                    continue
                assert len(session.snake) == before + (1 if will_eat else 0)
                assert session.score == len(session.snake) - session.initial_length
                if not outcome.is_over:
                    assert not session.snake.occupies(session.food.position)
