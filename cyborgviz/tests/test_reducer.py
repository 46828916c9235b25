"""
Tests for the reducer (session state transitions).

Tests:
- Guards for each action
- Advance vs replay policy
- State after success and failure of each server call
"""

import pytest

from ..session.state import Session, SessionPhase
from ..session.action import SessionAction, Effect, EffectType, RejectionCode
from ..session.reducer import plan, resolve
from ..transport.errors import (
    ErrorCode,
    TransportResult,
    ProtocolError,
    DecodeError,
    TransportError,
    NoActiveGameError,
)


def active(step: int, latest: int | None = None, max_steps: int = 10) -> Session:
    return Session(
        max_steps=max_steps,
        game_id="g1",
        current_step=step,
        latest_fetched_step=step if latest is None else latest,
    )


FAILURES = [
    ProtocolError("HTTP 500", status_code=500),
    DecodeError("bad body"),
    TransportError("unreachable"),
]


class TestSessionState:
    """Tests for Session invariants."""

    def test_initial_state(self):
        session = Session()

        assert session.phase == SessionPhase.NO_GAME
        assert session.current_step == 0
        assert session.latest_fetched_step == 0
        assert session.max_steps == 10

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"max_steps": 0},
            {"game_id": "g1", "current_step": 11, "latest_fetched_step": 11},
            {"game_id": "g1", "current_step": 3, "latest_fetched_step": 2},
            {"current_step": 1, "latest_fetched_step": 1},
        ],
    )
    def test_invalid_states_rejected(self, kwargs):
        with pytest.raises(ValueError):
            Session(**kwargs)

    def test_reset_keeps_settings(self):
        session = Session(max_steps=4, red_agent="RedMeander", game_id="g1",
                          current_step=2, latest_fetched_step=3)

        reset = session.reset()

        assert reset == Session(max_steps=4, red_agent="RedMeander")


class TestStart:
    """Tests for starting a game."""

    def test_plan_from_no_game(self):
        state = Session(max_steps=10, red_agent="B_lineAgent", blue_agent="BlueRemove")

        transition = plan(state, SessionAction.START)

        assert transition.success
        assert transition.new_state == state
        assert transition.effects == [Effect.start_game("B_lineAgent", "BlueRemove", 10)]

    def test_plan_rejected_when_active(self):
        transition = plan(active(2), SessionAction.START)

        assert not transition.success
        assert transition.rejected
        assert transition.error_code == RejectionCode.GAME_ALREADY_ACTIVE.value

    def test_success_activates_at_step_zero(self):
        state = Session()
        effect = plan(state, SessionAction.START).effects[0]

        transition = resolve(state, effect, TransportResult.ok("abc"))

        assert transition.success
        assert transition.new_state.game_id == "abc"
        assert transition.new_state.current_step == 0
        assert transition.new_state.latest_fetched_step == 0
        assert transition.new_state.phase == SessionPhase.ACTIVE

    @pytest.mark.parametrize("error", FAILURES)
    def test_failure_stays_no_game(self, error):
        state = Session()
        effect = plan(state, SessionAction.START).effects[0]

        transition = resolve(state, effect, TransportResult.failure(error))

        assert not transition.success
        assert not transition.rejected
        assert transition.new_state == state
        assert transition.new_state.game_id is None


class TestAdvance:
    """Tests for the next-step action."""

    def test_new_step_calls_advance(self):
        transition = plan(active(3), SessionAction.ADVANCE)

        assert transition.effects == [Effect.advance_game("g1", 4)]

    def test_seen_step_calls_fetch(self):
        transition = plan(active(2, latest=5), SessionAction.ADVANCE)

        assert transition.effects == [Effect.fetch_step("g1", 3)]

    def test_advance_success_moves_both_counters(self, snapshot_factory):
        state = active(3)
        effect = plan(state, SessionAction.ADVANCE).effects[0]
        snapshot = snapshot_factory(4)

        transition = resolve(state, effect, TransportResult.ok(snapshot))

        assert transition.new_state == active(4)
        assert transition.effects == [Effect.replace_snapshot(snapshot)]

    def test_replay_success_keeps_latest(self, snapshot_factory):
        state = active(2, latest=5)
        effect = plan(state, SessionAction.ADVANCE).effects[0]

        transition = resolve(state, effect, TransportResult.ok(snapshot_factory(3)))

        assert transition.new_state == active(3, latest=5)

    def test_rejected_at_max_steps(self):
        transition = plan(active(10), SessionAction.ADVANCE)

        assert transition.rejected
        assert transition.error_code == RejectionCode.AT_MAX_STEPS.value
        assert transition.effects == []

    def test_rejected_without_game(self):
        transition = plan(Session(), SessionAction.ADVANCE)

        assert transition.error_code == RejectionCode.GAME_NOT_STARTED.value

    @pytest.mark.parametrize("state", [active(3), active(2, latest=5)])
    @pytest.mark.parametrize("error", FAILURES)
    def test_failure_changes_nothing(self, state, error):
        effect = plan(state, SessionAction.ADVANCE).effects[0]

        transition = resolve(state, effect, TransportResult.failure(error))

        assert not transition.success
        assert transition.new_state == state
        assert transition.effects == []


class TestRewind:
    """Tests for the previous-step action."""

    def test_rewind_fetches_previous(self):
        transition = plan(active(4), SessionAction.REWIND)

        assert transition.effects == [Effect.fetch_step("g1", 3)]

    def test_rewind_success_keeps_latest(self, snapshot_factory):
        state = active(4)
        effect = plan(state, SessionAction.REWIND).effects[0]

        transition = resolve(state, effect, TransportResult.ok(snapshot_factory(3)))

        assert transition.new_state == active(3, latest=4)

    @pytest.mark.parametrize("step", [0, 1])
    def test_rejected_at_first_step(self, step):
        transition = plan(active(step), SessionAction.REWIND)

        assert transition.rejected
        assert transition.error_code == RejectionCode.AT_FIRST_STEP.value

    def test_rejected_without_game(self):
        transition = plan(Session(), SessionAction.REWIND)

        assert transition.error_code == RejectionCode.GAME_NOT_STARTED.value


class TestEnd:
    """Tests for ending a game."""

    def test_end_success_resets(self):
        state = active(4, latest=6)
        effect = plan(state, SessionAction.END).effects[0]

        transition = resolve(state, effect, TransportResult.ok("ok"))

        assert transition.success
        assert transition.message == "ok"
        assert transition.new_state == Session(max_steps=10)
        assert transition.effects == [Effect.clear_snapshot()]

    def test_end_failure_keeps_game(self):
        """The game is presumed still running on the server."""
        state = active(4, latest=6)
        effect = plan(state, SessionAction.END).effects[0]

        transition = resolve(
            state, effect, TransportResult.failure(ProtocolError("HTTP 503", status_code=503))
        )

        assert not transition.success
        assert transition.new_state == state
        assert transition.new_state.game_id == "g1"

    def test_transport_no_game_is_not_a_rejection(self):
        """A missing-game failure from the transport is not a guard rejection."""
        state = active(4)

        transition = resolve(
            state, Effect.end_game("g1"), TransportResult.failure(NoActiveGameError("no game"))
        )

        assert not transition.success
        assert transition.error_code == ErrorCode.NO_ACTIVE_GAME.value
        assert not transition.rejected

    def test_rejected_without_game(self):
        transition = plan(Session(), SessionAction.END)

        assert transition.error_code == RejectionCode.GAME_NOT_STARTED.value


class TestEffects:
    """Tests for effect classification."""

    def test_transport_and_view_effects(self, snapshot_factory):
        assert Effect.end_game("g1").is_transport
        assert Effect.fetch_step("g1", 2).is_transport
        assert not Effect.clear_snapshot().is_transport
        assert Effect.replace_snapshot(snapshot_factory(1)).effect_type == EffectType.REPLACE_SNAPSHOT
