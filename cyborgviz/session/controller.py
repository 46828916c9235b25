"""
Session Controller - Drives one game against the server.

For each user action:
1. Refuse if another operation is in flight
2. Plan the transition (guards)
3. Perform the single server call
4. Resolve the outcome into a new state
5. Apply view effects (replace/clear snapshot)

The loading flag is held for the whole operation and released on every
exit path, including guard rejections and exceptions.
"""

from __future__ import annotations
from contextlib import contextmanager
from typing import Iterator
import logging
import threading

from .state import Session
from .action import SessionAction, Effect, EffectType, RejectionCode, Transition
from .reducer import plan, resolve
from ..config import ClientConfig
from ..transport.client import SessionTransport
from ..transport.errors import TransportResult
from ..view.graph_model import GraphViewModel


logger = logging.getLogger(__name__)


class SessionController:
    """
    Single-session controller.

    Usage:
        controller = SessionController(SessionTransport(base_url))

        controller.start()
        controller.next_step()
        print(controller.view.red_action_info)
        controller.end()

    Each operation returns the Transition that was applied (or refused).
    Failures are logged; they never raise.
    """

    def __init__(
        self,
        transport: SessionTransport,
        session: Session | None = None,
        view: GraphViewModel | None = None,
    ):
        self.transport = transport
        self.session = session or Session()
        self.view = view or GraphViewModel()
        self._loading = False
        self._in_flight = threading.Lock()

    @classmethod
    def from_config(cls, config: ClientConfig) -> SessionController:
        transport = SessionTransport(config.base_url, timeout=config.timeout)
        session = Session(
            max_steps=config.max_steps,
            red_agent=config.red_agent,
            blue_agent=config.blue_agent,
        )
        return cls(transport, session=session)

    @property
    def loading(self) -> bool:
        return self._loading

    # =========================================================================
    # Operations
    # =========================================================================

    def configure(
        self,
        max_steps: int | None = None,
        red_agent: str | None = None,
        blue_agent: str | None = None,
    ) -> Session:
        """
        Change the settings for the next game.

        Only allowed while no game is running.
        """
        if self.session.is_active():
            raise RuntimeError("Cannot change game settings while a game is running")
        changes = {
            key: value
            for key, value in (
                ("max_steps", max_steps),
                ("red_agent", red_agent),
                ("blue_agent", blue_agent),
            )
            if value is not None
        }
        self.session = self.session._copy_with(**changes)
        return self.session

    def start(self) -> Transition:
        """Start a new game with the configured agents and step ceiling."""
        return self._run(SessionAction.START)

    def next_step(self) -> Transition:
        """Show the next step, asking the server to play it if it is new."""
        return self._run(SessionAction.ADVANCE)

    def previous_step(self) -> Transition:
        """Show the previous step again."""
        return self._run(SessionAction.REWIND)

    def end(self) -> Transition:
        """End the running game."""
        return self._run(SessionAction.END)

    # =========================================================================
    # Execution
    # =========================================================================

    def _run(self, action: SessionAction) -> Transition:
        with self._operation() as acquired:
            if not acquired:
                logger.info("Ignoring %s: another operation is in progress", action.value)
                return Transition.failure(
                    "Another operation is in progress",
                    error_code=RejectionCode.OPERATION_IN_PROGRESS.value,
                    state=self.session,
                )

            planned = plan(self.session, action)
            if not planned.success:
                logger.info("Rejected %s: %s", action.value, planned.error)
                return planned

            effect = planned.effects[0]
            outcome = self._perform(effect)
            resolved = resolve(self.session, effect, outcome)

            if not resolved.success:
                logger.warning("Failed to %s: %s", action.value, resolved.error)
                return resolved

            self.session = resolved.new_state
            for view_effect in resolved.effects:
                self._apply_view_effect(view_effect)

            logger.info(
                "%s succeeded: game=%s step=%s latest=%s",
                action.value,
                self.session.game_id,
                self.session.current_step,
                self.session.latest_fetched_step,
            )
            return resolved

    @contextmanager
    def _operation(self) -> Iterator[bool]:
        """Hold the in-flight slot and the loading flag for one operation."""
        if not self._in_flight.acquire(blocking=False):
            yield False
            return
        self._loading = True
        try:
            yield True
        finally:
            self._loading = False
            self._in_flight.release()

    def _perform(self, effect: Effect) -> TransportResult:
        if not effect.is_transport:
            raise ValueError(f"Not a transport effect: {effect.effect_type}")
        if effect.effect_type == EffectType.START_GAME:
            return self.transport.start(effect.blue_agent, effect.red_agent, effect.max_steps)
        if effect.effect_type == EffectType.ADVANCE_GAME:
            return self.transport.advance(effect.game_id)
        if effect.effect_type == EffectType.FETCH_STEP:
            return self.transport.fetch_historical(effect.game_id, effect.step)
        return self.transport.end(effect.game_id)

    def _apply_view_effect(self, effect: Effect) -> None:
        if effect.is_transport:
            raise ValueError(f"Not a view effect: {effect.effect_type}")
        if effect.effect_type == EffectType.REPLACE_SNAPSHOT:
            self.view.replace(effect.snapshot)
        else:
            self.view.clear()
