"""
Session Transport - HTTP calls against the CybORG game server.

Four operations, each returning a TransportResult:

    start(blue_agent, red_agent, max_steps)  POST   /api/games/start
    advance(game_id)                         POST   /api/games/{game_id}
    fetch_historical(game_id, step)          GET    /api/games/{game_id}/step/{step}
    end(game_id)                             DELETE /api/games/{game_id}

Rules:
- Only HTTP 200 is a success, whatever the body says
- No exception escapes; failures are logged and returned
- No retries; a failure is reported once
- Every request carries a timeout
"""

from __future__ import annotations
import logging
from typing import Any, TypeVar
from urllib.parse import quote

import requests
from pydantic import BaseModel, ValidationError

from ..api.schemas import (
    StartGameRequest,
    StartGameResponse,
    EndGameResponse,
    GraphSnapshot,
)
from ..config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from .errors import (
    TransportResult,
    TransportError,
    ProtocolError,
    DecodeError,
    NoActiveGameError,
)


logger = logging.getLogger(__name__)

GAMES_PATH = "/api/games"

M = TypeVar("M", bound=BaseModel)


class SessionTransport:
    """
    HTTP client for one game server.

    Usage:
        transport = SessionTransport("http://localhost:8000")

        started = transport.start("BlueRemove", "B_lineAgent", 10)
        if started.success:
            snapshot = transport.advance(started.value)

    The `http` argument accepts anything with a requests-style
    `request(method, url, timeout=..., json=...)` method, which lets tests
    plug in a test client instead of the network.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float | None = DEFAULT_TIMEOUT,
        http: Any = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.http = http if http is not None else requests.Session()

    # =========================================================================
    # Operations
    # =========================================================================

    def start(self, blue_agent: str, red_agent: str, max_steps: int) -> TransportResult[str]:
        """
        Start a new game.

        Returns the server-issued game id.
        """
        body = StartGameRequest(red_agent=red_agent, step=max_steps, blue_agent=blue_agent)
        result = self._call(
            "POST", f"{GAMES_PATH}/start", StartGameResponse, json=body.model_dump()
        )
        if not result.success:
            return TransportResult.failure(result.error)

        game_id = result.value.game_id
        logger.info("Fetched game id: %s", game_id)
        return TransportResult.ok(game_id)

    def advance(self, game_id: str | None) -> TransportResult[GraphSnapshot]:
        """Ask the server to play the next step and return its snapshot."""
        if not game_id:
            return self._no_game("advance")
        return self._call("POST", self._game_path(game_id), GraphSnapshot)

    def fetch_historical(self, game_id: str | None, step: int) -> TransportResult[GraphSnapshot]:
        """Re-read the snapshot the server already produced for `step`."""
        if not game_id:
            return self._no_game("fetch step")
        return self._call("GET", f"{self._game_path(game_id)}/step/{step}", GraphSnapshot)

    def end(self, game_id: str | None) -> TransportResult[str]:
        """
        End a game.

        Returns the server's closing message.
        """
        if not game_id:
            return self._no_game("end")

        result = self._call("DELETE", self._game_path(game_id), EndGameResponse)
        if not result.success:
            return TransportResult.failure(result.error)

        message = result.value.message
        logger.info("Deleted game id: %s, message: %s", game_id, message)
        return TransportResult.ok(message)

    def close(self) -> None:
        """Release the underlying HTTP session."""
        close = getattr(self.http, "close", None)
        if close is not None:
            close()

    # =========================================================================
    # Helpers
    # =========================================================================

    def _game_path(self, game_id: str) -> str:
        return f"{GAMES_PATH}/{quote(game_id, safe='')}"

    def _no_game(self, operation: str) -> TransportResult:
        logger.warning("Cannot %s: start a game first", operation)
        return TransportResult.failure(NoActiveGameError(f"Cannot {operation}: no active game"))

    def _call(self, method: str, path: str, model: type[M], **kwargs) -> TransportResult[M]:
        """Issue one request and decode the body into `model`."""
        url = f"{self.base_url}{path}"

        try:
            response = self.http.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            return TransportResult.failure(TransportError(f"{method} {path} failed: {exc}"))

        if response.status_code != 200:
            logger.warning(
                "%s %s returned HTTP %s, expected 200", method, url, response.status_code
            )
            return TransportResult.failure(
                ProtocolError(
                    f"{method} {path} returned HTTP {response.status_code}",
                    status_code=response.status_code,
                )
            )

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Raw response body for %s %s:\n%s", method, path, response.text)

        try:
            payload = model.model_validate_json(response.content)
        except ValidationError as exc:
            logger.warning("Decoding %s from %s %s failed: %s", model.__name__, method, url, exc)
            return TransportResult.failure(
                DecodeError(f"{method} {path} returned an invalid {model.__name__}")
            )

        return TransportResult.ok(payload)
