"""
Client configuration.

Values come from the environment, with command-line flags taking
precedence in the CLI:

    CYBORGVIZ_BASE_URL     Game server root (default http://localhost:8000)
    CYBORGVIZ_TIMEOUT      Per-request timeout in seconds (default 10)
    CYBORGVIZ_MAX_STEPS    Step ceiling for new games (default 10)
    CYBORGVIZ_RED_AGENT    Red agent strategy (default B_lineAgent)
    CYBORGVIZ_BLUE_AGENT   Blue agent strategy (default BlueRemove)
    CYBORGVIZ_LOG_LEVEL    Logging level (default INFO)
    CYBORGVIZ_LOG_FILE     Optional log file path
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Mapping
import logging
import os


DEFAULT_BASE_URL = "http://localhost:8000"
DEFAULT_TIMEOUT = 10.0
DEFAULT_MAX_STEPS = 10
DEFAULT_RED_AGENT = "B_lineAgent"
DEFAULT_BLUE_AGENT = "BlueRemove"
DEFAULT_LOG_LEVEL = "INFO"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


@dataclass(frozen=True)
class ClientConfig:
    """Settings for one client instance."""
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    max_steps: int = DEFAULT_MAX_STEPS
    red_agent: str = DEFAULT_RED_AGENT
    blue_agent: str = DEFAULT_BLUE_AGENT
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: str | None = None

    def __post_init__(self):
        if not self.base_url:
            raise ValueError("base_url must not be empty")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.max_steps < 1:
            raise ValueError(f"max_steps must be at least 1, got {self.max_steps}")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"unknown log level: {self.log_level!r}")

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> ClientConfig:
        """Build a config from environment variables."""
        env = os.environ if env is None else env
        return cls(
            base_url=env.get("CYBORGVIZ_BASE_URL", DEFAULT_BASE_URL),
            timeout=_parse_number(env, "CYBORGVIZ_TIMEOUT", DEFAULT_TIMEOUT, float),
            max_steps=_parse_number(env, "CYBORGVIZ_MAX_STEPS", DEFAULT_MAX_STEPS, int),
            red_agent=env.get("CYBORGVIZ_RED_AGENT", DEFAULT_RED_AGENT),
            blue_agent=env.get("CYBORGVIZ_BLUE_AGENT", DEFAULT_BLUE_AGENT),
            log_level=env.get("CYBORGVIZ_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
            log_file=env.get("CYBORGVIZ_LOG_FILE") or None,
        )


def _parse_number(env: Mapping[str, str], name: str, default, cast):
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ValueError(f"{name} must be a {cast.__name__}, got {raw!r}") from None


def configure_logging(level: str = DEFAULT_LOG_LEVEL, log_file: str | None = None) -> None:
    """Send log records to stderr and, optionally, to a file."""
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, handlers=handlers, force=True)
