# Area: Shared
"""
edugame.config — Engine settings
================================

Runtime knobs for the engine, read from environment variables.
A ``.env`` file in the working directory is honoured through
python-dotenv.

Variables:
    EDUGAME_LOG_LEVEL                 logging level name (INFO)
    EDUGAME_LOG_FILE                  JSON log file path (edugame.log)
    EDUGAME_LIFE_LOSS_GRACE_SECONDS   ticks before a lives-out game ends (1)
    EDUGAME_INFO_POINTS               points for reading an info section (10)
    EDUGAME_DEFAULT_GAME_TYPE         game type used when config is missing (quiz)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

logger = logging.getLogger("edugame.config")

ENV_PREFIX = "EDUGAME_"


@dataclass(frozen=True)
class EngineSettings:
    """Settings shared by every session created with them."""
    log_level: str = "INFO"
    log_file: str = "edugame.log"
    life_loss_grace_seconds: int = 1
    info_points: int = 10
    default_game_type: str = "quiz"


def _read_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(ENV_PREFIX + key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Ignoring non-integer {ENV_PREFIX}{key}={raw!r}")
        return default
    if value < 0:
        logger.warning(f"Ignoring negative {ENV_PREFIX}{key}={value}")
        return default
    return value


def load_settings(
    env: Optional[Mapping[str, str]] = None,
    dotenv: bool = True,
) -> EngineSettings:
    """
    Build EngineSettings from the environment.

    Parameters
    ----------
    env : Mapping[str, str], optional
        Source of variables. Defaults to ``os.environ``.
    dotenv : bool
        Load a ``.env`` file into ``os.environ`` first. Ignored when
        an explicit ``env`` mapping is given.
    """
    if env is None:
        if dotenv:
            load_dotenv()
        env = os.environ

    defaults = EngineSettings()
    return EngineSettings(
        log_level=env.get(ENV_PREFIX + "LOG_LEVEL", defaults.log_level).upper(),
        log_file=env.get(ENV_PREFIX + "LOG_FILE", defaults.log_file),
        life_loss_grace_seconds=_read_int(
            env, "LIFE_LOSS_GRACE_SECONDS", defaults.life_loss_grace_seconds
        ),
        info_points=_read_int(env, "INFO_POINTS", defaults.info_points),
        default_game_type=env.get(
            ENV_PREFIX + "DEFAULT_GAME_TYPE", defaults.default_game_type
        ),
    )
