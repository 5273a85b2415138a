# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Engine settings sourced from the environment.

Values are read from process environment variables, after loading an
optional ``.env`` file from the working directory:

    NETWORTH_MC_WORKERS   worker processes for Monte Carlo batches (default 1)
    NETWORTH_MC_SEED      default random seed (default: unseeded)
    NETWORTH_LOG_LEVEL    structlog filtering level (default WARNING)
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class EngineSettings:
    """Runtime knobs that are not part of a simulation's inputs.

    Attributes:
        mc_workers: Worker processes used by MonteCarloEngine. 1 runs inline.
        mc_seed: Seed used when a run does not supply one. None is unseeded.
        log_level: Name of the minimum log level.
    """
    mc_workers: int = 1
    mc_seed: Optional[int] = None
    log_level: str = "WARNING"


def _to_int(value: Optional[str], default: Optional[int]) -> Optional[int]:
    if value is None or not value.strip():
        return default
    try:
        return int(value.strip())
    except ValueError:
        return default


def load_settings(env_file: Optional[Union[str, Path]] = None) -> EngineSettings:
    """Build EngineSettings from the environment.

    Args:
        env_file: Optional path to a dotenv file. Defaults to ``./.env`` when
                  it exists. Existing environment variables take precedence.

    Returns:
        EngineSettings with malformed values replaced by defaults
    """
    env_path = Path(env_file) if env_file is not None else Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(env_path, override=False)

    workers = _to_int(os.getenv("NETWORTH_MC_WORKERS"), 1)
    if workers is None or workers < 1:
        workers = 1

    level = os.getenv("NETWORTH_LOG_LEVEL", "WARNING").strip().upper()
    if level not in _LOG_LEVELS:
        level = "WARNING"

    return EngineSettings(
        mc_workers=workers,
        mc_seed=_to_int(os.getenv("NETWORTH_MC_SEED"), None),
        log_level=level,
    )
