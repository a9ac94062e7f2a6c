"""Pick the .env files the settings classes read.

    gallery/env_files/.env_base      shared defaults, always loaded first
    gallery/env_files/.env_{ENV}     per-environment values, loaded second

``ENV`` selects the environment. Unknown values fall back to ``local``.
"""

import os
from pathlib import Path

from gallery.core.enums import Environment

__all__ = ["ENV_FILES_DIR", "get_current_environment", "get_env_file", "get_env_files"]

ENV_FILES_DIR = Path(__file__).parent.parent / "env_files"
_BASE_FILE = ".env_base"


def get_current_environment() -> Environment:
    """Environment named by ``ENV`` (defaults to LOCAL)."""
    try:
        return Environment(os.getenv("ENV", Environment.LOCAL.value))
    except ValueError:
        return Environment.LOCAL


def get_env_file(override: Environment | None = None) -> str:
    """Absolute path of the per-environment file, e.g. ``.../env_files/.env_local``.

    ``override`` is honoured only while running locally.
    """
    env = get_current_environment()
    if env is Environment.LOCAL and override:
        env = override
    return str(ENV_FILES_DIR / f".env_{env.value}")


def get_env_files(override: Environment | None = None) -> list[str]:
    """Base file first, then the per-environment file."""
    return [str(ENV_FILES_DIR / _BASE_FILE), get_env_file(override)]
