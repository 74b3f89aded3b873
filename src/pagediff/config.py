"""Environment based configuration.

Values come from the process environment, optionally seeded from a ``.env``
file in the working directory:

``PAGEDIFF_PRESET``
    preset name (``strict``, ``balanced`` or ``loose``)
``PAGEDIFF_CELL_SIZE``, ``PAGEDIFF_PIXEL_THRESHOLD``, ``PAGEDIFF_CELL_THRESHOLD``
    override the preset's differ parameters
``PAGEDIFF_WORKERS``
    threads used to scan cell rows
``PAGEDIFF_LOG_LEVEL``
    logging level name for the command line tool
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import dotenv_values, find_dotenv

from .errors import InvalidInput
from .presets import DiffParams, RenderStyle, get_preset

ENV_PREFIX = "PAGEDIFF_"


@dataclass(frozen=True)
class Settings:
    preset: str = "balanced"
    params: DiffParams = DiffParams()
    style: RenderStyle = RenderStyle()
    workers: int = 1
    log_level: str = "WARNING"


def load_settings(environ: Optional[Mapping[str, str]] = None, *, use_dotenv: bool = True) -> Settings:
    """Build :class:`Settings` from ``environ``.

    Without an explicit mapping the process environment is used, merged over
    the values of a ``.env`` file found from the working directory upwards.
    """

    if environ is None:
        environ = dict(os.environ)
        if use_dotenv:
            dotenv_path = find_dotenv(usecwd=True)
            if dotenv_path:
                # real environment variables win over the file
                environ = {**dotenv_values(dotenv_path), **environ}

    preset_name = environ.get(ENV_PREFIX + "PRESET") or "balanced"
    try:
        preset = get_preset(preset_name)
    except KeyError as exc:
        raise InvalidInput(str(exc.args[0])) from exc

    overrides = {}
    for field_name, key in (
        ("cell_size", "CELL_SIZE"),
        ("pixel_threshold", "PIXEL_THRESHOLD"),
        ("cell_changed_threshold", "CELL_THRESHOLD"),
    ):
        value = _get_int(environ, key)
        if value is not None:
            overrides[field_name] = value

    workers = _get_int(environ, "WORKERS")
    if workers is not None and workers < 1:
        raise InvalidInput(f"{ENV_PREFIX}WORKERS must be at least 1, got {workers}")

    log_level = (environ.get(ENV_PREFIX + "LOG_LEVEL") or "WARNING").strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise InvalidInput(f"{ENV_PREFIX}LOG_LEVEL must be a logging level name, got {log_level!r}")

    return Settings(
        preset=preset.name,
        params=preset.params.copy(**overrides),
        style=preset.style,
        workers=workers or 1,
        log_level=log_level,
    )


def _get_int(environ: Mapping[str, str], key: str) -> Optional[int]:
    raw = environ.get(ENV_PREFIX + key)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise InvalidInput(f"{ENV_PREFIX}{key} must be an integer, got {raw!r}") from exc
