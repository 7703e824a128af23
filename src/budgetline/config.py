"""Environment-driven settings.

Every value can also be overridden on the command line; the CLI passes its
options through here so both paths share the same validation.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from budgetline.domain.errors import ValidationError

DB_PATH_ENV = "BUDGETLINE_DB_PATH"
MAX_UPLOAD_BYTES_ENV = "BUDGETLINE_MAX_UPLOAD_BYTES"
MAX_ROWS_ENV = "BUDGETLINE_MAX_ROWS"
LOG_LEVEL_ENV = "BUDGETLINE_LOG_LEVEL"

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024
DEFAULT_MAX_ROWS = 10_000
DEFAULT_LOG_LEVEL = "WARNING"


def _positive_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValidationError(f"{name} must be a positive integer, got '{raw}'")
    if value <= 0:
        raise ValidationError(f"{name} must be a positive integer, got '{raw}'")
    return value


@dataclass(frozen=True)
class ImportLimits:
    """Upper bounds applied to a single import."""

    max_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    max_rows: int = DEFAULT_MAX_ROWS

    @classmethod
    def from_env(
        cls,
        env: Optional[Mapping[str, str]] = None,
        max_bytes: Optional[int] = None,
        max_rows: Optional[int] = None,
    ) -> "ImportLimits":
        """Build limits from the environment, letting explicit values win.

        Raises:
            ValidationError: If a value is not a positive integer
        """
        env = os.environ if env is None else env
        if max_bytes is not None and max_bytes <= 0:
            raise ValidationError("max_bytes must be a positive integer")
        if max_rows is not None and max_rows <= 0:
            raise ValidationError("max_rows must be a positive integer")
        return cls(
            max_bytes=max_bytes
            if max_bytes is not None
            else _positive_int(env, MAX_UPLOAD_BYTES_ENV, DEFAULT_MAX_UPLOAD_BYTES),
            max_rows=max_rows
            if max_rows is not None
            else _positive_int(env, MAX_ROWS_ENV, DEFAULT_MAX_ROWS),
        )


def log_level_from_env(env: Optional[Mapping[str, str]] = None) -> str:
    """Return the configured log level name."""
    env = os.environ if env is None else env
    return (env.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).upper()
