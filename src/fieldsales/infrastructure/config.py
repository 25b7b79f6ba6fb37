"""Runtime settings read from the environment.

Only the composition root and the CLI read settings; the domain never
does.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from fieldsales.domain.model.batch import NEAR_EXPIRY_DAYS
from fieldsales.domain.model.value_objects import DEFAULT_CURRENCY

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = _DEFAULT_DATA_DIR
    log_level: str = "WARNING"
    log_file: Path | None = None
    currency: str = DEFAULT_CURRENCY
    near_expiry_days: int = NEAR_EXPIRY_DAYS


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ

    log_file = env.get("FIELDSALES_LOG_FILE")
    try:
        near_expiry_days = int(env.get("FIELDSALES_NEAR_EXPIRY_DAYS", NEAR_EXPIRY_DAYS))
    except ValueError as exc:
        raise ValueError(
            f"FIELDSALES_NEAR_EXPIRY_DAYS must be an integer, "
            f"got {env['FIELDSALES_NEAR_EXPIRY_DAYS']!r}"
        ) from exc

    return Settings(
        data_dir=Path(env.get("FIELDSALES_DATA_DIR", _DEFAULT_DATA_DIR)),
        log_level=env.get("FIELDSALES_LOG_LEVEL", "WARNING").upper(),
        log_file=Path(log_file) if log_file else None,
        currency=env.get("FIELDSALES_CURRENCY", DEFAULT_CURRENCY),
        near_expiry_days=near_expiry_days,
    )
