from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from dotenv import load_dotenv


DEFAULT_DATA_FILE = "bingo.yaml"
_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    data_path: Path
    secret_key: str
    host: str = "127.0.0.1"
    port: int = 5000
    debug: bool = False


def _normalize_env_value(value: str) -> str:
    v = (value or "").strip()
    if len(v) >= 2 and ((v[0] == v[-1] == '"') or (v[0] == v[-1] == "'")):
        v = v[1:-1].strip()
    return v


def _env(name: str, default: str) -> str:
    return _normalize_env_value(os.getenv(name, "")) or default


def load_settings(env_file: Path | None = None) -> Settings:
    """Read settings from the environment, after loading an optional .env file.

    Variables already set in the environment win over the .env file.
    """
    load_dotenv(dotenv_path=env_file)

    port_raw = _env("BINGO_PORT", "5000")
    try:
        port = int(port_raw)
    except ValueError:
        raise ValueError(f"BINGO_PORT must be a whole number, got {port_raw!r}") from None

    return Settings(
        data_path=Path(_env("BINGO_FILE", DEFAULT_DATA_FILE)),
        secret_key=_env("FLASK_SECRET_KEY", "dev-secret-key"),
        host=_env("BINGO_HOST", "127.0.0.1"),
        port=port,
        debug=_env("BINGO_DEBUG", "").lower() in _TRUTHY,
    )
