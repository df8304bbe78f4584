"""Project-level configuration and path helpers."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DATA_DIR = PROJECT_ROOT / "03_data"
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_DB_PATH = DATA_DIR / "chatbot.db"
DEFAULT_LOG_PATH = LOGS_DIR / "chatbot.log"
DEFAULT_MODEL_PATH = DATA_DIR / "model" / "intent_model.joblib"

DEFAULT_ORDER_STATUS_URL = "https://api.delivery.com/orders/{order_id}"
DEFAULT_MODEL_READY_TIMEOUT = 2.0
DEFAULT_RESOLVER_TIMEOUT = 3.0
DEFAULT_RECORD_TIMEOUT = 3.0

DATA_DIR.mkdir(parents=True, exist_ok=True)
LOGS_DIR.mkdir(parents=True, exist_ok=True)


PathLike = Union[str, Path]


def resolve_db_path(env_value: PathLike | None = None) -> PathLike:
    """Resolve DATABASE_URL to an absolute path."""
    if not env_value:
        return DEFAULT_DB_PATH

    if str(env_value) == ":memory:":
        return ":memory:"

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


def resolve_model_path(env_value: PathLike | None = None) -> Path:
    """Resolve MODEL_PATH to an absolute path."""
    if not env_value:
        return DEFAULT_MODEL_PATH

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


@dataclass
class Settings:
    """Runtime settings for the chatbot service."""

    db_path: PathLike = DEFAULT_DB_PATH
    model_path: Path = DEFAULT_MODEL_PATH
    model_ready_timeout: float = DEFAULT_MODEL_READY_TIMEOUT
    order_status_url: str = DEFAULT_ORDER_STATUS_URL
    resolver_timeout: float = DEFAULT_RESOLVER_TIMEOUT
    record_timeout: float = DEFAULT_RECORD_TIMEOUT
    api_host: str = "localhost"
    api_port: int = 3000
    log_level: str = "INFO"
    log_file: str = str(DEFAULT_LOG_PATH)

    def __post_init__(self) -> None:
        if "{order_id}" not in self.order_status_url:
            raise ValueError("ORDER_STATUS_URL must contain an {order_id} placeholder")

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables."""
        return cls(
            db_path=resolve_db_path(os.getenv("DATABASE_URL")),
            model_path=resolve_model_path(os.getenv("MODEL_PATH")),
            model_ready_timeout=_env_float(
                "MODEL_READY_TIMEOUT", DEFAULT_MODEL_READY_TIMEOUT
            ),
            order_status_url=os.getenv("ORDER_STATUS_URL", DEFAULT_ORDER_STATUS_URL),
            resolver_timeout=_env_float("RESOLVER_TIMEOUT", DEFAULT_RESOLVER_TIMEOUT),
            record_timeout=_env_float("RECORD_TIMEOUT", DEFAULT_RECORD_TIMEOUT),
            api_host=os.getenv("API_HOST", "localhost"),
            api_port=int(os.getenv("API_PORT", "3000")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE", str(DEFAULT_LOG_PATH)),
        )
