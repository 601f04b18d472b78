import os

from pydantic import BaseModel


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    APP_VERSION: str = os.getenv("APP_VERSION", "0.1.0")

    # Tag put on every emitted diagnostic
    DIAGNOSTIC_SOURCE: str = os.getenv("DIAGNOSTIC_SOURCE", "mago")

    # Echo captured tool output to the log at DEBUG level
    LOG_RAW_OUTPUT: bool = _env_flag("LOG_RAW_OUTPUT", "true")

    # Captured output above this size is rejected before parsing
    MAX_OUTPUT_CHARS: int = int(os.getenv("MAX_OUTPUT_CHARS", "5000000"))


settings = Settings()
