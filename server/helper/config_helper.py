import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Final, Literal, cast

from dotenv import load_dotenv

type Environment = Literal["development", "production", "test"]

ENVIRONMENTS: Final[tuple[Environment, ...]] = ("development", "production", "test")
VERSION: Final[str] = "1.0.0"


class ConfigError(ValueError): ...


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 5000
    environment: Environment = "development"
    cors_origins: list[str] = field(default_factory=lambda: ["http://localhost:3000"])
    cors_credentials: bool = False
    log_level: str = "INFO"
    demo_user_id: str = "user-123"


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Read settings from the environment (and .env), collecting every problem."""
    if env is None:
        load_dotenv()  # pyright: ignore[reportUnusedCallResult]
        env = os.environ

    errors: list[str] = []

    raw_port = env.get("PORT", "5000")
    try:
        port = int(raw_port)
    except ValueError:
        port = -1
    if not 1 <= port <= 65535:
        errors.append("PORT must be a valid number between 1 and 65535")

    environment = env.get("APP_ENV", "development")
    if environment not in ENVIRONMENTS:
        errors.append(f"APP_ENV must be one of: {', '.join(ENVIRONMENTS)}")

    log_level = env.get("LOG_LEVEL", "INFO").upper()
    if not isinstance(logging.getLevelName(log_level), int):
        errors.append(f"LOG_LEVEL {log_level!r} is not a logging level")

    origins = [
        origin.strip()
        for origin in env.get("CORS_ORIGIN", "http://localhost:3000").split(",")
        if origin.strip()
    ]

    demo_user_id = env.get("DEMO_USER_ID", "user-123").strip()
    if not demo_user_id:
        errors.append("DEMO_USER_ID must not be empty")

    if errors:
        raise ConfigError("Invalid environment configuration: " + "; ".join(errors))

    return Settings(
        host=env.get("HOST", "0.0.0.0"),
        port=port,
        environment=cast(Environment, environment),
        cors_origins=origins,
        cors_credentials=_parse_bool(env.get("CORS_CREDENTIALS", "false")),
        log_level=log_level,
        demo_user_id=demo_user_id,
    )
