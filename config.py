"""Configuration settings for the Meme Prophet flow engine."""

import logging
import sys
from typing import Optional

import structlog
from dotenv import load_dotenv
from pydantic_settings import BaseSettings
from pydantic import Field

# Load .env into os.environ so litellm picks up provider keys (OPENAI_API_KEY, ...)
load_dotenv()


class Settings(BaseSettings):
    """Global settings for the flow engine.

    Settings can be overridden via environment variables with MEME_PROPHET_ prefix.
    Example: MEME_PROPHET_API_TIMEOUT_SECONDS=30
    """

    # Model config
    default_model: str = Field(
        default="gpt-4o-mini",
        description="LiteLLM model string used when a flow does not pin one"
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Default sampling temperature for flow invocations"
    )
    max_tokens: int = Field(
        default=4096,
        description="Maximum tokens per model call"
    )

    # Boundary call limits
    api_timeout_seconds: float = Field(
        default=60.0,
        gt=0.0,
        description="Timeout for a single model call in seconds"
    )
    api_max_retries: int = Field(
        default=0,
        ge=0,
        description="Retries handed to litellm; the engine itself never retries"
    )
    max_concurrent_invocations: int = Field(
        default=8,
        ge=1,
        description="Maximum outstanding model calls per executor, across all threads"
    )

    # Tier gate
    enforce_tier_gate: bool = Field(
        default=True,
        description="Refuse flows whose feature is locked for the caller's tier"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Log level for the engine loggers"
    )
    log_format: str = Field(
        default="console",
        description="Log renderer: console or json"
    )

    model_config = {
        "env_prefix": "MEME_PROPHET_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",  # ignore extra env vars (e.g. OPENAI_API_KEY) not in schema
    }


def configure_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """Configure structlog for the process.

    Args:
        level: Log level name (defaults to settings.log_level)
        log_format: "json" for machine-readable output, anything else for console
    """
    level = (level or settings.log_level).upper()
    log_format = log_format or settings.log_format

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level, force=True)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if log_format == "json"
            else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


# Create singleton instance
settings = Settings()
