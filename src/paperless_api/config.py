"""
Configuration management.

The client needs three settings: the API root URL, a token and a request
timeout. They are read from a YAML file and can be overridden from the
environment:
- PAPERLESS_URL
- PAPERLESS_TOKEN
- PAPERLESS_TIMEOUT (seconds)
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000/api/"
DEFAULT_TIMEOUT = 30


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    pass


@dataclass
class PaperlessConfig:
    """Paperless-ngx connection settings."""

    # Root of the REST API, e.g. https://paperless.example.com/api/
    base_url: str = DEFAULT_BASE_URL
    token: str = ""
    timeout: int = DEFAULT_TIMEOUT

    def validate(self) -> list[str]:
        """Validate configuration completeness and consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors: list[str] = []

        if not self.base_url:
            errors.append("paperless.base_url is required")
        elif not self.base_url.startswith(("http://", "https://")):
            errors.append("paperless.base_url must be an http(s) URL")
        if not self.token:
            errors.append("paperless.token is required")
        if self.timeout <= 0:
            errors.append("paperless.timeout must be positive")

        return errors


def load_config(config_path: Path) -> PaperlessConfig:
    """
    Load configuration from YAML file.

    A missing file is not an error; defaults and environment variables are
    used instead.
    """
    if config_path.exists():
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    else:
        logger.debug(f"Config file {config_path} not found, using defaults")
        data = {}

    paperless_data = data.get("paperless", {}) or {}

    timeout = paperless_data.get("timeout", DEFAULT_TIMEOUT)
    timeout_env = os.environ.get("PAPERLESS_TIMEOUT", "")
    if timeout_env:
        try:
            timeout = int(timeout_env)
        except ValueError:
            logger.warning(f"Ignoring invalid PAPERLESS_TIMEOUT={timeout_env!r}")

    return PaperlessConfig(
        base_url=os.environ.get("PAPERLESS_URL", paperless_data.get("base_url", DEFAULT_BASE_URL)),
        token=os.environ.get("PAPERLESS_TOKEN", paperless_data.get("token", "")),
        timeout=int(timeout),
    )
