"""Configuration loading from environment variables and files."""

import json
import logging
import os
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field, HttpUrl, TypeAdapter, field_validator

from src.core.sender import DEFAULT_API_BASE_URL

__all__ = ["Settings", "load_settings"]

load_dotenv()

logger = logging.getLogger(__name__)
_http_url_adapter = TypeAdapter(HttpUrl)


class Settings(BaseModel):
    """Runtime configuration for the sender.

    Attributes:
        api_base_url: Base URL of the local API.
        endpoint: Endpoint path segment payloads are posted to.
        payload_file_path: Path to JSON file with payloads.
        payloads: Payload values (loaded from file).
    """

    api_base_url: str = Field(
        default=DEFAULT_API_BASE_URL, description="Base URL every endpoint is appended to."
    )
    endpoint: str = Field(..., description="Endpoint path segment appended after the base URL.")
    payload_file_path: str = Field(..., description="Path to JSON file containing payloads")
    payloads: list[Any] = Field(
        default_factory=list,
        description="Payloads to send, in order (populated from file).",
    )

    @field_validator("api_base_url")
    @classmethod
    def validate_api_base_url(cls, v: str) -> str:
        """Validate that the base URL is a valid http URL.

        Args:
            v: Base URL to validate.

        Returns:
            The validated URL, as given.

        Raises:
            ValueError: If URL is invalid or not http.
        """
        try:
            url = _http_url_adapter.validate_python(v)
            if url.scheme != "http":
                raise ValueError("Only http:// base URLs allowed")
        except Exception as e:
            raise ValueError(f"Invalid API base URL: {e}") from e
        return v

    def load_payloads(self) -> None:
        """Load and validate payloads from JSON file.

        Raises:
            ValueError: If file not found, invalid JSON, wrong format, or empty.
        """
        try:
            with open(self.payload_file_path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise ValueError(f"Payload file not found: {self.payload_file_path}") from e
        except json.JSONDecodeError as e:
            raise ValueError(f"Payload file contains invalid JSON: {self.payload_file_path}") from e

        if not isinstance(data, list):
            raise ValueError("Payload file must be a JSON array")
        if not data:
            raise ValueError("Payload file is empty")

        self.payloads = data
        logger.debug(f"Loaded {len(data)} payloads from {self.payload_file_path}")


def load_settings() -> Settings:
    """Load and validate settings from environment and files.

    Required environment variables:
    - API_ENDPOINT: Endpoint path segment (may be empty).
    - PAYLOAD_FILE_PATH: Path to JSON file with payloads.

    Optional:
    - API_BASE_URL: Base URL of the API (default http://127.0.0.1:8080).

    Returns:
        Validated Settings object.

    Raises:
        RuntimeError: If required env vars missing.
        ValueError: If configuration is invalid.
    """
    try:
        endpoint = os.environ["API_ENDPOINT"]
        payload_path = os.environ["PAYLOAD_FILE_PATH"]
    except KeyError as e:
        raise RuntimeError(f"Missing required environment variable: {e.args[0]}") from e

    settings = Settings(
        api_base_url=os.getenv("API_BASE_URL", DEFAULT_API_BASE_URL),
        endpoint=endpoint,
        payload_file_path=payload_path,
    )

    # Load and validate payload file
    settings.load_payloads()

    logger.info(
        f"Sender configured: target={settings.api_base_url}/{settings.endpoint}, "
        f"payloads={len(settings.payloads)}"
    )

    return settings
