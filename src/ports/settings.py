"""Settings port definition (DTO)."""

from dataclasses import dataclass
from typing import Any

__all__ = ["SettingsPort"]


@dataclass
class SettingsPort:
    """Runtime settings for the sender.

    Attributes:
        api_base_url: Base URL every endpoint is appended to.
        endpoint: Endpoint path segment payloads are posted to.
        payloads: JSON values to send, in order.
    """

    api_base_url: str
    endpoint: str
    payloads: list[Any]
