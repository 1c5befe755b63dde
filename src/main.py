"""Application entrypoint: replay a payload file to the local API."""

import asyncio
import logging

from src.adapters.driven.config.settings import load_settings
from src.adapters.driven.http.client import HttpClient
from src.adapters.driven.logging.logging_config import configure_logs
from src.core.sender import Sender, SerializationError
from src.ports.settings import SettingsPort

__all__ = ["main", "send_all"]

logger = logging.getLogger(__name__)


async def main() -> None:
    """Send every configured payload to the configured endpoint.

    Startup sequence:
    1. Configure logging.
    2. Load and validate configuration.
    3. Open the HTTP session and post each payload, fire-and-forget.
    4. Wait for in-flight deliveries, then close the session.
    """
    configure_logs()
    logger.info("Starting sender...")

    try:
        config = load_settings()
    except (RuntimeError, ValueError) as exc:
        logger.error(
            "Configuration error: %s\n"
            "Hint: check API_ENDPOINT, PAYLOAD_FILE_PATH, API_BASE_URL "
            "and that the payload file exists and is a JSON array.",
            exc,
        )
        return

    settings_port = SettingsPort(
        api_base_url=config.api_base_url,
        endpoint=config.endpoint,
        payloads=config.payloads,
    )

    async with HttpClient() as http:
        sender = Sender(request_fn=http.post, base_url=settings_port.api_base_url)
        async with sender:
            sent = send_all(sender, settings_port)

    logger.info(f"Sender stopped after {sent}/{len(settings_port.payloads)} payloads.")


def send_all(sender: Sender, settings_port: SettingsPort) -> int:
    """Queue every payload; payloads that fail to serialize are skipped.

    Returns:
        Number of payloads handed to the sender.
    """
    sent = 0
    for index, payload in enumerate(settings_port.payloads):
        try:
            sender.send(settings_port.endpoint, payload)
        except SerializationError as e:
            logger.error(f"Skipping payload #{index}: {e}")
            continue
        sent += 1
    return sent


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Shutdown requested by user (Ctrl+C).")
