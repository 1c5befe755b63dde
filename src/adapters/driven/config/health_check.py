"""Pre-flight check of sender configuration and payload file."""

import logging

from src.adapters.driven.config.settings import Settings, load_settings
from src.adapters.driven.logging.logging_config import configure_logs
from src.core.sender import SerializationError, serialize_body

__all__ = ["find_unsendable_payloads", "main"]

logger = logging.getLogger(__name__)


def find_unsendable_payloads(settings: Settings) -> list[int]:
    """Return indexes of payloads the sender would skip.

    json.load accepts NaN and Infinity, which the sender refuses to emit.
    """
    unsendable = []
    for index, payload in enumerate(settings.payloads):
        try:
            serialize_body(payload)
        except SerializationError as e:
            logger.error(f"Payload #{index} cannot be sent: {e}")
            unsendable.append(index)
    return unsendable


def main() -> int:
    """Validate configuration and every payload before a replay.

    Returns:
        0 if every payload would be sent, 1 otherwise.
    """
    configure_logs()

    try:
        settings = load_settings()
    except (RuntimeError, ValueError) as exc:
        logger.error(f"Sender config check FAILED: {exc}")
        return 1

    target = f"{settings.api_base_url}/{settings.endpoint}"
    unsendable = find_unsendable_payloads(settings)
    if unsendable:
        logger.error(
            f"Sender config check FAILED: {len(unsendable)}/{len(settings.payloads)} "
            f"payloads for {target} cannot be serialized (indexes: {unsendable})"
        )
        return 1

    logger.info(f"Sender config check OK: {len(settings.payloads)} payloads for {target}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
