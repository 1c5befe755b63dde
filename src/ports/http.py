"""HTTP port definition (DTO)."""

from dataclasses import dataclass, field

__all__ = ["HttpPort"]


@dataclass(frozen=True)
class HttpPort:
    """Serialized POST request handed from the sender to the transport.

    Attributes:
        url: Full target URL (base URL, slash and endpoint).
        body: JSON text sent as request body.
        headers: Request headers (content type and length).
    """

    url: str
    body: str
    headers: dict[str, str] = field(default_factory=dict)
