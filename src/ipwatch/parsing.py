"""Extract an address from a lookup endpoint's response body.

Two steps, in priority order:

1. JSON object with a non-empty string ``ip`` field (ipify style).
2. The whole body as text, verbatim (icanhazip style).

The text fallback is not validated as an IP address and is not stripped.
"""

import json

__all__ = ["parse_response"]


def _ip_from_json(body: bytes) -> str | None:
    """Return the ``ip`` field of a JSON object body, if present."""
    try:
        payload = json.loads(body)
    except (ValueError, RecursionError):
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors
        return None

    if not isinstance(payload, dict):
        return None

    ip = payload.get("ip")
    if isinstance(ip, str) and ip:
        return ip
    return None


def parse_response(body: bytes) -> str:
    """Extract the address string from a response body.

    Never raises.

    Args:
        body: Raw response body.

    Returns:
        Address from the JSON envelope, or the body decoded as text.
    """
    ip = _ip_from_json(body)
    if ip is not None:
        return ip
    return body.decode("utf-8", errors="replace")
