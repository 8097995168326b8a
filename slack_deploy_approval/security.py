"""Utilities for validating Slack request signatures."""

from __future__ import annotations

import hmac
import time
from hashlib import sha256

from .errors import AuthenticationFailed, SignatureHeaderError

SLACK_SIGNATURE_HEADER = "X-Slack-Signature"
SLACK_TIMESTAMP_HEADER = "X-Slack-Request-Timestamp"
VERSION = "v0"
DEFAULT_TOLERANCE = 60 * 5  # five minutes


def compute_signature(signing_secret: str, timestamp: str, body: bytes) -> str:
    """Return Slack-compatible signature for the provided raw body."""

    basestring = f"{VERSION}:{timestamp}:".encode("utf-8") + body
    secret = signing_secret.encode("utf-8")
    digest = hmac.new(secret, basestring, sha256).hexdigest()
    return f"{VERSION}={digest}"


def verify_slack_request(
    *,
    signing_secret: str,
    timestamp: str | None,
    signature: str | None,
    body: bytes,
    tolerance: int = DEFAULT_TOLERANCE,
) -> None:
    """Raise unless *signature* matches the body signed at *timestamp*.

    Unusable timestamps raise :class:`SignatureHeaderError`; a missing or
    mismatching signature raises :class:`AuthenticationFailed`.
    """

    if not timestamp:
        raise SignatureHeaderError("Missing request timestamp header")
    try:
        request_ts = int(timestamp)
    except (TypeError, ValueError) as exc:
        raise SignatureHeaderError(f"Invalid request timestamp {timestamp!r}") from exc

    current_ts = int(time.time())
    if abs(current_ts - request_ts) > tolerance:
        raise SignatureHeaderError("Request timestamp outside the accepted window")

    if not signature:
        raise AuthenticationFailed("Missing request signature header")

    expected = compute_signature(signing_secret, timestamp, body)
    if not hmac.compare_digest(expected.encode("utf-8"), signature.encode("utf-8")):
        raise AuthenticationFailed("Request signature mismatch")

