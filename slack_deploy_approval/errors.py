"""Error taxonomy for the deploy approval service."""

from __future__ import annotations


class DeployApprovalError(Exception):
    """Base error carrying the HTTP status reported back to Slack."""

    status_code = 500
    error_code = "internal_server_error"


class AuthenticationFailed(DeployApprovalError):
    """The request signature is missing or does not match."""

    status_code = 400
    error_code = "invalid_signature"


class SignatureHeaderError(DeployApprovalError):
    """The signing headers could not be used to verify the request."""

    status_code = 500
    error_code = "invalid_signature_headers"


class MalformedPayload(DeployApprovalError):
    status_code = 500
    error_code = "malformed_payload"


class BadRequest(DeployApprovalError):
    status_code = 400
    error_code = "bad_request"


class DeliveryFailed(DeployApprovalError):
    """Slack rejected, or could not be reached for, an outbound message."""

    status_code = 500
    error_code = "delivery_failed"
