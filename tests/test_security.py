"""Tests for Slack request signature verification."""

from types import SimpleNamespace

import pytest

from slack_deploy_approval import security
from slack_deploy_approval.errors import AuthenticationFailed, SignatureHeaderError

SECRET = "secret"
TIMESTAMP = "1700000000"
BODY = b'{"type":"event_callback","event":{"type":"app_mention"}}'


@pytest.fixture(autouse=True)
def frozen_clock(monkeypatch):
    monkeypatch.setattr(security, "time", SimpleNamespace(time=lambda: int(TIMESTAMP)))


def _verify(*, body=BODY, signature=None, timestamp=TIMESTAMP):
    if signature is None:
        signature = security.compute_signature(SECRET, timestamp, body)
    security.verify_slack_request(signing_secret=SECRET, timestamp=timestamp, signature=signature, body=body)


def test_compute_signature_matches_slack_format():
    signature = security.compute_signature(SECRET, TIMESTAMP, BODY)

    assert signature.startswith("v0=")
    assert len(signature) == len("v0=") + 64


def test_valid_request_is_accepted():
    _verify()


def test_any_single_byte_body_mutation_is_rejected():
    signature = security.compute_signature(SECRET, TIMESTAMP, BODY)
    for index in range(len(BODY)):
        mutated = bytearray(BODY)
        mutated[index] ^= 0x01
        with pytest.raises(AuthenticationFailed):
            _verify(body=bytes(mutated), signature=signature)


def test_any_single_character_signature_mutation_is_rejected():
    signature = security.compute_signature(SECRET, TIMESTAMP, BODY)
    for index in range(len(signature)):
        replacement = "0" if signature[index] != "0" else "1"
        mutated = signature[:index] + replacement + signature[index + 1 :]
        with pytest.raises(AuthenticationFailed):
            _verify(signature=mutated)


def test_missing_signature_is_authentication_failure():
    with pytest.raises(AuthenticationFailed):
        _verify(signature="")


@pytest.mark.parametrize("timestamp", ["", "not-a-number", "100"])
def test_unusable_timestamp_is_header_error(timestamp):
    signature = security.compute_signature(SECRET, timestamp, BODY)

    with pytest.raises(SignatureHeaderError):
        _verify(signature=signature, timestamp=timestamp)
