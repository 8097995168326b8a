"""Decoding of Slack Events API and interactive component payloads."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Union
from urllib.parse import parse_qs

from .errors import MalformedPayload

URL_VERIFICATION = "url_verification"
EVENT_CALLBACK = "event_callback"
APP_MENTION = "app_mention"
BLOCK_ACTIONS = "block_actions"


@dataclass(frozen=True)
class URLChallenge:
    """One-time handshake Slack sends when the events URL is configured."""

    token: str


@dataclass(frozen=True)
class MentionEvent:
    channel_id: str
    user_id: str
    text: str


@dataclass(frozen=True)
class BlockAction:
    block_id: str
    action_id: str | None = None
    value: str | None = None
    selected_value: str | None = None


@dataclass(frozen=True)
class InteractionEvent:
    """A ``block_actions`` callback fired by a menu selection or button press."""

    type: str
    actions: tuple[BlockAction, ...]
    response_url: str
    channel_id: str
    user_id: str

    @property
    def block_id(self) -> str | None:
        return self.actions[0].block_id if self.actions else None

    @property
    def selected_value(self) -> str | None:
        return self.actions[0].selected_value if self.actions else None

    @property
    def action_value(self) -> str | None:
        return self.actions[0].value if self.actions else None


DecodedEvent = Union[URLChallenge, MentionEvent, InteractionEvent]


def _load_object(raw: str | bytes) -> dict[str, Any]:
    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise MalformedPayload("Payload is not valid JSON.") from exc
    if not isinstance(payload, dict):
        raise MalformedPayload("Payload must be a JSON object.")
    return payload


def _require_str(payload: dict[str, Any], key: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str) or not value:
        raise MalformedPayload(f"Payload field '{key}' is missing.")
    return value


def decode_event_body(body: bytes) -> URLChallenge | MentionEvent | None:
    """Decode an Events API body.

    Returns ``None`` for envelopes and inner events the bot does not handle.
    """

    envelope = _load_object(body)
    envelope_type = _require_str(envelope, "type")

    if envelope_type == URL_VERIFICATION:
        return URLChallenge(token=_require_str(envelope, "challenge"))

    if envelope_type != EVENT_CALLBACK:
        return None

    inner = envelope.get("event")
    if not isinstance(inner, dict):
        raise MalformedPayload("Event callback is missing its inner event.")

    if inner.get("type") == APP_MENTION:
        # A blank mention is still a mention; command parsing rejects it.
        text = inner.get("text")
        return MentionEvent(
            channel_id=_require_str(inner, "channel"),
            user_id=_require_str(inner, "user"),
            text=text if isinstance(text, str) else "",
        )
    return None


def _parse_action(raw: Any) -> BlockAction:
    if not isinstance(raw, dict):
        raise MalformedPayload("Block action must be a JSON object.")
    selected = raw.get("selected_option")
    selected_value = selected.get("value") if isinstance(selected, dict) else None
    return BlockAction(
        block_id=raw.get("block_id") or "",
        action_id=raw.get("action_id"),
        value=raw.get("value"),
        selected_value=selected_value,
    )


def decode_interaction_body(body: bytes) -> InteractionEvent | None:
    """Decode a form-encoded interactive components body.

    Returns ``None`` for interaction types other than ``block_actions``.
    """

    try:
        form = parse_qs(body.decode("utf-8"), keep_blank_values=True)
    except UnicodeDecodeError as exc:
        raise MalformedPayload("Interaction body is not valid UTF-8.") from exc

    raw_payload = form.get("payload")
    if not raw_payload:
        raise MalformedPayload("Interaction body has no payload field.")

    payload = _load_object(raw_payload[0])
    if payload.get("type") != BLOCK_ACTIONS:
        return None

    raw_actions = payload.get("actions") or []
    if not isinstance(raw_actions, list):
        raise MalformedPayload("Interaction actions must be a list.")

    channel = payload.get("channel") or {}
    user = payload.get("user") or {}
    return InteractionEvent(
        type=BLOCK_ACTIONS,
        actions=tuple(_parse_action(action) for action in raw_actions),
        response_url=payload.get("response_url") or "",
        channel_id=channel.get("id", "") if isinstance(channel, dict) else "",
        user_id=user.get("id", "") if isinstance(user, dict) else "",
    )
