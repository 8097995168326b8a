"""Outbound messaging on top of the Slack WebClient and response URLs."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Sequence

from slack_sdk import WebClient
from slack_sdk.errors import SlackClientError
from slack_sdk.webhook import WebhookClient

from .errors import DeliveryFailed


class SlackMessenger:
    """Send, replace and delete Slack messages on behalf of the bot.

    Channel messages go through the Web API; prompt replacement and deletion
    go through the response URL Slack attached to the interaction. Failures
    raise :class:`DeliveryFailed` and are never retried here.
    """

    def __init__(
        self,
        *,
        token: str | None = None,
        client: WebClient | None = None,
        webhook_factory: Callable[[str], WebhookClient] | None = None,
    ) -> None:
        if client is None and token is None:
            raise ValueError("Either an instantiated client or a bot token must be provided.")
        self._client = client or WebClient(token=token)
        self._webhook_factory = webhook_factory or (lambda url: WebhookClient(url))

    def post_ephemeral(
        self,
        *,
        channel: str,
        user: str,
        text: str,
        blocks: Sequence[Mapping[str, Any]],
    ) -> Mapping[str, Any]:
        """Post a message only *user* can see in *channel*."""

        try:
            return self._client.chat_postEphemeral(channel=channel, user=user, text=text, blocks=list(blocks))
        except (SlackClientError, OSError) as exc:
            raise DeliveryFailed(f"chat.postEphemeral failed: {exc}") from exc

    def post_message(self, *, channel: str, text: str) -> Mapping[str, Any]:
        """Post a plain text message visible to the whole channel."""

        try:
            return self._client.chat_postMessage(channel=channel, text=text)
        except (SlackClientError, OSError) as exc:
            raise DeliveryFailed(f"chat.postMessage failed: {exc}") from exc

    def send_to_response_url(self, response_url: str, **options: Any) -> None:
        """Send *options* as a message payload to an interaction's response URL."""

        if not response_url:
            raise DeliveryFailed("Interaction did not include a response URL")
        try:
            response = self._webhook_factory(response_url).send(**options)
        except OSError as exc:
            raise DeliveryFailed(f"response_url request failed: {exc}") from exc
        if response.status_code != 200:
            raise DeliveryFailed(
                f"response_url returned {response.status_code}: {response.body}"
            )

    def replace_original(
        self,
        response_url: str,
        *,
        text: str,
        blocks: Sequence[Mapping[str, Any]],
    ) -> None:
        """Replace the message that produced the interaction in place."""

        self.send_to_response_url(response_url, replace_original=True, text=text, blocks=list(blocks))

    def delete_original(self, response_url: str) -> None:
        """Delete the message that produced the interaction."""

        self.send_to_response_url(response_url, delete_original=True)
