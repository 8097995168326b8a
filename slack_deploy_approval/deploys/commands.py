"""Routing of bot mentions to deploy commands."""

from __future__ import annotations

from typing import Callable, Dict

import structlog

from slack_deploy_approval.errors import BadRequest
from slack_deploy_approval.events import MentionEvent
from slack_deploy_approval.slack_client import SlackMessenger

from .catalog import VersionCatalog
from .messages import build_version_menu
from .state import AwaitingVersion, WorkflowStage

DEPLOY_COMMAND = "deploy"


def parse_command(text: str) -> str:
    """Return the command word following the bot mention in *text*."""

    tokens = (text or "").split()
    if len(tokens) < 2:
        raise BadRequest("Mention does not include a command.")
    return tokens[1]


def present_version_menu(
    event: MentionEvent, *, messenger: SlackMessenger, catalog: VersionCatalog
) -> AwaitingVersion:
    message = build_version_menu(catalog)
    messenger.post_ephemeral(
        channel=event.channel_id,
        user=event.user_id,
        text=message["text"],
        blocks=message["blocks"],
    )
    structlog.get_logger().info(
        "version_menu_sent",
        channel=event.channel_id,
        user_id=event.user_id,
        versions=[option.identifier for option in catalog],
    )
    return AwaitingVersion()


COMMAND_HANDLERS: Dict[str, Callable[..., WorkflowStage]] = {
    DEPLOY_COMMAND: present_version_menu,
}


def route_mention(
    event: MentionEvent, *, messenger: SlackMessenger, catalog: VersionCatalog
) -> WorkflowStage | None:
    """Dispatch a mention to its command handler and return the stage it opens.

    Unknown commands do nothing and return ``None``.
    """

    command = parse_command(event.text)
    log = structlog.get_logger().bind(command=command, channel=event.channel_id, user_id=event.user_id)

    handler = COMMAND_HANDLERS.get(command)
    if handler is None:
        log.info("command_ignored")
        return None

    log.info("command_received")
    return handler(event, messenger=messenger, catalog=catalog)
