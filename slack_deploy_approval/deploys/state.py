"""Stages of the deploy conversation.

Nothing here is stored: each Slack callback carries enough data (the block
it came from and the value it holds) to tell which stage it moves to.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from slack_deploy_approval.events import InteractionEvent

from .catalog import is_version_value

SELECT_VERSION_BLOCK_ID = "select-version"
CONFIRM_DEPLOYMENT_BLOCK_ID = "confirm-deployment"
DENY_VALUE = "deny"


@dataclass(frozen=True)
class AwaitingVersion:
    pass


@dataclass(frozen=True)
class AwaitingConfirmation:
    version: str


@dataclass(frozen=True)
class Executing:
    version: str


@dataclass(frozen=True)
class Cancelled:
    value: str | None = None


WorkflowStage = Union[AwaitingVersion, AwaitingConfirmation, Executing, Cancelled]


def resolve_stage(event: InteractionEvent) -> WorkflowStage | None:
    """Return the stage an interaction moves the conversation to.

    ``None`` means the interaction came from a block this workflow does not own.
    """

    block_id = event.block_id
    if block_id == SELECT_VERSION_BLOCK_ID:
        version = event.selected_value
        if not version:
            return None
        return AwaitingConfirmation(version=version)

    if block_id == CONFIRM_DEPLOYMENT_BLOCK_ID:
        value = event.action_value
        if is_version_value(value):
            return Executing(version=value)
        return Cancelled(value=value)

    return None
