"""Routing of block actions through the confirm-and-deploy steps."""

from __future__ import annotations

from typing import Any, Callable

import structlog

from slack_deploy_approval.background import run_async
from slack_deploy_approval.errors import BadRequest
from slack_deploy_approval.events import InteractionEvent
from slack_deploy_approval.slack_client import SlackMessenger

from .executor import DeploymentExecutor, DeploymentRequest, run_deployment
from .messages import build_confirmation_prompt
from .state import AwaitingConfirmation, Cancelled, Executing, WorkflowStage, resolve_stage

Scheduler = Callable[..., Any]


def present_confirmation(event: InteractionEvent, stage: AwaitingConfirmation, *, messenger: SlackMessenger) -> None:
    """Swap the version menu for a confirm/deny prompt about *stage.version*."""

    message = build_confirmation_prompt(stage.version)
    messenger.replace_original(event.response_url, text=message["text"], blocks=message["blocks"])
    structlog.get_logger().info("confirmation_sent", version=stage.version, user_id=event.user_id)


def launch_deployment(
    event: InteractionEvent,
    stage: Executing,
    *,
    messenger: SlackMessenger,
    executor: DeploymentExecutor,
    schedule: Scheduler,
) -> None:
    request = DeploymentRequest(
        version=stage.version,
        requesting_user_id=event.user_id,
        channel_id=event.channel_id,
    )
    schedule(run_deployment, request, messenger=messenger, executor=executor)
    structlog.get_logger().info("deployment_scheduled", version=stage.version, user_id=event.user_id)


def route_interaction(
    event: InteractionEvent,
    *,
    messenger: SlackMessenger,
    executor: DeploymentExecutor,
    schedule: Scheduler = run_async,
) -> WorkflowStage | None:
    """Handle one ``block_actions`` callback and return the stage it moved to.

    Callbacks from blocks this workflow does not own return ``None``.
    """

    if not event.actions:
        raise BadRequest("Interaction carries no actions.")

    log = structlog.get_logger().bind(block_id=event.block_id, user_id=event.user_id)
    stage = resolve_stage(event)

    if isinstance(stage, AwaitingConfirmation):
        present_confirmation(event, stage, messenger=messenger)
        return stage

    if isinstance(stage, Executing):
        launch_deployment(event, stage, messenger=messenger, executor=executor, schedule=schedule)
        messenger.delete_original(event.response_url)
        return stage

    if isinstance(stage, Cancelled):
        log.info("deployment_cancelled", value=stage.value)
        messenger.delete_original(event.response_url)
        return stage

    log.info("interaction_ignored")
    return None
