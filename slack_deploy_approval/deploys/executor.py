"""Deployment execution and its detached run."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Protocol

import structlog

from slack_deploy_approval.errors import DeliveryFailed
from slack_deploy_approval.slack_client import SlackMessenger

from .messages import deployment_completed_text, deployment_started_text


@dataclass(frozen=True)
class DeploymentRequest:
    version: str
    requesting_user_id: str
    channel_id: str


class DeploymentExecutor(Protocol):
    def execute(self, version: str) -> None:
        ...


class SimulatedDeploymentExecutor:
    """Stand-in for a real deployment: logs and blocks for a fixed duration."""

    def __init__(self, *, duration_seconds: float = 10.0, sleep=time.sleep) -> None:
        if duration_seconds <= 0:
            raise ValueError("Deployment duration must be greater than zero seconds.")
        self._duration = duration_seconds
        self._sleep = sleep

    def execute(self, version: str) -> None:
        structlog.get_logger().info("deploy", version=version, duration_seconds=self._duration)
        self._sleep(self._duration)


def _announce(messenger: SlackMessenger, request: DeploymentRequest, text: str, log) -> None:
    try:
        messenger.post_message(channel=request.channel_id, text=text)
    except DeliveryFailed as exc:
        log.error("deployment_announcement_failed", error=str(exc))


def run_deployment(
    request: DeploymentRequest,
    *,
    messenger: SlackMessenger,
    executor: DeploymentExecutor,
) -> None:
    """Announce, execute and report one deployment.

    Runs off the request path, so failures can only be logged.
    """

    log = structlog.get_logger().bind(
        version=request.version,
        user_id=request.requesting_user_id,
        channel=request.channel_id,
    )

    _announce(messenger, request, deployment_started_text(request.requesting_user_id, request.version), log)
    log.info("deployment_started")

    try:
        executor.execute(request.version)
    except Exception:
        log.exception("deployment_failed")
        return

    log.info("deployment_completed")
    _announce(messenger, request, deployment_completed_text(request.version), log)
