"""Application entry point for the Slack deploy approval bot."""

from __future__ import annotations

from functools import partial, wraps
from importlib.metadata import PackageNotFoundError, version as package_version
from uuid import uuid4

from flask import Flask, Response, g, jsonify, request
from werkzeug.exceptions import HTTPException

import structlog
from structlog.contextvars import bind_contextvars, unbind_contextvars

from slack_deploy_approval.background import run_async
from slack_deploy_approval.config import AppSettings, get_settings, load_settings
from slack_deploy_approval.deploys import (
    SimulatedDeploymentExecutor,
    build_catalog,
    route_interaction,
    route_mention,
)
from slack_deploy_approval.errors import DeployApprovalError
from slack_deploy_approval.events import (
    InteractionEvent,
    MentionEvent,
    URLChallenge,
    decode_event_body,
    decode_interaction_body,
)
from slack_deploy_approval.logging_config import configure_logging
from slack_deploy_approval.security import (
    SLACK_SIGNATURE_HEADER,
    SLACK_TIMESTAMP_HEADER,
    verify_slack_request,
)
from slack_deploy_approval.slack_client import SlackMessenger

SLACK_RETRY_NUM_HEADER = "X-Slack-Retry-Num"
SLACK_RETRY_REASON_HEADER = "X-Slack-Retry-Reason"
DISTRIBUTION_NAME = "slack-deploy-approval"


def _register_error_handlers(flask_app: Flask) -> None:
    """Map service errors to their status codes and attach a trace identifier."""

    @flask_app.errorhandler(DeployApprovalError)
    def handle_deploy_error(error: DeployApprovalError):
        trace_id = g.get("trace_id") or str(uuid4())
        structlog.get_logger().warning(
            "request_failed",
            error=error.error_code,
            detail=str(error),
            status_code=error.status_code,
            trace_id=trace_id,
        )
        response = jsonify({"error": error.error_code, "trace_id": trace_id})
        response.status_code = error.status_code
        return response

    @flask_app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):  # type: ignore[override]
        if isinstance(error, HTTPException):
            return error
        trace_id = str(uuid4())
        flask_app.logger.exception(
            "Unhandled application error", extra={"trace_id": trace_id}, exc_info=error
        )
        response = jsonify({"error": "internal_server_error", "trace_id": trace_id})
        response.status_code = 500
        return response


def _slack_signature_required(settings: AppSettings):
    """Verify the Slack signature before the view reads the (cached) body."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            trace_id = str(uuid4())
            g.trace_id = trace_id
            bind_contextvars(trace_id=trace_id)
            try:
                verify_slack_request(
                    signing_secret=settings.signing_secret,
                    timestamp=request.headers.get(SLACK_TIMESTAMP_HEADER),
                    signature=request.headers.get(SLACK_SIGNATURE_HEADER),
                    body=request.get_data(cache=True),
                )
                retry_num = request.headers.get(SLACK_RETRY_NUM_HEADER)
                if retry_num:
                    structlog.get_logger().info(
                        "slack_retry_received",
                        path=request.path,
                        retry_num=retry_num,
                        retry_reason=request.headers.get(SLACK_RETRY_REASON_HEADER),
                    )
                return view(*args, **kwargs)
            finally:
                unbind_contextvars("trace_id")

        return wrapper

    return decorator


_LOGGING_CONFIGURED = False


def _load_version() -> str:
    try:
        return package_version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return "unknown"


def create_app() -> Flask:
    """Create and configure the Flask application."""

    global _LOGGING_CONFIGURED
    settings = get_settings()
    if not _LOGGING_CONFIGURED:
        configure_logging(settings.log_level)
        _LOGGING_CONFIGURED = True

    messenger = SlackMessenger(token=settings.bot_token)
    catalog = build_catalog(settings.deploy_versions)
    executor = SimulatedDeploymentExecutor(duration_seconds=settings.deploy_duration_seconds)

    flask_app = Flask(__name__)
    flask_app.config["APP_VERSION"] = _load_version()
    flask_app.logger.setLevel(settings.log_level)
    _register_error_handlers(flask_app)

    signed = _slack_signature_required(settings)

    @flask_app.route("/slack/events", methods=["POST"])
    @signed
    def slack_events():
        event = decode_event_body(request.get_data(cache=True))
        log = structlog.get_logger()

        if isinstance(event, URLChallenge):
            log.info("url_verification_received")
            return Response(event.token, status=200, mimetype="text/plain")

        if isinstance(event, MentionEvent):
            log.info("mention_received", channel=event.channel_id, user_id=event.user_id)
            route_mention(event, messenger=messenger, catalog=catalog)
        else:
            log.debug("event_ignored")

        return "", 200

    @flask_app.route("/slack/actions", methods=["POST"])
    @signed
    def slack_actions():
        event = decode_interaction_body(request.get_data(cache=True))

        if isinstance(event, InteractionEvent):
            structlog.get_logger().info(
                "interaction_received",
                block_id=event.block_id,
                channel=event.channel_id,
                user_id=event.user_id,
            )
            route_interaction(
                event,
                messenger=messenger,
                executor=executor,
                schedule=partial(run_async, trace_id=g.trace_id),
            )
        else:
            structlog.get_logger().debug("interaction_ignored")

        return "", 200

    @flask_app.route("/healthz", methods=["GET"])
    def healthz():
        health: dict[str, object] = {"ok": True}
        health["version"] = flask_app.config.get("APP_VERSION", "unknown")
        try:
            load_settings()
            health["config"] = "valid"
        except RuntimeError as exc:
            health["config"] = "invalid"
            health["config_error"] = str(exc)
            health["ok"] = False

        status = 200 if health["ok"] else 503
        return jsonify(health), status

    return flask_app


if __name__ == "__main__":  # pragma: no cover - manual execution helper
    application = create_app()
    application.run(host="0.0.0.0", port=get_settings().port)
