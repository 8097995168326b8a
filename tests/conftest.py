"""Shared fixtures and Slack test doubles."""

from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:  # pragma: no cover - import-time guard
    sys.path.insert(0, str(ROOT))

from slack_deploy_approval import config  # noqa: E402
from slack_deploy_approval.deploys import build_catalog  # noqa: E402
from slack_deploy_approval.events import BlockAction, InteractionEvent, MentionEvent  # noqa: E402

RESPONSE_URL = "https://hooks.slack.com/actions/T1/123/abc"


class RecordingMessenger:
    """Stands in for SlackMessenger and records every outbound call."""

    def __init__(self, fail_on: set[str] | None = None, error: Exception | None = None):
        self.calls = []
        self._fail_on = fail_on or set()
        self._error = error

    def _record(self, name, payload):
        self.calls.append((name, payload))
        if name in self._fail_on:
            raise self._error

    def post_ephemeral(self, *, channel, user, text, blocks):
        self._record("ephemeral", {"channel": channel, "user": user, "text": text, "blocks": list(blocks)})

    def post_message(self, *, channel, text):
        self._record("message", {"channel": channel, "text": text})

    def replace_original(self, response_url, *, text, blocks):
        self._record("replace", {"response_url": response_url, "text": text, "blocks": list(blocks)})

    def delete_original(self, response_url):
        self._record("delete", {"response_url": response_url})

    def names(self):
        return [name for name, _ in self.calls]


class RecordingExecutor:
    def __init__(self, error: Exception | None = None):
        self.versions = []
        self._error = error

    def execute(self, version):
        self.versions.append(version)
        if self._error is not None:
            raise self._error


class RecordingScheduler:
    """Collects scheduled work so tests decide when detached tasks run."""

    def __init__(self):
        self.scheduled = []

    def __call__(self, func, *args, **kwargs):
        self.scheduled.append((func, args, kwargs))

    def run_all(self):
        for func, args, kwargs in self.scheduled:
            func(*args, **kwargs)


def make_interaction(block_id, *, value=None, selected_value=None, actions=None):
    if actions is None:
        actions = (BlockAction(block_id=block_id, value=value, selected_value=selected_value),)
    return InteractionEvent(
        type="block_actions",
        actions=tuple(actions),
        response_url=RESPONSE_URL,
        channel_id="C123",
        user_id="U42",
    )


def make_mention(text):
    return MentionEvent(channel_id="C123", user_id="U42", text=text)


@pytest.fixture
def messenger():
    return RecordingMessenger()


@pytest.fixture
def executor():
    return RecordingExecutor()


@pytest.fixture
def scheduler():
    return RecordingScheduler()


@pytest.fixture
def catalog():
    return build_catalog(["v1.0.0", "v1.1.0", "v1.1.1"])


@pytest.fixture
def settings_env(monkeypatch):
    monkeypatch.setenv("SLACK_BOT_TOKEN", "token")
    monkeypatch.setenv("SLACK_SIGNING_SECRET", "secret")
    for var in ("DEPLOY_VERSIONS", "DEPLOY_DURATION_SECONDS", "PORT", "LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    config.get_settings.cache_clear()
    yield
    config.get_settings.cache_clear()
