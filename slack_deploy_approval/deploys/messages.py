"""Block Kit builders for the deploy prompts and channel announcements."""

from __future__ import annotations

from typing import Any, Dict, List

from .catalog import VersionCatalog
from .state import CONFIRM_DEPLOYMENT_BLOCK_ID, DENY_VALUE, SELECT_VERSION_BLOCK_ID

FALLBACK_TEXT = "This client is not supported."
VERSION_SELECT_ACTION_ID = "deploy_version_select"
CONFIRM_ACTION_ID = "deploy_confirm"
DENY_ACTION_ID = "deploy_deny"


def _section(text: str) -> Dict[str, Any]:
    return {"type": "section", "text": {"type": "mrkdwn", "text": text}}


def _plain(text: str) -> Dict[str, Any]:
    return {"type": "plain_text", "text": text, "emoji": True}


def build_version_menu(catalog: VersionCatalog) -> Dict[str, Any]:
    """Build the ephemeral prompt asking which version to deploy."""

    options: List[Dict[str, Any]] = [
        {"text": _plain(option.display_label), "value": option.identifier} for option in catalog
    ]
    blocks: List[Dict[str, Any]] = [
        _section("Please select *version*."),
        {
            "type": "actions",
            "block_id": SELECT_VERSION_BLOCK_ID,
            "elements": [
                {
                    "type": "static_select",
                    "action_id": VERSION_SELECT_ACTION_ID,
                    "placeholder": _plain("Select version"),
                    "options": options,
                }
            ],
        },
    ]
    return {"text": FALLBACK_TEXT, "blocks": blocks}


def build_confirmation_prompt(version: str) -> Dict[str, Any]:
    """Build the prompt asking the user to confirm deploying *version*."""

    blocks: List[Dict[str, Any]] = [
        _section(f"Could I deploy `{version}`?"),
        {
            "type": "actions",
            "block_id": CONFIRM_DEPLOYMENT_BLOCK_ID,
            "elements": [
                {
                    "type": "button",
                    "text": _plain("Do it"),
                    "style": "primary",
                    "action_id": CONFIRM_ACTION_ID,
                    "value": version,
                },
                {
                    "type": "button",
                    "text": _plain("Stop"),
                    "style": "danger",
                    "action_id": DENY_ACTION_ID,
                    "value": DENY_VALUE,
                },
            ],
        },
    ]
    return {"text": FALLBACK_TEXT, "blocks": blocks}


def deployment_started_text(user_id: str, version: str) -> str:
    return f"<@{user_id}> OK, I will deploy `{version}`."


def deployment_completed_text(version: str) -> str:
    return f"`{version}` deployment completed!"
