"""Static catalog of versions offered in the deploy menu."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

from slack_deploy_approval.config import VERSION_MARKER


@dataclass(frozen=True)
class VersionOption:
    identifier: str
    display_label: str


VersionCatalog = Tuple[VersionOption, ...]


def build_catalog(versions: Iterable[str]) -> VersionCatalog:
    """Return the ordered catalog for *versions*, labelled by their identifiers."""

    return tuple(VersionOption(identifier=version, display_label=version) for version in versions)


def is_version_value(value: str | None) -> bool:
    """Return True when an action value looks like a version rather than a sentinel.

    Only the leading marker is checked, so a sentinel that happens to start
    with the marker would be treated as a version.
    """

    return bool(value) and value.startswith(VERSION_MARKER)
