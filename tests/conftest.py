"""Shared pytest configuration and fixtures.

This module provides the suggestion request, algorithm config, config store
and composer fixtures used across the test suite. Expected objects live in
`expected.py`.
"""

# pylint: disable=redefined-outer-name
# Pytest fixtures intentionally redefine fixture names - this is expected behavior

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import pytest

from suggestion_composer.clients.config_store import StaticConfigStore
from suggestion_composer.composer import Composer, default_registry
from suggestion_composer.config import ComposerSettings
from suggestion_composer.core.models import ResumePolicy, SuggestionRequest

from expected import (
    IMAGE,
    NAMESPACE,
    RESOURCES,
    SERVICE_ACCOUNT,
    SUGGESTION_ALGORITHM,
    SUGGESTION_ANNOTATIONS,
    SUGGESTION_LABELS,
    SUGGESTION_NAME,
)

# =============================================================================
# Inputs
# =============================================================================


@pytest.fixture
def settings() -> ComposerSettings:
    """Default composer settings."""
    return ComposerSettings()


@pytest.fixture
def suggestion() -> SuggestionRequest:
    """A suggestion resuming from a volume, with caller labels and annotations."""
    return SuggestionRequest(
        name=SUGGESTION_NAME,
        namespace=NAMESPACE,
        algorithm_name=SUGGESTION_ALGORITHM,
        labels=dict(SUGGESTION_LABELS),
        annotations=dict(SUGGESTION_ANNOTATIONS),
        requests=1,
        resume_policy=ResumePolicy.FROM_VOLUME,
    )


@pytest.fixture
def suggestion_config() -> dict[str, Any]:
    """Algorithm config as stored in the config map (JSON-compatible)."""
    return {
        "image": IMAGE,
        "imagePullPolicy": "Always",
        "resource": {
            "limits": dict(RESOURCES),
            "requests": dict(RESOURCES),
        },
        "serviceAccountName": SERVICE_ACCOUNT,
        "persistentVolumeClaimSpec": {"resources": {}},
        "persistentVolumeSpec": {},
    }


@pytest.fixture
def make_store() -> Callable[..., StaticConfigStore]:
    """Build a config store holding `{"random": config}` under the suggestion key."""

    def _make(config: dict[str, Any] | None = None, raw: str | None = None) -> StaticConfigStore:
        if raw is None:
            raw = json.dumps({SUGGESTION_ALGORITHM: config})
        return StaticConfigStore({"suggestion": raw})

    return _make


@pytest.fixture
def make_composer(
    make_store: Callable[..., StaticConfigStore],
    settings: ComposerSettings,
) -> Callable[..., Composer]:
    """Build a Composer over a store holding the given algorithm config."""

    def _make(config: dict[str, Any] | None = None, raw: str | None = None, **kwargs: Any) -> Composer:
        kwargs.setdefault("settings", settings)
        kwargs.setdefault("registry", default_registry())
        return Composer.from_store(make_store(config, raw=raw), **kwargs)

    return _make

