"""Composition of the suggestion storage claim and backing volume.

Overrides from the algorithm config are merged field by field:

| Field                      | Claim   | Volume  |
|----------------------------|---------|---------|
| storageClassName           | replace | n/a     |
| accessModes                | append  | append  |
| volumeMode                 | replace | replace |
| storage request / capacity | replace | replace |
| volume source              | n/a     | replace |

Appended access modes skip modes the spec already lists, so the default mode
is never duplicated. An empty storage request or capacity map keeps the
default size.

Note:
    Access modes append where every other field replaces. This mirrors the
    behavior existing configs were written against; it may not be intended
    and callers should not build on it.
"""

import copy
from typing import Any

from suggestion_composer.composer.labels import deployment_name, volume_name
from suggestion_composer.composer.ownership import OwnershipBinder
from suggestion_composer.composer.resolver import ConfigResolver
from suggestion_composer.config import ComposerSettings
from suggestion_composer.core.models import SuggestionRequest
from suggestion_composer.core.suggestion_config import (
    PersistentVolumeClaimSpecOverride,
    PersistentVolumeSpecOverride,
)

RESOURCE_STORAGE = "storage"


def append_access_modes(current: list[str], extra: list[str]) -> list[str]:
    """Return `current` followed by each mode of `extra` not already present."""
    modes = list(current)
    for mode in extra:
        if mode not in modes:
            modes.append(mode)
    return modes


def merge_claim_spec(spec: dict[str, Any], override: PersistentVolumeClaimSpecOverride | None) -> dict[str, Any]:
    """Apply a claim override to a default claim spec.

    Returns:
        A new spec; `spec` is left untouched.
    """
    merged = copy.deepcopy(spec)
    if override is None:
        return merged

    if override.storage_class_name is not None:
        merged["storageClassName"] = override.storage_class_name
    if override.access_modes:
        merged["accessModes"] = append_access_modes(merged.get("accessModes", []), override.access_modes)
    if override.volume_mode is not None:
        merged["volumeMode"] = override.volume_mode
    if override.resources.requests:
        merged["resources"] = {"requests": dict(override.resources.requests)}
    return merged


def merge_volume_spec(spec: dict[str, Any], override: PersistentVolumeSpecOverride | None) -> dict[str, Any]:
    """Apply a backing volume override to a default volume spec.

    A supplied volume source replaces the default host path source.

    Returns:
        A new spec; `spec` is left untouched.
    """
    merged = copy.deepcopy(spec)
    if override is None:
        return merged

    if override.volume_mode is not None:
        merged["volumeMode"] = override.volume_mode
    if override.access_modes:
        merged["accessModes"] = append_access_modes(merged.get("accessModes", []), override.access_modes)
    source = override.volume_source
    if source:
        merged.pop("hostPath", None)
        merged.update(copy.deepcopy(source))
    if override.capacity:
        merged["capacity"] = dict(override.capacity)
    return merged


def should_compose_volume(storage_class_name: str | None, settings: ComposerSettings) -> bool:
    """Return True if a backing volume must be composed for a claim.

    Only claims on the platform default storage class get a composed volume;
    any other class is left to its dynamic provisioner.
    """
    return storage_class_name == settings.storage_class_name


class VolumeComposer:
    """Builds the claim and, for the default storage class, its backing volume."""

    def __init__(
        self,
        resolver: ConfigResolver,
        binder: OwnershipBinder,
        settings: ComposerSettings,
    ) -> None:
        self.resolver = resolver
        self.binder = binder
        self.settings = settings

    def compose(self, request: SuggestionRequest) -> tuple[dict[str, Any], dict[str, Any] | None]:
        """Compose the desired claim and optional backing volume for `request`.

        Returns:
            `(claim, volume)`; `volume` is None when the claim uses a custom
            storage class.

        Raises:
            ConfigNotFoundError: If the algorithm has no stored config.
            ConfigParseError: If the stored config is malformed.
            OwnershipBindError: If an owner reference cannot be attached.
        """
        suggestion_config = self.resolver.resolve(request.algorithm_name)

        claim_spec = merge_claim_spec(self.default_claim_spec(), suggestion_config.persistent_volume_claim_spec)
        claim = {
            "apiVersion": "v1",
            "kind": "PersistentVolumeClaim",
            "metadata": {
                "name": deployment_name(request),
                "namespace": request.namespace,
            },
            "spec": claim_spec,
        }
        self.binder.bind(request, claim)

        if not should_compose_volume(claim_spec.get("storageClassName"), self.settings):
            return claim, None

        name = volume_name(request)
        volume = {
            "apiVersion": "v1",
            "kind": "PersistentVolume",
            "metadata": {
                "name": name,
                "labels": {"type": "local"},
            },
            "spec": merge_volume_spec(self.default_volume_spec(name), suggestion_config.persistent_volume_spec),
        }
        self.binder.bind(request, volume)
        return claim, volume

    def default_claim_spec(self) -> dict[str, Any]:
        return {
            "storageClassName": self.settings.storage_class_name,
            "accessModes": [self.settings.volume_access_mode],
            "resources": {"requests": {RESOURCE_STORAGE: self.settings.volume_storage}},
        }

    def default_volume_spec(self, name: str) -> dict[str, Any]:
        return {
            "storageClassName": self.settings.storage_class_name,
            "accessModes": [self.settings.volume_access_mode],
            "hostPath": {"path": self.settings.volume_local_path_prefix + name},
            "capacity": {RESOURCE_STORAGE: self.settings.volume_storage},
        }
