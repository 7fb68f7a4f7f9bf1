"""Composers building the desired child objects of a suggestion.

This module provides the `Composer` facade wiring the config resolver, the
ownership binder and the three composers from one config store.
"""

from typing import Any

from suggestion_composer.clients.config_store import ConfigStore
from suggestion_composer.config import ComposerSettings, get_settings
from suggestion_composer.core.models import SuggestionRequest

from .deployment import DeploymentComposer
from .labels import deployment_name, identity_labels, pod_annotations, volume_name
from .ownership import SUGGESTION_OWNER, KindRegistry, OwnershipBinder, default_registry
from .resolver import ConfigResolver
from .service import ServiceComposer
from .volume import VolumeComposer, merge_claim_spec, merge_volume_spec, should_compose_volume


class Composer:
    """Builds every desired child object of a suggestion.

    Example:
        ```python
        from suggestion_composer.clients.config_store import ConfigMapStore
        from suggestion_composer.composer import Composer

        composer = Composer.from_store(ConfigMapStore("katib-config", "kubeflow"))
        deployment = composer.desired_deployment(request)
        claim, volume = composer.desired_volume(request)
        ```
    """

    def __init__(
        self,
        deployment: DeploymentComposer,
        service: ServiceComposer,
        volume: VolumeComposer,
    ) -> None:
        self.deployment = deployment
        self.service = service
        self.volume = volume

    @classmethod
    def from_store(
        cls,
        store: ConfigStore,
        settings: ComposerSettings | None = None,
        registry: KindRegistry | None = None,
    ) -> "Composer":
        """Wire a composer reading configuration from `store`.

        Args:
            store: Source of the raw suggestion configuration.
            settings: Composer settings. If None, uses get_settings().
            registry: Owner kind registry. If None, uses default_registry().
        """
        if settings is None:
            settings = get_settings()
        if registry is None:
            registry = default_registry()

        resolver = ConfigResolver(store, settings)
        binder = OwnershipBinder(registry)
        return cls(
            deployment=DeploymentComposer(resolver, binder, settings),
            service=ServiceComposer(binder, settings),
            volume=VolumeComposer(resolver, binder, settings),
        )

    def desired_deployment(self, request: SuggestionRequest) -> dict[str, Any]:
        return self.deployment.compose(request)

    def desired_service(self, request: SuggestionRequest) -> dict[str, Any]:
        return self.service.compose(request)

    def desired_volume(self, request: SuggestionRequest) -> tuple[dict[str, Any], dict[str, Any] | None]:
        return self.volume.compose(request)


__all__ = [
    "SUGGESTION_OWNER",
    "Composer",
    "ConfigResolver",
    "DeploymentComposer",
    "KindRegistry",
    "OwnershipBinder",
    "ServiceComposer",
    "VolumeComposer",
    "default_registry",
    "deployment_name",
    "identity_labels",
    "merge_claim_spec",
    "merge_volume_spec",
    "pod_annotations",
    "should_compose_volume",
    "volume_name",
]
