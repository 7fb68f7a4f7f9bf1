"""Composition of the suggestion Service."""

from typing import Any

from suggestion_composer.composer.labels import deployment_name, identity_labels
from suggestion_composer.composer.ownership import OwnershipBinder
from suggestion_composer.config import ComposerSettings
from suggestion_composer.core.models import SuggestionRequest


class ServiceComposer:
    """Builds the cluster-internal Service in front of the suggestion pods."""

    def __init__(self, binder: OwnershipBinder, settings: ComposerSettings) -> None:
        self.binder = binder
        self.settings = settings

    def compose(self, request: SuggestionRequest) -> dict[str, Any]:
        """Compose the desired ClusterIP Service for `request`.

        Raises:
            OwnershipBindError: If the owner reference cannot be attached.
        """
        service = {
            "apiVersion": "v1",
            "kind": "Service",
            "metadata": {
                "name": deployment_name(request),
                "namespace": request.namespace,
            },
            "spec": {
                "selector": identity_labels(request),
                "ports": [{"name": self.settings.port_name, "port": self.settings.port}],
                "type": "ClusterIP",
            },
        }
        return self.binder.bind(request, service)
