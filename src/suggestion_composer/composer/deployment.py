"""Composition of the suggestion Deployment."""

from typing import Any

from suggestion_composer.composer.labels import deployment_name, identity_labels, pod_annotations
from suggestion_composer.composer.ownership import OwnershipBinder
from suggestion_composer.composer.resolver import ConfigResolver
from suggestion_composer.config import ComposerSettings
from suggestion_composer.core.models import ResumePolicy, SuggestionRequest
from suggestion_composer.core.suggestion_config import SuggestionConfig


class DeploymentComposer:
    """Builds the Deployment running a suggestion service.

    Example:
        >>> composer = DeploymentComposer(resolver, binder, settings)
        >>> deployment = composer.compose(request)
        >>> deployment["metadata"]["name"]
        'test-suggestion-random'
    """

    def __init__(
        self,
        resolver: ConfigResolver,
        binder: OwnershipBinder,
        settings: ComposerSettings,
    ) -> None:
        self.resolver = resolver
        self.binder = binder
        self.settings = settings

    def compose(self, request: SuggestionRequest) -> dict[str, Any]:
        """Compose the desired Deployment for `request`.

        Raises:
            ConfigNotFoundError: If the algorithm has no stored config.
            ConfigParseError: If the stored config is malformed.
            OwnershipBindError: If the owner reference cannot be attached.
        """
        suggestion_config = self.resolver.resolve(request.algorithm_name)
        selector_labels = identity_labels(request)

        pod_spec: dict[str, Any] = {
            "containers": [self._container(request, suggestion_config)],
        }
        if suggestion_config.service_account_name:
            pod_spec["serviceAccountName"] = suggestion_config.service_account_name
        if request.resume_policy == ResumePolicy.FROM_VOLUME:
            pod_spec["volumes"] = [
                {
                    "name": self.settings.volume_name,
                    "persistentVolumeClaim": {"claimName": deployment_name(request)},
                }
            ]

        deployment = {
            "apiVersion": "apps/v1",
            "kind": "Deployment",
            "metadata": {
                "name": deployment_name(request),
                "namespace": request.namespace,
                "labels": dict(request.labels),
                "annotations": dict(request.annotations),
            },
            "spec": {
                "selector": {"matchLabels": selector_labels},
                "template": {
                    "metadata": {
                        "labels": dict(selector_labels),
                        "annotations": pod_annotations(request, self.settings),
                    },
                    "spec": pod_spec,
                },
            },
        }
        return self.binder.bind(request, deployment)

    def _container(self, request: SuggestionRequest, suggestion_config: SuggestionConfig) -> dict[str, Any]:
        settings = self.settings
        container: dict[str, Any] = {
            "name": settings.container_name,
            "image": suggestion_config.image,
            "imagePullPolicy": suggestion_config.image_pull_policy,
            "ports": [{"name": settings.port_name, "containerPort": settings.port}],
            "resources": {
                "limits": dict(suggestion_config.resource.limits),
                "requests": dict(suggestion_config.resource.requests),
            },
        }

        if settings.enable_grpc_probe:
            container["readinessProbe"] = {
                "exec": {"command": self.health_check_command()},
                "initialDelaySeconds": settings.initial_delay_seconds,
                "periodSeconds": settings.period_for_ready,
            }
            container["livenessProbe"] = {
                "exec": {"command": self.health_check_command()},
                "initialDelaySeconds": settings.initial_delay_seconds,
                "periodSeconds": settings.period_for_live,
                "failureThreshold": settings.failure_threshold,
            }

        if request.resume_policy == ResumePolicy.FROM_VOLUME:
            container["volumeMounts"] = [
                {
                    "name": settings.volume_name,
                    "mountPath": suggestion_config.volume_mount_path or settings.volume_mount_path,
                }
            ]
        return container

    def health_check_command(self) -> list[str]:
        """Exec command probing the suggestion gRPC health endpoint."""
        return [
            self.settings.health_check_probe,
            f"-addr=:{self.settings.port}",
            f"-service={self.settings.grpc_service}",
        ]
