"""Naming, labels and annotations shared by all composers."""

from suggestion_composer.config import ComposerSettings
from suggestion_composer.core.models import SuggestionRequest

LABEL_DEPLOYMENT = "deployment"
LABEL_EXPERIMENT = "experiment"
LABEL_SUGGESTION = "suggestion"


def deployment_name(request: SuggestionRequest) -> str:
    """Name of the Deployment, Service and claim: `<name>-<algorithm>`."""
    return f"{request.name}-{request.algorithm_name}"


def volume_name(request: SuggestionRequest) -> str:
    """Name of the backing volume.

    PersistentVolumes are cluster scoped, so the namespace is part of the name.
    """
    return f"{deployment_name(request)}-{request.namespace}"


def identity_labels(request: SuggestionRequest) -> dict[str, str]:
    """Caller labels plus the identity labels used for selector matching.

    The Deployment selector, its pod template labels and the Service selector
    are all built here, so they always match.
    """
    labels = dict(request.labels)
    labels[LABEL_DEPLOYMENT] = deployment_name(request)
    labels[LABEL_EXPERIMENT] = request.name
    labels[LABEL_SUGGESTION] = request.name
    return labels


def pod_annotations(request: SuggestionRequest, settings: ComposerSettings) -> dict[str, str]:
    """Caller annotations with sidecar injection disabled."""
    annotations = dict(request.annotations)
    annotations[settings.sidecar_inject_annotation] = "false"
    return annotations
