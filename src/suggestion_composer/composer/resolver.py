"""Resolution of per-algorithm suggestion configuration.

Error policy: missing configuration and malformed quantities fail hard, while
an unrecognized image pull policy is quietly replaced with `IfNotPresent`.
"""

import json

from pydantic import ValidationError

from suggestion_composer.clients.config_store import ConfigStore
from suggestion_composer.config import ComposerSettings
from suggestion_composer.core.exceptions import ConfigNotFoundError, ConfigParseError
from suggestion_composer.core.quantity import is_negative
from suggestion_composer.core.suggestion_config import ResourceRequirements, SuggestionConfig

RESOURCE_CPU = "cpu"
RESOURCE_MEMORY = "memory"
RESOURCE_EPHEMERAL_STORAGE = "ephemeral-storage"

# (resource, default limit, default request)
DEFAULT_RESOURCES = (
    (RESOURCE_CPU, "500m", "50m"),
    (RESOURCE_MEMORY, "100Mi", "10Mi"),
    (RESOURCE_EPHEMERAL_STORAGE, "5Gi", "500Mi"),
)


def with_default_resources(resource: ResourceRequirements) -> ResourceRequirements:
    """Fill in missing CPU, memory and ephemeral-storage values.

    When both the ephemeral-storage limit and request are negative the entry
    is dropped from both, so the container is composed without one. A single
    negative value is kept as written.
    """
    limits = dict(resource.limits)
    requests = dict(resource.requests)
    for name, default_limit, default_request in DEFAULT_RESOURCES:
        limits.setdefault(name, default_limit)
        requests.setdefault(name, default_request)

    if is_negative(limits[RESOURCE_EPHEMERAL_STORAGE]) and is_negative(requests[RESOURCE_EPHEMERAL_STORAGE]):
        del limits[RESOURCE_EPHEMERAL_STORAGE]
        del requests[RESOURCE_EPHEMERAL_STORAGE]

    return ResourceRequirements(limits=limits, requests=requests)


class ConfigResolver:
    """Loads and decodes suggestion configuration for an algorithm.

    A fresh `SuggestionConfig` is decoded on every call; nothing is cached.
    """

    def __init__(self, store: ConfigStore, settings: ComposerSettings) -> None:
        self.store = store
        self.settings = settings

    def resolve(self, algorithm_name: str) -> SuggestionConfig:
        """Return the configuration of `algorithm_name`.

        Raises:
            ConfigNotFoundError: If the store entry or the algorithm key is missing.
            ConfigParseError: If the entry is not valid JSON, a quantity is
                malformed, or the image is missing.
            UpstreamError: If the store cannot be read.
        """
        raw = self.store.get(self.settings.config_key)
        if raw is None:
            raise ConfigNotFoundError(
                f"Failed to find suggestion config {self.settings.config_key!r} in "
                f"{self.settings.katib_namespace}/{self.settings.config_map_name}"
            )

        try:
            algorithms = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ConfigParseError(f"Invalid suggestion config JSON: {e}") from e
        if not isinstance(algorithms, dict):
            raise ConfigParseError("Suggestion config must be a JSON object keyed by algorithm name")

        if algorithm_name not in algorithms:
            raise ConfigNotFoundError(f"Failed to find suggestion config for algorithm {algorithm_name!r}")

        try:
            suggestion_config = SuggestionConfig.model_validate(algorithms[algorithm_name])
        except ValidationError as e:
            raise ConfigParseError(f"Invalid suggestion config for algorithm {algorithm_name!r}: {e}") from e

        return suggestion_config.model_copy(
            update={"resource": with_default_resources(suggestion_config.resource)}
        )
