"""Configuration stores holding raw suggestion configuration text.

A store only fetches the raw JSON entry; decoding and validation belong to
`ConfigResolver`. Two implementations are provided:

- `StaticConfigStore`: in-memory mapping (tests, offline rendering)
- `ConfigMapStore`: reads a Kubernetes ConfigMap through the API
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping

from kubernetes import client, config
from kubernetes.client.rest import ApiException

from suggestion_composer.core.exceptions import UpstreamError

logger = logging.getLogger("suggestion_composer.config_store")


class ConfigStore(ABC):
    """Read-only key-value source of raw configuration text."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the raw value stored under `key`, or None if absent.

        Raises:
            UpstreamError: If the backing store cannot be read.
        """


class StaticConfigStore(ConfigStore):
    """Config store backed by an in-memory mapping.

    Example:
        >>> store = StaticConfigStore({"suggestion": '{"random": {"image": "img"}}'})
        >>> store.get("suggestion")
        '{"random": {"image": "img"}}'
    """

    def __init__(self, data: Mapping[str, str] | None = None) -> None:
        self._data = dict(data or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)


class ConfigMapStore(ConfigStore):
    """Config store backed by a Kubernetes ConfigMap.

    The ConfigMap is read on every `get()` call; nothing is cached.

    Example:
        >>> store = ConfigMapStore(name="katib-config", namespace="kubeflow")
        >>> raw = store.get("suggestion")
    """

    def __init__(self, name: str, namespace: str, api: client.CoreV1Api | None = None) -> None:
        """Initialize the store.

        Args:
            name: ConfigMap name.
            namespace: Namespace of the ConfigMap.
            api: CoreV1Api to use. If None, cluster configuration is loaded
                (in-cluster first, then local kubeconfig).
        """
        if api is None:
            try:
                # Try in-cluster config first (when running in K8s pod)
                config.load_incluster_config()
                logger.info("Loaded in-cluster Kubernetes configuration")
            except config.ConfigException:
                # Fall back to kubeconfig (for local development)
                config.load_kube_config()
                logger.info("Loaded kubeconfig from local machine")
            api = client.CoreV1Api()

        self.api = api
        self.name = name
        self.namespace = namespace

    def get(self, key: str) -> str | None:
        try:
            config_map = self.api.read_namespaced_config_map(name=self.name, namespace=self.namespace)
        except ApiException as e:
            if e.status == 404:
                logger.debug(
                    "Config map not found",
                    extra={"config_map": self.name, "namespace": self.namespace},
                )
                return None
            logger.exception(
                "Failed to read config map",
                extra={
                    "config_map": self.name,
                    "namespace": self.namespace,
                    "status": e.status,
                    "reason": e.reason,
                },
            )
            raise UpstreamError(f"Failed to read config map {self.namespace}/{self.name}: {e}") from e

        data = config_map.data or {}
        logger.debug(
            "Read config map",
            extra={"config_map": self.name, "namespace": self.namespace, "key": key, "found": key in data},
        )
        return data.get(key)
