"""Configuration management for the suggestion composer.

This module provides the settings consumed by the composers. Every constant
that shapes a composed object (ports, paths, probe timings, storage defaults)
is a named field on `ComposerSettings`, so callers pass settings explicitly
instead of reaching for package-level globals.

## Environment Variables

The following environment variables are supported (all optional with
defaults):

- `KATIB_CORE_NAMESPACE`: Namespace holding the Katib config map
  (default: `kubeflow`)
- `KATIB_CONFIG_MAP`: Name of the config map (default: `katib-config`)
- `SUGGESTION_ENABLE_GRPC_PROBE`: Attach readiness/liveness probes to the
  suggestion container (default: `true`)
- `SUGGESTION_STORAGE_CLASS`: Default storage class name for claims
  (default: `katib-suggestion`)
- `SUGGESTION_VOLUME_STORAGE`: Default storage size (default: `1Gi`)
- `SUGGESTION_VOLUME_LOCAL_PATH_PREFIX`: Host path prefix for composed
  volumes (default: `/tmp/katib/suggestions/`)

## Usage

```python
from suggestion_composer.config import ComposerSettings, get_settings

settings = get_settings()
custom = ComposerSettings(enable_grpc_probe=False)
```
"""

import os
from functools import lru_cache

from pydantic import BaseModel
from pydantic_settings import SettingsConfigDict

_TRUTHY = ("1", "true", "yes", "on")


class ComposerSettings(BaseModel):
    """Immutable defaults used to compose suggestion objects.

    Attributes:
        katib_namespace: Namespace of the config map holding suggestion config.
        config_map_name: Name of the config map. Default: "katib-config".
        config_key: Data key holding the JSON algorithm mapping.
            Default: "suggestion".
        container_name: Name of the suggestion container.
        port: Container and service port of the suggestion API. Default: 6789.
        port_name: Name of that port. Default: "katib-api".
        grpc_service: gRPC service name checked by the health probe.
        health_check_probe: Path to the gRPC health probe binary.
        enable_grpc_probe: Whether readiness/liveness probes are attached.
        initial_delay_seconds: Initial delay for both probes. Default: 10.
        period_for_ready: Readiness probe period. Default: 10.
        period_for_live: Liveness probe period. Default: 120.
        failure_threshold: Liveness failures before restart. Default: 12.
        volume_name: Name of the pod volume and its mount.
        volume_mount_path: Mount path used when the algorithm config sets none.
        storage_class_name: Platform default storage class. A backing volume
            is composed only when a claim uses this class.
        volume_access_mode: Access mode every claim and volume starts with.
        volume_storage: Default storage request and capacity.
        volume_local_path_prefix: Host path prefix for composed volumes.
        sidecar_inject_annotation: Pod annotation key disabling mesh sidecars.
    """

    katib_namespace: str = "kubeflow"
    config_map_name: str = "katib-config"
    config_key: str = "suggestion"

    container_name: str = "suggestion"
    port: int = 6789
    port_name: str = "katib-api"
    grpc_service: str = "manager.v1beta1.Suggestion"

    # Probe settings
    health_check_probe: str = "/bin/grpc_health_probe"
    enable_grpc_probe: bool = True
    initial_delay_seconds: int = 10
    period_for_ready: int = 10
    period_for_live: int = 120
    failure_threshold: int = 12

    # Storage settings
    volume_name: str = "suggestion-volume"
    volume_mount_path: str = "/opt/katib/data"
    storage_class_name: str = "katib-suggestion"
    volume_access_mode: str = "ReadWriteOnce"
    volume_storage: str = "1Gi"
    volume_local_path_prefix: str = "/tmp/katib/suggestions/"

    sidecar_inject_annotation: str = "sidecar.istio.io/inject"

    model_config = SettingsConfigDict(frozen=True)

    @classmethod
    def from_env(cls) -> "ComposerSettings":
        """Create ComposerSettings from environment variables.

        Returns:
            Configured ComposerSettings instance. Unset variables keep the
            field defaults.
        """
        defaults = cls()
        probe_flag = os.getenv("SUGGESTION_ENABLE_GRPC_PROBE")
        return cls(
            katib_namespace=os.getenv("KATIB_CORE_NAMESPACE") or defaults.katib_namespace,
            config_map_name=os.getenv("KATIB_CONFIG_MAP") or defaults.config_map_name,
            enable_grpc_probe=(
                defaults.enable_grpc_probe if probe_flag is None else probe_flag.lower() in _TRUTHY
            ),
            storage_class_name=os.getenv("SUGGESTION_STORAGE_CLASS") or defaults.storage_class_name,
            volume_storage=os.getenv("SUGGESTION_VOLUME_STORAGE") or defaults.volume_storage,
            volume_local_path_prefix=(
                os.getenv("SUGGESTION_VOLUME_LOCAL_PATH_PREFIX") or defaults.volume_local_path_prefix
            ),
        )


@lru_cache(maxsize=1)
def get_settings() -> "ComposerSettings":
    """Load and return composer settings (cached per process).

    Returns:
        A frozen `ComposerSettings` instance.

    Note:
        Settings are loaded once per process. Restart the process to pick up
        changed environment variables.
    """
    return ComposerSettings.from_env()
