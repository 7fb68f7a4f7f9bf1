"""Per-algorithm suggestion configuration with Pydantic validation.

The stored format is the JSON written to the `suggestion` key of the Katib
config map: an object mapping algorithm name to a `SuggestionConfig`, with
camelCase keys as in the Kubernetes API.

Example:
    ```json
    {
      "random": {
        "image": "docker.io/kubeflowkatib/suggestion-hyperopt",
        "imagePullPolicy": "Always",
        "resource": {"limits": {"cpu": "500m", "memory": "100Mi"}},
        "serviceAccountName": "katib-suggestion",
        "persistentVolumeClaimSpec": {"storageClassName": "fast"}
      }
    }
    ```
"""

from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel

from suggestion_composer.core.quantity import validate_quantity

NonEmptyStr = Annotated[str, StringConstraints(min_length=1)]
Quantity = Annotated[Any, AfterValidator(validate_quantity)]
ResourceList = dict[str, Quantity]

PULL_POLICIES = ("Always", "IfNotPresent", "Never")
DEFAULT_PULL_POLICY = "IfNotPresent"

# Inline source keys of a Kubernetes PersistentVolumeSpec
PERSISTENT_VOLUME_SOURCES = frozenset(
    {
        "awsElasticBlockStore",
        "azureDisk",
        "azureFile",
        "cephfs",
        "cinder",
        "csi",
        "fc",
        "flexVolume",
        "flocker",
        "gcePersistentDisk",
        "glusterfs",
        "hostPath",
        "iscsi",
        "local",
        "nfs",
        "photonPersistentDisk",
        "portworxVolume",
        "quobyte",
        "rbd",
        "scaleIO",
        "storageos",
        "vsphereVolume",
    }
)


def _coerce_pull_policy(value: Any) -> str:
    """Map anything outside the known pull policies to the default."""
    return value if value in PULL_POLICIES else DEFAULT_PULL_POLICY


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ResourceRequirements(_CamelModel):
    """Container resource limits and requests, keyed by resource name."""

    limits: ResourceList = Field(default_factory=dict)
    requests: ResourceList = Field(default_factory=dict)


class ClaimResources(_CamelModel):
    """Storage requests of a claim override."""

    requests: ResourceList | None = None


class PersistentVolumeClaimSpecOverride(_CamelModel):
    """Partial PersistentVolumeClaim spec supplied by the algorithm config.

    Unset fields leave the composed default untouched.
    """

    storage_class_name: str | None = None
    access_modes: list[str] = Field(default_factory=list)
    volume_mode: str | None = None
    resources: ClaimResources = Field(default_factory=ClaimResources)


class PersistentVolumeSpecOverride(_CamelModel):
    """Partial PersistentVolume spec supplied by the algorithm config.

    The volume source is embedded inline, as in the Kubernetes API, under a
    key such as `gcePersistentDisk` or `nfs`. Unknown keys are ignored.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True, extra="allow"
    )

    volume_mode: str | None = None
    access_modes: list[str] = Field(default_factory=list)
    capacity: ResourceList | None = None

    @property
    def volume_source(self) -> dict[str, Any]:
        """The inline persistent volume source, empty if none was given."""
        extra = self.model_extra or {}
        return {key: value for key, value in extra.items() if key in PERSISTENT_VOLUME_SOURCES}


class SuggestionConfig(_CamelModel):
    """Resolved settings for one suggestion algorithm.

    Attributes:
        image: Container image of the suggestion service.
        image_pull_policy: One of Always, IfNotPresent, Never. Any other value
            is replaced with IfNotPresent.
        resource: Container limits and requests.
        service_account_name: Service account the pod runs as.
        volume_mount_path: Container mount path of the suggestion volume.
        persistent_volume_claim_spec: Optional claim override.
        persistent_volume_spec: Optional backing volume override.
    """

    image: NonEmptyStr
    image_pull_policy: Annotated[str, BeforeValidator(_coerce_pull_policy)] = DEFAULT_PULL_POLICY
    resource: ResourceRequirements = Field(default_factory=ResourceRequirements)
    service_account_name: str = ""
    volume_mount_path: str = ""
    persistent_volume_claim_spec: PersistentVolumeClaimSpecOverride | None = None
    persistent_volume_spec: PersistentVolumeSpecOverride | None = None
