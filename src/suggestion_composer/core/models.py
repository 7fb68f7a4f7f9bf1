"""Domain models for suggestion composition.

All classes use `attrs` for concise, correct class definitions. Models are
frozen: composers read them and never write back.
"""

from enum import Enum

import attrs


class ResumePolicy(str, Enum):
    """How a suggestion reloads its state when restarted."""

    NEVER = "Never"
    LONG_RUNNING = "LongRunning"
    FROM_VOLUME = "FromVolume"


@attrs.define(frozen=True, slots=True)
class SuggestionRequest:
    """A suggestion service request, the parent of every composed object.

    Attributes:
        name: Suggestion name (also the experiment name).
        namespace: Namespace the suggestion lives in.
        algorithm_name: Algorithm name, used as the config lookup key.
        labels: Caller-supplied labels.
        annotations: Caller-supplied annotations.
        requests: Number of suggestions requested.
        resume_policy: How persisted state is reloaded on restart.
        uid: Object UID, copied into owner references when set.
    """

    name: str
    namespace: str
    algorithm_name: str
    labels: dict[str, str] = attrs.field(factory=dict)
    annotations: dict[str, str] = attrs.field(factory=dict)
    requests: int = 0
    resume_policy: ResumePolicy = ResumePolicy.NEVER
    uid: str | None = None


@attrs.define(frozen=True, slots=True)
class OwnerDescriptor:
    """API group/version and kind of an owner type.

    Attributes:
        api_version: Group/version string, e.g. "kubeflow.org/v1beta1".
        kind: Kind name, e.g. "Suggestion".
    """

    api_version: str
    kind: str
