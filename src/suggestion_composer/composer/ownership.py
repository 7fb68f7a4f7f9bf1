"""Owner reference binding for composed objects.

Every composed object is controlled by the request it was built for, so the
cluster garbage-collects children when the parent is deleted. The owner's
API version and kind come from an explicit `KindRegistry` instead of a
global type scheme; an unregistered owner type is the ownership failure
mode.
"""

from typing import Any

from suggestion_composer.core.exceptions import OwnershipBindError
from suggestion_composer.core.models import OwnerDescriptor, SuggestionRequest

SUGGESTION_OWNER = OwnerDescriptor(api_version="kubeflow.org/v1beta1", kind="Suggestion")


class KindRegistry:
    """Maps owner Python types to their API version and kind."""

    def __init__(self) -> None:
        self._kinds: dict[type, OwnerDescriptor] = {}

    def register(self, owner_type: type, descriptor: OwnerDescriptor) -> None:
        """Register the descriptor used for owners of `owner_type`."""
        self._kinds[owner_type] = descriptor

    def lookup(self, owner_type: type) -> OwnerDescriptor:
        """Return the descriptor registered for `owner_type`.

        Raises:
            OwnershipBindError: If the type is not registered.
        """
        try:
            return self._kinds[owner_type]
        except KeyError:
            raise OwnershipBindError(
                f"No kind is registered for type {owner_type.__name__!r}"
            ) from None


def default_registry() -> KindRegistry:
    """Return a registry with `SuggestionRequest` registered."""
    registry = KindRegistry()
    registry.register(SuggestionRequest, SUGGESTION_OWNER)
    return registry


class OwnershipBinder:
    """Stamps a controller owner reference onto composed objects."""

    def __init__(self, registry: KindRegistry) -> None:
        self.registry = registry

    def owner_reference(self, owner: SuggestionRequest) -> dict[str, Any]:
        """Build the controller owner reference pointing at `owner`.

        Raises:
            OwnershipBindError: If the owner's type is not registered.
        """
        descriptor = self.registry.lookup(type(owner))
        reference: dict[str, Any] = {
            "apiVersion": descriptor.api_version,
            "kind": descriptor.kind,
            "name": owner.name,
        }
        if owner.uid:
            reference["uid"] = owner.uid
        reference["controller"] = True
        reference["blockOwnerDeletion"] = True
        return reference

    def bind(self, owner: SuggestionRequest, obj: dict[str, Any]) -> dict[str, Any]:
        """Set `owner` as the only controller owner reference of `obj`.

        Args:
            owner: The parent request.
            obj: Manifest to bind. Its metadata is updated in place.

        Returns:
            The same manifest, for chaining.

        Raises:
            OwnershipBindError: If the owner's type is not registered or `obj`
                is already controlled by a different owner.
        """
        reference = self.owner_reference(owner)
        metadata = obj.setdefault("metadata", {})

        for existing in metadata.get("ownerReferences", []):
            if existing.get("controller") and not _same_owner(existing, reference):
                raise OwnershipBindError(
                    f"Object {metadata.get('name')!r} is already owned by "
                    f"{existing.get('kind')} {existing.get('name')!r}"
                )

        metadata["ownerReferences"] = [reference]
        return obj


def _same_owner(a: dict[str, Any], b: dict[str, Any]) -> bool:
    keys = ("apiVersion", "kind", "name")
    return all(a.get(key) == b.get(key) for key in keys)
