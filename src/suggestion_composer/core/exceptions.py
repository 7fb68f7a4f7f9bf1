"""Exception hierarchy for the suggestion composer.

All exceptions inherit from `ComposerError` so a reconciler can catch every
compose failure in one place and decide its own retry policy. Compose calls
never retry and never return a partial result: any of these errors aborts
the call before an object is handed back.

## Exception Hierarchy

- `ConfigNotFoundError`: no stored configuration for the algorithm
- `ConfigParseError`: stored configuration is malformed
- `OwnershipBindError`: owner reference could not be attached
- `UpstreamError`: the configuration store could not be read

## Usage

```python
from suggestion_composer.core.exceptions import ComposerError

try:
    deployment = composer.desired_deployment(request)
except ComposerError:
    requeue(request)
```
"""


class ComposerError(Exception):
    """Base exception class for all compose errors."""


class ConfigNotFoundError(ComposerError):
    """Exception raised when no configuration exists for an algorithm.

    Examples:
        - The config map entry holding suggestion settings is missing
        - The entry exists but has no key for the requested algorithm
    """


class ConfigParseError(ComposerError):
    """Exception raised when stored configuration cannot be decoded.

    Examples:
        - The config map entry is not a JSON object
        - A CPU, memory or storage quantity string is malformed
        - The algorithm entry has no container image

    Note:
        An unrecognized image pull policy is not a parse error. It is
        replaced with `IfNotPresent`.
    """


class OwnershipBindError(ComposerError):
    """Exception raised when an owner reference cannot be attached.

    Examples:
        - The owner's type is not registered in the kind registry
        - The object is already controlled by a different owner
    """


class UpstreamError(ComposerError):
    """Exception raised when the configuration store fails.

    This indicates a transport or API failure (e.g., the Kubernetes API
    returned a non-404 error), as opposed to missing configuration.
    """
