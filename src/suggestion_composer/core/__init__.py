"""Core domain models, configuration types and the exception hierarchy."""

from .exceptions import (
    ComposerError,
    ConfigNotFoundError,
    ConfigParseError,
    OwnershipBindError,
    UpstreamError,
)
from .models import OwnerDescriptor, ResumePolicy, SuggestionRequest
from .suggestion_config import SuggestionConfig

__all__ = [
    "ComposerError",
    "ConfigNotFoundError",
    "ConfigParseError",
    "OwnerDescriptor",
    "OwnershipBindError",
    "ResumePolicy",
    "SuggestionConfig",
    "SuggestionRequest",
    "UpstreamError",
]
