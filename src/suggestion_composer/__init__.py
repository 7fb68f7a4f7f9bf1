"""Desired-state composer for Katib suggestion services.

Given a suggestion request and its per-algorithm configuration, this package
builds the Deployment, Service, PersistentVolumeClaim and optional
PersistentVolume that run the suggestion service in a cluster.
"""

from .composer import Composer
from .core.models import OwnerDescriptor, ResumePolicy, SuggestionRequest

__all__ = [
    "Composer",
    "OwnerDescriptor",
    "ResumePolicy",
    "SuggestionRequest",
]
