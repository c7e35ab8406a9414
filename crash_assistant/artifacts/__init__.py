"""
Artifact resolution: dropped path -> app / dSYM / crash log slots.
"""

from .models import RESOLVER_KINDS, ResolverState
from .resolver import ArtifactResolver

__all__ = ["RESOLVER_KINDS", "ArtifactResolver", "ResolverState"]
