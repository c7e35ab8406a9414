"""
Resolver state model.
"""

from dataclasses import asdict, dataclass
from typing import Dict, Optional

from ..models import ArtifactKind

# Slots owned by the resolver, in display order
RESOLVER_KINDS = (ArtifactKind.APP_BUNDLE, ArtifactKind.DEBUG_SYMBOL_BUNDLE, ArtifactKind.CRASH_LOG)


@dataclass
class ResolverState:
    """
    Paths discovered from dropped files.

    Each path is either None or named an existing entry at discovery
    time. Paths are not revalidated afterwards.
    """

    app_path: Optional[str] = None
    dsym_path: Optional[str] = None
    crash_path: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.app_path is None and self.dsym_path is None and self.crash_path is None

    def get(self, kind: ArtifactKind) -> Optional[str]:
        if kind == ArtifactKind.APP_BUNDLE:
            return self.app_path
        if kind == ArtifactKind.DEBUG_SYMBOL_BUNDLE:
            return self.dsym_path
        if kind == ArtifactKind.CRASH_LOG:
            return self.crash_path
        raise KeyError(f"{kind.value} is not a resolver slot")

    def to_dict(self) -> Dict[str, Optional[str]]:
        return asdict(self)
