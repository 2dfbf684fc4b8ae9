"""Services that orchestrate a mirror run."""

from lobsters_mirror.services.mirror_service import (
    MirrorService,
    StoryOutcome,
    SyncResult,
)

__all__ = ["MirrorService", "StoryOutcome", "SyncResult"]
