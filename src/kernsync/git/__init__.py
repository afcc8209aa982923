"""Git operations for kernsync."""

from .tracked import GitTrackedFiles, TrackedFiles, exclude_matching

__all__ = ["GitTrackedFiles", "TrackedFiles", "exclude_matching"]
