"""Kernel tagging – tag contexts and entity snapshots."""
from mp_tagcloud.kernel.tagging.tag_context import Snapshot, TagContext

__all__ = ["Snapshot", "TagContext"]
