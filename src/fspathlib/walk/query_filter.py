"""Decides which discovered nodes are handed to the visitor."""

from fspathlib.types import FileKind
from fspathlib.walk.walk_options import WalkConfiguration
from fspathlib.walk.walk_signal import NodeDescriptor


class QueryFilter:
    """Pure predicate over a node's kind and size, driven by a WalkConfiguration.

    The kind is whatever the walker classified the node as: SYMLINK for an
    unfollowed symlink, or the target's kind when symlinks are followed.

    Attributes:
        config (WalkConfiguration): The configuration whose visit flags and size
            bounds are applied. It is read on every call, never modified.

    Example:
        >>> query = QueryFilter(WalkConfiguration(min_size=10, visit_dirs=False))
        >>> query.admits(FileKind.FILE, 10), query.admits(FileKind.FILE, 9)
        (True, False)
        >>> query.admits(FileKind.DIRECTORY, 0)
        False
    """

    def __init__(self, config: WalkConfiguration) -> None:
        self.config = config

    def admits(self, kind: FileKind, size: int) -> bool:
        """Return whether a node of this kind and size should be visited.

        Nodes that are neither files, directories nor symlinks (fifos, sockets,
        devices) are always admitted.
        """
        if kind is FileKind.FILE:
            return (
                self.config.visit_files
                and self.config.meets_minimum_size(size)
                and self.config.meets_maximum_size(size)
            )
        if kind is FileKind.DIRECTORY:
            return self.config.visit_dirs
        if kind is FileKind.SYMLINK:
            return self.config.visit_symlinks
        return True

    def admits_descriptor(self, node: NodeDescriptor) -> bool:
        return self.admits(node.kind, node.size)
