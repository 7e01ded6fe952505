"""Recursive directory walking over any filesystem backend."""

import dataclasses
import logging
from typing import TYPE_CHECKING, Any, Callable, FrozenSet, Iterator, List, Optional

from fspathlib.backends.file_info import FileIdentifier
from fspathlib.exceptions import BackendError, InvalidAlgorithmError, InvalidConfigurationError, MetadataAbsentError
from fspathlib.walk.query_filter import QueryFilter
from fspathlib.walk.walk_options import Algorithm, ErrorAction, WalkConfiguration
from fspathlib.walk.walk_signal import NodeDescriptor, WalkSignal

if TYPE_CHECKING:
    from fspathlib.path import Path

logger = logging.getLogger(__name__)

Visitor = Callable[["Path", NodeDescriptor], Optional[WalkSignal]]
Ancestors = FrozenSet[FileIdentifier]


class Walk:
    """Walks the tree below a root directory and hands each admitted node to a visitor.

    The root itself is never visited. Its children are discovered by listing
    the directory through the backend and reading each child's metadata, then
    filtered through a :class:`QueryFilter` and visited in the order the
    configured :class:`Algorithm` dictates.

    The visitor is called as ``visitor(path, node)`` and returns a
    :class:`WalkSignal` or None. Exceptions raised by the visitor abort the walk
    and propagate unchanged. Backend failures abort the walk with a
    :class:`BackendError` naming the failing path.

    Symbolic Link Behavior:
        By default symlinks are reported as symlinks and never descended into.
        With follow_symlinks, each child is dereferenced before classification,
        so a symlinked directory is walked like a real one. A directory that is
        already being walked further up the current branch (a symlink loop) is
        still visited but not descended into again.

    Attributes:
        root (Path): The directory whose contents are walked.
        config (WalkConfiguration): How the walk is performed.
        query_filter (QueryFilter): Decides which nodes reach the visitor.

    Example:
        >>> from fspathlib import MemoryBackend, Path
        >>> root = Path("/project", MemoryBackend())
        >>> (root / "src").mkdir_all()
        >>> (root / "src" / "main.py").write_text("print('hi')")
        >>> (root / "README").write_text("hello")
        >>> seen = []
        >>> Walk(root, algorithm=Algorithm.PRE_ORDER_DEPTH_FIRST).walk(
        ...     lambda path, node: seen.append(str(path.relative_to(root)))
        ... )
        >>> seen
        ['README', 'src', 'src/main.py']
    """

    def __init__(self, root: "Path", config: Optional[WalkConfiguration] = None, **overrides: Any) -> None:
        """Initialize a Walk.

        Args:
            root: Directory to walk.
            config: Walk settings. Defaults to WalkConfiguration().
            **overrides: Individual WalkConfiguration fields to change, such as
                max_depth=2 or algorithm=Algorithm.POST_ORDER_DEPTH_FIRST.

        Raises:
            InvalidConfigurationError: If root is None, config is not a
                WalkConfiguration, or an override names an unknown field.
        """
        if root is None:
            raise InvalidConfigurationError("root path can't be None")
        if config is None:
            config = WalkConfiguration()
        elif not isinstance(config, WalkConfiguration):
            raise InvalidConfigurationError(f"config must be a WalkConfiguration, got {type(config)}")
        self.root = root
        self.config = config.replace(**overrides) if overrides else config
        self.query_filter = QueryFilter(self.config)

    def walk(self, visitor: Visitor) -> None:
        """Walk the tree, calling visitor for every admitted node.

        Raises:
            InvalidAlgorithmError: If the configured algorithm is unknown. The
                backend is not touched in that case.
            BackendError: If the backend fails to list a directory or describe a node.
            MetadataAbsentError: If the backend returns no metadata and no error.
            Exception: Whatever the visitor raises.
        """
        try:
            algorithm = Algorithm(self.config.algorithm)
        except ValueError:
            raise InvalidAlgorithmError(self.config.algorithm) from None

        walker = {
            Algorithm.UNORDERED: self._walk_unordered,
            Algorithm.PRE_ORDER_DEPTH_FIRST: self._walk_pre_order,
            Algorithm.POST_ORDER_DEPTH_FIRST: self._walk_post_order,
        }[algorithm]

        logger.debug("Walking %s with %s", self.root, algorithm.value)
        signal = walker(visitor, self.root, None, 0, self._root_ancestors())
        if signal is WalkSignal.STOP:
            logger.debug("Walk of %s stopped by visitor", self.root)

    def _root_ancestors(self) -> Ancestors:
        if not self.config.follow_symlinks:
            return frozenset()
        identity = self._describe(self.root, 0).identity
        return frozenset() if identity is None else frozenset({identity})

    def _max_depth_reached(self, depth: int) -> bool:
        return self.config.max_depth >= 0 and depth > self.config.max_depth

    def _describe(self, path: "Path", depth: int) -> NodeDescriptor:
        """Read a node's metadata, dereferencing it only when following symlinks."""
        path_str = str(path)
        backend = path.backend
        try:
            if self.config.follow_symlinks:
                info = backend.stat(path_str)
            else:
                result = backend.lstat_if_supported(path_str)
                # a backend without lstat cannot hold symlinks, so stat is equivalent
                info = result.info if result.supported else backend.stat(path_str)
        except OSError as error:
            raise BackendError(path_str, error) from error
        if info is None:
            raise MetadataAbsentError(path_str)
        return NodeDescriptor(
            path=path,
            kind=info.kind,
            size=info.size,
            mtime=info.mtime,
            depth=depth,
            identity=info.identity,
        )

    def _read_dir(self, directory: "Path") -> List[str]:
        try:
            return directory.backend.read_dir(str(directory))
        except OSError as error:
            raise BackendError(str(directory), error) from error

    def _children(self, directory: "Path", names: List[str], depth: int) -> Iterator[NodeDescriptor]:
        """Describe the immediate children of directory one at a time, in listing order."""
        for name in names:
            child = directory.join(name)
            if child == directory:
                continue
            yield self._describe(child, depth + 1)

    def _report(self, visitor: Visitor, node: Optional[NodeDescriptor], error: BackendError) -> WalkSignal:
        """Raise a directory read failure, or hand it to the visitor when configured to report."""
        if node is None or self.config.error_action is not ErrorAction.REPORT:
            raise error
        logger.warning("Cannot read directory %s: %s", node.path, error.error)
        signal = self._visit(visitor, dataclasses.replace(node, error=error.error))
        return WalkSignal.STOP if signal is WalkSignal.STOP else WalkSignal.CONTINUE

    def _descends_into(self, node: NodeDescriptor, ancestors: Ancestors) -> bool:
        if not node.is_dir:
            return False
        if node.identity is not None and node.identity in ancestors:
            logger.warning("Not descending into %s: directory is already being walked", node.path)
            return False
        return True

    @staticmethod
    def _below(node: NodeDescriptor, ancestors: Ancestors) -> Ancestors:
        if node.identity is None or not ancestors:
            return ancestors
        return ancestors | {node.identity}

    @staticmethod
    def _visit(visitor: Visitor, node: NodeDescriptor) -> WalkSignal:
        result = visitor(node.path, node)
        if result is None:
            return WalkSignal.CONTINUE
        if isinstance(result, WalkSignal):
            return result
        raise TypeError(f"visitor must return a WalkSignal or None, got {result!r}")

    def _walk_unordered(
        self, visitor: Visitor, directory: "Path", node: Optional[NodeDescriptor], depth: int, ancestors: Ancestors
    ) -> WalkSignal:
        """Recurse into each child directory first, then visit the child, in listing order.

        SKIP_SUBTREE cannot prune anything here since the subtree has already
        been walked when the directory is visited; it is accepted and ignored.
        """
        if self._max_depth_reached(depth):
            return WalkSignal.CONTINUE
        try:
            names = self._read_dir(directory)
        except BackendError as error:
            return self._report(visitor, node, error)

        for child in self._children(directory, names, depth):
            if self._descends_into(child, ancestors):
                signal = self._walk_unordered(visitor, child.path, child, depth + 1, self._below(child, ancestors))
                if signal is WalkSignal.STOP:
                    return WalkSignal.STOP

            if self.query_filter.admits_descriptor(child):
                if self._visit(visitor, child) is WalkSignal.STOP:
                    return WalkSignal.STOP
        return WalkSignal.CONTINUE

    def _walk_pre_order(
        self,
        visitor: Visitor,
        directory: "Path",
        node: Optional[NodeDescriptor],
        depth: int,
        ancestors: Ancestors,
        descend: bool = True,
    ) -> WalkSignal:
        """Visit each child as soon as it is discovered, then descend into it if it is a directory.

        Directories the filter rejects are still descended into. A visitor
        returning SKIP_SUBTREE for a directory still has that directory listed
        and its files visited, but none of its subdirectories are visited or
        entered. With descend false, child directories are passed over.
        """
        if self._max_depth_reached(depth):
            return WalkSignal.CONTINUE
        try:
            names = self._read_dir(directory)
        except BackendError as error:
            return self._report(visitor, node, error)

        for child in self._children(directory, names, depth):
            if not descend and child.is_dir:
                continue

            signal = WalkSignal.CONTINUE
            if self.query_filter.admits_descriptor(child):
                signal = self._visit(visitor, child)
                if signal is WalkSignal.STOP:
                    return WalkSignal.STOP

            if not self._descends_into(child, ancestors):
                continue
            skipping = signal is WalkSignal.SKIP_SUBTREE
            if skipping:
                logger.debug("Skipping subdirectories of %s", child.path)
            signal = self._walk_pre_order(
                visitor, child.path, child, depth + 1, self._below(child, ancestors), descend=not skipping
            )
            if signal is WalkSignal.STOP:
                return WalkSignal.STOP
        return WalkSignal.CONTINUE

    def _walk_post_order(
        self, visitor: Visitor, directory: "Path", node: Optional[NodeDescriptor], depth: int, ancestors: Ancestors
    ) -> WalkSignal:
        """Walk every child directory's subtree, then visit all children in discovery order.

        SKIP_SUBTREE is accepted and ignored, as the subtree is already walked.
        """
        if self._max_depth_reached(depth):
            return WalkSignal.CONTINUE
        try:
            names = self._read_dir(directory)
        except BackendError as error:
            return self._report(visitor, node, error)

        # Since we are doing post-order, every subdirectory is walked first and all
        # children are buffered so their visits can happen afterwards.
        children: List[NodeDescriptor] = []
        for child in self._children(directory, names, depth):
            if self._descends_into(child, ancestors):
                signal = self._walk_post_order(visitor, child.path, child, depth + 1, self._below(child, ancestors))
                if signal is WalkSignal.STOP:
                    return WalkSignal.STOP
            children.append(child)

        for child in children:
            if self.query_filter.admits_descriptor(child):
                if self._visit(visitor, child) is WalkSignal.STOP:
                    return WalkSignal.STOP
        return WalkSignal.CONTINUE
