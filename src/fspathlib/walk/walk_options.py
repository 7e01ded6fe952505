"""Configuration of a directory walk."""

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from humanfriendly import InvalidSize, parse_size

from fspathlib.exceptions import InvalidConfigurationError


class Algorithm(str, Enum):
    """Order in which a walk hands nodes to the visitor.

    Values:
        UNORDERED: Children in backend order; a directory's subtree is walked
            before the directory itself is visited. No ordering guarantee is
            made to callers. The cheapest algorithm.
        PRE_ORDER_DEPTH_FIRST: Each node is visited when it is discovered,
            before the walk descends into it. Supports SKIP_SUBTREE, which
            keeps the walk out of the subdirectories of the skipped directory.
        POST_ORDER_DEPTH_FIRST: All subdirectories of a directory are walked
            first, then the directory's own children are visited in discovery
            order.
    """

    UNORDERED = "unordered"
    PRE_ORDER_DEPTH_FIRST = "pre_order_depth_first"
    POST_ORDER_DEPTH_FIRST = "post_order_depth_first"


class ErrorAction(str, Enum):
    """Action to take when a directory below the root cannot be read.

    Values:
        RAISE: Abort the walk with a BackendError (default behavior)
        REPORT: Hand the directory to the visitor with the error attached,
            skip its contents and keep walking
    """

    RAISE = "raise"
    REPORT = "report"


def parse_file_size(size: Union[str, int]) -> int:
    """Parse a size bound given as bytes or in human-readable form.

    Negative integers are passed through; they mean "no bound".

    Args:
        size: Size like 1024, '1GB', '500MB', '2.5K' or '1 MiB'

    Returns:
        Size in bytes

    Raises:
        ValueError: If size is not a valid size format

    Example:
        >>> parse_file_size("10KB"), parse_file_size("1KiB"), parse_file_size(-1)
        (10000, 1024, -1)
    """
    if isinstance(size, bool) or not isinstance(size, (str, int)):
        raise ValueError(f"size must be string or int, got {type(size)}")
    if isinstance(size, int):
        return size
    try:
        return int(parse_size(size))
    except InvalidSize as e:
        raise ValueError(f"Invalid size format '{size}': {e}")


@dataclass
class WalkConfiguration:
    """Settings controlling how a Walk traverses a tree and what it reports.

    Attributes:
        max_depth: How far below the root to descend. -1 means no limit; 0 means
            only the root's immediate children are discovered.
        algorithm: The traversal order, see :class:`Algorithm`.
        follow_symlinks: Dereference symlinks before classifying them. A
            followed symlink is reported as whatever it points to, and
            symlinked directories are descended into.
        min_size: Smallest file size, in bytes or human-readable form, that is
            visited. Negative means no minimum.
        max_size: Largest file size that is visited. Negative means no maximum.
        visit_files: Hand regular files to the visitor.
        visit_dirs: Hand directories to the visitor.
        visit_symlinks: Hand (unfollowed) symlinks to the visitor.
        error_action: What to do when a directory below the root cannot be read.

    Size bounds only ever apply to regular files.

    Example:
        >>> config = WalkConfiguration(max_size="1KB")
        >>> config.max_size
        1000
        >>> config.meets_maximum_size(1000), config.meets_maximum_size(1001)
        (True, False)
    """

    max_depth: int = -1
    algorithm: Algorithm = Algorithm.UNORDERED
    follow_symlinks: bool = False
    min_size: int = -1
    max_size: int = -1
    visit_files: bool = True
    visit_dirs: bool = True
    visit_symlinks: bool = True
    error_action: ErrorAction = ErrorAction.RAISE

    def __post_init__(self) -> None:
        self.min_size = parse_file_size(self.min_size)
        self.max_size = parse_file_size(self.max_size)
        try:
            self.error_action = ErrorAction(self.error_action)
        except ValueError:
            raise InvalidConfigurationError(f"invalid error action: {self.error_action!r}") from None

    def meets_minimum_size(self, size: int) -> bool:
        """Return whether size is at least the minimum, if one is set."""
        if self.min_size < 0:
            return True
        return size >= self.min_size

    def meets_maximum_size(self, size: int) -> bool:
        """Return whether size is at most the maximum, if one is set."""
        if self.max_size < 0:
            return True
        return size <= self.max_size

    def replace(self, **overrides: Any) -> "WalkConfiguration":
        """Return a copy with the given fields changed.

        Raises:
            InvalidConfigurationError: If an override names an unknown field.
        """
        known = {field.name for field in dataclasses.fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise InvalidConfigurationError(f"unknown walk options: {', '.join(unknown)}")
        return dataclasses.replace(self, **overrides)
