"""Directory walking with configurable order, depth and filtering."""

from .query_filter import QueryFilter
from .walk import Walk
from .walk_options import Algorithm, ErrorAction, WalkConfiguration, parse_file_size
from .walk_signal import NodeDescriptor, WalkSignal

__all__ = [
    "Algorithm",
    "ErrorAction",
    "NodeDescriptor",
    "QueryFilter",
    "Walk",
    "WalkConfiguration",
    "WalkSignal",
    "parse_file_size",
]
