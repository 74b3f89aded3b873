"""Pixel level change detection and clustering."""

from .cancel import CancelToken
from .cluster import cluster
from .grid import check_same_size, diff

__all__ = ["CancelToken", "check_same_size", "cluster", "diff"]
