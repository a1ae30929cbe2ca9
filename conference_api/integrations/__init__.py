"""Clients for third-party services."""

from .youtube import PlaylistVideo, YouTubeClient

__all__ = [
    "PlaylistVideo",
    "YouTubeClient",
]
