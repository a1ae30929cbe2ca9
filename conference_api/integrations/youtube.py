"""
YouTube Data API v3 Client

Minimal read-only client for the ``playlistItems`` endpoint, used by the
playlist import. Transport failures and non-2xx responses are raised as
ExternalServiceError carrying the upstream message.
"""

import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import BaseModel, Field

from ..exceptions import ExternalServiceError

logger = logging.getLogger(__name__)

SERVICE_NAME = "youtube"
PAGE_SIZE = 50
UNAVAILABLE_TITLES = {"Private video", "Deleted video"}


class PlaylistVideo(BaseModel):
    """One entry of a playlist."""

    video_id: Optional[str] = Field(None, description="YouTube video id, missing for some removed entries")
    title: str = Field(default="", description="Video title")
    description: str = Field(default="", description="Video description")
    published_at: Optional[str] = Field(None, description="ISO 8601 publish timestamp")

    @property
    def is_unavailable(self) -> bool:
        """Private and deleted videos keep a placeholder title and cannot be scheduled."""
        return self.title in UNAVAILABLE_TITLES

    @classmethod
    def from_api_item(cls, item: Dict[str, Any]) -> 'PlaylistVideo':
        snippet = item.get('snippet') or {}
        content = item.get('contentDetails') or {}
        resource = snippet.get('resourceId') or {}
        return cls(
            video_id=content.get('videoId') or resource.get('videoId'),
            title=snippet.get('title') or "",
            description=snippet.get('description') or "",
            published_at=content.get('videoPublishedAt') or snippet.get('publishedAt')
        )


class YouTubeClient:
    """Client for the YouTube Data API v3."""

    def __init__(self, api_key: str, base_url: str = "https://www.googleapis.com/youtube/v3", timeout: float = 10.0):
        """Initialize client.

        Args:
            api_key: YouTube Data API key
            base_url: API base URL (overridable for tests and proxies)
            timeout: Per-request timeout in seconds
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

    def _get(self, resource: str, params: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.base_url}/{resource}"
        try:
            response = requests.get(url, params={**params, 'key': self.api_key}, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"YouTube request to {resource} failed: {e}")
            raise ExternalServiceError(f"YouTube request failed: {e}", SERVICE_NAME, original_error=e) from e

        if not response.ok:
            message = self._error_message(response)
            logger.error(f"YouTube API returned {response.status_code} for {resource}: {message}")
            raise ExternalServiceError(
                f"YouTube API error: {message}", SERVICE_NAME, status_code=response.status_code
            )

        try:
            return response.json()
        except ValueError as e:
            raise ExternalServiceError(
                f"YouTube API returned invalid JSON: {e}", SERVICE_NAME,
                status_code=response.status_code, original_error=e
            ) from e

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        """Extract error.message from a Google API error body, falling back to the reason phrase."""
        try:
            body = response.json()
        except ValueError:
            return response.reason or f"HTTP {response.status_code}"
        error = body.get('error') if isinstance(body, dict) else None
        if isinstance(error, dict) and error.get('message'):
            return error['message']
        return response.reason or f"HTTP {response.status_code}"

    def list_playlist_items(self, playlist_id: str) -> List[PlaylistVideo]:
        """
        Fetch every item of a playlist, following nextPageToken.

        Args:
            playlist_id: YouTube playlist id

        Returns:
            Videos in playlist order

        Raises:
            ExternalServiceError: Transport failure or API error
        """
        videos: List[PlaylistVideo] = []
        params = {
            'part': 'snippet,contentDetails',
            'playlistId': playlist_id,
            'maxResults': PAGE_SIZE
        }
        page_token = None
        pages = 0

        while True:
            if page_token:
                params['pageToken'] = page_token
            body = self._get('playlistItems', params)
            pages += 1
            videos.extend(PlaylistVideo.from_api_item(item) for item in body.get('items', []))

            page_token = body.get('nextPageToken')
            if not page_token:
                break

        logger.info(f"Fetched {len(videos)} item(s) of playlist {playlist_id} in {pages} page(s)")
        return videos
