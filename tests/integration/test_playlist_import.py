"""
End-to-End Playlist Import Tests

POST /api/schedule?action=playlist against moto tables, with the YouTube
Data API mocked at the requests layer.
"""

from unittest.mock import Mock, patch

import requests

from conference_api.api.schedule import lambda_handler

from tests.helpers import api_event, put_session, response_json

REQUESTS_GET = 'conference_api.integrations.youtube.requests.get'


def youtube_page(items, next_page_token=None, status_code=200):
    response = Mock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.reason = "OK" if response.ok else "Not Found"
    body = {'items': items}
    if next_page_token:
        body['nextPageToken'] = next_page_token
    response.json.return_value = body
    return response


def playlist_item(video_id, title, published_at="2026-01-10T12:00:00Z"):
    return {
        'snippet': {'title': title, 'description': f"{title} talk", 'resourceId': {'videoId': video_id}},
        'contentDetails': {'videoId': video_id, 'videoPublishedAt': published_at},
    }


def playlist_event(**body):
    return api_event("POST", "/api/schedule", query={'action': "playlist"}, body=body)


class TestPlaylistImport:

    def test_import_lays_out_slots_and_skips(self, api_context, schedule_table):
        put_session(schedule_table, "sess_existing", "2026-03-01T10:00:00Z", video_id="known")
        pages = [
            youtube_page([playlist_item("v1", "Keynote"), playlist_item("v2", "Private video")], "page2"),
            youtube_page([playlist_item("known", "Already scheduled"), playlist_item("v3", "Closing")]),
        ]

        with patch(REQUESTS_GET, side_effect=pages) as mock_get:
            response = lambda_handler(
                playlist_event(playlistId="PL1", apiKey="key", startDate="2026-03-15T14:00:00Z", sessionDuration=20),
                None
            )

        assert response['statusCode'] == 200
        payload = response_json(response)
        assert payload['message'] == "Playlist import completed"
        assert payload['created'] == 2
        assert payload['skipped'] == 2
        assert payload['errors'] == []
        assert [video['status'] for video in payload['videos']] == ["created", "skipped", "skipped", "created"]
        assert payload['videos'][0]['startTime'] == "2026-03-15T14:00:00Z"
        assert payload['videos'][3]['startTime'] == "2026-03-15T14:20:00Z"

        assert mock_get.call_args_list[0].args[0] == "https://youtube.test/v3/playlistItems"
        assert mock_get.call_args_list[1].kwargs['params']['pageToken'] == "page2"

        rows = {item['videoId']: item for item in schedule_table.scan()['Items']}
        assert set(rows) == {"known", "v1", "v3"}
        assert rows["v1"]['partitionKey'] == "2026-03-15"
        assert rows["v1"]['duration'] == 20
        assert rows["v1"]['url'] == "https://www.youtube.com/watch?v=v1"
        assert rows["v3"]['description'] == "Closing talk"

    def test_publish_time_used_without_start_date(self, api_context, schedule_table):
        with patch(REQUESTS_GET, return_value=youtube_page([playlist_item("v1", "Talk", "2026-01-10T12:00:00Z")])):
            response = lambda_handler(playlist_event(playlistId="PL1", apiKey="key"), None)

        payload = response_json(response)
        assert payload['videos'][0]['startTime'] == "2026-01-10T12:00:00Z"
        row = schedule_table.scan()['Items'][0]
        assert row['partitionKey'] == "2026-01-10"
        assert row['duration'] == 30

    def test_missing_api_key(self, api_context):
        response = lambda_handler(playlist_event(playlistId="PL1"), None)

        assert response['statusCode'] == 400
        assert response_json(response) == {'error': "YouTube API key is required (apiKey or YOUTUBE_API_KEY)"}

    def test_missing_playlist_id(self, api_context):
        response = lambda_handler(playlist_event(apiKey="key"), None)

        assert response['statusCode'] == 400
        assert response_json(response) == {'error': "Missing required fields: playlistId"}

    def test_upstream_error_is_502(self, api_context, schedule_table):
        error_page = youtube_page([], status_code=404)
        error_page.json.return_value = {'error': {'message': "Playlist not found"}}

        with patch(REQUESTS_GET, return_value=error_page):
            response = lambda_handler(playlist_event(playlistId="PL1", apiKey="key"), None)

        assert response['statusCode'] == 502
        assert response_json(response) == {
            'error': "Failed to import playlist",
            'details': "YouTube API error: Playlist not found",
        }
        assert schedule_table.scan()['Items'] == []

    def test_transport_error_is_502(self, api_context):
        with patch(REQUESTS_GET, side_effect=requests.Timeout("timed out")):
            response = lambda_handler(playlist_event(playlistId="PL1", apiKey="key"), None)

        assert response['statusCode'] == 502
        assert response_json(response)['details'].startswith("YouTube request failed")
