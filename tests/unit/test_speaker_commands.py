"""
Tests for SpeakerWriteApi and SpeakerReadApi (handlers/speakers/)
"""

import json

import pytest
from unittest.mock import Mock, patch

from conference_api.config import SiteConfig
from conference_api.exceptions import ItemNotFoundError
from conference_api.handlers.speakers import SpeakerReadApi, SpeakerWriteApi
from conference_api.models import SpeakerCreate, SpeakerUpdate


def stored_speaker(speaker_id, name, session_ids=None, **fields):
    item = {
        'partitionKey': 'speaker',
        'rowKey': speaker_id,
        'name': name,
        'sessionIds': json.dumps(session_ids or []),
    }
    item.update(fields)
    return item


@pytest.fixture
def config():
    return SiteConfig(environment="test")


@pytest.fixture
def speaker_gateway():
    gateway = Mock()
    gateway.scan_all.return_value = iter([])
    gateway.get_item.return_value = None
    return gateway


@pytest.fixture
def schedule_gateway():
    gateway = Mock()
    gateway.scan_all.return_value = iter([])
    return gateway


@pytest.fixture
def write_api(config, speaker_gateway, schedule_gateway):
    def pick_gateway(_config, table_name):
        return speaker_gateway if table_name == _config.speakers_table else schedule_gateway

    with patch('conference_api.handlers.speakers.commands.create_table_gateway', side_effect=pick_gateway):
        yield SpeakerWriteApi(config)


@pytest.fixture
def read_api(config, speaker_gateway):
    with patch('conference_api.handlers.speakers.queries.create_table_gateway', return_value=speaker_gateway):
        yield SpeakerReadApi(config)


class TestSpeakerReadApi:
    """Test list and get."""

    def test_list_sorted_case_insensitively(self, read_api, speaker_gateway):
        speaker_gateway.scan_all.return_value = iter([
            stored_speaker("z", "zoe Adams"),
            stored_speaker("b", "Bob Brown"),
            stored_speaker("a", "alice Carter"),
        ])

        names = [view.name for view in read_api.list_speakers()]

        assert names == ["alice Carter", "Bob Brown", "zoe Adams"]

    def test_get_speaker_is_a_point_read(self, read_api, speaker_gateway):
        speaker_gateway.get_item.return_value = stored_speaker("jane-ab12", "Jane", ["s1"])

        view = read_api.get_speaker("jane-ab12")

        assert view.session_ids == ["s1"]
        speaker_gateway.get_item.assert_called_once_with("speaker", "jane-ab12")

    def test_get_missing_speaker(self, read_api):
        with pytest.raises(ItemNotFoundError, match="Speaker not found"):
            read_api.get_speaker("nobody")


class TestSpeakerWriteApi:
    """Test create, update and delete."""

    def test_create_speaker(self, write_api, speaker_gateway):
        speaker = write_api.create_speaker(SpeakerCreate(name="Jane Doe", company="Contoso"))

        assert speaker.row_key.startswith("jane-doe-")
        item = speaker_gateway.put_item.call_args.args[0]
        assert item['partitionKey'] == "speaker"
        assert item['company'] == "Contoso"
        assert item['bio'] == ""
        assert item['sessionIds'] == "[]"

    def test_update_keeps_unspecified_fields(self, write_api, speaker_gateway):
        speaker_gateway.get_item.return_value = stored_speaker("jane", "Jane", ["s1"], company="Contoso", bio="Bio")

        updated = write_api.update_speaker("jane", SpeakerUpdate(name="", bio="", session_ids=["s1", "s2"]))

        assert updated.name == "Jane"
        assert updated.company == "Contoso"
        assert updated.bio == ""
        assert updated.session_ids == ["s1", "s2"]
        assert speaker_gateway.put_item.call_args.args[0]['sessionIds'] == '["s1", "s2"]'

    def test_update_missing_speaker(self, write_api, speaker_gateway):
        with pytest.raises(ItemNotFoundError):
            write_api.update_speaker("nobody", SpeakerUpdate(name="X"))
        speaker_gateway.put_item.assert_not_called()

    def test_delete_speaker(self, write_api, speaker_gateway):
        speaker_gateway.get_item.return_value = stored_speaker("jane", "Jane")

        write_api.delete_speaker("jane")

        speaker_gateway.delete_item.assert_called_once_with("speaker", "jane")

    def test_delete_missing_speaker(self, write_api, speaker_gateway):
        with pytest.raises(ItemNotFoundError):
            write_api.delete_speaker("nobody")
        speaker_gateway.delete_item.assert_not_called()


class TestExtractFromSchedule:
    """Test extract_from_schedule."""

    def test_merges_existing_and_creates_new(self, write_api, speaker_gateway, schedule_gateway):
        speaker_gateway.scan_all.return_value = iter([stored_speaker("jane-x1", "Jane Doe", ["s0", "s1"])])
        schedule_gateway.scan_all.return_value = iter([
            {'partitionKey': '2026-03-15', 'rowKey': 's1', 'description': 'Speakers: JANE DOE, John Smith'},
            {'partitionKey': '2026-03-15', 'rowKey': 's2', 'description': 'Speaker: Jane Doe'},
            {'partitionKey': '2026-03-16', 'rowKey': 's3', 'description': 'No speakers listed'},
        ])

        result = write_api.extract_from_schedule()

        assert result.created == 1
        assert result.updated == 1
        summaries = {summary.name: summary for summary in result.speakers}
        assert summaries["JANE DOE"].action == "updated"
        assert summaries["JANE DOE"].sessions == 3
        assert summaries["John Smith"].action == "created"
        assert summaries["John Smith"].sessions == 1

        items = [call.args[0] for call in speaker_gateway.put_item.call_args_list]
        merged = next(item for item in items if item['rowKey'] == "jane-x1")
        assert json.loads(merged['sessionIds']) == ["s0", "s1", "s2"]
        assert merged['name'] == "Jane Doe"
        created = next(item for item in items if item['rowKey'] != "jane-x1")
        assert created['name'] == "John Smith"
        assert json.loads(created['sessionIds']) == ["s1"]

    def test_nothing_to_extract(self, write_api, speaker_gateway):
        result = write_api.extract_from_schedule()

        assert result.created == result.updated == 0
        assert result.speakers == []
        speaker_gateway.put_item.assert_not_called()
