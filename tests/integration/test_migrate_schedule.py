"""
Tests for the schedule migration script (scripts/migrate_schedule.py)
"""

import importlib.util
import json
from pathlib import Path

import pytest
from unittest.mock import Mock

from tests.helpers import create_key_table

SCRIPT_PATH = Path(__file__).resolve().parents[2] / "scripts" / "migrate_schedule.py"


@pytest.fixture(scope="module")
def migrate_module():
    spec = importlib.util.spec_from_file_location("migrate_schedule", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def migration_env(monkeypatch):
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_REGION", "us-east-1")
    monkeypatch.setenv("STORAGE_ACCOUNT_NAME", "azcorestorage2026")
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("SCHEDULE_TABLE", "VideoSchedule")
    monkeypatch.delenv("DYNAMODB_ENDPOINT_URL", raising=False)


@pytest.fixture
def schedule_file(tmp_path):
    path = tmp_path / "video-schedule.json"
    path.write_text(json.dumps({
        'schedule': [
            {'sessionId': "sess_1", 'videoId': "v1", 'title': "Keynote", 'startTime': "2026-03-15T14:00:00Z",
             'duration': 45},
            {'videoId': "v2", 'title': "No session id", 'startTime': "2026-03-16T09:00:00Z"},
            {'title': "No ids at all", 'startTime': "2026-03-16T10:00:00Z"},
            {'sessionId': "sess_4", 'videoId': "v4", 'title': "Bad time", 'startTime': "soon"},
        ]
    }), encoding="utf-8")
    return path


class TestBuildSession:

    def test_row_key_falls_back_to_video_id(self, migrate_module):
        session = migrate_module.build_session({'videoId': "v2", 'startTime': "2026-03-16T09:00:00Z"})

        assert session.row_key == "v2"
        assert session.partition_key == "2026-03-16"
        assert session.url == "https://www.youtube.com/watch?v=v2"
        assert session.duration == 0

    def test_requires_an_id(self, migrate_module):
        with pytest.raises(ValueError, match="neither sessionId nor videoId"):
            migrate_module.build_session({'startTime': "2026-03-16T09:00:00Z"})


class TestMigrate:

    def test_counts_and_progress(self, migrate_module, schedule_file, capsys):
        gateway = Mock()
        items = migrate_module.load_schedule(schedule_file)

        migrated, failed = migrate_module.migrate(items, gateway)

        assert (migrated, failed) == (2, 2)
        assert gateway.put_item.call_count == 2
        output = capsys.readouterr().out
        assert "✅ Uploaded: Keynote" in output
        assert "❌ Failed: Bad time" in output

    def test_load_schedule_requires_list(self, migrate_module, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({'sessions': []}), encoding="utf-8")

        with pytest.raises(ValueError, match="'schedule' list"):
            migrate_module.load_schedule(path)


class TestMain:

    def test_creates_table_and_uploads(self, migrate_module, migration_env, schedule_file, mock_dynamodb_resource):
        exit_code = migrate_module.main([str(schedule_file)])

        assert exit_code == 0
        table = mock_dynamodb_resource.Table("azcorestorage2026_test_VideoSchedule")
        rows = {item['rowKey']: item for item in table.scan()['Items']}
        assert set(rows) == {"sess_1", "v2"}
        assert rows["sess_1"]['partitionKey'] == "2026-03-15"
        assert rows["sess_1"]['duration'] == 45

    def test_existing_table_is_reused(self, migrate_module, migration_env, schedule_file, mock_dynamodb_resource, capsys):
        create_key_table(mock_dynamodb_resource, "azcorestorage2026_test_VideoSchedule")

        exit_code = migrate_module.main([str(schedule_file)])

        assert exit_code == 0
        assert "already exists" in capsys.readouterr().out

    def test_unreadable_file(self, migrate_module, tmp_path, capsys):
        exit_code = migrate_module.main([str(tmp_path / "missing.json"), "--skip-create-table"])

        assert exit_code == 1
        assert "Cannot read" in capsys.readouterr().out

    def test_nothing_migrated_is_failure(self, migrate_module, migration_env, tmp_path, mock_dynamodb_resource):
        path = tmp_path / "empty.json"
        path.write_text(json.dumps({'schedule': []}), encoding="utf-8")

        assert migrate_module.main([str(path)]) == 1
