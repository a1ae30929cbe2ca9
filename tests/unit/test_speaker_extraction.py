"""
Tests for speaker name mining (utils/speaker_extraction.py)
"""

import pytest

from conference_api.utils.speaker_extraction import (
    clean_speaker_name,
    extract_speaker_names,
    extract_speakers,
)


class TestExtractSpeakerNames:
    """Test extract_speaker_names on single descriptions."""

    def test_single_speaker_line(self):
        assert extract_speaker_names("Speaker: Jane Doe\nOther text") == ["Jane Doe"]

    def test_comma_separated_with_roles_and_companies(self):
        description = "Speakers: Jane Doe - Cloud Advocate, John Smith (Contoso)"
        assert extract_speaker_names(description) == ["Jane Doe", "John Smith"]

    def test_label_is_case_insensitive(self):
        assert extract_speaker_names("SPEAKERS: Jane Doe") == ["Jane Doe"]
        assert extract_speaker_names("speaker: jane doe") == ["jane doe"]

    def test_lowercase_continuation_line_is_included(self):
        description = "Speakers: Jane Doe,\njohn smith\nJoin us live"
        assert extract_speaker_names(description) == ["Jane Doe", "john smith"]

    def test_numbered_continuation_lines(self):
        description = "Speakers: 1. Jane Doe\n2. John Smith\nAgenda follows"
        assert extract_speaker_names(description) == ["Jane Doe", "John Smith"]

    def test_label_followed_by_newline(self):
        assert extract_speaker_names("Speakers:\nJane Doe") == ["Jane Doe"]

    @pytest.mark.parametrize("marker", ["#", "✅", "\U0001F4C5", "⁉️", "Q"])
    def test_continuation_stops_at_marker(self, marker):
        description = f"Speaker: Jane Doe\n{marker}ignored name"
        assert extract_speaker_names(description) == ["Jane Doe"]

    @pytest.mark.parametrize("candidate", [
        "https://example.com/jane",
        "jane@example.com",
        "Al",
        "This Is A Very Long Sentence",
    ])
    def test_rejected_candidates(self, candidate):
        assert extract_speaker_names(f"Speaker: {candidate}") == []

    def test_multiple_labels_in_one_description(self):
        description = "Speaker: Jane Doe\n\nIntro text\nSpeakers: John Smith"
        assert extract_speaker_names(description) == ["Jane Doe", "John Smith"]

    def test_no_label(self):
        assert extract_speaker_names("A talk about cloud storage") == []

    def test_empty_and_none_description(self):
        assert extract_speaker_names("") == []
        assert extract_speaker_names(None) == []


class TestCleanSpeakerName:
    """Test clean_speaker_name."""

    @pytest.mark.parametrize("candidate,expected", [
        ("3. Jane Doe", "Jane Doe"),
        ("Jane Doe – Principal PM", "Jane Doe"),
        ("Jane Doe — Microsoft", "Jane Doe"),
        ("Jane Doe (Contoso) ", "Jane Doe"),
        ("Jane Doe", "Jane Doe"),
    ])
    def test_clean(self, candidate, expected):
        assert clean_speaker_name(candidate) == expected


class TestExtractSpeakers:
    """Test extract_speakers across sessions."""

    def test_deduplicates_case_insensitively_first_spelling_wins(self):
        sessions = [
            ("sess_1", "Speaker: Jane Doe"),
            ("sess_2", "Speaker: JANE DOE"),
            ("sess_1", "Speaker: jane doe"),
        ]

        speakers = extract_speakers(sessions)

        assert list(speakers) == ["jane doe"]
        assert speakers["jane doe"].name == "Jane Doe"
        assert speakers["jane doe"].session_ids == ["sess_1", "sess_2"]

    def test_preserves_encounter_order(self):
        sessions = [
            ("sess_1", "Speakers: Zoe Adams, Bob Brown"),
            ("sess_2", "Speaker: Alice Carter"),
        ]

        speakers = extract_speakers(sessions)

        assert [s.name for s in speakers.values()] == ["Zoe Adams", "Bob Brown", "Alice Carter"]
        assert speakers["alice carter"].session_ids == ["sess_2"]

    def test_sessions_without_speakers(self):
        assert extract_speakers([("sess_1", "No speakers here"), ("sess_2", "")]) == {}
