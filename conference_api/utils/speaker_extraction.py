"""
Best-effort speaker name mining from session descriptions.

Descriptions are free text written for YouTube, e.g.::

    Speakers: Jane Doe - Cloud Advocate, John Smith (Contoso)
    📅 Join us live!

This is a heuristic scan with no precision or recall guarantees: it finds
"Speaker:"/"Speakers:" labels, takes the rest of the line plus continuation
lines, and keeps candidates that look like short personal names. It performs
no storage access; merging into the speaker table is done by
SpeakerWriteApi.extract_from_schedule().
"""

import re
from typing import Dict, Iterable, List, Tuple

from pydantic import BaseModel, Field

# Continuation lines stop at an upper-case letter, a heading or an emoji marker
_SPEAKER_BLOCK = re.compile(
    r"(?i:speakers?):\s*([^\n]+(?:\n(?![A-Z#✅\U0001F4C5⁉️])[^\n]+)*)"
)
_NAME_SEPARATORS = re.compile(r"[,\n]")
_LIST_PREFIX = re.compile(r"^\d+\.\s*")
_ROLE_SUFFIX = re.compile(r"\s*[-–—]\s*.*$")
_PARENTHETICAL = re.compile(r"\s*\(.*\)")

MIN_NAME_LENGTH = 3
MAX_NAME_WORDS = 4


class ExtractedSpeaker(BaseModel):
    """A speaker name found in one or more session descriptions."""

    name: str = Field(..., description="Display name as first encountered")
    session_ids: List[str] = Field(default_factory=list, description="Sessions mentioning the speaker, in encounter order")


def clean_speaker_name(candidate: str) -> str:
    """Strip list numbering, a trailing ' - role' and a parenthetical from a candidate."""
    name = _LIST_PREFIX.sub("", candidate)
    name = _ROLE_SUFFIX.sub("", name)
    name = _PARENTHETICAL.sub("", name, count=1)
    return name.strip()


def extract_speaker_names(description: str) -> List[str]:
    """Return the speaker names mentioned in one description, in order.

    Examples:
        >>> extract_speaker_names("Speaker: Jane Doe\\nOther text")
        ['Jane Doe']
    """
    names = []
    for match in _SPEAKER_BLOCK.finditer(description or ""):
        section = match.group(1).strip()
        for candidate in _NAME_SEPARATORS.split(section):
            candidate = candidate.strip()
            if len(candidate) < MIN_NAME_LENGTH or "http" in candidate or "@" in candidate:
                continue

            name = clean_speaker_name(candidate)
            if len(name) >= MIN_NAME_LENGTH and len(name.split(" ")) <= MAX_NAME_WORDS:
                names.append(name)
    return names


def extract_speakers(sessions: Iterable[Tuple[str, str]]) -> Dict[str, ExtractedSpeaker]:
    """Collect speakers across sessions, deduplicated case-insensitively.

    Args:
        sessions: (session_id, description) pairs

    Returns:
        Mapping of lower-cased name to ExtractedSpeaker, in first-seen order
    """
    speakers: Dict[str, ExtractedSpeaker] = {}
    for session_id, description in sessions:
        for name in extract_speaker_names(description):
            key = name.lower()
            speaker = speakers.setdefault(key, ExtractedSpeaker(name=name))
            if session_id not in speaker.session_ids:
                speaker.session_ids.append(session_id)
    return speakers
