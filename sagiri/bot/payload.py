"""
Callback payload codec.

Inline buttons carry everything needed to resume a view in their callback
data, as a slash-delimited path:

    /{kitsu_id}/offset/{offset}/
    /{kitsu_id}/detail/{anime_id}/
    /{kitsu_id}/progress/{anime_id}/{entry_id}/{progress}/

Numeric segments are ASCII decimal digits. String ids are opaque Kitsu ids
and must not contain a slash.
"""

import re
from typing import List

from sagiri.errors import ParseError
from sagiri.models.commands import Detail, Offset, Progress, QueryCommand

MAX_INT64 = 2 ** 63 - 1

OFFSET = "offset"
DETAIL = "detail"
PROGRESS = "progress"

_DIGITS_RE = re.compile(r"[0-9]+")


def is_numeric_id(value: str) -> bool:
    """Return True if an opaque id can be carried in a numeric payload slot."""
    return bool(_DIGITS_RE.fullmatch(value)) and int(value) <= MAX_INT64


def _parse_int(segment: str, field: str) -> int:
    if not _DIGITS_RE.fullmatch(segment):
        raise ParseError(f"Expected a number for {field}, got {segment!r}")
    value = int(segment)
    if value > MAX_INT64:
        raise ParseError(f"{field} out of range: {segment}")
    return value


def _split(payload: str) -> List[str]:
    if len(payload) < 2 or not payload.startswith("/") or not payload.endswith("/"):
        raise ParseError(f"Payload must start and end with '/': {payload!r}")
    segments = payload[1:-1].split("/")
    if any(segment == "" for segment in segments):
        raise ParseError(f"Empty segment in payload: {payload!r}")
    return segments


def parse_query_command(payload: str) -> QueryCommand:
    """
    Parse a callback payload into a query command.

    Args:
        payload: Callback data attached to an inline button

    Returns:
        Offset, Detail or Progress command

    Raises:
        ParseError: On a wrong field count, a non-numeric id or count,
            or an unknown discriminator
    """
    segments = _split(payload)
    if len(segments) < 2:
        raise ParseError(f"Payload too short: {payload!r}")

    kitsu_id = _parse_int(segments[0], "kitsu id")
    kind, fields = segments[1], segments[2:]

    if kind == OFFSET and len(fields) == 1:
        return Offset(list_subject_id=kitsu_id, offset=_parse_int(fields[0], "offset"))
    if kind == DETAIL and len(fields) == 1:
        return Detail(list_subject_id=kitsu_id, entry_subject_id=_parse_int(fields[0], "anime id"))
    if kind == PROGRESS and len(fields) == 3:
        anime_id, entry_id, progress = fields
        return Progress(
            list_subject_id=kitsu_id,
            entry_subject_id=anime_id,
            list_entry_id=entry_id,
            progress=_parse_int(progress, "progress"),
        )
    if kind in (OFFSET, DETAIL, PROGRESS):
        raise ParseError(f"Wrong number of fields for {kind}: {payload!r}")
    raise ParseError(f"Unknown payload kind {kind!r}")


def _check_int(value: int, field: str) -> str:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{field} must be an integer, got {value!r}")
    if value < 0 or value > MAX_INT64:
        raise ValueError(f"{field} out of range: {value}")
    return str(value)


def _check_id(value: str, field: str) -> str:
    if not isinstance(value, str) or not value or "/" in value:
        raise ValueError(f"{field} must be a non-empty string without '/', got {value!r}")
    return value


def _join(*segments: str) -> str:
    return "/" + "/".join(segments) + "/"


def encode_query_command(command: QueryCommand) -> str:
    """
    Encode a query command as callback data.

    Raises:
        ValueError: If a field cannot be represented in the payload grammar
    """
    kitsu_id = _check_int(command.list_subject_id, "kitsu id")
    if isinstance(command, Offset):
        return _join(kitsu_id, OFFSET, _check_int(command.offset, "offset"))
    if isinstance(command, Detail):
        return _join(kitsu_id, DETAIL, _check_int(command.entry_subject_id, "anime id"))
    if isinstance(command, Progress):
        return _join(
            kitsu_id,
            PROGRESS,
            _check_id(command.entry_subject_id, "anime id"),
            _check_id(command.list_entry_id, "entry id"),
            _check_int(command.progress, "progress"),
        )
    raise TypeError(f"Not a query command: {command!r}")


def offset_payload(kitsu_id: int, offset: int) -> str:
    return encode_query_command(Offset(list_subject_id=kitsu_id, offset=offset))


def detail_payload(kitsu_id: int, anime_id: int) -> str:
    return encode_query_command(Detail(list_subject_id=kitsu_id, entry_subject_id=anime_id))


def progress_payload(kitsu_id: int, anime_id: str, entry_id: str, progress: int) -> str:
    return encode_query_command(
        Progress(
            list_subject_id=kitsu_id,
            entry_subject_id=anime_id,
            list_entry_id=entry_id,
            progress=progress,
        )
    )
