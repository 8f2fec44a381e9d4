"""Value objects produced by the minutes (PV) parser.

Every object is created fresh for a single parse call. ``to_dict()`` emits the
field names used by the meeting store (camelCase), dropping optional keys
whose value is None.
"""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
PDF_MEDIA_TYPE = "application/pdf"
TEXT_MEDIA_TYPE = "text/plain"

DEFAULT_DURATION = 15
DEFAULT_PRESENTER = "Coordinator"
UNTITLED = "Untitled"


def generate_id() -> str:
    """Generate a UUID for use as an attendee id."""
    return str(uuid.uuid4())


def _drop_none(d: dict) -> dict:
    return {k: v for k, v in d.items() if v is not None}


def _enum_or_raw(enum_cls, value):
    """Enum member for a known value, else the stored string unchanged."""
    try:
        return enum_cls(value)
    except ValueError:
        return value


def enum_value(value) -> Optional[str]:
    """Storage string for an enum member or a raw string kept from a record."""
    if isinstance(value, Enum):
        return value.value
    return value


class BlockKind(str, Enum):
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    LIST_ITEM = "list_item"


class MinuteType(str, Enum):
    RESOLUTION = "resolution"
    COMMENT = "comment"


class Objective(str, Enum):
    DECISION = "Decision"
    INFORMATION = "Information"


@dataclass
class RawDocument:
    """Opaque document payload plus its declared media type."""
    content: bytes
    media_type: str = DOCX_MEDIA_TYPE
    filename: str = ""


@dataclass
class TextBlock:
    """One paragraph/heading/list element in document order."""
    kind: BlockKind
    text: str
    emphasized: bool = False


@dataclass
class ParsedMeetingMetadata:
    title: Optional[str] = None
    date: Optional[str] = None
    meeting_number: Optional[str] = None


@dataclass
class Attendee:
    id: str
    name: str
    role: str = "Membre"
    is_present: bool = True
    member_id: Optional[str] = None

    def to_dict(self) -> dict:
        return _drop_none({
            "id": self.id,
            "name": self.name,
            "role": self.role,
            "isPresent": self.is_present,
            "memberId": self.member_id,
        })


# Storage keys of an agenda record known to AgendaItem; anything else is
# carried through ``extra`` untouched.
AGENDA_ITEM_KEYS = {
    "id", "order", "title", "duration", "presenter", "objective", "description",
    "minuteEntries", "minuteType", "minuteNumber", "decision", "proposer", "seconder",
}


@dataclass
class MinuteEntry:
    """A resolution or comment recorded under an agenda item.

    ``type`` is a plain string when read from a record whose value is not a
    ``MinuteType``.
    """
    type: Union[MinuteType, str]
    number: str
    content: str = ""
    proposer: Optional[str] = None
    seconder: Optional[str] = None

    def to_dict(self) -> dict:
        return _drop_none({
            "type": enum_value(self.type),
            "number": self.number,
            "content": self.content,
            "proposer": self.proposer,
            "seconder": self.seconder,
        })

    @classmethod
    def from_dict(cls, data: dict) -> "MinuteEntry":
        return cls(
            type=_enum_or_raw(MinuteType, data.get("type", "")),
            number=data.get("number", ""),
            content=data.get("content", ""),
            proposer=data.get("proposer"),
            seconder=data.get("seconder"),
        )


@dataclass
class AgendaItem:
    id: str
    order: int
    title: str = UNTITLED
    duration: int = DEFAULT_DURATION
    presenter: str = DEFAULT_PRESENTER
    objective: Union[Objective, str] = Objective.INFORMATION
    description: str = ""
    minute_entries: list[MinuteEntry] = field(default_factory=list)
    # Scalar mirrors of the first entry, kept for older meeting records
    minute_type: Union[MinuteType, str, None] = None
    minute_number: Optional[str] = None
    decision: str = ""
    proposer: Optional[str] = None
    seconder: Optional[str] = None
    # Record fields this model does not interpret (e.g. linkedProjectId)
    extra: dict = field(default_factory=dict)

    def mirror_first_entry(self):
        """Copy the first minute entry into the legacy scalar fields."""
        if not self.minute_entries:
            return
        first = self.minute_entries[0]
        self.minute_type = first.type
        self.minute_number = first.number
        self.decision = first.content
        self.proposer = first.proposer or ""
        self.seconder = first.seconder or ""

    @property
    def objective_value(self) -> str:
        return enum_value(self.objective)

    def to_dict(self) -> dict:
        known = _drop_none({
            "id": self.id,
            "order": self.order,
            "title": self.title,
            "duration": self.duration,
            "presenter": self.presenter,
            "objective": self.objective_value,
            "description": self.description,
            "minuteEntries": [e.to_dict() for e in self.minute_entries],
            "minuteType": enum_value(self.minute_type) or None,
            "minuteNumber": self.minute_number,
            "decision": self.decision,
            "proposer": self.proposer,
            "seconder": self.seconder,
        })
        return {**known, **self.extra}

    @classmethod
    def from_dict(cls, data: dict) -> "AgendaItem":
        """Build an item from a stored agenda record.

        Stored records may predate minute entries, so every field except
        ``id`` is optional. Values outside the enums are kept as strings and
        unknown keys go to ``extra``, so ``to_dict`` gives the record back.
        """
        objective = data.get("objective") or Objective.INFORMATION.value
        minute_type = data.get("minuteType")
        return cls(
            id=str(data["id"]),
            order=int(data.get("order", 0)),
            title=data.get("title", UNTITLED),
            duration=int(data.get("duration", DEFAULT_DURATION)),
            presenter=data.get("presenter", DEFAULT_PRESENTER),
            objective=_enum_or_raw(Objective, objective),
            description=data.get("description", ""),
            minute_entries=[MinuteEntry.from_dict(e) for e in data.get("minuteEntries", [])],
            minute_type=_enum_or_raw(MinuteType, minute_type) if minute_type else None,
            minute_number=data.get("minuteNumber"),
            decision=data.get("decision", ""),
            proposer=data.get("proposer"),
            seconder=data.get("seconder"),
            extra={k: v for k, v in data.items() if k not in AGENDA_ITEM_KEYS},
        )


@dataclass
class ParsedMeetingData:
    """Complete result of parsing one minutes or agenda document."""
    title: Optional[str] = None
    date: Optional[str] = None
    meeting_number: Optional[str] = None
    agenda_items: list[AgendaItem] = field(default_factory=list)
    attendees: list[Attendee] = field(default_factory=list)

    @property
    def minute_entries(self) -> list[MinuteEntry]:
        return [e for item in self.agenda_items for e in item.minute_entries]

    def to_dict(self) -> dict:
        return _drop_none({
            "title": self.title,
            "date": self.date,
            "meetingNumber": self.meeting_number,
            "agendaItems": [item.to_dict() for item in self.agenda_items],
            "attendees": [a.to_dict() for a in self.attendees],
        })
