"""Member roster reconciliation for parsed attendees.

Links attendee names read from a PV to committee member records.
Matching order:
1. Exact match on normalized display name
2. Exact match on a known alias
3. Fuzzy match (token sort ratio > 0.85)
4. No match

The roster is loaded from a YAML file:

    members:
      - id: m-001
        display_name: Jean Tremblay
        aliases: [Jean-Guy Tremblay]
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml
from rapidfuzz import fuzz

from pvparser.exceptions import RosterError
from pvparser.models import Attendee
from pvparser.utils.text import normalize_person_name

logger = logging.getLogger(__name__)

DEFAULT_ROSTER_PATH = Path("data/seed/members.yaml")
FUZZY_THRESHOLD = 0.85


@dataclass
class Member:
    id: str
    display_name: str
    aliases: list[str] = field(default_factory=list)


def load_roster(roster_path: Path | None = None) -> list[Member]:
    """Load committee members from a YAML roster file.

    Raises:
        FileNotFoundError: If the roster file does not exist.
        RosterError: If the file is not a list of members with id and display_name.
    """
    roster_path = Path(roster_path or DEFAULT_ROSTER_PATH)
    if not roster_path.exists():
        raise FileNotFoundError(f"Roster file not found: {roster_path}")

    with open(roster_path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise RosterError(f"Invalid roster YAML in {roster_path}: {e}") from e

    if not isinstance(data, dict):
        raise RosterError(f"Roster {roster_path} must be a mapping with a 'members' list")

    members = []
    for entry in data.get("members", []):
        if not isinstance(entry, dict) or "id" not in entry or "display_name" not in entry:
            raise RosterError(f"Roster entry missing id or display_name: {entry!r}")
        members.append(Member(
            id=str(entry["id"]),
            display_name=entry["display_name"],
            aliases=list(entry.get("aliases") or []),
        ))

    logger.info(f"Loaded {len(members)} members from {roster_path}")
    return members


class MemberRoster:
    """Resolves attendee names to committee member ids."""

    def __init__(self, members: list[Member]):
        self._members = {m.id: m for m in members}
        self._name_to_id = {}  # normalized display name -> member id
        self._alias_to_id = {}  # normalized alias -> member id
        for m in members:
            self._name_to_id[normalize_person_name(m.display_name)] = m.id
            for alias in m.aliases:
                self._alias_to_id[normalize_person_name(alias)] = m.id

    @classmethod
    def from_yaml(cls, roster_path: Path | None = None) -> "MemberRoster":
        return cls(load_roster(roster_path))

    def resolve(self, name: str) -> Optional[tuple[str, str]]:
        """Resolve a name to (member_id, match_type).

        match_type is one of 'exact', 'alias', 'fuzzy'. Returns None if no
        member matches.
        """
        if not name or not name.strip():
            return None

        normalized = normalize_person_name(name)

        if normalized in self._name_to_id:
            member_id = self._name_to_id[normalized]
            logger.debug(f"Member exact match: '{name}' -> {member_id}")
            return member_id, "exact"

        if normalized in self._alias_to_id:
            member_id = self._alias_to_id[normalized]
            logger.debug(f"Member alias match: '{name}' -> {member_id}")
            return member_id, "alias"

        best_id = None
        best_score = 0.0
        for member_id, member in self._members.items():
            candidates = [member.display_name] + member.aliases
            for candidate in candidates:
                score = fuzz.token_sort_ratio(
                    normalized, normalize_person_name(candidate)
                ) / 100.0
                if score > FUZZY_THRESHOLD and score > best_score:
                    best_score = score
                    best_id = member_id

        if best_id:
            logger.info(f"Member fuzzy match: '{name}' -> {best_id} (score={best_score:.3f})")
            return best_id, "fuzzy"

        logger.warning(f"No member match for: '{name}'")
        return None

    def reconcile_attendees(self, attendees: list[Attendee]) -> dict:
        """Set ``member_id`` on every attendee that resolves to a member.

        Returns:
            Dict with counts per match type plus 'unmatched'.
        """
        stats = {"exact": 0, "alias": 0, "fuzzy": 0, "unmatched": 0}
        for attendee in attendees:
            result = self.resolve(attendee.name)
            if result is None:
                stats["unmatched"] += 1
                continue
            attendee.member_id, match_type = result
            stats[match_type] += 1
        return stats

    def get_stats(self) -> dict:
        return {
            "total_members": len(self._members),
            "total_aliases": len(self._alias_to_id),
        }
