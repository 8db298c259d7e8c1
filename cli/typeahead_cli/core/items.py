"""Suggestion items and label parsing."""

import re
from dataclasses import dataclass
from typing import Any, Hashable, NamedTuple, Optional

# "<name> [<secondary>]" with the bracketed part anchored at the end
_LABEL_PATTERN = re.compile(r"(.+?)(?:\s*\[([^\[\]]+)\])?")


class ParsedName(NamedTuple):
    name: str
    secondary_term: Optional[str] = None


def parse_name(label: str) -> ParsedName:
    """Split a raw label into its primary term and optional bracketed term.

    "Rock [Music]" -> ("Rock", "Music"). Anything that does not parse
    cleanly is returned whole as the name.
    """
    match = _LABEL_PATTERN.fullmatch(label)
    if not match:
        return ParsedName(label)

    name, secondary = match.group(1).strip(), match.group(2)
    if not name or secondary is None or not secondary.strip():
        return ParsedName(label)

    return ParsedName(name, secondary.strip())


@dataclass
class RawItem:
    """A suggestion as returned by the autocomplete service."""

    id: Hashable
    name: str
    avatar: Optional[str] = None
    color: str = ""
    type: str = ""
    match: Optional[float] = None
    existing: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RawItem":
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            avatar=data.get("avatar"),
            color=data.get("color") or "",
            type=data.get("type") or "",
            match=data.get("match"),
            existing=data.get("existing"),
        )


@dataclass
class AutocompleteResponse:
    """One page of autocomplete results."""

    items: list[RawItem]
    pages_left: int = 0


@dataclass(frozen=True)
class SuggestionItem:
    """A display-ready suggestion."""

    id: Hashable
    name: str
    secondary_term: Optional[str] = None
    avatar: Optional[str] = None
    color: str = ""
    type: str = ""
    match: Optional[float] = None
    existing: Optional[bool] = None

    @classmethod
    def from_raw(cls, raw: RawItem) -> "SuggestionItem":
        parsed = parse_name(raw.name)
        return cls(
            id=raw.id,
            name=parsed.name,
            secondary_term=parsed.secondary_term,
            avatar=raw.avatar,
            color=raw.color,
            type=raw.type,
            match=raw.match,
            existing=raw.existing,
        )

    @property
    def label(self) -> str:
        if self.secondary_term:
            return f"{self.name} [{self.secondary_term}]"
        return self.name
