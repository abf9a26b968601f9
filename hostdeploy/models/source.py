"""
Source Pointer Models

A source pointer pins the deployable source tree to one upstream revision.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True)
class SourcePointer:
    """Immutable reference to a revision of a git repository."""

    url: str
    rev: str
    ref: Optional[str] = None

    def to_json(self) -> Dict[str, Any]:
        data = {"url": self.url, "rev": self.rev}
        if self.ref:
            data["ref"] = self.ref
        return data

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "SourcePointer":
        return cls(url=data["url"], rev=data["rev"], ref=data.get("ref"))


@dataclass(frozen=True)
class PackedSource:
    """A source directory holding a packed, buildable pointer."""

    pointer: SourcePointer


@dataclass(frozen=True)
class CheckoutSource:
    """A source directory holding a live git checkout."""

    path: Path


SourceState = Union[PackedSource, CheckoutSource]
