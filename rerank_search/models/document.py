"""Document data models for the search service."""

from typing import Any, Dict
from dataclasses import dataclass


@dataclass(frozen=True)
class Document:
    """A stored record as returned by the document table or match RPC."""
    id: Any
    title: str
    content: str

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Document":
        return cls(id=row.get("id"), title=row.get("title"), content=row.get("content"))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content
        }
