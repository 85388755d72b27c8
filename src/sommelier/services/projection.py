from enum import Enum
from typing import Iterable, List, Optional

from sommelier.models.wine import WineRecord


class FieldSet(Enum):
    """Named subsets of WineRecord fields, in serialization order."""

    FULL = (
        "id", "name", "vintage", "region", "country", "grapes",
        "style", "tasting_notes", "abv", "price", "story",
    )
    CATALOG = (
        "id", "name", "vintage", "region", "style", "grapes",
        "tasting_notes", "abv", "price",
    )
    LISTING = (
        "id", "name", "vintage", "region", "style", "price",
        "grapes", "tasting_notes",
    )
    MINIMAL = ("id", "name", "vintage", "style", "price")

    @property
    def fields(self) -> tuple:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> "FieldSet":
        """Look up a field set by name, ignoring case."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            valid = ", ".join(member.name.lower() for member in cls)
            raise ValueError(f"Unknown field set '{name}'. Expected one of: {valid}") from None


def project(record: Optional[WineRecord], fields: FieldSet = FieldSet.CATALOG) -> Optional[dict]:
    """Reduce a record to the given field set.

    Args:
        record: The record to project, or None.
        fields: Which fields to keep.

    Returns:
        dict: JSON-ready values keyed in field-set order, or None when
        ``record`` is None.
    """
    if record is None:
        return None
    data = record.model_dump(mode="json")
    return {name: data[name] for name in fields.fields}


def project_catalog(records: Iterable[WineRecord], fields: FieldSet = FieldSet.CATALOG) -> List[dict]:
    """Project every record, preserving order."""
    return [project(record, fields) for record in records]
