import json
import logging
import math
from typing import Iterable, Iterator, Optional, Tuple

from sommelier.models.wine import WineRecord

logger = logging.getLogger(__name__)


DEFAULT_WINES = (
    WineRecord(
        id=1,
        name="Estate Pinot Noir",
        vintage=2021,
        region="Willamette Valley",
        country="USA",
        grapes=("Pinot Noir",),
        style="Light-bodied red",
        tasting_notes="Cherry, raspberry, subtle oak, silky tannins.",
        abv=13.5,
        price=38,
        story="From hillside vineyards with cool nights, focused on elegance and freshness.",
    ),
    WineRecord(
        id=2,
        name="Reserve Chardonnay",
        vintage=2020,
        region="Russian River Valley",
        country="USA",
        grapes=("Chardonnay",),
        style="Full-bodied white",
        tasting_notes="Ripe peach, vanilla, toasted brioche, creamy texture.",
        abv=14.0,
        price=42,
        story="Barrel-fermented Chardonnay from old vines, marrying richness with acidity.",
    ),
    WineRecord(
        id=3,
        name="Rosé of Grenache",
        vintage=2022,
        region="Central Coast",
        country="USA",
        grapes=("Grenache",),
        style="Dry rosé",
        tasting_notes="Strawberry, watermelon, citrus zest, refreshing finish.",
        abv=12.5,
        price=24,
        story="Whole-cluster pressed and fermented cold for bright, vibrant fruit.",
    ),
)


def normalize_wine_id(identifier) -> Optional[int]:
    """Convert a string or numeric identifier to an int, or None if it isn't one."""
    if identifier is None or isinstance(identifier, bool):
        return None
    if isinstance(identifier, int):
        return identifier
    try:
        number = float(str(identifier).strip())
    except ValueError:
        return None
    if not math.isfinite(number) or not number.is_integer():
        return None
    return int(number)


class WineCatalog:
    """Read-only collection of wine records in declaration order."""

    def __init__(self, records: Iterable[WineRecord] = DEFAULT_WINES):
        self._records: Tuple[WineRecord, ...] = tuple(records)
        self._by_id = {}
        for record in self._records:
            if record.id in self._by_id:
                raise ValueError(f"Duplicate wine id {record.id} in catalog")
            self._by_id[record.id] = record

    def find_by_id(self, identifier) -> Optional[WineRecord]:
        """Return the record whose id equals the numeric value of ``identifier``.

        Malformed identifiers are treated as not found rather than raising.
        """
        wine_id = normalize_wine_id(identifier)
        if wine_id is None:
            return None
        return self._by_id.get(wine_id)

    def list_all(self) -> Tuple[WineRecord, ...]:
        return self._records

    def __iter__(self) -> Iterator[WineRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)


def load_wine_catalog(file_path: Optional[str] = None) -> WineCatalog:
    """Load the catalog from a JSON file, or use the built-in wines.

    A JSON object is read as a single record. A missing or unreadable file
    falls back to the built-in catalog; invalid records raise.
    """
    if not file_path:
        return WineCatalog()
    try:
        with open(file_path, "r", encoding="utf-8") as file:
            data = json.load(file)
    except (FileNotFoundError, json.JSONDecodeError):
        logger.warning(f"Could not load wine catalog from {file_path}. Using built-in catalog.")
        return WineCatalog()

    entries = data if isinstance(data, list) else [data]
    catalog = WineCatalog(WineRecord.model_validate(entry) for entry in entries)
    logger.info(f"Loaded {len(catalog)} wines from {file_path}")
    return catalog
