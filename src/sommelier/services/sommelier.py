import json
import logging
from typing import Optional

from sommelier.exceptions import UpstreamError
from sommelier.models.brand import BrandConfig, DEFAULT_BRAND
from sommelier.models.wine import WineRecord
from sommelier.services.catalog import WineCatalog
from sommelier.services.llm import LLMService
from sommelier.services.projection import FieldSet, project, project_catalog
from sommelier.services.prompts import build_sommelier_instructions

logger = logging.getLogger(__name__)


class AISommelier:
    """Answers customer questions about the catalog using an LLM service."""

    def __init__(
        self,
        catalog: WineCatalog,
        llm: LLMService,
        brand: BrandConfig = DEFAULT_BRAND,
        catalog_fields: FieldSet = FieldSet.CATALOG,
        max_output_tokens: Optional[int] = None,
    ):
        self.catalog = catalog
        self.llm = llm
        self.brand = brand
        self.catalog_fields = catalog_fields
        self.max_output_tokens = max_output_tokens
        self.instructions = build_sommelier_instructions(
            brand, catalog_fields=catalog_fields, wine_fields=FieldSet.FULL
        )

    def resolve_current_wine(self, wine_id) -> Optional[WineRecord]:
        """Find the wine in focus; an unknown id is logged and ignored."""
        if wine_id is None or wine_id == "":
            return None
        wine = self.catalog.find_by_id(wine_id)
        if wine is None:
            logger.warning(f"Wine with id {wine_id} not found; continuing without it.")
        return wine

    def build_payload(self, current_wine: Optional[WineRecord]) -> dict:
        return {
            "current_wine": project(current_wine, FieldSet.FULL),
            "catalog": project_catalog(self.catalog.list_all(), self.catalog_fields),
        }

    async def answer(self, question: str, wine_id=None) -> str:
        """Answer ``question``, focusing on ``wine_id`` when it names a catalog wine.

        Raises:
            UpstreamError: If the completion call fails.
        """
        current_wine = self.resolve_current_wine(wine_id)
        payload = json.dumps(self.build_payload(current_wine), indent=2, ensure_ascii=False)
        try:
            return await self.llm.generate(
                self.instructions,
                payload,
                question,
                max_output_tokens=self.max_output_tokens,
            )
        except UpstreamError:
            raise
        except Exception as e:
            raise UpstreamError(f"LLM service failed: {e}") from e
