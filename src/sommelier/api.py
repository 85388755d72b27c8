"""HTTP endpoints (thin layer, delegates to services)."""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Request

from sommelier.exceptions import MissingQuestionError, WineNotFoundError
from sommelier.models.wine import PromptsResponse, SommelierRequest, SommelierResponse
from sommelier.services.catalog import WineCatalog
from sommelier.services.projection import FieldSet, project, project_catalog
from sommelier.services.prompts import suggested_prompts
from sommelier.services.sommelier import AISommelier

logger = logging.getLogger(__name__)

router = APIRouter()


def get_catalog(request: Request) -> WineCatalog:
    """Catalog built at startup and shared read-only by every request."""
    return request.app.state.catalog


def get_sommelier(request: Request) -> AISommelier:
    return request.app.state.sommelier


@router.get("/api/wines")
async def list_wines(catalog: WineCatalog = Depends(get_catalog)) -> List[dict]:
    return project_catalog(catalog.list_all(), FieldSet.LISTING)


@router.get("/api/wines/{wine_id}")
async def get_wine(wine_id: str, catalog: WineCatalog = Depends(get_catalog)) -> dict:
    wine = catalog.find_by_id(wine_id)
    if wine is None:
        raise WineNotFoundError()
    return project(wine, FieldSet.FULL)


@router.get("/api/prompts", response_model=PromptsResponse)
async def get_prompts(mode: Optional[str] = None):
    """Starter questions for the UI, for a selected wine or for the whole list."""
    resolved_mode, prompts = suggested_prompts(mode)
    return PromptsResponse(mode=resolved_mode, prompts=prompts)


@router.post("/sommelier", response_model=SommelierResponse)
async def ask_sommelier(
    body: Optional[SommelierRequest] = None,
    sommelier: AISommelier = Depends(get_sommelier),
):
    """Answer a customer question, optionally about one wine (``wineId``).

    An unknown ``wineId`` is not an error; the question is answered against
    the whole catalog instead.
    """
    question = body.user_question if body else None
    if not isinstance(question, str) or not question.strip():
        raise MissingQuestionError()
    question = question.strip()

    logger.info(f"Sommelier question received (wineId={body.wine_id!r})")
    answer = await sommelier.answer(question, wine_id=body.wine_id)
    return SommelierResponse(answer=answer)


@router.get("/api/health")
async def health():
    return {"status": "ok"}
