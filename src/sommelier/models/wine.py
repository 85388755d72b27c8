from pydantic import BaseModel, ConfigDict, Field
from typing import Any, List, Tuple


class WineRecord(BaseModel):
    """A single catalog entry. Records never change once loaded."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    vintage: int
    region: str
    country: str
    grapes: Tuple[str, ...]
    style: str
    tasting_notes: str
    abv: float
    price: float
    story: str


class SommelierRequest(BaseModel):
    # Raw JSON values; the catalog and the endpoint decide what counts as valid
    model_config = ConfigDict(populate_by_name=True)

    wine_id: Any = Field(default=None, alias="wineId")
    user_question: Any = Field(default=None, alias="userQuestion")


class SommelierResponse(BaseModel):
    answer: str


class PromptsResponse(BaseModel):
    mode: str
    prompts: List[str]
