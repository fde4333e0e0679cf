from typing import List

from fastapi import APIRouter, HTTPException, Query  # type: ignore
from pydantic import BaseModel, Field  # type: ignore

from autodiag.diagnostics.matcher import DEFAULT_LABOR_RATE, ComponentMatcher
from autodiag.models.catalog import Category, ComponentRecord
from autodiag.models.diagnostic import CostAggregate

router = APIRouter(
    prefix="/components",
    tags=["Component Catalog"]
)

matcher = ComponentMatcher()


class EstimateRequest(BaseModel):
    component_ids: List[str]
    labor_rate: float = Field(DEFAULT_LABOR_RATE, ge=0)


@router.get("/search", response_model=List[ComponentRecord])
def search_components(q: str = Query(..., min_length=1, max_length=200)):
    return matcher.search_free_text(q)


@router.get("/codes", response_model=List[ComponentRecord])
def components_for_codes(code: List[str] = Query(...)):
    return matcher.match_by_trouble_codes(c.upper() for c in code)


@router.get("/make/{make}", response_model=List[ComponentRecord])
def components_for_make(make: str):
    return matcher.match_by_make(make)


@router.get("/category/{category}", response_model=List[ComponentRecord])
def components_for_category(category: Category):
    return matcher.by_category(category)


@router.post("/estimate", response_model=CostAggregate)
def estimate_cost(payload: EstimateRequest):
    components = []
    for component_id in payload.component_ids:
        component = matcher.get(component_id)
        if component is None:
            raise HTTPException(status_code=404, detail=f"Unknown component {component_id}")
        components.append(component)

    return matcher.aggregate_cost(components, payload.labor_rate)
