from typing import List, Optional

from fastapi import APIRouter, Query
from pydantic import BaseModel

from exchange.models.constants import CurrencyCode

router = APIRouter(prefix="/currencies", tags=["currencies"])


class CurrencyOut(BaseModel):
    code: CurrencyCode
    label: str


@router.get("/", response_model=List[CurrencyOut], summary="List selectable currencies")
async def list_currencies(
    exclude: Optional[CurrencyCode] = Query(
        None, description="Currency picked on the other side of the pair"
    ),
):
    return [
        CurrencyOut(code=c, label=c.label) for c in CurrencyCode if c is not exclude
    ]
