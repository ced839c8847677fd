"""
History API - Recent translations
"""
from typing import List

from fastapi import APIRouter, Depends, Response, status

from lingosync.api.deps import get_history
from lingosync.schemas.translation import HistoryItem
from lingosync.services.history import HistoryCache

router = APIRouter()


@router.get("/history", response_model=List[HistoryItem], response_model_by_alias=True)
async def list_history(history: HistoryCache = Depends(get_history)):
    """Most recent translations first."""
    return history.items


@router.delete("/history", status_code=status.HTTP_204_NO_CONTENT)
async def clear_history(history: HistoryCache = Depends(get_history)):
    await history.clear()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
