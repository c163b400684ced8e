"""
Development reset route
"""
from fastapi import APIRouter, Depends

from ...application.services import InitializeService
from ...schemas import InitializeResponse
from ..dependencies import get_initialize_service

router = APIRouter(tags=["Initialize"])


@router.post("/initialize", response_model=InitializeResponse)
async def initialize(
    initialize_service: InitializeService = Depends(get_initialize_service)
):
    """Drop and recreate every table, then reload the bundled SQL data"""
    await initialize_service.initialize()
    return InitializeResponse(language="python")
