"""
Chair routes
"""
from fastapi import APIRouter, Depends, File, UploadFile, status
from fastapi.responses import Response

from ...application.services import ChairService
from ...schemas import ChairResponse
from ..dependencies import get_chair_service


router = APIRouter(prefix="/api/chair", tags=["Chairs"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def post_chair(
    chairs: UploadFile = File(...),
    chair_service: ChairService = Depends(get_chair_service)
):
    """
    Bulk insert chairs from a CSV file

    - **chairs**: CSV with id, name, description, thumbnail, price, height,
      width, depth, color, features, kind, popularity, stock
    """
    content = await chairs.read()
    await chair_service.import_csv(content)
    return Response(status_code=status.HTTP_201_CREATED)


@router.get("/{chair_id}", response_model=ChairResponse)
async def get_chair_detail(
    chair_id: int,
    chair_service: ChairService = Depends(get_chair_service)
):
    """Chair detail; sold-out chairs are not found"""
    chair = await chair_service.get_chair(chair_id)
    return ChairResponse.from_domain(chair)
