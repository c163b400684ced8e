"""
Estate routes
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from fastapi.responses import Response

from ...application.services import EstateSearchService, NazotteSearchService
from ...domain.models import EstateSearchCondition
from ...domain.predicates import build_estate_criteria
from ...schemas import (
    DocumentRequest,
    EstateListResponse,
    EstateResponse,
    EstateSearchResponse,
    NazotteRequest,
    estate_list,
)
from ..dependencies import (
    get_estate_search_condition,
    get_estate_search_service,
    get_nazotte_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Estates"])


@router.post("/estate", status_code=status.HTTP_201_CREATED)
async def post_estate(
    estates: UploadFile = File(...),
    estate_service: EstateSearchService = Depends(get_estate_search_service)
):
    """
    Bulk insert estates from a CSV file

    - **estates**: CSV with id, name, description, thumbnail, address, latitude,
      longitude, rent, door_height, door_width, features, popularity
    """
    content = await estates.read()
    await estate_service.import_csv(content)
    return Response(status_code=status.HTTP_201_CREATED)


@router.get("/estate/search", response_model=EstateSearchResponse)
async def search_estates(
    door_height_range_id: Optional[str] = Query(None, alias="doorHeightRangeId"),
    door_width_range_id: Optional[str] = Query(None, alias="doorWidthRangeId"),
    rent_range_id: Optional[str] = Query(None, alias="rentRangeId"),
    features: Optional[str] = Query(None),
    page: Optional[str] = Query(None),
    per_page: Optional[str] = Query(None, alias="perPage"),
    condition: EstateSearchCondition = Depends(get_estate_search_condition),
    estate_service: EstateSearchService = Depends(get_estate_search_service)
):
    """
    Search estates by range buckets and feature tags

    At least one filter is required. Results are ordered by popularity, then id.
    """
    criteria = build_estate_criteria(
        condition,
        door_height_range_id=door_height_range_id,
        door_width_range_id=door_width_range_id,
        rent_range_id=rent_range_id,
        features=features,
        page=page,
        per_page=per_page,
    )
    count, estates = await estate_service.search(criteria)
    return EstateSearchResponse(count=count, estates=estate_list(estates))


@router.get("/estate/search/condition")
async def get_estate_search_condition_catalogue(
    condition: EstateSearchCondition = Depends(get_estate_search_condition)
):
    """Buckets and feature tags clients can search with"""
    return condition.to_dict()


@router.get("/estate/low_priced", response_model=EstateListResponse)
async def get_low_priced_estates(
    estate_service: EstateSearchService = Depends(get_estate_search_service)
):
    """Cheapest estates"""
    estates = await estate_service.get_low_priced()
    return EstateListResponse(estates=estate_list(estates))


@router.post("/estate/nazotte", response_model=EstateSearchResponse)
async def search_estates_nazotte(
    request: NazotteRequest,
    nazotte_service: NazotteSearchService = Depends(get_nazotte_service)
):
    """
    Estates inside a freehand-drawn polygon

    - **coordinates**: polygon vertices in drawing order
    """
    estates = await nazotte_service.search(request.polygon())
    return EstateSearchResponse(count=len(estates), estates=estate_list(estates))


@router.post("/estate/req_doc/{estate_id}")
async def post_estate_request_document(
    estate_id: int,
    request: DocumentRequest,
    estate_service: EstateSearchService = Depends(get_estate_search_service)
):
    """Request the documents of an estate"""
    await estate_service.request_document(estate_id, request.email)
    return Response(status_code=status.HTTP_200_OK)


@router.get("/estate/{estate_id}", response_model=EstateResponse)
async def get_estate_detail(
    estate_id: int,
    estate_service: EstateSearchService = Depends(get_estate_search_service)
):
    """Estate detail"""
    estate = await estate_service.get_estate(estate_id)
    return EstateResponse.from_domain(estate)


@router.get("/recommended_estate/{chair_id}", response_model=EstateListResponse)
async def get_recommended_estates(
    chair_id: int,
    estate_service: EstateSearchService = Depends(get_estate_search_service)
):
    """Estates the chair fits into"""
    estates = await estate_service.recommend_for_chair(chair_id)
    return EstateListResponse(estates=estate_list(estates))
