"""
FastAPI dependencies
"""
from fastapi import Depends, Request

from ..application.services import (
    ChairService,
    EstateSearchService,
    InitializeService,
    NazotteSearchService,
    local_containment,
)
from ..config import settings
from ..domain.models import EstateSearchCondition
from ..infrastructure.database.connection import db_connection, DatabaseConnection
from ..infrastructure.database.repositories import ChairRepository, EstateRepository


async def get_db_connection_dep() -> DatabaseConnection:
    """Get database connection dependency"""
    return db_connection


async def get_estate_repository(db: DatabaseConnection = Depends(get_db_connection_dep)) -> EstateRepository:
    """Get estate repository dependency"""
    return EstateRepository(db)


async def get_chair_repository(db: DatabaseConnection = Depends(get_db_connection_dep)) -> ChairRepository:
    """Get chair repository dependency"""
    return ChairRepository(db)


def get_estate_search_condition(request: Request) -> EstateSearchCondition:
    """Condition catalogue loaded at startup"""
    return request.app.state.estate_search_condition


async def get_nazotte_service(
    estate_repo: EstateRepository = Depends(get_estate_repository)
) -> NazotteSearchService:
    """Get nazotte search service dependency"""
    containment = estate_repo.contains_point
    if settings.NAZOTTE_CONTAINMENT == "local":
        containment = local_containment
    return NazotteSearchService(estate_repo, containment=containment, limit=settings.NAZOTTE_LIMIT)


async def get_estate_search_service(
    estate_repo: EstateRepository = Depends(get_estate_repository),
    chair_repo: ChairRepository = Depends(get_chair_repository)
) -> EstateSearchService:
    """Get estate search service dependency"""
    return EstateSearchService(estate_repo, chair_repo, limit=settings.LIMIT)


async def get_chair_service(
    chair_repo: ChairRepository = Depends(get_chair_repository)
) -> ChairService:
    """Get chair service dependency"""
    return ChairService(chair_repo)


async def get_initialize_service(
    db: DatabaseConnection = Depends(get_db_connection_dep)
) -> InitializeService:
    """Get initialize service dependency"""
    return InitializeService(db, settings.SQL_DIR)
