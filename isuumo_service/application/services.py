"""
Application services - Business logic layer

This module contains the search logic of the service:
- Nazotte (freehand polygon) search
- Range/feature estate search with pagination
- Estate recommendation for a chair
- Bulk CSV ingestion and database reset
"""
import asyncio
import logging
from pathlib import Path
from typing import Any, Awaitable, Callable, List, Optional, Sequence, Tuple

from ..domain import geometry
from ..domain.exceptions import BadRequestError, InternalError, NotFoundError
from ..domain.models import Chair, Coordinate, Estate
from ..domain.predicates import Page, SearchCriteria
from ..domain.ranking import compatibility_predicate
from ..domain.repositories import IChairRepository, IEstateRepository
from ..infrastructure.database.connection import DatabaseConnection
from ..infrastructure.records import chair_from_record, estate_from_record, parse_records

logger = logging.getLogger(__name__)

Containment = Callable[[Sequence[Coordinate], Coordinate], Awaitable[bool]]


async def gather_or_cancel(*coroutines: Awaitable[Any]) -> List[Any]:
    """
    Await every coroutine concurrently, results in argument order

    If one of them fails, the others are cancelled and awaited before the
    error is re-raised, so no read outlives the request.
    """
    tasks = [asyncio.ensure_future(c) for c in coroutines]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


async def local_containment(polygon: Sequence[Coordinate], point: Coordinate) -> bool:
    """Containment evaluated in process"""
    return geometry.contains_point(polygon, point)


class NazotteSearchService:
    """Finds estates inside a freehand polygon"""

    def __init__(
        self,
        estate_repository: IEstateRepository,
        containment: Optional[Containment] = None,
        limit: int = 50
    ):
        self.estate_repo = estate_repository
        self.containment = containment or estate_repository.contains_point
        self.limit = limit

    async def search(self, polygon: Sequence[Coordinate]) -> List[Estate]:
        """
        Search estates whose location lies inside the polygon

        Candidates come from an inclusive bounding-box read and are then checked
        one by one for exact containment. The checks run concurrently; results
        are matched back to candidates by position so the bounding-box order
        (popularity desc, id asc) is kept. A failing check cancels the
        remaining ones and fails the search.

        Args:
            polygon: Ordered polygon vertices

        Returns:
            At most ``limit`` estates

        Raises:
            BadRequestError: If the polygon is empty
        """
        if not polygon:
            raise BadRequestError("coordinates must not be empty")

        box = geometry.bounding_box_of(polygon)
        candidates = await self.estate_repo.find_in_bounding_box(box)
        logger.debug(f"{len(candidates)} estates in bounding box {box}")
        if not candidates:
            return []

        verdicts = await gather_or_cancel(
            *(self.containment(polygon, estate.location) for estate in candidates)
        )
        inside = [estate for estate, ok in zip(candidates, verdicts) if ok]
        return inside[:self.limit]


class EstateSearchService:
    """Estate lookups, filtered search and chair recommendation"""

    def __init__(
        self,
        estate_repository: IEstateRepository,
        chair_repository: IChairRepository,
        limit: int = 20
    ):
        self.estate_repo = estate_repository
        self.chair_repo = chair_repository
        self.limit = limit

    async def get_estate(self, estate_id: int) -> Estate:
        """
        Get an estate by ID

        Raises:
            NotFoundError: If the estate does not exist
        """
        estate = await self.estate_repo.find_by_id(estate_id)
        if estate is None:
            logger.info(f"Estate {estate_id} not found")
            raise NotFoundError(f"estate {estate_id} not found")
        return estate

    async def search(self, criteria: SearchCriteria) -> Tuple[int, List[Estate]]:
        """
        Run a filtered search

        The total and the requested page are two independent reads of the same
        predicate; the total ignores pagination.

        Returns:
            Tuple of (count, estates)
        """
        count, estates = await gather_or_cancel(
            self.estate_repo.count(criteria.predicate),
            self.estate_repo.search(criteria.predicate, criteria.page),
        )
        return count, estates

    async def get_low_priced(self) -> List[Estate]:
        """Cheapest estates first"""
        return await self.estate_repo.find_low_priced(self.limit)

    async def recommend_for_chair(self, chair_id: int) -> List[Estate]:
        """
        Estates whose door the chair fits through

        Raises:
            NotFoundError: If the chair does not exist
        """
        chair = await self.chair_repo.find_by_id(chair_id)
        if chair is None:
            logger.info(f"Requested chair id {chair_id} not found")
            raise NotFoundError(f"chair {chair_id} not found")

        predicate = compatibility_predicate(chair.dimensions)
        return await self.estate_repo.search(predicate, Page(limit=self.limit, offset=0))

    async def request_document(self, estate_id: int, email: str) -> Estate:
        """Accept a document request for an existing estate"""
        estate = await self.get_estate(estate_id)
        logger.info(f"Document for estate {estate_id} requested")
        return estate

    async def import_csv(self, content: bytes) -> int:
        """
        Insert every estate of a CSV file

        Returns:
            Number of inserted estates

        Raises:
            BadRequestError: If a record is malformed
        """
        estates = parse_records(content, estate_from_record)
        await self.estate_repo.create_many(estates)
        logger.info(f"Imported {len(estates)} estates")
        return len(estates)


class ChairService:
    """Chair lookups and ingestion"""

    def __init__(self, chair_repository: IChairRepository):
        self.chair_repo = chair_repository

    async def get_chair(self, chair_id: int) -> Chair:
        """
        Raises:
            NotFoundError: If the chair does not exist or is sold out
        """
        chair = await self.chair_repo.find_by_id(chair_id)
        if chair is None or not chair.is_available():
            logger.info(f"Chair {chair_id} not found")
            raise NotFoundError(f"chair {chair_id} not found")
        return chair

    async def import_csv(self, content: bytes) -> int:
        chairs = parse_records(content, chair_from_record)
        await self.chair_repo.create_many(chairs)
        logger.info(f"Imported {len(chairs)} chairs")
        return len(chairs)


class InitializeService:
    """Resets the database from the SQL files of a directory"""

    def __init__(self, db: DatabaseConnection, sql_dir: str):
        self.db = db
        self.sql_dir = Path(sql_dir)

    def sql_files(self) -> List[Path]:
        """SQL files in name order"""
        return sorted(self.sql_dir.glob("*.sql"))

    async def initialize(self) -> None:
        """
        Raises:
            InternalError: If the directory holds no SQL file
        """
        files = self.sql_files()
        if not files:
            logger.error(f"No SQL files found in {self.sql_dir}")
            raise InternalError(f"no SQL files in {self.sql_dir}")
        for path in files:
            logger.info(f"Running {path.name}")
            await self.db.execute_script(path.read_text(encoding="utf-8"))
