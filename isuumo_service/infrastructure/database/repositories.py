"""
Repository implementations - Data access layer
"""
from typing import Any, List, Optional, Sequence, Tuple
import asyncpg

from ...domain.geometry import serialize
from ...domain.models import BoundingBox, Chair, Coordinate, Estate
from ...domain.predicates import (
    DEFAULT_ORDER,
    Comparison,
    Operator,
    Page,
    Predicate,
)
from ...domain.repositories import IChairRepository, IEstateRepository
from .connection import DatabaseConnection

ESTATE_COLUMNS = (
    "id, name, description, thumbnail, address, latitude, longitude, "
    "rent, door_height, door_width, features, popularity"
)

CHAIR_COLUMNS = (
    "id, name, description, thumbnail, price, height, width, depth, "
    "color, features, kind, popularity, stock"
)

ORDER_BY = "ORDER BY " + ", ".join(f"{column} {direction.value}" for column, direction in DEFAULT_ORDER)


def _render_comparison(comparison: Comparison, placeholder: str) -> str:
    column = comparison.field.value
    if comparison.operator is Operator.CONTAINS:
        return f"strpos({column}, {placeholder}) > 0"
    return f"{column} {comparison.operator.value} {placeholder}"


def render_predicate(predicate: Predicate, start: int = 1) -> Tuple[str, List[Any]]:
    """
    Render a predicate as a WHERE body with positional parameters

    Column names come from a closed enum; every value is bound as a parameter.

    Returns:
        Tuple of (sql, params)
    """
    clauses = []
    params: List[Any] = []
    for offset, comparison in enumerate(predicate.comparisons):
        clauses.append(_render_comparison(comparison, f"${start + offset}"))
        params.append(comparison.value)
    return " AND ".join(clauses), params


class EstateRepository(IEstateRepository):
    """Estate repository implementation using PostgreSQL"""

    def __init__(self, db: DatabaseConnection):
        self.db = db

    def _row_to_estate(self, row: Optional[asyncpg.Record]) -> Optional[Estate]:
        """Convert database row to Estate model"""
        if not row:
            return None
        return Estate(**dict(row))

    async def find_by_id(self, estate_id: int) -> Optional[Estate]:
        """Find estate by ID"""
        row = await self.db.fetch_one(
            f"SELECT {ESTATE_COLUMNS} FROM estate WHERE id = $1",
            estate_id
        )
        return self._row_to_estate(row)

    async def find_in_bounding_box(self, box: BoundingBox) -> List[Estate]:
        """Estates inside the box (inclusive), ordered popularity desc, id asc"""
        rows = await self.db.fetch_all(
            f"""
            SELECT {ESTATE_COLUMNS}
            FROM estate
            WHERE latitude <= $1 AND latitude >= $2
              AND longitude <= $3 AND longitude >= $4
            {ORDER_BY}
            """,
            box.high.latitude,
            box.low.latitude,
            box.high.longitude,
            box.low.longitude
        )
        return [self._row_to_estate(row) for row in rows]

    async def contains_point(self, polygon: Sequence[Coordinate], point: Coordinate) -> bool:
        """Exact containment using PostgreSQL's polygon @> point"""
        # The literal is sent as text and parsed by the server
        return await self.db.fetch_value(
            "SELECT $1::text::polygon @> point($2, $3)",
            serialize(polygon),
            point.latitude,
            point.longitude
        )

    async def search(self, predicate: Predicate, page: Page) -> List[Estate]:
        """One page of matching estates"""
        where, params = render_predicate(predicate)
        limit_index = len(params) + 1
        rows = await self.db.fetch_all(
            f"""
            SELECT {ESTATE_COLUMNS}
            FROM estate
            WHERE {where}
            {ORDER_BY}
            LIMIT ${limit_index} OFFSET ${limit_index + 1}
            """,
            *params,
            page.limit,
            page.offset
        )
        return [self._row_to_estate(row) for row in rows]

    async def count(self, predicate: Predicate) -> int:
        """Number of estates matching the predicate"""
        where, params = render_predicate(predicate)
        return await self.db.fetch_value(
            f"SELECT COUNT(*) FROM estate WHERE {where}",
            *params
        )

    async def find_low_priced(self, limit: int) -> List[Estate]:
        """Cheapest estates"""
        rows = await self.db.fetch_all(
            f"SELECT {ESTATE_COLUMNS} FROM estate ORDER BY rent ASC, id ASC LIMIT $1",
            limit
        )
        return [self._row_to_estate(row) for row in rows]

    async def create_many(self, estates: Sequence[Estate]) -> None:
        """Insert estates in one transaction"""
        await self.db.execute_many(
            f"""
            INSERT INTO estate ({ESTATE_COLUMNS})
            VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12)
            """,
            [
                (
                    e.id, e.name, e.description, e.thumbnail, e.address,
                    e.latitude, e.longitude, e.rent, e.door_height, e.door_width,
                    e.features, e.popularity
                )
                for e in estates
            ]
        )


class ChairRepository(IChairRepository):
    """Chair repository implementation using PostgreSQL"""

    def __init__(self, db: DatabaseConnection):
        self.db = db

    def _row_to_chair(self, row: Optional[asyncpg.Record]) -> Optional[Chair]:
        """Convert database row to Chair model"""
        if not row:
            return None
        return Chair(**dict(row))

    async def find_by_id(self, chair_id: int) -> Optional[Chair]:
        """Find chair by ID"""
        row = await self.db.fetch_one(
            f"SELECT {CHAIR_COLUMNS} FROM chair WHERE id = $1",
            chair_id
        )
        return self._row_to_chair(row)

    async def create_many(self, chairs: Sequence[Chair]) -> None:
        """Insert chairs in one transaction"""
        await self.db.execute_many(
            f"""
            INSERT INTO chair ({CHAIR_COLUMNS})
            VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12, $13)
            """,
            [
                (
                    c.id, c.name, c.description, c.thumbnail, c.price,
                    c.height, c.width, c.depth, c.color, c.features, c.kind,
                    c.popularity, c.stock
                )
                for c in chairs
            ]
        )
