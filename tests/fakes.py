import asyncio
from typing import Dict, List, Optional, Sequence

from isuumo_service.domain import geometry
from isuumo_service.domain.models import BoundingBox, Chair, Coordinate, Estate
from isuumo_service.domain.predicates import Page, Predicate
from isuumo_service.domain.repositories import IChairRepository, IEstateRepository


def make_estate(estate_id, latitude=0.0, longitude=0.0, popularity=0, rent=50000,
                door_height=100, door_width=100, features=""):
    return Estate(
        id=estate_id,
        name=f"estate {estate_id}",
        description="",
        thumbnail=f"/images/estate/{estate_id}.png",
        address="",
        latitude=latitude,
        longitude=longitude,
        rent=rent,
        door_height=door_height,
        door_width=door_width,
        features=features,
        popularity=popularity,
    )


def make_chair(chair_id, width=50, height=50, depth=50, stock=1):
    return Chair(
        id=chair_id,
        name=f"chair {chair_id}",
        description="",
        thumbnail=f"/images/chair/{chair_id}.png",
        price=10000,
        height=height,
        width=width,
        depth=depth,
        color="black",
        features="",
        kind="office",
        popularity=0,
        stock=stock,
    )


def _ordered(estates):
    return sorted(estates, key=lambda e: (-e.popularity, e.id))


class FakeEstateRepository(IEstateRepository):
    """In-memory estate store"""

    def __init__(self, estates: Sequence[Estate] = ()):
        self.estates: List[Estate] = list(estates)
        self.containment_calls: List[Coordinate] = []
        self.fail_containment_for: Optional[int] = None

    async def find_by_id(self, estate_id):
        return next((e for e in self.estates if e.id == estate_id), None)

    async def find_in_bounding_box(self, box: BoundingBox):
        return _ordered(e for e in self.estates if box.contains(e.location))

    async def contains_point(self, polygon, point):
        self.containment_calls.append(point)
        if self.fail_containment_for is not None:
            target = await self.find_by_id(self.fail_containment_for)
            if target is not None and target.location == point:
                raise ConnectionError("connection reset")
        return geometry.contains_point(polygon, point)

    async def search(self, predicate: Predicate, page: Page):
        matched = _ordered(e for e in self.estates if predicate.matches(e))
        return matched[page.offset:page.offset + page.limit]

    async def count(self, predicate: Predicate):
        return sum(1 for e in self.estates if predicate.matches(e))

    async def find_low_priced(self, limit):
        return sorted(self.estates, key=lambda e: (e.rent, e.id))[:limit]

    async def create_many(self, estates):
        self.estates.extend(estates)


class FakeChairRepository(IChairRepository):
    """In-memory chair store"""

    def __init__(self, chairs: Sequence[Chair] = ()):
        self.chairs: Dict[int, Chair] = {c.id: c for c in chairs}

    async def find_by_id(self, chair_id):
        return self.chairs.get(chair_id)

    async def create_many(self, chairs):
        for chair in chairs:
            self.chairs[chair.id] = chair


class DelayedContainment:
    """Containment check whose answers arrive in a different order than asked"""

    def __init__(self, delays: Dict[Coordinate, float]):
        self.delays = delays
        self.completed: List[Coordinate] = []

    async def __call__(self, polygon, point):
        await asyncio.sleep(self.delays.get(point, 0))
        self.completed.append(point)
        return geometry.contains_point(polygon, point)
