"""
Repository interfaces - Define contracts for data access
"""
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from .models import BoundingBox, Chair, Coordinate, Estate
from .predicates import Page, Predicate


class IEstateRepository(ABC):
    """Estate repository interface"""

    @abstractmethod
    async def find_by_id(self, estate_id: int) -> Optional[Estate]:
        """Find estate by ID"""
        pass

    @abstractmethod
    async def find_in_bounding_box(self, box: BoundingBox) -> List[Estate]:
        """Estates inside the box (inclusive), ordered popularity desc, id asc"""
        pass

    @abstractmethod
    async def contains_point(self, polygon: Sequence[Coordinate], point: Coordinate) -> bool:
        """Exact containment test evaluated by the store"""
        pass

    @abstractmethod
    async def search(self, predicate: Predicate, page: Page) -> List[Estate]:
        """One page of matching estates, ordered popularity desc, id asc"""
        pass

    @abstractmethod
    async def count(self, predicate: Predicate) -> int:
        """Number of estates matching the predicate"""
        pass

    @abstractmethod
    async def find_low_priced(self, limit: int) -> List[Estate]:
        """Cheapest estates, ordered rent asc, id asc"""
        pass

    @abstractmethod
    async def create_many(self, estates: Sequence[Estate]) -> None:
        """Insert estates in one transaction"""
        pass


class IChairRepository(ABC):
    """Chair repository interface"""

    @abstractmethod
    async def find_by_id(self, chair_id: int) -> Optional[Chair]:
        """Find chair by ID"""
        pass

    @abstractmethod
    async def create_many(self, chairs: Sequence[Chair]) -> None:
        """Insert chairs in one transaction"""
        pass
