"""
Domain models - Core business entities
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class Coordinate:
    """A (latitude, longitude) pair"""
    latitude: float
    longitude: float


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box; low holds the minimum latitude/longitude, high the maximum"""
    low: Coordinate
    high: Coordinate

    def contains(self, point: Coordinate) -> bool:
        """Inclusive range check on both axes"""
        return (
            self.low.latitude <= point.latitude <= self.high.latitude
            and self.low.longitude <= point.longitude <= self.high.longitude
        )


@dataclass
class Estate:
    """Estate listing domain model"""
    id: int
    name: str
    description: str
    thumbnail: str
    address: str
    latitude: float
    longitude: float
    rent: int
    door_height: int
    door_width: int
    features: str
    popularity: int = 0

    @property
    def location(self) -> Coordinate:
        return Coordinate(self.latitude, self.longitude)

    @property
    def door_min(self) -> int:
        return min(self.door_height, self.door_width)

    @property
    def door_max(self) -> int:
        return max(self.door_height, self.door_width)


@dataclass
class Chair:
    """Chair (furniture) domain model"""
    id: int
    name: str
    description: str
    thumbnail: str
    price: int
    height: int
    width: int
    depth: int
    color: str
    features: str
    kind: str
    popularity: int = 0
    stock: int = 0

    def is_available(self) -> bool:
        """Check if the chair can still be shown"""
        return self.stock > 0

    @property
    def dimensions(self) -> "ChairDimensions":
        return ChairDimensions(width=self.width, height=self.height, depth=self.depth)


@dataclass(frozen=True)
class ChairDimensions:
    """Bounding dimensions of a chair"""
    width: int
    height: int
    depth: int


@dataclass(frozen=True)
class RangeBucket:
    """Selectable (min, max) range; -1 leaves that side unbounded"""
    id: int
    min: int
    max: int

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "min": self.min, "max": self.max}


@dataclass(frozen=True)
class RangeCondition:
    """Ordered set of range buckets for one field"""
    prefix: str = ""
    suffix: str = ""
    ranges: Tuple[RangeBucket, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RangeCondition":
        return cls(
            prefix=data.get("prefix", ""),
            suffix=data.get("suffix", ""),
            ranges=tuple(
                RangeBucket(id=int(r["id"]), min=int(r["min"]), max=int(r["max"]))
                for r in data.get("ranges", [])
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "prefix": self.prefix,
            "suffix": self.suffix,
            "ranges": [r.to_dict() for r in self.ranges],
        }


@dataclass(frozen=True)
class ListCondition:
    """Fixed list of selectable values"""
    list: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {"list": list(self.list)}


@dataclass(frozen=True)
class EstateSearchCondition:
    """Search condition catalogue for estates, loaded once at startup"""
    door_width: RangeCondition = field(default_factory=RangeCondition)
    door_height: RangeCondition = field(default_factory=RangeCondition)
    rent: RangeCondition = field(default_factory=RangeCondition)
    feature: ListCondition = field(default_factory=ListCondition)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EstateSearchCondition":
        return cls(
            door_width=RangeCondition.from_dict(data.get("doorWidth", {})),
            door_height=RangeCondition.from_dict(data.get("doorHeight", {})),
            rent=RangeCondition.from_dict(data.get("rent", {})),
            feature=ListCondition(list=tuple(data.get("feature", {}).get("list", []))),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "doorWidth": self.door_width.to_dict(),
            "doorHeight": self.door_height.to_dict(),
            "rent": self.rent.to_dict(),
            "feature": self.feature.to_dict(),
        }
