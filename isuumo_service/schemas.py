"""
Pydantic schemas for request/response validation
"""
from pydantic import BaseModel, Field
from typing import List

from .domain.models import Coordinate, Estate, Chair


class CoordinateSchema(BaseModel):
    """A polygon vertex"""
    latitude: float
    longitude: float

    def to_domain(self) -> Coordinate:
        return Coordinate(latitude=self.latitude, longitude=self.longitude)


class NazotteRequest(BaseModel):
    """Freehand polygon search request"""
    coordinates: List[CoordinateSchema]

    def polygon(self) -> List[Coordinate]:
        return [c.to_domain() for c in self.coordinates]


class DocumentRequest(BaseModel):
    """Document request body"""
    email: str


class EstateResponse(BaseModel):
    """Estate as shown to clients; popularity is never exposed"""
    id: int
    thumbnail: str
    name: str
    description: str
    latitude: float
    longitude: float
    address: str
    rent: int
    door_height: int = Field(alias="doorHeight")
    door_width: int = Field(alias="doorWidth")
    features: str

    class Config:
        populate_by_name = True

    @classmethod
    def from_domain(cls, estate: Estate) -> "EstateResponse":
        return cls(
            id=estate.id,
            thumbnail=estate.thumbnail,
            name=estate.name,
            description=estate.description,
            latitude=estate.latitude,
            longitude=estate.longitude,
            address=estate.address,
            rent=estate.rent,
            door_height=estate.door_height,
            door_width=estate.door_width,
            features=estate.features,
        )


class EstateSearchResponse(BaseModel):
    """Search result with the total number of matches"""
    count: int
    estates: List[EstateResponse]


class EstateListResponse(BaseModel):
    """Plain estate list"""
    estates: List[EstateResponse]


class ChairResponse(BaseModel):
    """Chair detail"""
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

    @classmethod
    def from_domain(cls, chair: Chair) -> "ChairResponse":
        return cls(
            id=chair.id,
            name=chair.name,
            description=chair.description,
            thumbnail=chair.thumbnail,
            price=chair.price,
            height=chair.height,
            width=chair.width,
            depth=chair.depth,
            color=chair.color,
            features=chair.features,
            kind=chair.kind,
        )


class InitializeResponse(BaseModel):
    """Initialize response"""
    language: str = "python"


def estate_list(estates: List[Estate]) -> List[EstateResponse]:
    return [EstateResponse.from_domain(e) for e in estates]
