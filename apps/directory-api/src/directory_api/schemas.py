from pydantic import BaseModel


class CategoryOption(BaseModel):
    id: int
    name: str


class FilterOptions(BaseModel):
    towns: list[str]
    counties: list[str]
    categories: list[CategoryOption]


class GeoDistanceResult(BaseModel):
    distance_km: float
