from pydantic import BaseModel

from brewguide.schemas.recipe import GrindSize


class GrindSizeGuideRead(BaseModel):
    grind_size: GrindSize
    label: str
    description: str
    example: str


class GrindSizeGuideListResponse(BaseModel):
    count: int
    grind_sizes: list[GrindSizeGuideRead]


class SourceReferenceRead(BaseModel):
    name: str
    url: str
