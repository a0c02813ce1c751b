from fastapi import APIRouter, HTTPException, status

from brewguide.schemas.reference import GrindSizeGuideListResponse, GrindSizeGuideRead, SourceReferenceRead
from brewguide.services.reference_data import (
    GrindSizeGuide,
    list_grind_guides,
    list_source_references,
    resolve_grind_guide,
)

router = APIRouter(prefix="/reference", tags=["reference"])


def _to_guide_read(guide: GrindSizeGuide) -> GrindSizeGuideRead:
    return GrindSizeGuideRead(
        grind_size=guide.grind_size,
        label=guide.grind_size.label,
        description=guide.description,
        example=guide.example,
    )


@router.get("/grind-sizes", response_model=GrindSizeGuideListResponse)
def list_grind_sizes() -> GrindSizeGuideListResponse:
    guides = [_to_guide_read(guide) for guide in list_grind_guides()]
    return GrindSizeGuideListResponse(count=len(guides), grind_sizes=guides)


@router.get("/grind-sizes/{identifier}", response_model=GrindSizeGuideRead)
def get_grind_size(identifier: str) -> GrindSizeGuideRead:
    guide = resolve_grind_guide(identifier)
    if guide is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Grind size not found")
    return _to_guide_read(guide)


@router.get("/sources", response_model=list[SourceReferenceRead])
def list_sources() -> list[SourceReferenceRead]:
    return [SourceReferenceRead(name=source.name, url=source.url) for source in list_source_references()]
