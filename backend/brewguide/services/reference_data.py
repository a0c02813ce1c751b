from __future__ import annotations

from dataclasses import dataclass

from brewguide.schemas.recipe import GrindSize


@dataclass(frozen=True)
class GrindSizeGuide:
    grind_size: GrindSize
    description: str
    example: str


@dataclass(frozen=True)
class SourceReference:
    name: str
    url: str


_GRIND_GUIDES: tuple[GrindSizeGuide, ...] = (
    GrindSizeGuide(
        grind_size=GrindSize.FINE,
        description="Very fine, like powdered sugar or flour.",
        example="Espresso, Turkish coffee.",
    ),
    GrindSizeGuide(
        grind_size=GrindSize.PRE_GROUND_FINE,
        description="Fine, similar to table salt. Often labeled for espresso.",
        example="Some AeroPress, moka pot.",
    ),
    GrindSizeGuide(
        grind_size=GrindSize.MEDIUM_FINE,
        description="Slightly finer than table salt, like granulated sugar.",
        example="Cone pour-overs (Hario V60), AeroPress.",
    ),
    GrindSizeGuide(
        grind_size=GrindSize.MEDIUM,
        description="Consistency of regular sand or kosher salt.",
        example="Drip machines, flat-bottom pour-overs (Kalita Wave).",
    ),
    GrindSizeGuide(
        grind_size=GrindSize.PRE_GROUND_MEDIUM,
        description="General purpose pre-ground, like kosher salt.",
        example="Drip machines, some percolators.",
    ),
    GrindSizeGuide(
        grind_size=GrindSize.MEDIUM_COARSE,
        description="Coarser than sand, like rough sand or coarse salt.",
        example="Chemex, Clever Dripper, some French Press.",
    ),
    GrindSizeGuide(
        grind_size=GrindSize.COARSE,
        description="Very coarse, like breadcrumbs or sea salt.",
        example="French Press, cold brew, percolators.",
    ),
)

_SOURCES: tuple[SourceReference, ...] = (
    SourceReference("Market Lane Coffee Pour-Over Guide", "https://marketlane.com.au/pages/how-to-brew-pour-over-coffee"),
    SourceReference("Market Lane Coffee Equipment & Guides", "https://marketlane.com.au/pages/brew-guide"),
    SourceReference("Axil Seasonal Espresso Blend", "https://axilcoffee.com.au/products/seasonal-blend-oto"),
    SourceReference(
        "Axil French Press Guide",
        "https://axilcoffee.com.au/blogs/axil-coffee-roasters/"
        "how-to-the-ultimate-guide-to-making-the-perfect-french-press-coffee",
    ),
    SourceReference(
        "Perfect Daily Grind - Roast Level Adjustments",
        "https://perfectdailygrind.com/2019/10/how-to-adjust-your-brewing-recipe-for-coffee-roast-level/",
    ),
    SourceReference(
        "Counter Culture Coffee - Brewing Ratios",
        "https://counterculturecoffee.com/blogs/counter-culture-coffee/coffee-basics-brewing-ratios",
    ),
    SourceReference(
        "Serious Eats - Pour-Over Science",
        "https://www.seriouseats.com/make-better-pourover-coffee-how-pourover-works-temperature-timing",
    ),
    SourceReference("AeroPress Official Recipes", "https://aeropress.com/pages/how-to-use"),
    SourceReference(
        "Coffee Grind Size Research (North Star)",
        "https://www.northstarroast.com/blogs/brewing/the-importance-of-grind-size",
    ),
    SourceReference("Coffee Bros - Pour-Over Recipes", "https://coffeebros.com/blogs/coffee/the-perfect-pour-over-guide"),
)

_BY_GRIND = {guide.grind_size: guide for guide in _GRIND_GUIDES}


def list_grind_guides() -> list[GrindSizeGuide]:
    return list(_GRIND_GUIDES)


def resolve_grind_guide(identifier: str) -> GrindSizeGuide | None:
    grind = GrindSize.parse(identifier)
    if grind is None:
        return None
    return _BY_GRIND.get(grind)


def list_source_references() -> list[SourceReference]:
    return list(_SOURCES)
