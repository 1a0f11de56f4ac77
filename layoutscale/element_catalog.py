"""
Element Catalog
===============

Standard element definitions with real-world dimensions. Elements created
from the catalog are drawn at their true proportional size by the scale
engine, so a 1.8m round table always covers 1.8m of floor.
"""

# Layoutscale imports
from layoutscale.layout_types import (
    AnchorPoint,
    ConfigurableDimensions,
    ElementDimensions,
    ElementKind,
    FixedDimensions,
    LayoutElement,
    Point,
)

# Standard library imports
from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass(frozen=True)
class ElementCatalogEntry:
    """One catalog item. default_capacity is only meaningful for tables."""

    kind: ElementKind
    name: str
    dimensions: ElementDimensions
    default_capacity: Optional[int] = None


# fmt: off
# autopep8: off
ELEMENT_CATALOG: Dict[str, ElementCatalogEntry] = {
    # Round tables
    "ROUND_TABLE_150":      ElementCatalogEntry(ElementKind.TABLE_ROUND,       "Round Table 150cm",         FixedDimensions(diameter=1.5),              8),
    "ROUND_TABLE_180":      ElementCatalogEntry(ElementKind.TABLE_ROUND,       "Round Table 180cm",         FixedDimensions(diameter=1.8),              10),
    "ROUND_TABLE_200":      ElementCatalogEntry(ElementKind.TABLE_ROUND,       "Round Table 200cm",         FixedDimensions(diameter=2.0),              12),

    # Rectangular tables
    "RECT_TABLE_180x90":    ElementCatalogEntry(ElementKind.TABLE_RECTANGULAR, "Rectangular Table 180x90",  FixedDimensions(width=1.8, height=0.9),     6),
    "RECT_TABLE_240x90":    ElementCatalogEntry(ElementKind.TABLE_RECTANGULAR, "Rectangular Table 240x90",  FixedDimensions(width=2.4, height=0.9),     8),
    "IMPERIAL_TABLE":       ElementCatalogEntry(ElementKind.TABLE_IMPERIAL,    "Imperial Table 240x120",    FixedDimensions(width=2.4, height=1.2),     10),

    # Chairs
    "STANDARD_CHAIR":       ElementCatalogEntry(ElementKind.CHAIR,             "Standard Chair",            FixedDimensions(width=0.45, height=0.45)),
    "CHIAVARI_CHAIR":       ElementCatalogEntry(ElementKind.CHAIR,             "Chiavari Chair",            FixedDimensions(width=0.40, height=0.40)),

    # Dance floor, built from 60cm panels
    "DANCE_FLOOR":          ElementCatalogEntry(ElementKind.DANCE_FLOOR,       "Dance Floor",               ConfigurableDimensions(unit_size=0.6, units_wide=5, units_deep=5, min_units=2, max_units=20)),

    # Stages
    "STAGE_SMALL":          ElementCatalogEntry(ElementKind.STAGE,             "Small Stage",               FixedDimensions(width=4.0, height=3.0)),
    "STAGE_MEDIUM":         ElementCatalogEntry(ElementKind.STAGE,             "Medium Stage",              FixedDimensions(width=6.0, height=4.0)),

    # DJ / bar
    "DJ_BOOTH":             ElementCatalogEntry(ElementKind.DJ_BOOTH,          "DJ Booth",                  FixedDimensions(width=2.0, height=1.0)),
    "BAR_COUNTER":          ElementCatalogEntry(ElementKind.BAR,               "Bar Counter",               ConfigurableDimensions(unit_size=1.0, units_wide=3, units_deep=1, min_units=1, max_units=10)),
}
# fmt: on
# autopep8: on


def get_catalog_entry(key: str) -> ElementCatalogEntry:
    """Look up an entry by key. Raises KeyError for unknown keys."""
    return ELEMENT_CATALOG[key]


def get_catalog_entries_by_type(kind: ElementKind) -> List[ElementCatalogEntry]:
    return [entry for entry in ELEMENT_CATALOG.values() if entry.kind is kind]


def get_table_entries() -> List[ElementCatalogEntry]:
    return [entry for entry in ELEMENT_CATALOG.values() if entry.kind.is_table]


def get_round_table_entries() -> List[ElementCatalogEntry]:
    return get_catalog_entries_by_type(ElementKind.TABLE_ROUND)


def get_rectangular_table_entries() -> List[ElementCatalogEntry]:
    """Rectangular tables followed by imperial tables."""
    return (
        get_catalog_entries_by_type(ElementKind.TABLE_RECTANGULAR)
        + get_catalog_entries_by_type(ElementKind.TABLE_IMPERIAL)
    )


def create_element(
    key: str,
    element_id: str,
    position: Point,
    rotation: float = 0.0,
    label: Optional[str] = None,
    anchor: Optional[AnchorPoint] = None,
) -> LayoutElement:
    """
    Create a layout element from a catalog entry.

    Args:
        key (str): Catalog key, e.g. "ROUND_TABLE_180".
        element_id (str): Identifier for the new element.
        position (Point): Anchor position in meters.
        rotation (float): Degrees.
        label (str, optional): Display text.
        anchor (AnchorPoint, optional): Defaults to the element centre.

    Returns:
        LayoutElement: A new element carrying the entry's kind and dimensions.
    """
    entry = get_catalog_entry(key)
    return LayoutElement(
        id=element_id,
        kind=entry.kind,
        position=position,
        dimensions=entry.dimensions,
        rotation=rotation,
        anchor=anchor,
        label=label,
    )
