"""
Utility functions for the Carrier Selection module

Location matching is purely textual: locations are free text such as
"Lagos", "Lagos, Nigeria" or "Accra, Ghana" and carriers list the areas
they serve as plain strings.
"""

import math
from typing import Iterable, Optional, Union

from .constants import WILDCARD_AREA_PREFIX, DEFAULT_STRATEGY, SelectionStrategy
from .errors import InvalidInput, UnknownStrategy


def normalize_text(value: Optional[str]) -> str:
    """Lower-case and collapse whitespace."""
    if not value:
        return ""
    return " ".join(value.split()).lower()


def primary_locality(location: str) -> str:
    """
    Return the first comma-separated segment of a location.

    Example:
        >>> primary_locality("Lagos, Nigeria")
        'lagos'
    """
    return normalize_text(location.split(",")[0])


def is_wildcard_area(area: str) -> bool:
    """True for sentinel areas such as "All Nigeria"."""
    normalized = normalize_text(area)
    return normalized.startswith(WILDCARD_AREA_PREFIX) and len(normalized) > len(WILDCARD_AREA_PREFIX)


def area_matches_location(area: str, location: str) -> bool:
    """
    Check whether a single service area covers a location.

    An area covers a location when it is a wildcard sentinel, when the area
    text appears in the location, or when the location's primary locality
    appears in the area. Comparison is case-insensitive.

    Args:
        area: Service area declared by a carrier
        location: Origin or destination of a shipment

    Returns:
        True if the area covers the location
    """
    if is_wildcard_area(area):
        return True

    area_text = normalize_text(area)
    location_text = normalize_text(location)
    if not area_text or not location_text:
        return False

    if area_text in location_text:
        return True

    locality = primary_locality(location)
    return bool(locality) and locality in area_text


def serves_location(service_areas: Iterable[str], location: str) -> bool:
    """True if any of the service areas covers the location."""
    return any(area_matches_location(area, location) for area in service_areas)


def contains_ignore_case(values: Iterable[str], wanted: str) -> bool:
    """Case-insensitive membership test for tag lists."""
    target = normalize_text(wanted)
    return any(normalize_text(value) == target for value in values)


def missing_tags(available: Iterable[str], required: Iterable[str]) -> list:
    """Required tags (as given) absent from the available ones."""
    normalized = {normalize_text(tag) for tag in available}
    return [tag for tag in required if normalize_text(tag) not in normalized]


def parse_strategy(strategy: Union[str, SelectionStrategy, None]) -> SelectionStrategy:
    """
    Convert a strategy name into a SelectionStrategy.

    None falls back to the default (balanced). Names are matched
    case-insensitively.

    Raises:
        UnknownStrategy: If the name is not recognized
    """
    if strategy is None:
        return DEFAULT_STRATEGY
    if isinstance(strategy, SelectionStrategy):
        return strategy

    try:
        return SelectionStrategy(str(strategy).strip().lower())
    except ValueError:
        raise UnknownStrategy(
            f"Unknown selection strategy '{strategy}'",
            details={"allowed": [s.value for s in SelectionStrategy]},
        ) from None


def check_weight(weight_kg) -> None:
    """
    Raise InvalidInput unless weight_kg is a finite, strictly positive number.

    NaN and infinity are rejected along with zero and negative values.
    """
    if weight_kg is None or not math.isfinite(weight_kg) or weight_kg <= 0:
        raise InvalidInput(
            f"weight_kg must be a positive number, got {weight_kg}",
            details={"field": "weight_kg", "value": str(weight_kg)},
        )


def check_unique_ids(carriers: Iterable) -> None:
    """
    Raise InvalidInput if two carriers share an id.

    Costs and tie-breaks are keyed by carrier id, so ids must be unique
    within one request.
    """
    seen = set()
    duplicates = []
    for carrier in carriers:
        if carrier.id in seen and carrier.id not in duplicates:
            duplicates.append(carrier.id)
        seen.add(carrier.id)

    if duplicates:
        raise InvalidInput(
            f"Duplicate carrier ids: {', '.join(duplicates)}",
            details={"field": "carriers", "duplicates": duplicates},
        )
