"""
Packing state derivation for a trip's catalog.

A trip's catalog is every item reachable through the trip's categories. Each
catalog item either has a TripItem link for the trip (it is on the packing
list, packed or not) or it does not (it is merely available to add).
"""
from typing import Dict, Iterable, List, Optional, Set
from quokkapack.models.trip import Trip, TripItem
from quokkapack.schemas.trip_item import (
    CatalogCategoryGroup, PackingProgress, PackingState, TripCatalogItemResponse
)


def classify(trip_item_id: Optional[int], is_packed: Optional[bool]) -> PackingState:
    """
    Classify a catalog item from its zero-or-one link fields.

    No link means AvailableToAdd. A link counts as packed only when the flag is
    exactly True; a missing flag on an existing link reads as Unpacked.
    """
    if trip_item_id is None:
        return PackingState.AVAILABLE_TO_ADD
    if is_packed is True:
        return PackingState.PACKED
    return PackingState.UNPACKED


def classify_link(link: Optional[TripItem]) -> PackingState:
    """Classify using a TripItem row (or None when the item has no link)."""
    if link is None:
        return PackingState.AVAILABLE_TO_ADD
    return classify(link.id, link.is_packed)


def build_trip_catalog(trip: Trip) -> List[TripCatalogItemResponse]:
    """
    Join the trip's category catalog against its links.

    One entry per (category, item) pair, ordered by category name then item
    name. Archived categories and items are left out. An item that sits in two
    of the trip's categories appears under both, with the same state.
    """
    links_by_item: Dict[int, TripItem] = {link.item_id: link for link in trip.trip_items}

    entries = []
    categories = sorted(
        (c for c in trip.categories if not c.is_archived),
        key=lambda c: (c.name.lower(), c.id)
    )
    for category in categories:
        items = sorted(
            (i for i in category.items if not i.is_archived),
            key=lambda i: (i.name.lower(), i.id)
        )
        for item in items:
            link = links_by_item.get(item.id)
            entries.append(TripCatalogItemResponse(
                item_id=item.id,
                name=item.name,
                is_essential=item.is_essential,
                category_id=category.id,
                category_name=category.name,
                trip_item_id=link.id if link else None,
                is_packed=link.is_packed if link else None,
                status=classify_link(link),
            ))
    return entries


def group_catalog_by_category(entries: Iterable[TripCatalogItemResponse]) -> List[CatalogCategoryGroup]:
    """Split catalog entries per category into items on the trip and items not yet added."""
    groups: Dict[int, CatalogCategoryGroup] = {}
    for entry in entries:
        group = groups.get(entry.category_id)
        if group is None:
            group = CatalogCategoryGroup(category_id=entry.category_id, category_name=entry.category_name)
            groups[entry.category_id] = group
        if entry.status == PackingState.AVAILABLE_TO_ADD:
            group.items_not_in_trip.append(entry)
        else:
            group.items_in_trip.append(entry)
    return sorted(groups.values(), key=lambda g: (g.category_name.lower(), g.category_id))


def summarize_progress(entries: Iterable[TripCatalogItemResponse]) -> PackingProgress:
    """Count distinct catalog items per state."""
    states: Dict[int, PackingState] = {}
    for entry in entries:
        states[entry.item_id] = entry.status

    packed = sum(1 for s in states.values() if s == PackingState.PACKED)
    unpacked = sum(1 for s in states.values() if s == PackingState.UNPACKED)
    available = sum(1 for s in states.values() if s == PackingState.AVAILABLE_TO_ADD)
    added = packed + unpacked
    return PackingProgress(
        total_items=len(states),
        packed=packed,
        unpacked=unpacked,
        available_to_add=available,
        percent_packed=round(packed * 100 / added, 1) if added else 0.0,
    )


def catalog_item_ids(trip: Trip) -> Set[int]:
    """Ids of the items that appear in the trip's catalog."""
    return {
        item.id
        for category in trip.categories if not category.is_archived
        for item in category.items if not item.is_archived
    }


def prune_unreachable_links(trip: Trip) -> List[TripItem]:
    """
    Drop links whose item has left the trip's catalog.

    Keeps the packing list and the catalog in agreement after a category is
    detached, deleted or archived, or an item is archived. Returns the removed
    links; the caller commits.
    """
    reachable = catalog_item_ids(trip)
    orphaned = [link for link in trip.trip_items if link.item_id not in reachable]
    for link in orphaned:
        trip.trip_items.remove(link)
    return orphaned
