"""
Tests for packing state classification and the trip catalog view.
"""
import pytest
from quokkapack.models.category import Category, Item
from quokkapack.models.trip import Trip, TripItem
from quokkapack.services.packing_service import (
    PackingState,
    build_trip_catalog,
    catalog_item_ids,
    classify,
    classify_link,
    group_catalog_by_category,
    prune_unreachable_links,
    summarize_progress,
)


def make_item(item_id, name, archived=False):
    return Item(id=item_id, name=name, is_essential=False, is_archived=archived)


def make_category(category_id, name, items, archived=False):
    category = Category(id=category_id, name=name, is_archived=archived)
    category.items.extend(items)
    return category


def make_trip(categories, links=()):
    trip = Trip(id=1, destination="Lisbon")
    trip.categories.extend(categories)
    trip.trip_items.extend(links)
    return trip


@pytest.mark.parametrize("trip_item_id,is_packed,expected", [
    (None, None, PackingState.AVAILABLE_TO_ADD),
    (None, True, PackingState.AVAILABLE_TO_ADD),
    (None, False, PackingState.AVAILABLE_TO_ADD),
    (3, False, PackingState.UNPACKED),
    (3, None, PackingState.UNPACKED),
    (3, True, PackingState.PACKED),
])
def test_classify_decision_table(trip_item_id, is_packed, expected):
    assert classify(trip_item_id, is_packed) == expected


def test_classify_item_seven_scenario():
    """Item 7 moves through every state as its link changes."""
    assert classify_link(None) == PackingState.AVAILABLE_TO_ADD
    assert classify_link(TripItem(id=11, item_id=7, is_packed=False)) == PackingState.UNPACKED
    assert classify_link(TripItem(id=11, item_id=7, is_packed=True)) == PackingState.PACKED


def test_packing_state_values():
    assert {s.value for s in PackingState} == {"AvailableToAdd", "Unpacked", "Packed"}


def test_catalog_classifies_every_item():
    socks = make_item(7, "Socks")
    shirt = make_item(8, "Shirt")
    charger = make_item(9, "Charger")
    trip = make_trip(
        [make_category(1, "Clothes", [socks, shirt]), make_category(2, "Electronics", [charger])],
        [TripItem(id=20, item_id=8, is_packed=False), TripItem(id=21, item_id=9, is_packed=True)],
    )

    entries = build_trip_catalog(trip)
    states = {e.item_id: e.status for e in entries}

    assert states == {
        7: PackingState.AVAILABLE_TO_ADD,
        8: PackingState.UNPACKED,
        9: PackingState.PACKED,
    }
    by_item = {e.item_id: e for e in entries}
    assert by_item[7].trip_item_id is None and by_item[7].is_packed is None
    assert by_item[9].trip_item_id == 21 and by_item[9].is_packed is True


def test_catalog_is_sorted_by_category_then_item():
    trip = make_trip([
        make_category(2, "toiletries", [make_item(5, "Toothbrush"), make_item(4, "Floss")]),
        make_category(1, "Clothes", [make_item(3, "socks"), make_item(2, "Jacket")]),
    ])
    names = [(e.category_name, e.name) for e in build_trip_catalog(trip)]
    assert names == [
        ("Clothes", "Jacket"),
        ("Clothes", "socks"),
        ("toiletries", "Floss"),
        ("toiletries", "Toothbrush"),
    ]


def test_classification_does_not_depend_on_order():
    items = [make_item(i, f"Item {i}") for i in range(1, 6)]
    def links():
        return [TripItem(id=100 + i, item_id=i, is_packed=i % 2 == 0) for i in (2, 3, 4)]

    forward = make_trip([make_category(1, "All", items)], links())
    backward = make_trip([make_category(1, "All", list(reversed(items)))], list(reversed(links())))

    forward_states = {e.item_id: e.status for e in build_trip_catalog(forward)}
    backward_states = {e.item_id: e.status for e in build_trip_catalog(backward)}
    assert forward_states == backward_states


def test_archived_categories_and_items_are_excluded():
    trip = make_trip([
        make_category(1, "Clothes", [make_item(1, "Socks"), make_item(2, "Old hat", archived=True)]),
        make_category(2, "Retired", [make_item(3, "Pager")], archived=True),
    ])
    assert [e.item_id for e in build_trip_catalog(trip)] == [1]


def test_item_in_two_categories_shares_state_and_counts_once():
    towel = make_item(1, "Towel")
    trip = make_trip(
        [make_category(1, "Beach", [towel]), make_category(2, "Bathroom", [towel])],
        [TripItem(id=10, item_id=1, is_packed=True)],
    )
    entries = build_trip_catalog(trip)

    assert len(entries) == 2
    assert {e.status for e in entries} == {PackingState.PACKED}
    assert summarize_progress(entries).total_items == 1


def test_group_catalog_by_category():
    trip = make_trip(
        [
            make_category(2, "Electronics", [make_item(3, "Charger")]),
            make_category(1, "Clothes", [make_item(1, "Socks"), make_item(2, "Shirt")]),
        ],
        [TripItem(id=10, item_id=1, is_packed=False), TripItem(id=11, item_id=3, is_packed=True)],
    )
    groups = group_catalog_by_category(build_trip_catalog(trip))

    assert [g.category_name for g in groups] == ["Clothes", "Electronics"]
    clothes, electronics = groups
    assert [e.item_id for e in clothes.items_in_trip] == [1]
    assert [e.item_id for e in clothes.items_not_in_trip] == [2]
    assert [e.item_id for e in electronics.items_in_trip] == [3]
    assert electronics.items_not_in_trip == []


def test_summarize_progress():
    trip = make_trip(
        [make_category(1, "All", [make_item(i, f"Item {i}") for i in range(1, 6)])],
        [
            TripItem(id=10, item_id=1, is_packed=True),
            TripItem(id=11, item_id=2, is_packed=False),
            TripItem(id=12, item_id=3, is_packed=False),
            TripItem(id=13, item_id=4, is_packed=False),
        ],
    )
    progress = summarize_progress(build_trip_catalog(trip))

    assert progress.total_items == 5
    assert progress.packed == 1
    assert progress.unpacked == 3
    assert progress.available_to_add == 1
    assert progress.percent_packed == 25.0


def test_empty_trip_has_empty_catalog():
    trip = make_trip([])
    entries = build_trip_catalog(trip)
    assert entries == []
    assert group_catalog_by_category(entries) == []
    progress = summarize_progress(entries)
    assert progress.total_items == 0
    assert progress.percent_packed == 0.0


def test_prune_unreachable_links():
    socks = make_item(1, "Socks")
    hat = make_item(2, "Hat", archived=True)
    pager = make_item(3, "Pager")
    trip = make_trip(
        [make_category(1, "Clothes", [socks, hat]), make_category(2, "Retired", [pager], archived=True)],
        [
            TripItem(id=10, item_id=1, is_packed=False),
            TripItem(id=11, item_id=2, is_packed=True),
            TripItem(id=12, item_id=3, is_packed=False),
        ],
    )

    removed = prune_unreachable_links(trip)

    assert sorted(link.item_id for link in removed) == [2, 3]
    assert [link.item_id for link in trip.trip_items] == [1]
    assert catalog_item_ids(trip) == {1}
