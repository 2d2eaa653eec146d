import asyncio

import pytest

from calcq.errors import InvalidArgument
from calcq.loader import CategoryLoader
from calcq.search import (
    ALIAS_SUBSTRING,
    EXACT_ALIAS,
    EXACT_NAME,
    EXACT_SYMBOL,
    NAME_PREFIX,
    NAME_SUBSTRING,
    SYMBOL_PREFIX,
    SYMBOL_SUBSTRING,
    UnitSearchIndex,
)
from calcq.units import Category, Unit, base_unit, linear_unit


def _full_index():
    loader = CategoryLoader()
    index = UnitSearchIndex(loader)
    asyncio.run(index.index_all())
    return loader, index


def _toy_category(category_id="toys"):
    return Category(
        id=category_id,
        name="Toys",
        base_unit_id="block",
        units=(
            base_unit("block", "Block", "blk", plural="blocks", aliases=("brick",)),
            linear_unit("meterstick", "Yardstick", "ys", 2.0, aliases=("meter stick",)),
            linear_unit("meter", "Meter", "m", 3.0),
            linear_unit("kilometer", "Kilometer", "km", 4.0),
            linear_unit("metro", "Metronome", "mtr", 5.0),
            linear_unit("emu", "Emu", "xmeter", 6.0),
        ),
    )


def test_exact_name_outranks_alias_match():
    _, index = _full_index()

    results = index.search_units("meter")

    assert results[0].unit_id == "meter"
    assert results[0].relevance == EXACT_NAME
    assert results[0].category_name == "Length"
    assert all(result.relevance < EXACT_NAME for result in results[1:])


def test_relevance_tiers():
    index = UnitSearchIndex()
    index.add_category(_toy_category())

    scores = {result.unit_id: result.relevance for result in index.search_units("meter")}
    assert scores == {
        "meter": EXACT_NAME,
        "kilometer": NAME_SUBSTRING,
        "emu": SYMBOL_SUBSTRING,
        "meterstick": ALIAS_SUBSTRING,
    }

    assert index.search_units("BLK")[0].relevance == EXACT_SYMBOL
    assert index.search_units("brick")[0].relevance == EXACT_ALIAS
    assert index.search_units("blocks")[0].relevance == EXACT_ALIAS
    assert index.search_units("metr")[0].relevance == NAME_PREFIX
    assert index.search_units("mt")[0].relevance == SYMBOL_PREFIX


def test_ties_are_broken_by_unit_then_category():
    index = UnitSearchIndex()
    index.add_category(_toy_category("toys"))
    index.add_category(_toy_category("games"))

    results = index.search_units("block")

    assert [(r.unit_id, r.category_id) for r in results] == [("block", "games"), ("block", "toys")]


def test_limit_and_category_filter():
    _, index = _full_index()

    assert len(index.search_units("meter", limit=3)) == 3
    assert index.search_units("meter", limit=0) == []
    only_speed = index.search_units("meter", categories=["speed"])
    assert only_speed and {result.category_id for result in only_speed} == {"speed"}
    with pytest.raises(InvalidArgument):
        index.search_units("meter", limit=-1)


def test_empty_query_returns_nothing():
    _, index = _full_index()

    assert index.search_units("") == []
    assert index.search_units("   ") == []
    assert list(index.iter_matches("")) == []


def test_iter_matches_is_restartable_and_non_mutating():
    index = UnitSearchIndex()
    index.add_category(_toy_category())
    before = index.stats()

    first = list(index.iter_matches("meter"))
    second = list(index.iter_matches("meter"))

    assert first == second
    assert index.stats() == before


def test_unknown_category_name_echoes_id():
    index = UnitSearchIndex()
    index.add_category(_toy_category("mystery"))

    result = index.search_units("emu")[0]

    assert result.category_name == "mystery"
    assert result.subcategory_id is None


def test_index_reuses_loader_units_and_tracks_invalidation():
    loader = CategoryLoader()
    index = UnitSearchIndex(loader)

    length = asyncio.run(loader.load_unit_category("length"))
    hit = index.search_units("foot")[0]

    assert hit.unit is length.find_unit("foot")
    assert hit.subcategory_id == "imperial"
    assert index.indexed_categories() == ["length"]

    loader.invalidate("length")
    assert index.search_units("foot") == []


def test_stats_remove_and_clear():
    index = UnitSearchIndex()
    index.add_category(_toy_category("toys"))
    index.add_category(Category(id="solo", name="Solo", base_unit_id="one", units=(Unit("one", "One", "1", base_unit=True),)))

    stats = index.stats()
    assert stats["categories"] == 2
    assert stats["units"] == 7
    assert stats["terms"] >= 2 * stats["units"]

    assert index.remove_category("solo") is True
    assert index.remove_category("solo") is False
    index.clear()
    assert index.stats() == {"categories": 0, "units": 0, "terms": 0}


def test_index_all_requires_loader():
    with pytest.raises(InvalidArgument):
        asyncio.run(UnitSearchIndex().index_all())
