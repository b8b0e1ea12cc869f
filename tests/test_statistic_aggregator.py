import logging

from masterstats.application.services.statistic_aggregator import (
    aggregate, chest_summary, derive_view, grade_histogram, level_histogram, top_champions,
)
from masterstats.domain.entities import EMPTY_SLOT, ChampionSlot, SummonerIdentity
from masterstats.domain.enums import GradeLetter, GradeModifier, Tier

from conftest import make_catalog, mastery, raw_summoner

NA_FAKER = SummonerIdentity.create("NA", "Faker")


def test_aggregate_drops_champions_missing_from_catalog(catalog):
    raw = raw_summoner(masteries=(mastery(1), mastery(999, points=99_999), mastery(2)))
    statistic = aggregate(NA_FAKER, raw, catalog)
    assert [m.champion_id for m in statistic.masteries] == [1, 2]
    view = derive_view(statistic, catalog)
    assert view.champions_played == 2
    assert all(s.champion.champion_id != 999 for s in view.top_champions if not s.is_empty)


def test_aggregate_maps_tier_sentinel(catalog):
    unranked = aggregate(NA_FAKER, raw_summoner(tier="null", division="I"), catalog)
    assert unranked.tier is Tier.UNRANKED
    assert unranked.division is None
    assert aggregate(NA_FAKER, raw_summoner(tier=None, division=None), catalog).tier is Tier.UNRANKED
    gold = aggregate(NA_FAKER, raw_summoner(tier="GOLD", division="II"), catalog)
    assert gold.tier is Tier.GOLD
    assert gold.rank_label == "Gold II"


def test_aggregate_clamps_unknown_tier(catalog, caplog):
    with caplog.at_level(logging.WARNING):
        statistic = aggregate(NA_FAKER, raw_summoner(tier="GRANDMASTER"), catalog)
    assert statistic.tier is Tier.UNRANKED
    assert any("GRANDMASTER" in r.getMessage() for r in caplog.records)


def test_top_n_pads_with_placeholders(catalog):
    statistic = aggregate(NA_FAKER, raw_summoner(masteries=(mastery(10, points=500),)), catalog)
    slots = top_champions(statistic, catalog, 3)
    assert len(slots) == 3
    assert isinstance(slots[0], ChampionSlot)
    assert slots[0].champion.key_name == "champ10"
    assert not slots[0].is_empty
    assert slots[1] is EMPTY_SLOT and slots[2] is EMPTY_SLOT
    assert slots[1].is_empty
    assert None not in slots


def test_top_n_sorts_by_points_and_keeps_fetch_order_on_ties(catalog):
    raw = raw_summoner(masteries=(
        mastery(5, points=100),
        mastery(7, points=300),
        mastery(3, points=300),
        mastery(9, points=300),
        mastery(1, points=200),
    ))
    statistic = aggregate(NA_FAKER, raw, catalog)
    assert [s.mastery.champion_id for s in top_champions(statistic, catalog, 3)] == [7, 3, 9]
    assert [s.mastery.champion_id for s in top_champions(statistic, catalog, 5)] == [7, 3, 9, 1, 5]


def test_chestless_top_six_excludes_granted_chests(catalog):
    raw = raw_summoner(masteries=tuple(
        mastery(i, points=1000 * i, chest=1 if i % 2 else 0) for i in range(1, 11)
    ))
    statistic = aggregate(NA_FAKER, raw, catalog)
    slots = top_champions(statistic, catalog, 6, chestless=True)
    assert [s.mastery.champion_id for s in slots if not s.is_empty] == [10, 8, 6, 4, 2]
    assert slots[5] is EMPTY_SLOT


def test_level_histogram_is_zero_filled_for_no_records():
    assert level_histogram([]) == {1: 0, 2: 0, 3: 0, 4: 0, 5: 0, 6: 0, 7: 0}


def test_level_histogram_counts_and_clamps(caplog):
    with caplog.at_level(logging.WARNING):
        levels = level_histogram([mastery(1, level=7), mastery(2, level=7), mastery(3, level=1), mastery(4, level=9)])
    assert levels[7] == 3
    assert levels[1] == 1
    assert sum(levels.values()) == 4
    assert any("champion level 9" in r.getMessage() for r in caplog.records)


def test_grade_histogram_buckets(faker_raw):
    grades = grade_histogram(faker_raw.masteries)
    assert set(grades) == set(GradeModifier)
    for buckets in grades.values():
        assert set(buckets) == set(GradeLetter)
    assert grades[GradeModifier.PLUS][GradeLetter.S] == 1
    assert grades[GradeModifier.NONE][GradeLetter.S] == 1
    assert grades[GradeModifier.MINUS][GradeLetter.A] == 1
    assert grades[GradeModifier.NONE][GradeLetter.B] == 1
    # the "null" grade is not counted anywhere
    assert sum(sum(b.values()) for b in grades.values()) == 4


def test_grade_histogram_is_zero_filled_when_empty():
    grades = grade_histogram([mastery(1, grade="null")])
    assert all(count == 0 for buckets in grades.values() for count in buckets.values())
    assert len(grades) == 3 and all(len(b) == 5 for b in grades.values())


def test_chest_counts_example(catalog, faker_raw):
    statistic = aggregate(NA_FAKER, faker_raw, catalog)
    view = derive_view(statistic, catalog)
    assert view.chests_granted == 2
    assert view.champions_played == 5
    assert view.champions_total == 140
    assert view.champions_not_played == 135
    assert view.chests_not_granted == 3
    assert view.chest_series() == [("Chests granted", 2), ("Chest not granted", 3), ("Not played", 135)]


def test_negative_not_played_is_clamped(caplog):
    small = make_catalog(1)
    with caplog.at_level(logging.WARNING):
        summary = chest_summary([mastery(1), mastery(1), mastery(1)], small)
    assert summary["champions_not_played"] == 0
    assert summary["champions_played"] == 3
    assert any("data-inconsistency" in r.getMessage() for r in caplog.records)


def test_derived_view_shapes(catalog, faker_raw):
    view = derive_view(aggregate(NA_FAKER, faker_raw, catalog), catalog)
    assert len(view.top_champions) == 3
    assert [s.mastery.champion_id for s in view.top_champions] == [1, 2, 3]
    upper, lower = view.chestless_rows
    assert len(upper) == 3 and len(lower) == 3
    assert [s.mastery.champion_id for s in upper] == [2, 4, 5]
    assert all(s is EMPTY_SLOT for s in lower)
    assert view.grade_categories == ["S", "A", "B", "C", "D"]
    assert [name for name, _ in view.grade_series()] == ["+", " ", "-"]
    assert view.grade_series()[0][1] == [1, 0, 0, 0, 0]


def test_statistic_total_points(catalog, faker_raw):
    statistic = aggregate(NA_FAKER, faker_raw, catalog)
    assert statistic.total_champion_points == 150_000
    assert statistic.summoner_key == "faker_na"
