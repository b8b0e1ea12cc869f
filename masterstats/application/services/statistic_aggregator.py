"""Pure functions turning raw mastery data into per-summoner statistics.

``aggregate`` runs once per cache miss and produces the immutable
:class:`SummonerStatistic` the cache stores. The remaining functions build
the :class:`DerivedView` on demand; every histogram is a fresh, zero-filled
value so consumers never check for missing buckets.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from masterstats.core.logging.logger import get_logger, traceable
from masterstats.domain.catalog import ChampionCatalog
from masterstats.domain.entities import (
    EMPTY_SLOT, MAX_CHAMPION_LEVEL, MIN_CHAMPION_LEVEL, ChampionMastery, ChampionSlot,
    DerivedView, RawSummonerData, SummonerIdentity, SummonerStatistic,
)
from masterstats.domain.entities.view import GradeHistogram, Slot
from masterstats.domain.enums import GradeLetter, GradeModifier
from masterstats.domain.ordering import resolve_grade, resolve_tier

_log = get_logger(__name__, service="aggregator")

TOP_CHAMPIONS = 3
TOP_CHESTLESS_CHAMPIONS = 6


def filter_known_champions(
    masteries: Iterable[ChampionMastery], catalog: ChampionCatalog
) -> Tuple[ChampionMastery, ...]:
    """Drop records whose champion is missing from the catalog, keeping order."""
    known: List[ChampionMastery] = []
    dropped: List[int] = []
    for mastery in masteries:
        if mastery.champion_id in catalog:
            known.append(mastery)
        else:
            dropped.append(mastery.champion_id)
    if dropped:
        _log.debug(lambda: f"dropped masteries for champions missing from catalog: {dropped}")
    return tuple(known)


@traceable
def aggregate(identity: SummonerIdentity, raw: RawSummonerData, catalog: ChampionCatalog) -> SummonerStatistic:
    """Build the statistic for one summoner from the fetch collaborator's data."""
    tier = resolve_tier(raw.tier)
    return SummonerStatistic(
        identity=identity,
        summoner_name=raw.summoner_name or identity.summoner_name,
        tier=tier,
        division=raw.division if tier.is_ranked else None,
        mastery_score=max(0, raw.mastery_score),
        masteries=filter_known_champions(raw.masteries, catalog),
        summoner_id=raw.summoner_id,
        summoner_level=raw.summoner_level,
        profile_icon_id=raw.profile_icon_id,
    )


def top_champions(
    statistic: SummonerStatistic,
    catalog: ChampionCatalog,
    n: int = TOP_CHAMPIONS,
    *,
    chestless: bool = False,
) -> Tuple[Slot, ...]:
    """The ``n`` champions with most points, padded with ``EMPTY_SLOT`` to exactly ``n``.

    ``sorted`` is stable, so champions tied on points keep the order the
    fetch collaborator returned them in.
    """
    candidates = [m for m in statistic.masteries if m.champion_id in catalog]
    if chestless:
        candidates = [m for m in candidates if not m.has_chest]
    ranked = sorted(candidates, key=lambda m: m.champion_points, reverse=True)[:n]
    slots: List[Slot] = [ChampionSlot(mastery=m, champion=catalog.by_id(m.champion_id)) for m in ranked]
    slots.extend(EMPTY_SLOT for _ in range(n - len(slots)))
    return tuple(slots)


def _clamp_level(level: int) -> int:
    if MIN_CHAMPION_LEVEL <= level <= MAX_CHAMPION_LEVEL:
        return level
    clamped = min(MAX_CHAMPION_LEVEL, max(MIN_CHAMPION_LEVEL, level))
    _log.warning(lambda: f"data-inconsistency champion level {level} outside "
                         f"{MIN_CHAMPION_LEVEL}..{MAX_CHAMPION_LEVEL}; counting as {clamped}")
    return clamped


def level_histogram(masteries: Iterable[ChampionMastery]) -> Dict[int, int]:
    levels = {level: 0 for level in range(MIN_CHAMPION_LEVEL, MAX_CHAMPION_LEVEL + 1)}
    for mastery in masteries:
        levels[_clamp_level(mastery.champion_level)] += 1
    return levels


def empty_grade_histogram() -> GradeHistogram:
    return {
        modifier: {letter: 0 for letter in GradeLetter.all_letters()}
        for modifier in GradeModifier.all_modifiers()
    }


def grade_histogram(masteries: Iterable[ChampionMastery]) -> GradeHistogram:
    """Count highest grades by modifier, then base letter.

    Records without a grade are left out entirely.
    """
    grades = empty_grade_histogram()
    for mastery in masteries:
        grade = resolve_grade(mastery.highest_grade)
        if grade is None:
            continue
        grades[grade.modifier][grade.letter] += 1
    return grades


def chest_summary(masteries: Iterable[ChampionMastery], catalog: ChampionCatalog) -> Dict[str, int]:
    """Chests granted, champions played, champions in the game, champions not played."""
    records = list(masteries)
    granted = sum(1 for m in records if m.has_chest)
    played = len(records)
    total = catalog.size()
    not_played = total - played
    if not_played < 0:
        _log.warning(lambda: f"data-inconsistency {played} champions played but catalog has {total}; "
                             f"clamping not-played to 0")
        not_played = 0
    return {
        'chests_granted': granted,
        'champions_played': played,
        'champions_total': total,
        'champions_not_played': not_played,
    }


def derive_view(statistic: SummonerStatistic, catalog: ChampionCatalog) -> DerivedView:
    """Compute every display statistic for one summoner."""
    masteries = [m for m in statistic.masteries if m.champion_id in catalog]
    return DerivedView(
        top_champions=top_champions(statistic, catalog, TOP_CHAMPIONS),
        top_chestless_champions=top_champions(statistic, catalog, TOP_CHESTLESS_CHAMPIONS, chestless=True),
        level_histogram=level_histogram(masteries),
        grade_histogram=grade_histogram(masteries),
        **chest_summary(masteries, catalog),
    )
