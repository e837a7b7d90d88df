# kappagotchi/core/gauges.py
"""Derived read-only figures for the room screen (bars, age label)."""
from __future__ import annotations
from typing import Optional

from kappagotchi.core.calendar import DAYS_PER_YEAR, SECONDS_PER_DAY
from kappagotchi.core.rules import DEFAULT_RULES, RuleTable
from kappagotchi.data.state_types import CatchCandidate, CoreState, Stage

DAYS_PER_MONTH = 30
NO_VALUE = "--"


def _clamp_pct(value: float) -> int:
    return max(0, min(100, int(round(value))))


def water_percent(state: CoreState, now: float, rules: RuleTable = DEFAULT_RULES) -> int:
    """Water bar: full right after watering, empty when guttari sets in."""
    kappa = state.kappa
    if kappa is None:
        return 0
    last = kappa.last_water_at if kappa.last_water_at is not None else now
    remaining = 1 - (now - last) / rules.death.no_water_to_guttari
    return _clamp_pct(remaining * 100)


def satiety_percent(state: CoreState) -> int:
    kappa = state.kappa
    if kappa is None:
        return 0
    return _clamp_pct(kappa.satiety)


def is_danger(pct: float, rules: RuleTable = DEFAULT_RULES) -> bool:
    """Bars at or below this level are drawn red."""
    return pct <= rules.ui.danger_threshold_pct


def is_hungry(state: CoreState, rules: RuleTable = DEFAULT_RULES) -> bool:
    kappa = state.kappa
    return kappa is not None and kappa.satiety <= rules.food.hungry_red_threshold


def is_dying(pct: float, rules: RuleTable = DEFAULT_RULES) -> bool:
    """Water level below which the kappa is drawn wilting."""
    return pct < rules.ui.dying_water_pct


def age_label(state: CoreState, now: float) -> str:
    """``"{years}y {months}m"``; months are 30-day blocks of the leftover days."""
    kappa = state.kappa
    if kappa is None:
        return NO_VALUE
    total_days = max(0, int((now - kappa.born_at) // SECONDS_PER_DAY))
    years = total_days // DAYS_PER_YEAR
    months = (total_days % DAYS_PER_YEAR) // DAYS_PER_MONTH
    return f"{years}y {months}m"


def stage_label(stage: Optional[Stage]) -> str:
    labels = {Stage.CHILD: "Child", Stage.BOY: "Boy", Stage.ADULT: "Adult"}
    return labels.get(stage, NO_VALUE)


def describe_candidate(candidate: CatchCandidate) -> str:
    """Text for the catch review screen."""
    who = "a boy kappa" if candidate.stage == Stage.BOY else "an adult kappa"
    return f"You caught {who}! Age: {candidate.age_years} / Lifespan: {candidate.lifespan_years} years"
