# kappagotchi/core/lifecycle.py
"""
Lifecycle engine: advances a CoreState to a given instant.

One ``tick`` runs, in order and against a single ``now``:
  1. daily counter reset and login bonus
  2. satiety decay
  3. (no kappa -> stop)
  4. fever lottery (children, once per game day)
  5. growth: child -> boy (silent), boy -> adult (MOLTED)
  6. lifespan death
  7. thirst / fever death, or guttari onset for boys and adults

Death always lays an egg which hatches immediately, so a tick that kills the
kappa returns a freshly hatched child. The first death or guttari transition
ends the tick.
"""
from __future__ import annotations
import logging
from typing import List, Optional, Tuple

from kappagotchi.core.calendar import SECONDS_PER_HOUR, age_in_days, to_game_day
from kappagotchi.core.rng import RandomSource
from kappagotchi.core.rules import DEFAULT_RULES, RuleTable
from kappagotchi.data.state_types import (
    CoreEvent, CoreState, DeathReason, EventType, Fever, Health, Kappa, Result,
    SATIETY_MAX, SATIETY_MIN, Stage, pose_for,
)

_LOG = logging.getLogger("kappagotchi.core.lifecycle")

Events = List[CoreEvent]


def create_initial_state() -> CoreState:
    """Fresh save: no coins, no stock, nobody in the room, days unset."""
    return CoreState()


def _offset(rules: RuleTable, utc_offset_minutes: Optional[int]) -> int:
    return rules.tz_offset_minutes if utc_offset_minutes is None else utc_offset_minutes


# ----------------------------------------------------------------------
# Step 1: day boundary
# ----------------------------------------------------------------------
def apply_daily_reset_and_login_bonus(
    state: CoreState,
    now: float,
    rules: RuleTable = DEFAULT_RULES,
    utc_offset_minutes: Optional[int] = None,
) -> Tuple[CoreState, Events]:
    """Reset per-day counters and grant the login bonus, each at most once a day."""
    today = to_game_day(now, _offset(rules, utc_offset_minutes))
    events: Events = []

    if state.player.last_daily_reset != today:
        state = state.with_player(
            water_count_today=0,
            feed_count_today=0,
            ad_reward_count_today=0,
            last_daily_reset=today,
        )
        events.append(CoreEvent(type=EventType.DAILY_RESET))
        _LOG.debug("Daily counters reset for %s", today)

    if state.player.last_login_bonus != today:
        amount = rules.food.login_bonus_cucumbers
        state = state.with_player(
            stock=state.player.stock.model_copy(
                update={"cucumber": state.player.stock.cucumber + amount}
            ),
            last_login_bonus=today,
        )
        events.append(CoreEvent(type=EventType.LOGIN_BONUS_CUCUMBER, amount=amount))
        _LOG.info("Login bonus for %s: +%d cucumbers", today, amount)

    return state, events


# ----------------------------------------------------------------------
# Step 2: hunger
# ----------------------------------------------------------------------
def decayed_satiety(satiety: float, elapsed: float, rules: RuleTable = DEFAULT_RULES) -> float:
    """Linear decay over ``elapsed`` seconds, clamped to the gauge range."""
    value = satiety - max(0.0, elapsed) * rules.food.satiety_decay_per_second
    return max(SATIETY_MIN, min(SATIETY_MAX, value))


def apply_satiety_decay(state: CoreState, now: float, rules: RuleTable = DEFAULT_RULES) -> CoreState:
    kappa = state.kappa
    if kappa is None:
        return state
    elapsed = max(0.0, now - kappa.satiety_updated_at)
    if elapsed == 0:
        return state
    return state.with_kappa(kappa.model_copy(update={
        "satiety": decayed_satiety(kappa.satiety, elapsed, rules),
        "satiety_updated_at": now,
    }))


# ----------------------------------------------------------------------
# Step 4: fever
# ----------------------------------------------------------------------
def apply_fever_lottery_if_needed(
    state: CoreState,
    now: float,
    rng: RandomSource,
    rules: RuleTable = DEFAULT_RULES,
    utc_offset_minutes: Optional[int] = None,
) -> Tuple[CoreState, Events]:
    """Once per game day a healthy child has a 1/denominator chance of fever."""
    kappa = state.kappa
    if kappa is None or kappa.stage != Stage.CHILD or not kappa.is_alive:
        return state, []
    if kappa.fever.is_fever:
        return state, []

    today = to_game_day(now, _offset(rules, utc_offset_minutes))
    if kappa.fever.fever_checked_date == today:
        return state, []

    hit = rng.next_int(rules.fever.lottery_denominator) == 0
    fever = Fever(
        is_fever=hit,
        fever_started_at=now if hit else None,
        fever_checked_date=today,
    )
    state = state.with_kappa(kappa.model_copy(update={"fever": fever}))
    if hit:
        _LOG.info("Fever started (%s)", today)
        return state, [CoreEvent(type=EventType.FEVER_STARTED)]
    return state, []


# ----------------------------------------------------------------------
# Rebirth
# ----------------------------------------------------------------------
def new_child(now: float, rules: RuleTable = DEFAULT_RULES) -> Kappa:
    return Kappa(
        stage=Stage.CHILD,
        health=Health.NORMAL,
        pose=pose_for(Stage.CHILD),
        born_at=now,
        last_water_at=now,
        satiety=rules.food.satiety_full,
        satiety_updated_at=now,
        last_feed_at=now,
        fever=Fever(),
    )


def hatch_new_child(
    state: CoreState,
    now: float,
    rules: RuleTable = DEFAULT_RULES,
    utc_offset_minutes: Optional[int] = None,
) -> CoreState:
    """Replace the kappa with a newborn child and count the egg.

    Also stamps today's reset so the next tick does not reset again, and drops
    any pending catch.
    """
    today = to_game_day(now, _offset(rules, utc_offset_minutes))
    state = state.with_player(
        eggs_total=state.player.eggs_total + 1,
        last_daily_reset=today,
    )
    _LOG.info("Egg hatched (eggs_total=%d)", state.player.eggs_total)
    return state.with_kappa(new_child(now, rules))


def _die_and_hatch(
    state: CoreState,
    now: float,
    reason: DeathReason,
    events: Events,
    rules: RuleTable,
    utc_offset_minutes: int,
) -> Result:
    _LOG.info("Kappa died: %s", reason.value)
    events.append(CoreEvent(type=EventType.DIED, reason=reason.value))
    events.append(CoreEvent(type=EventType.EGG_LAID, reason=reason.value))
    state = hatch_new_child(state, now, rules, utc_offset_minutes)
    events.append(CoreEvent(type=EventType.HATCHED))
    return Result.success(state, events)


def _since(now: float, instant: Optional[float]) -> float:
    """Elapsed seconds since ``instant``; never-happened counts as forever."""
    if instant is None:
        return float("inf")
    return now - instant


# ----------------------------------------------------------------------
# tick
# ----------------------------------------------------------------------
def tick(
    state: CoreState,
    now: float,
    rng: RandomSource,
    utc_offset_minutes: Optional[int] = None,
    rules: RuleTable = DEFAULT_RULES,
) -> Result:
    """Advance ``state`` to ``now``. Never fails; the result always has ``ok``."""
    offset = _offset(rules, utc_offset_minutes)
    events: Events = []

    state, day_events = apply_daily_reset_and_login_bonus(state, now, rules, offset)
    events.extend(day_events)

    state = apply_satiety_decay(state, now, rules)

    if state.kappa is None:
        return Result.success(state, events)

    state, fever_events = apply_fever_lottery_if_needed(state, now, rng, rules, offset)
    events.extend(fever_events)

    # growth
    kappa = state.kappa
    age = age_in_days(now, kappa.born_at)
    if kappa.stage == Stage.CHILD and age >= rules.life.child_to_boy_days:
        kappa = kappa.model_copy(update={"stage": Stage.BOY, "pose": pose_for(Stage.BOY)})
        _LOG.debug("Child grew into a boy (age %d days)", age)
    if kappa.stage == Stage.BOY and age >= rules.life.boy_to_adult_age_days:
        kappa = kappa.model_copy(update={"stage": Stage.ADULT, "pose": pose_for(Stage.ADULT)})
        events.append(CoreEvent(type=EventType.MOLTED))
        _LOG.info("Kappa molted into an adult (age %d days)", age)
    if kappa is not state.kappa:
        state = state.with_kappa(kappa)

    # lifespan takes priority over every other death
    if age >= rules.life.lifespan_days and kappa.is_alive:
        return _die_and_hatch(state, now, DeathReason.LIFESPAN, events, rules, offset)

    if not kappa.is_alive:
        return Result.success(state, events)

    death = rules.death
    no_water = _since(now, kappa.last_water_at)

    if kappa.stage == Stage.CHILD:
        if no_water >= death.child_no_water_death:
            return _die_and_hatch(state, now, DeathReason.CHILD_NO_WATER, events, rules, offset)
        if kappa.fever.is_fever and _since(now, kappa.fever.fever_started_at) >= death.fever_deadline:
            return _die_and_hatch(state, now, DeathReason.CHILD_FEVER, events, rules, offset)
        return Result.success(state, events)

    if kappa.health == Health.NORMAL and no_water >= death.no_water_to_guttari:
        state = state.with_kappa(kappa.model_copy(update={
            "health": Health.GUTTARI,
            "guttari_started_at": now,
        }))
        events.append(CoreEvent(type=EventType.GUTTARI_STARTED))
        _LOG.info("Kappa is guttari after %.1fh without water", no_water / SECONDS_PER_HOUR)
        return Result.success(state, events)

    if kappa.health == Health.GUTTARI and _since(now, kappa.guttari_started_at) >= death.guttari_to_death:
        return _die_and_hatch(state, now, DeathReason.BOYADULT_NO_WATER, events, rules, offset)

    return Result.success(state, events)
