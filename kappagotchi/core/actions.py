# kappagotchi/core/actions.py
"""
Player actions: fishing, adopting, watering, feeding, shopping, coins.

Every handler returns a ``Result``. A failed action carries the untouched
state, no events, and a ``CoreError`` whose message is meant for the player.
"""
from __future__ import annotations
import logging
from typing import Optional

from kappagotchi.core.calendar import DAYS_PER_YEAR
from kappagotchi.core.rng import RandomSource, SystemRandomSource
from kappagotchi.core.rules import DEFAULT_RULES, RuleTable
from kappagotchi.data.state_types import (
    CatchCandidate, CoreEvent, CoreState, ErrorCode, EventType, Fever, FoodKind,
    Health, Kappa, Result, Stage, pose_for,
)

_LOG = logging.getLogger("kappagotchi.core.actions")

MSG_NO_KAPPA = "No kappa in the room."
MSG_ALREADY_DEAD = "The kappa is dead."
MSG_NO_CANDIDATE = "Nothing on the line to take home."
MSG_NO_STOCK = "You have none of that food left."
MSG_NOT_HUNGRY = (
    "The kappa is not hungry yet. You can feed it once the food gauge drops below {threshold:g}%."
)
MSG_NOT_IN_SHOP = "The shop does not sell {kind}."
MSG_NOT_ENOUGH_COINS = "Not enough coins."
MSG_BAD_AMOUNT = "Coin grants must be positive."


def _require_living(state: CoreState) -> Optional[Result]:
    if state.kappa is None:
        return Result.failure(state, ErrorCode.NO_KAPPA, MSG_NO_KAPPA)
    if not state.kappa.is_alive:
        return Result.failure(state, ErrorCode.ALREADY_DEAD, MSG_ALREADY_DEAD)
    return None


# ----------------------------------------------------------------------
# Fishing
# ----------------------------------------------------------------------
def roll_catch(rng: Optional[RandomSource] = None, rules: RuleTable = DEFAULT_RULES) -> CatchCandidate:
    """Cast the line. Only boys and adults bite; children are never caught."""
    rng = rng or SystemRandomSource()
    fishing = rules.fishing
    is_boy = rng.next_int(fishing.roll_resolution) < fishing.boy_threshold
    stage = Stage.BOY if is_boy else Stage.ADULT
    age_days = rules.life.caught_boy_age_days if is_boy else rules.life.caught_adult_age_days
    candidate = CatchCandidate(
        stage=stage,
        age_years=max(1, age_days // DAYS_PER_YEAR),
        lifespan_years=max(1, rules.life.lifespan_days // DAYS_PER_YEAR),
    )
    _LOG.debug("Caught a %s (age %d)", stage.value, candidate.age_years)
    return candidate


def set_caught(state: CoreState, candidate: Optional[CatchCandidate]) -> CoreState:
    return state.with_candidate(candidate)


def release_caught(state: CoreState) -> CoreState:
    return state.with_candidate(None)


def adopt_caught(state: CoreState, now: float, rules: RuleTable = DEFAULT_RULES) -> Result:
    """Take the pending catch home. Its birth is back-dated by its nominal age."""
    candidate = state.caught
    if candidate is None:
        return Result.failure(state, ErrorCode.NOT_ALLOWED, MSG_NO_CANDIDATE)

    age = rules.caught_boy_age if candidate.stage == Stage.BOY else rules.caught_adult_age
    kappa = Kappa(
        stage=candidate.stage,
        health=Health.NORMAL,
        pose=pose_for(candidate.stage),
        born_at=now - age,
        last_water_at=now,
        satiety=rules.food.satiety_full,
        satiety_updated_at=now,
        last_feed_at=now,
        fever=Fever(),
    )
    _LOG.info("Adopted a %s kappa", candidate.stage.value)
    return Result.success(state.with_kappa(kappa))


# ----------------------------------------------------------------------
# Care
# ----------------------------------------------------------------------
def apply_water(state: CoreState, now: float) -> Result:
    """Water the kappa. No cooldown, no cap; cures guttari and fever outright."""
    failure = _require_living(state)
    if failure is not None:
        return failure

    kappa = state.kappa
    next_state = state.with_player(
        water_count_today=state.player.water_count_today + 1,
    ).with_kappa(kappa.model_copy(update={
        "last_water_at": now,
        "health": Health.NORMAL,
        "guttari_started_at": None,
        "fever": kappa.fever.cleared(),
    }))
    return Result.success(next_state, [
        CoreEvent(type=EventType.SE_KAPPA_CRY),
        CoreEvent(type=EventType.WATER_APPLIED),
    ])


def apply_feed(state: CoreState, kind: FoodKind, now: float, rules: RuleTable = DEFAULT_RULES) -> Result:
    """Feed one item of ``kind``. Refused while the kappa is still well fed."""
    failure = _require_living(state)
    if failure is not None:
        return failure

    kind = FoodKind(kind)
    stock = state.player.stock
    if stock.count(kind) <= 0:
        return Result.failure(state, ErrorCode.NOT_ALLOWED, MSG_NO_STOCK)

    threshold = rules.food.feed_threshold
    if state.kappa.satiety >= threshold:
        return Result.failure(state, ErrorCode.NOT_ALLOWED, MSG_NOT_HUNGRY.format(threshold=threshold))

    next_state = state.with_player(
        stock=stock.adjust(kind, -1),
        feed_count_today=state.player.feed_count_today + 1,
    )
    next_state = next_state.with_kappa(next_state.kappa.model_copy(update={
        "satiety": rules.food.satiety_full,
        "satiety_updated_at": now,
        "last_feed_at": now,
    }))
    _LOG.debug("Fed %s (%d left)", kind.value, next_state.player.stock.count(kind))
    return Result.success(next_state, [
        CoreEvent(type=EventType.SE_KAPPA_CRY),
        CoreEvent(
            type=EventType.FEED_APPLIED,
            cucumbers_left=next_state.player.stock.cucumber,
            satiety=next_state.kappa.satiety,
        ),
    ])


def apply_feed_cucumber(state: CoreState, now: float, rules: RuleTable = DEFAULT_RULES) -> Result:
    return apply_feed(state, FoodKind.CUCUMBER, now, rules)


def apply_feed_premium_cucumber(state: CoreState, now: float, rules: RuleTable = DEFAULT_RULES) -> Result:
    return apply_feed(state, FoodKind.PREMIUM_CUCUMBER, now, rules)


def apply_feed_meat(state: CoreState, now: float, rules: RuleTable = DEFAULT_RULES) -> Result:
    return apply_feed(state, FoodKind.MEAT, now, rules)


def apply_feed_koi(state: CoreState, now: float, rules: RuleTable = DEFAULT_RULES) -> Result:
    return apply_feed(state, FoodKind.KOI, now, rules)


def apply_feed_takuan(state: CoreState, now: float, rules: RuleTable = DEFAULT_RULES) -> Result:
    return apply_feed(state, FoodKind.TAKUAN, now, rules)


# ----------------------------------------------------------------------
# Economy
# ----------------------------------------------------------------------
def buy_shop_item(state: CoreState, kind: FoodKind, rules: RuleTable = DEFAULT_RULES) -> Result:
    """Spend coins on a premium food; each purchase also earns color points."""
    kind = FoodKind(kind)
    color = rules.shop.color_for(kind)
    if color is None:
        return Result.failure(state, ErrorCode.NOT_ALLOWED, MSG_NOT_IN_SHOP.format(kind=kind.value))

    price = rules.shop.item_price_coins
    player = state.player
    if player.coins < price:
        return Result.failure(state, ErrorCode.NOT_ENOUGH_COINS, MSG_NOT_ENOUGH_COINS)

    next_state = state.with_player(
        coins=player.coins - price,
        stock=player.stock.adjust(kind, 1),
        color=player.color.add(color, rules.shop.color_bonus_on_buy),
    )
    _LOG.info("Bought %s for %d coins (%d left)", kind.value, price, next_state.player.coins)
    return Result.success(next_state)


def grant_coins(state: CoreState, amount: int) -> Result:
    """Credit coins from an outside source (purchase stub, promotions)."""
    if amount <= 0:
        return Result.failure(state, ErrorCode.NOT_ALLOWED, MSG_BAD_AMOUNT)
    _LOG.info("Granted %d coins", amount)
    return Result.success(state.with_player(coins=state.player.coins + amount))


def claim_ad_reward(state: CoreState, rules: RuleTable = DEFAULT_RULES) -> Result:
    """Coins for watching an ad; counted per day for display only."""
    result = grant_coins(state, rules.coins.ad_reward)
    if not result.ok:
        return result
    return Result.success(result.state.with_player(
        ad_reward_count_today=result.state.player.ad_reward_count_today + 1,
    ))
