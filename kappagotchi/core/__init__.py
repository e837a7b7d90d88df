# kappagotchi/core/__init__.py
"""
Core simulation engine for kappagotchi: calendar, randomness, rules,
lifecycle ticks and player actions. Pure functions, no I/O.
"""
from .calendar import to_game_day, day_start_instant, age_in_days
from .rng import RandomSource, SystemRandomSource, SequenceRandomSource, make_random_source
from .rules import RuleTable, DEFAULT_RULES
from .lifecycle import (
    create_initial_state,
    tick,
    hatch_new_child,
    apply_daily_reset_and_login_bonus,
    apply_satiety_decay,
    apply_fever_lottery_if_needed,
)
from .actions import (
    roll_catch,
    set_caught,
    release_caught,
    adopt_caught,
    apply_water,
    apply_feed,
    apply_feed_cucumber,
    apply_feed_premium_cucumber,
    apply_feed_meat,
    apply_feed_koi,
    apply_feed_takuan,
    buy_shop_item,
    grant_coins,
    claim_ad_reward,
)

__all__ = [
    "to_game_day", "day_start_instant", "age_in_days",
    "RandomSource", "SystemRandomSource", "SequenceRandomSource", "make_random_source",
    "RuleTable", "DEFAULT_RULES",
    "create_initial_state", "tick", "hatch_new_child",
    "apply_daily_reset_and_login_bonus", "apply_satiety_decay", "apply_fever_lottery_if_needed",
    "roll_catch", "set_caught", "release_caught", "adopt_caught",
    "apply_water", "apply_feed", "apply_feed_cucumber", "apply_feed_premium_cucumber",
    "apply_feed_meat", "apply_feed_koi", "apply_feed_takuan",
    "buy_shop_item", "grant_coins", "claim_ad_reward",
]
