import pytest

from conftest import OFFSET, T, make_kappa, make_state
from kappagotchi.core.calendar import day_start_instant, days, hours, to_game_day
from kappagotchi.core.lifecycle import (
    apply_daily_reset_and_login_bonus, apply_fever_lottery_if_needed, apply_satiety_decay,
    create_initial_state, decayed_satiety, hatch_new_child, tick,
)
from kappagotchi.core.rng import SequenceRandomSource
from kappagotchi.data.state_types import (
    DeathReason, EventType, Fever, Health, Pose, Stage,
)


def types(result):
    return [e.type for e in result.events]


# ----------------------------------------------------------------------
# Day boundary
# ----------------------------------------------------------------------
def test_initial_state_is_empty():
    state = create_initial_state()
    assert state.player.coins == 0
    assert state.player.stock.cucumber == 0
    assert state.kappa is None and state.caught is None
    assert state.player.last_daily_reset is None
    assert state.player.last_login_bonus is None


def test_first_tick_resets_and_grants_bonus(quiet_rng):
    result = tick(create_initial_state(), T, quiet_rng)
    assert result.ok
    assert types(result) == [EventType.DAILY_RESET, EventType.LOGIN_BONUS_CUCUMBER]
    assert result.events[1].amount == 3
    assert result.state.player.stock.cucumber == 3
    assert result.state.player.last_daily_reset == to_game_day(T, OFFSET)


def test_login_bonus_once_per_day_and_again_after_midnight(quiet_rng):
    state = tick(create_initial_state(), T, quiet_rng).state

    same_day = tick(state, T + hours(1), quiet_rng)
    assert same_day.events == ()
    assert same_day.state.player.stock.cucumber == 3

    midnight = day_start_instant("2025-06-02", 0, 0, OFFSET)
    before = tick(same_day.state, midnight - 1, quiet_rng)
    assert before.events == ()

    after = tick(before.state, midnight, quiet_rng)
    assert types(after) == [EventType.DAILY_RESET, EventType.LOGIN_BONUS_CUCUMBER]
    assert after.state.player.stock.cucumber == 6

    again = tick(after.state, midnight + hours(5), quiet_rng)
    assert again.events == ()
    assert again.state.player.stock.cucumber == 6


def test_daily_reset_clears_counters():
    state = make_state(
        water_count_today=4, feed_count_today=2, ad_reward_count_today=1,
        last_daily_reset="2025-05-31", last_login_bonus="2025-05-31",
    )
    state, events = apply_daily_reset_and_login_bonus(state, T)
    assert state.player.water_count_today == 0
    assert state.player.feed_count_today == 0
    assert state.player.ad_reward_count_today == 0
    assert [e.type for e in events] == [EventType.DAILY_RESET, EventType.LOGIN_BONUS_CUCUMBER]


def test_explicit_offset_overrides_rules():
    instant = day_start_instant("2025-06-01", 20, 0, 0)
    state = make_state(last_daily_reset="2025-06-01", last_login_bonus="2025-06-01")
    _, events = apply_daily_reset_and_login_bonus(state, instant, utc_offset_minutes=0)
    assert events == []
    _, events = apply_daily_reset_and_login_bonus(state, instant)
    assert len(events) == 2


# ----------------------------------------------------------------------
# Satiety
# ----------------------------------------------------------------------
def test_satiety_decays_linearly(rules):
    state = make_state(make_kappa(satiety_updated_at=T - hours(3)))
    decayed = apply_satiety_decay(state, T, rules)
    assert decayed.kappa.satiety == pytest.approx(50.0)
    assert decayed.kappa.satiety_updated_at == T


@pytest.mark.parametrize("before,elapsed", [(100.0, 0), (50.0, 60), (10.0, hours(12)), (0.0, hours(1))])
def test_decayed_satiety_formula(rules, before, elapsed):
    expected = max(0.0, min(100.0, before - elapsed * rules.food.satiety_decay_per_second))
    assert decayed_satiety(before, elapsed, rules) == pytest.approx(expected)


def test_satiety_decay_is_idempotent_at_zero_elapsed(boy_state):
    assert apply_satiety_decay(boy_state, T) is boy_state


def test_satiety_floors_at_zero(quiet_rng):
    state = make_state(make_kappa(satiety=30.0, satiety_updated_at=T - hours(12)))
    assert tick(state, T, quiet_rng).state.kappa.satiety == 0.0


# ----------------------------------------------------------------------
# Without a kappa
# ----------------------------------------------------------------------
def test_idle_tick_never_draws():
    rng = SequenceRandomSource([0])
    result = tick(make_state(), T, rng)
    assert result.events == ()
    assert rng.calls == []


# ----------------------------------------------------------------------
# Fever
# ----------------------------------------------------------------------
def test_fever_lottery_hit_on_zero():
    rng = SequenceRandomSource([0])
    state = make_state(make_kappa(Stage.CHILD, fever=Fever()))
    result = tick(state, T, rng)
    assert types(result) == [EventType.FEVER_STARTED]
    assert result.state.kappa.fever.is_fever
    assert result.state.kappa.fever.fever_started_at == T
    assert rng.calls == [30]


def test_fever_lottery_runs_once_per_day():
    rng = SequenceRandomSource([1])
    state = make_state(make_kappa(Stage.CHILD, fever=Fever()))
    state = tick(state, T, rng).state
    assert state.kappa.fever.fever_checked_date == to_game_day(T, OFFSET)
    assert not state.kappa.fever.is_fever

    tick(state, T + hours(1), rng)
    assert rng.calls == [30]


def test_fever_lottery_skips_boys():
    rng = SequenceRandomSource([0])
    state = make_state(make_kappa(Stage.BOY, fever=Fever()))
    new_state, events = apply_fever_lottery_if_needed(state, T, rng)
    assert new_state is state and events == []
    assert rng.calls == []


def test_untreated_fever_kills_child(quiet_rng):
    kappa = make_kappa(
        Stage.CHILD,
        last_water_at=T - hours(11),
        fever=Fever(is_fever=True, fever_started_at=T - hours(10),
                    fever_checked_date=to_game_day(T, OFFSET)),
    )
    result = tick(make_state(kappa), T, quiet_rng)
    assert types(result) == [EventType.DIED, EventType.EGG_LAID, EventType.HATCHED]
    assert result.events[0].reason == DeathReason.CHILD_FEVER.value


# ----------------------------------------------------------------------
# Growth
# ----------------------------------------------------------------------
def test_child_becomes_boy_silently(quiet_rng):
    state = make_state(make_kappa(Stage.CHILD, age_days=30))
    result = tick(state, T, quiet_rng)
    assert result.events == ()
    assert result.state.kappa.stage == Stage.BOY
    assert result.state.kappa.pose == Pose.SIT


def test_boy_molts_into_adult(quiet_rng):
    state = make_state(make_kappa(Stage.BOY, age_days=730))
    result = tick(state, T, quiet_rng)
    assert types(result) == [EventType.MOLTED]
    assert result.state.kappa.stage == Stage.ADULT
    assert result.state.kappa.pose == Pose.STAND


def test_growth_chains_within_one_tick(quiet_rng):
    state = make_state(make_kappa(Stage.CHILD, age_days=800))
    result = tick(state, T, quiet_rng)
    assert types(result) == [EventType.MOLTED]
    assert result.state.kappa.stage == Stage.ADULT


# ----------------------------------------------------------------------
# Death and guttari
# ----------------------------------------------------------------------
def test_guttari_after_a_day_without_water(quiet_rng):
    state = make_state(make_kappa(Stage.BOY, last_water_at=T - hours(24)))
    result = tick(state, T, quiet_rng)
    assert types(result) == [EventType.GUTTARI_STARTED]
    kappa = result.state.kappa
    assert kappa.health == Health.GUTTARI
    assert kappa.guttari_started_at == T


def test_guttari_death_six_hours_later(quiet_rng):
    state = make_state(make_kappa(Stage.ADULT, last_water_at=T - hours(24)))
    state = tick(state, T, quiet_rng).state

    still = tick(state, T + hours(6) - 1, quiet_rng)
    assert still.events == ()
    assert still.state.kappa.health == Health.GUTTARI

    result = tick(state, T + hours(6), quiet_rng)
    assert types(result) == [EventType.DIED, EventType.EGG_LAID, EventType.HATCHED]
    assert result.events[0].reason == DeathReason.BOYADULT_NO_WATER.value
    assert result.state.kappa.stage == Stage.CHILD
    assert result.state.player.eggs_total == 1


def test_never_watered_counts_as_thirsty(quiet_rng):
    state = make_state(make_kappa(Stage.BOY, last_water_at=None))
    assert types(tick(state, T, quiet_rng)) == [EventType.GUTTARI_STARTED]


def test_children_never_go_guttari(quiet_rng):
    state = make_state(make_kappa(Stage.CHILD, last_water_at=T - hours(23)))
    result = tick(state, T, quiet_rng)
    assert result.events == ()
    assert result.state.kappa.health == Health.NORMAL


def test_child_dies_after_a_day_without_water(quiet_rng):
    state = make_state(make_kappa(Stage.CHILD, last_water_at=T - hours(24)))
    result = tick(state, T, quiet_rng)
    assert result.events[0].reason == DeathReason.CHILD_NO_WATER.value
    assert result.events[1].reason == DeathReason.CHILD_NO_WATER.value


def test_lifespan_beats_guttari_death(quiet_rng):
    kappa = make_kappa(
        Stage.ADULT, age_days=1095,
        health=Health.GUTTARI, guttari_started_at=T - hours(6), last_water_at=T - hours(30),
    )
    result = tick(make_state(kappa), T, quiet_rng)
    assert types(result) == [EventType.DIED, EventType.EGG_LAID, EventType.HATCHED]
    assert result.events[0].reason == DeathReason.LIFESPAN.value


def test_rebirth_yields_fresh_child():
    state = make_state(make_kappa(Stage.ADULT), eggs_total=2)
    reborn = hatch_new_child(state, T + days(3))
    kappa = reborn.kappa
    assert kappa.stage == Stage.CHILD
    assert kappa.health == Health.NORMAL
    assert kappa.satiety == 100.0
    assert kappa.born_at == T + days(3)
    assert reborn.caught is None
    assert reborn.player.eggs_total == 3
    assert reborn.player.last_daily_reset == to_game_day(T + days(3), OFFSET)


def test_tick_never_fails(quiet_rng, boy_state):
    result = tick(boy_state, T + hours(2), quiet_rng)
    assert result.ok
    assert result.error is None
