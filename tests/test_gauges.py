from conftest import T, make_kappa, make_state
from kappagotchi.core.calendar import days, hours
from kappagotchi.core.gauges import (
    NO_VALUE, age_label, describe_candidate, is_danger, is_dying, is_hungry,
    satiety_percent, stage_label, water_percent,
)
from kappagotchi.data.state_types import CatchCandidate, Stage


def test_water_percent_drains_over_a_day():
    state = make_state(make_kappa(last_water_at=T))
    assert water_percent(state, T) == 100
    assert water_percent(state, T + hours(12)) == 50
    assert water_percent(state, T + hours(24)) == 0
    assert water_percent(state, T + hours(48)) == 0


def test_water_percent_without_kappa():
    assert water_percent(make_state(), T) == 0


def test_satiety_percent_rounds():
    assert satiety_percent(make_state(make_kappa(satiety=42.6))) == 43
    assert satiety_percent(make_state()) == 0


def test_thresholds():
    assert is_danger(20) and not is_danger(21)
    assert is_dying(9) and not is_dying(10)
    assert is_hungry(make_state(make_kappa(satiety=20.0)))
    assert not is_hungry(make_state(make_kappa(satiety=20.5)))
    assert not is_hungry(make_state())


def test_age_label():
    state = make_state(make_kappa(Stage.BOY, age_days=365 + 65))
    assert age_label(state, T) == "1y 2m"
    assert age_label(make_state(make_kappa(Stage.CHILD)), T + days(29)) == "0y 0m"
    assert age_label(make_state(), T) == NO_VALUE


def test_labels():
    assert stage_label(Stage.ADULT) == "Adult"
    assert stage_label(None) == NO_VALUE
    text = describe_candidate(CatchCandidate(stage=Stage.BOY, age_years=1))
    assert text == "You caught a boy kappa! Age: 1 / Lifespan: 3 years"
    assert "an adult kappa" in describe_candidate(CatchCandidate(stage=Stage.ADULT, age_years=2))
