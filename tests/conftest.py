import pytest

from kappagotchi.core.calendar import day_start_instant, days, to_game_day
from kappagotchi.core.rng import SequenceRandomSource
from kappagotchi.core.rules import DEFAULT_RULES
from kappagotchi.data.state_types import (
    CoreState, Fever, Health, Kappa, Player, RaisingMode, Stage, pose_for,
)

OFFSET = DEFAULT_RULES.tz_offset_minutes
DAY = "2025-06-01"
# Noon JST on DAY
T = day_start_instant(DAY, 12, 0, OFFSET)


def make_kappa(stage=Stage.BOY, now=T, age_days=None, **overrides):
    """A healthy, freshly watered and fed kappa of the given stage."""
    if age_days is None:
        age_days = {Stage.CHILD: 0, Stage.BOY: 365, Stage.ADULT: 730}[stage]
    fields = dict(
        stage=stage,
        health=Health.NORMAL,
        pose=pose_for(stage),
        born_at=now - days(age_days),
        last_water_at=now,
        satiety=100.0,
        satiety_updated_at=now,
        last_feed_at=now,
        fever=Fever(fever_checked_date=to_game_day(now, OFFSET)),
    )
    fields.update(overrides)
    return Kappa(**fields)


def make_state(kappa=None, now=T, **player_fields):
    """A state whose daily reset and login bonus already ran on ``now``'s day."""
    today = to_game_day(now, OFFSET)
    player_fields.setdefault("last_daily_reset", today)
    player_fields.setdefault("last_login_bonus", today)
    player = Player(**player_fields)
    if kappa is None:
        return CoreState(player=player)
    return CoreState(player=player, mode=RaisingMode(kappa=kappa))


@pytest.fixture
def now():
    return T


@pytest.fixture
def rules():
    return DEFAULT_RULES


@pytest.fixture
def quiet_rng():
    """Never hits the fever lottery (draw 1 of 30) and always catches a boy (1 < 500)."""
    return SequenceRandomSource([1])


@pytest.fixture
def boy_state():
    return make_state(make_kappa(Stage.BOY))


@pytest.fixture
def child_state():
    return make_state(make_kappa(Stage.CHILD))
