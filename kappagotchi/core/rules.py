# kappagotchi/core/rules.py
"""
Rule table: every tunable constant the engine reads.

The table is built once at start-up (defaults.toml merged with the user's
config) and is frozen for the rest of the run. Durations are stored in the
units designers think in (hours, days) and exposed in seconds through
properties.
"""
from __future__ import annotations
import logging
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from kappagotchi.core.calendar import days, hours
from kappagotchi.core.exceptions import ConfigValidationError
from kappagotchi.data.state_types import ColorName, FoodKind, NonNegativeInt, PositiveInt

_LOG = logging.getLogger("kappagotchi.core.rules")


class _Section(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class FishingRules(_Section):
    boy_rate: float = Field(default=0.5, ge=0.0, le=1.0)
    roll_resolution: PositiveInt = 1000

    @property
    def boy_threshold(self) -> int:
        """Draws of ``next_int(roll_resolution)`` below this catch a boy."""
        return round(self.boy_rate * self.roll_resolution)


class WaterRules(_Section):
    free_per_day: NonNegativeInt = 10


class LifeRules(_Section):
    lifespan_days: PositiveInt = 365 * 3
    caught_boy_age_days: NonNegativeInt = 365
    caught_adult_age_days: NonNegativeInt = 365 * 2
    child_to_boy_days: PositiveInt = 30
    boy_to_adult_age_days: PositiveInt = 365 * 2

    @model_validator(mode="after")
    def check_ordering(self) -> LifeRules:
        if not self.child_to_boy_days <= self.boy_to_adult_age_days <= self.lifespan_days:
            raise ValueError("life stages must satisfy child_to_boy <= boy_to_adult <= lifespan")
        return self


class DeathRules(_Section):
    no_water_to_guttari_hours: float = Field(default=24.0, gt=0)
    guttari_to_death_hours: float = Field(default=6.0, gt=0)
    child_no_water_death_hours: float = Field(default=24.0, gt=0)
    fever_deadline_hours: float = Field(default=10.0, gt=0)

    @property
    def no_water_to_guttari(self) -> float:
        return hours(self.no_water_to_guttari_hours)

    @property
    def guttari_to_death(self) -> float:
        return hours(self.guttari_to_death_hours)

    @property
    def child_no_water_death(self) -> float:
        return hours(self.child_no_water_death_hours)

    @property
    def fever_deadline(self) -> float:
        return hours(self.fever_deadline_hours)


class FeverRules(_Section):
    lottery_denominator: PositiveInt = 30


class FoodRules(_Section):
    login_bonus_cucumbers: NonNegativeInt = 3
    feed_threshold: float = Field(default=70.0, ge=0.0, le=100.0)
    satiety_full: float = Field(default=100.0, gt=0.0, le=100.0)
    satiety_decay_hours: float = Field(default=6.0, gt=0)
    hungry_red_threshold: float = Field(default=20.0, ge=0.0, le=100.0)

    @property
    def satiety_decay_per_second(self) -> float:
        return self.satiety_full / hours(self.satiety_decay_hours)


class UiRules(_Section):
    danger_threshold_pct: int = Field(default=20, ge=0, le=100)
    dying_water_pct: int = Field(default=10, ge=0, le=100)


class ShopRules(_Section):
    item_price_coins: NonNegativeInt = 300
    color_bonus_on_buy: NonNegativeInt = 3
    item_colors: Dict[FoodKind, ColorName] = Field(default_factory=lambda: {
        FoodKind.PREMIUM_CUCUMBER: ColorName.GREEN,
        FoodKind.MEAT: ColorName.RED,
        FoodKind.KOI: ColorName.BLUE,
        FoodKind.TAKUAN: ColorName.YELLOW,
    })

    def color_for(self, kind: FoodKind) -> Optional[ColorName]:
        """Color credited for buying ``kind``; None when the shop does not sell it."""
        return self.item_colors.get(FoodKind(kind))


class CoinRules(_Section):
    ad_reward: NonNegativeInt = 100


class RuleTable(_Section):
    tz_offset_minutes: int = Field(default=540, ge=-14 * 60, le=14 * 60)
    fishing: FishingRules = Field(default_factory=FishingRules)
    water: WaterRules = Field(default_factory=WaterRules)
    life: LifeRules = Field(default_factory=LifeRules)
    death: DeathRules = Field(default_factory=DeathRules)
    fever: FeverRules = Field(default_factory=FeverRules)
    food: FoodRules = Field(default_factory=FoodRules)
    ui: UiRules = Field(default_factory=UiRules)
    shop: ShopRules = Field(default_factory=ShopRules)
    coins: CoinRules = Field(default_factory=CoinRules)

    @property
    def caught_boy_age(self) -> float:
        return days(self.life.caught_boy_age_days)

    @property
    def caught_adult_age(self) -> float:
        return days(self.life.caught_adult_age_days)

    @classmethod
    def from_config(cls, config: Optional[Mapping[str, Any]]) -> RuleTable:
        """Build from a loaded config dict (its ``[rules]`` table)."""
        section = dict((config or {}).get("rules", {}) or {})
        try:
            table = cls.model_validate(section)
        except ValidationError as e:
            _LOG.error("Rule table validation failed: %s", e)
            raise ConfigValidationError(str(e)) from e
        _LOG.debug("Rule table loaded (tz_offset=%d min)", table.tz_offset_minutes)
        return table


DEFAULT_RULES = RuleTable()
