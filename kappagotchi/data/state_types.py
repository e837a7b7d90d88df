#data/state_types.py
from __future__ import annotations
import logging
from enum import Enum
from typing import Annotated, Literal, Optional, Tuple, Union
from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

_LOG = logging.getLogger("kappagotchi.data.types")

# --- CUSTOM PYDANTIC TYPES ---
NonNegativeInt = Annotated[int, Field(ge=0)]
PositiveInt = Annotated[int, Field(ge=1)]
NonNegativeFloat = Annotated[float, Field(ge=0.0)]
Timestamp = float
Percentage = Annotated[float, Field(ge=0.0, le=100.0)]
DayId = Annotated[str, Field(pattern=r"^\d{4}-\d{2}-\d{2}$")]

SATIETY_MIN = 0.0
SATIETY_MAX = 100.0
# ------------------------------------------------------------------


# --- ENUM DEFINITIONS ---
class Stage(str, Enum):
    CHILD = "child"
    BOY = "boy"
    ADULT = "adult"

class Health(str, Enum):
    NORMAL = "normal"
    GUTTARI = "guttari"
    DEAD = "dead"

class Pose(str, Enum):
    SIT = "sit"
    STAND = "stand"
    LAY = "lay"
    BED_SIT = "bed_sit"

class DisplayState(str, Enum):
    NORMAL = "normal"
    CHILD = "child"
    GUTTARI = "guttari"
    DEAD = "dead"

class FoodKind(str, Enum):
    CUCUMBER = "cucumber"
    PREMIUM_CUCUMBER = "premium_cucumber"
    MEAT = "meat"
    KOI = "koi"
    TAKUAN = "takuan"

class ColorName(str, Enum):
    GREEN = "green"
    RED = "red"
    BLUE = "blue"
    YELLOW = "yellow"

class EventType(str, Enum):
    """Notifications consumed by the presentation layer (sound and visual cues)."""
    SE_KAPPA_CRY = "SE_KAPPA_CRY"
    WATER_APPLIED = "WATER_APPLIED"
    FEED_APPLIED = "FEED_APPLIED"
    FEVER_STARTED = "FEVER_STARTED"
    GUTTARI_STARTED = "GUTTARI_STARTED"
    MOLTED = "MOLTED"
    EGG_LAID = "EGG_LAID"
    HATCHED = "HATCHED"
    DIED = "DIED"
    DAILY_RESET = "DAILY_RESET"
    LOGIN_BONUS_CUCUMBER = "LOGIN_BONUS_CUCUMBER"

class DeathReason(str, Enum):
    LIFESPAN = "lifespan_3y"
    CHILD_NO_WATER = "child_no_water_24h"
    CHILD_FEVER = "child_fever_no_water_10h"
    BOYADULT_NO_WATER = "boyadult_no_water_dead"

class ErrorCode(str, Enum):
    NO_KAPPA = "NO_KAPPA"
    ALREADY_DEAD = "ALREADY_DEAD"
    NOT_ALLOWED = "NOT_ALLOWED"
    NOT_ENOUGH_COINS = "NOT_ENOUGH_COINS"


def pose_for(stage: Stage) -> Pose:
    """Cosmetic pose for a stage: adults stand, everyone else sits."""
    return Pose.STAND if stage == Stage.ADULT else Pose.SIT


# --- PLAYER MODELS ---
class ColorPoints(BaseModel):
    model_config = ConfigDict(frozen=True)
    green: NonNegativeInt = 0
    red: NonNegativeInt = 0
    blue: NonNegativeInt = 0
    yellow: NonNegativeInt = 0

    def add(self, color: ColorName, points: int) -> ColorPoints:
        if points < 0:
            raise ValueError("color points never decrease")
        key = ColorName(color).value
        return self.model_copy(update={key: getattr(self, key) + points})

class FoodStock(BaseModel):
    model_config = ConfigDict(frozen=True)
    cucumber: NonNegativeInt = 0
    premium_cucumber: NonNegativeInt = 0
    meat: NonNegativeInt = 0
    koi: NonNegativeInt = 0
    takuan: NonNegativeInt = 0

    def count(self, kind: FoodKind) -> int:
        return getattr(self, FoodKind(kind).value)

    def adjust(self, kind: FoodKind, delta: int) -> FoodStock:
        key = FoodKind(kind).value
        value = getattr(self, key) + delta
        if value < 0:
            raise ValueError(f"stock of {key} cannot go negative")
        return self.model_copy(update={key: value})

class Player(BaseModel):
    model_config = ConfigDict(frozen=True)
    coins: NonNegativeInt = 0
    water_count_today: NonNegativeInt = 0
    feed_count_today: NonNegativeInt = 0
    ad_reward_count_today: NonNegativeInt = 0
    last_daily_reset: Optional[DayId] = None
    last_login_bonus: Optional[DayId] = None
    stock: FoodStock = Field(default_factory=FoodStock)
    color: ColorPoints = Field(default_factory=ColorPoints)
    eggs_total: NonNegativeInt = 0


# --- KAPPA MODELS ---
class Fever(BaseModel):
    model_config = ConfigDict(frozen=True)
    is_fever: bool = False
    fever_started_at: Optional[Timestamp] = None
    fever_checked_date: Optional[DayId] = None

    @model_validator(mode="after")
    def check_started(self) -> Fever:
        if self.is_fever and self.fever_started_at is None:
            raise ValueError("a feverish kappa needs fever_started_at")
        return self

    def cleared(self) -> Fever:
        """Fever gone; the day's lottery stamp is kept."""
        return self.model_copy(update={"is_fever": False, "fever_started_at": None})

class Kappa(BaseModel):
    model_config = ConfigDict(frozen=True)
    stage: Stage
    health: Health = Health.NORMAL
    pose: Pose = Pose.SIT
    born_at: Timestamp
    last_water_at: Optional[Timestamp] = None
    guttari_started_at: Optional[Timestamp] = None
    satiety: float = SATIETY_MAX
    satiety_updated_at: Timestamp
    last_feed_at: Optional[Timestamp] = None
    fever: Fever = Field(default_factory=Fever)

    @field_validator("satiety", mode="before")
    @classmethod
    def clamp_satiety(cls, v):
        try:
            return max(SATIETY_MIN, min(SATIETY_MAX, float(v)))
        except (TypeError, ValueError):
            raise ValueError(f"satiety must be a number, got {v!r}")

    @model_validator(mode="after")
    def check_guttari(self) -> Kappa:
        if self.health == Health.GUTTARI and self.guttari_started_at is None:
            raise ValueError("a guttari kappa needs guttari_started_at")
        return self

    @computed_field
    @property
    def display_state(self) -> DisplayState:
        if self.health == Health.DEAD:
            return DisplayState.DEAD
        if self.health == Health.GUTTARI:
            return DisplayState.GUTTARI
        if self.stage == Stage.CHILD:
            return DisplayState.CHILD
        return DisplayState.NORMAL

    @property
    def is_alive(self) -> bool:
        return self.health != Health.DEAD

class CatchCandidate(BaseModel):
    model_config = ConfigDict(frozen=True)
    stage: Stage
    age_years: PositiveInt
    lifespan_years: PositiveInt = 3

    @field_validator("stage")
    @classmethod
    def no_children(cls, v):
        if v == Stage.CHILD:
            raise ValueError("children are never caught")
        return v


# --- MODES (fishing / catch review / room) ---
class IdleMode(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal["idle"] = "idle"

class ReviewingMode(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal["reviewing"] = "reviewing"
    candidate: CatchCandidate

class RaisingMode(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal["raising"] = "raising"
    kappa: Kappa

Mode = Annotated[Union[IdleMode, ReviewingMode, RaisingMode], Field(discriminator="kind")]


# --- CORE STATE ---
class CoreState(BaseModel):
    """Aggregate root. Every mutator returns a new instance."""
    model_config = ConfigDict(frozen=True)

    player: Player = Field(default_factory=Player)
    mode: Mode = Field(default_factory=IdleMode)

    @property
    def kappa(self) -> Optional[Kappa]:
        return self.mode.kappa if isinstance(self.mode, RaisingMode) else None

    @property
    def caught(self) -> Optional[CatchCandidate]:
        return self.mode.candidate if isinstance(self.mode, ReviewingMode) else None

    def with_player(self, **changes) -> CoreState:
        return self.model_copy(update={"player": self.player.model_copy(update=changes)})

    def with_kappa(self, kappa: Kappa) -> CoreState:
        return self.model_copy(update={"mode": RaisingMode(kappa=kappa)})

    def with_candidate(self, candidate: Optional[CatchCandidate]) -> CoreState:
        mode = ReviewingMode(candidate=candidate) if candidate is not None else IdleMode()
        return self.model_copy(update={"mode": mode})

    def safe_dump(self) -> dict:
        """JSON-ready dict; an empty dict if serialization fails."""
        try:
            return self.model_dump(mode="json")
        except Exception as e:
            _LOG.error(f"Safe dump failed: {e}")
            return {}


# --- EVENT / RESULT MODELS ---
class CoreEvent(BaseModel):
    model_config = ConfigDict(frozen=True)
    type: EventType
    reason: Optional[str] = None
    amount: Optional[int] = None
    cucumbers_left: Optional[int] = None
    satiety: Optional[float] = None

class CoreError(BaseModel):
    model_config = ConfigDict(frozen=True)
    code: ErrorCode
    message: str

class Result(BaseModel):
    """Outcome of a tick or an action. Failures carry the unchanged state."""
    model_config = ConfigDict(frozen=True)
    state: CoreState
    events: Tuple[CoreEvent, ...] = ()
    error: Optional[CoreError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, state: CoreState, events=()) -> Result:
        return cls(state=state, events=tuple(events))

    @classmethod
    def failure(cls, state: CoreState, code: ErrorCode, message: str) -> Result:
        return cls(state=state, error=CoreError(code=code, message=message))
