"""
Data models and type definitions for kappagotchi.
"""

from .state_types import (
    Stage, Health, Pose, DisplayState, FoodKind, ColorName,
    EventType, DeathReason, ErrorCode,
    ColorPoints, FoodStock, Player, Fever, Kappa, CatchCandidate,
    IdleMode, ReviewingMode, RaisingMode, CoreState,
    CoreEvent, CoreError, Result,
    NonNegativeInt, PositiveInt, NonNegativeFloat, Timestamp, Percentage, DayId,
    pose_for,
)

__all__ = [
    'Stage', 'Health', 'Pose', 'DisplayState', 'FoodKind', 'ColorName',
    'EventType', 'DeathReason', 'ErrorCode',
    'ColorPoints', 'FoodStock', 'Player', 'Fever', 'Kappa', 'CatchCandidate',
    'IdleMode', 'ReviewingMode', 'RaisingMode', 'CoreState',
    'CoreEvent', 'CoreError', 'Result',
    'NonNegativeInt', 'PositiveInt', 'NonNegativeFloat', 'Timestamp', 'Percentage', 'DayId',
    'pose_for',
]
