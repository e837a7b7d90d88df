# kappagotchi/ui/voice/voice.py
"""
Voice: one line of text per engine event.

Lines are run through gettext so a locale directory next to this file can
translate them; without one the English text is used as-is.
"""

from __future__ import annotations
import gettext
import logging
import os
from typing import Dict, Iterable, List, Optional

from kappagotchi.data.state_types import CoreError, CoreEvent, DeathReason, EventType

_LOG = logging.getLogger("kappagotchi.ui.voice")


class Voice:
    """Message generator for engine events."""

    EVENT_LINES: Dict[EventType, str] = {
        EventType.SE_KAPPA_CRY: "Kyuu!",
        EventType.WATER_APPLIED: "You poured water over the kappa's dish.",
        EventType.FEED_APPLIED: "The kappa ate happily. Food gauge {satiety:.0f}%.",
        EventType.FEVER_STARTED: "The kappa has a fever! Give it water soon.",
        EventType.GUTTARI_STARTED: "The kappa has gone limp. It needs water right now!",
        EventType.MOLTED: "The kappa molted and grew into an adult.",
        EventType.EGG_LAID: "An egg was left behind.",
        EventType.HATCHED: "The egg hatched! A new child kappa is here.",
        EventType.DIED: "The kappa has died. ({reason})",
        EventType.DAILY_RESET: "A new day has begun.",
        EventType.LOGIN_BONUS_CUCUMBER: "Login bonus: {amount} cucumbers.",
    }

    DEATH_REASONS: Dict[str, str] = {
        DeathReason.LIFESPAN.value: "it lived out its years",
        DeathReason.CHILD_NO_WATER.value: "a child went a whole day without water",
        DeathReason.CHILD_FEVER.value: "its fever went untreated",
        DeathReason.BOYADULT_NO_WATER.value: "it dried out",
    }

    def __init__(self, lang: str = "en"):
        try:
            localedir = os.path.join(os.path.abspath(os.path.dirname(__file__)), "locale")
            translation = gettext.translation("voice", localedir=localedir, languages=[lang], fallback=True)
            self._ = translation.gettext
        except OSError:
            self._ = lambda s: s

    def custom(self, s: str) -> str:
        return self._(s)

    def default(self) -> str:
        return self._("...")

    def get_event_line(self, event: CoreEvent) -> str:
        template = self.EVENT_LINES.get(event.type)
        if template is None:
            return self.default()
        reason = self.DEATH_REASONS.get(event.reason or "", event.reason or "unknown")
        try:
            return self._(template).format(
                satiety=event.satiety or 0.0,
                amount=event.amount or 0,
                reason=self._(reason),
            )
        except (KeyError, ValueError) as e:
            _LOG.debug("Could not format %s line: %s", event.type.value, e)
            return self._(template)

    def get_event_lines(self, events: Iterable[CoreEvent]) -> List[str]:
        return [self.get_event_line(e) for e in events]

    def get_error_line(self, error: Optional[CoreError]) -> Optional[str]:
        if error is None:
            return None
        return self._(error.message)
