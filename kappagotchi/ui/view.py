# kappagotchi/ui/view.py
"""
Rich rendering of the game screens.

The room screen shows the kappa's face, its water and food bars, age, stage,
the food stock and coins. The fishing and catch screens are one-liners.
"""

from __future__ import annotations
import logging
from typing import Iterable, List, Optional

from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from kappagotchi.core import gauges
from kappagotchi.core.rules import DEFAULT_RULES, RuleTable
from kappagotchi.data.state_types import CoreState, FoodKind
from kappagotchi.ui import faces

_LOG = logging.getLogger("kappagotchi.ui.view")

BAR_WIDTH = 20

FOOD_LABELS = {
    FoodKind.CUCUMBER: "Cucumber",
    FoodKind.PREMIUM_CUCUMBER: "Premium cucumber",
    FoodKind.MEAT: "Meat",
    FoodKind.KOI: "Koi",
    FoodKind.TAKUAN: "Takuan",
}


def gauge_bar(pct: int, danger: bool, width: int = BAR_WIDTH) -> Text:
    """``[#####.....]  50%`` in green, or red when in danger."""
    filled = round(width * max(0, min(100, pct)) / 100)
    style = "bold red" if danger else "green"
    bar = Text("[")
    bar.append("#" * filled, style=style)
    bar.append("." * (width - filled), style="dim")
    bar.append(f"] {pct:3d}%")
    return bar


def _stock_table(state: CoreState) -> Table:
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("item")
    table.add_column("count", justify="right")
    for kind in FoodKind:
        table.add_row(FOOD_LABELS[kind], str(state.player.stock.count(kind)))
    table.add_row(Text("Coins", style="bold yellow"), str(state.player.coins))
    return table


def render_room(state: CoreState, now: float, rules: RuleTable = DEFAULT_RULES) -> Panel:
    kappa = state.kappa
    water = gauges.water_percent(state, now, rules)
    food = gauges.satiety_percent(state)
    face = faces.get_face(
        kappa.display_state,
        dying=gauges.is_dying(water, rules),
        hungry=gauges.is_hungry(state, rules),
    )

    stats = Table(show_header=False, box=None, pad_edge=False)
    stats.add_column("label", style="bold")
    stats.add_column("value")
    stats.add_row("Stage", gauges.stage_label(kappa.stage))
    stats.add_row("Age", gauges.age_label(state, now))
    stats.add_row("Water", gauge_bar(water, gauges.is_danger(water, rules)))
    stats.add_row("Food", gauge_bar(food, gauges.is_danger(food, rules)))
    if kappa.fever.is_fever:
        stats.add_row("Fever", Text("yes", style="bold red"))
    stats.add_row("Waterings", f"{state.player.water_count_today} today ({rules.water.free_per_day} free)")

    body = Group(Align.center(Text(face, style="bold cyan")), stats, Text(""), _stock_table(state))
    return Panel(body, title="Room", subtitle=f"eggs laid: {state.player.eggs_total}", border_style="cyan")


def render_fishing(state: CoreState) -> Panel:
    body = Group(Align.center(Text(faces.FISHING, style="blue")),
                 Text("The pond is quiet. Cast your line to catch a kappa.", justify="center"))
    return Panel(body, title="Fishing", border_style="blue")


def render_catch(state: CoreState) -> Panel:
    candidate = state.caught
    body = Group(Align.center(Text(faces.CAUGHT, style="bold yellow")),
                 Text(gauges.describe_candidate(candidate), justify="center"),
                 Text("adopt to take it home, release to let it go", style="dim", justify="center"))
    return Panel(body, title="Catch", border_style="yellow")


def render(state: CoreState, now: float, rules: RuleTable = DEFAULT_RULES,
           lines: Optional[Iterable[str]] = None) -> Panel:
    """Pick the screen for the current mode, with optional message lines below it."""
    if state.kappa is not None:
        panel = render_room(state, now, rules)
    elif state.caught is not None:
        panel = render_catch(state)
    else:
        panel = render_fishing(state)

    messages = [line for line in (lines or []) if line]
    if not messages:
        return panel
    return Panel(Group(panel, Text("\n".join(messages), style="italic")),
                 border_style="dim", padding=(0, 0))


class View:
    """Console wrapper used by the CLI."""

    def __init__(self, rules: RuleTable = DEFAULT_RULES, console: Optional[Console] = None):
        self.rules = rules
        self.console = console or Console()
        self._messages: List[str] = []

    def say(self, line: str) -> None:
        self._messages.append(line)

    def panel(self, state: CoreState, now: float, lines: Optional[Iterable[str]] = None) -> Panel:
        return render(state, now, self.rules, self._messages if lines is None else lines)

    def show(self, state: CoreState, now: float) -> None:
        self.console.print(self.panel(state, now))
        self._messages.clear()

    def print_line(self, line: str, style: Optional[str] = None) -> None:
        self.console.print(line, style=style)
