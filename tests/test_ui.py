from rich.console import Console

from conftest import T, make_kappa, make_state
from kappagotchi.core.calendar import hours
from kappagotchi.data.state_types import (
    CatchCandidate, CoreError, CoreEvent, DisplayState, ErrorCode, EventType, FoodStock,
    Health, Stage,
)
from kappagotchi.ui import View, Voice, faces
from kappagotchi.ui.view import gauge_bar, render


def export(renderable):
    console = Console(record=True, width=80, color_system=None)
    console.print(renderable)
    return console.export_text()


def test_faces_follow_display_state():
    assert faces.get_face(DisplayState.DEAD) == faces.DEAD
    assert faces.get_face("guttari") == faces.GUTTARI
    assert faces.get_face(DisplayState.CHILD) == faces.CHILD
    assert faces.get_face(DisplayState.NORMAL, dying=True) == faces.WILTING
    assert faces.get_face(DisplayState.NORMAL, hungry=True) == faces.HUNGRY
    assert faces.get_face(DisplayState.GUTTARI, dying=True) == faces.GUTTARI
    assert faces.get_face("unknown") == faces.NORMAL


def test_voice_event_lines():
    voice = Voice()
    assert voice.get_event_line(CoreEvent(type=EventType.LOGIN_BONUS_CUCUMBER, amount=3)) == (
        "Login bonus: 3 cucumbers."
    )
    fed = voice.get_event_line(CoreEvent(type=EventType.FEED_APPLIED, cucumbers_left=2, satiety=100.0))
    assert "100%" in fed
    died = voice.get_event_line(CoreEvent(type=EventType.DIED, reason="lifespan_3y"))
    assert "lived out its years" in died
    lines = voice.get_event_lines([CoreEvent(type=EventType.EGG_LAID), CoreEvent(type=EventType.HATCHED)])
    assert len(lines) == 2


def test_voice_error_line():
    voice = Voice()
    assert voice.get_error_line(None) is None
    error = CoreError(code=ErrorCode.NOT_ENOUGH_COINS, message="Not enough coins.")
    assert voice.get_error_line(error) == "Not enough coins."


def test_gauge_bar_text():
    assert gauge_bar(50, danger=False, width=10).plain == "[#####.....]  50%"
    assert gauge_bar(0, danger=True, width=4).plain == "[....]   0%"


def test_room_screen():
    state = make_state(make_kappa(Stage.BOY), coins=120, stock=FoodStock(meat=2))
    text = export(render(state, T + hours(12)))
    assert "Room" in text
    assert faces.NORMAL in text
    assert " 50%" in text
    assert "Coins" in text and "120" in text
    assert "Boy" in text


def test_room_screen_guttari_face():
    kappa = make_kappa(Stage.ADULT, health=Health.GUTTARI, guttari_started_at=T)
    assert faces.GUTTARI in export(render(make_state(kappa), T))


def test_fishing_and_catch_screens():
    assert "Fishing" in export(render(make_state(), T))
    state = make_state().with_candidate(CatchCandidate(stage=Stage.BOY, age_years=1))
    assert "You caught a boy kappa!" in export(render(state, T))


def test_view_collects_messages():
    console = Console(record=True, width=80, color_system=None)
    view = View(console=console)
    view.say("Kyuu!")
    view.show(make_state(), T)
    assert "Kyuu!" in console.export_text()
    view.show(make_state(), T)
    assert "Kyuu!" not in console.export_text()
