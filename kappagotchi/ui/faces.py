# kappagotchi/ui/faces.py
from kappagotchi.data.state_types import DisplayState

# Room faces
NORMAL = "(・ω・)"
CHILD = "(。・ω・。)"
GUTTARI = "(´ー`;)"
DEAD = "(×_×)"
WILTING = "(;´Д`)"
HUNGRY = "(・﹏・)"

# Screens without a resident kappa
FISHING = "~~~~ o ~~~~"
CAUGHT = "(゜ω゜)!"

_FACE_MAP = {
    DisplayState.NORMAL: NORMAL,
    DisplayState.CHILD: CHILD,
    DisplayState.GUTTARI: GUTTARI,
    DisplayState.DEAD: DEAD,
}


def get_face(display_state, dying: bool = False, hungry: bool = False) -> str:
    """Face for a display state; a living kappa low on water or food looks it."""
    try:
        state = DisplayState(display_state)
    except ValueError:
        return NORMAL
    if state in (DisplayState.NORMAL, DisplayState.CHILD):
        if dying:
            return WILTING
        if hungry:
            return HUNGRY
    return _FACE_MAP[state]
