from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Strong references keep bound methods of systems nobody stores alive.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"              # payload: dt=float (seconds)
EVENT_DROP_TICK = "drop_tick"    # payload: None; one gravity step for the falling block


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_KEY_PRESS = "key_press"              # payload: symbol=int, modifiers=int
EVENT_MOUSE_PRESS = "mouse_press"          # payload: x, y, button


# ============================================================================
# RUN LIFECYCLE
# ============================================================================
EVENT_GAME_START_REQUEST = "game_start_request"    # payload: None
EVENT_GAME_STARTED = "game_started"                # payload: rows=int, cols=int
EVENT_GAME_OVER = "game_over"                      # payload: score=int, most_cleared=Symbol|None
EVENT_GAME_MODE_CHANGED = "game_mode_changed"      # payload: previous_mode=GameMode|None, new_mode=GameMode
EVENT_RUN_STATE_CHANGED = "run_state_changed"      # payload: state=RunState


# ============================================================================
# FALLING BLOCK
# ============================================================================
EVENT_BLOCK_MOVE_REQUEST = "block_move_request"    # payload: direction=int (-1|1)
EVENT_BLOCK_SPAWNED = "block_spawned"              # payload: symbol=Symbol, row=int, col=int
EVENT_BLOCK_MOVED = "block_moved"                  # payload: symbol, row, col, direction=int
EVENT_BLOCK_DESCENDED = "block_descended"          # payload: symbol, row, col
EVENT_BLOCK_LANDED = "block_landed"                # payload: symbol, row, col


# ============================================================================
# MATCH RESOLUTION
# ============================================================================
EVENT_MATCH_CLEARED = "match_cleared"              # payload: round=int, positions=[(r,c),...], counts=dict[Symbol,int], points=int, multiplier=int
EVENT_CASCADE_COMPLETE = "cascade_complete"        # payload: depth=int, points=int
