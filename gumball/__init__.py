# -*- test-case-name: gumball -*-
from ._core import Automaton, NoTransition
from ._state import (
    HAS_COIN,
    NO_COIN,
    SOLD_OUT,
    STATES,
    WINNER,
    Context,
    Gumball,
    GumballEvents,
    GumballState,
    stateNamed,
)
from ._machine import (
    GumballAPI,
    GumballMachine,
    RandomWinGuard,
    createMachine,
)

__all__ = [
    "Automaton",
    "NoTransition",
    "Context",
    "Gumball",
    "GumballEvents",
    "GumballState",
    "NO_COIN",
    "HAS_COIN",
    "SOLD_OUT",
    "WINNER",
    "STATES",
    "stateNamed",
    "GumballAPI",
    "GumballMachine",
    "RandomWinGuard",
    "createMachine",
]
