# -*- test-case-name: gumball._test.test_state -*-

"""
The states of a gumball machine.

Every state is a stateless singleton.  A state never keeps a reference to the
machine it belongs to; the machine passes itself in as the C{ctx} argument of
each event, and the state reads guards from it and asks it to change state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Protocol, TextIO

from ._core import Automaton, Guard, NoTransition
from ._runtimeproto import checkMembership

log = logging.getLogger(__name__)

EMPTY = "empty"
WINNER_GUARD = "winner"


@dataclass(frozen=True)
class Gumball:
    """
    One ball, as it comes out of the slot.
    """

    color: str

    def __str__(self) -> str:
        return self.color


class Context(Protocol):
    """
    What a state is allowed to do to the machine it is reacting for.
    """

    def changeState(self, newState: GumballState) -> None:
        "Exit the current state and enter C{newState}."

    def dispense(self) -> Optional[Gumball]:
        "Release one ball, or return None if there is none left."

    def addBalls(self, count: int) -> None:
        "Put C{count} more balls in the machine."

    def isEmpty(self) -> bool:
        "Are there no balls left?"

    def isWinner(self) -> bool:
        "Does this draw win an extra ball?"

    def getOutput(self) -> TextIO:
        "Where messages for the customer go."


class GumballEvents(Protocol):
    """
    The events a gumball machine reacts to.
    """

    def insertCoin(self, ctx: Context) -> None:
        "A coin was put in the slot."

    def ejectCoin(self, ctx: Context) -> None:
        "The customer asked for their coin back."

    def draw(self, ctx: Context) -> None:
        "The customer turned the crank."

    def refill(self, ctx: Context, count: int) -> None:
        "The operator put C{count} balls in the machine."


class GumballState(GumballEvents, Protocol):
    """
    A state of the machine: the events plus lifecycle hooks.
    """

    @property
    def name(self) -> str:
        "The state's name, e.g. C{SOLD_OUT}."

    def enter(self, ctx: Context) -> None:
        "The machine just switched to this state."

    def exit(self, ctx: Context) -> None:
        "The machine is about to leave this state."

    def reason(self) -> str:
        "Why events this state does not handle are refused."


def say(ctx: Context, message: str) -> None:
    print(message, file=ctx.getOutput())


@dataclass(frozen=True)
class _StateBase:
    """
    Default behavior shared by all states: every event is refused with this
    state's reason, and entering or leaving does nothing.
    """

    name: str
    _reason: str

    def __repr__(self) -> str:
        return self.name

    def reason(self) -> str:
        return self._reason

    def enter(self, ctx: Context) -> None:
        pass

    def exit(self, ctx: Context) -> None:
        pass

    def unsupported(self, ctx: Context, event: str) -> None:
        log.debug("%s refused in %s", event, self.name)
        say(ctx, self._reason)

    def insertCoin(self, ctx: Context) -> None:
        self.unsupported(ctx, "insertCoin")

    def ejectCoin(self, ctx: Context) -> None:
        self.unsupported(ctx, "ejectCoin")

    def draw(self, ctx: Context) -> None:
        self.unsupported(ctx, "draw")

    def refill(self, ctx: Context, count: int) -> None:
        self.unsupported(ctx, "refill")

    def _go(self, ctx: Context, event: str, guard: Guard = None) -> None:
        """
        Look up where C{event} leads under C{guard} and switch the machine
        there.
        """
        try:
            outState, _ = TABLE.outputForInput(self, event, guard)
        except NoTransition:
            self.unsupported(ctx, event)
            return
        ctx.changeState(outState)

    def _dispenseGuard(self, ctx: Context, gumball: Optional[Gumball]) -> Guard:
        if gumball is None:
            say(ctx, "No gumball dispensed")
        if ctx.isEmpty():
            return EMPTY
        return None


class _NoCoin(_StateBase):
    def insertCoin(self, ctx: Context) -> None:
        if ctx.isEmpty():
            self.unsupported(ctx, "insertCoin")
            return
        say(ctx, "You inserted a coin")
        self._go(ctx, "insertCoin")


class _HasCoin(_StateBase):
    def ejectCoin(self, ctx: Context) -> None:
        say(ctx, "Quarter returned")
        self._go(ctx, "ejectCoin")

    def draw(self, ctx: Context) -> None:
        gumball = ctx.dispense()
        if gumball is not None:
            say(ctx, f"A {gumball} gumball comes rolling out the slot")
        guard = self._dispenseGuard(ctx, gumball)
        if guard is None and ctx.isWinner():
            guard = WINNER_GUARD
        self._go(ctx, "draw", guard)


class _SoldOut(_StateBase):
    def refill(self, ctx: Context, count: int) -> None:
        ctx.addBalls(count)
        say(ctx, f"refilled with {count} balls")
        self._go(ctx, "refill")


class _Winner(_StateBase):
    def draw(self, ctx: Context) -> None:
        gumball = ctx.dispense()
        if gumball is not None:
            say(
                ctx,
                f"You're a winner! A {gumball} bonus gumball comes rolling out the slot",
            )
        self._go(ctx, "draw", self._dispenseGuard(ctx, gumball))


NO_COIN: GumballState = _NoCoin(
    "NO_COIN", "You must put in a coin before you can continue"
)
HAS_COIN: GumballState = _HasCoin("HAS_COIN", "You should draw to get your ball")
SOLD_OUT: GumballState = _SoldOut("SOLD_OUT", "Machine is empty, waiting for refill")
WINNER: GumballState = _Winner(
    "WINNER", "You should draw once more to get an extra ball"
)

STATES: Dict[str, GumballState] = {
    state.name: state for state in (NO_COIN, HAS_COIN, SOLD_OUT, WINNER)
}


def stateNamed(name: str) -> GumballState:
    """
    Look up one of the four states by name, e.g. C{"SOLD_OUT"}.
    """
    return STATES[name]


def _buildTable() -> Automaton[GumballState, str, str]:
    table: Automaton[GumballState, str, str] = Automaton(SOLD_OUT)

    def row(
        inState: GumballState,
        event: str,
        guard: Guard,
        outState: GumballState,
        *outputs: str,
    ) -> None:
        checkMembership(GumballEvents, event)
        table.addTransition(inState, event, guard, outState, outputs)

    row(NO_COIN, "insertCoin", None, HAS_COIN)
    row(HAS_COIN, "ejectCoin", None, NO_COIN)
    row(HAS_COIN, "draw", EMPTY, SOLD_OUT, "dispense")
    row(HAS_COIN, "draw", WINNER_GUARD, WINNER, "dispense")
    row(HAS_COIN, "draw", None, NO_COIN, "dispense")
    row(SOLD_OUT, "refill", None, NO_COIN, "addBalls")
    row(WINNER, "draw", EMPTY, SOLD_OUT, "dispense")
    row(WINNER, "draw", None, NO_COIN, "dispense")
    return table


TABLE = _buildTable()
