# -*- test-case-name: gumball._test.test_machine -*-

"""
The gumball machine itself: the context that owns the ball count, the
current state and the output, and forwards every event to the current state.
"""

from __future__ import annotations

import logging
import random as _random
import sys
from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol, Sequence, TextIO

if sys.version_info >= (3, 10):
    from typing import TypeAlias
else:
    from typing_extensions import TypeAlias

from ._state import SOLD_OUT, Gumball, GumballState

log = logging.getLogger(__name__)

WIN_CHANCE = 0.1
DEFAULT_COLORS = ("red", "green", "blue", "yellow", "orange", "purple")

WinGuard: TypeAlias = "Callable[[], bool]"
Tracer: TypeAlias = "Callable[[GumballState, Optional[str], GumballState], None]"


@dataclass
class RandomWinGuard:
    """
    Decide, each time it is called, whether a draw wins an extra ball.

    @ivar random: the source of randomness.
    @ivar chance: probability of winning, between 0 and 1.
    """

    random: _random.Random = field(default_factory=_random.Random)
    chance: float = WIN_CHANCE

    def __post_init__(self) -> None:
        if not 0 <= self.chance <= 1:
            raise ValueError(f"win chance must be between 0 and 1, not {self.chance}")

    def __call__(self) -> bool:
        return self.random.random() < self.chance


class GumballAPI(Protocol):
    """
    What a customer or operator of a gumball machine gets to see.
    """

    def insertCoin(self) -> None:
        "Put a coin in the slot."

    def ejectCoin(self) -> None:
        "Ask for the coin back."

    def draw(self) -> None:
        "Turn the crank."

    def refill(self, count: int) -> None:
        "Put C{count} balls in the machine."

    def getBallCount(self) -> int:
        "How many balls are left."

    def isEmpty(self) -> bool:
        "Are there no balls left?"

    def getState(self) -> GumballState:
        "The state the machine is in."

    def setOutput(self, output: TextIO) -> None:
        "Send messages to C{output} from now on."

    def getOutput(self) -> TextIO:
        "Where messages currently go."

    def setTrace(self, tracer: Tracer | None) -> None:
        "Report every state change to C{tracer}, or stop when it is None."


class GumballMachine:
    """
    The context of the gumball state machine.

    Construct it with L{GumballMachine.init}, which also enters the initial
    state.
    """

    def __init__(
        self,
        initialState: GumballState,
        output: TextIO | None = None,
        winGuard: WinGuard | None = None,
        random: _random.Random | None = None,
        colors: Sequence[str] = DEFAULT_COLORS,
    ) -> None:
        if random is None:
            random = _random.Random()
        if winGuard is None:
            winGuard = RandomWinGuard(random)
        if output is None:
            output = sys.stdout
        self._state: GumballState = initialState
        self._output: TextIO = output
        self._winGuard: WinGuard = winGuard
        self._random = random
        self._colors = tuple(colors)
        self._count = 0
        self._event: str | None = None
        self._tracer: Tracer | None = None

    @classmethod
    def init(
        cls,
        initialState: GumballState,
        output: TextIO | None = None,
        winGuard: WinGuard | None = None,
        random: _random.Random | None = None,
    ) -> GumballMachine:
        """
        Create a machine in C{initialState} and enter that state.  There is
        no matching exit.
        """
        machine = cls(initialState, output, winGuard, random)
        initialState.enter(machine)
        return machine

    def __repr__(self) -> str:
        return f"<GumballMachine state={self._state!r} balls={self._count}>"

    def setTrace(self, tracer: Tracer | None) -> None:
        """
        Call C{tracer(oldState, event, newState)} on every state change, or
        stop tracing when C{tracer} is None.
        """
        self._tracer = tracer

    # events

    def _forward(self, event: str, *args: int) -> None:
        """
        Hand C{event} to the current state.  The event name is only known to
        state changes made while the state handles it.
        """
        self._event = event
        try:
            getattr(self._state, event)(self, *args)
        finally:
            self._event = None

    def insertCoin(self) -> None:
        self._forward("insertCoin")

    def ejectCoin(self) -> None:
        self._forward("ejectCoin")

    def draw(self) -> None:
        self._forward("draw")

    def refill(self, count: int) -> None:
        self._forward("refill", count)

    # called by the states

    def changeState(self, newState: GumballState) -> None:
        """
        Leave the current state and enter C{newState}.  Both hooks run even
        when C{newState} is the current state.
        """
        oldState = self._state
        oldState.exit(self)
        self._state = newState
        newState.enter(self)
        log.debug("%r -(%s)-> %r", oldState, self._event, newState)
        if self._tracer is not None:
            self._tracer(oldState, self._event, newState)

    def dispense(self) -> Optional[Gumball]:
        """
        Let one ball roll out of the slot.

        @return: the ball, or None if the machine is empty.
        """
        if self._count <= 0:
            return None
        self._count -= 1
        return Gumball(self._random.choice(self._colors))

    def addBalls(self, count: int) -> None:
        if count < 0:
            raise ValueError(f"cannot add a negative number of balls: {count}")
        self._count += count

    def isEmpty(self) -> bool:
        return self._count == 0

    def isWinner(self) -> bool:
        """
        Ask the win guard.  The answer may differ on every call.
        """
        return self._winGuard()

    def getState(self) -> GumballState:
        return self._state

    def getBallCount(self) -> int:
        return self._count

    def setOutput(self, output: TextIO) -> None:
        self._output = output

    def getOutput(self) -> TextIO:
        return self._output


def createMachine(
    output: TextIO | None = None,
    winGuard: WinGuard | None = None,
    random: _random.Random | None = None,
) -> GumballAPI:
    """
    Create a sold-out machine without any balls.
    """
    return GumballMachine.init(SOLD_OUT, output, winGuard, random)
