# -*- test-case-name: gumball._test.test_core -*-

"""
A declarative table of guarded state transitions.

The table does not run anything; states consult it to learn where an event
takes them once they have evaluated their guards.
"""
from __future__ import annotations

from itertools import chain
from typing import Generic, Optional, Sequence, TypeVar

_NO_STATE = "<no state>"

Guard = Optional[str]


class NoTransition(Exception):
    """
    A finite state machine in C{state} has no transition for C{symbol}.

    @param state: the finite state machine's state at the time of the
        illegal transition.

    @param symbol: the input symbol for which no transition exists.

    @param guard: the guard label that was evaluated, if any.
    """

    def __init__(self, state, symbol, guard=None):
        self.state = state
        self.symbol = symbol
        self.guard = guard
        if guard is None:
            message = "no transition for {} in {}".format(symbol, state)
        else:
            message = "no transition for {} [{}] in {}".format(symbol, guard, state)
        super(Exception, self).__init__(message)


State = TypeVar("State")
Input = TypeVar("Input")
Output = TypeVar("Output")


class Automaton(Generic[State, Input, Output]):
    """
    A declaration of a finite state machine whose transitions may be split
    into several guarded branches.

    Note that this is not the machine itself; it holds no current state.
    """

    def __init__(self, initial: State | None = None) -> None:
        """
        Initialize the set of transitions and the initial state.
        """
        if initial is None:
            initial = _NO_STATE  # type:ignore[assignment]
        assert initial is not None
        self._initialState: State = initial
        self._transitions: set[
            tuple[State, Input, Guard, State, Sequence[Output]]
        ] = set()

    @property
    def initialState(self):
        """
        Return this automaton's initial state.
        """
        return self._initialState

    @initialState.setter
    def initialState(self, state):
        """
        Set this automaton's initial state.  Raises a ValueError if
        this automaton already has an initial state.
        """

        if self._initialState is not _NO_STATE:
            raise ValueError(
                "initial state already set to {}".format(self._initialState)
            )

        self._initialState = state

    def addTransition(
        self,
        inState: State,
        inputSymbol: Input,
        guard: Guard,
        outState: State,
        outputSymbols: Sequence[Output] = (),
    ) -> None:
        """
        Add a transition taken from C{inState} upon C{inputSymbol} when the
        guard labelled C{guard} holds.  Raise ValueError if there is already a
        transition with the same inState, inputSymbol and guard.
        """
        for anInState, anInputSymbol, aGuard, _, _ in self._transitions:
            if (anInState, anInputSymbol, aGuard) == (inState, inputSymbol, guard):
                raise ValueError(
                    "already have transition from {} via {} [{}]".format(
                        inState, inputSymbol, guard
                    )
                )
        self._transitions.add(
            (inState, inputSymbol, guard, outState, tuple(outputSymbols))
        )

    def allTransitions(self):
        """
        All transitions.
        """
        return frozenset(self._transitions)

    def inputAlphabet(self):
        """
        The full set of symbols acceptable to this automaton.
        """
        return {inputSymbol for (_, inputSymbol, _, _, _) in self._transitions}

    def outputAlphabet(self):
        """
        The full set of symbols which can be produced by this automaton.
        """
        return set(
            chain.from_iterable(
                outputSymbols for (_, _, _, _, outputSymbols) in self._transitions
            )
        )

    def states(self) -> frozenset[State]:
        """
        All valid states; "Q" in the mathematical description of a state
        machine.
        """
        return frozenset(
            chain.from_iterable(
                (inState, outState)
                for (inState, _, _, outState, _) in self._transitions
            )
        )

    def transitionsFrom(
        self, inState: State, inputSymbol: Input
    ) -> dict[Guard, State]:
        """
        Every guarded branch leaving C{inState} upon C{inputSymbol}, keyed by
        guard label.
        """
        return {
            guard: outState
            for (anInState, anInputSymbol, guard, outState, _) in self._transitions
            if (anInState, anInputSymbol) == (inState, inputSymbol)
        }

    def outputForInput(
        self, inState: State, inputSymbol: Input, guard: Guard = None
    ) -> tuple[State, list[Output]]:
        """
        A 2-tuple of (outState, outputSymbols) for inputSymbol under guard.
        """
        for anInState, anInputSymbol, aGuard, outState, outputSymbols in (
            self._transitions
        ):
            if (inState, inputSymbol, guard) == (anInState, anInputSymbol, aGuard):
                return (outState, list(outputSymbols))
        raise NoTransition(state=inState, symbol=inputSymbol, guard=guard)
