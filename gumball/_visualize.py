# -*- test-case-name: gumball._test.test_visualize -*-
from __future__ import annotations

import argparse
import os
from typing import Any, Callable, Sequence

import graphviz

from ._core import Automaton
from ._state import TABLE


def _edgeLabel(
    inputLabel: str, guard: str | None, outputLabels: Sequence[str]
) -> str:
    label = inputLabel
    if guard is not None:
        label += " [{}]".format(guard)
    if outputLabels:
        label += " / " + ", ".join(outputLabels)
    return label


def makeDigraph(
    automaton: Automaton[Any, Any, Any],
    stateAsString: Callable[[Any], str] = repr,
    inputAsString: Callable[[Any], str] = repr,
    outputAsString: Callable[[Any], str] = repr,
) -> graphviz.Digraph:
    """
    Produce a L{graphviz.Digraph} object from an automaton.
    """
    digraph = graphviz.Digraph(
        graph_attr={"pack": "true", "dpi": "100"},
        node_attr={"fontname": "Menlo"},
        edge_attr={"fontname": "Menlo"},
    )

    for state in sorted(automaton.states(), key=stateAsString):
        if state == automaton.initialState:
            stateShape = "bold"
            fontName = "Menlo-Bold"
        else:
            stateShape = ""
            fontName = "Menlo"
        digraph.node(
            stateAsString(state),
            fontname=fontName,
            shape="ellipse",
            style=stateShape,
            color="blue",
        )

    for inState, inputSymbol, guard, outState, outputSymbols in sorted(
        automaton.allTransitions(),
        key=lambda t: (stateAsString(t[0]), inputAsString(t[1]), t[2] or ""),
    ):
        digraph.edge(
            stateAsString(inState),
            stateAsString(outState),
            label=_edgeLabel(
                inputAsString(inputSymbol),
                guard,
                [outputAsString(output) for output in outputSymbols],
            ),
            color="red",
        )

    return digraph


def machineDigraph() -> graphviz.Digraph:
    """
    The transition diagram of the gumball machine.
    """
    return makeDigraph(
        TABLE,
        stateAsString=lambda state: state.name,
        inputAsString=str,
        outputAsString=str,
    )


def tool(
    argv: Sequence[str] | None = None,
    _digraph: Callable[[], graphviz.Digraph] = machineDigraph,
    _print: Callable[..., None] = print,
) -> None:
    """
    Entry point for command line utility.
    """

    _DESCRIPTION = """
    Visualize the transition table of the gumball machine with graphviz.
    Writes gumball.dot (and optionally an image) into the output directory.
    """

    parser = argparse.ArgumentParser(
        prog="gumball-visualize", description=_DESCRIPTION
    )
    parser.add_argument(
        "--output-directory",
        "-o",
        metavar="directory",
        help="Where to write the files",
        default=".gumball_visualize",
    )
    parser.add_argument(
        "--image-type",
        "-i",
        help="The image format.",
        choices=graphviz.FORMATS,
        default=None,
    )
    parser.add_argument(
        "--view",
        "-v",
        help="View rendered graphs with default image viewer",
        default=False,
        action="store_true",
    )
    args = parser.parse_args(argv)

    os.makedirs(args.output_directory, exist_ok=True)
    digraph = _digraph()
    fileName = os.path.join(args.output_directory, "gumball.dot")
    digraph.save(filename=fileName)
    _print(fileName, "...wrote dot")
    if args.image_type:
        digraph.format = args.image_type
        imagePath = digraph.render(filename=fileName, view=args.view)
        _print(imagePath, "...wrote image")
