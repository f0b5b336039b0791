from __future__ import annotations

import os
import sys
import tempfile
from unittest import TestCase, skipIf
from unittest.mock import patch

try:
    import graphviz
except ImportError:
    graphviz = None

if graphviz is not None:
    from .._visualize import machineDigraph, makeDigraph, tool

from .._core import Automaton


@skipIf(not graphviz, "Graphviz is not installed.")
class MakeDigraphTests(TestCase):
    def test_gumballMachine(self) -> None:
        source = machineDigraph().source
        for name in ("NO_COIN", "HAS_COIN", "SOLD_OUT", "WINNER"):
            self.assertIn(name, source)
        self.assertIn("draw [winner] / dispense", source)
        self.assertIn("refill / addBalls", source)
        self.assertIn("insertCoin", source)
        self.assertIn("ejectCoin", source)

    def test_initialStateIsBold(self) -> None:
        automaton: Automaton[str, str, str] = Automaton("on")
        automaton.addTransition("on", "flip", None, "off", [])
        automaton.addTransition("off", "flip", None, "on", [])
        digraph = makeDigraph(automaton, str, str, str)
        [onLine] = [line for line in digraph.body if line.strip().startswith("on [")]
        self.assertIn("style=bold", onLine)
        [offLine] = [line for line in digraph.body if line.strip().startswith("off [")]
        self.assertNotIn("style=bold", offLine)


@skipIf(not graphviz, "Graphviz is not installed.")
class ToolTests(TestCase):
    def test_writesDotFile(self) -> None:
        printed = []
        with tempfile.TemporaryDirectory() as directory:
            tool(
                ["--output-directory", directory],
                _print=lambda *args: printed.append(args),
            )
            path = os.path.join(directory, "gumball.dot")
            self.assertTrue(os.path.exists(path))
            with open(path) as f:
                self.assertIn("HAS_COIN", f.read())
        self.assertEqual(printed, [(path, "...wrote dot")])

    def test_readsCommandLineWhenCalled(self) -> None:
        """
        With no arguments, the tool parses C{sys.argv} as it is at call time.
        """
        printed = []
        with tempfile.TemporaryDirectory() as directory:
            argv = ["gumball-visualize", "-o", directory]
            with patch.object(sys, "argv", argv):
                tool(_print=lambda *args: printed.append(args))
            path = os.path.join(directory, "gumball.dot")
            self.assertTrue(os.path.exists(path))
        self.assertEqual(printed, [(path, "...wrote dot")])
