#!/usr/bin/env python3
"""
Parity Demo - DFA Engine

Classifies a number as even or odd with a small automaton, saves it
half-way, reloads it from the saved document and drives it to the end:

    [START] --> [CHECK] -+-if value is even--> [EVEN] -+--> [DONE]
                         |                             |
                         +-if value is odd---> [ODD] --+

Run: python examples/parity_demo.py 7

Logging level and format come from config/dfa.yaml when present.
"""

import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path

from dfa_engine import DFA, DFAState
from dfa_engine.config import ConfigLoader, set_engine_config
from dfa_engine.logging.config import configure_logging_from, get_logger

logger = get_logger("parity_demo")


@dataclass(eq=False)
class ParityState(DFAState):
    label: str = ""


class ParityClassifier(DFA):
    """Even/odd classifier automaton."""

    state_type = ParityState
    context_fields = ("value",)

    START, CHECK, EVEN, ODD, DONE = range(5)

    def __init__(self, value: int = 0):
        self.value = value
        self.verdict = None
        super().__init__()

    def define_states(self):
        self.add_state(self.START, ParityState(label="start", behavior=lambda: None))
        self.add_state(self.CHECK, ParityState(
            label="check",
            behavior=lambda: logger.info("checking", value=self.value),
        ))
        self.add_state(self.EVEN, ParityState(label="even", behavior=lambda: self._announce("EVEN")))
        self.add_state(self.ODD, ParityState(label="odd", behavior=lambda: self._announce("ODD")))
        self.add_state(self.DONE, ParityState(label="done", behavior=lambda: logger.info("done")))

    def define_transitions(self):
        self.add_transition(self.START, self.CHECK, lambda: True)
        self.add_transition(self.CHECK, self.EVEN, lambda: self.value % 2 == 0)
        self.add_transition(self.CHECK, self.ODD, lambda: self.value % 2 != 0)
        self.add_transition(self.EVEN, self.DONE, lambda: True)
        self.add_transition(self.ODD, self.DONE, lambda: True)

    def _announce(self, verdict: str) -> None:
        self.verdict = verdict
        print(f"The number {self.value} is {verdict}")


def read_number() -> int:
    """Take the number from argv, or prompt until a valid one is typed."""
    if len(sys.argv) > 1:
        return int(sys.argv[1])

    while True:
        text = input("Write a number and press <ENTER>: ")
        try:
            return int(text)
        except ValueError:
            continue


def main():
    set_engine_config(ConfigLoader.create().load())
    configure_logging_from()
    number = read_number()

    machine = ParityClassifier(number)
    machine.start_from(ParityClassifier.START)
    machine.step()

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "parity.yaml"
        machine.save(path)
        print(f"DFA saved to {path}")

        restored = ParityClassifier.load(path)
        print("DFA loaded")

    if not restored.run_until(ParityClassifier.DONE):
        print(f"Stopped in state {restored.current_id} before reaching DONE")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
