from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from ExactMS.states.state_type import StateType

if TYPE_CHECKING:
    from ExactMS.states.context import Context


class State(ABC):
    """
    One step of an ExactMS run (mass detection, export).

    A state does its work in run() and then moves the Context forward itself,
    either by replacing itself with the next state or by popping itself off
    the stack.
    """

    STATE_TYPE: StateType

    def __init__(self, context: "Context") -> None:
        self._context = context

    @property
    def context(self) -> "Context":
        return self._context

    @abstractmethod
    def run(self) -> None:
        pass
