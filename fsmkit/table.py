from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Set


###################
### Transitions ###
###################


@dataclass(frozen=True)
class atransition:
    """
    Finite automaton transition (labelled by a symbol).
    """

    start: str
    input: str
    end: str

    def __str__(self):
        return f"({self.start}, {self.input}, {self.end})"


@dataclass(frozen=True)
class pdatransition:
    """
    Pushdown automaton transition. pop is the symbol required on top of
    the stack, push the symbol pushed after the move; None means no action.
    """

    start: str
    input: str
    end: str
    pop: Optional[str] = None
    push: Optional[str] = None

    def __str__(self):
        return f"({self.start}, {self.input}, {self.pop}, {self.push}, {self.end})"


##############
### Tables ###
##############


class dtable:
    """
    Deterministic transition table: (state, symbol) -> state.
    Redefining a (state, symbol) pair silently overwrites the old destination.
    """

    def __init__(self) -> None:
        self.delta: Dict[str, Dict[str, object]] = {}

    def __len__(self) -> int:
        return sum(1 for _ in self.transitions())

    def clear(self) -> None:
        self.delta = {}

    def add(self, start: str, input: str, end: str) -> None:
        self.delta.setdefault(start, {})[input] = end

    def lookup(self, start: str, input: str):
        """
        Returns the destination of (start, input), None if there is no such transition.
        """
        return self.delta.get(start, {}).get(input)

    def successors(self, start: str, input: str = None) -> Set[str]:
        """
        Destinations of the transitions leaving start, restricted to the
        symbol input when it is given.
        """
        row = self.delta.get(start, {})
        if input is not None:
            end = row.get(input)
            return set() if end is None else {end}
        return set(row.values())

    def remove(self, state: str) -> None:
        """
        Drops every transition leaving state.
        """
        self.delta.pop(state, None)

    def transitions(self) -> Iterator[atransition]:
        for start, row in self.delta.items():
            for input, end in row.items():
                yield atransition(start, input, end)


class ntable(dtable):
    """
    Nondeterministic transition table: (state, symbol) -> set of states.
    Redefining a (state, symbol) pair adds a destination.
    """

    def add(self, start: str, input: str, end: str) -> None:
        self.delta.setdefault(start, {}).setdefault(input, set()).add(end)

    def lookup(self, start: str, input: str) -> Optional[frozenset]:
        ends = self.delta.get(start, {}).get(input)
        return frozenset(ends) if ends else None

    def successors(self, start: str, input: str = None) -> Set[str]:
        row = self.delta.get(start, {})
        if input is not None:
            return set(row.get(input, ()))
        S = [ends for ends in row.values()]
        return set() if not S else set.union(*S)

    def transitions(self) -> Iterator[atransition]:
        for start, row in self.delta.items():
            for input, ends in row.items():
                for end in ends:
                    yield atransition(start, input, end)


class pdtable(dtable):
    """
    Pushdown transition table: (state, symbol) -> pdatransition.
    The destination and its stack action are overwritten together.
    """

    def add(self, start: str, input: str, end: str, pop: str = None, push: str = None) -> None:
        self.delta.setdefault(start, {})[input] = pdatransition(start, input, end, pop, push)

    def successors(self, start: str, input: str = None) -> Set[str]:
        row = self.delta.get(start, {})
        if input is not None:
            t = row.get(input)
            return set() if t is None else {t.end}
        return set(t.end for t in row.values())

    def transitions(self) -> Iterator[pdatransition]:
        for row in self.delta.values():
            yield from row.values()
