from __future__ import annotations

from collections import deque
from typing import List

from fsmkit.table import dtable


def reachable(table: dtable, start: str, input: str = None) -> set:
    """
    Breadth-first search over the transition table from start.
    If input is given, only transitions labelled by input are followed.
    The result always contains start itself.
    """
    visited = {start}
    queue = deque([start])
    while queue:
        p = queue.popleft()
        for q in table.successors(p, input):
            if q not in visited:
                visited.add(q)
                queue.append(q)
    return visited


def closure(table: dtable, state: str, epsilon: str) -> frozenset:
    """
    Epsilon closure of state: states reachable through zero or more epsilon moves.
    """
    return frozenset(reachable(table, state, epsilon))


def unreachable(machine) -> List[str]:
    """
    States of the machine with no path from its initial state.
    The initial state itself is never listed.
    """
    if machine.initial is None:
        return list(machine.states)
    seen = reachable(machine.table, machine.initial)
    return [q for q in machine.states if q not in seen]
