"""
DFA minimization: unreachable-state pruning followed by Moore's
partition refinement. Machines are rewritten in place.
"""

from __future__ import annotations

import logging
from typing import Dict, List

from fsmkit.reach import unreachable

logger = logging.getLogger(__name__)

NOTRANSITION = -1


def prune(A) -> List[str]:
    """
    Deletes the states of A that cannot be reached from its initial state,
    with their transitions and accepting membership.
    Returns the ids of the removed states.
    """
    if A.initial is None:
        return []

    dead = unreachable(A)
    if not dead:
        return dead

    gone = set(dead)
    for q in dead:
        A.table.remove(q)
    A.states = [q for q in A.states if q not in gone]
    A.accept = tuple(q for q in A.accept if q not in gone)
    A.inalpha = set(t.input for t in A.table.transitions())
    logger.debug("pruned %d unreachable states: %s", len(dead), dead)
    return dead


def refine(A) -> List[List[str]]:
    """
    Moore's algorithm. Starts from the partition {accepting, non-accepting}
    and splits blocks until no state can be told apart from its block
    by one more symbol. Blocks keep the order of A.states.
    """
    final = [q for q in A.states if A.isaccepting(q)]
    other = [q for q in A.states if not A.isaccepting(q)]
    blocks = [b for b in (final, other) if b]
    alphabet = sorted(A.inalpha)

    rounds = 0
    while True:
        rounds += 1
        index: Dict[str, int] = {q: i for i, b in enumerate(blocks) for q in b}

        groups: Dict[tuple, List[str]] = {}
        for q in A.states:
            signature = [index[q]]
            for a in alphabet:
                end = A.table.lookup(q, a)
                signature.append(NOTRANSITION if end is None else index[end])
            groups.setdefault(tuple(signature), []).append(q)

        refined = list(groups.values())
        if set(map(frozenset, refined)) == set(map(frozenset, blocks)):
            break
        blocks = refined

    logger.debug("partition stable after %d rounds: %d blocks", rounds, len(blocks))
    return blocks


def minimize(A):
    """
    Minimizes the DFA A in place and returns it.
    Each block of the stable partition is collapsed onto its first state.
    """
    from fsmkit.machine import dfa

    if not isinstance(A, dfa):
        raise TypeError("Only deterministic automata can be minimized.")
    if A.initial is None:
        logger.warning("machine has no initial state, nothing to minimize")
        return A

    before = A.n()
    prune(A)
    blocks = refine(A)

    rep = {q: b[0] for b in blocks for q in b}
    moves = list(A.table.transitions())

    A.table.clear()
    for t in moves:
        A.table.add(rep[t.start], t.input, rep[t.end])
    A.states = [q for q in A.states if rep[q] == q]
    A.initial = rep[A.initial]
    A.accept = tuple(b[0] for b in blocks if A.isaccepting(b[0]))

    logger.debug("minimized machine from %d to %d states", before, A.n())
    return A
