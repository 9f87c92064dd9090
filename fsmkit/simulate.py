from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from fsmkit.reach import closure


class Verdict(enum.Enum):
    ACCEPT = "Accept"
    REJECT = "Reject"
    REJECT_TRANSITION = "Reject: invalid transition"
    REJECT_FINAL = "Reject: invalid final state"

    @property
    def accepted(self) -> bool:
        return self is Verdict.ACCEPT

    def __str__(self):
        return self.value


@dataclass
class runresult:
    verdict: Verdict
    steps: int = 0
    computation: List[Tuple] = field(default_factory=list)
    state: object = None
    stack: Tuple[str, ...] = ()


def _degenerate(machine) -> bool:
    return machine.initial is None or not machine.states


def rundfa(machine, symbols: Iterable) -> runresult:
    """
    Runs a deterministic automaton on symbols.
    The run stops at the first symbol without a transition.
    """
    r = runresult(Verdict.REJECT_TRANSITION, state=machine.initial)
    if _degenerate(machine):
        return r

    for a in symbols:
        a = str(a)
        q = machine.table.lookup(r.state, a)
        if q is None:
            return r
        r.computation.append((r.state, a, q))
        r.state = q
        r.steps += 1

    r.verdict = Verdict.ACCEPT if machine.isaccepting(r.state) else Verdict.REJECT_FINAL
    return r


def runnfa(machine, symbols: Iterable) -> runresult:
    """
    Runs a nondeterministic automaton with epsilon transitions,
    tracking the set of states the automaton may be in.
    """
    r = runresult(Verdict.REJECT)
    if _degenerate(machine):
        return r

    table, epsilon = machine.table, machine.epsilon
    current = closure(table, machine.initial, epsilon)
    r.state = current

    for a in symbols:
        a = str(a)
        nxt = set()
        if a != epsilon:
            for p in current:
                for q in table.successors(p, a):
                    nxt |= closure(table, q, epsilon)
        r.computation.append((current, a, frozenset(nxt)))
        current = frozenset(nxt)
        r.state = current
        if not current:
            return r
        r.steps += 1

    if any(machine.isaccepting(q) for q in current):
        r.verdict = Verdict.ACCEPT
    return r


def runpda(machine, symbols: Iterable) -> runresult:
    """
    Runs a pushdown automaton. The stack belongs to this run only.
    A missing transition and a failed pop both reject.
    """
    r = runresult(Verdict.REJECT, state=machine.initial)
    if _degenerate(machine):
        return r

    stack: List[str] = []
    for a in symbols:
        a = str(a)
        t = machine.table.lookup(r.state, a)
        if t is None:
            break
        if t.pop is not None:
            if not stack or stack[-1] != t.pop:
                break
            stack.pop()
        if t.push is not None:
            stack.append(t.push)
        r.computation.append((r.state, a, t.end, tuple(stack)))
        r.state = t.end
        r.steps += 1
    else:
        if machine.isaccepting(r.state) and not stack:
            r.verdict = Verdict.ACCEPT

    r.stack = tuple(stack)
    return r
