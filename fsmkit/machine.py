from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Iterator, List

import matplotlib.pyplot as plt
import networkx as nx

from fsmkit import minimize as minimizer
from fsmkit.simulate import Verdict, runresult, rundfa, runnfa, runpda
from fsmkit.table import dtable, ntable, pdtable


@dataclass(frozen=True)
class record:
    """
    One construction step: kind is "initial", "accept" or "transition",
    args are the arguments of the matching machine method.
    """

    kind: str
    args: tuple


################
### Machines ###
################


class abstractmachine(ABC):
    tablecls = dtable

    def __init__(self, initial=None) -> None:
        self.table = self.tablecls()
        self.clear()
        if initial is not None:
            self.setinitial(initial)

    class notations(enum.Enum):
        EPSILON = "ε"
        COMMENT = "#"

    @abstractmethod
    def simulate(self, symbols: Iterable) -> runresult:
        """
        Runs the machine on symbols and returns the whole run record.
        """
        pass

    @abstractmethod
    def printmachine(self) -> None:
        """
        Prints a readable description of the machine.
        """
        pass

    @classmethod
    def build(cls, records: Iterable[record], **options) -> abstractmachine:
        """
        Creates a new machine from a stream of construction records.
        """
        A = cls(**options)
        A.load(records)
        return A

    @classmethod
    def fromfile(cls, spec: str) -> abstractmachine:
        """
        Creates a new machine object from a file specification.
        """
        from fsmkit.files import readmachine

        return cls.build(readmachine(spec, stack=issubclass(cls, pda)))

    def load(self, records: Iterable[record]) -> None:
        """
        Clears the machine and replays the construction records on it.
        """
        self.clear()
        for r in records:
            if r.kind == "initial":
                self.setinitial(*r.args)
            elif r.kind == "accept":
                self.setfinal(*r.args)
            elif r.kind == "transition":
                self.addtransition(*r.args)
            else:
                raise ValueError(f"Unknown record kind: {r.kind}")

    def describe(self) -> Iterator[record]:
        """
        Construction records that rebuild this machine.
        """
        if self.initial is not None:
            yield record("initial", (self.initial,))
        yield record("accept", tuple(self.accept))
        for t in self.transitions():
            yield record("transition", self._transitionargs(t))

    def _transitionargs(self, t) -> tuple:
        return (t.start, t.input, t.end)

    def clear(self) -> None:
        """
        Back to the empty machine: no initial state, no states, no transitions.
        """
        self.initial = None
        self.states: List[str] = []
        self.accept = ()
        self.inalpha = set()
        self.table.clear()

    def addstate(self, id) -> str:
        """
        Registers the state id, if new, and returns it as a string.
        """
        id = str(id)
        if id not in self.states:
            self.states.append(id)
        return id

    def addstates(self, *ids) -> None:
        for id in ids:
            self.addstate(id)

    def setinitial(self, id) -> None:
        """
        Sets state id as initial.
        """
        self.initial = self.addstate(id)

    def setfinal(self, *ids) -> None:
        """
        Sets the final (accepting) states, replacing any earlier ones.
        The states need not have been declared.
        """
        if len(ids) == 1 and isinstance(ids[0], (list, tuple, set, frozenset)):
            ids = tuple(ids[0])
        self.accept = tuple(dict.fromkeys(str(q) for q in ids))

    def isaccepting(self, id) -> bool:
        return id in self.accept

    def addtransition(self, startid, input, endid) -> None:
        startid = self.addstate(startid)
        endid = self.addstate(endid)
        input = str(input)
        self.inalpha.add(input)
        self.table.add(startid, input, endid)

    def addbouquet(self, *bouquets) -> None:
        """
        Adds an arbitrary number of bouquets.
        A bouquet is a string of form q0 a1 q1 a2 q2 ... ak qk
        where q0, q1, ..., qk are states and a1, a2, ..., ak
        are letters. The transitions (q0, a1, q1),
        (q0, a2, q2), ..., (q0, ak, qk) are added.
        """

        for s in bouquets:
            parts = s.split()
            p = parts.pop(0)
            while parts:
                a, q = parts.pop(0), parts.pop(0)
                self.addtransition(p, a, q)

    def lookup(self, startid, input):
        return self.table.lookup(str(startid), str(input))

    def transitions(self) -> list:
        """
        Transitions of the machine, in insertion order.
        """
        return list(self.table.transitions())

    def n(self) -> int:
        """
        Number of states of the machine.
        """
        return len(self.states)

    def m(self) -> int:
        """
        Number of transitions of the machine.
        """
        return len(self.transitions())

    def stateset(self) -> set:
        return set(self.states)

    def run(self, symbols: Iterable) -> Verdict:
        return self.simulate(symbols).verdict

    def graph(self) -> nx.MultiDiGraph:
        G = nx.MultiDiGraph()

        for q in self.states:
            G.add_node(q, initial=q == self.initial, accepting=self.isaccepting(q))

        for e in self.transitions():
            G.add_edge(e.start, e.end, label=self._edgelabel(e))

        return G

    def _edgelabel(self, e) -> str:
        return e.input

    def draw(self, path: str = "output.png") -> None:
        # Parallel edges are drawn as one edge carrying all their labels.
        G = nx.DiGraph()
        G.add_nodes_from(self.states)
        for u, v, d in self.graph().edges(data=True):
            if G.has_edge(u, v):
                G[u][v]["label"] += "; " + d["label"]
            else:
                G.add_edge(u, v, label=d["label"])

        pos = nx.spring_layout(G, seed=0)
        colors = ["gold" if self.isaccepting(q) else "lightblue" for q in G.nodes]

        fig = plt.figure()
        nx.draw(
            G,
            pos,
            with_labels=True,
            node_size=2000,
            node_color=colors,
            arrows=True,
            arrowstyle="->",
            arrowsize=10,
            width=2,
            connectionstyle="arc3,rad=0.3",
        )
        labels = nx.get_edge_attributes(G, "label")
        nx.draw_networkx_edge_labels(G, pos, edge_labels=labels)
        fig.savefig(path)
        plt.close(fig)


class dfa(abstractmachine):
    """
    Deterministic finite automata.
    """

    tablecls = dtable

    def printmachine(self) -> None:
        print("alphabet: ", self.inalpha)
        print("states: ", self.stateset())
        print("initial state: ", self.initial)
        print("final states: ", set(self.accept))
        print("transitions: ", set(map(str, self.transitions())))

    def simulate(self, symbols: Iterable) -> runresult:
        return rundfa(self, symbols)

    def minimize(self) -> dfa:
        """
        Replaces this automaton by its minimal equivalent.
        """
        return minimizer.minimize(self)


class nfa(abstractmachine):
    """
    Nondeterministic finite automata with epsilon transitions.
    The epsilon symbol is not part of the input alphabet.
    """

    tablecls = ntable

    def __init__(self, initial=None, epsilon: str = abstractmachine.notations.EPSILON.value) -> None:
        self.epsilon = str(epsilon)
        super().__init__(initial)

    @classmethod
    def fromfile(cls, spec: str, epsilon: str = abstractmachine.notations.EPSILON.value) -> nfa:
        from fsmkit.files import readmachine

        return cls.build(readmachine(spec), epsilon=epsilon)

    def printmachine(self) -> None:
        print("alphabet: ", self.inalpha)
        print("epsilon: ", self.epsilon)
        print("states: ", self.stateset())
        print("initial state: ", self.initial)
        print("final states: ", set(self.accept))
        print("transitions: ", set(map(str, self.transitions())))

    def addtransition(self, startid, input, endid) -> None:
        input = str(input)
        super().addtransition(startid, input, endid)
        if input == self.epsilon:
            self.inalpha.discard(input)

    def simulate(self, symbols: Iterable) -> runresult:
        return runnfa(self, symbols)


class pda(abstractmachine):
    """
    Deterministic pushdown automata. A transition may require a symbol
    on top of the stack (pop) and may push one symbol.
    Acceptance needs an accepting state and an empty stack.
    """

    tablecls = pdtable

    def clear(self) -> None:
        super().clear()
        self.auxalpha = set()

    def printmachine(self) -> None:
        print("alphabet: ", self.inalpha)
        print("stack alphabet: ", self.auxalpha)
        print("states: ", self.stateset())
        print("initial state: ", self.initial)
        print("final states: ", set(self.accept))
        print("transitions: ", set(map(str, self.transitions())))

    def addtransition(self, startid, input, endid, pop=None, push=None) -> None:
        startid = self.addstate(startid)
        endid = self.addstate(endid)
        input = str(input)
        pop = str(pop) if pop not in (None, "") else None
        push = str(push) if push not in (None, "") else None
        self.inalpha.add(input)
        self.auxalpha.update(s for s in (pop, push) if s is not None)
        self.table.add(startid, input, endid, pop, push)

    def _transitionargs(self, t) -> tuple:
        return (t.start, t.input, t.end, t.pop, t.push)

    def _edgelabel(self, e) -> str:
        return f"{e.input}, {e.pop or ''} / {e.push or ''}"

    def simulate(self, symbols: Iterable) -> runresult:
        return runpda(self, symbols)
