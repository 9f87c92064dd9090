"""
Machine construction, registries and the construction-record stream.
"""

import pytest

from fsmkit.machine import dfa, nfa, pda, record
from fsmkit.table import atransition


# ============================================================================
# Construction
# ============================================================================


class TestConstruction:
    def test_empty_machine(self):
        A = dfa()
        assert A.initial is None
        assert A.states == []
        assert A.accept == ()
        assert A.m() == 0

    def test_initial_is_registered(self):
        A = dfa("start")
        assert A.initial == "start"
        assert A.states == ["start"]

    def test_ids_are_strings(self):
        A = dfa(1)
        A.setfinal(1, 2, 3)
        A.addtransition(1, 1, 2)
        assert A.initial == "1"
        assert A.accept == ("1", "2", "3")
        assert A.lookup(1, 1) == "2"
        assert A.lookup("1", "1") == "2"

    def test_registries_follow_transitions(self):
        A = dfa()
        A.addtransition("p", "a", "q")
        A.addtransition("q", "b", "r")
        assert A.states == ["p", "q", "r"]
        assert A.inalpha == {"a", "b"}
        assert A.n() == 3
        assert A.m() == 2

    def test_setfinal_replaces(self):
        A = dfa("q0")
        A.setfinal("q0", "q1")
        A.setfinal("q2")
        assert A.accept == ("q2",)

    def test_setfinal_flattens_a_list(self):
        A = dfa("q0")
        A.setfinal(["q0", "q1"])
        assert A.accept == ("q0", "q1")

    def test_accepting_states_need_not_exist(self):
        A = dfa("q0")
        A.setfinal("ghost")
        assert A.isaccepting("ghost")
        assert "ghost" not in A.states

    def test_undeclared_topology_does_not_raise(self):
        A = dfa("nowhere")
        A.setfinal("elsewhere")
        A.addtransition("a", "x", "b")
        assert A.n() == 3

    def test_overwrite_keeps_last_destination(self):
        A = dfa("s")
        A.addtransition("s", "a", "d1")
        A.addtransition("s", "a", "d2")
        assert A.lookup("s", "a") == "d2"
        assert A.transitions() == [atransition("s", "a", "d2")]

    def test_bouquet(self):
        A = dfa()
        A.addbouquet("q0 a q1 b q2")
        assert A.lookup("q0", "a") == "q1"
        assert A.lookup("q0", "b") == "q2"

    def test_clear(self, ends_in_0):
        ends_in_0.clear()
        assert ends_in_0.initial is None
        assert ends_in_0.states == []
        assert ends_in_0.accept == ()
        assert ends_in_0.inalpha == set()
        assert ends_in_0.m() == 0


class TestNFAConstruction:
    def test_epsilon_kept_out_of_alphabet(self, ab_star_or_a_star):
        assert ab_star_or_a_star.inalpha == {"a", "b"}
        assert ab_star_or_a_star.lookup("q0", "ε") == frozenset({"q1", "q3"})

    def test_custom_epsilon(self):
        A = nfa("s", epsilon="&")
        A.addtransition("s", "&", "t")
        A.addtransition("s", "ε", "u")
        assert A.inalpha == {"ε"}


class TestPDAConstruction:
    def test_stack_alphabet(self, anbn):
        assert anbn.auxalpha == {"X"}
        assert anbn.inalpha == {"a", "b"}

    def test_empty_stack_actions_are_none(self):
        A = pda("s")
        A.addtransition("s", "a", "t", "", "")
        t = A.lookup("s", "a")
        assert t.pop is None and t.push is None


# ============================================================================
# Construction records
# ============================================================================


class TestRecords:
    def test_describe(self, collapsible):
        records = list(collapsible.describe())
        assert records[0] == record("initial", ("q1",))
        assert records[1] == record("accept", ("q1",))
        assert record("transition", ("q2", "b", "q1")) in records
        assert len(records) == 2 + 6

    @pytest.mark.parametrize("fixture", ["ends_in_0", "ab_star_or_a_star", "anbn"])
    def test_round_trip(self, fixture, request):
        A = request.getfixturevalue(fixture)
        B = type(A).build(A.describe())
        assert B.initial == A.initial
        assert B.accept == A.accept
        assert set(B.transitions()) == set(A.transitions())
        assert B.stateset() == A.stateset()

    def test_load_clears_first(self, ends_in_0):
        ends_in_0.load([record("initial", ("z",))])
        assert ends_in_0.states == ["z"]
        assert ends_in_0.m() == 0

    def test_unknown_record_kind(self):
        with pytest.raises(ValueError):
            dfa.build([record("bogus", ())])


# ============================================================================
# Graph export
# ============================================================================


class TestGraph:
    def test_graph(self, ends_in_0):
        G = ends_in_0.graph()
        assert set(G.nodes) == {"q0", "q1"}
        assert G.number_of_edges() == 4
        assert G.nodes["q0"]["initial"] and G.nodes["q0"]["accepting"]
        assert not G.nodes["q1"]["accepting"]

    def test_pda_edge_labels(self, anbn):
        labels = {d["label"] for _, _, d in anbn.graph().edges(data=True)}
        assert "a,  / X" in labels
        assert "b, X / " in labels

    def test_draw(self, collapsible, tmp_path):
        path = tmp_path / "machine.png"
        collapsible.draw(str(path))
        assert path.exists()
        assert path.stat().st_size > 0

    def test_printmachine(self, anbn, capsys):
        anbn.printmachine()
        out = capsys.readouterr().out
        assert "stack alphabet" in out
        assert "initial state:  q0" in out
