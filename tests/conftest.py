"""
Pytest configuration and fixtures for fsmkit tests.

Provides small reference machines of each kind.
"""

import matplotlib

matplotlib.use("Agg")

import pytest

from fsmkit.machine import dfa, nfa, pda


@pytest.fixture
def ends_in_0():
    """
    DFA over {0, 1} accepting the binary strings ending in 0 (and the empty string).
    """
    A = dfa("q0")
    A.setfinal("q0")
    A.addtransition("q0", "0", "q0")
    A.addtransition("q0", "1", "q1")
    A.addtransition("q1", "0", "q0")
    A.addtransition("q1", "1", "q1")
    return A


@pytest.fixture
def collapsible():
    """
    3-state DFA whose states q2 and q3 are equivalent.
    """
    A = dfa("q1")
    A.setfinal("q1")
    A.addbouquet("q1 a q2 b q3", "q2 a q1 b q1", "q3 a q1 b q1")
    return A


@pytest.fixture
def ab_star_or_a_star():
    """
    NFA with epsilon moves accepting (ab)* | a*.
    """
    A = nfa("q0")
    A.setfinal("q1", "q3")
    A.addtransition("q0", "ε", "q1")
    A.addtransition("q0", "ε", "q3")
    A.addtransition("q1", "a", "q2")
    A.addtransition("q2", "b", "q1")
    A.addtransition("q3", "a", "q3")
    return A


@pytest.fixture
def anbn():
    """
    PDA accepting a^n b^n, n >= 0.
    """
    A = pda("q0")
    A.setfinal("q0", "q1")
    A.addtransition("q0", "a", "q0", push="X")
    A.addtransition("q0", "b", "q1", pop="X")
    A.addtransition("q1", "b", "q1", pop="X")
    return A
