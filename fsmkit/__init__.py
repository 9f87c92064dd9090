from fsmkit.machine import abstractmachine, dfa, nfa, pda, record
from fsmkit.simulate import Verdict, runresult

__all__ = ["abstractmachine", "dfa", "nfa", "pda", "record", "Verdict", "runresult"]
