"""
Text descriptions of machines and input files.

A machine description has the initial state on its first line, the
accepting states (comma or space separated) on the second, and one
transition per line after that:

    start, symbol, end                  (DFA, NFA)
    start, symbol, pop, push, end       (PDA, empty pop/push means none)

Lines starting with # or // are ignored, and so are blank lines except
the accepting line, which may be empty.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional

from fsmkit.machine import abstractmachine, pda, record
from fsmkit.simulate import Verdict

logger = logging.getLogger(__name__)

COMMENTS = (abstractmachine.notations.COMMENT.value, "//")


class MachineFormatError(Exception):
    pass


def words(line: str) -> List[str]:
    """
    Pulls the words out of a line.
    """
    return [w for w in re.split(r"\W+", line) if w]


def tokenize(line: str) -> List[str]:
    """
    Splits an input line into symbols: words if the line has a comma,
    one symbol per character otherwise.
    """
    if "," in line:
        return words(line)
    return list(line)


def _iscomment(line: str, comments=COMMENTS) -> bool:
    return line.startswith(comments)


def fields(line: str) -> List[str]:
    """
    Splits a description line on commas and whitespace. Unlike words,
    ids and symbols keep their punctuation (q-0, +, *).
    """
    return [f for f in re.split(r"[,\s]+", line) if f]


def parsemachine(lines: Iterable[str], stack: bool = False) -> List[record]:
    lines = [ln.strip() for ln in lines]
    lines = [ln for ln in lines if not _iscomment(ln)]
    while lines and not lines[0]:
        lines.pop(0)

    if not lines:
        raise MachineFormatError("Missing initial state.")
    head = fields(lines.pop(0))
    if not head:
        raise MachineFormatError("Missing initial state.")

    # The accepting line may be empty, so it is taken before blanks are dropped.
    records = [record("initial", (head[0],))]
    records.append(record("accept", tuple(fields(lines.pop(0))) if lines else ()))

    for k, line in enumerate([ln for ln in lines if ln], start=1):
        if stack:
            parts = [f.strip() for f in line.split(",")]
            if len(parts) != 5:
                raise MachineFormatError(f"Transition {k}: expected start, symbol, pop, push, end.")
            p, a, pop, push, q = parts
            args = (p, a, q, pop or None, push or None)
        else:
            parts = fields(line)
            if len(parts) != 3:
                raise MachineFormatError(f"Transition {k}: expected start, symbol, end.")
            p, a, q = parts
            args = (p, a, q)
        records.append(record("transition", args))

    return records


def readmachine(path: str, stack: bool = False) -> List[record]:
    with open(path, encoding="utf-8") as f:
        records = parsemachine(f, stack)
    logger.info("read %d records from %s", len(records), path)
    return records


def _checktokens(*tokens, first=None) -> None:
    for tok in tokens:
        if tok is not None and fields(tok) != [tok]:
            raise MachineFormatError(f"Cannot write {tok!r}: commas and whitespace separate fields.")
    if first is not None and _iscomment(first):
        raise MachineFormatError(f"Cannot write {first!r} at the start of a line.")


def writemachine(path: str, machine) -> None:
    """
    Writes machine in the format read by readmachine.
    Raises MachineFormatError for ids or symbols the reader would not get back.
    """
    if machine.initial is None:
        raise MachineFormatError("Machine has no initial state.")

    lines = []
    for r in machine.describe():
        _checktokens(*r.args, first=r.args[0] if r.args else None)
        if r.kind == "initial":
            lines.append(r.args[0])
        elif r.kind == "accept":
            lines.append(", ".join(r.args))
        elif isinstance(machine, pda):
            p, a, q, pop, push = r.args
            lines.append(f"{p}, {a}, {pop or ''}, {push or ''}, {q}")
        else:
            lines.append(", ".join(r.args))

    with open(path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")
    logger.info("wrote %d transitions to %s", machine.m(), path)


def inputcomments(machine) -> tuple:
    """
    Comment marker of input files: # for pushdown automata, // otherwise.
    """
    return (abstractmachine.notations.COMMENT.value,) if isinstance(machine, pda) else ("//",)


def readinputs(path: str, comments=COMMENTS) -> List[str]:
    lines = []
    with open(path, encoding="utf-8") as f:
        for ln in f:
            ln = ln.strip()
            if _iscomment(ln, comments):
                logger.debug("skipping comment line %r", ln)
                continue
            lines.append(ln)
    return lines


def runfile(machine, inpath: str, outpath: Optional[str] = None) -> List[Verdict]:
    """
    Runs every line of inpath on machine. The verdicts are written to
    outpath as comment lines, or printed if no outpath is given.
    """
    inputs = readinputs(inpath, inputcomments(machine))
    results = [machine.run(tokenize(line)) for line in inputs]
    logger.info(
        "%d inputs, %d accepted", len(results), sum(1 for v in results if v.accepted)
    )

    if outpath is None:
        for v in results:
            print(v)
    else:
        with open(outpath, "w", encoding="utf-8") as f:
            for v in results:
                f.write(f"// {v}\n")
    return results
