import argparse
import logging
import sys

from fsmkit.files import MachineFormatError, runfile, writemachine
from fsmkit.machine import abstractmachine, dfa, nfa, pda

logger = logging.getLogger(__name__)

KINDS = {"dfa": dfa, "nfa": nfa, "pda": pda}


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="fsmkit",
        description="Build an automaton from a description file and run every line of an input file on it.",
    )
    parser.add_argument("kind", choices=sorted(KINDS), help="Kind of automaton")
    parser.add_argument("machine", help="Machine description file")
    parser.add_argument("inputs", help="Input file, one word per line")
    parser.add_argument(
        "output", nargs="?", default=None, help="Result file. Default: print to stdout"
    )
    parser.add_argument(
        "--minimize", action="store_true", help="Minimize the automaton first (dfa only)"
    )
    parser.add_argument(
        "--dump", default=None, help="Write the (minimized) automaton to this file"
    )
    parser.add_argument(
        "--epsilon",
        default=abstractmachine.notations.EPSILON.value,
        help="Epsilon symbol (nfa only). Default: %(default)s",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s: %(message)s",
    )

    if args.minimize and args.kind != "dfa":
        parser.error("--minimize is only available for dfa")

    try:
        if args.kind == "nfa":
            A = nfa.fromfile(args.machine, epsilon=args.epsilon)
        else:
            A = KINDS[args.kind].fromfile(args.machine)
        logger.info(
            "%s built: |Q| = %d, |F| = %d, %d transitions",
            args.kind.upper(),
            A.n(),
            len(A.accept),
            A.m(),
        )

        if args.minimize:
            A.minimize()
            logger.info("minimal DFA: |Q| = %d", A.n())

        if args.dump:
            writemachine(args.dump, A)

        runfile(A, args.inputs, args.output)
    except MachineFormatError as e:
        logger.error("Malformed machine description %s: %s", args.machine, e)
        return 1
    except OSError as e:
        logger.error("%s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
