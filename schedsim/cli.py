from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from .algorithms import ALGORITHMS, run_algorithm
from .config import DEFAULT_ALGORITHMS, DEFAULT_QUANTUM, SimulationConfig
from .errors import SchedulerError
from .report import build_comparison_table, print_result
from .workload_io import load_workload

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="CPU scheduling simulator (FCFS, SJF, Priority, RR, SRTF).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Log loading and scheduling decisions (-v for info, -vv for debug).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "workload",
        help="Path to the CSV (pid,burst,arrival[,priority]) or JSON workload file.",
    )
    common.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=list(DEFAULT_ALGORITHMS),
        help=f"Algorithms to run ({', '.join(ALGORITHMS)}; default: {' '.join(DEFAULT_ALGORITHMS)}).",
    )
    common.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum for round-robin (default: {DEFAULT_QUANTUM}).",
    )

    subparsers.add_parser(
        "run",
        parents=[common],
        help="Run each algorithm on a workload file and print its schedule.",
    )
    subparsers.add_parser(
        "compare",
        parents=[common],
        help="Run multiple algorithms on the same workload and compare average metrics.",
    )

    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _run_all(config: SimulationConfig, processes, console: Console, compare: bool) -> None:
    results = []
    for name in config.algorithms:
        # Each policy works on its own copies; the loaded list is shared read-only.
        result = run_algorithm(name, processes, quantum=config.quantum_for(name))
        if compare:
            results.append(result)
        else:
            print_result(console, result)
            console.print()

    if compare:
        console.print(build_comparison_table(results))


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    console = Console()

    try:
        config = SimulationConfig.from_args(args).validate()
        processes = load_workload(Path(args.workload))
        _run_all(config, processes, console, compare=args.command == "compare")
    except SchedulerError as exc:
        logger.error("%s", exc)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
