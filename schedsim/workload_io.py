from __future__ import annotations

import csv
import json
import logging
import re
from pathlib import Path
from typing import Any, List, Mapping, Sequence

from .algorithms import validate_processes
from .errors import WorkloadError
from .models import Process

logger = logging.getLogger(__name__)

INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.

    CSV rows are positional and headerless: ``pid,burst,arrival[,priority]``.
    JSON is a list of objects keyed by ``pid``, ``burst_time``,
    ``arrival_time`` and optionally ``priority``.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        loader = _load_json
    elif suffix == ".csv":
        loader = _load_csv
    else:
        raise WorkloadError(f"Unsupported workload format: {suffix or '(none)'} (use .json or .csv)")

    try:
        processes = loader(path)
    except OSError as exc:
        raise WorkloadError(f"Cannot read workload file {path}: {exc.strerror or exc}") from exc
    except UnicodeDecodeError as exc:
        raise WorkloadError(f"{path}: workload is not UTF-8 text") from exc
    except csv.Error as exc:
        raise WorkloadError(f"{path}: malformed CSV ({exc})") from exc

    validate_processes(processes)
    logger.info("Loaded %d processes from %s", len(processes), path)
    return processes


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise WorkloadError(f"{path}: invalid JSON ({exc.msg} at line {exc.lineno})") from exc

    if not isinstance(raw, list):
        raise WorkloadError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    processes: List[Process] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.reader(f)
        for row in reader:
            if not any(field.strip() for field in row):
                continue
            processes.append(_process_from_row(row, reader.line_num))
    return processes


def _parse_int(value: Any, field: str, where: str) -> int:
    if isinstance(value, bool):
        raise WorkloadError(f"{where}: {field} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    text = str(value).strip()
    # Plain base-10 digits only, no underscores or other literal forms.
    if not INTEGER_RE.fullmatch(text):
        raise WorkloadError(f"{where}: {field} must be an integer, got {value!r}")
    return int(text, 10)


def _process_from_row(row: Sequence[str], line_num: int) -> Process:
    where = f"line {line_num}"
    if len(row) not in (3, 4):
        raise WorkloadError(f"{where}: expected pid,burst,arrival[,priority] but got {len(row)} fields")

    priority = 0
    if len(row) == 4 and row[3].strip():
        priority = _parse_int(row[3], "priority", where)

    return Process(
        pid=_parse_int(row[0], "pid", where),
        burst_time=_parse_int(row[1], "burst", where),
        arrival_time=_parse_int(row[2], "arrival", where),
        priority=priority,
    )


def _process_from_mapping(mapping: Mapping[str, Any]) -> Process:
    if not isinstance(mapping, Mapping):
        raise WorkloadError(f"Invalid process entry: {mapping!r}")
    try:
        pid = mapping["pid"]
        arrival_time = mapping["arrival_time"]
        burst_time = mapping["burst_time"]
    except KeyError as exc:
        raise WorkloadError(f"Invalid process entry: {mapping!r} (missing {exc.args[0]})") from exc

    where = f"process {pid!r}"
    priority_val = mapping.get("priority")

    return Process(
        pid=_parse_int(pid, "pid", where),
        arrival_time=_parse_int(arrival_time, "arrival_time", where),
        burst_time=_parse_int(burst_time, "burst_time", where),
        priority=_parse_int(priority_val, "priority", where) if priority_val not in (None, "") else 0,
    )
