from pathlib import Path

import pytest

from schedsim.errors import WorkloadError
from schedsim.models import Process
from schedsim.workload_io import load_workload


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":1,"arrival_time":0,"burst_time":3,"priority":1},'
                 '{"pid":2,"arrival_time":1,"burst_time":2}]')
    procs = load_workload(p)
    assert isinstance(procs[0], Process)
    assert procs[0].priority == 1
    assert procs[1].priority == 0
    assert procs[1].arrival_time == 1


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("1,5,0,2\n2, 3, 1\n\n3,1,2,\n")
    procs = load_workload(p)
    assert procs == [
        Process(1, arrival_time=0, burst_time=5, priority=2),
        Process(2, arrival_time=1, burst_time=3, priority=0),
        Process(3, arrival_time=2, burst_time=1, priority=0),
    ]


def test_csv_non_integer_field_names_line(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("1,5,0\n2,three,1\n")
    with pytest.raises(WorkloadError, match="line 2"):
        load_workload(p)


@pytest.mark.parametrize("row", ["1,5", "1,5,0,2,9"])
def test_csv_wrong_field_count(tmp_path: Path, row):
    p = tmp_path / "w.csv"
    p.write_text(row + "\n")
    with pytest.raises(WorkloadError, match="fields"):
        load_workload(p)


def test_missing_file(tmp_path: Path):
    with pytest.raises(WorkloadError, match="Cannot read"):
        load_workload(tmp_path / "absent.csv")


def test_unsupported_suffix(tmp_path: Path):
    p = tmp_path / "w.txt"
    p.write_text("1,5,0\n")
    with pytest.raises(WorkloadError, match="Unsupported"):
        load_workload(p)


def test_json_must_be_list(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('{"pid": 1}')
    with pytest.raises(WorkloadError):
        load_workload(p)


def test_json_missing_key(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid": 1, "burst_time": 4}]')
    with pytest.raises(WorkloadError, match="arrival_time"):
        load_workload(p)


def test_workload_error_is_value_error(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text("not json")
    with pytest.raises(ValueError):
        load_workload(p)


@pytest.mark.parametrize("field", ["1_0", "0x1f", "１２", "5.0", "+"])
def test_csv_rejects_non_decimal_integers(tmp_path: Path, field):
    p = tmp_path / "w.csv"
    p.write_text(f"1,{field},0\n", encoding="utf-8")
    with pytest.raises(WorkloadError, match="burst must be an integer"):
        load_workload(p)


def test_csv_accepts_signed_priority(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("1,4,0,-2\n2,4,0,+3\n")
    assert [proc.priority for proc in load_workload(p)] == [-2, 3]


@pytest.mark.parametrize(
    "name,content",
    [
        ("zero.csv", "1,0,0\n"),
        ("dup.csv", "1,4,0\n1,2,3\n"),
        ("late.json", '[{"pid": 1, "arrival_time": -1, "burst_time": 2}]'),
    ],
)
def test_invalid_process_sets_rejected_at_load(tmp_path: Path, name, content):
    p = tmp_path / name
    p.write_text(content)
    with pytest.raises(WorkloadError):
        load_workload(p)
