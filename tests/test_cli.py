"""
Tests for the CLI module.
"""

import json

import pyarrow.parquet as pq
import pytest

from csvbind.cli.main import app


@pytest.fixture
def people_file(tmp_path):
    path = tmp_path / "people.csv"
    path.write_text("Name,Age,Score\nAlice,30,88.5\nBob,41,70\n")
    return path


@pytest.fixture
def shape_file(tmp_path):
    path = tmp_path / "person.json"
    path.write_text(
        json.dumps(
            {
                "name": "Person",
                "fields": [
                    {"name": "name", "type": "str", "required": True},
                    {"name": "age", "type": "uint8", "required": True},
                    {"name": "score", "type": "float", "optional": True},
                ],
            }
        )
    )
    return path


class TestCLIDescribe:
    """Tests for the describe command."""

    def test_describe(self, capsys):
        result = app(["describe", "sample_records:Person"])
        assert result == 0
        out = capsys.readouterr().out
        assert "Record: Person" in out
        assert "age: age [int] (required)" in out

    def test_describe_json(self, capsys):
        result = app(["describe", "--json", "sample_records:Record"])
        assert result == 0
        output = json.loads(capsys.readouterr().out)
        assert output["record"] == "Record"
        assert output["fields"][2]["kind"] == "uint"
        assert output["fields"][7]["type"] == "Optional[int]"

    def test_describe_json_shape(self, shape_file):
        assert app(["describe", str(shape_file)]) == 0

    def test_describe_bad_shape(self):
        assert app(["describe", "no_such_module:Thing"]) == 1
        assert app(["describe", "sample_records"]) == 1
        assert app(["describe", "sample_records:Missing"]) == 1


class TestCLICheckHeader:
    """Tests for the check-header command."""

    def test_check_header(self, people_file, capsys):
        result = app(["check-header", "sample_records:Person", str(people_file)])
        assert result == 0
        assert "Header OK" in capsys.readouterr().out

    def test_check_header_json(self, people_file, capsys):
        result = app(["check-header", "--json", "sample_records:Person", str(people_file)])
        assert result == 0
        output = json.loads(capsys.readouterr().out)
        assert output["bindings"] == {"name": 0, "age": 1, "score": 2}

    def test_check_header_unexpected(self, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("Name,Age,Extra\n")
        assert app(["check-header", "sample_records:Person", str(path)]) == 1

    def test_check_header_empty_file(self, tmp_path, capsys):
        path = tmp_path / "empty.csv"
        path.write_text("")
        assert app(["check-header", "sample_records:Person", str(path)]) == 1

        captured = capsys.readouterr()
        assert "Header OK" not in captured.out
        assert 'Mandatory column "name" is missing' in captured.err

    def test_check_header_byte_order_mark(self, tmp_path, capsys):
        """Test a header exported with a UTF-8 BOM."""
        path = tmp_path / "excel.csv"
        path.write_text("Name,Age,Score\n", encoding="utf-8-sig")
        assert app(["check-header", "sample_records:Person", str(path)]) == 0
        assert "Header OK" in capsys.readouterr().out

    def test_check_header_nonexistent_file(self):
        assert app(["check-header", "sample_records:Person", "/nonexistent/file.csv"]) == 1


class TestCLIConvert:
    """Tests for the convert command."""

    def test_convert_jsonl(self, people_file, tmp_path):
        out_dir = tmp_path / "out"
        result = app(["convert", "sample_records:Person", str(people_file), "-o", str(out_dir)])
        assert result == 0

        lines = (out_dir / "people.jsonl").read_text().splitlines()
        assert json.loads(lines[0]) == {"name": "Alice", "age": 30, "score": 88.5}

    def test_convert_parquet_with_json_shape(self, people_file, shape_file, tmp_path):
        out_dir = tmp_path / "out"
        result = app(
            [
                "convert",
                str(shape_file),
                str(people_file),
                "-o",
                str(out_dir),
                "--format",
                "parquet",
                "--name",
                "people_table",
            ]
        )
        assert result == 0

        table = pq.read_table(out_dir / "people_table.parquet")
        assert table.column("age").to_pylist() == [30, 41]

    def test_convert_dry_run(self, people_file, tmp_path):
        out_dir = tmp_path / "out"
        result = app(
            ["convert", "sample_records:Person", str(people_file), "-o", str(out_dir), "--dry-run"]
        )
        assert result == 0
        assert not (out_dir / "people.jsonl").exists()

    def test_convert_row_errors(self, tmp_path):
        """Test rejected rows give exit code 2 but still write output."""
        path = tmp_path / "people.csv"
        path.write_text("Name,Age\nAlice,30\nBob,old\n")
        out_dir = tmp_path / "out"

        result = app(["convert", "sample_records:Person", str(path), "-o", str(out_dir)])
        assert result == 2
        assert len((out_dir / "people.jsonl").read_text().splitlines()) == 1

    def test_convert_strict(self, tmp_path):
        path = tmp_path / "people.csv"
        path.write_text("Name,Age\nAlice,30\nBob,old\n")
        result = app(
            ["convert", "sample_records:Person", str(path), "-o", str(tmp_path / "out"), "--strict"]
        )
        assert result == 1

    def test_convert_time_format(self, tmp_path):
        path = tmp_path / "m.csv"
        path.write_text("Sensor,Channel,Taken At\ns-1,4,2024-03-01 10:15\n")
        out_dir = tmp_path / "out"
        result = app(
            [
                "convert",
                "sample_records:Measurement",
                str(path),
                "-o",
                str(out_dir),
                "--time-format",
                "%Y-%m-%d %H:%M",
            ]
        )
        assert result == 0
        row = json.loads((out_dir / "m.jsonl").read_text())
        assert row["taken_at"] == "2024-03-01T10:15:00"

    def test_convert_incorrect_header(self, tmp_path):
        path = tmp_path / "people.csv"
        path.write_text("Age\n30\n")
        assert app(["convert", "sample_records:Person", str(path), "-o", str(tmp_path)]) == 1
