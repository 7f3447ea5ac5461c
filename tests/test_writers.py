"""
Tests for the JSON Lines and Parquet writers.
"""

import json
from datetime import datetime, timezone

import numpy as np
import pyarrow as pa
import pyarrow.parquet as pq
import pytest

from csvbind import RecordBinder
from csvbind.writers import (
    JSONWriter,
    ParquetWriter,
    arrow_schema,
    record_to_dict,
    serialize_value,
    write_records,
)

from sample_records import Measurement


@pytest.fixture
def binder():
    binder = RecordBinder.for_class(Measurement)
    binder.reconcile_header(["Sensor", "Channel", "Offset", "Reading", "Taken At"])
    return binder


@pytest.fixture
def records(binder):
    return [
        binder.get_new_record(["s-1", "1", "-2", "0.5", "2024-01-01T00:00:00Z"]),
        binder.get_new_record(["s-2", "2", "3", "1.5", ""]),
    ]


class TestSerializers:
    def test_serialize_numpy(self):
        assert serialize_value(np.uint8(3)) == 3
        assert type(serialize_value(np.float32(0.5))) is float
        assert serialize_value("x") == "x"
        assert serialize_value(None) is None

    def test_record_to_dict(self, binder, records):
        row = record_to_dict(binder.schema, records[0])
        assert row == {
            "sensor": "s-1",
            "channel": 1,
            "offset": -2,
            "reading": 0.5,
            "taken_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
        }


class TestArrowSchema:
    def test_types_follow_widths(self, binder):
        schema = arrow_schema(binder.schema)
        assert schema.field("channel").type == pa.uint8()
        assert schema.field("offset").type == pa.int16()
        assert schema.field("reading").type == pa.float32()
        assert schema.field("taken_at").type == pa.timestamp("us", tz="UTC")
        assert schema.field("taken_at").nullable
        assert not schema.field("sensor").nullable
        assert schema.field("sensor").metadata == {b"column": b"sensor"}


class TestJSONWriter:
    def test_write(self, binder, records, tmp_path):
        path = JSONWriter(tmp_path).write(binder.schema, records, "measurements")

        assert path == tmp_path / "measurements.jsonl"
        lines = [json.loads(line) for line in path.read_text().splitlines()]
        assert len(lines) == 2
        assert lines[0]["taken_at"] == "2024-01-01T00:00:00+00:00"
        assert lines[1]["taken_at"] is None
        assert lines[1]["channel"] == 2

    @pytest.mark.parametrize("reading", ["nan", "inf", "-Infinity"])
    def test_non_finite_float(self, binder, records, tmp_path, reading):
        """Test NaN and infinities are refused rather than written as bare tokens."""
        records.append(binder.get_new_record(["s-3", "3", "0", reading, ""]))

        with pytest.raises(ValueError, match="Record 3 cannot be written as JSON"):
            JSONWriter(tmp_path).write(binder.schema, records, "measurements")


class TestParquetWriter:
    def test_write(self, binder, records, tmp_path):
        path = ParquetWriter(tmp_path).write(binder.schema, records, "measurements")

        table = pq.read_table(path)
        assert table.num_rows == 2
        assert table.column("sensor").to_pylist() == ["s-1", "s-2"]
        assert table.column("offset").to_pylist() == [-2, 3]
        assert table.schema.field("channel").type == pa.uint8()

    def test_write_nan(self, binder, tmp_path):
        records = [binder.get_new_record(["s-1", "1", "0", "nan", ""])]
        path = ParquetWriter(tmp_path).write(binder.schema, records, "measurements")

        reading = pq.read_table(path).column("reading").to_pylist()[0]
        assert np.isnan(reading)

    def test_write_records_unknown_format(self, binder, records, tmp_path):
        with pytest.raises(ValueError, match="Unknown format"):
            write_records(binder.schema, records, tmp_path, "out", "xml")

    def test_write_records_parquet(self, binder, records, tmp_path):
        path = write_records(binder.schema, records, tmp_path, "out", "parquet")
        assert path.suffix == ".parquet"
