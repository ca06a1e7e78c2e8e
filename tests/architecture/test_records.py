"""Tests for DirectoryRecord accumulation and its dict form."""

import pytest

from archmap.architecture.models import CouplingMetrics, DirectoryRecord
from archmap.exceptions import InvalidAnalysisError
from archmap.scanning.symbols import FileSymbols


class TestDirectoryRecord:
    def test_add_file_and_finalize(self):
        record = DirectoryRecord(path="m")
        record.add_file(FileSymbols(classes=2, interfaces=1, loc=10, ccn=3))
        record.add_file(FileSymbols(abstracts=1, loc=4, ccn=1))
        record.finalize()

        assert record.file_count == 2
        assert record.total == 4
        assert record.loc_total == 14
        assert record.ccn_total == 4

    def test_to_dict_shape(self):
        record = DirectoryRecord(
            path="m",
            classes=1,
            total=1,
            file_count=1,
            loc_total=7,
            ccn_total=2,
            relations={"z", "a"},
            metrics=CouplingMetrics(efferent_coupling=2, afferent_coupling=0, instability=1.0),
        )
        assert record.to_dict() == {
            "classes": 1,
            "interfaces": 0,
            "abstracts": 0,
            "total": 1,
            "file_count": 1,
            "relations": ["a", "z"],
            "metrics": {
                "efferent_coupling": 2,
                "afferent_coupling": 0,
                "instability": 1.0,
                "loc_total": 7,
                "ccn_total": 2,
            },
        }

    def test_from_dict_restores_record(self):
        record = DirectoryRecord(path="m", classes=3, total=3, relations={"b"})
        record.metrics = CouplingMetrics(1, 2, 0.333)
        assert DirectoryRecord.from_dict("m", record.to_dict()) == record

    def test_from_dict_missing_fields_default(self):
        record = DirectoryRecord.from_dict("m", {})
        assert record == DirectoryRecord(path="m")

    def test_from_dict_bad_types(self):
        with pytest.raises(InvalidAnalysisError) as exc_info:
            DirectoryRecord.from_dict("m", {"classes": "many"})
        assert exc_info.value.key == "m"
