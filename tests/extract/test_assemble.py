from __future__ import annotations

from harness_extract.domain import Mapping, WireTable
from harness_extract.extract.assemble import RowAssembler, extract_from_text


def test_extract_from_text_builds_one_row_per_printed_line(english_mapping, harness_texts) -> None:
    table = WireTable.from_mapping(english_mapping)

    added = extract_from_text(harness_texts, table, english_mapping)

    assert added == 2
    assert table.rows == [
        {
            "No": "1",
            "Wire Code": "W12",
            "Color": "R",
            "Wire Type": "AVSS",
            "Wire Size": "0.85",
            "Cut Length": "1250",
            "From": "CN101",
            "To": "CN202",
        },
        {
            "No": "2",
            "Wire Code": "W13",
            "Color": "B",
            "Wire Type": "",
            "Wire Size": "1.25",
            "Cut Length": "300",
            "From": "",
            "To": "",
        },
    ]


def test_index_column_bound_by_heading_alias() -> None:
    mapping = Mapping.from_dict({"columns": [{"col": "رديف"}, {"col": "رنگ سيم"}]})
    table = WireTable.from_mapping(mapping)

    extract_from_text([("R", 0, 20), ("B", 0, 0)], table, mapping)

    assert table.rows == [
        {"رديف": "1", "رنگ سيم": "R"},
        {"رديف": "2", "رنگ سيم": "B"},
    ]


def test_columns_without_a_field_stay_empty() -> None:
    mapping = Mapping.from_dict({"columns": [{"col": "Color"}, {"col": "Remarks"}]})
    table = WireTable.from_mapping(mapping)

    extract_from_text([("R", 0, 0), ("150", 10, 0)], table, mapping)

    assert table.rows == [{"Color": "R", "Remarks": ""}]


def test_no_text_yields_empty_but_valid_table(english_mapping) -> None:
    table = WireTable.from_mapping(english_mapping)

    assert extract_from_text([("NOTE 1", 0, 0), ("  ", 0, 0)], table, english_mapping) == 0
    assert table.rows == []
    assert list(table.to_frame().columns) == list(english_mapping.column_names())


def test_calibrated_tolerance_splits_close_rows() -> None:
    mapping = Mapping.from_dict(
        {"columns": [{"col": "Color"}], "calibration": {"row_y_tolerance": 1.0}}
    )
    table = WireTable.from_mapping(mapping)

    extract_from_text([("R", 0, 100), ("B", 0, 103)], table, mapping)

    assert [row["Color"] for row in table.rows] == ["B", "R"]


def test_assembler_reports_declared_fields(english_mapping) -> None:
    assembler = RowAssembler(WireTable.from_mapping(english_mapping), english_mapping)

    assert assembler.index_column == "No"
    assert len(assembler.declared_fields()) == 7
