import json
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

from common.config import ExportConfig
from pipelines.data_source import ExportInputs, FixturesDataSource, get_data_source
from scripts.run_nominal_export import main, run_export_from_inputs


FIXTURES = Path(__file__).parent / "fixtures" / "workshop"

MARCH_START = date(2025, 3, 1)
MARCH_END = date(2025, 3, 31)


def test_fixture_collections_load():
    inputs = FixturesDataSource(FIXTURES).build_export_inputs()
    assert len(inputs.nominal_codes) == 7
    assert len(inputs.nominal_code_rules) == 8
    assert len(inputs.invoices) == 3
    assert len(inputs.purchases) == 3
    assert inputs.purchases[1].purchase_price == Decimal("240.00")
    # The incomplete rule is loaded but carries no item type.
    assert inputs.nominal_code_rules[-1].item_type is None


def test_missing_collection_files_are_empty(tmp_path):
    (tmp_path / "taxRates.json").write_text(json.dumps([{"id": "t", "code": "T1", "name": "Std", "rate": 20}]))
    inputs = FixturesDataSource(tmp_path).build_export_inputs()
    assert inputs.invoices == ()
    assert len(inputs.tax_rates) == 1


def test_non_array_collection_raises(tmp_path):
    (tmp_path / "invoices.json").write_text(json.dumps({"id": "x"}))
    with pytest.raises(ValueError):
        FixturesDataSource(tmp_path).build_export_inputs()


def test_get_data_source():
    assert isinstance(get_data_source("fixtures", data_dir=FIXTURES), FixturesDataSource)
    with pytest.raises(ValueError):
        get_data_source("fixtures")
    with pytest.raises(ValueError):
        get_data_source("firestore", data_dir=FIXTURES)


def test_invoice_export_assigns_codes_deterministically():
    inputs = get_data_source("fixtures", data_dir=FIXTURES).build_export_inputs()
    result = run_export_from_inputs(inputs, export_type="invoices", start=MARCH_START, end=MARCH_END)

    assigned = {row.row_id: row.assigned_code_id for row in result.rows}
    assert assigned == {
        "PRS91100001-li_1": "nc_tyres",
        "PRS91100001-li_2": "nc_parts",
        "PRS91100001-li_3": "nc_labour",
        "PRS91100001-li_4": "nc_mot",
        "PRS91100002-li_1": "nc_storage",
        "PRS91100002-li_2": None,
    }
    assert result.summary.unassigned_row_ids == ["PRS91100002-li_2"]

    lines = result.csv_text.splitlines()
    assert lines[1] == "PRS91100001,2025-03-03,Alex Morgan,GT19 RSR,Michelin Pilot Sport tyre,420.00,84.00,504.00,4010,Sales - Tyres"
    assert "Winter storage March" in lines[5]

    again = run_export_from_inputs(inputs, export_type="invoices", start=MARCH_START, end=MARCH_END)
    assert again.csv_text == result.csv_text


def test_purchase_export():
    inputs = FixturesDataSource(FIXTURES).build_export_inputs()
    result = run_export_from_inputs(inputs, export_type="purchases", start=MARCH_START, end=MARCH_END)
    assert [(r.row_id, r.assigned_code_id) for r in result.rows] == [
        ("PRS94500001", "nc_consumables"),
        ("PRS94500002", "nc_parts_cost"),
    ]
    assert result.csv_text.splitlines()[1] == (
        "PRS94500001,2025-03-10,N/A,,Engine oil 20L,96.50,19.30,115.80,5100,Workshop Consumables"
    )


def test_export_rounds_to_configured_quantize():
    inputs = FixturesDataSource(FIXTURES).build_export_inputs()
    result = run_export_from_inputs(
        inputs,
        export_type="purchases",
        start=MARCH_START,
        end=MARCH_END,
        config=ExportConfig(amount_quantize=Decimal("1")),
    )
    assert result.csv_text.splitlines()[1] == (
        "PRS94500001,2025-03-10,N/A,,Engine oil 20L,97,19,116,5100,Workshop Consumables"
    )
    # Rows keep exact amounts; only the rendered CSV is rounded.
    assert result.rows[0].net == Decimal("96.5")


def test_export_rejects_bad_arguments():
    with pytest.raises(ValueError):
        run_export_from_inputs(ExportInputs(), export_type="jobs", start=MARCH_START, end=MARCH_END)
    with pytest.raises(ValueError):
        run_export_from_inputs(ExportInputs(), export_type="invoices", start=MARCH_END, end=MARCH_START)


def test_cli_writes_csv_and_summary(tmp_path, monkeypatch, capsys):
    monkeypatch.delenv("WORKSHOP_OUTPUT_DIR", raising=False)
    monkeypatch.setenv("WORKSHOP_DATA_DIR", str(FIXTURES))

    rc = main(["--start", "2025-03-01", "--end", "2025-03-31", "--output-dir", str(tmp_path)])
    assert rc == 0

    out_csv = tmp_path / "invoices_export_2025-03-31.csv"
    out_summary = tmp_path / "invoices_export_2025-03-31_summary.json"
    assert out_csv.exists()
    summary = json.loads(out_summary.read_text())
    assert summary["total_rows"] == 6
    assert summary["unassigned_rows"] == 1
    assert summary["start"] == "2025-03-01"
    assert f"Wrote {out_csv}" in capsys.readouterr().out


def test_cli_requires_data_dir(tmp_path, monkeypatch):
    monkeypatch.delenv("WORKSHOP_DATA_DIR", raising=False)
    with pytest.raises(SystemExit):
        main(["--start", "2025-03-01", "--output-dir", str(tmp_path)])


def test_cli_rejects_bad_dates(tmp_path):
    with pytest.raises(SystemExit):
        main(["--data-dir", str(FIXTURES), "--start", "March", "--output-dir", str(tmp_path)])
