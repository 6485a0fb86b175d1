from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import dataclass
from datetime import date
from pathlib import Path


def _ensure_backend_on_path() -> None:
    backend_dir = Path(__file__).resolve().parents[1]
    if str(backend_dir) not in sys.path:
        sys.path.insert(0, str(backend_dir))


_ensure_backend_on_path()

from adapters.export import (  # noqa: E402
    ExportRow,
    ExportSummary,
    build_invoice_export_rows,
    build_purchase_export_rows,
    filter_rows_by_date,
    render_export_csv,
    summarize_export,
)
from common.config import ExportConfig, get_workshop_settings  # noqa: E402
from pipelines.data_source import ExportInputs, get_data_source  # noqa: E402

EXPORT_TYPES = ("invoices", "purchases")


@dataclass(frozen=True)
class ExportResult:
    export_type: str
    start: date
    end: date
    rows: list[ExportRow]
    summary: ExportSummary
    csv_text: str


def run_export_from_inputs(
    inputs: ExportInputs,
    *,
    export_type: str,
    start: date,
    end: date,
    config: ExportConfig | None = None,
) -> ExportResult:
    cfg = config or ExportConfig()
    if export_type not in EXPORT_TYPES:
        raise ValueError(f"Unknown export type '{export_type}' (expected one of {EXPORT_TYPES}).")
    if start > end:
        raise ValueError(f"Start date {start.isoformat()} is after end date {end.isoformat()}.")

    if export_type == "invoices":
        rows = build_invoice_export_rows(
            inputs.invoices,
            rules=inputs.nominal_code_rules,
            nominal_codes=inputs.nominal_codes,
            tax_rates=inputs.tax_rates,
            customers=inputs.customers,
            vehicles=inputs.vehicles,
        )
    else:
        rows = build_purchase_export_rows(
            inputs.purchases,
            rules=inputs.nominal_code_rules,
            nominal_codes=inputs.nominal_codes,
            tax_rates=inputs.tax_rates,
        )

    rows = filter_rows_by_date(rows, start, end)
    return ExportResult(
        export_type=export_type,
        start=start,
        end=end,
        rows=rows,
        summary=summarize_export(rows),
        csv_text=render_export_csv(rows, inputs.nominal_codes, quantize=cfg.amount_quantize),
    )


def _parse_iso_date(value: str, flag: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise SystemExit(f"{flag} must be an ISO date (YYYY-MM-DD), got {value!r}.") from exc


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Assign nominal codes to invoice or purchase lines and write a ledger CSV."
    )
    parser.add_argument(
        "--data-dir",
        default=None,
        help="Directory of collection JSON files (defaults to WORKSHOP_DATA_DIR).",
    )
    parser.add_argument("--type", choices=EXPORT_TYPES, default="invoices", dest="export_type")
    parser.add_argument("--start", required=True, help="First date to include (YYYY-MM-DD).")
    parser.add_argument("--end", default=None, help="Last date to include (defaults to today).")
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Output directory (defaults to WORKSHOP_OUTPUT_DIR, then the current directory).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output.")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = get_workshop_settings()
    data_dir = Path(args.data_dir).resolve() if args.data_dir else settings.data_dir
    if data_dir is None:
        raise SystemExit("A data directory is required (--data-dir or WORKSHOP_DATA_DIR).")
    output_dir = Path(args.output_dir).resolve() if args.output_dir else settings.output_dir
    if output_dir is None:
        output_dir = Path(".").resolve()
    output_dir.mkdir(parents=True, exist_ok=True)

    start = _parse_iso_date(args.start, "--start")
    end = _parse_iso_date(args.end, "--end") if args.end else date.today()

    inputs = get_data_source("fixtures", data_dir=data_dir).build_export_inputs()
    result = run_export_from_inputs(
        inputs,
        export_type=args.export_type,
        start=start,
        end=end,
        config=settings.export_config(),
    )

    base_name = f"{result.export_type}_export_{result.end.isoformat()}"
    out_csv = output_dir / f"{base_name}.csv"
    out_summary = output_dir / f"{base_name}_summary.json"
    out_csv.write_text(result.csv_text, encoding="utf-8")
    out_summary.write_text(
        json.dumps(
            {
                "export_type": result.export_type,
                "start": result.start.isoformat(),
                "end": result.end.isoformat(),
                **result.summary.model_dump(mode="json"),
            },
            indent=2,
        )
    )

    print(f"Wrote {out_csv}")
    print(f"Wrote {out_summary}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
