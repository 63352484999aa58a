from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pandas as pd
import pytest

from listing_import.cli import main as cli_main

"""End-to-end run: pasted ABT and vaccination listings -> staging exports."""

ABT_REPORT = """Antibiotic Order Listing Report
Facility: Sunrise Care    Printed 3/2/2024
Resident\tOrder Summary\tStatus\tStart Date\tEnd Date\tRoute\tIndication

CASANO, MARYANN A (200999)\tMacrobid Oral Capsule 100 MG (Nitrofurantoin Monohyd Macro) Give 1 capsule by mouth two times a day for 7 days\tActive\t1/5/2024\t\tBy mouth\tUTI
SMITH, JOHN (300111)\tCeftriaxone Sodium Solution Reconstituted 1 G Use 1 gram intravenously every 24 hours for 5 days\tCompleted\t2/1/2024\t2/5/2024\tIntravenous\tPneumonia
LEE, ANN B. (300222)\tVancomycin HCl Capsule 125 MG Give 1 capsule by mouth four times a day for 10 days\tDiscontinued\t2/10/2024\t\tPO\tC. diff colitis
"""

FLU_REPORT = "DOE, JANE (100123)\t3/1/2024\r\nROE, RICHARD Q (100456)\tLeft deltoid\t3/2/2024\r\n"


@pytest.fixture()
def json_run(temp_workdir: Path) -> dict[str, Any]:
    (temp_workdir / "config" / "ingest.yml").write_text(
        """source_directory: ./data
output_directory: ./out
export_format: json
sources:
  - pattern: "abt_*.txt"
    variant: abt
  - pattern: "flu_*.txt"
    variant: vaccination
    vaccine_type: Influenza
    status_selection: Historical
""",
        encoding="utf-8",
    )
    (temp_workdir / "data" / "abt_feb.txt").write_text(ABT_REPORT, encoding="utf-8")
    # BOM 付き (Excel からのコピー想定)
    (temp_workdir / "data" / "flu_2024.txt").write_text(FLU_REPORT, encoding="utf-8-sig")
    return {"root": temp_workdir}


def test_full_run_writes_reviewable_exports(json_run: dict[str, Any], capsys: Any) -> None:
    root: Path = json_run["root"]
    exit_code = cli_main([])
    out = capsys.readouterr().out

    assert exit_code == 0, out
    assert "SUMMARY files=2/2 failed=0 rows=5 parsed=5 needs_review=0 error=0 duplicates=0 blocking=0" in out
    assert "ERROR" not in out
    assert not list((root / "logs").glob("errors-*.log"))

    abt = json.loads((root / "out" / "abt_feb.staging.json").read_text(encoding="utf-8"))
    assert [r["mrn"] for r in abt] == ["200999", "300111", "300222"]
    assert abt[0]["end_date"] == "2024-01-12"
    assert abt[0]["end_date_was_computed"] is True
    assert abt[1]["order_status"] == "completed"
    assert abt[2]["resident_first_name"] == "ANN"
    assert abt[2]["order_status"] == "discontinued"
    assert abt[2]["indication_category"] == "CDI"
    assert abt[2]["end_date"] == "2024-02-20"
    assert all(r["status"] == "PARSED" for r in abt)

    flu = json.loads((root / "out" / "flu_2024.staging.json").read_text(encoding="utf-8"))
    assert [r["resident_last_name"] for r in flu] == ["DOE", "ROE"]
    assert flu[0]["resident_name_raw"] == "DOE, JANE (100123)"
    assert {r["event_status"] for r in flu} == {"documented-historical"}
    assert flu[1]["duplicate_key"] == "100456|influenza|2024-03-02|documented-historical"


def test_full_run_csv_default(write_config: Path, listing_files: list[Path], temp_workdir: Path, capsys: Any) -> None:
    assert cli_main([]) == 0
    df = pd.read_csv(temp_workdir / "staging" / "flu_clinic.staging.csv", dtype=str, keep_default_na=False)
    assert list(df.columns[:6]) == ["row_number", "status", "skip", "errors", "warnings", "duplicate_key"]
    assert list(df["event_date"]) == ["2024-03-01", "2024-03-02"]
