# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
import pytest

from listing_import.logging.init import reset_logging

VALID_ABT_LINE = (
    "CASANO, MARYANN A (200999)\t"
    "Macrobid Oral Capsule 100 MG (Nitrofurantoin Monohyd Macro) Give 1 capsule by mouth two times a day for 7 days\t"
    "Active\t1/5/2024\t\tBy mouth\tUTI"
)

SECOND_ABT_LINE = (
    "SMITH, JOHN (300111)\t"
    "Ceftriaxone Sodium Solution Reconstituted 1 G Use 1 gram intravenously every 24 hours for 5 days\t"
    "Completed\t2/1/2024\t2/5/2024\tIntravenous\tPneumonia"
)

ABT_LISTING = "\n".join(
    [
        "Antibiotic Order Listing Report",
        "Facility: Sunrise Care    Printed 3/2/2024",
        "Resident\tOrder Summary\tStatus\tStart Date\tEnd Date\tRoute\tIndication",
        "",
        VALID_ABT_LINE,
        SECOND_ABT_LINE,
    ]
)

VAX_LISTING = "\n".join(
    [
        "DOE, JANE (100123)\t3/1/2024",
        "ROE, RICHARD Q (100456)\tLeft deltoid\t3/2/2024",
    ]
)


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
output_directory: ./staging
export_format: csv
sources:
  - pattern: "abt_*.txt"
    variant: abt
  - pattern: "flu_*.txt"
    variant: vaccination
    vaccine_type: Influenza
    status_selection: Vaccinated
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "ingest.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def abt_listing() -> str:
    return ABT_LISTING


@pytest.fixture()
def vax_listing() -> str:
    return VAX_LISTING


@pytest.fixture()
def listing_files(temp_workdir: Path) -> list[Path]:
    abt = temp_workdir / "data" / "abt_march.txt"
    abt.write_text(ABT_LISTING, encoding="utf-8")
    flu = temp_workdir / "data" / "flu_clinic.txt"
    flu.write_text(VAX_LISTING, encoding="utf-8")
    return [abt, flu]
