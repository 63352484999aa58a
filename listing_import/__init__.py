"""Pasted clinical listing importer.

Turns copy-pasted antibiotic order listings and vaccination listings into
validated, reviewable staging rows.
"""

from .models.staging_row import AbtStagingRow, RowStatus, VaxStagingRow
from .services.abt_pipeline import parse_raw_abt_order_listing
from .services.vax_pipeline import map_vax_status_selection, parse_raw_vax_list

__version__ = "0.1.0"

__all__ = [
    "AbtStagingRow",
    "VaxStagingRow",
    "RowStatus",
    "parse_raw_abt_order_listing",
    "parse_raw_vax_list",
    "map_vax_status_selection",
]
