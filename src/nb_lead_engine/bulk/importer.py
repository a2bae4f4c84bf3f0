"""Bulk import of leads from CSV and JSON files."""

import csv
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..core.models import LeadRecord

logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    """Leads read from a file plus any per-row problems."""

    leads: List[LeadRecord] = field(default_factory=list)
    errors: List[Dict[str, Any]] = field(default_factory=list)
    file_error: Optional[str] = None

    @property
    def imported(self) -> int:
        return len(self.leads)

    @property
    def ok(self) -> bool:
        return self.file_error is None


class BulkImporter:
    """Read leads from files.

    Row-level problems are collected in ``ImportResult.errors`` rather than
    raised, so one bad row never stops an import.
    """

    def __init__(self, column_mapping: Optional[Dict[str, str]] = None):
        """Initialize importer.

        Custom mapping example:
        {"Full Name": "full_name", "Email Address": "email", "Budget (GBP)": "budget"}
        """
        self.column_mapping = column_mapping or {}

    def load(self, file_path: Union[str, Path]) -> ImportResult:
        """Load a .csv or .json file, chosen by extension."""
        path = Path(file_path)
        suffix = path.suffix.lower()
        if suffix == ".csv":
            return self.load_csv(path)
        if suffix == ".json":
            return self.load_json(path)
        return ImportResult(file_error=f"Unsupported file type: {suffix or '(none)'}")

    def _map_row(self, row: Dict[str, Any]) -> Dict[str, Any]:
        if not self.column_mapping:
            return row
        mapped = dict(row)
        for source_col, lead_field in self.column_mapping.items():
            if source_col in row:
                mapped[lead_field] = row[source_col]
        return mapped

    def load_csv(self, file_path: Union[str, Path]) -> ImportResult:
        """Load leads from a CSV file with a header row."""
        result = ImportResult()
        try:
            with open(file_path, "r", encoding="utf-8-sig", newline="") as f:
                reader = csv.DictReader(f)
                for row_num, row in enumerate(reader, start=2):  # header is row 1
                    if not any((v or "").strip() for v in row.values() if isinstance(v, str)):
                        result.errors.append({"row": row_num, "error": "Empty row"})
                        continue
                    result.leads.append(LeadRecord.from_dict(self._map_row(row)))
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            logger.error(f"Error reading CSV file {file_path}: {e}")
            result.file_error = str(e)

        logger.info(f"Loaded {result.imported} leads from {file_path} ({len(result.errors)} errors)")
        return result

    def load_json(self, file_path: Union[str, Path]) -> ImportResult:
        """Load leads from JSON.

        Expects format:
        {"leads": [{"full_name": "...", "email": "...", ...}, ...]}
        or
        [{"full_name": "...", "email": "...", ...}, ...]
        """
        result = ImportResult()
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Error reading JSON file {file_path}: {e}")
            result.file_error = str(e)
            return result

        leads_data = data.get("leads", []) if isinstance(data, dict) else data
        if not isinstance(leads_data, list):
            result.file_error = "Expected a list of leads"
            return result

        for i, lead_data in enumerate(leads_data):
            if not isinstance(lead_data, dict):
                result.errors.append({"index": i, "error": f"Expected an object, got {type(lead_data).__name__}"})
                continue
            result.leads.append(LeadRecord.from_dict(self._map_row(lead_data)))

        logger.info(f"Loaded {result.imported} leads from {file_path} ({len(result.errors)} errors)")
        return result
