"""Bulk export of scoring results."""

import csv
import io
import json
import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..core.models import LeadRecord
from ..core.scorer import ScoringResult

logger = logging.getLogger(__name__)

ScoredLead = Tuple[LeadRecord, ScoringResult]

COLUMNS = [
    "id", "name", "email", "phone", "nb_score", "quality_score", "intent_score",
    "confidence_score", "classification", "priority", "call_priority",
    "is_28_day_buyer", "is_fake_lead", "low_urgency", "risk_flags",
]


def _row(lead: LeadRecord, result: ScoringResult) -> Dict[str, Any]:
    return {
        "id": lead.id or "",
        "name": lead.name,
        "email": lead.email or "",
        "phone": lead.phone or "",
        "nb_score": result.nb_score,
        "quality_score": result.quality_score.total,
        "intent_score": result.intent_score.total,
        "confidence_score": result.confidence_score.total,
        "classification": result.classification.value,
        "priority": result.priority.priority.value,
        "call_priority": result.call_priority.level,
        "is_28_day_buyer": result.is_28_day_buyer,
        "is_fake_lead": result.is_fake_lead,
        "low_urgency": result.low_urgency_flag,
        "risk_flags": "; ".join(result.risk_flags),
    }


class BulkExporter:
    """Export scored leads in various formats."""

    def to_csv(self, scored: Iterable[ScoredLead], output_path: Optional[str] = None) -> str:
        """Export to CSV.

        Returns: Path to exported file or CSV string if no path specified.
        """
        rows = [_row(lead, result) for lead, result in scored]

        output = io.StringIO()
        writer = csv.DictWriter(output, fieldnames=COLUMNS)
        writer.writeheader()
        writer.writerows(rows)
        csv_content = output.getvalue()

        if output_path:
            with open(output_path, "w", newline="", encoding="utf-8") as f:
                f.write(csv_content)
            logger.info(f"Exported {len(rows)} leads to {output_path}")
            return output_path
        return csv_content

    def to_json(
        self,
        scored: Iterable[ScoredLead],
        output_path: Optional[str] = None,
        pretty: bool = True,
    ) -> str:
        """Export full results to JSON, including score breakdowns."""
        leads: List[Dict[str, Any]] = []
        for lead, result in scored:
            entry = result.to_dict()
            entry["name"] = lead.name
            leads.append(entry)

        data = {
            "exported_at": datetime.now().isoformat(),
            "total_leads": len(leads),
            "leads": leads,
        }
        json_content = json.dumps(data, indent=2 if pretty else None)

        if output_path:
            with open(output_path, "w", encoding="utf-8") as f:
                f.write(json_content)
            logger.info(f"Exported {len(leads)} leads to {output_path}")
            return output_path
        return json_content
