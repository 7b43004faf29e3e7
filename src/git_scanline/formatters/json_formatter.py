"""JSON formatter for git-scanline."""

import json
from dataclasses import asdict
from typing import Any, Dict, List

from ..pipeline import Report
from ..scoring import HotspotResult
from .base import MAX_COUPLINGS, BaseFormatter


def result_to_dict(result: HotspotResult) -> Dict[str, Any]:
    data = asdict(result)
    data["tier"] = result.tier.value
    return data


def report_to_dict(report: Report, results: List[HotspotResult]) -> Dict[str, Any]:
    return {
        "meta": asdict(report.meta),
        "results": [result_to_dict(r) for r in results],
        "couplings": [asdict(c) for c in report.couplings[:MAX_COUPLINGS]],
        "security_risks": [asdict(s) for s in report.security_risks],
    }


class JsonFormatter(BaseFormatter):
    """Render the report as a JSON document."""

    def format(self, report: Report, results: List[HotspotResult]) -> str:
        return json.dumps(report_to_dict(report, results), indent=2)
