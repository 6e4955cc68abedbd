"""JSON exporter emitting schema-validated assertion records."""
from __future__ import annotations

import datetime as dt
import json
from typing import Any, Dict, List, Optional

from jsonschema import validate

from .base import Exporter
from .schema import JSON_SCHEMA_V1, SCHEMA_VERSION


class JsonExporter(Exporter):
    def __init__(self) -> None:
        self._records: List[Dict[str, Any]] = []

    def add_success(self, suite: str, message: str) -> None:
        self._records.append({"suite": suite, "message": message, "status": "passed"})

    def add_failure(self, suite: str, message: str, detail: Optional[str], kind: str) -> None:
        self._records.append(
            {
                "suite": suite,
                "message": message,
                "status": "failed",
                "kind": kind,
                "detail": detail,
            }
        )

    def get_serialized_report(self) -> str:
        failed = sum(1 for record in self._records if record["status"] == "failed")
        payload = {
            "schema_version": SCHEMA_VERSION,
            "generated_at": dt.datetime.now(dt.timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
            "summary": {
                "total": len(self._records),
                "passed": len(self._records) - failed,
                "failed": failed,
            },
            "cases": self._records,
        }
        validate(instance=payload, schema=JSON_SCHEMA_V1)
        return json.dumps(payload, indent=2)
