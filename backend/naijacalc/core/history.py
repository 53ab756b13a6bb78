"""
Calculation History
Keeps a capped, newest-first log of completed calculations with favourites,
JSON/CSV export and JSON import.

HistoryStore is the port the service layer depends on. The application
factory builds exactly one store and hands it to the routes:
  - InMemoryHistoryStore: process-local, used by default and in tests
  - JSONFileHistoryStore: persists a versioned JSON document on disk

File format (version 1):
  {"version": 1, "records": [CalculationRecord, ...]}
A bare list of records is treated as version 0 and migrated on open.
An unreadable file is renamed to <name>.corrupt and the store starts empty.
Records that fail to parse are skipped with a warning.
"""

import csv
import io
import json
import logging
import threading
import uuid
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path

from naijacalc.core.formatting import format_ngn, format_percentage

logger = logging.getLogger(__name__)

STORAGE_VERSION = 1
DEFAULT_MAX_RECORDS = 100
REQUIRED_RECORD_FIELDS = ("id", "type", "date", "inputs", "result")
CSV_HEADERS = ["Date", "Type", "Inputs", "Result", "Summary", "Favorite"]
UNKNOWN_SUMMARY = "Unknown calculation"


class CalculationType(str, Enum):
    BMI = "bmi"
    TAX = "tax"
    INFLATION = "inflation"


class ExportFormat(str, Enum):
    JSON = "json"
    CSV = "csv"


@dataclass
class CalculationRecord:
    id: str
    type: CalculationType
    date: str
    inputs: dict
    result: dict
    is_favorite: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "CalculationRecord":
        return cls(
            id=str(data["id"]),
            type=CalculationType(data["type"]),
            date=data["date"],
            inputs=dict(data["inputs"]),
            result=dict(data["result"]),
            is_favorite=bool(data.get("is_favorite", False)),
        )

    def to_dict(self) -> dict:
        data = asdict(self)
        data["type"] = self.type.value
        return data


def get_result_summary(record: CalculationRecord) -> str:
    """One-line description of a record. Results missing their usual keys get a generic label."""
    result = record.result
    try:
        if record.type == CalculationType.BMI:
            return f"BMI: {result['bmi']} ({result['category']})"
        if record.type == CalculationType.TAX:
            return f"Tax: {format_ngn(result['final_tax'], 0)} ({format_percentage(result['effective_rate'], 1)})"
        if record.type == CalculationType.INFLATION:
            return f"{format_percentage(result['total_inflation'], 1)} total inflation"
    except (KeyError, TypeError, ValueError):
        logger.debug("No summary for %s record %s", record.type.value, record.id)
    return UNKNOWN_SUMMARY


def parse_import(data: str) -> list[CalculationRecord]:
    try:
        raw = json.loads(data)
        if not isinstance(raw, list):
            raise ValueError("Invalid data format")
        records = []
        for item in raw:
            if not isinstance(item, dict) or any(item.get(key) in (None, "") for key in REQUIRED_RECORD_FIELDS):
                raise ValueError("Invalid record format")
            records.append(CalculationRecord.from_dict(item))
    except (ValueError, TypeError) as e:
        raise ValueError(f"Failed to import data: {e}") from e
    return records


class HistoryStore(ABC):
    """Port for persisting calculation history."""

    def __init__(self, max_records: int = DEFAULT_MAX_RECORDS):
        self.max_records = max_records
        self._lock = threading.Lock()

    @abstractmethod
    def _load(self) -> list[CalculationRecord]:
        ...

    @abstractmethod
    def _save(self, records: list[CalculationRecord]) -> None:
        ...

    def get_history(self) -> list[CalculationRecord]:
        with self._lock:
            return self._load()

    def get_favorites(self) -> list[CalculationRecord]:
        return [r for r in self.get_history() if r.is_favorite]

    def add_record(self, calculation_type: CalculationType, inputs: dict, result: dict) -> CalculationRecord:
        record = CalculationRecord(
            id=str(uuid.uuid4()),
            type=CalculationType(calculation_type),
            date=datetime.now(timezone.utc).isoformat(),
            inputs=inputs,
            result=result,
        )
        with self._lock:
            records = self._load()
            records.insert(0, record)
            del records[self.max_records:]
            self._save(records)
        logger.info("Recorded %s calculation %s", record.type.value, record.id)
        return record

    def toggle_favorite(self, record_id: str) -> CalculationRecord | None:
        with self._lock:
            records = self._load()
            for record in records:
                if record.id == record_id:
                    record.is_favorite = not record.is_favorite
                    self._save(records)
                    return record
        return None

    def clear(self) -> None:
        with self._lock:
            self._save([])
        logger.info("Cleared calculation history")

    def export(self, export_format: ExportFormat | str) -> str:
        try:
            export_format = ExportFormat(export_format)
        except ValueError:
            raise ValueError(f"Unsupported export format: {export_format}") from None

        records = self.get_history()

        if export_format == ExportFormat.JSON:
            return json.dumps([r.to_dict() for r in records], indent=2, ensure_ascii=False)

        if not records:
            return ""

        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_HEADERS)
        for record in records:
            writer.writerow([
                record.date,
                record.type.value,
                json.dumps(record.inputs, ensure_ascii=False),
                json.dumps(record.result, ensure_ascii=False),
                get_result_summary(record),
                "Yes" if record.is_favorite else "No",
            ])
        return buffer.getvalue()

    def import_records(self, data: str) -> list[CalculationRecord]:
        try:
            records = parse_import(data)
        except ValueError as e:
            logger.warning("Rejected history import: %s", e)
            raise

        with self._lock:
            self._save(records[: self.max_records])
        logger.info("Imported %d calculation records", len(records))
        return records


class InMemoryHistoryStore(HistoryStore):
    def __init__(self, max_records: int = DEFAULT_MAX_RECORDS):
        super().__init__(max_records)
        self._records: list[dict] = []

    def _load(self) -> list[CalculationRecord]:
        return [CalculationRecord.from_dict(r) for r in self._records]

    def _save(self, records: list[CalculationRecord]) -> None:
        self._records = [r.to_dict() for r in records]


class JSONFileHistoryStore(HistoryStore):
    def __init__(self, path: str | Path, max_records: int = DEFAULT_MAX_RECORDS):
        super().__init__(max_records)
        self.path = Path(path)
        self._migrate()

    def _read_document(self) -> dict:
        if not self.path.exists():
            return {"version": STORAGE_VERSION, "records": []}

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8") or "[]")
        except ValueError as e:
            return self._set_aside(f"not valid JSON ({e})")

        if isinstance(raw, list):
            return {"version": 0, "records": raw}
        if (
            not isinstance(raw, dict)
            or not isinstance(raw.get("version", 0), int)
            or not isinstance(raw.get("records", []), list)
        ):
            return self._set_aside("unrecognised document layout")
        return raw

    def _set_aside(self, reason: str) -> dict:
        """Move an unreadable history file out of the way and start empty."""
        corrupt_path = self.path.with_suffix(self.path.suffix + ".corrupt")
        logger.warning("Calculation history %s is unreadable: %s. Moved to %s", self.path, reason, corrupt_path)
        self.path.replace(corrupt_path)
        return {"version": STORAGE_VERSION, "records": []}

    def _parse_records(self, raw_records: list) -> list[CalculationRecord]:
        records = []
        for item in raw_records:
            try:
                records.append(CalculationRecord.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping unreadable record in calculation history %s: %r", self.path, e)
        return records

    def _migrate(self) -> None:
        document = self._read_document()
        version = document.get("version", 0)
        if version >= STORAGE_VERSION and self.path.exists():
            return

        logger.info("Migrating calculation history %s from version %s to %s", self.path, version, STORAGE_VERSION)
        records = self._parse_records(document.get("records", []))

        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._save(records)

    def _write_document(self, records: list[dict]) -> None:
        document = {"version": STORAGE_VERSION, "records": records}
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(document, indent=2, ensure_ascii=False), encoding="utf-8")
        tmp_path.replace(self.path)

    def _load(self) -> list[CalculationRecord]:
        return self._parse_records(self._read_document().get("records", []))

    def _save(self, records: list[CalculationRecord]) -> None:
        self._write_document([r.to_dict() for r in records])
