"""
Calculation history API routes.
List, favourite, clear, export and import saved calculations.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from naijacalc.api.deps import get_history_store
from naijacalc.core.history import ExportFormat, HistoryStore
from naijacalc.schemas.schemas import HistoryImportRequest, HistoryRecordCreate

logger = logging.getLogger(__name__)

router = APIRouter()

EXPORT_MEDIA_TYPES = {
    ExportFormat.JSON: "application/json",
    ExportFormat.CSV: "text/csv",
}


@router.get("/")
def list_history(favorites_only: bool = False, history: HistoryStore = Depends(get_history_store)):
    """List saved calculations, newest first."""
    records = history.get_favorites() if favorites_only else history.get_history()
    return {"records": [r.to_dict() for r in records], "total": len(records)}


@router.post("/", status_code=201)
def add_history_record(data: HistoryRecordCreate, history: HistoryStore = Depends(get_history_store)):
    """Save a calculation computed elsewhere."""
    record = history.add_record(data.type, data.inputs, data.result)
    return record.to_dict()


@router.post("/{record_id}/favorite")
def toggle_favorite(record_id: str, history: HistoryStore = Depends(get_history_store)):
    """Flip the favourite flag on a saved calculation."""
    record = history.toggle_favorite(record_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Record {record_id} not found")
    return record.to_dict()


@router.delete("/", status_code=204)
def clear_history(history: HistoryStore = Depends(get_history_store)):
    """Remove all saved calculations."""
    history.clear()


@router.get("/export")
def export_history(format: ExportFormat = ExportFormat.JSON, history: HistoryStore = Depends(get_history_store)):
    """Export saved calculations as JSON or CSV."""
    content = history.export(format)
    return PlainTextResponse(content, media_type=EXPORT_MEDIA_TYPES[format])


@router.post("/import")
def import_history(data: HistoryImportRequest, history: HistoryStore = Depends(get_history_store)):
    """Replace saved calculations with a previous JSON export."""
    try:
        records = history.import_records(data.data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"imported": len(records)}
