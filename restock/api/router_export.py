"""
Export endpoints — the full filtered set as an .xlsx download.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from restock.api.dependencies import Services, get_services
from restock.api.response_models import HistoryRangeRequest, RangeRequest
from restock import config
from restock.data.dates import to_inclusive_window
from restock.excel.exports import export_history, export_snapshot

router = APIRouter(prefix="/api/export", tags=["export"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _file(path) -> FileResponse:
    return FileResponse(path=str(path), filename=path.name, media_type=XLSX_MEDIA_TYPE)


@router.post("/snapshot")
def export_snapshot_xlsx(req: RangeRequest, services: Services = Depends(get_services)):
    result = services.snapshots.fetch_range(req.startDate, req.endDate, role=req.role)
    return _file(export_snapshot(result, config.EXPORTS_FOLDER))


@router.post("/history")
def export_history_xlsx(req: HistoryRangeRequest, services: Services = Depends(get_services)):
    window = to_inclusive_window(req.startDate, req.endDate)
    events = services.ledger.query(window, req.effective_role)
    return _file(export_history(events, config.EXPORTS_FOLDER))
