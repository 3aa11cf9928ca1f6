"""
Approval history endpoints: append one approval, query a date range.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from restock.api.dependencies import Services, get_services, page_rows
from restock.api.response_models import AddHistoryResponse, HistoryRangeRequest, HistoryResponse
from restock.data.dates import to_inclusive_window
from restock.data.ledger import TIMESTAMP_FORMAT, ApprovalEvent

router = APIRouter(prefix="/api", tags=["history"])


@router.post("/add-history", response_model=AddHistoryResponse)
def add_history(event: ApprovalEvent, services: Services = Depends(get_services)):
    ack = services.ledger.record(event)
    return AddHistoryResponse(success=True, approved_at=ack.approved_at.strftime(TIMESTAMP_FORMAT))


@router.post("/get-history-for-range", response_model=HistoryResponse, response_model_exclude_none=True)
def get_history_for_range(req: HistoryRangeRequest, services: Services = Depends(get_services)):
    """Approvals in range, most recent first."""
    window = to_inclusive_window(req.startDate, req.endDate)
    events = services.ledger.query(window, req.effective_role)
    rows, summary = page_rows([e.model_dump(mode="json") for e in events], req.page, req.pageSize)
    return HistoryResponse(data=rows, **summary)
