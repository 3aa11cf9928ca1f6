"""
Inventory snapshot endpoints: date-ranged DB query and legacy CSV upload.
"""
from __future__ import annotations

import io
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from restock.api.dependencies import Services, get_services, page_rows
from restock.api.response_models import RangeRequest, SnapshotResponse
from restock.data.snapshots import load_delimited

router = APIRouter(prefix="/api", tags=["snapshot"])


@router.post("/get-data-for-range", response_model=SnapshotResponse, response_model_exclude_none=True)
def get_data_for_range(req: RangeRequest, services: Services = Depends(get_services)):
    """Canonical inventory rows for [startDate, endDate], oldest first."""
    result = services.snapshots.fetch_range(req.startDate, req.endDate, role=req.role)
    rows, summary = page_rows(result.rows, req.page, req.pageSize)
    return SnapshotResponse(header=result.header, rows=rows, **summary)


@router.post("/snapshot/upload", response_model=SnapshotResponse)
def upload_snapshot(
    file: UploadFile = File(...),
    role: Optional[str] = Form(None),
):
    """Legacy mode: project an uploaded CSV export onto the same contract."""
    if not file.filename or not file.filename.lower().endswith(".csv"):
        raise HTTPException(400, f"Only .csv files are accepted (got '{file.filename}')")
    content = file.file.read()
    if not content.strip():
        raise HTTPException(400, "Uploaded file is empty")
    result = load_delimited(io.BytesIO(content), role=role or None)
    return SnapshotResponse(**result.to_dict())
