from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile
from starlette.concurrency import run_in_threadpool

from reviews_api.api import deps
from reviews_api.schemas.common import ImportResponse, MessageResponse
from reviews_api.services.import_service import CsvImportService

router = APIRouter(tags=["Bulk Data"])


@router.post("/upload-csv/{kind}", response_model=ImportResponse)
async def upload_csv(
    kind: str,
    file: Optional[UploadFile] = File(None),
    service: CsvImportService = Depends(deps.get_import_service),
) -> ImportResponse:
    """Bulk-import a CSV file into ``kind`` (users, products, reviews, software)."""
    # One byte past the limit is enough to reject an oversized upload
    data = await file.read(service.max_upload_size + 1) if file is not None else None
    upload_name = file.filename if file is not None else None
    inserted = await run_in_threadpool(service.import_csv, kind, data, upload_name)
    return ImportResponse(message=f"Imported {inserted} {kind} successfully.", inserted=inserted)


@router.delete("/clear/{kind}", response_model=MessageResponse)
def clear_kind(
    kind: str,
    service: CsvImportService = Depends(deps.get_import_service),
) -> MessageResponse:
    service.clear(kind)
    return MessageResponse(message=f"All {kind} have been deleted.")
