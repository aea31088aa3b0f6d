"""
Bulk CSV import and delete-all per record kind.

An import parses the whole file, validates every row against the kind's
schema, then inserts all rows in one transaction: either every row lands
or none does. Re-importing a file duplicates its rows.
"""

from typing import Optional

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from reviews_api.config.settings import settings
from reviews_api.core.exceptions import (
    DataImportError,
    MissingFileError,
    field_errors_from_pydantic,
)
from reviews_api.services.base_service import BaseService
from reviews_api.services.record_kinds import get_record_kind
from reviews_api.utils.csv_utils import CsvReader


def _describe_row_errors(row_number: int, exc: PydanticValidationError) -> str:
    problems = "; ".join(
        f"{field}: {', '.join(messages)}" if field else ", ".join(messages)
        for field, messages in field_errors_from_pydantic(exc).items()
    )
    return f"Row {row_number}: {problems}"


class CsvImportService(BaseService):
    """Load CSV uploads into a record kind and clear kinds on request."""

    def __init__(self, db_session: Session, max_upload_size: Optional[int] = None):
        super().__init__(db_session)
        self.max_upload_size = max_upload_size or settings.MAX_UPLOAD_SIZE

    def import_csv(self, kind_name: str, data: Optional[bytes], upload_name: Optional[str] = None) -> int:
        """
        Import every row of a CSV upload.

        Args:
            kind_name: Target record kind (users, products, reviews, software)
            data: Raw file bytes, or None when no file was sent
            upload_name: Client-side file name, for logging only

        Returns:
            Number of inserted records

        Raises:
            UnknownRecordKindError: If ``kind_name`` is not a record kind
            MissingFileError: If no file was sent
            DataImportError: If the file cannot be parsed, a row is
                rejected, or the bulk insert fails
        """
        kind = get_record_kind(kind_name)
        if data is None:
            raise MissingFileError()
        if len(data) > self.max_upload_size:
            raise DataImportError(
                "File too large.",
                details=f"Uploads are limited to {self.max_upload_size} bytes.",
                status_code=400,
            )

        try:
            rows = CsvReader.read_records(data)
        except ValueError as e:
            self._logger.warning("csv_parse_failed", kind=kind.name, upload_name=upload_name, error=str(e))
            raise DataImportError(details=str(e)) from e

        records = []
        for index, row in enumerate(rows):
            try:
                payload = kind.schema.model_validate(row)
            except PydanticValidationError as e:
                # Header is line 1, so data rows start at 2
                details = _describe_row_errors(index + 2, e)
                self._logger.warning("csv_row_rejected", kind=kind.name, upload_name=upload_name, error=details)
                raise DataImportError(details=details) from e
            records.append(kind.build(payload))

        try:
            inserted = kind.repository(self.db).create_many(records)
        except SQLAlchemyError as e:
            self._logger.error("csv_insert_failed", kind=kind.name, upload_name=upload_name, error=str(e))
            raise DataImportError(details=str(getattr(e, "orig", None) or e)) from e

        self._logger.info("csv_import_completed", kind=kind.name, upload_name=upload_name, inserted=inserted)
        return inserted

    def clear(self, kind_name: str) -> int:
        """
        Delete every record of a kind.

        Returns:
            Number of deleted records
        """
        kind = get_record_kind(kind_name)
        try:
            deleted = kind.repository(self.db).delete_all()
        except SQLAlchemyError as e:
            raise self._query_failed(e, "clear", f"Failed to delete {kind.name}.", kind=kind.name) from e

        self._logger.info("records_cleared", kind=kind.name, deleted=deleted)
        return deleted


__all__ = ["CsvImportService"]
