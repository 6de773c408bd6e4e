"""Per-field update endpoints of the Medical sheet.

Every tracked field gets its own POST /api/update-<slug> route, all built from
FIELD_UPDATE_ROUTES and sharing one handler body.
"""
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from src.api.schemas import OperationResult, ReminderDateTimeUpdate
from src.config.config import FIELD_UPDATE_ROUTES
from src.exceptions import AppException, FieldValidationError, require_fields
from src.services.records import update_patient_field, update_reminder_datetime
from src.services.sheets import SheetRecordStore, get_record_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["fields"])


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


def _failure_response(label: str, exc: AppException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": f"Failed to update {label.lower()}", "error": exc.detail},
    )


def _make_field_handler(request_field: str, field_key: str, label: str):
    data_key = f"{request_field}Data"

    def update_field(payload: Optional[Dict[str, Any]] = Body(default=None),
                     store: SheetRecordStore = Depends(get_record_store)):
        payload = payload or {}
        try:
            require_fields(payload, "name", data_key)
            update_patient_field(store, _as_text(payload["name"]), field_key, _as_text(payload[data_key]))
        except AppException as e:
            logger.error(f"Error updating {label.lower()}: {e.detail}")
            return _failure_response(label, e)
        return {"success": True, "message": f"{label} updated successfully"}

    update_field.__name__ = f"update_{field_key}"
    return update_field


for _slug, (_request_field, _field_key, _label) in FIELD_UPDATE_ROUTES.items():
    router.add_api_route(
        f"/update-{_slug}",
        _make_field_handler(_request_field, _field_key, _label),
        methods=["POST"],
        response_model=OperationResult,
        response_model_exclude_none=True,
        summary=f"Append to the {_label} history of a patient",
    )


@router.post("/update-date-time-to-remind", response_model=OperationResult, response_model_exclude_none=True)
def update_date_time_to_remind(body: ReminderDateTimeUpdate, store: SheetRecordStore = Depends(get_record_store)):
    """Appends the local (AA) and UTC (AB) reminder times of a patient."""
    label = "Date and Time to Remind"
    try:
        if not body.name:
            raise FieldValidationError("Name is required in the request body")
        update_reminder_datetime(store, body.name, body.nzdtDateTime, body.dateTimeToRemindData)
    except AppException as e:
        logger.error(f"Error updating date and time to remind: {e.detail}")
        return _failure_response(label, e)
    return {"success": True, "message": f"{label} updated successfully"}
