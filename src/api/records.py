"""Read and demographic endpoints of the Medical and Blood Pressure sheets."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from src.api.schemas import (
    DemographicData, DemographicReplace, ExistenceCheck, SearchRequest, OperationResult,
)
from src.config.config import MEDICAL_SHEET_NAME, BLOOD_PRESSURE_SHEET_NAME
from src.exceptions import AppException, FieldValidationError, RemoteServiceError
from src.services import records
from src.services.sheets import SheetRecordStore, get_record_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["records"])


def _error_response(exc: AppException, message: Optional[str] = None) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": message or exc.detail})


@router.get("/medical-data")
def get_medical_data(store: SheetRecordStore = Depends(get_record_store)):
    try:
        return store.list_all(MEDICAL_SHEET_NAME)
    except RemoteServiceError as e:
        return _error_response(e, "Failed to retrieve data from Google Sheet")


@router.get("/blood-pressure-data")
def get_blood_pressure_data(store: SheetRecordStore = Depends(get_record_store)):
    try:
        return store.list_all(BLOOD_PRESSURE_SHEET_NAME)
    except RemoteServiceError as e:
        return _error_response(e, "Failed to retrieve data from Google Sheet")


@router.get("/get-name-list")
def get_name_list(store: SheetRecordStore = Depends(get_record_store)):
    try:
        return records.patient_names(store)
    except RemoteServiceError as e:
        return _error_response(e, "Failed to fetch name list")


@router.get("/health-summary")
def get_health_summary(search: Optional[str] = None,
                       store: SheetRecordStore = Depends(get_record_store)):
    try:
        return records.health_summary(store, search)
    except RemoteServiceError as e:
        return _error_response(e, "Failed to retrieve health summary")


@router.post("/add-medical-data", response_model=OperationResult, response_model_exclude_none=True)
def add_medical_data(body: DemographicData, store: SheetRecordStore = Depends(get_record_store)):
    logger.info(f"Add medical data request for {body.surname}, {body.firstname}")
    try:
        records.add_patient(store, body.as_fields())
    except AppException as e:
        logger.error(f"Error adding medical data: {e.detail}")
        return JSONResponse(
            status_code=e.status_code,
            content={"success": False, "message": "Failed to add medical data", "error": e.detail},
        )
    return {"success": True, "message": "Medical data added successfully"}


@router.post("/update-medical-data", response_model=OperationResult, response_model_exclude_none=True)
def update_medical_data(body: DemographicReplace, store: SheetRecordStore = Depends(get_record_store)):
    if not body.search:
        return _error_response(FieldValidationError("Search term is required to identify the record"))
    try:
        records.replace_patient(store, body.search, body.as_fields())
    except RemoteServiceError as e:
        logger.error(f"Error updating medical data: {e.detail}")
        return JSONResponse(
            status_code=e.status_code,
            content={"success": False, "message": "Failed to update medical data", "error": e.detail},
        )
    except AppException as e:
        return _error_response(e)
    return {"success": True, "message": "Medical data updated successfully"}


@router.post("/check-medical-data")
def check_medical_data(body: ExistenceCheck, store: SheetRecordStore = Depends(get_record_store)):
    if not (body.surname and body.firstname and body.middle and body.birthday):
        return _error_response(FieldValidationError("Missing required fields"))
    try:
        exists = records.patient_exists(store, body.surname, body.firstname, body.middle, body.birthday)
    except RemoteServiceError as e:
        return _error_response(e, "Failed to check medical data")
    return {"exists": exists}


@router.post("/search-medical-data")
def search_medical_data(body: SearchRequest, store: SheetRecordStore = Depends(get_record_store)):
    if not body.search:
        return _error_response(FieldValidationError("Search term is required"))
    try:
        return records.search_patients(store, body.search)
    except RemoteServiceError as e:
        return _error_response(e, "Failed to search medical data")
