"""Login and registration endpoints."""
import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from src.api.schemas import Credentials
from src.exceptions import AppException, AuthenticationError, require_fields
from src.services.auth import authenticate, register_user
from src.services.sheets import SheetRecordStore, get_record_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(body: Credentials, store: SheetRecordStore = Depends(get_record_store)):
    try:
        require_fields(body.as_fields(), "churchID", "username", "password")
        register_user(store, body.username, body.password, body.churchID)
    except AppException as e:
        logger.error(f"Error during registration: {e.detail}")
        return JSONResponse(status_code=e.status_code, content={"message": "Failed to register user", "error": e.detail})
    return {"message": "User registered successfully"}


@router.post("/login")
def login(body: Credentials, store: SheetRecordStore = Depends(get_record_store)):
    try:
        authenticate(store, body.username, body.password, body.churchID)
    except AuthenticationError as e:
        return JSONResponse(status_code=e.status_code, content={"success": False, "message": e.detail})
    except AppException as e:
        logger.error(f"Error during login: {e.detail}")
        return JSONResponse(status_code=e.status_code, content={"success": False, "message": "Internal server error"})
    return {"success": True, "message": "Login successful!"}
