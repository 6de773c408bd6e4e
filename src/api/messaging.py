"""SMS endpoint."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from src.api.schemas import SmsRequest
from src.exceptions import AppException, FieldValidationError, RemoteServiceError
from src.services.sms import SmsSender, build_reminder_body, get_sms_sender

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["messaging"])


@router.post("/send-sms")
def send_sms(body: SmsRequest, sender: Optional[SmsSender] = Depends(get_sms_sender)):
    try:
        if not body.to or not body.message:
            raise FieldValidationError('Missing "to" or "message" in request body.')
        if sender is None:
            raise RemoteServiceError("SMS provider is not configured")
        sid = sender.send(body.to, build_reminder_body(body.message, body.dateTime))
    except AppException as e:
        return JSONResponse(status_code=e.status_code, content={"error": e.detail})
    return {"success": True, "sid": sid}
