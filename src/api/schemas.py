"""
Request and response bodies of the HTTP API.
Field names keep the camelCase used by the web client.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict


class RequestBody(BaseModel):
    # Numbers sent by the client are accepted where text is expected
    model_config = ConfigDict(coerce_numbers_to_str=True)

    def as_fields(self) -> dict:
        return self.model_dump()


class DemographicData(RequestBody):
    surname: Optional[str] = None
    firstname: Optional[str] = None
    middle: Optional[str] = None
    address: Optional[str] = None
    contactNo: Optional[str] = None
    birthday: Optional[str] = None
    gender: Optional[str] = None
    status: Optional[str] = None
    visaStatus: Optional[str] = None
    localeGroup: Optional[str] = None


class DemographicReplace(DemographicData):
    search: Optional[str] = None


class ExistenceCheck(RequestBody):
    surname: Optional[str] = None
    firstname: Optional[str] = None
    middle: Optional[str] = None
    birthday: Optional[str] = None


class SearchRequest(RequestBody):
    search: Optional[str] = None


class ReminderDateTimeUpdate(RequestBody):
    name: Optional[str] = None
    nzdtDateTime: Optional[str] = None
    dateTimeToRemindData: Optional[str] = None


class Credentials(RequestBody):
    churchID: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None


class SmsRequest(RequestBody):
    to: Optional[str] = None
    message: Optional[str] = None
    dateTime: Optional[str] = None


class OperationResult(BaseModel):
    success: bool
    message: str
    error: Optional[str] = None
