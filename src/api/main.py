"""
FastAPI backend: REST API over contacts, appointments and contact tracing.
Run with uvicorn: uvicorn api.main:app --reload
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from repo root (when run from repo root or from Docker)
for path in (
    Path(__file__).resolve().parent.parent.parent / ".env",
    Path.cwd() / ".env",
):
    if path.exists():
        load_dotenv(path)
        break

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from tracebook.application import (
    AppointmentNotFound,
    AppointmentService,
    AppointmentSummary,
    ContactData,
    ContactEdit,
    ContactService,
    ContactSummary,
    Duplicate,
    Invalid,
    Overlapping,
    PersonNotFound,
    TraceResult,
)
from tracebook.domain import AddressBookError
from tracebook.infrastructure import AddressBook, JsonAddressBookStorage

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO",
)
logger = logging.getLogger(__name__)

DEFAULT_DATA_PATH = "data/addressbook.json"


def _get_storage() -> JsonAddressBookStorage:
    path = os.environ.get("TRACEBOOK_DATA_PATH", DEFAULT_DATA_PATH).strip()
    return JsonAddressBookStorage(Path(path or DEFAULT_DATA_PATH))


def _default_region() -> str | None:
    return os.environ.get("TRACEBOOK_DEFAULT_REGION", "").strip().upper() or None


def _load_book(storage: JsonAddressBookStorage) -> AddressBook:
    """Start from the stored data; an unreadable or inconsistent file gives an empty book."""
    try:
        return AddressBook(storage.load())
    except AddressBookError:
        logger.warning(
            "Data file at %s could not be loaded. Starting with an empty address book.",
            storage.path,
            exc_info=True,
        )
        return AddressBook()


@asynccontextmanager
async def lifespan(app: FastAPI):
    storage = _get_storage()
    book = _load_book(storage)
    app.state.contacts = ContactService(
        book, storage=storage, default_region=_default_region()
    )
    app.state.appointments = AppointmentService(book, storage=storage)
    logger.info("Address book ready (%r), data file %s", book, storage.path)
    yield


app = FastAPI(title="Tracebook API", lifespan=lifespan)


def _contacts(request: Request) -> ContactService:
    return request.app.state.contacts


def _appointments(request: Request) -> AppointmentService:
    return request.app.state.appointments


def _raise_for_failure(result) -> None:
    """Map service failure results to HTTP errors."""
    if isinstance(result, Invalid):
        raise HTTPException(status_code=400, detail=result.reason)
    if isinstance(result, (Duplicate, Overlapping)):
        raise HTTPException(status_code=409, detail=result.reason)
    if isinstance(result, PersonNotFound):
        raise HTTPException(status_code=404, detail="Person not found")
    if isinstance(result, AppointmentNotFound):
        raise HTTPException(status_code=404, detail="Appointment not found")


# --- REST: health ---


@app.get("/health")
async def health():
    return {"status": "ok"}


# --- REST: persons ---


class CreatePersonBody(BaseModel):
    name: str
    phone_number: str
    email: str | None = None
    address: str | None = None
    tags: list[str] = []


class EditPersonBody(BaseModel):
    name: str | None = None
    phone_number: str | None = None
    email: str | None = None
    address: str | None = None
    tags: list[str] | None = None


class PersonItem(BaseModel):
    person_id: str
    name: str
    phone_number: str
    email: str | None = None
    address: str | None = None
    tags: list[str] = []
    created_at: str


def _person_item(s: ContactSummary) -> PersonItem:
    return PersonItem(
        person_id=s.person_id,
        name=s.name,
        phone_number=s.phone_number,
        email=s.email,
        address=s.address,
        tags=list(s.tags),
        created_at=s.created_at.isoformat(),
    )


@app.post("/persons")
async def create_person(body: CreatePersonBody, request: Request):
    result = _contacts(request).add_contact(
        ContactData(
            name=body.name,
            phone_number=body.phone_number,
            email=body.email,
            address=body.address,
            tags=tuple(body.tags),
        )
    )
    _raise_for_failure(result)
    return JSONResponse(
        content={"person_id": result.person_id, "name": result.name},
        status_code=201,
    )


@app.get("/persons")
async def list_persons(request: Request):
    return [_person_item(s) for s in _contacts(request).list_contacts()]


@app.get("/persons/search")
async def search_persons(q: str, request: Request):
    return [_person_item(s) for s in _contacts(request).find_contacts(q)]


@app.get("/persons/{person_id}")
async def get_person(person_id: str, request: Request):
    summary = _contacts(request).get_contact(person_id)
    if summary is None:
        raise HTTPException(status_code=404, detail="Person not found")
    return _person_item(summary)


@app.patch("/persons/{person_id}")
async def edit_person(person_id: str, body: EditPersonBody, request: Request):
    result = _contacts(request).edit_contact(
        person_id,
        ContactEdit(
            name=body.name,
            phone_number=body.phone_number,
            email=body.email,
            address=body.address,
            tags=tuple(body.tags) if body.tags is not None else None,
        ),
    )
    _raise_for_failure(result)
    return {"person_id": result.person_id, "name": result.name}


@app.delete("/persons/{person_id}")
async def delete_person(person_id: str, request: Request):
    result = _contacts(request).delete_contact(person_id)
    _raise_for_failure(result)
    return {
        "person_id": result.person_id,
        "name": result.name,
        "appointments_removed": result.appointments_removed,
    }


# --- REST: appointments ---


class CreateAppointmentBody(BaseModel):
    person_id: str
    time: str


class EditAppointmentBody(BaseModel):
    person_id: str | None = None
    time: str | None = None


class AppointmentItem(BaseModel):
    appointment_id: str
    person_id: str
    person_name: str
    time: str


def _appointment_item(s: AppointmentSummary) -> AppointmentItem:
    return AppointmentItem(
        appointment_id=s.appointment_id,
        person_id=s.person_id,
        person_name=s.person_name,
        time=s.time,
    )


@app.post("/appointments")
async def create_appointment(body: CreateAppointmentBody, request: Request):
    result = _appointments(request).add_appointment(body.person_id, body.time)
    _raise_for_failure(result)
    return JSONResponse(
        content={
            "appointment_id": result.appointment_id,
            "person_id": result.person_id,
            "time": result.time,
        },
        status_code=201,
    )


@app.get("/appointments")
async def list_appointments(request: Request):
    return [_appointment_item(s) for s in _appointments(request).list_appointments()]


@app.patch("/appointments/{appointment_id}")
async def edit_appointment(appointment_id: str, body: EditAppointmentBody, request: Request):
    result = _appointments(request).edit_appointment(
        appointment_id, time_text=body.time, person_id=body.person_id
    )
    _raise_for_failure(result)
    return {
        "appointment_id": result.appointment_id,
        "person_id": result.person_id,
        "time": result.time,
    }


@app.delete("/appointments/{appointment_id}")
async def delete_appointment(appointment_id: str, request: Request):
    result = _appointments(request).delete_appointment(appointment_id)
    _raise_for_failure(result)
    return {"appointment_id": result.appointment_id, "time": result.time}


# --- REST: contact tracing ---


def _trace_response(result: TraceResult) -> dict:
    return {
        "pivot": _appointment_item(result.pivot),
        "appointments": [_appointment_item(a) for a in result.appointments],
        "persons": [_person_item(p) for p in result.contacts],
    }


@app.get("/trace/{index}")
async def trace_by_index(index: int, request: Request):
    """Trace the appointment at a zero-based position in GET /appointments."""
    result = _appointments(request).trace(index)
    _raise_for_failure(result)
    return _trace_response(result)


@app.get("/appointments/{appointment_id}/trace")
async def trace_appointment(appointment_id: str, request: Request):
    result = _appointments(request).trace_appointment(appointment_id)
    _raise_for_failure(result)
    return _trace_response(result)
