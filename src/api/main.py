"""
FastAPI backend: REST API for contacts.
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
from datetime import datetime, timezone
from typing import Annotated

from fastapi import Depends, FastAPI, Query, Request, Response
from fastapi import Path as PathParam
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from phonebook.application import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    ContactDto,
    ContactInput,
    ContactNotFound,
    ContactService,
    PagedResult,
    clamp_paging,
)
from phonebook.domain.entities import (
    AGE_MAX,
    AGE_MIN,
    NAME_MAX_LENGTH,
    PHONE_NUMBER_MAX_LENGTH,
    has_control_characters,
)
from phonebook.infrastructure import (
    DEFAULT_DATABASE_URL,
    DEFAULT_DELETION_LOG_PATH,
    FileDeletionLog,
    SqlAlchemyContactRepository,
    create_db_engine,
    create_session_factory,
    init_database,
    is_database_ready,
    seed_contacts,
)

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1/contacts"

# Ids are 32-bit identity values; anything outside that range is rejected with 400.
ContactId = Annotated[int, PathParam(ge=-(2**31), le=2**31 - 1)]


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _allowed_origins() -> list[str]:
    raw = os.environ.get("CORS_ALLOWED_ORIGINS", "")
    return [o.strip() for o in raw.split(",") if o.strip()]


def _get_engine():
    url = os.environ.get("DATABASE_URL", DEFAULT_DATABASE_URL).strip()
    return create_db_engine(url)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.engine = _get_engine()
    try:
        init_database(
            app.state.engine,
            max_retries=int(os.environ.get("DB_INIT_MAX_RETRIES", "10")),
            retry_delay=float(os.environ.get("DB_INIT_RETRY_DELAY", "5")),
        )
        session_factory = create_session_factory(app.state.engine)
        if _env_flag("SEED_DATABASE", True):
            seed_contacts(session_factory)
        deletion_log = FileDeletionLog(
            os.environ.get("DELETION_LOG_PATH", DEFAULT_DELETION_LOG_PATH).strip()
        )
        logger.info("Deletion log: %s", deletion_log.path)
        app.state.service = ContactService(
            SqlAlchemyContactRepository(session_factory), deletion_log
        )
        yield
    finally:
        app.state.engine.dispose()


app = FastAPI(title="PhoneBook API", version="1.0.0", lifespan=lifespan)

_origins = _allowed_origins()
if _origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def get_service(request: Request) -> ContactService:
    return request.app.state.service


# --- errors ---


def _error_body(message: str, status_code: int, **extra) -> dict:
    return {
        "error": message,
        **extra,
        "statusCode": status_code,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content=_error_body("Validation failed", 400, details=details),
    )


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    logger.warning("Rejected request %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=400, content=_error_body(str(exc), 400))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("An unhandled exception occurred: %s", exc, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content=_error_body("An unexpected error occurred", 500),
    )


def _not_found(contact_id: int) -> JSONResponse:
    return JSONResponse(
        status_code=404, content={"error": "Contact not found", "id": contact_id}
    )


# --- REST: health ---


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/ready")
def ready(request: Request):
    engine = getattr(request.app.state, "engine", None)
    return {"ready": engine is not None and is_database_ready(engine)}


# --- REST: contacts ---


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PhoneOut(_CamelModel):
    id: int
    phone_number: str


class ContactOut(_CamelModel):
    id: int
    name: str
    age: int
    created_at: datetime
    updated_at: datetime
    phones: list[PhoneOut]


class PagedContactsOut(_CamelModel):
    items: list[ContactOut]
    total_count: int
    page: int
    page_size: int
    total_pages: int


class ContactBody(_CamelModel):
    """Body for both create and update: the whole contact, phones included."""

    name: str = Field(max_length=NAME_MAX_LENGTH)
    age: int = Field(ge=AGE_MIN, le=AGE_MAX)
    phone_numbers: list[
        Annotated[str, Field(min_length=1, max_length=PHONE_NUMBER_MAX_LENGTH)]
    ] = Field(min_length=1)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Name is required.")
        if has_control_characters(value):
            raise ValueError("Name must not contain control characters.")
        return value

    @field_validator("phone_numbers")
    @classmethod
    def phone_numbers_not_blank(cls, value: list[str]) -> list[str]:
        if any(not n.strip() for n in value):
            raise ValueError("Phone numbers must be non-empty.")
        if any(has_control_characters(n) for n in value):
            raise ValueError("Phone numbers must not contain control characters.")
        return value

    def to_input(self) -> ContactInput:
        return ContactInput(
            name=self.name, age=self.age, phone_numbers=tuple(self.phone_numbers)
        )


def _contact_out(dto: ContactDto) -> ContactOut:
    return ContactOut(
        id=dto.id,
        name=dto.name,
        age=dto.age,
        created_at=dto.created_at,
        updated_at=dto.updated_at,
        phones=[PhoneOut(id=p.id, phone_number=p.phone_number) for p in dto.phones],
    )


def _paged_out(result: PagedResult[ContactDto]) -> PagedContactsOut:
    return PagedContactsOut(
        items=[_contact_out(c) for c in result.items],
        total_count=result.total_count,
        page=result.page,
        page_size=result.page_size,
        total_pages=result.total_pages,
    )


@app.get(API_PREFIX, response_model=PagedContactsOut)
def list_contacts(
    service: ContactService = Depends(get_service),
    page: int = Query(DEFAULT_PAGE),
    page_size: int = Query(DEFAULT_PAGE_SIZE, alias="pageSize"),
):
    page, page_size = clamp_paging(page, page_size)
    return _paged_out(service.get_all(page, page_size))


@app.get(API_PREFIX + "/search", response_model=PagedContactsOut)
def search_contacts(
    service: ContactService = Depends(get_service),
    q: str = "",
    page: int = Query(DEFAULT_PAGE),
    page_size: int = Query(DEFAULT_PAGE_SIZE, alias="pageSize"),
):
    page, page_size = clamp_paging(page, page_size)
    return _paged_out(service.search(q, page, page_size))


@app.get(API_PREFIX + "/{contact_id}", response_model=ContactOut)
def get_contact(contact_id: ContactId, service: ContactService = Depends(get_service)):
    result = service.get_by_id(contact_id)
    if isinstance(result, ContactNotFound):
        return _not_found(contact_id)
    return _contact_out(result)


@app.post(API_PREFIX, response_model=ContactOut, status_code=201)
def create_contact(
    body: ContactBody,
    response: Response,
    service: ContactService = Depends(get_service),
):
    created = service.create(body.to_input())
    response.headers["Location"] = f"{API_PREFIX}/{created.id}"
    return _contact_out(created)


@app.put(API_PREFIX + "/{contact_id}", response_model=ContactOut)
def update_contact(
    contact_id: ContactId,
    body: ContactBody,
    service: ContactService = Depends(get_service),
):
    result = service.update(contact_id, body.to_input())
    if isinstance(result, ContactNotFound):
        return _not_found(contact_id)
    return _contact_out(result)


@app.delete(API_PREFIX + "/{contact_id}", response_model=ContactOut)
def delete_contact(contact_id: ContactId, service: ContactService = Depends(get_service)):
    result = service.delete(contact_id)
    if isinstance(result, ContactNotFound):
        return _not_found(contact_id)
    return _contact_out(result)
