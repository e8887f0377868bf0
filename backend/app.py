import logging
import os
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from sqlmodel import Session

from call_sheet import assemble
from crew import CrewRoster
from db import create_db_and_tables, engine, get_session
from errors import CallSheetError, RecordNotFound, StoreUnavailable, ValidationError
from looks import LookListManager
from productions import ProductionService
from report import generate_call_sheet_html
from schemas import (
    CallSheetDocument,
    ContactUpdate,
    CrewCreate,
    CrewResponse,
    LocationUpdate,
    LookCreate,
    LookReorderRequest,
    LookResponse,
    LookUpdate,
    NotesUpdate,
    OkResponse,
    ProductionCreate,
    ProductionRename,
    ProductionResponse,
    TimingUpdate,
    WeatherUpdate,
)
from storage import STORAGE_DIR, STORAGE_PUBLIC_URL, LocalObjectStorage, get_storage
from store import RecordStore

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database on startup."""
    create_db_and_tables()

    # Run migrations if needed
    try:
        from migrations.migrate_001_add_call_sheet_columns import migrate as migrate_001
        migrate_001(engine)
    except Exception as e:
        logger.warning(f"Migration 001 check failed (may already be applied): {str(e)}")

    try:
        from migrations.migrate_002_compact_look_order import migrate as migrate_002
        migrate_002(engine)
    except Exception as e:
        logger.error(f"Migration 002 failed: {str(e)}")

    logger.info("Database initialized")
    yield


# Create FastAPI app
app = FastAPI(title="Call Sheet API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

if STORAGE_PUBLIC_URL.startswith("/"):
    app.mount(STORAGE_PUBLIC_URL, StaticFiles(directory=STORAGE_DIR, check_dir=False), name="uploads")


def get_store(session: Session = Depends(get_session)) -> RecordStore:
    return RecordStore(session)


def http_error(e: CallSheetError) -> HTTPException:
    """Translate a domain error into the HTTP status the client sees."""
    if isinstance(e, ValidationError):
        logger.warning(f"Validation failed: {str(e)}")
        return HTTPException(status_code=400, detail=str(e))
    if isinstance(e, RecordNotFound):
        logger.info(f"Not found: {str(e)}")
        return HTTPException(status_code=404, detail=f"{e.table.capitalize()} not found")
    if isinstance(e, StoreUnavailable):
        logger.error(f"Store unavailable: {str(e)}")
        return HTTPException(status_code=503, detail="Storage temporarily unavailable, please retry")
    logger.error(f"Unhandled call sheet error: {str(e)}")
    return HTTPException(status_code=500, detail=str(e))


# Productions


@app.get("/productions", response_model=list[ProductionResponse])
def list_productions(store: RecordStore = Depends(get_store)):
    """List productions, newest first."""
    try:
        return ProductionService(store).list()
    except CallSheetError as e:
        raise http_error(e) from e


@app.post("/productions", response_model=ProductionResponse)
def create_production(request: ProductionCreate, store: RecordStore = Depends(get_store)):
    logger.info(f"Create production request: {request.name}")
    try:
        return ProductionService(store).create(request.name)
    except CallSheetError as e:
        raise http_error(e) from e


@app.get("/productions/{production_id}", response_model=ProductionResponse)
def get_production(production_id: int, store: RecordStore = Depends(get_store)):
    try:
        return ProductionService(store).get(production_id)
    except CallSheetError as e:
        raise http_error(e) from e


@app.delete("/productions/{production_id}", response_model=OkResponse)
def delete_production(production_id: int, store: RecordStore = Depends(get_store)):
    """Delete a production with its crew and looks."""
    logger.info(f"Delete production request for ID: {production_id}")
    try:
        ProductionService(store).delete(production_id)
        return OkResponse(ok=True, message="Production deleted successfully")
    except CallSheetError as e:
        raise http_error(e) from e


@app.patch("/productions/{production_id}/name", response_model=ProductionResponse)
def rename_production(production_id: int, request: ProductionRename, store: RecordStore = Depends(get_store)):
    try:
        return ProductionService(store).rename(production_id, request.name)
    except CallSheetError as e:
        raise http_error(e) from e


@app.patch("/productions/{production_id}/location", response_model=ProductionResponse)
def update_location(production_id: int, request: LocationUpdate, store: RecordStore = Depends(get_store)):
    try:
        return ProductionService(store).update_location(production_id, request)
    except CallSheetError as e:
        raise http_error(e) from e


@app.patch("/productions/{production_id}/timing", response_model=ProductionResponse)
def update_timing(production_id: int, request: TimingUpdate, store: RecordStore = Depends(get_store)):
    try:
        return ProductionService(store).update_timing(production_id, request)
    except CallSheetError as e:
        raise http_error(e) from e


@app.patch("/productions/{production_id}/contact", response_model=ProductionResponse)
def update_contact(production_id: int, request: ContactUpdate, store: RecordStore = Depends(get_store)):
    try:
        return ProductionService(store).update_contact(production_id, request)
    except CallSheetError as e:
        raise http_error(e) from e


@app.patch("/productions/{production_id}/weather", response_model=ProductionResponse)
def update_weather(production_id: int, request: WeatherUpdate, store: RecordStore = Depends(get_store)):
    try:
        return ProductionService(store).update_weather(production_id, request)
    except CallSheetError as e:
        raise http_error(e) from e


@app.post("/productions/{production_id}/weather/refresh", response_model=ProductionResponse)
def refresh_weather(production_id: int, store: RecordStore = Depends(get_store)):
    """Fill the weather snapshot for the production's city and shoot date."""
    try:
        return ProductionService(store).refresh_weather(production_id)
    except CallSheetError as e:
        raise http_error(e) from e


@app.patch("/productions/{production_id}/notes", response_model=ProductionResponse)
def update_notes(production_id: int, request: NotesUpdate, store: RecordStore = Depends(get_store)):
    try:
        return ProductionService(store).update_notes(production_id, request)
    except CallSheetError as e:
        raise http_error(e) from e


# Crew


@app.get("/productions/{production_id}/crew", response_model=list[CrewResponse])
def list_crew(production_id: int, store: RecordStore = Depends(get_store)):
    """Crew members ordered by role."""
    try:
        ProductionService(store).get(production_id)
        return CrewRoster(store).list(production_id)
    except CallSheetError as e:
        raise http_error(e) from e


@app.post("/productions/{production_id}/crew", response_model=CrewResponse)
def add_crew_member(production_id: int, request: CrewCreate, store: RecordStore = Depends(get_store)):
    logger.info(f"Add crew request for production {production_id}: {request.name} ({request.role})")
    try:
        return CrewRoster(store).add(production_id, **request.model_dump())
    except CallSheetError as e:
        raise http_error(e) from e


@app.delete("/crew/{crew_id}", response_model=OkResponse)
def remove_crew_member(crew_id: int, store: RecordStore = Depends(get_store)):
    try:
        CrewRoster(store).remove(crew_id)
        return OkResponse(ok=True, message="Crew member removed successfully")
    except CallSheetError as e:
        raise http_error(e) from e


# Looks


@app.get("/productions/{production_id}/looks", response_model=list[LookResponse])
def list_looks(production_id: int, store: RecordStore = Depends(get_store)):
    """Looks in shoot order."""
    try:
        ProductionService(store).get(production_id)
        return LookListManager(store).list(production_id)
    except CallSheetError as e:
        raise http_error(e) from e


@app.post("/productions/{production_id}/looks", response_model=LookResponse)
def append_look(production_id: int, request: LookCreate, store: RecordStore = Depends(get_store)):
    logger.info(f"Append look request for production {production_id}: {request.name}")
    try:
        return LookListManager(store).append(production_id, request.name)
    except CallSheetError as e:
        raise http_error(e) from e


@app.put("/productions/{production_id}/looks/order", response_model=list[LookResponse])
def reorder_looks(production_id: int, request: LookReorderRequest, store: RecordStore = Depends(get_store)):
    """Rewrite the shoot order from a full permutation of the production's look ids."""
    logger.info(f"Reorder request for production {production_id}: {request.look_ids}")
    try:
        return LookListManager(store).reorder(production_id, request.look_ids)
    except CallSheetError as e:
        raise http_error(e) from e


@app.patch("/looks/{look_id}", response_model=LookResponse)
def update_look(look_id: int, request: LookUpdate, store: RecordStore = Depends(get_store)):
    try:
        return LookListManager(store).update_details(look_id, **request.model_dump(exclude_unset=True))
    except CallSheetError as e:
        raise http_error(e) from e


@app.delete("/looks/{look_id}", response_model=OkResponse)
def delete_look(look_id: int, store: RecordStore = Depends(get_store)):
    logger.info(f"Delete look request for ID: {look_id}")
    try:
        LookListManager(store).delete(look_id)
        return OkResponse(ok=True, message="Look deleted successfully")
    except CallSheetError as e:
        raise http_error(e) from e


@app.post("/looks/{look_id}/image", response_model=LookResponse)
def upload_look_image(
    look_id: int,
    file: UploadFile = File(...),
    store: RecordStore = Depends(get_store),
    storage: LocalObjectStorage = Depends(get_storage),
):
    """Upload an image for a look and store its public URL."""
    logger.info(f"Image upload for look {look_id}: {file.filename}")
    try:
        data = file.file.read()
        return LookListManager(store).attach_image(look_id, file.filename or "", data, storage)
    except CallSheetError as e:
        raise http_error(e) from e


# Call sheet


def _load_call_sheet(production_id: int, store: RecordStore) -> CallSheetDocument:
    production = ProductionService(store).get(production_id)
    crew = CrewRoster(store).list(production_id)
    looks = LookListManager(store).list(production_id)
    return assemble(production, crew, looks)


@app.get("/productions/{production_id}/call-sheet", response_model=CallSheetDocument)
def get_call_sheet(production_id: int, store: RecordStore = Depends(get_store)):
    """Assemble the call sheet document for a production."""
    try:
        return _load_call_sheet(production_id, store)
    except CallSheetError as e:
        raise http_error(e) from e


@app.get("/productions/{production_id}/call-sheet.html", response_class=HTMLResponse)
def get_call_sheet_html(production_id: int, store: RecordStore = Depends(get_store)):
    """Printable call sheet page."""
    try:
        document = _load_call_sheet(production_id, store)
    except CallSheetError as e:
        raise http_error(e) from e
    return HTMLResponse(content=generate_call_sheet_html(document))


@app.get("/")
def root():
    """Root endpoint."""
    return {"message": "Call Sheet API", "docs": "/docs"}
