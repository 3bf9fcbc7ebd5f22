"""
FastAPI backend: contact map REST API.
Run with uvicorn: uvicorn api.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import Depends, FastAPI, Header, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from friendmap.application import (
    BatchSuperseded,
    ContactAdded,
    ContactFormData,
    ContactMapService,
    Duplicate,
    Invalid,
    NoFeedConfigured,
)
from friendmap.domain import Bounds, Contact, ContactStatus, Viewport
from friendmap.infrastructure import (
    AccessGate,
    CachingGeocoder,
    CsvSheetFeed,
    HttpContactWriteBack,
    InMemoryContactRepository,
    NominatimGeocoder,
    Settings,
    load_env_file,
    load_settings,
)

# Load .env from repo root (when run from repo root or from Docker)
load_env_file(
    Path(__file__).resolve().parent.parent.parent / ".env",
    Path.cwd() / ".env",
)

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
logger = logging.getLogger(__name__)

ACCESS_KEY_HEADER = "X-Access-Key"


def build_service(settings: Settings) -> tuple[ContactMapService, list]:
    """Wire adapters from settings. Returns the service and the adapters to close on shutdown."""
    geocoder = NominatimGeocoder(
        settings.geocoder_url,
        user_agent=settings.geocoder_user_agent,
        timeout=settings.http_timeout,
    )
    closeables: list = [geocoder]
    resolver = CachingGeocoder(geocoder) if settings.geocode_cache else geocoder

    feed = None
    if settings.sheet_csv_url:
        feed = CsvSheetFeed(settings.sheet_csv_url, timeout=settings.http_timeout)
        closeables.append(feed)
    write_back = None
    if settings.write_back_url:
        write_back = HttpContactWriteBack(
            settings.write_back_url, timeout=settings.http_timeout
        )
        closeables.append(write_back)

    service = ContactMapService(
        InMemoryContactRepository(default_phone_region=settings.default_phone_region),
        resolver,
        feed=feed,
        write_back=write_back,
    )
    return service, closeables


def _get_settings(app: FastAPI) -> Settings:
    if getattr(app.state, "settings", None) is None:
        app.state.settings = load_settings()
    return app.state.settings


def get_service(request: Request) -> ContactMapService:
    app = request.app
    if getattr(app.state, "service", None) is None:
        app.state.service, app.state.closeables = build_service(_get_settings(app))
    return app.state.service


def get_gate(request: Request) -> AccessGate:
    app = request.app
    if getattr(app.state, "gate", None) is None:
        app.state.gate = AccessGate(_get_settings(app).access_key)
    return app.state.gate


def require_access(
    request: Request,
    x_access_key: str | None = Header(None, alias=ACCESS_KEY_HEADER),
) -> None:
    if not get_gate(request).check(x_access_key):
        raise HTTPException(status_code=401, detail="Incorrect Key")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = _get_settings(app)
    app.state.service, app.state.closeables = build_service(settings)
    app.state.gate = AccessGate(settings.access_key)
    if not app.state.gate.enabled:
        logger.warning("FRIENDMAP_ACCESS_KEY not set; access gate is disabled")
    try:
        if app.state.service.has_feed:
            try:
                await app.state.service.reload()
            except Exception:
                logger.exception("Initial contact feed load failed; starting empty")
        yield
    finally:
        if getattr(app.state, "service", None) is not None:
            await app.state.service.drain_write_backs()
        for closeable in getattr(app.state, "closeables", None) or []:
            await closeable.aclose()


app = FastAPI(title="Friendmap API", lifespan=lifespan)


# --- REST: health ---


@app.get("/health")
def health():
    return {"status": "ok"}


# --- REST: access gate ---


class AccessBody(BaseModel):
    key: str


@app.post("/access")
def check_access(body: AccessBody, request: Request):
    if not get_gate(request).check(body.key):
        raise HTTPException(status_code=401, detail="Incorrect Key")
    return {"granted": True}


# --- REST: contacts ---


class ContactBody(BaseModel):
    name: str
    address: str | None = None
    origin: str | None = None
    profession: str | None = None
    office_location: str | None = None
    birth_date: str | None = None
    phone_number: str | None = None
    email: str | None = None
    status: ContactStatus | None = None
    lat: float | None = None
    lng: float | None = None


class ContactItem(BaseModel):
    name: str
    address: str | None = None
    origin: str | None = None
    profession: str | None = None
    office_location: str | None = None
    birth_date: str | None = None
    phone_number: str | None = None
    email: str | None = None
    status: str | None = None
    lat: float
    lng: float
    source: str


class BoundsItem(BaseModel):
    south: float
    west: float
    north: float
    east: float


class ViewportItem(BaseModel):
    center: tuple[float, float]
    zoom: int | None = None
    bounds: BoundsItem | None = None
    padding_px: int = 0
    fallback: bool


class MapViewResponse(BaseModel):
    contacts: list[ContactItem]
    viewport: ViewportItem
    shown: int
    total: int


def _contact_item(c: Contact) -> ContactItem:
    return ContactItem(
        name=c.name,
        address=c.address,
        origin=c.origin,
        profession=c.profession,
        office_location=c.office_location,
        birth_date=c.birth_date,
        phone_number=c.phone_number,
        email=c.email,
        status=c.status.value if c.status else None,
        lat=c.latitude,
        lng=c.longitude,
        source=c.source.value,
    )


def _bounds_item(b: Bounds | None) -> BoundsItem | None:
    if b is None:
        return None
    return BoundsItem(south=b.south, west=b.west, north=b.north, east=b.east)


def _viewport_item(v: Viewport) -> ViewportItem:
    return ViewportItem(
        center=(v.center.lat, v.center.lng),
        zoom=v.zoom,
        bounds=_bounds_item(v.bounds),
        padding_px=v.padding_px,
        fallback=v.is_fallback,
    )


@app.get("/contacts", dependencies=[Depends(require_access)])
def list_contacts(
    q: str = "",
    service: ContactMapService = Depends(get_service),
) -> MapViewResponse:
    view = service.view(q)
    return MapViewResponse(
        contacts=[_contact_item(c) for c in view.contacts],
        viewport=_viewport_item(view.viewport),
        shown=view.shown,
        total=view.total,
    )


@app.post("/contacts", dependencies=[Depends(require_access)])
async def create_contact(
    body: ContactBody,
    service: ContactMapService = Depends(get_service),
):
    form = ContactFormData(**body.model_dump())
    result = await service.submit_contact(form)
    if isinstance(result, Invalid):
        raise HTTPException(status_code=400, detail=result.reason)
    if isinstance(result, Duplicate):
        raise HTTPException(status_code=409, detail="Contact already exists")
    if not isinstance(result, ContactAdded):
        raise HTTPException(status_code=400, detail="Invalid contact")
    return JSONResponse(
        content=_contact_item(result.contact).model_dump(),
        status_code=201,
    )


@app.post("/contacts/reload", dependencies=[Depends(require_access)])
async def reload_contacts(service: ContactMapService = Depends(get_service)):
    try:
        result = await service.reload()
    except NoFeedConfigured as e:
        raise HTTPException(status_code=503, detail="No contact feed configured") from e
    except Exception as e:
        logger.warning("Contact feed reload failed: %s", e)
        raise HTTPException(status_code=502, detail="Contact feed unavailable") from e
    if isinstance(result, BatchSuperseded):
        raise HTTPException(status_code=409, detail="Superseded by a newer reload")
    return {
        "batch_id": result.batch_id,
        "loaded": result.loaded,
        "dropped": len(result.dropped),
    }


@app.get("/contacts/dropped", dependencies=[Depends(require_access)])
def dropped_contacts(service: ContactMapService = Depends(get_service)):
    return [
        {"index": d.index, "name": d.name, "address": d.address, "reason": d.reason}
        for d in service.dropped_records()
    ]


@app.get("/geocode", dependencies=[Depends(require_access)])
async def geocode(address: str, service: ContactMapService = Depends(get_service)):
    coordinate = await service.geocode(address)
    if coordinate is None:
        raise HTTPException(status_code=404, detail="Address not found")
    return {"lat": coordinate.lat, "lng": coordinate.lng}
