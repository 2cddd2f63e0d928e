import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .config import ENV, LOG_JSON, LOG_LEVEL, validate_config
from .db import get_all_assets, get_asset, get_assets_by_sanctions_status, get_assets_by_type, get_db_stats, init_db, insert_asset
from .integration import can_user_bid_on_asset, prepare_for_storage, process_assets_for_display
from .logging_config import audit_log, configure_logging, set_request_id
from .models import AssetType, AuctionAsset, BidderInfo

logger = logging.getLogger(__name__)

app = FastAPI(title="Malta Government Auctions")


def _display(assets):
    return [a.to_json_dict() for a in process_assets_for_display(assets)]


@app.on_event("startup")
def _startup():
    configure_logging(LOG_LEVEL, json_format=LOG_JSON)
    init_db()
    logger.info("Starting Malta Auctions API (env=%s)", ENV)
    missing = [name for name, ok in validate_config().items() if not ok]
    if missing:
        logger.error("Missing configuration files: %s", ", ".join(missing))


@app.middleware("http")
async def _request_id(request: Request, call_next):
    rid = set_request_id(request.headers.get("x-request-id"))
    response = await call_next(request)
    response.headers["x-request-id"] = rid
    return response


@app.exception_handler(RequestValidationError)
async def _invalid_body(request: Request, exc: RequestValidationError):
    logger.warning("Rejected request to %s: %s", request.url.path, exc.errors())
    detail = "INVALID_ASSET_DATA" if request.url.path == "/api/assets" else "INVALID_REQUEST"
    return JSONResponse(status_code=400, content={"detail": detail})


@app.get("/health")
def health():
    return {"status": "ok", "config": validate_config(), "db": get_db_stats()}


@app.get("/api/assets")
def list_assets():
    return _display(get_all_assets())


@app.get("/api/assets/sanctions")
def list_assets_by_sanctions(compliant: bool = False):
    return _display(get_assets_by_sanctions_status(compliant))


@app.get("/api/assets/type/{asset_type}")
def list_assets_by_type(asset_type: str):
    try:
        kind = AssetType(asset_type)
    except ValueError:
        raise HTTPException(400, "INVALID_ASSET_TYPE")
    return _display(get_assets_by_type(kind))


@app.post("/api/assets", status_code=201)
def create_asset(asset: AuctionAsset):
    stored = prepare_for_storage(asset)
    asset_id = insert_asset(stored)
    audit_log.asset_stored(asset_id, stored.type.value, stored.legal_status.un_sanctions_compliance)
    return {"id": asset_id, "success": True}


@app.get("/api/assets/{asset_id}")
def read_asset(asset_id: int):
    asset = get_asset(asset_id)
    if not asset:
        raise HTTPException(404, "NOT_FOUND")
    return _display([asset])[0]


@app.post("/api/assets/{asset_id}/eligibility")
def asset_eligibility(asset_id: int, bidder: BidderInfo):
    asset = get_asset(asset_id)
    if not asset:
        raise HTTPException(404, "NOT_FOUND")
    return can_user_bid_on_asset(asset, bidder).model_dump(by_alias=True, exclude_none=True)
