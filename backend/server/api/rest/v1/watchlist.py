from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends

from application.watchlist.gateway import WatchListGateway
from application.watchlist.responses import DatabaseResponse
from domain.watchlist import collect_validation_errors, sanitize_text, summarize
from server.api.rest.dependencies import get_watch_list_gateway
from server.models.schemas import (
    DatabaseResponseOut,
    DeleteRequest,
    SummaryResponse,
    ValidateRequest,
    ValidateResponse,
    WatchListItemIn,
    WatchListItemOut,
    WatchListSummaryOut,
)

# Gateway outcomes (including failures) are returned as 200 with success=false;
# only malformed request bodies produce 422.
router = APIRouter(prefix="/api/v1/watchlist", tags=["watchlist-v1"])


def _to_out(result: DatabaseResponse) -> DatabaseResponseOut:
    return DatabaseResponseOut(
        success=result.success,
        message=result.message,
        rows_affected=result.rows_affected,
        data=None if result.data is None else [WatchListItemOut.from_item(i) for i in result.data],
    )


@router.get("", response_model=DatabaseResponseOut)
async def list_items(gateway: WatchListGateway = Depends(get_watch_list_gateway)) -> DatabaseResponseOut:
    return _to_out(await gateway.list_items())


@router.post("", response_model=DatabaseResponseOut)
async def insert_item(
    request: WatchListItemIn,
    gateway: WatchListGateway = Depends(get_watch_list_gateway),
) -> DatabaseResponseOut:
    return _to_out(await gateway.insert_item(request.model_dump()))


@router.post("/delete", response_model=DatabaseResponseOut)
async def delete_items(
    request: DeleteRequest,
    gateway: WatchListGateway = Depends(get_watch_list_gateway),
) -> DatabaseResponseOut:
    return _to_out(await gateway.delete_items(request.ids))


@router.post("/validate", response_model=ValidateResponse)
async def validate_item(request: ValidateRequest) -> ValidateResponse:
    """Dry-run field validation; no session needed and nothing is stored."""
    errors = collect_validation_errors(name=sanitize_text(request.name), rating=request.rating)
    return ValidateResponse(valid=not errors, errors=[e.message for e in errors])


@router.get("/summary", response_model=SummaryResponse)
async def summary(gateway: WatchListGateway = Depends(get_watch_list_gateway)) -> SummaryResponse:
    result = await gateway.list_items()
    if not result.success:
        return SummaryResponse(success=False, message=result.message)
    stats = summarize(result.data or [])
    return SummaryResponse(
        success=True,
        message=f"Summarized {stats.total} items",
        summary=WatchListSummaryOut(**asdict(stats)),
    )
