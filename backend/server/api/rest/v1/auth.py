from __future__ import annotations

from fastapi import APIRouter, Depends

from application.watchlist.gateway import WatchListGateway
from server.api.rest.dependencies import get_watch_list_gateway
from server.models.schemas import AuthResponseOut, AuthStatusOut, LoginRequest

router = APIRouter(prefix="/api/v1/auth", tags=["auth-v1"])


@router.post("/login", response_model=AuthResponseOut)
async def login(
    request: LoginRequest,
    gateway: WatchListGateway = Depends(get_watch_list_gateway),
) -> AuthResponseOut:
    result = await gateway.authenticate(request.username, request.password)
    return AuthResponseOut(**result.to_dict())


@router.post("/logout", response_model=AuthResponseOut)
async def logout(gateway: WatchListGateway = Depends(get_watch_list_gateway)) -> AuthResponseOut:
    result = await gateway.logout()
    return AuthResponseOut(**result.to_dict())


@router.get("/status", response_model=AuthStatusOut)
async def status(gateway: WatchListGateway = Depends(get_watch_list_gateway)) -> AuthStatusOut:
    session = gateway.session
    return AuthStatusOut(authenticated=session.is_authenticated, username=session.username)
