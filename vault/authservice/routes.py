from __future__ import annotations
from fastapi import APIRouter, Depends, status
from vault.core.contracts import UWFResponse
from .contracts import AuthenticatedUser, EraseRequest, EraseResult, SignInRequest, SignUpRequest
from .deps import get_account_service, get_current_user
from .service import AccountService

router = APIRouter(prefix="/auth", tags=["auth"])
erase_router = APIRouter(prefix="/erase", tags=["erase"])

@router.post("/sign-up", response_model=UWFResponse, status_code=status.HTTP_201_CREATED)
async def sign_up(req: SignUpRequest, svc: AccountService = Depends(get_account_service)):
    user = await svc.sign_up(req)
    return UWFResponse(ok=True, result=user)

@router.post("/sign-in", response_model=UWFResponse)
async def sign_in(req: SignInRequest, svc: AccountService = Depends(get_account_service)):
    token = await svc.sign_in(req)
    return UWFResponse(ok=True, result=token)

@erase_router.post("", response_model=UWFResponse)
async def erase(
    req: EraseRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    svc: AccountService = Depends(get_account_service),
):
    await svc.erase_account(user.id, req.password)
    return UWFResponse(ok=True, result=EraseResult())
