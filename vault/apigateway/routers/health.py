from __future__ import annotations
from fastapi import APIRouter
from vault.core.contracts import UWFResponse
from ..settings import APP_NAME, APP_VERSION

router = APIRouter(tags=["health"])

@router.get("/", response_model=UWFResponse)
def get_status():
    return UWFResponse(ok=True, result={"name": APP_NAME, "status": "I'm okay!"})

@router.get("/health", response_model=UWFResponse)
def health():
    return UWFResponse(ok=True, result={"status": "ok", "version": APP_VERSION})
