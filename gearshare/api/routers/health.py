# gearshare/api/routers/health.py
from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/")
def root():
    return {"status": "API OK"}


@router.get("/health")
def health():
    return {"status": "healthy"}
