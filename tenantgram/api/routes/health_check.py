from fastapi import APIRouter

router = APIRouter(prefix="/actuator", tags=["Health"])


@router.get("/health")
async def health():
    return {"status": "UP"}
