from fastapi import APIRouter

router = APIRouter(tags=["health"])

@router.get("/z")
def healthz():
    # Check si l'API est up (pas d'auth, pas de DB)
    return {"status": "ok"}
