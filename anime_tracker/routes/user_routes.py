from fastapi import APIRouter, Depends

from anime_tracker.schemas.user_schemas import Identity, ProfileOut
from anime_tracker.utils.token_utils import get_current_identity

router = APIRouter(prefix="/api/user", tags=["user"])


@router.get("/profile", response_model=ProfileOut)
async def get_profile(caller: Identity = Depends(get_current_identity)):
    return {"user": caller}
