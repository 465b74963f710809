from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi.responses import RedirectResponse
from clinic.auth import (
    SessionUser, create_token, get_current_user, set_session_cookie, clear_session_cookie,
    verify_identity_assertion,
)
from clinic.schemas.user import LoginRequest, UserResponse
from clinic.services.storage import ClinicStorage, get_storage

router = APIRouter()


@router.post("/login", response_model=UserResponse)
async def login(data: LoginRequest, response: Response, storage: ClinicStorage = Depends(get_storage)):
    """
    Sign in with an assertion signed by the upstream identity provider.
    Body: {"assertion": "<JWT with sub, email, first_name, last_name, profile_image_url>"}
    Inserts the user on first sign-in, otherwise overwrites the profile fields it carries.
    The stored role is never changed here.
    """
    identity = verify_identity_assertion(data.assertion)
    user = await storage.upsert_user(identity.model_dump(exclude_unset=True))
    set_session_cookie(response, create_token(user))
    return UserResponse.model_validate(user)


@router.get("/logout")
async def logout():
    response = RedirectResponse(url="/", status_code=303)
    clear_session_cookie(response)
    return response


@router.get("/auth/user", response_model=UserResponse)
async def get_auth_user(
    current_user: SessionUser = Depends(get_current_user),
    storage: ClinicStorage = Depends(get_storage),
):
    user = await storage.get_user(current_user.id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return UserResponse.model_validate(user)
