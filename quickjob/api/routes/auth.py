import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from quickjob.core.auth_dependency import get_current_user_obj, get_db
from quickjob.core.redirects import dashboard_path_for_role
from quickjob.core.security import create_access_token, verify_password
from quickjob.db.models.user import User
from quickjob.schemas.auth import RedirectResponse, SignupRequest, SignupResponse, TokenResponse
from quickjob.services.user_service import create_user_profile, find_user_by_email

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


# ✅ USER SIGNUP (candidates and recruiters; admins are created by other admins)
@router.post("/signup", status_code=status.HTTP_201_CREATED, response_model=SignupResponse)
def signup(data: SignupRequest, db: Session = Depends(get_db)):
    fields = data.model_dump(exclude={"email", "password", "role"})
    try:
        user = create_user_profile(db, email=data.email, password=data.password, role=data.role, **fields)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    return {
        "message": "User created successfully",
        "user_id": user.id,
        "role": user.role,
        "redirect_to": dashboard_path_for_role(user.role),
    }


# ✅ OAUTH2 LOGIN FOR SWAGGER + JWT
@router.post("/login", response_model=TokenResponse)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    # Swagger sends "username", but we treat it as email
    user = find_user_by_email(db, form_data.username)

    if not user or not verify_password(form_data.password, user.password_hash):
        logger.info("Failed login attempt")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    token = create_access_token({"sub": user.email})

    return {
        "access_token": token,
        "token_type": "bearer",
        "role": user.role,
        "redirect_to": dashboard_path_for_role(user.role),
    }


@router.get("/redirect", response_model=RedirectResponse)
def role_redirect(user: User = Depends(get_current_user_obj)):
    """Dashboard the frontend should land on for the signed-in user."""
    return {"role": user.role, "redirect_to": dashboard_path_for_role(user.role)}
