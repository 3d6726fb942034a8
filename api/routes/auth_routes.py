from fastapi import APIRouter, Depends, HTTPException, status

from api.bootstrap import Studio
from api.schemas.auth_schemas import AuthResponse, LoginRequest, LogoutResponse, RegisterRequest, User
from api.utils.dependencies import get_studio
from api.utils.logger import configure_logging

auth_routes = APIRouter()
logger = configure_logging()


@auth_routes.post("/register", response_model=AuthResponse)
async def register(body: RegisterRequest, studio: Studio = Depends(get_studio)) -> AuthResponse:
    if not studio.auth.register(body.name, body.email, body.password):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already exists")
    return AuthResponse(success=True, user=studio.auth.current_user)


@auth_routes.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest, studio: Studio = Depends(get_studio)) -> AuthResponse:
    if not studio.auth.login(body.email, body.password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")
    return AuthResponse(success=True, user=studio.auth.current_user)


@auth_routes.post("/logout", response_model=LogoutResponse)
async def logout(studio: Studio = Depends(get_studio)) -> LogoutResponse:
    studio.auth.logout()
    return LogoutResponse(message="Logged out successfully")


@auth_routes.get("/me", response_model=User)
async def me(studio: Studio = Depends(get_studio)) -> User:
    if not studio.auth.is_authenticated:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return studio.auth.current_user
