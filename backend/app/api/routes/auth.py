"""Auth Routes — register, login, and the authenticated welcome route.

Invariants:
    - /register and /login need no token; both answer with a fresh session token
    - GET /login reads email/password from the query string; POST /login from the body
"""

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import get_current_user, get_user_registry
from app.infrastructure.token_service import IssuedToken
from app.models.user import User
from app.schemas.envelope import Envelope, MessageResponse
from app.schemas.user import LoginRequest, RegisterRequest, TokenData
from app.services.user_registry import UserRegistry

router = APIRouter(tags=["auth"])


def _token_envelope(message: str, issued: IssuedToken) -> Envelope[TokenData]:
    return Envelope[TokenData](
        message=message,
        data=TokenData(
            jwtoken=issued.access_token,
            token_type=issued.token_type,
            expires_in=issued.expires_in,
        ),
    )


@router.post("/register", response_model=Envelope[TokenData])
async def register(
    body: RegisterRequest, registry: UserRegistry = Depends(get_user_registry),
):
    issued = await registry.register(
        fullname=body.fullname,
        email=body.email,
        password=body.password,
        age=body.age,
        gender=body.gender,
        mobile=body.mobile,
    )
    return _token_envelope("User registered successfully!", issued)


@router.get("/login", response_model=Envelope[TokenData])
async def login_query(
    email: str = Query(..., min_length=3),
    password: str = Query(..., min_length=1, max_length=72),
    registry: UserRegistry = Depends(get_user_registry),
):
    issued = await registry.login(email, password)
    return _token_envelope("You've logged in successfully!", issued)


@router.post("/login", response_model=Envelope[TokenData])
async def login_body(
    body: LoginRequest, registry: UserRegistry = Depends(get_user_registry),
):
    issued = await registry.login(body.email, body.password)
    return _token_envelope("You've logged in successfully!", issued)


@router.get("/", response_model=MessageResponse)
async def welcome(user: User = Depends(get_current_user)):
    return MessageResponse(message="Welcome to the content")
