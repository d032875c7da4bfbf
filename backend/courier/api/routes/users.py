"""User Routes — registration and login.

Invariants:
    - POST /users returns 201 with Location /users/{id}
    - POST /login returns 202 with the Session id and the fresh token
    - Login failures never reveal whether the username exists
"""

from fastapi import APIRouter, Depends, Response, status

from courier.api.dependencies import get_user_service
from courier.schemas.user import LoginResponse, UserCreatedResponse, UserCredentials
from courier.services.user_service import UserService

router = APIRouter(prefix="/api/v1", tags=["users"])


@router.post(
    "/users", response_model=UserCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    body: UserCredentials,
    response: Response,
    users: UserService = Depends(get_user_service),
):
    """Register a new identity."""
    identity_id = await users.create_user(body.username, body.password)
    response.headers["Location"] = f"/users/{identity_id}"
    return UserCreatedResponse(id=identity_id, username=body.username)


@router.post(
    "/login", response_model=LoginResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def login(
    body: UserCredentials, users: UserService = Depends(get_user_service),
):
    """Check credentials, issue a token valid for one day, replace any previous one."""
    session = await users.login(body.username, body.password)
    return LoginResponse(id=session.id, token=session.token)
