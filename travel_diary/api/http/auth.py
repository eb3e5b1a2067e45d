from fastapi import APIRouter, Depends, Request, Response, status

from travel_diary.api.deps import get_current_user, get_gate
from travel_diary.domains.identity.entities import User
from travel_diary.domains.identity.gates import IdentityGate
from travel_diary.domains.identity.schemas import MessageResponse, UserCredentials, UserResponse

router = APIRouter(tags=["authentication"])


@router.post(
    "/register",
    response_model=UserResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED
)
async def register(
    credentials: UserCredentials,
    request: Request,
    response: Response,
    gate: IdentityGate = Depends(get_gate)
):
    """Регистрация нового пользователя с немедленным входом"""
    user, token = await gate.register(credentials.username, credentials.password, request, response)
    return UserResponse(id=user.id, username=user.username, access_token=token)


@router.post("/login", response_model=UserResponse, response_model_exclude_none=True)
async def login(
    credentials: UserCredentials,
    request: Request,
    response: Response,
    gate: IdentityGate = Depends(get_gate)
):
    """Вход пользователя"""
    user, token = await gate.login(credentials.username, credentials.password, request, response)
    return UserResponse(id=user.id, username=user.username, access_token=token)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    request: Request,
    response: Response,
    gate: IdentityGate = Depends(get_gate)
):
    """Выход пользователя"""
    await gate.logout(request, response)
    return MessageResponse(message="Successfully logged out")


@router.get("/user", response_model=UserResponse, response_model_exclude_none=True)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Получение информации о текущем пользователе"""
    return UserResponse.model_validate(current_user)
