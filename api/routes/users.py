from typing import Annotated

from fastapi import APIRouter, Depends, status

from api.dependencies import get_current_user, get_user_service
from api.schemas import RegisterRequest, UserResponse
from application.services import UserService
from domain.models.currency import User

router = APIRouter(prefix='/api', tags=['users'])


@router.post(
	'/users',
	response_model=UserResponse,
	status_code=status.HTTP_201_CREATED,
	summary='Register a user',
)
async def register_user(
	payload: RegisterRequest,
	service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
	user = await service.register(payload.username, payload.password)
	return UserResponse.model_validate(user)


@router.get(
	'/users/me',
	response_model=UserResponse,
	status_code=status.HTTP_200_OK,
	summary='Get the authenticated user',
)
async def get_me(user: Annotated[User, Depends(get_current_user)]) -> UserResponse:
	return UserResponse.model_validate(user)
