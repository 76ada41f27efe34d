"""
API v1 routes.

Defines REST endpoints for the self-service registration API.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from src.api.dependencies import get_registration_service
from src.api.models import (
    ErrorResponse,
    PasswordTooShortResponse,
    RegistrationRequest,
    RegistrationResponse,
)
from src.domain.exceptions import (
    InternalRegistrationError,
    PasswordTooShort,
    RegistrationDisabled,
    UserAlreadyExists,
)
from src.domain.models import Candidate
from src.domain.registration import RegistrationService

router = APIRouter(tags=["v1"])


@router.post(
    "/register",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        403: {"model": ErrorResponse, "description": "Registrations are disabled"},
        409: {"model": ErrorResponse, "description": "A user with this email already exists"},
        422: {"model": PasswordTooShortResponse, "description": "Password too short or validation error"},
        500: {"model": ErrorResponse, "description": "Registration failed"},
    },
    summary="Register a new user",
    description="Create a user together with a personal organization. "
    "A verification link is emailed before the account is committed.",
)
def register(
    request_data: RegistrationRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> RegistrationResponse | JSONResponse:
    """
    Register a new user and their personal organization.

    - **first_name** / **last_name**: 1 to 50 characters
    - **email**: Valid email address, at most 100 characters
    - **password**: Must reach the configured minimum length

    Declared sync so it runs in the threadpool and a client disconnect
    cannot interrupt the transaction before it commits or rolls back.
    """
    candidate = Candidate(
        first_name=request_data.first_name,
        last_name=request_data.last_name,
        email=str(request_data.email),
        password=request_data.password,
    )

    try:
        registration = service.register(candidate)
    except RegistrationDisabled as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e)) from None
    except PasswordTooShort as e:
        return JSONResponse(
            status_code=422,
            content=PasswordTooShortResponse(
                detail=str(e), minimum_length=e.minimum_length
            ).model_dump(),
        )
    except UserAlreadyExists as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from None
    except InternalRegistrationError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Registration failed",
        ) from None

    return RegistrationResponse(
        organization_id=registration.organization_id,
        user_id=registration.user_id,
    )
