"""User API router with CRUD operations and CSV export."""

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status
from loguru import logger

from src.users_api.api.http.deps import get_user_management_service
from src.users_api.core.exceptions import UserNotFoundError, ValidationFailedError
from src.users_api.core.services import UserManagementService
from src.users_api.core.services.user.validation import first_violation
from src.users_api.entities.user import User, UserRequest
from src.users_api.runtime.context import get_config

router = APIRouter(prefix="/api/users", tags=["users"])


def _reject_invalid(user_request: UserRequest | None) -> UserRequest:
    """Stop the request with a 400 carrying the first broken rule."""
    violation = first_violation(user_request)
    if violation is not None:
        logger.bind(field=violation.field).warning(
            "Validation error: {}", violation.message
        )
        raise HTTPException(status_code=400, detail=violation.message)
    return user_request


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
def create_user(
    user_request: UserRequest | None = Body(default=None),
    service: UserManagementService = Depends(get_user_management_service),
) -> User:
    """Create a new user; an empty role is stored as 'client'."""
    logger.info("Received user creation request")
    user_request = _reject_invalid(user_request)

    try:
        return service.create_user(user_request)
    except ValidationFailedError as e:
        raise HTTPException(status_code=400, detail=e.message) from e


@router.get("", response_model=list[User])
def list_users(
    service: UserManagementService = Depends(get_user_management_service),
) -> list[User]:
    """List all users."""
    users = service.get_all_users()
    logger.info("Listed {} users", len(users))
    return users


@router.get(
    "/report",
    response_class=Response,
    responses={200: {"content": {"text/csv": {}}, "description": "CSV report"}},
)
def generate_csv_report(
    service: UserManagementService = Depends(get_user_management_service),
) -> Response:
    """Download every user as a CSV file."""
    filename = get_config().users.report_filename
    return Response(
        content=service.generate_csv_report(),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.get("/{user_id}", response_model=User)
def get_user(
    user_id: str,
    service: UserManagementService = Depends(get_user_management_service),
) -> User:
    """Get a user by ID."""
    user = service.get_user_by_id(user_id)
    if user is None:
        logger.warning("User not found with ID: {}", user_id)
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.put("/{user_id}", response_model=User)
def update_user(
    user_id: str,
    user_request: UserRequest | None = Body(default=None),
    service: UserManagementService = Depends(get_user_management_service),
) -> User:
    """Replace every field of an existing user."""
    logger.info("Received update request for user {}", user_id)
    user_request = _reject_invalid(user_request)

    try:
        return service.update_user(user_id, user_request)
    except UserNotFoundError as e:
        logger.warning("User not found for update with ID: {}", user_id)
        raise HTTPException(status_code=404, detail=e.message) from e
    except ValidationFailedError as e:
        raise HTTPException(status_code=400, detail=e.message) from e


@router.delete(
    "/{user_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response
)
def delete_user(
    user_id: str,
    service: UserManagementService = Depends(get_user_management_service),
) -> Response:
    """Delete a user."""
    if not service.delete_user(user_id):
        logger.warning("User not found for deletion with ID: {}", user_id)
        raise HTTPException(status_code=404, detail="User not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
