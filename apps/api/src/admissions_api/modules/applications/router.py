"""
Admission Applications Router

Public intake endpoint used by the admissions form.

Endpoints:
- POST /applications - Submit a new admission application (public)
- GET /applications - List all applications (admin token required)
- GET /applications/export - Download all applications as CSV (admin token required)
- DELETE /applications - Clear all applications (admin token required)
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from admissions_api.core.auth import AdminUser, get_current_admin_user
from admissions_api.core.database import get_db
from admissions_api.core.exceptions import internal_error, to_http_exception
from admissions_api.modules.applications import service
from admissions_api.modules.applications.export import EXPORT_FILENAME, EXPORT_MEDIA_TYPE
from admissions_api.modules.applications.schemas import (
    ApplicationCreate,
    ApplicationResponse,
    ApplicationSubmitResponse,
    BulkDeleteResponse,
)
from admissions_api.modules.applications.service import (
    ApplicationServiceError,
    InvalidFieldError,
    MissingFieldError,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=ApplicationSubmitResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit Admission Application",
    description="""
Submit a new admission application.

**Required fields:** studentName, dateOfBirth (or dob), classApplying,
parentName (or fatherName), parentPhone, parentEmail.

**Optional fields:** gender, motherName, address, previousSchool, message.

The application is stored with status `pending`. Repeated identical
submissions are stored as separate applications.
""",
    responses={
        201: {
            "description": "Application stored",
            "model": ApplicationSubmitResponse,
        },
        400: {
            "description": "A required field is missing or a value is invalid",
            "content": {
                "application/json": {
                    "example": {"error": "parentEmail is required", "code": "MISSING_FIELD"}
                }
            },
        },
    },
)
async def submit_application(
    data: ApplicationCreate | None = None,
    db: AsyncSession = Depends(get_db),
) -> ApplicationSubmitResponse:
    """
    Submit a new admission application.

    Args:
        data: Form data (an absent body is treated as an empty form)
        db: Database session (injected)

    Returns:
        success flag and the new application id
    """
    try:
        return await service.submit_application(db, data or ApplicationCreate())

    except (MissingFieldError, InvalidFieldError) as e:
        raise to_http_exception(e) from e
    except ApplicationServiceError as e:
        logger.error(f"Application service error: {e.message}")
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Unexpected error submitting application: {e}")
        raise internal_error() from e


@router.delete(
    "",
    response_model=BulkDeleteResponse,
    summary="Clear All Applications",
    description="Deletes every application. Cannot be undone. **Access:** admin only.",
    responses={401: {"description": "Unauthorized - invalid or missing token"}},
)
async def clear_applications(
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin_user),
) -> BulkDeleteResponse:
    """Delete every application (same behavior as DELETE /admin/applications)."""
    try:
        deleted = await service.admin_delete_all(db)
        logger.warning(f"Admin {admin.id} cleared all applications")
        return BulkDeleteResponse(deleted=deleted)

    except ApplicationServiceError as e:
        raise to_http_exception(e) from e
    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error clearing applications: {e}")
        raise internal_error() from e


@router.get(
    "",
    response_model=list[ApplicationResponse],
    summary="List Applications",
    description="Every application, newest first. **Access:** admin only.",
    responses={401: {"description": "Unauthorized - invalid or missing token"}},
)
async def list_applications(
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin_user),
) -> list[ApplicationResponse]:
    """Same listing as GET /admin/applications without filters."""
    try:
        applications = await service.admin_list_applications(db)
        logger.info(f"Admin {admin.id} listed applications: returned={len(applications)}")
        return [ApplicationResponse.model_validate(app) for app in applications]

    except ApplicationServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Unexpected error listing applications: {e}")
        raise internal_error() from e


@router.get(
    "/export",
    summary="Export Applications as CSV",
    description="Same CSV as GET /admin/applications/export. **Access:** admin only.",
    response_class=Response,
    responses={
        200: {"content": {EXPORT_MEDIA_TYPE: {}}, "description": "CSV document"},
        401: {"description": "Unauthorized - invalid or missing token"},
    },
)
async def export_applications(
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin_user),
) -> Response:
    try:
        csv_text = await service.admin_export_csv(db)
        logger.info(f"Admin {admin.id} exported applications")
        return Response(
            content=csv_text,
            media_type=EXPORT_MEDIA_TYPE,
            headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
        )

    except ApplicationServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Unexpected error exporting applications: {e}")
        raise internal_error() from e
