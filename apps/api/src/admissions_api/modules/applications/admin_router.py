"""
Admission Applications Admin Router

API endpoints for admins to manage admission applications.
All endpoints require a valid bearer token from POST /admin/login.

Endpoints:
- GET /admin/applications - List all applications
- GET /admin/applications/stats - Total and per-status counts
- GET /admin/applications/export - Download all applications as CSV
- GET /admin/applications/{id} - Get one application
- PATCH /admin/applications/{id}/status - Set status (pending/approved/rejected)
- DELETE /admin/applications - Delete all applications
- DELETE /admin/applications/{id} - Delete one application

Security:
- Token verified before any read or write (no side effects on 401)
- Uniform 401 for missing, malformed or invalid tokens
- Audit logging for all destructive admin actions
"""

import logging
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from admissions_api.core.auth import AdminUser, get_current_admin_user
from admissions_api.core.database import get_db
from admissions_api.core.exceptions import internal_error, to_http_exception
from admissions_api.modules.applications import service
from admissions_api.modules.applications.export import EXPORT_FILENAME, EXPORT_MEDIA_TYPE
from admissions_api.modules.applications.models import ApplicationStatus
from admissions_api.modules.applications.schemas import (
    ApplicationResponse,
    ApplicationStats,
    BulkDeleteResponse,
    StatusUpdateRequest,
    SuccessResponse,
)
from admissions_api.modules.applications.service import ApplicationServiceError

logger = logging.getLogger(__name__)

router = APIRouter()

UNAUTHORIZED_RESPONSE = {401: {"description": "Unauthorized - invalid or missing token"}}


# ============================================
# List, Stats & Export
# ============================================


@router.get(
    "",
    response_model=list[ApplicationResponse],
    summary="List Applications",
    description="""
Get every application (no pagination).

**Filters:**
- `status`: Only applications with this status

**Sorting:**
- `order`: `desc` (newest first, default) or `asc`

**Access:** Admin only
""",
    responses=UNAUTHORIZED_RESPONSE,
)
async def list_applications(
    status_filter: ApplicationStatus | None = Query(
        None,
        alias="status",
        description="Filter by application status",
    ),
    order: Literal["asc", "desc"] = Query(
        "desc",
        description="Sort direction by submission time",
    ),
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin_user),
) -> list[ApplicationResponse]:
    """List applications for the admin dashboard."""
    try:
        applications = await service.admin_list_applications(
            db,
            status=status_filter,
            newest_first=order == "desc",
        )
        logger.info(f"Admin {admin.id} listed applications: returned={len(applications)}")
        return [ApplicationResponse.model_validate(app) for app in applications]

    except ApplicationServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Error listing applications: {e}")
        raise internal_error() from e


@router.get(
    "/stats",
    response_model=ApplicationStats,
    summary="Get Application Statistics",
    description="Total number of applications and counts per status. **Access:** Admin only",
    responses=UNAUTHORIZED_RESPONSE,
)
async def get_stats(
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin_user),
) -> ApplicationStats:
    try:
        stats = await service.admin_get_stats(db)
        logger.info(f"Admin {admin.id} fetched application stats")
        return ApplicationStats(**stats)

    except ApplicationServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Error getting application stats: {e}")
        raise internal_error() from e


@router.get(
    "/export",
    summary="Export Applications as CSV",
    description="""
Download every application as a CSV file (oldest first).

Columns: id, studentName, dob, classApplying, parentName, parentPhone,
parentEmail, address, message, createdAt. Every value is quoted.

**Access:** Admin only
""",
    response_class=Response,
    responses={
        200: {"content": {EXPORT_MEDIA_TYPE: {}}, "description": "CSV document"},
        **UNAUTHORIZED_RESPONSE,
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
        logger.exception(f"Error exporting applications: {e}")
        raise internal_error() from e


# ============================================
# Bulk delete
# ============================================


@router.delete(
    "",
    response_model=BulkDeleteResponse,
    summary="Delete All Applications",
    description="Deletes every application. Cannot be undone. **Access:** Admin only",
    responses=UNAUTHORIZED_RESPONSE,
)
async def delete_all_applications(
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin_user),
) -> BulkDeleteResponse:
    try:
        deleted = await service.admin_delete_all(db)
        logger.warning(f"Admin {admin.id} deleted all applications ({deleted})")
        return BulkDeleteResponse(deleted=deleted)

    except ApplicationServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Error deleting all applications: {e}")
        raise internal_error() from e


# ============================================
# Single application
# ============================================


@router.get(
    "/{application_id}",
    response_model=ApplicationResponse,
    summary="Get Application",
    responses={
        400: {"description": "Invalid id"},
        404: {"description": "Application not found"},
        **UNAUTHORIZED_RESPONSE,
    },
)
async def get_application(
    application_id: str,
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin_user),
) -> ApplicationResponse:
    try:
        application = await service.admin_get_application(
            db, service.parse_application_id(application_id)
        )
        logger.info(f"Admin {admin.id} viewed application {application.id}")
        return ApplicationResponse.model_validate(application)

    except ApplicationServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Error getting application {application_id}: {e}")
        raise internal_error() from e


@router.patch(
    "/{application_id}/status",
    response_model=ApplicationResponse,
    summary="Update Application Status",
    description="""
Set an application's status to `pending`, `approved` or `rejected`.

Any other value is rejected with 400 and the application is left unchanged.

**Access:** Admin only
""",
    responses={
        400: {"description": "Invalid id or status"},
        404: {"description": "Application not found"},
        **UNAUTHORIZED_RESPONSE,
    },
)
async def update_application_status(
    application_id: str,
    data: StatusUpdateRequest,
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin_user),
) -> ApplicationResponse:
    try:
        application = await service.admin_update_status(
            db,
            service.parse_application_id(application_id),
            data.status,
        )
        logger.info(
            f"Admin {admin.id} set application {application.id} to {application.status.value}"
        )
        return ApplicationResponse.model_validate(application)

    except ApplicationServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Error updating application {application_id}: {e}")
        raise internal_error() from e


@router.delete(
    "/{application_id}",
    response_model=SuccessResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete Application",
    responses={
        400: {"description": "Invalid id"},
        404: {"description": "Application not found"},
        **UNAUTHORIZED_RESPONSE,
    },
)
async def delete_application(
    application_id: str,
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin_user),
) -> SuccessResponse:
    try:
        parsed_id = service.parse_application_id(application_id)
        await service.admin_delete_application(db, parsed_id)
        logger.warning(f"Admin {admin.id} deleted application {parsed_id}")
        return SuccessResponse()

    except ApplicationServiceError as e:
        raise to_http_exception(e) from e
    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Error deleting application {application_id}: {e}")
        raise internal_error() from e
