"""
Admission Applications Repository

Database operations for admission applications.
All operations are async and follow the repository pattern for clean separation
of concerns between data access and business logic.

Design Principles:
- Every mutation commits its own transaction before returning
- Single-row mutations touch only that row (no full-collection rewrites)
- Status updates lock the row (SELECT ... FOR UPDATE where supported)
- Timezone-aware datetime handling (UTC)
"""

from datetime import UTC, datetime

from sqlalchemy import asc, case, delete, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Application, ApplicationStatus
from .schemas import ApplicationCreate


async def create(db: AsyncSession, data: ApplicationCreate) -> Application:
    """Create a new admission application with status 'pending'."""

    now = datetime.now(UTC)
    new_application = Application(
        # Student
        student_name=data.student_name,
        date_of_birth=data.date_of_birth,
        gender=data.gender,
        class_applying=data.class_applying,
        previous_school=data.previous_school,
        # Parents
        parent_name=data.parent_name,
        mother_name=data.mother_name,
        parent_phone=data.parent_phone,
        parent_email=data.parent_email,
        address=data.address,
        # Notes
        message=data.message,
        status=ApplicationStatus.PENDING,
        created_at=now,
        updated_at=now,
    )

    db.add(new_application)
    await db.commit()
    await db.refresh(new_application)

    return new_application


async def get_by_id(db: AsyncSession, id: int) -> Application | None:
    """Get application by ID."""
    return await db.get(Application, id)


async def list_all(
    db: AsyncSession,
    *,
    status: ApplicationStatus | None = None,
    newest_first: bool = True,
) -> list[Application]:
    """
    Get every application, optionally filtered by status.

    Results are not paginated. Ordering is by created_at, with id as the
    tie-breaker so records created in the same instant keep insertion order.
    """
    query = select(Application)

    if status:
        query = query.where(Application.status == status)

    if newest_first:
        query = query.order_by(desc(Application.created_at), desc(Application.id))
    else:
        query = query.order_by(asc(Application.created_at), asc(Application.id))

    result = await db.execute(query)
    return list(result.scalars().all())


async def update_status(
    db: AsyncSession,
    id: int,
    status: ApplicationStatus,
) -> Application | None:
    """
    Set an application's status and refresh updated_at.

    Returns:
        The updated Application, or None if it does not exist
    """
    result = await db.execute(select(Application).where(Application.id == id).with_for_update())
    application = result.scalar_one_or_none()
    if application is None:
        return None

    application.status = status
    application.updated_at = datetime.now(UTC)

    await db.commit()
    await db.refresh(application)

    return application


async def delete_by_id(db: AsyncSession, id: int) -> bool:
    """
    Delete one application.

    Returns:
        True if a row was deleted, False if no application had that id
    """
    result = await db.execute(delete(Application).where(Application.id == id))
    await db.commit()
    return result.rowcount > 0


async def delete_all(db: AsyncSession) -> int:
    """Delete every application and return how many were removed."""
    result = await db.execute(delete(Application))
    await db.commit()
    return result.rowcount or 0


async def count_by_status(db: AsyncSession) -> dict[str, int]:
    """
    Get per-status counters for the admin overview.

    Returns:
        Dict with total, pending, approved, rejected
    """
    query = select(
        func.count(Application.id).label("total"),
        func.count(case((Application.status == ApplicationStatus.PENDING, 1))).label("pending"),
        func.count(case((Application.status == ApplicationStatus.APPROVED, 1))).label(
            "approved"
        ),
        func.count(case((Application.status == ApplicationStatus.REJECTED, 1))).label(
            "rejected"
        ),
    )

    result = await db.execute(query)
    row = result.one()

    return {
        "total": row.total,
        "pending": row.pending,
        "approved": row.approved,
        "rejected": row.rejected,
    }
