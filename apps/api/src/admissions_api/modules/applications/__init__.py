"""
Admission Applications Module

Handles the admissions intake and admin back-office workflow:
1. Public submission with required-field validation
2. Admin listing, statistics and CSV export
3. Admin status changes (pending / approved / rejected)
4. Admin deletion of one or all applications

API Endpoints:
- POST /applications - Submit new application (public)
- GET /applications - List applications (admin)
- GET /applications/export - CSV download (admin)
- DELETE /applications - Clear all applications (admin)
- GET /admin/applications - List applications
- GET /admin/applications/stats - Status counters
- GET /admin/applications/export - CSV download
- GET /admin/applications/{id} - Application detail
- PATCH /admin/applications/{id}/status - Change status
- DELETE /admin/applications - Delete all
- DELETE /admin/applications/{id} - Delete one
"""

from .admin_router import router as admin_router
from .router import router

__all__ = ["router", "admin_router"]
