"""
API v1 router setup
Organized into: public, customer (JWT), dashboard (JWT, business owner) and admin routes
"""
from fastapi import APIRouter

from appointly.api.v1.public import availability, businesses, appointments as guest_appointments
from appointly.api.v1.customer import appointments as customer_appointments
from appointly.api.v1.dashboard import appointments as dashboard_appointments, schedule, services
from appointly.api.v1.admin import appointments as admin_appointments

api_v1_router = APIRouter()

# ============================================================================
# PUBLIC ROUTES (No authentication required)
# ============================================================================
api_v1_router.include_router(availability.router, prefix="/public", tags=["Public"])
api_v1_router.include_router(guest_appointments.router, prefix="/public", tags=["Public"])
api_v1_router.include_router(businesses.router, prefix="/public", tags=["Public"])

# ============================================================================
# CUSTOMER ROUTES (JWT authentication, customer role)
# ============================================================================
api_v1_router.include_router(customer_appointments.router, tags=["Customer"])

# ============================================================================
# DASHBOARD ROUTES (JWT authentication, business owner role)
# ============================================================================
api_v1_router.include_router(dashboard_appointments.router, prefix="/dashboard", tags=["Dashboard"])
api_v1_router.include_router(schedule.router, prefix="/dashboard", tags=["Dashboard"])
api_v1_router.include_router(services.router, prefix="/dashboard", tags=["Dashboard"])

# ============================================================================
# ADMIN ROUTES (JWT authentication, admin role)
# ============================================================================
api_v1_router.include_router(admin_appointments.router, tags=["Admin"])


@api_v1_router.get("/", tags=["Info"])
async def api_info():
    """API information grouped by authentication type."""
    return {
        "version": "1.0",
        "authentication": {
            "public": "No authentication required",
            "customer": "JWT Bearer token with customer role",
            "dashboard": "JWT Bearer token with business_owner role",
            "admin": "JWT Bearer token with admin role"
        }
    }
