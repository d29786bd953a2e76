"""
Resource routers - one module per /api prefix.

- users: accounts (open registration, /me, lookups)
- trainers: profiles, clients, schedule, metrics
- clients: profiles, plans, progress, activity
- progress: measurements, trends, summary
- feedbacks: trainer ratings
- meal_plans / workout_plans: plans owned by users
- appointments / consultations: scheduling
- notifications: inbox, devices, sending
- analytics: dashboard aggregations

All routes except registration require a bearer token.
"""

from fastapi import APIRouter

from .users import router as users_router, registration_router
from .trainers import router as trainers_router
from .clients import router as clients_router
from .progress import router as progress_router
from .feedbacks import router as feedbacks_router
from .meal_plans import router as meal_plans_router
from .workout_plans import router as workout_plans_router
from .appointments import router as appointments_router
from .consultations import router as consultations_router
from .notifications import router as notifications_router
from .analytics import router as analytics_router


# Create the combined resource router
router = APIRouter()

# Accounts
router.include_router(registration_router)
router.include_router(users_router)
router.include_router(trainers_router)
router.include_router(clients_router)

# Tracking
router.include_router(progress_router)
router.include_router(feedbacks_router)

# Plans
router.include_router(meal_plans_router)
router.include_router(workout_plans_router)

# Scheduling
router.include_router(appointments_router)
router.include_router(consultations_router)

# Notifications and reporting
router.include_router(notifications_router)
router.include_router(analytics_router)

__all__ = ["router"]
