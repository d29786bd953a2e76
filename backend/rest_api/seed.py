"""
Seed data for development and demos.
Creates a small gym: an admin, two trainers, three clients, plans,
progress history, appointments, feedback and notifications.
"""

from datetime import timedelta

from sqlalchemy import select
from sqlalchemy.orm import Session

from rest_api.models import (
    Appointment,
    Client,
    Feedback,
    Meal,
    MealPlan,
    Notification,
    ProgressRecord,
    Trainer,
    User,
    WorkoutPlan,
    compute_bmi,
    utcnow,
)
from shared.config.constants import AppointmentStatus, AppointmentType, NotificationType, Roles
from shared.config.logging import get_logger

logger = get_logger(__name__)


# Marker account: its presence means the demo data is loaded
ADMIN_EMAIL = "admin@gym.example.com"


def _user(name: str, email: str, role: str, uid: str) -> User:
    return User(name=name, email=email, role=role, firebase_uid=uid)


def seed_demo_data(db: Session) -> bool:
    """
    Seed the database with demo data.
    Idempotent: only inserts if the admin account doesn't exist.

    Returns:
        True when data was inserted.
    """
    if db.scalar(select(User.id).where(User.email == ADMIN_EMAIL)):
        logger.info("Database already seeded, skipping")
        return False

    logger.info("Seeding database")
    now = utcnow()

    # ==========================================================================
    # Users
    # ==========================================================================
    admin = _user("Gym Admin", ADMIN_EMAIL, Roles.ADMIN, "demo-admin")
    sarah = _user("Sarah Smith", "sarah.smith@gym.example.com", Roles.TRAINER, "demo-trainer-sarah")
    mike = _user("Mike Johnson", "mike.johnson@gym.example.com", Roles.TRAINER, "demo-trainer-mike")
    john = _user("John Doe", "john.doe@gym.example.com", Roles.CLIENT, "demo-client-john")
    emma = _user("Emma Wilson", "emma.wilson@gym.example.com", Roles.CLIENT, "demo-client-emma")
    jane = _user("Jane Roe", "jane.roe@gym.example.com", Roles.CLIENT, "demo-client-jane")
    db.add_all([admin, sarah, mike, john, emma, jane])
    db.flush()

    # ==========================================================================
    # Profiles
    # ==========================================================================
    sarah_profile = Trainer(
        user_id=sarah.id,
        specialty="Strength Training",
        experience_years=8,
        bio="Certified strength coach focused on weight loss.",
    )
    mike_profile = Trainer(user_id=mike.id, specialty="Yoga", experience_years=5)
    db.add_all([sarah_profile, mike_profile])
    db.flush()

    john_profile = Client(
        user_id=john.id,
        trainer_id=sarah_profile.id,
        goals="Lose 8 kg and build strength",
        activity_level="Moderately Active",
        weight=88.0,
        height=180.0,
        bmi=compute_bmi(88.0, 180.0),
    )
    emma_profile = Client(
        user_id=emma.id,
        trainer_id=mike_profile.id,
        goals="Improve flexibility",
        activity_level="Lightly Active",
        weight=61.0,
        height=165.0,
        bmi=compute_bmi(61.0, 165.0),
    )
    jane_profile = Client(user_id=jane.id, goals="Run a half marathon", activity_level="Very Active")
    db.add_all([john_profile, emma_profile, jane_profile])
    db.flush()

    # ==========================================================================
    # Plans
    # ==========================================================================
    meal_plan = MealPlan(
        user_id=john.id,
        title="High Protein Muscle Building Plan",
        category="High Protein",
        calories=2400,
        protein=180,
        fat=70,
        carbs=230,
        start_date=now.date(),
        end_date=(now + timedelta(days=28)).date(),
    )
    meal_plan.meals = [
        Meal(
            name="Protein Power Breakfast",
            type="Breakfast",
            ingredients=["eggs", "oats", "greek yogurt"],
            calories=650,
            protein=45,
        ),
        Meal(
            name="Grilled Chicken Power Lunch",
            type="Lunch",
            ingredients=["chicken breast", "brown rice", "broccoli"],
            calories=750,
            protein=60,
        ),
    ]
    workout_plan = WorkoutPlan(
        user_id=john.id,
        title="Beginner Strength Training",
        category="Strength",
        duration=45,
        difficulty="Beginner",
        exercises="Squat, Bench press, Deadlift, Row",
        sets=3,
        reps=10,
    )
    db.add_all([meal_plan, workout_plan])

    # ==========================================================================
    # Progress history (weekly)
    # ==========================================================================
    for week, weight in enumerate([90.5, 89.6, 88.9, 88.0]):
        db.add(
            ProgressRecord(
                client_id=john_profile.id,
                weight=weight,
                height=180.0,
                bmi=compute_bmi(weight, 180.0),
                progress_date=now - timedelta(weeks=3 - week),
            )
        )
    db.add(
        ProgressRecord(
            client_id=emma_profile.id,
            weight=61.0,
            height=165.0,
            bmi=compute_bmi(61.0, 165.0),
            progress_date=now - timedelta(days=2),
        )
    )

    # ==========================================================================
    # Scheduling, feedback, notifications
    # ==========================================================================
    db.add_all([
        Appointment(
            client_id=john_profile.id,
            trainer_id=sarah_profile.id,
            appointment_time=now - timedelta(days=7),
            status=AppointmentStatus.COMPLETED,
        ),
        Appointment(
            client_id=john_profile.id,
            trainer_id=sarah_profile.id,
            appointment_time=now + timedelta(days=1),
            status=AppointmentStatus.CONFIRMED,
            type=AppointmentType.VIDEO_CALL,
            meeting_link="https://meet.gym.example.com/john-sarah",
        ),
        Appointment(
            client_id=emma_profile.id,
            trainer_id=mike_profile.id,
            appointment_time=now + timedelta(days=3),
        ),
    ])
    db.add_all([
        Feedback(user_id=john.id, trainer_id=sarah_profile.id, rating=5, comments="Great coach!"),
        Feedback(user_id=emma.id, trainer_id=mike_profile.id, rating=4),
    ])
    db.add_all([
        Notification(
            user_id=john.id,
            message="Welcome! Your personalized plan is ready.",
            notification_type=NotificationType.PLAN_ASSIGNED,
        ),
        Notification(
            user_id=sarah.id,
            message="New client John Doe has been assigned to you",
        ),
    ])

    db.commit()
    logger.info("Demo data seeded", users=6, trainers=2, clients=3)
    return True
