"""
seed.py — données de démo (utilisateurs + tâches).

Usage:
- python -m taskapi.seed            → remplit la base si elle ne contient aucun utilisateur
- python -m taskapi.seed --create   → crée d'abord les tables manquantes

Au démarrage de l'API, le seed est lancé si SEED_DATABASE=true.
"""

import argparse
import logging
from datetime import datetime, timedelta
from sqlalchemy.orm import Session

from taskapi.core.database import Base, SessionLocal, engine
from taskapi.models.task import Task, TaskPriority, TaskStatus
from taskapi.models.user import User

logger = logging.getLogger(__name__)

SEED_USERS = [
    # username, email, password, first_name, last_name, role
    ("rachit", "rachit@taskify.com", "Admin@123", "Rachit", "Srivastava", "Admin"),
    ("testuser", "test@taskify.com", "Test@123", "Test", "User", "User"),
    ("demo", "demo@taskify.com", "Demo@123", "Demo", "User", "User"),
]

# title, description, due dans N jours, priorité, statut
SEED_TASKS = {
    "rachit": [
        ("Finalize API documentation", "Review the OpenAPI output before release", 3, TaskPriority.HIGH, TaskStatus.PENDING),
        ("Set up CI pipeline", "Run the test suite on every push", 7, TaskPriority.MEDIUM, TaskStatus.PENDING),
        ("Plan sprint review", None, 10, TaskPriority.LOW, TaskStatus.PENDING),
        ("Configure JWT settings", "Issuer, audience and key per environment", -2, TaskPriority.HIGH, TaskStatus.COMPLETED),
        ("Design database schema", "Users and tasks tables", -5, TaskPriority.MEDIUM, TaskStatus.COMPLETED),
        ("Create project repository", None, -8, TaskPriority.LOW, TaskStatus.COMPLETED),
    ],
    "testuser": [
        ("Write integration tests", "Cover auth and task endpoints", 2, TaskPriority.HIGH, TaskStatus.PENDING),
        ("Test pagination edge cases", None, 5, TaskPriority.MEDIUM, TaskStatus.PENDING),
        ("Verify login flow", "Username and email login", -1, TaskPriority.HIGH, TaskStatus.COMPLETED),
        ("Report filter bug", None, -3, TaskPriority.LOW, TaskStatus.COMPLETED),
    ],
    "demo": [
        ("Buy groceries", "Milk, eggs, bread", 1, TaskPriority.MEDIUM, TaskStatus.PENDING),
        ("Book dentist appointment", None, 14, TaskPriority.LOW, TaskStatus.PENDING),
        ("Pay electricity bill", None, -4, TaskPriority.HIGH, TaskStatus.COMPLETED),
        ("Call the bank", "Ask about the new card", -6, TaskPriority.MEDIUM, TaskStatus.COMPLETED),
    ],
}


def seed_database(db: Session) -> bool:
    """Remplit une base vide. Retourne False si des utilisateurs existent déjà."""
    if db.query(User.id).first() is not None:
        logger.info("Database already contains data. Skipping seed.")
        return False

    logger.info("Starting database seeding...")
    now = datetime.utcnow()

    users = {}
    for username, email, password, first_name, last_name, role in SEED_USERS:
        user = User(
            username=username,
            email=email,
            first_name=first_name,
            last_name=last_name,
            role=role,
            is_active=True,
            created_at=now,
        )
        user.set_password(password)
        db.add(user)
        users[username] = user
    db.flush()

    task_count = 0
    for username, tasks in SEED_TASKS.items():
        for title, description, due_in_days, priority, status in tasks:
            db.add(Task(
                user_id=users[username].id,
                title=title,
                description=description,
                due_date=now + timedelta(days=due_in_days),
                priority=int(priority),
                status=int(status),
                created_at=now,
                updated_at=now if status == TaskStatus.COMPLETED else None,
            ))
            task_count += 1

    db.commit()
    logger.info(f"Database seeded with {len(users)} users and {task_count} tasks")
    return True


def seed_on_startup(session_factory=SessionLocal) -> bool:
    """Seed lancé au démarrage de l'API : une erreur est journalisée sans bloquer le service."""
    db = session_factory()
    try:
        return seed_database(db)
    except Exception:
        logger.exception("An error occurred while seeding the database")
        db.rollback()
        return False
    finally:
        db.close()


def main():
    parser = argparse.ArgumentParser(description="Seed the task database with demo data")
    parser.add_argument("--create", action="store_true", help="create missing tables first")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)

    if args.create:
        Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        seed_database(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
