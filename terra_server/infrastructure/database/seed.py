# terra_server/infrastructure/database/seed.py

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from terra_server.core.logging import get_logger
from terra_server.core.utils import new_id, utcnow
from terra_server.entities.user import AuthMethod, Role
from terra_server.infrastructure.database.models.program_model import ProgramModel
from terra_server.infrastructure.database.models.user_model import UserModel
from terra_server.infrastructure.security.password_hasher import PasswordHasher
from terra_server.repositories.program_repository import ProgramRepository
from terra_server.repositories.user_repository import UserRepository

logger = get_logger(__name__)

SAMPLE_PROGRAMS = [
    {
        "title": "Waste Bank",
        "description": (
            "Community waste management: residents exchange sorted waste for points "
            "that can be redeemed for cash or daily necessities."
        ),
        "target_amount": 50_000_000.0,
    },
    {
        "title": "Reforestation Program",
        "description": (
            "Tree planting to restore forests and critical land, carried out together "
            "with local communities."
        ),
        "target_amount": 75_000_000.0,
    },
    {
        "title": "Clean Water Initiative",
        "description": (
            "Wells, water filtration systems and hygiene education for communities "
            "without access to clean water."
        ),
        "target_amount": 100_000_000.0,
    },
]


def seed_database(
    session: Session,
    *,
    password_hasher: PasswordHasher,
    admin_email: str,
    admin_password: str,
) -> dict[str, int]:
    """Create the admin account and sample programs. Safe to run repeatedly."""
    created = {"users": 0, "programs": 0}
    now = utcnow()

    users = UserRepository(session)
    admin_email = admin_email.strip().lower()
    if users.get_by_email(admin_email) is None:
        users.add(
            UserModel(
                id=new_id(),
                full_name="Admin Terra",
                email=admin_email,
                password_hash=password_hasher.hash_password(admin_password),
                role=Role.ADMIN.value,
                auth_method=AuthMethod.EMAIL.value,
                created_at=now,
                updated_at=now,
            )
        )
        created["users"] += 1
        logger.info("seed_admin_created")

    programs = ProgramRepository(session)
    if session.execute(select(func.count(ProgramModel.id))).scalar_one() == 0:
        for sample in SAMPLE_PROGRAMS:
            programs.add(
                ProgramModel(
                    id=new_id(),
                    image_url=None,
                    created_at=now,
                    updated_at=now,
                    **sample,
                )
            )
            created["programs"] += 1
        logger.info("seed_programs_created", count=created["programs"])

    return created
