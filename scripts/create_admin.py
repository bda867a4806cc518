import sys
import os
import logging
from sqlalchemy.orm import Session

# Ensure we can import hrms modules
sys.path.append(os.getcwd())

from hrms.core.enums import UserRole
from hrms.database import SessionLocal, init_db
from hrms.models.user import User
from hrms.services import auth as auth_service

# Configure logging
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


def create_admin_user():
    login_id = os.getenv("ADMIN_LOGIN_ID", "admin")
    password = os.getenv("ADMIN_PASSWORD") or auth_service.generate_temp_password(12)

    init_db()
    db: Session = SessionLocal()
    try:
        existing_user = db.query(User).filter(User.login_id == login_id).first()
        if existing_user:
            logger.warning(f"User '{login_id}' already exists.")
            return

        auth_service.create_account(db, login_id, password, UserRole.ADMIN, is_first_login=True)

        logger.info("Admin user created successfully. You can now login.")
        logger.info(f"Login ID: {login_id}")
        if not os.getenv("ADMIN_PASSWORD"):
            logger.info(f"Password: {password}")
    except Exception as e:
        logger.error(f"Error creating admin user: {e}")
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    create_admin_user()
