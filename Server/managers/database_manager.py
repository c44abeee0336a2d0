"""
Folio Server - Database Manager

This module manages the database connection, first-run initialization and
password hashing.
"""

import logging
import secrets
import string
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
import bcrypt

from models.database import Base, Role, Permission, RolePermission, User, ServerSetting
from models.enums import ServerSettingKey
import seed

logger = logging.getLogger(__name__)


class DatabaseManager:
    """
    Manages database connection, initialization, and operations
    """

    def __init__(self, db_path: str = "data/folio.db"):
        """
        Initialize database manager

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = db_path

        # Ensure database directory exists
        db_dir = Path(db_path).parent
        if db_dir and str(db_dir) != '.':
            db_dir.mkdir(parents=True, exist_ok=True)

        self.engine = create_engine(
            f"sqlite:///{db_path}",
            echo=False,
            connect_args={"check_same_thread": False}
        )
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine, expire_on_commit=False)

    def InitializeDatabase(self, default_settings: Optional[Dict[ServerSettingKey, str]] = None) -> Optional[str]:
        """
        Initialize the database with all tables and default data
        Creates tables if they don't exist, seeds roles and settings,
        and creates a default admin user on first run.

        Args:
            default_settings: Seed values for the settings table
                              (seed.GetDefaultSettings() when omitted)

        Returns:
            str: Generated admin password if admin user was created, None otherwise
        """
        Base.metadata.create_all(bind=self.engine)

        session = self.SessionLocal()
        admin_password = None

        try:
            is_first_run = session.query(User).count() == 0

            # Always, so roles added in later versions appear on upgrade
            self.PopulateDefaultRolesAndPermissions(session)

            if is_first_run:
                admin_role = session.query(Role).filter(Role.role_name == "Admin").first()

                admin_password = self.GenerateRandomPassword()
                admin_user = User(
                    username="admin",
                    password_hash=self.HashPassword(admin_password),
                    role_id=admin_role.role_id if admin_role else None,
                    created_at=datetime.now(timezone.utc),
                    is_active=True
                )
                session.add(admin_user)
                logger.info("Created default admin user")

            self.PopulateDefaultSettings(session, default_settings or seed.GetDefaultSettings())

            session.commit()

        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

        return admin_password

    def PopulateDefaultRolesAndPermissions(self, session):
        """
        Populate default roles and permissions for RBAC
        Only adds roles and permissions that don't already exist

        Args:
            session: SQLAlchemy session
        """
        permission_objs = {}
        for perm_name, description in seed.DEFAULT_PERMISSIONS.items():
            existing = session.query(Permission).filter(Permission.permission_name == perm_name).first()
            if not existing:
                perm = Permission(permission_name=perm_name, description=description)
                session.add(perm)
                session.flush()  # Flush to get the permission_id
                permission_objs[perm_name] = perm
                logger.info(f"Added default permission: {perm_name}")
            else:
                permission_objs[perm_name] = existing

        for role_name, role_config in seed.DEFAULT_ROLES.items():
            role = session.query(Role).filter(Role.role_name == role_name).first()

            if not role:
                role = Role(
                    role_name=role_name,
                    description=role_config["description"],
                    is_system_role=True
                )
                session.add(role)
                session.flush()  # Flush to get the role_id
                logger.info(f"Added default role: {role_name}")
                existing_perm_names = []
            else:
                existing_perm_names = role.permission_names

            for perm_name in role_config["permissions"]:
                if perm_name not in existing_perm_names and perm_name in permission_objs:
                    session.add(RolePermission(
                        role_id=role.role_id,
                        permission_id=permission_objs[perm_name].permission_id
                    ))
        session.flush()

    def PopulateDefaultSettings(self, session, default_settings: Dict[ServerSettingKey, str]):
        """
        Seed one settings row per key
        Only adds settings that don't already exist; existing values are kept

        Args:
            session: SQLAlchemy session
            default_settings: Mapping of key to serialized default value
        """
        for key, value in default_settings.items():
            existing = session.query(ServerSetting).filter(ServerSetting.key == key.value).first()
            if not existing:
                session.add(ServerSetting(key=key.value, value=value))
                logger.debug(f"Added default setting: {key.value} = {value}")

    @staticmethod
    def GenerateRandomPassword(length: int = 12) -> str:
        """
        Generate a secure random password

        Args:
            length: Password length (default 12)

        Returns:
            str: Generated password
        """
        alphabet = string.ascii_letters + string.digits + "!@#$%^&*"
        return ''.join(secrets.choice(alphabet) for _ in range(length))

    @staticmethod
    def HashPassword(password: str) -> str:
        """
        Hash a password using bcrypt
        Truncates to 72 bytes to comply with bcrypt's maximum password length

        Args:
            password: Plain text password

        Returns:
            str: Hashed password (as string)
        """
        password_bytes = password.encode('utf-8')[:72]
        hashed = bcrypt.hashpw(password_bytes, bcrypt.gensalt())
        return hashed.decode('utf-8')

    @staticmethod
    def VerifyPassword(plain_password: str, hashed_password: str) -> bool:
        """
        Verify a password against a hash

        Args:
            plain_password: Plain text password to verify
            hashed_password: Stored password hash (as string)

        Returns:
            bool: True if password matches, False otherwise
        """
        password_bytes = plain_password.encode('utf-8')[:72]
        return bcrypt.checkpw(password_bytes, hashed_password.encode('utf-8'))

    def GetSession(self):
        """
        Get a new database session

        Returns:
            Session: SQLAlchemy session
        """
        return self.SessionLocal()

    def Dispose(self) -> None:
        """Close every pooled connection (used on shutdown and by backups)"""
        self.engine.dispose()
