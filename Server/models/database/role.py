"""
Folio Server - Role Database Models

Roles, permissions and the junction table between them.
A user's abilities are the union of the permissions granted to their role.
"""

from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship

from models.database.base import Base


class Role(Base):
    """
    Roles table - named bundles of permissions
    """
    __tablename__ = "roles"

    role_id = Column(Integer, primary_key=True, autoincrement=True)
    role_name = Column(String, unique=True, nullable=False)
    description = Column(String, nullable=True)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    # Seeded roles cannot be deleted
    is_system_role = Column(Boolean, default=False)

    users = relationship("User", back_populates="role")
    permissions = relationship("Permission", secondary="role_permissions", back_populates="roles")

    @property
    def permission_names(self) -> list:
        return [perm.permission_name for perm in self.permissions]


class Permission(Base):
    """
    Permissions table - individual abilities such as 'admin' or 'can_download'
    """
    __tablename__ = "permissions"

    permission_id = Column(Integer, primary_key=True, autoincrement=True)
    permission_name = Column(String, unique=True, nullable=False)
    description = Column(String, nullable=True)

    roles = relationship("Role", secondary="role_permissions", back_populates="permissions")


class RolePermission(Base):
    """
    Junction table mapping roles to permissions (many-to-many)
    """
    __tablename__ = "role_permissions"

    role_id = Column(Integer, ForeignKey("roles.role_id"), primary_key=True)
    permission_id = Column(Integer, ForeignKey("permissions.permission_id"), primary_key=True)
