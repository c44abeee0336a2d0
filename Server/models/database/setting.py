"""
Folio Server - Server Setting Database Model

Key/value row holding one server configuration parameter.
"""

from sqlalchemy import Column, String

from models.database.base import Base
from models.enums import ServerSettingKey


class ServerSetting(Base):
    """
    Settings table - one row per ServerSettingKey
    The value is always the string serialization of the typed setting
    """
    __tablename__ = "settings"

    key = Column(String, primary_key=True)
    value = Column(String, nullable=False, default="")

    @property
    def setting_key(self) -> ServerSettingKey:
        """Key column parsed back into its enumeration member"""
        return ServerSettingKey(self.key)

    def __repr__(self) -> str:
        return f"<ServerSetting {self.key}={self.value!r}>"
