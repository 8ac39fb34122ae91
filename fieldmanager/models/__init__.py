"""
ORM models. Importing this package registers every table on Base.metadata
(used by create_tables() and Alembic autogenerate).
"""

from fieldmanager.models.device_controller import DeviceController
from fieldmanager.models.field import Field
from fieldmanager.models.user import User

__all__ = ["DeviceController", "Field", "User"]
