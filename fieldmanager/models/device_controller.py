"""
Field Manager Backend: DeviceController SQLAlchemy Model
========================================================

What:  ORM model for the `device_controllers` table: irrigation units,
       sensors and similar devices installed on a Field.

field_id:
    A plain indexed integer, not a foreign key. Nothing checks that it
    names an existing Field, and deleting a Field leaves its controllers
    in place with the old field_id.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from fieldmanager.database import Base


class DeviceController(Base):
    """A device (e.g. "Irrigation", "Sensor") installed on a Field."""

    __tablename__ = "device_controllers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    type: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Kind of device, e.g. Irrigation or Sensor",
    )

    field_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
        comment="Field the device is installed on (not enforced)",
    )

    def __repr__(self) -> str:
        return f"<DeviceController(id={self.id}, type='{self.type}', field_id={self.field_id})>"
