"""
Field Manager Backend: Field SQLAlchemy Model
=============================================

What:  ORM model for the `fields` table (a plot of land owned by a User).

Foreign Key:
    user_id → users.id ON DELETE CASCADE. UserService also removes a
    User's Fields itself before deleting the User, so the cascade only
    matters for rows removed outside the API.

Query Patterns:
    - Fields of a user: SELECT ... WHERE user_id = :id
      → Uses ix_fields_user_id
"""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from fieldmanager.database import Base


class Field(Base):
    """A field managed by exactly one User; hosts DeviceControllers."""

    __tablename__ = "fields"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
        comment="Name of the field",
    )

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Owning user",
    )

    def __repr__(self) -> str:
        return f"<Field(id={self.id}, name='{self.name}', user_id={self.user_id})>"
