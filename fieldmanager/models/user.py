"""
Field Manager Backend: User SQLAlchemy Model
============================================

What:  ORM model for the `users` table.
Who:   Read and written by UserService through the persistence gateway.

Table Design:
    - Integer identity primary key, assigned by the database on insert
    - name / phone_number / email are required; their formats are checked
      by the request schemas before a row is ever built
    - No `fields` collection on the model: a User's Fields are fetched with
      PersistenceGateway.fields_by_user_id() or get_user_with_fields()

Lifecycle:
    1. Created from a UserRequest payload
    2. Updated in place: name, phone_number, email (id never changes)
    3. Deleted together with its Fields (see UserService.delete_user)
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from fieldmanager.database import Base


class User(Base):
    """A person who owns and manages Fields."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Identity key assigned by the database",
    )

    name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
        comment="Full name of the user",
    )

    phone_number: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        comment="Phone number used for notifications",
    )

    email: Mapped[str] = mapped_column(
        String(320),
        nullable=False,
        comment="Email address used for updates",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, name='{self.name}')>"
