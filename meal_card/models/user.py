"""
User and student profile models.

Every person using the application is a User with a single
role. Students additionally have a profile with enrollment
details and exactly one meal card.
"""

from sqlalchemy import String, Integer, ForeignKey, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from meal_card.models.base import Base
from meal_card.models.enums import Role


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    role: Mapped[Role] = mapped_column(
        SAEnum(Role, name="role_enum", create_constraint=True),
        nullable=False,
    )

    profile: Mapped["StudentProfile | None"] = relationship(
        back_populates="user", uselist=False
    )
    card: Mapped["MealCard | None"] = relationship(
        back_populates="owner", uselist=False
    )

    def __repr__(self) -> str:
        return f"<User {self.email} ({self.role.value})>"


class StudentProfile(Base):
    __tablename__ = "student_profiles"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"), unique=True, nullable=False
    )
    enrollment_no: Mapped[str] = mapped_column(
        String(50), unique=True, nullable=False
    )
    department: Mapped[str] = mapped_column(String(100), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)

    user: Mapped["User"] = relationship(back_populates="profile")

    def __repr__(self) -> str:
        return f"<StudentProfile {self.enrollment_no}>"
