"""
Pydantic schemas for users and student profiles.
"""

from pydantic import BaseModel

from meal_card.models.enums import Role


class StudentProfileResponse(BaseModel):
    enrollment_no: str
    department: str
    year: int

    model_config = {"from_attributes": True}


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    role: Role

    model_config = {"from_attributes": True}


class StudentResponse(UserResponse):
    """A student together with their enrollment details."""
    profile: StudentProfileResponse
