from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from gradebook.schemas.common import blank_to_none, check_academic_year
from gradebook.services.grading import Term


class StudentBase(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    # Personal
    full_name: str = Field(..., min_length=2)
    gender: str = Field(..., min_length=1)
    date_of_birth: Optional[date] = None
    place_of_birth: Optional[str] = None
    nationality: Optional[str] = None
    religion: Optional[str] = None
    hometown: Optional[str] = None
    home_address: str = Field(..., min_length=5)
    gps_address: Optional[str] = None

    # Admission
    admission_number: str = Field(..., min_length=1, max_length=100)
    admission_date: date
    academic_year: str
    class_name: str = Field(..., min_length=1)
    term: Term
    previous_school: Optional[str] = None
    reason_for_transfer: Optional[str] = None

    # Primary guardian
    guardian_name: str = Field(..., min_length=2)
    guardian_relationship: str = Field(..., min_length=1)
    guardian_phone: str = Field(..., min_length=10)
    guardian_email: Optional[EmailStr] = None
    guardian_occupation: Optional[str] = None
    guardian_address: Optional[str] = None

    secondary_guardian_name: Optional[str] = None
    secondary_guardian_relationship: Optional[str] = None
    secondary_guardian_phone: Optional[str] = None
    secondary_guardian_occupation: Optional[str] = None

    emergency_contact_name: Optional[str] = None
    emergency_contact_relationship: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    emergency_contact_alt_phone: Optional[str] = None

    # Health
    blood_group: Optional[str] = None
    medical_conditions: Optional[str] = None
    allergies: Optional[str] = None
    doctor_contact: Optional[str] = None

    languages_spoken: Optional[str] = None
    preferred_communication: Optional[str] = None
    remarks: Optional[str] = None

    @field_validator("academic_year")
    @classmethod
    def validate_academic_year(cls, v):
        return check_academic_year(v)

    @field_validator("guardian_email", mode="before")
    @classmethod
    def blank_email_is_none(cls, v):
        return blank_to_none(v)


class StudentCreate(StudentBase):
    pass


class StudentUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    full_name: Optional[str] = Field(None, min_length=2)
    gender: Optional[str] = Field(None, min_length=1)
    date_of_birth: Optional[date] = None
    place_of_birth: Optional[str] = None
    nationality: Optional[str] = None
    religion: Optional[str] = None
    hometown: Optional[str] = None
    home_address: Optional[str] = Field(None, min_length=5)
    gps_address: Optional[str] = None

    admission_number: Optional[str] = Field(None, min_length=1, max_length=100)
    admission_date: Optional[date] = None
    academic_year: Optional[str] = None
    class_name: Optional[str] = Field(None, min_length=1)
    term: Optional[Term] = None
    previous_school: Optional[str] = None
    reason_for_transfer: Optional[str] = None

    guardian_name: Optional[str] = Field(None, min_length=2)
    guardian_relationship: Optional[str] = Field(None, min_length=1)
    guardian_phone: Optional[str] = Field(None, min_length=10)
    guardian_email: Optional[EmailStr] = None
    guardian_occupation: Optional[str] = None
    guardian_address: Optional[str] = None

    secondary_guardian_name: Optional[str] = None
    secondary_guardian_relationship: Optional[str] = None
    secondary_guardian_phone: Optional[str] = None
    secondary_guardian_occupation: Optional[str] = None

    emergency_contact_name: Optional[str] = None
    emergency_contact_relationship: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    emergency_contact_alt_phone: Optional[str] = None

    blood_group: Optional[str] = None
    medical_conditions: Optional[str] = None
    allergies: Optional[str] = None
    doctor_contact: Optional[str] = None

    languages_spoken: Optional[str] = None
    preferred_communication: Optional[str] = None
    remarks: Optional[str] = None

    @field_validator("academic_year")
    @classmethod
    def validate_academic_year(cls, v):
        return check_academic_year(v)

    @field_validator("guardian_email", mode="before")
    @classmethod
    def blank_email_is_none(cls, v):
        return blank_to_none(v)


class StudentInDB(StudentBase):
    id: int
    term: str
    guardian_email: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class StudentList(BaseModel):
    students: List[StudentInDB]
    total: int


class StudentSummary(BaseModel):
    id: int
    admission_number: str
    full_name: str
    class_name: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
