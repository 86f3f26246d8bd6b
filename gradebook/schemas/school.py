from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from gradebook.schemas.common import blank_to_none, check_academic_year


# Subject schemas
class SubjectBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    code: str = Field(..., min_length=1, max_length=20)
    description: Optional[str] = None


class SubjectCreate(SubjectBase):
    pass


class SubjectUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    code: Optional[str] = Field(None, min_length=1, max_length=20)
    description: Optional[str] = None


class SubjectInDB(SubjectBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class SubjectSummary(BaseModel):
    id: int
    name: str
    code: str

    model_config = ConfigDict(from_attributes=True)


# Class schemas
class ClassBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    level: str = Field(..., min_length=1, max_length=50)
    academic_year: str
    capacity: Optional[int] = Field(None, gt=0)

    @field_validator("academic_year")
    @classmethod
    def validate_academic_year(cls, v):
        return check_academic_year(v)


class ClassCreate(ClassBase):
    pass


class ClassUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    level: Optional[str] = Field(None, min_length=1, max_length=50)
    academic_year: Optional[str] = None
    capacity: Optional[int] = Field(None, gt=0)

    @field_validator("academic_year")
    @classmethod
    def validate_academic_year(cls, v):
        return check_academic_year(v)


class ClassSummary(BaseModel):
    id: int
    name: str
    academic_year: str

    model_config = ConfigDict(from_attributes=True)


class ClassStudentSummary(BaseModel):
    id: int
    full_name: str
    admission_number: str
    gender: str

    model_config = ConfigDict(from_attributes=True)


class ClassTeacherSummary(BaseModel):
    id: int
    name: str
    specialization: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ClassInDB(ClassBase):
    id: int
    student_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ClassDetail(ClassInDB):
    students: List[ClassStudentSummary] = []
    teachers: List[ClassTeacherSummary] = []


# Teacher schemas
class TeacherBase(BaseModel):
    staff_number: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=2)
    email: Optional[EmailStr] = None
    phone: str = Field(..., min_length=10)
    address: str = Field(..., min_length=5)
    qualification: Optional[str] = None
    experience: Optional[int] = Field(0, ge=0)
    specialization: Optional[str] = None
    employment_date: Optional[date] = None
    employment_type: Optional[str] = Field(None, max_length=50)

    @field_validator("email", mode="before")
    @classmethod
    def blank_email_is_none(cls, v):
        return blank_to_none(v)


class TeacherCreate(TeacherBase):
    pass


class TeacherUpdate(BaseModel):
    staff_number: Optional[str] = Field(None, min_length=1, max_length=50)
    name: Optional[str] = Field(None, min_length=2)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=10)
    address: Optional[str] = Field(None, min_length=5)
    qualification: Optional[str] = None
    experience: Optional[int] = Field(None, ge=0)
    specialization: Optional[str] = None
    employment_date: Optional[date] = None
    employment_type: Optional[str] = Field(None, max_length=50)

    @field_validator("email", mode="before")
    @classmethod
    def blank_email_is_none(cls, v):
        return blank_to_none(v)


class TeacherInDB(TeacherBase):
    id: int
    email: Optional[str] = None
    subjects: List[SubjectSummary] = []
    classes: List[ClassSummary] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class TeacherList(BaseModel):
    teachers: List[TeacherInDB]
    total: int


class TeacherSummary(BaseModel):
    id: int
    staff_number: str
    name: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
