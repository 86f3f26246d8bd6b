import re
from typing import List, Optional

from pydantic import BaseModel, Field

ACADEMIC_YEAR_PATTERN = re.compile(r"^(\d{4})/(\d{4})$")


def check_academic_year(v: Optional[str]) -> Optional[str]:
    """Academic years read "2024/2025"; the second year follows the first."""
    if v is None:
        return v
    match = ACADEMIC_YEAR_PATTERN.match(v)
    if not match or int(match.group(2)) != int(match.group(1)) + 1:
        raise ValueError("academic_year must look like 'YYYY/YYYY+1', e.g. '2024/2025'")
    return v


def blank_to_none(v):
    """Forms send "" for an optional field left empty."""
    if isinstance(v, str) and not v.strip():
        return None
    return v


class Message(BaseModel):
    message: str


class StudentIds(BaseModel):
    student_ids: List[int] = Field(..., min_length=1)


class SubjectIds(BaseModel):
    subject_ids: List[int] = Field(..., min_length=1)


class ClassIds(BaseModel):
    class_ids: List[int] = Field(..., min_length=1)
