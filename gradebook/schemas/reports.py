from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gradebook.services.grading import CLASS_SCORE_MAX, EXAM_SCORE_MAX, Grade, Term


class SubjectScoreEntry(BaseModel):
    class_score: float = Field(0, ge=0, le=CLASS_SCORE_MAX)
    exam_score: float = Field(0, ge=0, le=EXAM_SCORE_MAX)
    remarks: Optional[str] = None


class ReportCreate(BaseModel):
    student_id: str = Field(..., min_length=1)
    term: Term
    subjects: Dict[str, SubjectScoreEntry]

    @field_validator("subjects")
    @classmethod
    def clean_subject_names(cls, v):
        cleaned = {}
        for name, entry in v.items():
            subject = name.strip()
            if not subject:
                raise ValueError("subject names must not be blank")
            if subject in cleaned:
                raise ValueError(f"subject '{subject}' is listed more than once")
            cleaned[subject] = entry
        return cleaned


class SubjectScoreOut(BaseModel):
    subject: str
    class_score: float
    exam_score: float
    total: float
    grade: Grade
    remarks: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class StudentReportOut(BaseModel):
    student_id: str
    term: str
    subjects: List[SubjectScoreOut]
    total_score: float
    average_score: float
    overall_grade: Grade

    model_config = ConfigDict(from_attributes=True)


class ReportListItem(StudentReportOut):
    student_name: Optional[str] = None
    class_name: Optional[str] = None
    academic_year: Optional[str] = None


class ReportList(BaseModel):
    reports: List[ReportListItem]
    total: int


class GradeBand(BaseModel):
    grade: Grade
    min_score: float


class ReportRoster(BaseModel):
    subjects: List[str]
    terms: List[str]
    remarks_options: List[str]
    grade_bands: List[GradeBand]
    class_score_max: int = CLASS_SCORE_MAX
    exam_score_max: int = EXAM_SCORE_MAX
