from typing import Dict, List

from pydantic import BaseModel

from gradebook.schemas.students import StudentSummary
from gradebook.schemas.school import TeacherSummary


class ClassCount(BaseModel):
    class_name: str
    count: int


class GenderCount(BaseModel):
    gender: str
    count: int


class LevelCount(BaseModel):
    level: str
    count: int


class AcademicYearCount(BaseModel):
    academic_year: str
    count: int


class QualificationCount(BaseModel):
    qualification: str
    count: int


class StudentStats(BaseModel):
    total: int
    by_class: List[ClassCount]
    by_gender: List[GenderCount]
    recent_admissions: int


class TeacherStats(BaseModel):
    total: int
    by_qualification: List[QualificationCount]
    average_experience: float
    recent_hires: int


class ClassStats(BaseModel):
    total: int
    by_level: List[LevelCount]
    by_academic_year: List[AcademicYearCount]
    average_capacity: float


class SubjectStats(BaseModel):
    total: int
    average_teachers_per_subject: float


class DashboardStats(BaseModel):
    students: StudentStats
    teachers: TeacherStats
    classes: ClassStats
    subjects: SubjectStats
    reports: int


class RecentActivities(BaseModel):
    students: List[StudentSummary]
    teachers: List[TeacherSummary]


class Dashboard(BaseModel):
    stats: DashboardStats
    grade_distribution: Dict[str, int]
    recent_activities: RecentActivities
