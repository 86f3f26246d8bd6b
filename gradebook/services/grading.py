import enum
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

# Maximum marks per component; a subject is graded out of 100
CLASS_SCORE_MAX = 30
EXAM_SCORE_MAX = 70


class Grade(str, enum.Enum):
    A = "A"
    B_PLUS = "B+"
    B = "B"
    C_PLUS = "C+"
    C = "C"
    D_PLUS = "D+"
    D = "D"
    F = "F"

    @property
    def rank(self) -> int:
        """Position in the grade order, higher is better (A=7 ... F=0)."""
        return len(GRADE_ORDER) - 1 - GRADE_ORDER.index(self)


class Term(str, enum.Enum):
    FIRST = "1st Term"
    SECOND = "2nd Term"
    THIRD = "3rd Term"


class ScoreField(str, enum.Enum):
    CLASS_SCORE = "class_score"
    EXAM_SCORE = "exam_score"


# Best first
GRADE_ORDER: Tuple[Grade, ...] = tuple(Grade)

# (lower bound, grade), evaluated top down
GRADE_BANDS: Tuple[Tuple[float, Grade], ...] = (
    (90, Grade.A),
    (80, Grade.B_PLUS),
    (70, Grade.B),
    (60, Grade.C_PLUS),
    (50, Grade.C),
    (40, Grade.D_PLUS),
    (30, Grade.D),
)

REMARKS_OPTIONS: Tuple[str, ...] = ("Excellent", "Very Good", "Good", "Satisfactory", "Needs Improvement")

Number = Union[int, float]


def classify(score: Number) -> Grade:
    """
    Map a score on the 0-100 scale to its grade band.

    Bands are lower-bound inclusive and no rounding is applied, so 90 is an
    A while 89.999 is a B+. Scores below every band, negative ones included,
    are an F; anything above 100 is still an A.
    """
    for lower_bound, grade in GRADE_BANDS:
        if score >= lower_bound:
            return grade
    return Grade.F


@dataclass(frozen=True)
class SubjectScore:
    """Frozen copy of one subject row as it appears on a stored report."""

    subject: str
    class_score: Number
    exam_score: Number
    total: Number
    grade: Grade
    remarks: Optional[str] = None


class SubjectScoreRecord:
    """
    Editable score row for one subject.

    ``total`` and ``grade`` are derived and only ever change together, inside
    :meth:`set_score` or at construction.
    """

    def __init__(
        self,
        subject: str,
        class_score: Number = 0,
        exam_score: Number = 0,
        remarks: Optional[str] = None,
    ):
        if not subject or not subject.strip():
            raise ValueError("Subject name must not be empty")
        self.subject = subject.strip()
        self.remarks = remarks or None
        self._class_score = class_score
        self._exam_score = exam_score
        self._recompute()

    @property
    def class_score(self) -> Number:
        return self._class_score

    @property
    def exam_score(self) -> Number:
        return self._exam_score

    @property
    def total(self) -> Number:
        return self._total

    @property
    def grade(self) -> Grade:
        return self._grade

    def set_score(self, field: Union[ScoreField, str], value: Number) -> None:
        """Set the class or exam score and re-derive total and grade."""
        try:
            field = ScoreField(field)
        except ValueError:
            raise ValueError(f"Unknown score field: {field!r}") from None

        if field is ScoreField.CLASS_SCORE:
            self._class_score = value
        else:
            self._exam_score = value
        self._recompute()

    def _recompute(self) -> None:
        total = self._class_score + self._exam_score
        self._total, self._grade = total, classify(total)

    def freeze(self) -> SubjectScore:
        return SubjectScore(
            subject=self.subject,
            class_score=self._class_score,
            exam_score=self._exam_score,
            total=self._total,
            grade=self._grade,
            remarks=self.remarks,
        )

    def __repr__(self) -> str:
        return (
            f"SubjectScoreRecord(subject={self.subject!r}, class_score={self._class_score!r}, "
            f"exam_score={self._exam_score!r}, total={self._total!r}, grade={self._grade.value!r})"
        )


@dataclass(frozen=True)
class StudentReport:
    student_id: str
    term: str
    subjects: Tuple[SubjectScore, ...]
    total_score: Number
    overall_grade: Grade

    @property
    def key(self) -> Tuple[str, str]:
        return self.student_id, self.term

    @property
    def average_score(self) -> float:
        """Mean subject total, the figure the overall grade is based on."""
        if not self.subjects:
            return 0.0
        return self.total_score / len(self.subjects)


def build_report(
    student_id: str,
    term: Union[Term, str],
    subjects: Sequence[Union[SubjectScoreRecord, SubjectScore]],
) -> StudentReport:
    """
    Aggregate subject rows into a report.

    The overall grade classifies the mean subject total rather than the
    raw sum, since bands are defined per subject on a 0-100 scale. A report
    without subjects totals 0 and is graded F.
    """
    if isinstance(term, Term):
        term = term.value

    frozen = tuple(s.freeze() if isinstance(s, SubjectScoreRecord) else s for s in subjects)
    total_score = sum(s.total for s in frozen)
    mean = total_score / len(frozen) if frozen else 0

    return StudentReport(
        student_id=student_id,
        term=term,
        subjects=frozen,
        total_score=total_score,
        overall_grade=classify(mean),
    )


def records_from_entries(
    entries: Mapping[str, Mapping[str, object]],
    roster: Iterable[str] = (),
) -> List[SubjectScoreRecord]:
    """
    Turn a ``{subject: {"class_score", "exam_score", "remarks"}}`` mapping
    into score records.

    Subjects found in ``roster`` come first in roster order, followed by any
    other subjects in the order they were given. Missing scores count as 0.
    """
    roster = [name for name in roster if name in entries]
    extras = [name for name in entries if name not in roster]

    records = []
    for name in roster + extras:
        entry = entries[name]
        records.append(
            SubjectScoreRecord(
                name,
                class_score=entry.get("class_score") or 0,
                exam_score=entry.get("exam_score") or 0,
                remarks=entry.get("remarks"),
            )
        )
    return records


def grade_bands() -> List[Dict[str, object]]:
    """Band table suitable for display: grade with its inclusive minimum."""
    bands = [{"grade": grade.value, "min_score": lower} for lower, grade in GRADE_BANDS]
    bands.append({"grade": Grade.F.value, "min_score": 0})
    return bands
