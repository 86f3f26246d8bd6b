from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, NamedTuple, Optional, TypeVar

T = TypeVar("T")


class FilterFields(NamedTuple):
    academic_year: Optional[str]
    class_name: Optional[str]
    term: Optional[str]


@dataclass(frozen=True)
class FilterCriteria:
    """
    Listing filters. A blank string is treated the same as an unset field,
    which is what a cleared select box sends.
    """

    academic_year: Optional[str] = None
    class_name: Optional[str] = None
    term: Optional[str] = None

    def __post_init__(self):
        for name in ("academic_year", "class_name", "term"):
            value = getattr(self, name)
            if value is not None and not str(value).strip():
                object.__setattr__(self, name, None)

    def is_empty(self) -> bool:
        return self.academic_year is None and self.class_name is None and self.term is None

    def matches(self, fields: Optional[FilterFields]) -> bool:
        if self.is_empty():
            return True
        if fields is None:
            return False
        for name in ("academic_year", "class_name", "term"):
            wanted = getattr(self, name)
            if wanted is not None and getattr(fields, name) != wanted:
                return False
        return True


def filter_records(
    records: Iterable[T],
    criteria: FilterCriteria,
    resolve: Callable[[T], Optional[FilterFields]],
) -> List[T]:
    """
    Keep the records whose resolved fields equal every criterion that is set.

    Order is preserved. With no criteria the input comes back unchanged and
    ``resolve`` is never called. A record that resolves to ``None`` matches
    nothing.
    """
    records = list(records)
    if criteria.is_empty():
        return records
    return [record for record in records if criteria.matches(resolve(record))]


def student_fields(student: Any) -> FilterFields:
    """Resolver for student rows: year and class come from the admission record."""
    return FilterFields(student.academic_year, student.class_name, None)


def report_fields(get_student_by_id: Callable[[str], Any]) -> Callable[[Any], Optional[FilterFields]]:
    """
    Build a resolver for reports, which carry only a student id and a term;
    year and class are looked up through ``get_student_by_id``.
    """

    def resolve(report: Any) -> Optional[FilterFields]:
        student = get_student_by_id(report.student_id)
        if student is None:
            return None
        return FilterFields(student.academic_year, student.class_name, report.term)

    return resolve
