import logging
import threading
from collections import Counter
from dataclasses import replace
from typing import Dict, List, Optional

from gradebook.services.grading import GRADE_ORDER, StudentReport

logger = logging.getLogger(__name__)


class ReportStore:
    """
    In-memory collection of student reports, at most one per (student, term).

    The store is owned by whoever constructs it (the application keeps one on
    ``app.state``). A lock serialises writers and snapshot reads so handlers
    running in the threadpool never observe a half-applied upsert.
    """

    def __init__(self):
        self._reports: List[StudentReport] = []
        self._lock = threading.Lock()

    def add_report(self, report: StudentReport) -> None:
        """Insert ``report``, replacing any stored report with the same key."""
        with self._lock:
            remaining = [r for r in self._reports if r.key != report.key]
            replaced = len(remaining) != len(self._reports)
            remaining.append(report)
            self._reports = remaining

        if replaced:
            logger.debug(f"Replaced report for student {report.student_id} ({report.term})")
        logger.info(
            f"Stored report for student {report.student_id} ({report.term}): "
            f"total={report.total_score} grade={report.overall_grade.value}"
        )

    def rename_student(self, old_student_id: str, new_student_id: str) -> int:
        """
        Move every report of ``old_student_id`` to ``new_student_id``.

        A report the new id already holds for the same term is replaced by the
        moved one. Returns the number of reports moved.
        """
        if old_student_id == new_student_id:
            return 0
        with self._lock:
            moved_terms = {r.term for r in self._reports if r.student_id == old_student_id}
            if not moved_terms:
                return 0
            self._reports = [
                replace(r, student_id=new_student_id) if r.student_id == old_student_id else r
                for r in self._reports
                if not (r.student_id == new_student_id and r.term in moved_terms)
            ]

        logger.info(f"Moved {len(moved_terms)} report(s) from student {old_student_id} to {new_student_id}")
        return len(moved_terms)

    def get_reports_by_student(self, student_id: str) -> List[StudentReport]:
        return [r for r in self.reports if r.student_id == student_id]

    def get_report_by_student_and_term(self, student_id: str, term: str) -> Optional[StudentReport]:
        for report in self.reports:
            if report.student_id == student_id and report.term == term:
                return report
        return None

    @property
    def reports(self) -> List[StudentReport]:
        """Snapshot of every stored report in insertion order."""
        with self._lock:
            return list(self._reports)

    def grade_distribution(self) -> Dict[str, int]:
        counts = Counter(r.overall_grade for r in self.reports)
        return {grade.value: counts.get(grade, 0) for grade in GRADE_ORDER}

    def __len__(self) -> int:
        with self._lock:
            return len(self._reports)
