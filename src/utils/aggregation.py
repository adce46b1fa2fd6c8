"""Monitoring metrics derived from report, module, and rating rows.

All functions are pure and read-only. Rows are mappings (for instance the
``model_dump()`` of a schema object). Every metric degrades to 0 when its
input is empty or a denominator is zero.
"""

from collections import defaultdict
from typing import Any, Dict, Iterable, List, Mapping, Optional

Row = Mapping[str, Any]


def _attendance_ratio(report: Row) -> Optional[float]:
    total = report.get("total_students") or 0
    if total <= 0:
        return None
    return (report.get("students_present") or 0) / total


def _mean(values: List[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def _rating_type(rating: Row) -> Optional[str]:
    value = rating.get("type")
    # Enum members from schema dumps carry the string in .value
    return getattr(value, "value", value)


def avg_attendance(reports: Iterable[Row]) -> float:
    """Mean of students_present / total_students over reports with a class size.

    Args:
        reports: Report rows.

    Returns:
        Ratio in [0, 1] (may exceed 1 when more students attended than were
        registered), or 0 when no report has a positive class size.
    """
    ratios = [r for r in (_attendance_ratio(report) for report in reports) if r is not None]
    return _mean(ratios)


def curriculum_coverage(modules: Iterable[Row]) -> float:
    """Distinct module names over distinct module ids.

    This measures how many modules carry a unique name, not syllabus coverage.
    """
    modules = list(modules)
    ids = {m.get("id") for m in modules}
    if not ids:
        return 0.0
    names = {m.get("name") for m in modules}
    return len(names) / len(ids)


def student_satisfaction(ratings: Iterable[Row]) -> float:
    """Mean of rating / 5 over student_engagement ratings."""
    scores = [
        (r.get("rating") or 0) / 5
        for r in ratings
        if _rating_type(r) == "student_engagement"
    ]
    return _mean(scores)


def report_completion_rate(reports: Iterable[Row]) -> float:
    """Share of reviewed reports among reviewed reports.

    Numerator and denominator both count reports with PRL feedback, so the
    result is 1.0 whenever any feedback exists and 0 otherwise.
    """
    reviewed = [r for r in reports if r.get("prl_feedback")]
    if not reviewed:
        return 0.0
    return len(reviewed) / len(reviewed)


def lecturer_performance(
    reports: Iterable[Row], lecturer_ids: Iterable[int]
) -> Dict[int, float]:
    """Mean attendance percentage per lecturer.

    Args:
        reports: Report rows.
        lecturer_ids: Ids of users holding the lecturer role. Reports by
            anyone else are ignored.

    Returns:
        Mapping of lecturer id to mean attendance in percent. Lecturers with
        no qualifying report are absent.
    """
    allowed = set(lecturer_ids)
    ratios: Dict[int, List[float]] = defaultdict(list)
    for report in reports:
        lecturer_id = report.get("lecturer_id")
        if lecturer_id not in allowed:
            continue
        ratio = _attendance_ratio(report)
        if ratio is not None:
            ratios[lecturer_id].append(ratio)
    return {lecturer_id: _mean(values) * 100 for lecturer_id, values in ratios.items()}


def program_summary(
    reports: Iterable[Row],
    modules: Iterable[Row],
    ratings: Iterable[Row],
    lecturer_ids: Iterable[int],
) -> Dict[str, Any]:
    """All program-level metrics shown on the PL dashboard."""
    reports = list(reports)
    return {
        "avg_attendance": avg_attendance(reports),
        "curriculum_coverage": curriculum_coverage(modules),
        "student_satisfaction": student_satisfaction(ratings),
        "report_completion_rate": report_completion_rate(reports),
        "lecturer_performance": lecturer_performance(reports, lecturer_ids),
    }


def lecturer_summary(reports: Iterable[Row], ratings: Iterable[Row]) -> Dict[str, Any]:
    """Attendance and engagement over one lecturer's reports and their ratings."""
    reports = list(reports)
    return {
        "avg_attendance": avg_attendance(reports),
        "student_engagement": student_satisfaction(ratings),
        "report_count": len(reports),
    }


def student_attendance_rows(reports: Iterable[Row]) -> List[Dict[str, Any]]:
    """Per-report attendance rows for a student's enrolled modules."""
    rows = []
    for report in reports:
        ratio = _attendance_ratio(report)
        rows.append(
            {
                "report_id": report.get("id"),
                "week": report.get("week"),
                "lecture_date": report.get("lecture_date"),
                "course_code": report.get("course_code"),
                "course_name": report.get("course_name"),
                "topic_taught": report.get("topic_taught"),
                "students_present": report.get("students_present") or 0,
                "total_students": report.get("total_students") or 0,
                "attendance_rate": ratio if ratio is not None else 0.0,
            }
        )
    return rows


def student_progress(
    modules: Iterable[Row], reports: Iterable[Row]
) -> List[Dict[str, Any]]:
    """Reports delivered, distinct topics, and attendance per enrolled module."""
    by_module: Dict[Any, List[Row]] = defaultdict(list)
    for report in reports:
        by_module[report.get("module_id")].append(report)

    progress = []
    for module in modules:
        module_reports = by_module.get(module.get("id"), [])
        topics = {
            r.get("topic_taught").strip().lower()
            for r in module_reports
            if r.get("topic_taught") and r.get("topic_taught").strip()
        }
        progress.append(
            {
                "module_id": module.get("id"),
                "module_name": module.get("name"),
                "module_code": module.get("code"),
                "reports_delivered": len(module_reports),
                "topics_covered": len(topics),
                "avg_attendance": avg_attendance(module_reports),
            }
        )
    return progress
