"""
services/grade_calculator.py

계수 가중 평균 계산기 (순수 함수 모음)

- parse_grade(): 자유 입력값 → GradeParseResult (성공/실패 타입). 0 으로 강제 변환하지 않음
- validate_grades(): 커리큘럼에 없는 과목 / 범위 밖 / 숫자 아님 → 조용히 제외
- compute_average(): 두 맵에 모두 있는 과목만 합산, 계수 합이 0 이면 평균 0
- classify_status(): 10 이상 합격, 9.5 이상 조건부 합격, 그 미만 불합격 (고정 정책)
- find_weak_subjects(): 10 미만 과목 목록 (전체 판정과 무관)

누락된 성적과 잘못된 성적은 모두 "제외" 로 처리한다 (0 점 취급 아님).
"""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Mapping, Optional

logger = logging.getLogger(__name__)

MIN_GRADE = 0.0
MAX_GRADE = 20.0
PASS_THRESHOLD = 10.0
CONDITIONAL_THRESHOLD = 9.5
WEAK_SUBJECT_THRESHOLD = 10.0


class ParseFailure(str, enum.Enum):
    MISSING = "missing"
    NOT_NUMERIC = "not_numeric"
    OUT_OF_RANGE = "out_of_range"
    UNKNOWN_SUBJECT = "unknown_subject"


class Status(str, enum.Enum):
    PASS = "pass"
    CONDITIONAL = "conditional"
    FAIL = "fail"

    @property
    def label_ar(self) -> str:
        return _STATUS_LABELS_AR[self]


_STATUS_LABELS_AR = {
    Status.PASS: "ناجح",
    Status.CONDITIONAL: "مقبول بشروط",
    Status.FAIL: "راسب",
}


@dataclass(frozen=True)
class GradeParseResult:
    value: Optional[float] = None
    error: Optional[ParseFailure] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class ValidatedGrades:
    accepted: dict[str, float]
    dropped: dict[str, ParseFailure] = field(default_factory=dict)


@dataclass(frozen=True)
class AverageComputation:
    average: float
    total_coefficient: int


@dataclass(frozen=True)
class WeakSubject:
    subject: str
    grade: float
    coefficient: int

    def to_dict(self) -> dict:
        return {"subject": self.subject, "grade": self.grade, "coefficient": self.coefficient}


@dataclass(frozen=True)
class AverageResult:
    average: float
    total_coefficient: int
    status: Status
    weak_subjects: list[WeakSubject]
    grades: dict[str, float]

    @property
    def total_subjects(self) -> int:
        return len(self.grades)


# ==========================================================
# [1단계] 입력값 파싱
# ==========================================================
def parse_grade(raw: Any) -> GradeParseResult:
    if raw is None:
        return GradeParseResult(error=ParseFailure.MISSING)
    # True/False 는 숫자로 보지 않음
    if isinstance(raw, bool):
        return GradeParseResult(error=ParseFailure.NOT_NUMERIC)

    if isinstance(raw, (int, float)):
        try:
            value = float(raw)
        except OverflowError:
            # float 로 표현할 수 없을 만큼 큰 정수
            return GradeParseResult(error=ParseFailure.OUT_OF_RANGE)
    elif isinstance(raw, str):
        text = raw.strip()
        if not text:
            return GradeParseResult(error=ParseFailure.MISSING)
        # 프랑스식 소수점 "12,5" 허용
        try:
            value = float(text.replace(",", "."))
        except ValueError:
            return GradeParseResult(error=ParseFailure.NOT_NUMERIC)
    else:
        return GradeParseResult(error=ParseFailure.NOT_NUMERIC)

    if math.isnan(value) or math.isinf(value):
        return GradeParseResult(error=ParseFailure.NOT_NUMERIC)
    if not MIN_GRADE <= value <= MAX_GRADE:
        return GradeParseResult(error=ParseFailure.OUT_OF_RANGE)
    return GradeParseResult(value=value)


def validate_grades(raw_grades: Mapping[str, Any], subjects: Mapping[str, int]) -> ValidatedGrades:
    accepted: dict[str, float] = {}
    dropped: dict[str, ParseFailure] = {}
    for subject, raw in raw_grades.items():
        if subject not in subjects:
            dropped[subject] = ParseFailure.UNKNOWN_SUBJECT
            continue
        result = parse_grade(raw)
        if result.ok:
            accepted[subject] = result.value
        else:
            dropped[subject] = result.error

    if dropped:
        logger.debug("Dropped %d grade(s): %s", len(dropped),
                     {k: v.value for k, v in dropped.items()})
    return ValidatedGrades(accepted=accepted, dropped=dropped)


# ==========================================================
# [2단계] 가중 평균
# ==========================================================
def round_2dp_half_up(x: float) -> float:
    return float(Decimal(str(x)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def compute_average(grades: Mapping[str, Any], subjects: Mapping[str, int]) -> AverageComputation:
    weighted_sum = 0.0
    coeff_total = 0
    for subject, raw in grades.items():
        coefficient = subjects.get(subject)
        if coefficient is None:
            continue
        # 검증 안 된 값이 들어와도 범위 밖/숫자 아님은 제외
        parsed = parse_grade(raw)
        if not parsed.ok:
            continue
        weighted_sum += parsed.value * coefficient
        coeff_total += coefficient

    if coeff_total == 0:
        return AverageComputation(average=0.0, total_coefficient=0)
    return AverageComputation(average=round_2dp_half_up(weighted_sum / coeff_total),
                              total_coefficient=coeff_total)


# ==========================================================
# [3단계] 판정 / 취약 과목
# ==========================================================
def classify_status(average: float) -> Status:
    if average >= PASS_THRESHOLD:
        return Status.PASS
    if average >= CONDITIONAL_THRESHOLD:
        return Status.CONDITIONAL
    return Status.FAIL


def find_weak_subjects(grades: Mapping[str, float], subjects: Mapping[str, int]) -> list[WeakSubject]:
    # 커리큘럼 순서대로 정렬
    return [
        WeakSubject(subject=subject, grade=grades[subject], coefficient=coefficient)
        for subject, coefficient in subjects.items()
        if subject in grades and grades[subject] < WEAK_SUBJECT_THRESHOLD
    ]


def evaluate(raw_grades: Mapping[str, Any], subjects: Mapping[str, int]) -> AverageResult:
    """파싱 → 검증 → 평균 → 판정 한 번에"""
    validated = validate_grades(raw_grades, subjects)
    computation = compute_average(validated.accepted, subjects)
    # 응답용 성적도 커리큘럼 순서로
    ordered = {s: validated.accepted[s] for s in subjects if s in validated.accepted}
    return AverageResult(
        average=computation.average,
        total_coefficient=computation.total_coefficient,
        status=classify_status(computation.average),
        weak_subjects=find_weak_subjects(ordered, subjects),
        grades=ordered,
    )
