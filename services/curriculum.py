"""
services/curriculum.py

- (level, track) → 과목/계수 표를 읽기 전용 객체로 제공
- 서버 기동 시 config/curriculum_data.py 로부터 한 번 생성하고,
  앱 상태(app.state.curriculum)에 담아 의존성 주입으로 전달한다.
- 변경 API 없음: 과목 표는 MappingProxyType 으로 노출
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

from services.errors import CurriculumConfigError, UnknownExamTypeError, UnknownTrackError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurriculumEntry:
    level_id: str
    track_id: str
    name_ar: str
    name_fr: str
    subjects: Mapping[str, int]     # 순서 보존, 읽기 전용

    @property
    def display_name(self) -> str:
        return f"{self.name_ar} / {self.name_fr}"

    @property
    def total_coefficient(self) -> int:
        return sum(self.subjects.values())


@dataclass(frozen=True)
class Level:
    level_id: str
    name_ar: str
    name_fr: str
    tracks: Mapping[str, CurriculumEntry]

    @property
    def title(self) -> str:
        return self.name_ar


@dataclass(frozen=True)
class ExamType:
    exam_type_id: str
    name_ar: str
    name_fr: str


class CurriculumTable:
    """레벨/트랙 조회 전용 테이블"""

    def __init__(self, levels: Iterable[Level], exam_types: Iterable[ExamType] = (), version: str = ""):
        self._levels = MappingProxyType({lv.level_id: lv for lv in levels})
        self._exam_types = MappingProxyType({et.exam_type_id: et for et in exam_types})
        self.version = version

    def lookup(self, level_id: str, track_id: str) -> CurriculumEntry:
        level = self.get_level(level_id)
        entry = level.tracks.get(track_id)
        if entry is None:
            raise UnknownTrackError(level_id, track_id)
        return entry

    def get_level(self, level_id: str) -> Level:
        level = self._levels.get(level_id)
        if level is None:
            raise UnknownTrackError(level_id)
        return level

    def list_levels(self) -> list[Level]:
        return list(self._levels.values())

    def list_tracks(self, level_id: str) -> list[CurriculumEntry]:
        return list(self.get_level(level_id).tracks.values())

    def list_exam_types(self) -> list[ExamType]:
        return list(self._exam_types.values())

    def check_exam_type(self, exam_type: Optional[str]) -> Optional[str]:
        if exam_type is None or exam_type in self._exam_types:
            return exam_type
        raise UnknownExamTypeError(exam_type)

    def level_title(self, level_id: str) -> str:
        """알림/리포트용 레벨 제목. 모르는 레벨이면 id 그대로 반환"""
        level = self._levels.get(level_id)
        return level.title if level else level_id

    def __contains__(self, level_id: object) -> bool:
        return level_id in self._levels


# ==========================================================
# [로딩] 정적 설정 dict → CurriculumTable
# ==========================================================
def _build_subjects(level_id: str, track_id: str, raw_subjects: Any) -> Mapping[str, int]:
    pairs = raw_subjects.items() if isinstance(raw_subjects, Mapping) else raw_subjects
    subjects: dict[str, int] = {}
    for name, coefficient in pairs:
        if name in subjects:
            raise CurriculumConfigError(f"Duplicate subject '{name}' in {level_id}/{track_id}")
        # bool 은 int 의 하위 클래스라서 별도로 걸러야 함
        if isinstance(coefficient, bool) or not isinstance(coefficient, int) or coefficient <= 0:
            raise CurriculumConfigError(
                f"Coefficient for '{name}' in {level_id}/{track_id} must be a positive integer"
            )
        subjects[name] = coefficient
    if not subjects:
        raise CurriculumConfigError(f"Track {level_id}/{track_id} has no subjects")
    return MappingProxyType(subjects)


def build_curriculum(levels: Mapping[str, Any], exam_types: Mapping[str, Any] | None = None,
                     version: str = "") -> CurriculumTable:
    built_levels = []
    for level_id, raw_level in levels.items():
        tracks = {}
        for track_id, raw_track in raw_level.get("tracks", {}).items():
            tracks[track_id] = CurriculumEntry(
                level_id=level_id,
                track_id=track_id,
                name_ar=raw_track.get("name_ar", track_id),
                name_fr=raw_track.get("name_fr", track_id),
                subjects=_build_subjects(level_id, track_id, raw_track["subjects"]),
            )
        if not tracks:
            raise CurriculumConfigError(f"Level {level_id} has no tracks")
        built_levels.append(Level(
            level_id=level_id,
            name_ar=raw_level.get("name_ar", level_id),
            name_fr=raw_level.get("name_fr", level_id),
            tracks=MappingProxyType(tracks),
        ))

    built_exam_types = [
        ExamType(exam_type_id=key, name_ar=raw.get("name_ar", key), name_fr=raw.get("name_fr", key))
        for key, raw in (exam_types or {}).items()
    ]
    table = CurriculumTable(built_levels, built_exam_types, version=version)
    logger.info("Curriculum %s loaded: %d levels, %d tracks", version or "-",
                len(built_levels), sum(len(lv.tracks) for lv in built_levels))
    return table


def load_default_curriculum() -> CurriculumTable:
    from config.curriculum_data import CURRICULUM_VERSION, EXAM_TYPES, LEVELS
    return build_curriculum(LEVELS, EXAM_TYPES, version=CURRICULUM_VERSION)
