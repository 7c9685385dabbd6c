from pydantic import BaseModel
from typing import List

from services.curriculum import CurriculumEntry, ExamType, Level


# ✅ 출력용: 트랙 요약 (선택 UI 채우기용)
class TrackSummary(BaseModel):
    track_id: str
    name_ar: str
    name_fr: str
    label: str                               # "علوم تجريبية / Sciences Expérimentales"


class LevelSummary(BaseModel):
    level_id: str
    name_ar: str
    name_fr: str
    tracks: List[TrackSummary]


class SubjectOut(BaseModel):
    name: str                                # 과목 이름
    coefficient: int                         # 계수


class TrackDetail(TrackSummary):
    level_id: str
    subjects: List[SubjectOut]               # 표시 순서 유지
    total_coefficient: int


class ExamTypeOut(BaseModel):
    exam_type_id: str
    name_ar: str
    name_fr: str


def track_summary(entry: CurriculumEntry) -> TrackSummary:
    return TrackSummary(track_id=entry.track_id, name_ar=entry.name_ar,
                        name_fr=entry.name_fr, label=entry.display_name)


def level_summary(level: Level) -> LevelSummary:
    return LevelSummary(
        level_id=level.level_id,
        name_ar=level.name_ar,
        name_fr=level.name_fr,
        tracks=[track_summary(t) for t in level.tracks.values()],
    )


def track_detail(entry: CurriculumEntry) -> TrackDetail:
    return TrackDetail(
        level_id=entry.level_id,
        track_id=entry.track_id,
        name_ar=entry.name_ar,
        name_fr=entry.name_fr,
        label=entry.display_name,
        subjects=[SubjectOut(name=name, coefficient=c) for name, c in entry.subjects.items()],
        total_coefficient=entry.total_coefficient,
    )


def exam_type_out(exam_type: ExamType) -> ExamTypeOut:
    return ExamTypeOut(exam_type_id=exam_type.exam_type_id,
                       name_ar=exam_type.name_ar, name_fr=exam_type.name_fr)
