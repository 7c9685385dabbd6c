from fastapi import APIRouter, Depends

from dependencies.app_state import get_curriculum
from schemas.curriculum import exam_type_out, level_summary, track_detail, track_summary
from services.curriculum import CurriculumTable

router = APIRouter(prefix="/curriculum", tags=["커리큘럼"])


# ✅ [READ] 전체 레벨 + 트랙 목록 (선택 UI 채우기용)
@router.get("/levels")
def list_levels(curriculum: CurriculumTable = Depends(get_curriculum)):
    return {
        "success": True,
        "data": [level_summary(lv).model_dump() for lv in curriculum.list_levels()],
        "message": f"curriculum {curriculum.version}",
    }


# ✅ [READ] 특정 레벨의 트랙 목록
@router.get("/levels/{level_id}/tracks")
def list_tracks(level_id: str, curriculum: CurriculumTable = Depends(get_curriculum)):
    return {
        "success": True,
        "data": [track_summary(t).model_dump() for t in curriculum.list_tracks(level_id)],
    }


# ✅ [READ] 특정 트랙의 과목/계수
@router.get("/levels/{level_id}/tracks/{track_id}")
def read_track(level_id: str, track_id: str, curriculum: CurriculumTable = Depends(get_curriculum)):
    entry = curriculum.lookup(level_id, track_id)
    return {"success": True, "data": track_detail(entry).model_dump()}


# ✅ [READ] 시험 종류 목록
@router.get("/exam-types")
def list_exam_types(curriculum: CurriculumTable = Depends(get_curriculum)):
    return {
        "success": True,
        "data": [exam_type_out(et).model_dump() for et in curriculum.list_exam_types()],
    }
