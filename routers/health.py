from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from dependencies.app_state import get_curriculum
from services.curriculum import CurriculumTable

router = APIRouter(tags=["Meta"])


@router.get("/health")
def health(curriculum: CurriculumTable = Depends(get_curriculum)):
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "curriculum_version": curriculum.version,
    }
