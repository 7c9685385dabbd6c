import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from models.feedback import Feedback as FeedbackModel
from schemas.feedback import FeedbackCreate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/feedback", tags=["피드백"])


# ✅ [CREATE] 피드백 제출
@router.post("")
def submit_feedback(body: FeedbackCreate, db: Session = Depends(get_db)):
    record = FeedbackModel(**body.model_dump())
    db.add(record)
    db.commit()
    db.refresh(record)
    logger.info("Feedback received: rating=%d", record.rating)
    return {
        "success": True,
        "data": {"id": record.id, "rating": record.rating},
        "message": "Feedback submitted",
    }
