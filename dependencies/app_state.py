"""
앱 상태(app.state)에 보관한 공용 객체를 라우터에 주입하는 의존성 함수
- curriculum: 서버 기동 시 1회 생성되는 읽기 전용 커리큘럼 표
- advisor: Gemini 조언 서비스
- settings: create_app() 에 전달된 설정
"""
from fastapi import Request

from config.settings import Settings
from services.advisor import GradeAdvisor
from services.curriculum import CurriculumTable
from utils.network import get_client_ip


def get_curriculum(request: Request) -> CurriculumTable:
    return request.app.state.curriculum


def get_advisor(request: Request) -> GradeAdvisor:
    return request.app.state.advisor


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_client_info(request: Request) -> dict:
    return {"ip_address": get_client_ip(request), "user_agent": request.headers.get("user-agent")}
