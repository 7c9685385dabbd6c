"""
services/errors.py

- 서비스 계층에서 발생시키는 도메인 예외 모음
- 각 예외는 HTTP 상태코드와 에러 코드를 함께 들고 다니며,
  middlewares/error_handler.py 가 표준 JSON 에러 포맷으로 변환한다.
"""


class GradingAppError(Exception):
    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class CurriculumConfigError(GradingAppError):
    """정적 커리큘럼 설정표가 잘못된 경우 (서버 기동 시점)"""
    code = "CURRICULUM_CONFIG_ERROR"


class UnknownTrackError(GradingAppError):
    status_code = 404
    code = "UNKNOWN_TRACK"

    def __init__(self, level_id: str, track_id: str | None = None):
        if track_id is None:
            message = f"Unknown level: {level_id}"
        else:
            message = f"Unknown track: {level_id}/{track_id}"
        super().__init__(message)
        self.level_id = level_id
        self.track_id = track_id


class UnknownExamTypeError(GradingAppError):
    status_code = 400
    code = "UNKNOWN_EXAM_TYPE"

    def __init__(self, exam_type: str):
        super().__init__(f"Unknown exam type: {exam_type}")
        self.exam_type = exam_type


class SessionRequiredError(GradingAppError):
    status_code = 400
    code = "SESSION_REQUIRED"

    def __init__(self):
        super().__init__("Session ID required")


class InvalidSessionIdError(GradingAppError):
    status_code = 400
    code = "INVALID_SESSION_ID"

    def __init__(self, max_length: int):
        super().__init__(f"Session ID must be at most {max_length} characters")


class SessionNotFoundError(GradingAppError):
    status_code = 404
    code = "SESSION_NOT_FOUND"

    def __init__(self, session_id: str):
        super().__init__("Session not found")
        self.session_id = session_id


class NoGradesError(GradingAppError):
    status_code = 400
    code = "NO_GRADES"

    def __init__(self):
        super().__init__("No grades found for this session")


class AdvisorNotConfiguredError(GradingAppError):
    status_code = 503
    code = "AI_NOT_CONFIGURED"

    def __init__(self):
        super().__init__("AI advisor is not configured")


class AdvisorError(GradingAppError):
    status_code = 502
    code = "AI_UPSTREAM_ERROR"


class NotificationError(GradingAppError):
    status_code = 502
    code = "NOTIFICATION_FAILED"
