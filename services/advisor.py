"""
services/advisor.py

- Gemini(LangChain) 기반 성적 조언 서비스
- 프롬프트 생성은 순수 함수로 분리 (테스트 용이)
- API 키가 없으면 AdvisorNotConfiguredError, 호출 실패는 AdvisorError 로 변환
"""

import logging
from typing import Mapping, Optional

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from services.curriculum import CurriculumEntry
from services.errors import AdvisorError, AdvisorNotConfiguredError

logger = logging.getLogger(__name__)

SUGGESTIONS_SYSTEM_PROMPT = (
    "أنت مستشار تربوي متخصص في النظام التعليمي المغربي. تقدم نصائح عملية ومفيدة للطلاب."
)
CHAT_SYSTEM_PROMPT = "أنت مساعد ذكي لتحليل نقاط الطالب وإعطاء نصائح لتحسين المعدل."


# ==========================================================
# [프롬프트 생성]
# ==========================================================
def format_grade_lines(grades: Mapping[str, float], subjects: Mapping[str, int]) -> str:
    return "\n".join(
        f"{subject}: {grade:g}/20 (معامل {subjects.get(subject, '-')})"
        for subject, grade in grades.items()
    )


def build_suggestions_prompt(level_title: str, entry: CurriculumEntry,
                             grades: Mapping[str, float], average: float) -> str:
    return f"""
أنت مستشار تربوي خبير للطلاب المغاربة. إليك درجات طالب في {level_title} ({entry.display_name}):

{format_grade_lines(grades, entry.subjects)}

المعدل العام: {average:.2f}/20

قدم:
1. تحليل سريع للأداء
2. أهم 3 نصائح للتحسين
3. المواد التي تحتاج تركيز أكبر
4. استراتيجية للمراجعة

اجعل الإجابة مختصرة ومفيدة باللغة العربية.""".strip()


def build_chat_prompt(question: str, entry: Optional[CurriculumEntry] = None,
                      grades: Optional[Mapping[str, float]] = None,
                      average: Optional[float] = None) -> str:
    if not entry or not grades:
        return question
    return (
        f"نقاط الطالب ({entry.display_name}):\n"
        f"{format_grade_lines(grades, entry.subjects)}\n"
        f"المعدل العام: {average:.2f}/20\n\n"
        f"سؤال الطالب: {question}"
    )


# ==========================================================
# [LLM 호출]
# ==========================================================
class GradeAdvisor:
    def __init__(self, api_key: Optional[str], model: str, temperature: float = 0.7, max_tokens: int = 500):
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._llm: Optional[ChatGoogleGenerativeAI] = None

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def _get_llm(self) -> ChatGoogleGenerativeAI:
        if not self.configured:
            raise AdvisorNotConfiguredError()
        if self._llm is None:
            self._llm = ChatGoogleGenerativeAI(
                model=self.model,
                google_api_key=self.api_key,
                temperature=self.temperature,
                max_output_tokens=self.max_tokens,
            )
        return self._llm

    async def ask(self, system_prompt: str, user_prompt: str) -> str:
        llm = self._get_llm()
        messages = [SystemMessage(content=system_prompt), HumanMessage(content=user_prompt)]
        try:
            resp = await llm.ainvoke(messages)
        except Exception as e:
            logger.error(f"Gemini request failed: {e}")
            raise AdvisorError("Failed to generate suggestions") from e

        content = getattr(resp, "content", "") or ""
        if isinstance(content, list):
            # 멀티파트 응답 → 텍스트만 이어 붙임
            content = "".join(p.get("text", "") if isinstance(p, dict) else str(p) for p in content)
        if not content.strip():
            raise AdvisorError("لم أتمكن من الحصول على إجابة من الذكاء الاصطناعي.")
        return content.strip()

    async def suggest(self, level_title: str, entry: CurriculumEntry,
                      grades: Mapping[str, float], average: float) -> str:
        prompt = build_suggestions_prompt(level_title, entry, grades, average)
        return await self.ask(SUGGESTIONS_SYSTEM_PROMPT, prompt)

    async def chat(self, question: str, entry: Optional[CurriculumEntry] = None,
                   grades: Optional[Mapping[str, float]] = None, average: Optional[float] = None) -> str:
        prompt = build_chat_prompt(question, entry, grades, average)
        return await self.ask(CHAT_SYSTEM_PROMPT, prompt)
