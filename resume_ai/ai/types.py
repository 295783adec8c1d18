from dataclasses import dataclass
from typing import Literal, Protocol

from resume_ai.schemas.resume import InterviewQuestion, ResumeAnalysis


Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class ChatMessage:
    role: Role
    content: str


class AIAnalysisClient(Protocol):
    def analyze(self, text: str, job_description: str | None = None) -> ResumeAnalysis: ...

    def generate_questions(
        self, text: str, job_description: str | None = None
    ) -> list[InterviewQuestion]: ...
