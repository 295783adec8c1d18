from functools import lru_cache

from resume_ai.ai.factory import LazyAIClient
from resume_ai.ai.types import AIAnalysisClient
from resume_ai.parsing import DocumentParser
from resume_ai.services.resume_orchestrator import ResumeOrchestrator


@lru_cache(maxsize=1)
def get_document_parser() -> DocumentParser:
    return DocumentParser()


@lru_cache(maxsize=1)
def get_analysis_client() -> AIAnalysisClient:
    return LazyAIClient()


def get_orchestrator() -> ResumeOrchestrator:
    return ResumeOrchestrator(parser=get_document_parser(), ai_client=get_analysis_client())
