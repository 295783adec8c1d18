from __future__ import annotations

from resume_ai.ai.types import ChatMessage

_ANALYSIS_SCHEMA = (
    '{"score": number 0-100, "summary": string, "strengths": [string], "improvements": [string], '
    '"kinh_nghiem_lam_viec": {"noi_dung": string, "de_xuat": string, "ly_do": string}, '
    '"hoc_van": {"noi_dung": string, "de_xuat": string, "ly_do": string}, '
    '"ky_nang": {"noi_dung": string, "de_xuat": string, "ly_do": string}}'
)

_QUESTIONS_SCHEMA = '{"questions": [{"id": integer, "question": string, "expectedDuration": integer}]}'


def _job_description_block(job_description: str | None) -> str:
    if not job_description:
        return ""
    return f"\n\nMÔ TẢ CÔNG VIỆC:\n{job_description}"


def build_analysis_messages(resume_text: str, job_description: str | None) -> list[ChatMessage]:
    system = (
        "Bạn là chuyên gia tuyển dụng và tư vấn CV. "
        "Đánh giá CV một cách khách quan, cụ thể và trả lời bằng tiếng Việt. "
        "Nếu có mô tả công việc, chấm điểm mức độ phù hợp của CV với vị trí đó; "
        "nếu không, chấm điểm chất lượng tổng thể của CV. "
        "Chỉ trả về JSON hợp lệ theo schema: " + _ANALYSIS_SCHEMA + ". "
        "Trong mỗi mục, 'noi_dung' trích nội dung hiện tại, 'de_xuat' là nội dung viết lại, "
        "'ly_do' giải thích vì sao nên sửa. Nếu thiếu thông tin, dùng chuỗi rỗng hoặc danh sách rỗng."
    )
    user = f"CV:\n{resume_text}{_job_description_block(job_description)}"
    return [ChatMessage(role="system", content=system), ChatMessage(role="user", content=user)]


def build_question_messages(
    resume_text: str,
    job_description: str | None,
    *,
    question_count: int,
    question_seconds: int,
) -> list[ChatMessage]:
    system = (
        "Bạn là người phỏng vấn tuyển dụng giàu kinh nghiệm. "
        f"Dựa trên CV (và mô tả công việc nếu có), tạo đúng {question_count} câu hỏi phỏng vấn bằng tiếng Việt, "
        "xen kẽ câu hỏi chuyên môn, tình huống và hành vi, bám sát kinh nghiệm thực tế trong CV. "
        f"'expectedDuration' là số giây dành cho câu trả lời, mặc định {question_seconds}. "
        "Chỉ trả về JSON hợp lệ theo schema: " + _QUESTIONS_SCHEMA + "."
    )
    user = f"CV:\n{resume_text}{_job_description_block(job_description)}"
    return [ChatMessage(role="system", content=system), ChatMessage(role="user", content=user)]
