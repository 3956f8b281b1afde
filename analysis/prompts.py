"""
Prompt templates for interview analysis.

Each operation has a fixed system instruction plus a content template.
Language labels, summary variants and the bilingual fallback messages
(Traditional Chinese / Vietnamese) live here so the service layer stays
free of string literals.
"""

from typing import Dict, Literal

SummaryType = Literal["concise", "detailed", "keypoints"]
TargetLanguage = Literal["zh", "vi"]

DEFAULT_SUMMARY_TYPE: SummaryType = "concise"

# ── Bilingual sentinel messages ───────────────────────────────────────────────
FEEDBACK_KEY_MISSING_MESSAGE = (
    "API Key 未設置。請在 .env 中設置 GEMINI_API_KEY / "
    "API Key chưa được cấu hình. Vui lòng đặt GEMINI_API_KEY trong .env"
)
SUMMARY_KEY_MISSING_MESSAGE = "API Key 未設置。/ API Key chưa được cấu hình."
FEEDBACK_UNAVAILABLE_MESSAGE = (
    "AI 暫時無法回應 (已達流量限制或出現錯誤)。請稍候 1 分鐘後再試。/ "
    "AI tạm thời không phản hồi (đã đạt giới hạn lưu lượng hoặc gặp lỗi). "
    "Vui lòng thử lại sau 1 phút."
)

# ── Temperatures ──────────────────────────────────────────────────────────────
FEEDBACK_TEMPERATURE = 0.7
TRANSLATION_TEMPERATURE = 0.3
SUMMARY_TEMPERATURE = 0.5

_LANGUAGE_LABELS: Dict[str, str] = {
    "zh": "Traditional Chinese",
    "vi": "Vietnamese",
}


def language_label(target_language: str) -> str:
    """Human language name for a target code; anything but 'zh' maps to Vietnamese."""
    return _LANGUAGE_LABELS.get(target_language, _LANGUAGE_LABELS["vi"])


def _answers_block(question: str, male_answer: str, female_answer: str) -> str:
    return (
        f"Question: {question}\n"
        f"Groom's Answer: {male_answer}\n"
        f"Bride's Answer: {female_answer}\n"
    )


# ── Feedback ──────────────────────────────────────────────────────────────────

def feedback_instruction(target_language_name: str) -> str:
    return (
        "You are an expert consultant for Taiwan-Vietnam marriage interviews.\n"
        "Your goal is to analyze the answers from both the groom and the bride, "
        "point out any inconsistencies, and provide professional advice to make "
        "their answers more persuasive, consistent, and authentic.\n"
        f"IMPORTANT: You must provide your response entirely in {target_language_name}."
    )


def feedback_contents(
    question: str, male_answer: str, female_answer: str, target_language_name: str
) -> str:
    return (
        _answers_block(question, male_answer, female_answer)
        + f"\nPlease provide feedback and suggestions in {target_language_name}."
    )


# ── Translation ───────────────────────────────────────────────────────────────

def translation_instruction(target_language: str) -> str:
    return (
        "You are a professional translator specializing in Taiwan and Vietnam cultural context.\n"
        f"Translate the given text into {language_label(target_language)}.\n"
        "Maintain the original meaning and emotional tone.\n"
        "Only return the translated text. Do not add any explanation or markers."
    )


# ── Summary ───────────────────────────────────────────────────────────────────

_SUMMARY_INSTRUCTIONS: Dict[str, str] = {
    "concise": (
        "You are a concise summarization tool. Summarize the following content "
        "in under 30 words as a single paragraph."
    ),
    "detailed": (
        "You are a detailed summarization tool. Summarize the following content "
        "in about 100 words with details."
    ),
    "keypoints": (
        "You are a key points extraction tool. List the most important 3 to 5 "
        "key points as a bulleted list."
    ),
}


def is_summary_type(value: str) -> bool:
    return value in _SUMMARY_INSTRUCTIONS


def summary_instruction(target_language_name: str, summary_type: str = DEFAULT_SUMMARY_TYPE) -> str:
    """Instruction for the given variant; unknown variants fall back to concise."""
    base = _SUMMARY_INSTRUCTIONS.get(summary_type, _SUMMARY_INSTRUCTIONS[DEFAULT_SUMMARY_TYPE])
    return f"{base} You MUST respond entirely in {target_language_name}."


def summary_contents(answer: str) -> str:
    return f"Content to summarize: {answer}"


# ── Consistency check ─────────────────────────────────────────────────────────

CONSISTENCY_INSTRUCTION = (
    "You are a fact-checking assistant for marriage interviews.\n"
    "Compare the Groom's and Bride's answers to the given question.\n"
    "Determine if they are semantically contradictory "
    "(e.g., different dates, different locations, different people).\n"
    "Ignore minor phrasing differences. Focus only on factual conflicts.\n"
    "Respond only in JSON format."
)


def consistency_contents(question: str, male_answer: str, female_answer: str) -> str:
    return _answers_block(question, male_answer, female_answer) + "\nCheck for factual contradictions."
