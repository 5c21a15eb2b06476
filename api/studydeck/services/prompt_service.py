"""
Service for generating LLM prompts.
"""

# Longer source texts are truncated to keep requests within token limits
MAX_SOURCE_TEXT_CHARS = 10000


def generate_flashcard_system_instruction() -> str:
    """
    Generate the system instruction for flashcard generation.

    Returns:
        The system instruction string
    """
    return """You are a study assistant. Your task is to turn study material into flashcards.

Rules:
1. Each flashcard has a "front" (a question or term) and a "back" (the answer or definition)
2. Fronts must be answerable from the provided text alone
3. Backs must be concise: one or two sentences at most
4. "tags" is a short list of topic keywords for the card (may be empty)
5. Do not produce duplicate cards
6. Always return valid JSON in the specified format"""


def generate_flashcard_prompt(text: str, count: int) -> str:
    """
    Generate the user prompt for flashcard generation.

    Args:
        text: Source text to build flashcards from
        count: Number of flashcards to generate

    Returns:
        The user prompt string
    """
    source = text[:MAX_SOURCE_TEXT_CHARS]

    return f"""Generate {count} flashcards based on the following text.
Return ONLY a valid JSON array in this exact format (no markdown, no explanations):
[
  {{
    "front": "string (question or term)",
    "back": "string (answer or definition)",
    "tags": ["string", "string"]
  }}
]

Text:
{source}"""


def generate_note_summary_system_instruction() -> str:
    """System instruction for summarizing a study note."""
    return """You are a study assistant. Your task is to analyze a student's notes.

Rules:
1. "summary" is a concise summary of the text in a few sentences
2. "keyPoints" lists the most important points, each one short sentence
3. "complexity" is exactly one of: "basic", "intermediate", "advanced"
4. "tags" is a short list of topic keywords
5. Always return valid JSON in the specified format"""


def generate_note_summary_prompt(text: str) -> str:
    """
    Generate the user prompt for summarizing a study note.

    Args:
        text: Note content (truncated to MAX_SOURCE_TEXT_CHARS)

    Returns:
        The user prompt string
    """
    source = text[:MAX_SOURCE_TEXT_CHARS]

    return f"""Analyze the following text and provide a summary and key points.
Return ONLY a valid JSON object in this exact format (no markdown, no explanations):
{{
  "summary": "string",
  "keyPoints": ["string", "string"],
  "complexity": "basic" | "intermediate" | "advanced",
  "tags": ["string", "string"]
}}

Text:
{source}"""
