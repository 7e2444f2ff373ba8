"""
===============================================================================
Artb Gemini Client
===============================================================================
Thin wrapper around google-generativeai for the feedback and chat routes.

Handles:
- One-shot image critique (prompt + inline image part)
- One chat turn with the curator system instruction
- Text extraction from responses, rejecting empty or blocked results

Provider exceptions propagate unchanged; the caller maps them to the
client-safe error taxonomy.
"""

from typing import Any, Dict, List

import google.generativeai as genai

from utils.config import DEFAULT_GEMINI_MODEL
from utils.prompts import CHAT_SYSTEM_PROMPT


def extract_text(response: Any) -> str:
    """
    Pull the generated text out of a Gemini response.

    Falls back to concatenating candidate parts when ``response.text`` is
    unavailable (multi-part answers).

    Raises:
        ValueError: If the response holds no text (blocked or empty).
    """
    try:
        text = response.text
    except (ValueError, AttributeError):
        text = None

    if not text:
        parts = []
        for candidate in getattr(response, "candidates", None) or []:
            content = getattr(candidate, "content", None)
            for part in getattr(content, "parts", None) or []:
                part_text = getattr(part, "text", None)
                if part_text:
                    parts.append(part_text)
        text = "\n".join(parts)

    if not text or not text.strip():
        raise ValueError("Gemini response contained no text")
    return text


class GeminiFeedbackClient:
    """
    Gemini-backed generator for artwork feedback.

    Args:
        api_key (str): Google AI API key.
        model_name (str): Gemini model identifier.
    """

    def __init__(self, api_key: str, model_name: str = DEFAULT_GEMINI_MODEL):
        genai.configure(api_key=api_key)
        self.model_name = model_name
        self._model = genai.GenerativeModel(model_name=model_name)
        self._chat_model = genai.GenerativeModel(
            model_name=model_name,
            system_instruction=CHAT_SYSTEM_PROMPT,
        )

    def critique_image(self, prompt: str, image_bytes: bytes, mime_type: str) -> str:
        image_part = {"mime_type": mime_type, "data": image_bytes}
        response = self._model.generate_content([prompt, image_part])
        return extract_text(response)

    def reply(self, message: str, history: List[Dict[str, Any]]) -> str:
        session = self._chat_model.start_chat(history=history)
        response = session.send_message(message)
        return extract_text(response)
