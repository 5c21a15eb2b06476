"""
Gemini generateContent client shared by the content generators.

The client receives its HTTP session, API key and model name at construction;
nothing about the model is held in module-level state.
"""
import json
import logging
from typing import Any, Optional

import requests

from studydeck.core.exceptions import GenerationError

logger = logging.getLogger(__name__)

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"


def strip_code_fences(text: str) -> str:
    """Remove a surrounding markdown code block (```json ... ```) if present."""
    text = text.strip()
    if text.startswith('```'):
        lines = text.split('\n')
        text = '\n'.join(lines[1:])
        if text.rstrip().endswith('```'):
            text = text.rstrip()[:-3]
    return text.strip()


class GeminiClient:
    """Sends a prompt to Gemini and returns the JSON the model answered with."""

    def __init__(
        self,
        api_key: str,
        model_name: str = "gemini-2.5-flash",
        http_session: Optional[requests.Session] = None,
        timeout: int = 60
    ):
        self.api_key = api_key
        self.model_name = model_name
        self.http_session = http_session or requests.Session()
        self.timeout = timeout

    @property
    def endpoint(self) -> str:
        return f"{GEMINI_BASE_URL}/{self.model_name}:generateContent"

    def _build_payload(self, prompt: str, system_instruction: str) -> dict:
        return {
            "contents": [{
                "parts": [{
                    "text": prompt
                }]
            }],
            "systemInstruction": {
                "parts": [{
                    "text": system_instruction
                }]
            },
            "generationConfig": {
                "temperature": 0.7,
                "topK": 40,
                "topP": 0.95,
                "maxOutputTokens": 8192,
            }
        }

    def _call(self, payload: dict) -> dict:
        try:
            response = self.http_session.post(
                f"{self.endpoint}?key={self.api_key}",
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout
            )
            response.raise_for_status()
            return response.json()
        except requests.exceptions.RequestException as e:
            error_msg = f"Gemini API request failed: {str(e)}"
            if getattr(e, 'response', None) is not None:
                error_msg += f" - Status: {e.response.status_code}"
            logger.error(error_msg)
            raise GenerationError(error_msg) from e
        except ValueError as e:
            # Body was not JSON
            logger.error(f"Gemini API returned a non-JSON body: {e}")
            raise GenerationError("Gemini API returned a non-JSON body") from e

    def generate_json(self, prompt: str, system_instruction: str) -> Any:
        """
        Run a prompt and parse the model's answer as JSON.

        Raises:
            GenerationError: If the API key is missing, the call fails or the
                answer is empty or not valid JSON
        """
        if not self.api_key:
            raise GenerationError("Google Gemini API key not configured")

        data = self._call(self._build_payload(prompt, system_instruction))

        candidates = data.get('candidates') or []
        if not candidates:
            raise GenerationError("LLM response missing candidates")

        content = candidates[0].get('content') or {}
        parts = content.get('parts') or []
        if not parts:
            raise GenerationError("LLM response missing content or parts")

        raw_text = (parts[0].get('text') or '').strip()
        if not raw_text:
            raise GenerationError("LLM returned empty response")

        try:
            return json.loads(strip_code_fences(raw_text))
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse LLM JSON response: {e}")
            logger.error(f"Response text: {raw_text[:500]}")
            raise GenerationError(f"LLM returned invalid JSON: {str(e)}") from e
