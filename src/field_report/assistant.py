"""Note refinement and monthly insights from a text-generation service.

Failures never reach the user: every problem is logged and the caller gets
None back.
"""
import json
import logging
import threading
from typing import Any, Protocol

import httpx

from field_report.aggregate import MonthSummary
from field_report.config import Settings

logger = logging.getLogger(__name__)

GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/openai/chat/completions"

REFINE_PROMPT = (
    "Refine esta nota de relatório de pregação para que fique mais profissional e "
    "encorajadora em português, sem perder os detalhes principais: \"{note}\""
)
INSIGHTS_PROMPT = (
    "Com base nos dados deste mês de um pioneiro, gere um resumo motivacional curto "
    "(máximo 4 frases) em português. Analise o esforço e dê uma sugestão espiritual "
    "baseada nas notas: {data}"
)


class GenerationError(Exception):
    pass


class TextGenerator(Protocol):
    def generate(self, prompt: str, model: str) -> str: ...


def _extract_text(payload: dict[str, Any]) -> str | None:
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    message = choices[0].get("message") if isinstance(choices[0], dict) else None
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    if isinstance(content, str):
        return content.strip() or None
    return None


class GeminiClient:
    """Gemini through Google's OpenAI-compatible chat completions endpoint."""

    def __init__(
        self,
        api_key: str,
        timeout_seconds: float = 45.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds
        self.transport = transport

    def generate(self, prompt: str, model: str) -> str:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
        }
        with httpx.Client(timeout=self.timeout_seconds, transport=self.transport) as client:
            resp = client.post(GEMINI_URL, headers=headers, json=payload)
            resp.raise_for_status()
            data = resp.json()
        text = _extract_text(data)
        if not text:
            raise GenerationError(f"empty response from {model}")
        return text


class Assistant:
    """Serializes calls to the generator: one request in flight at a time."""

    def __init__(self, generator: TextGenerator | None, note_model: str, insight_model: str):
        self.generator = generator
        self.note_model = note_model
        self.insight_model = insight_model
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "Assistant":
        generator = None
        if settings.llm_enabled and settings.llm_api_key:
            generator = GeminiClient(settings.llm_api_key, settings.llm_timeout_seconds)
        return cls(generator, settings.note_model, settings.insight_model)

    @property
    def enabled(self) -> bool:
        return self.generator is not None

    @property
    def in_flight(self) -> bool:
        return self._lock.locked()

    def _run(self, prompt: str, model: str) -> str | None:
        if self.generator is None:
            return None
        if not self._lock.acquire(blocking=False):
            logger.warning("text generation already in progress, request dropped")
            return None
        try:
            return self.generator.generate(prompt, model).strip() or None
        except Exception:
            logger.exception("text generation failed (model=%s)", model)
            return None
        finally:
            self._lock.release()

    def refine_note(self, note: str) -> str | None:
        if not note or not note.strip():
            return None
        return self._run(REFINE_PROMPT.format(note=note), self.note_model)

    def monthly_insights(self, summary: MonthSummary, notes: list[str]) -> str | None:
        data = json.dumps({
            "fieldHours": summary.field_time.hours,
            "studies": summary.studies,
            "notes": [n for n in notes if n],
        }, ensure_ascii=False)
        return self._run(INSIGHTS_PROMPT.format(data=data), self.insight_model)
