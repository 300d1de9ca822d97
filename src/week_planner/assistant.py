"""AI planning assistant over an OpenAI-compatible chat completions API.

Three helpers feed the planner: rewriting a vision statement, proposing
12-week goals for a vision, and proposing weekly tactics for a goal. Every
failure (network, HTTP status, malformed JSON) surfaces as ``AssistantError``
so the caller can show a notice without touching the state.
"""
import json
import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from week_planner.config import DEFAULT_BASE_URL, DEFAULT_MODEL, Settings
from week_planner.exceptions import AssistantError, ConfigError
from week_planner.models import DEFAULT_TACTIC_MINUTES

logger = logging.getLogger(__name__)

TIMEOUT_SECONDS = 60.0

SYSTEM_PROMPT = (
    "You are a productivity coach who is an expert in the 12 Week Year method. "
    "Help the user build actionable, high-impact plans. Focus on execution, "
    "leading indicators and time blocking. Keep answers short and direct."
)

VISION_PROMPT = (
    "Rewrite and polish the following vision draft into an inspiring, concrete and "
    "emotionally rich vision statement for three years from now. Keep it under 150 words.\n\n"
    'Current draft: "{vision}"'
)

GOALS_PROMPT = (
    'Based on this vision: "{vision}", suggest 3 specific, high-impact 12-week goals '
    "that follow the SMART criteria. Answer with a JSON array only, where each item is "
    'an object with string fields "title" (short, punchy) and "description" (SMART detail).'
)

TACTICS_PROMPT = (
    'For the goal "{title}" ({description}), generate 5 concrete tactics or one-off actions '
    "that can be executed this week. They should be high-leverage activities. Answer with a "
    'JSON array only, where each item is an object with a string field "title" and an '
    'integer field "durationMinutes" (estimated minutes, e.g. 30, 60, 90).'
)


@dataclass(frozen=True)
class GoalProposal:
    title: str
    description: str


@dataclass(frozen=True)
class TacticProposal:
    title: str
    duration_minutes: int = DEFAULT_TACTIC_MINUTES


def parse_json_answer(content: str) -> Any:
    """Parse a JSON answer, unwrapping a Markdown code fence if present."""
    if "```json" in content:
        content = content.split("```json")[1].split("```")[0]
    elif "```" in content:
        content = content.split("```")[1].split("```")[0]
    return json.loads(content.strip() or "[]")


class Assistant:
    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = DEFAULT_BASE_URL,
        model: str = DEFAULT_MODEL,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "Assistant":
        return cls(settings.api_key, base_url=settings.base_url, model=settings.model)

    def _complete(self, prompt: str, operation: str) -> str:
        if not self.api_key:
            raise ConfigError(
                "No API key configured for the assistant.",
                hint="Set WEEK_PLANNER_API_KEY (or OPENAI_API_KEY) and restart.",
            )
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "temperature": 0.7,
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}
        try:
            with httpx.Client(timeout=TIMEOUT_SECONDS, transport=self._transport) as client:
                response = client.post(f"{self.base_url}/chat/completions", headers=headers, json=payload)
                response.raise_for_status()
                data = response.json()
            return data["choices"][0]["message"]["content"] or ""
        except httpx.HTTPStatusError as e:
            logger.error("%s failed: HTTP %s", operation, e.response.status_code)
            raise AssistantError(f"Assistant request failed with HTTP {e.response.status_code}.", operation) from e
        except httpx.HTTPError as e:
            logger.error("%s failed: %s", operation, e)
            raise AssistantError(f"Could not reach the assistant: {e}", operation) from e
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.error("%s returned an unexpected response: %s", operation, e)
            raise AssistantError("The assistant returned an unexpected response.", operation) from e

    def _complete_list(self, prompt: str, operation: str) -> list:
        content = self._complete(prompt, operation)
        try:
            items = parse_json_answer(content)
        except ValueError as e:
            logger.error("%s returned invalid JSON: %r", operation, content[:200])
            raise AssistantError("The assistant's answer was not valid JSON.", operation) from e
        if not isinstance(items, list):
            raise AssistantError("The assistant's answer was not a list.", operation)
        return items

    def enhance_vision(self, vision: str) -> str:
        if not vision.strip():
            return ""
        text = self._complete(VISION_PROMPT.format(vision=vision), "enhance_vision")
        return text.strip() or vision

    def suggest_goals(self, vision: str) -> list[GoalProposal]:
        if not vision.strip():
            return []
        items = self._complete_list(GOALS_PROMPT.format(vision=vision), "suggest_goals")
        try:
            return [GoalProposal(title=str(i["title"]), description=str(i["description"])) for i in items]
        except (KeyError, TypeError) as e:
            raise AssistantError("A suggested goal was missing its title or description.", "suggest_goals") from e

    def generate_tactics(self, title: str, description: str) -> list[TacticProposal]:
        prompt = TACTICS_PROMPT.format(title=title, description=description)
        items = self._complete_list(prompt, "generate_tactics")
        try:
            return [
                TacticProposal(title=str(i["title"]), duration_minutes=int(i["durationMinutes"]))
                for i in items
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise AssistantError("A suggested tactic was missing its title or duration.", "generate_tactics") from e
