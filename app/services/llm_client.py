"""
LLM Client

Any OpenAI-compatible chat-completions endpoint (by default a local
llama.cpp server running a Mistral instruct model), so we use the openai
library with a custom base_url.

AI is used ONLY for: turning a free-text job description into structured
JSON. Company information never comes from the model.
"""
import asyncio
import json
import logging
import re

from openai import OpenAI

from app.core.config import Settings
from app.core.exceptions import JobAnalysisError

logger = logging.getLogger(__name__)

JOB_EXTRACTION_PROMPT = """You analyze job descriptions and return ONLY valid JSON.
Infer the information from the overall text, even if labels like "Company:" are missing.
Summarize responsibilities and requirements into short points.
Use "Not specified" for any text field you cannot determine and [] for empty lists.
Output format:
{
  "job_title": "string",
  "company": "string",
  "location": "string",
  "salary_range": "string",
  "job_type": "string",
  "responsibilities": ["string"],
  "requirements": ["string"],
  "how_to_apply": "string"
}
Return ONLY the JSON, no explanation."""


def extract_json(text: str) -> dict:
    """
    Extract JSON from a model response.
    Handles markdown code fences and chatter around the object.
    """
    text = (text or "").strip()
    if text.startswith("```json"):
        text = text[7:]
    if text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    text = text.strip()

    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        # fall back to the outermost {...} block
        match = re.search(r"\{.*\}", text, re.DOTALL)
        if not match:
            raise JobAnalysisError("Model response did not contain JSON")
        try:
            data = json.loads(match.group(0))
        except json.JSONDecodeError as e:
            raise JobAnalysisError(f"Model returned malformed JSON: {e}") from e

    if not isinstance(data, dict):
        raise JobAnalysisError("Model returned JSON that is not an object")
    return data


class LLMClient:
    """
    Wrapper around the chat-completions API with the one prompt we need.
    """

    def __init__(self, settings: Settings, client: OpenAI = None):
        self.client = client or OpenAI(
            # local servers ignore the key, the SDK still requires one
            api_key=settings.llm_api_key or "not-needed",
            base_url=settings.llm_base_url,
        )
        self.model = settings.llm_model

    def _call_api(self, system_prompt: str, user_content: str, max_tokens: int = 1000) -> str:
        """
        Internal method to call the completion endpoint.
        Returns raw text response.
        """
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_content}
            ],
            max_tokens=max_tokens,
            temperature=0.1  # Low temp for consistent structured output
        )
        return response.choices[0].message.content or ""

    def parse_job_description(self, jd_text: str) -> dict:
        """Blocking call. Returns the raw extracted dict (not yet validated)."""
        response = self._call_api(JOB_EXTRACTION_PROMPT, jd_text, max_tokens=800)
        return extract_json(response)

    async def aparse_job_description(self, jd_text: str) -> dict:
        return await asyncio.to_thread(self.parse_job_description, jd_text)

    def test_connection(self) -> bool:
        """Test if the LLM endpoint is reachable"""
        try:
            response = self._call_api(
                "You are a test assistant.",
                "Reply with exactly: OK",
                max_tokens=10
            )
            return "OK" in response.upper()
        except Exception as e:
            logger.warning("LLM connection failed: %s", e)
            return False
