from __future__ import annotations

import json
import re
import time
from typing import Any, Dict, List, Optional

from openai import OpenAI

from config.llm_routes import ROUTES
from config.settings import Settings, get_settings
from utils.api_logger import log_call, sha256_text


def extract_json(text: Optional[str]) -> Optional[Dict[str, Any]]:
    """Parse a JSON object out of a model reply: raw, fenced block, or first {...} slice."""
    if not text:
        return None
    candidates = [text]
    m = re.search(r"```(?:json)?\s*\n([\s\S]*?)\n```", text)
    if m:
        candidates.append(m.group(1))
    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end != -1 and end > start:
        candidates.append(text[start : end + 1])
    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except ValueError:
            continue
        if isinstance(parsed, dict):
            return parsed
    return None


class LLMClient:
    """Minimal wrapper to centralize per-use-case routing and call tracing."""

    def __init__(self, settings: Optional[Settings] = None, client: Any = None) -> None:
        self.settings = settings or get_settings()
        if not self.settings.openai_api_key and client is None:
            raise ValueError("OPENAI_API_KEY must be set to use the LLM client")
        self._client = client or OpenAI(
            api_key=self.settings.openai_api_key,
            timeout=self.settings.request_timeout_seconds,
        )

    def _route(self, use_case: str) -> Dict[str, Any]:
        return ROUTES.get(use_case, {})

    def chat(
        self,
        *,
        use_case: str,
        messages: List[Dict[str, str]],
        temperature: Optional[float] = None,
        prompt_name: Optional[str] = None,
        prompt_text: Optional[str] = None,
    ) -> Any:
        route = self._route(use_case)
        provider = route.get("provider", "openai")
        model = route.get("model") or self.settings.openai_model or route.get("default_model") or "gpt-3.5-turbo"
        op = route.get("operation", "chat")
        temp = temperature if temperature is not None else route.get("temperature")

        if provider != "openai":
            raise NotImplementedError(f"Provider not implemented: {provider}")

        kwargs: Dict[str, Any] = {"model": model, "messages": messages}
        # Only pass temperature if explicitly provided (some models only accept default)
        if temp is not None:
            kwargs["temperature"] = temp
        if route.get("max_tokens"):
            kwargs["max_tokens"] = route["max_tokens"]

        t0 = time.time()
        try:
            resp = self._client.chat.completions.create(**kwargs)
        except Exception as e:
            log_call(
                settings=self.settings,
                caller=f"llm_client.chat:{use_case}",
                provider=provider,
                model=model,
                operation=op,
                prompt_name=prompt_name,
                prompt_hash=sha256_text(prompt_text),
                duration_ms=int((time.time() - t0) * 1000),
                status="error",
                error=str(e),
            )
            raise
        duration_ms = int((time.time() - t0) * 1000)

        usage_obj = None
        usage = getattr(resp, "usage", None)
        if usage:
            usage_obj = {
                "prompt_tokens": getattr(usage, "prompt_tokens", None),
                "completion_tokens": getattr(usage, "completion_tokens", None),
                "total_tokens": getattr(usage, "total_tokens", None),
            }

        log_call(
            settings=self.settings,
            caller=f"llm_client.chat:{use_case}",
            provider=provider,
            model=model,
            operation=op,
            prompt_name=prompt_name,
            prompt_hash=sha256_text(prompt_text),
            duration_ms=duration_ms,
            status="ok",
            usage=usage_obj,
        )
        return resp

    def complete(self, system_prompt: str, user_prompt: str, *, use_case: str = "query_parsing") -> str:
        """Run a two-message chat and return the raw text of the first choice."""
        resp = self.chat(
            use_case=use_case,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            prompt_name=use_case,
            prompt_text=system_prompt,
        )
        return resp.choices[0].message.content or ""


def build_llm_client(settings: Optional[Settings] = None) -> Optional[LLMClient]:
    """Return an LLM client when credentials allow it, otherwise None (feature off)."""
    settings = settings or get_settings()
    if not settings.llm_available:
        return None
    return LLMClient(settings)
