from __future__ import annotations

import os


# Central routing for LLM use-cases. Edit here to change per-operation defaults.
# Per-route model can be overridden via env vars for quick testing.
#
# Keys are use_case identifiers consumed by services/llm_client.py
ROUTES: dict[str, dict] = {
    # Query parsing: company, job title and title variations (OpenAI chat)
    "query_parsing": {
        "provider": "openai",
        "model": os.getenv("OPENAI_MODEL_QUERY"),  # falls back to global OPENAI_MODEL, then default_model
        "default_model": "gpt-3.5-turbo",
        "temperature": 0.3,
        "max_tokens": 200,
        # Logical operation name for logging (not a vendor API name)
        "operation": "query_parsing",
    },
}
