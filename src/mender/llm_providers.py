# src/mender/llm_providers.py

import logging
from typing import Any, Dict, Optional

from agno.models.groq import Groq

from mender.config.config import load_config, load_groq_api_key

logger = logging.getLogger(__name__)


def initialize_groq_provider(config: Optional[Dict[str, Any]] = None) -> Groq:
    """
    Build the Groq model the fixer agent talks to.

    Raises:
        ConfigError when GROQ_API_KEY is not set.
    """
    config = config or load_config()
    model_config = config.get("model") or {}
    api_key = load_groq_api_key()

    model = Groq(
        id=model_config.get("id", "llama-3.3-70b-versatile"),
        api_key=api_key,
        temperature=model_config.get("temperature", 0.2),
    )
    logger.info("Groq provider initialized with model %s", model.id)
    return model
