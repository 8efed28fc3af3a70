"""Health check service for dependency verification."""

import time
from typing import Any, Dict

from openai import AuthenticationError

from vectorflow.core.config import settings
from vectorflow.services.database import DocumentStore
from vectorflow.services.llm import LLMService


async def check_store(store: DocumentStore) -> Dict[str, Any]:
    """
    Check document store connectivity.

    Args:
        store: DocumentStore instance.

    Returns:
        Health status dictionary.
    """
    if not store.configured:
        return {"status": "not_configured", "error": "Credentials not set"}
    try:
        start_time = time.time()
        pool = await store.get_pool()
        async with pool.acquire() as conn:
            await conn.execute("SELECT 1")
        latency_ms = (time.time() - start_time) * 1000

        return {
            "status": "healthy",
            "latency_ms": round(latency_ms, 2),
        }
    except Exception as e:
        return {
            "status": "unhealthy",
            "error": str(e),
            "latency_ms": 0,
        }


async def check_llm(llm_service: LLMService) -> Dict[str, Any]:
    """
    Check the language-model API through the service's own client.

    Args:
        llm_service: LLMService instance.

    Returns:
        Health status dictionary.
    """
    if not settings.openai_api_key:
        return {"status": "not_configured", "error": "API key not set"}
    try:
        start_time = time.time()
        await llm_service.client.models.list()
        latency_ms = (time.time() - start_time) * 1000

        return {
            "status": "healthy",
            "latency_ms": round(latency_ms, 2),
        }
    except AuthenticationError:
        return {"status": "unhealthy", "error": "Invalid API key"}
    except Exception as e:
        return {
            "status": "unhealthy",
            "error": str(e),
            "latency_ms": 0,
        }
