"""Health check utilities."""

from typing import Dict

from vectorflow.services.database import DocumentStore
from vectorflow.services.health import check_llm, check_store
from vectorflow.services.llm import LLMService


async def check_all_dependencies(store: DocumentStore, llm_service: LLMService) -> Dict:
    """
    Check all service dependencies.

    An unconfigured store does not make the service unhealthy; it only
    disables data operations.

    Args:
        store: Document store.
        llm_service: Language-model service.

    Returns:
        Dictionary with overall status and individual service statuses.
    """
    services = {}
    overall_status = "healthy"

    store_status = await check_store(store)
    services["store"] = store_status
    if store_status.get("status") == "unhealthy":
        overall_status = "unhealthy"

    llm_status = await check_llm(llm_service)
    services["openai"] = llm_status
    if llm_status.get("status") == "unhealthy":
        overall_status = "unhealthy"

    return {"status": overall_status, "services": services}
