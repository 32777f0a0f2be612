"""
Health resources and the keyword-matched health assistant.

Replies are canned content from core/content.yaml; no model is called.
"""
import logging

from core.content_registry import (
    get_assistant_topics,
    get_emergency_assist_reply,
    get_emergency_content,
    get_fallback_reply,
    get_physical_content,
)
from core.middleware import get_metrics_collector
from schemas import (
    ChatResponse,
    EmergencyAssistResponse,
    EmergencyResourcesResponse,
    PhysicalResourcesResponse,
)

logger = logging.getLogger(__name__)


class AssistantService:
    """Serves static health resources and answers assistant messages."""

    def emergency_resources(self) -> EmergencyResourcesResponse:
        return EmergencyResourcesResponse(**get_emergency_content())

    def physical_resources(self) -> PhysicalResourcesResponse:
        return PhysicalResourcesResponse(**get_physical_content())

    def chat(self, message: str) -> ChatResponse:
        """
        Reply to a chat message.

        The first topic with a keyword contained in the (lower-cased) message
        wins; otherwise the general fallback reply is used.
        """
        text = message.lower()
        for topic in get_assistant_topics():
            if any(keyword in text for keyword in topic.keywords):
                logger.debug("Assistant topic matched", extra={"topic": topic.name})
                get_metrics_collector().record_event(f"assistant_{topic.name}")
                return ChatResponse(reply=topic.reply)

        get_metrics_collector().record_event("assistant_fallback")
        return ChatResponse(reply=get_fallback_reply())

    def emergency_assist(self, query: str) -> EmergencyAssistResponse:
        logger.info("Emergency assistance requested", extra={"query_length": len(query)})
        get_metrics_collector().record_event("emergency_assist")
        return EmergencyAssistResponse(response=get_emergency_assist_reply())
