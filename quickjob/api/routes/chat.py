"""
AI chat functions: the knowledge-base support bot and the general assistant.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from quickjob.core.auth_dependency import get_db, get_optional_user
from quickjob.core.config import CHAT_RATE_LIMIT_PER_MINUTE
from quickjob.core.rate_limit import rate_limited
from quickjob.core.responses import error_response, success_response
from quickjob.db.models.user import User
from quickjob.llm.openai_provider import get_llm_provider
from quickjob.llm.provider import LLMProvider
from quickjob.schemas.chat import AssistantRequest, ChatbotRequest
from quickjob.services import chat_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/functions", tags=["AI Chat"])


@router.post("/chatbot-rag", dependencies=[Depends(rate_limited(CHAT_RATE_LIMIT_PER_MINUTE))])
def chatbot_rag(
    body: ChatbotRequest,
    db: Session = Depends(get_db),
    provider: LLMProvider = Depends(get_llm_provider)
):
    try:
        response, context_found = chat_service.answer_with_knowledge_base(db, provider, body.message or "")
        return success_response(response=response, context_found=context_found)
    except Exception as e:
        logger.error(f"Error in chatbot-rag: {e}", exc_info=True)
        return error_response(str(e), response=chat_service.FALLBACK_RESPONSE)


@router.post("/openai-assistant", dependencies=[Depends(rate_limited(CHAT_RATE_LIMIT_PER_MINUTE))])
def openai_assistant(
    body: AssistantRequest,
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
    provider: LLMProvider = Depends(get_llm_provider)
):
    """Signed-in callers get their conversation saved and a session_id to continue it."""
    try:
        response, session_id = chat_service.run_assistant(
            db, provider, body.message or "", user=user, session_id=body.session_id
        )
        return success_response(response=response, session_id=session_id)
    except Exception as e:
        db.rollback()
        logger.error(f"Error in OpenAI assistant: {e}", exc_info=True)
        return error_response(str(e), response=chat_service.FALLBACK_RESPONSE)
