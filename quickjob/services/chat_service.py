"""
Support chatbot grounded on the knowledge base, and the general-purpose assistant.
"""
import logging
from typing import Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from quickjob.core.config import CHAT_MAX_TOKENS, CHAT_TEMPERATURE
from quickjob.db.models.ai_session import AISession
from quickjob.db.models.knowledge_base import KnowledgeBaseEntry
from quickjob.db.models.user import User
from quickjob.llm.provider import LLMProvider

logger = logging.getLogger(__name__)

FALLBACK_RESPONSE = "Désolé, je rencontre une difficulté technique. Veuillez réessayer ou contacter notre support."

CHATBOT_SYSTEM_PROMPT = """Tu es l'assistant virtuel de QuickJob CI, une plateforme ivoirienne qui connecte les jeunes aux petits boulots de proximité.

{context}

Instructions :
- Réponds toujours en français
- Sois professionnel mais chaleureux
- Utilise les informations de la base de connaissances quand c'est pertinent
- Si tu n'as pas l'information, propose de contacter le support
- Encourage l'utilisation de QuickJob CI pour trouver du travail
- Mentionne que l'inscription est gratuite pour les jeunes candidats

Contexte de QuickJob CI :
- Plateforme de mise en relation entre jeunes ivoiriens et petits boulots
- Gratuit pour les candidats, abonnement premium pour les recruteurs
- Localisation par quartiers d'Abidjan
- Paiements sécurisés via Paystack
- Categories : livraison, ménage, déménagement, soutien scolaire, etc."""

ASSISTANT_SYSTEM_PROMPT = """Tu es l'assistant général OpenAI pour QuickJob CI, une plateforme d'emploi en Côte d'Ivoire.

Reste concis, utile et professionnel. Tu peux aider avec :
- Questions générales sur l'emploi
- Rédaction et reformulation de textes
- Conseils professionnels
- Idées créatives
- Assistance générale

IMPORTANT: Ne réponds jamais sur la facturation interne, les prix, ou les informations confidentielles de QuickJob CI. Pour ces questions, redirige vers le support.

Réponds en français et reste dans le contexte professionnel."""


def entry_matches(entry: KnowledgeBaseEntry, message: str) -> bool:
    """An entry matches when one of its keywords, or its whole question, occurs in the message."""
    text = message.lower()
    for keyword in entry.keywords or []:
        if keyword and keyword.lower() in text:
            return True
    return bool(entry.question) and entry.question.lower() in text


def find_relevant_entries(db: Session, message: str) -> List[KnowledgeBaseEntry]:
    entries = db.query(KnowledgeBaseEntry).order_by(KnowledgeBaseEntry.id.asc()).all()
    return [entry for entry in entries if entry_matches(entry, message)]


def build_context(entries: List[KnowledgeBaseEntry]) -> str:
    if not entries:
        return ""
    context = "Voici les informations pertinentes de notre base de connaissances :\n\n"
    for entry in entries:
        context += f"Q: {entry.question}\nR: {entry.answer}\n\n"
    return context


def answer_with_knowledge_base(db: Session, provider: LLMProvider, message: str) -> Tuple[str, bool]:
    """
    Answer a support question using matching knowledge-base entries as context.

    Returns:
        (response text, whether any entry matched)
    """
    if not message or not message.strip():
        raise ValueError("Message is required")

    entries = find_relevant_entries(db, message)
    system_prompt = CHATBOT_SYSTEM_PROMPT.format(context=build_context(entries))

    result = provider.chat(
        messages=[
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": message},
        ],
        temperature=CHAT_TEMPERATURE,
        max_tokens=CHAT_MAX_TOKENS,
    )
    logger.info(f"Chatbot answered: context_entries={len(entries)}, tokens_out={result.tokens_out}")
    return result.content, bool(entries)


def _load_session(db: Session, user: User, session_id: Optional[int]) -> Optional[AISession]:
    if session_id is None:
        return None
    return db.query(AISession).filter(
        AISession.id == session_id,
        AISession.user_id == user.id
    ).first()


def run_assistant(
    db: Session,
    provider: LLMProvider,
    message: str,
    user: Optional[User] = None,
    session_id: Optional[int] = None,
) -> Tuple[str, Optional[int]]:
    """
    General assistant turn.

    Anonymous callers get a stateless answer. Authenticated callers have the
    stored history of their session replayed and the new exchange saved;
    a new session is created when session_id is missing or not theirs.

    Returns:
        (response text, session id or None)
    """
    if not message or not message.strip():
        raise ValueError("Message is required")

    session = _load_session(db, user, session_id) if user else None
    history: List[Dict[str, str]] = list(session.messages or []) if session else []
    history.append({"role": "user", "content": message})

    result = provider.chat(
        messages=[{"role": "system", "content": ASSISTANT_SYSTEM_PROMPT}] + history,
        temperature=CHAT_TEMPERATURE,
        max_tokens=CHAT_MAX_TOKENS,
    )
    history.append({"role": "assistant", "content": result.content})

    if not user:
        return result.content, session_id

    if session is None:
        session = AISession(user_id=user.id, session_type="openai")
        db.add(session)
    # reassign so the JSON column is flagged dirty
    session.messages = history
    db.commit()
    db.refresh(session)

    logger.info(f"Assistant session saved: session_id={session.id}, user_id={user.id}, turns={len(history) // 2}")
    return result.content, session.id
