"""
Candidate "available for hire" posts. A candidate owns at most one post.
"""
import logging
from typing import Dict, List, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from quickjob.db.models.candidate_post import CandidatePost
from quickjob.db.models.user import User

logger = logging.getLogger(__name__)

POST_FIELDS = ("title", "description", "hourly_rate", "currency", "location", "skills", "availability", "status")


def get_my_post(db: Session, candidate: User) -> Optional[CandidatePost]:
    return db.query(CandidatePost).filter(CandidatePost.candidate_id == candidate.id).first()


def upsert_my_post(db: Session, candidate: User, data: Dict) -> CandidatePost:
    post = get_my_post(db, candidate)
    created = post is None
    if created:
        post = CandidatePost(candidate_id=candidate.id)
        db.add(post)

    for field in POST_FIELDS:
        value = data.get(field)
        if value is not None:
            setattr(post, field, value)
    if not post.currency:
        post.currency = "FCFA"
    if post.skills is None:
        post.skills = []
    if not post.status:
        post.status = "active"

    db.commit()
    db.refresh(post)
    logger.info(f"Candidate post {'created' if created else 'updated'}: post_id={post.id}, candidate_id={candidate.id}")
    return post


def delete_my_post(db: Session, candidate: User) -> None:
    post = get_my_post(db, candidate)
    if not post:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Candidate post not found")
    db.delete(post)
    db.commit()


def list_active_posts(db: Session, location: Optional[str] = None, skill: Optional[str] = None) -> List[CandidatePost]:
    query = db.query(CandidatePost).filter(CandidatePost.status == "active")
    if location:
        query = query.filter(CandidatePost.location.ilike(f"%{location}%"))
    posts = query.order_by(CandidatePost.created_at.desc(), CandidatePost.id.desc()).all()

    # skills is a JSON column, filtered in Python to stay portable across SQLite and PostgreSQL
    if skill:
        needle = skill.lower()
        posts = [post for post in posts if any(needle in (s or "").lower() for s in (post.skills or []))]
    return posts
