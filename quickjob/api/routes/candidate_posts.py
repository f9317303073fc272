from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from quickjob.core.auth_dependency import get_db, require_role
from quickjob.db.models.user import User
from quickjob.schemas.candidate_post import CandidatePostResponse, CandidatePostUpsert
from quickjob.services import candidate_post_service

router = APIRouter(prefix="/candidate-posts", tags=["Candidate Posts"])


@router.get("", response_model=List[CandidatePostResponse])
def list_posts(
    location: Optional[str] = Query(None),
    skill: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    return candidate_post_service.list_active_posts(db, location=location, skill=skill)


@router.get("/mine", response_model=CandidatePostResponse)
def get_my_post(
    user: User = Depends(require_role("candidate")),
    db: Session = Depends(get_db)
):
    post = candidate_post_service.get_my_post(db, user)
    if not post:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Candidate post not found")
    return post


@router.put("/mine", response_model=CandidatePostResponse)
def upsert_my_post(
    data: CandidatePostUpsert,
    user: User = Depends(require_role("candidate")),
    db: Session = Depends(get_db)
):
    return candidate_post_service.upsert_my_post(db, user, data.model_dump())


@router.delete("/mine", status_code=status.HTTP_204_NO_CONTENT)
def delete_my_post(
    user: User = Depends(require_role("candidate")),
    db: Session = Depends(get_db)
):
    candidate_post_service.delete_my_post(db, user)
