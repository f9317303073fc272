"""
Admin console endpoints. Every route requires the admin role.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from quickjob.core.auth_dependency import get_db, require_role
from quickjob.schemas.admin import (
    AdminUserResponse,
    KnowledgeEntryCreate,
    KnowledgeEntryResponse,
    PlanUpdateRequest,
    PlatformStatsResponse,
)
from quickjob.schemas.billing import SubscriptionResponse
from quickjob.services import admin_service

router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(require_role("admin"))])


@router.get("/stats", response_model=PlatformStatsResponse)
def platform_stats(db: Session = Depends(get_db)):
    return admin_service.get_platform_stats(db)


@router.get("/users", response_model=List[AdminUserResponse])
def list_users(
    role: Optional[str] = Query(None, pattern="^(candidate|recruiter|admin)$"),
    db: Session = Depends(get_db)
):
    return admin_service.list_users(db, role=role)


@router.patch("/users/{user_id}/plan", response_model=AdminUserResponse)
def set_user_plan(user_id: int, data: PlanUpdateRequest, db: Session = Depends(get_db)):
    """Grant a plan manually for 30 days (free clears the end date)."""
    return admin_service.set_user_plan(db, user_id, data.plan)


@router.get("/subscriptions", response_model=List[SubscriptionResponse])
def list_subscriptions(db: Session = Depends(get_db)):
    return admin_service.list_subscriptions(db)


@router.get("/knowledge-base", response_model=List[KnowledgeEntryResponse])
def list_knowledge_base(db: Session = Depends(get_db)):
    return admin_service.list_knowledge_base(db)


@router.post("/knowledge-base", status_code=status.HTTP_201_CREATED, response_model=KnowledgeEntryResponse)
def create_knowledge_entry(data: KnowledgeEntryCreate, db: Session = Depends(get_db)):
    return admin_service.create_knowledge_entry(db, data.model_dump())


@router.delete("/knowledge-base/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_knowledge_entry(entry_id: int, db: Session = Depends(get_db)):
    admin_service.delete_knowledge_entry(db, entry_id)
