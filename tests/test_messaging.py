"""
Tests for recruiter/candidate conversations.
"""
import pytest

from quickjob.db.models.application import Application
from quickjob.db.models.conversation import Conversation
from quickjob.db.models.notification import Notification


@pytest.fixture
def conversation(db, make_user, make_job):
    recruiter = make_user(role="recruiter", first_name="Koffi")
    candidate = make_user(role="candidate", first_name="Awa")
    job = make_job(recruiter)
    application = Application(candidate_id=candidate.id, job_id=job.id, status="accepted")
    db.add(application)
    db.commit()
    conversation = Conversation(
        application_id=application.id,
        job_id=job.id,
        candidate_id=candidate.id,
        recruiter_id=recruiter.id,
    )
    db.add(conversation)
    db.commit()
    db.refresh(conversation)
    return conversation, recruiter, candidate


def test_participants_list_their_conversations(client, make_user, headers, conversation):
    convo, recruiter, candidate = conversation
    outsider = make_user(role="candidate")

    assert [c["id"] for c in client.get("/conversations", headers=headers(recruiter)).json()] == [convo.id]
    assert [c["id"] for c in client.get("/conversations", headers=headers(candidate)).json()] == [convo.id]
    assert client.get("/conversations", headers=headers(outsider)).json() == []


def test_exchange_messages_in_order(client, headers, conversation):
    convo, recruiter, candidate = conversation
    url = f"/conversations/{convo.id}/messages"

    first = client.post(url, json={"content": "Bonjour, êtes-vous disponible samedi ?"}, headers=headers(recruiter))
    assert first.status_code == 201
    assert first.json()["sender_id"] == recruiter.id
    client.post(url, json={"content": "Oui, à partir de 9h."}, headers=headers(candidate))

    response = client.get(url, headers=headers(candidate))

    assert response.status_code == 200
    assert [m["content"] for m in response.json()] == [
        "Bonjour, êtes-vous disponible samedi ?",
        "Oui, à partir de 9h.",
    ]


def test_message_notifies_other_participant(client, db, headers, conversation):
    convo, recruiter, candidate = conversation

    client.post(f"/conversations/{convo.id}/messages", json={"content": "On se voit demain."}, headers=headers(candidate))

    notifications = db.query(Notification).all()
    assert len(notifications) == 1
    assert notifications[0].user_id == recruiter.id
    assert notifications[0].type == "new_message"
    assert notifications[0].related_id == convo.id


def test_outsider_cannot_read_or_write(client, make_user, headers, conversation):
    convo, _, _ = conversation
    outsider = make_user(role="recruiter")
    url = f"/conversations/{convo.id}/messages"

    assert client.get(url, headers=headers(outsider)).status_code == 403
    assert client.post(url, json={"content": "Salut"}, headers=headers(outsider)).status_code == 403


def test_blank_message_rejected(client, headers, conversation):
    convo, recruiter, _ = conversation

    response = client.post(f"/conversations/{convo.id}/messages", json={"content": "   "}, headers=headers(recruiter))

    assert response.status_code == 422
    assert response.json()["detail"] == "Message cannot be empty"


def test_unknown_conversation(client, headers, conversation):
    _, recruiter, _ = conversation
    assert client.get("/conversations/999/messages", headers=headers(recruiter)).status_code == 404
