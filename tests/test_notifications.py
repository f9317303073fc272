"""
Tests for the notification inbox.
"""
import pytest

from quickjob.db.models.notification import Notification
from quickjob.services.notification_service import create_notification, to_payload


@pytest.fixture
def inbox(db, make_user):
    user = make_user()
    for i in range(3):
        create_notification(db, user_id=user.id, type="system", title=f"Info {i}", message="Bienvenue")
    db.commit()
    return user


def test_list_newest_first(client, headers, inbox):
    response = client.get("/notifications", headers=headers(inbox))

    assert response.status_code == 200
    assert [n["title"] for n in response.json()] == ["Info 2", "Info 1", "Info 0"]


def test_unread_count_and_mark_read(client, headers, inbox):
    notifications = client.get("/notifications", headers=headers(inbox)).json()
    assert client.get("/notifications/unread-count", headers=headers(inbox)).json() == {"unread": 3}

    response = client.post(f"/notifications/{notifications[0]['id']}/read", headers=headers(inbox))

    assert response.status_code == 200
    assert response.json()["is_read"] is True
    assert client.get("/notifications/unread-count", headers=headers(inbox)).json() == {"unread": 2}
    assert len(client.get("/notifications", params={"unread_only": True}, headers=headers(inbox)).json()) == 2


def test_mark_all_read(client, headers, inbox):
    response = client.post("/notifications/read-all", headers=headers(inbox))

    assert response.json() == {"updated": 3}
    assert client.get("/notifications/unread-count", headers=headers(inbox)).json() == {"unread": 0}


def test_cannot_touch_someone_elses_notification(client, db, make_user, headers, inbox):
    other = make_user()
    notification_id = db.query(Notification.id).filter(Notification.user_id == inbox.id).first()[0]

    assert client.post(f"/notifications/{notification_id}/read", headers=headers(other)).status_code == 404
    assert client.delete(f"/notifications/{notification_id}", headers=headers(other)).status_code == 404


def test_delete_notification(client, db, headers, inbox):
    notification_id = db.query(Notification.id).filter(Notification.user_id == inbox.id).first()[0]

    assert client.delete(f"/notifications/{notification_id}", headers=headers(inbox)).status_code == 204
    assert db.query(Notification).count() == 2


def test_realtime_payload(db, make_user):
    user = make_user()
    notification = create_notification(
        db, user_id=user.id, type="new_application", title="Nouvelle candidature", message="...", related_id=7
    )

    assert to_payload(notification) == {
        "event": "notification",
        "id": notification.id,
        "type": "new_application",
        "title": "Nouvelle candidature",
        "message": "...",
        "related_id": 7,
    }
