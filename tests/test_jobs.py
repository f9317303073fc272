"""
Tests for the job board endpoints: publishing, browsing, editing and the
contact visibility rule.
"""
import pytest

from quickjob.db.models.application import Application
from quickjob.db.models.conversation import Conversation
from quickjob.db.models.job import Job

JOB_PAYLOAD = {
    "title": "Ménage bureau Plateau",
    "description": "Nettoyage d'un bureau de 80 m², deux fois par semaine.",
    "category": "ménage",
    "amount": 25000,
    "location": "Abidjan",
    "commune": "Plateau",
    "contact_phone": "+2250101010101",
    "contact_whatsapp": "+2250101010102",
}


def test_recruiter_publishes_job(client, db, make_user, headers):
    recruiter = make_user(role="recruiter")

    response = client.post("/jobs", json=JOB_PAYLOAD, headers=headers(recruiter))

    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "open"
    assert data["recruiter_id"] == recruiter.id
    assert data["is_featured"] is False
    assert data["currency"] == "FCFA"
    assert "contact_phone" not in data

    db.refresh(recruiter)
    assert recruiter.jobs_published == 1


def test_candidate_cannot_publish(client, make_user, headers):
    candidate = make_user(role="candidate")

    response = client.post("/jobs", json=JOB_PAYLOAD, headers=headers(candidate))

    assert response.status_code == 403


def test_publish_requires_auth(client):
    assert client.post("/jobs", json=JOB_PAYLOAD).status_code == 401


def test_free_recruiter_blocked_after_thirty_jobs(client, db, make_user, headers):
    recruiter = make_user(role="recruiter", jobs_published=30)

    response = client.post("/jobs", json=JOB_PAYLOAD, headers=headers(recruiter))

    assert response.status_code == 402
    assert response.json()["detail"]["code"] == "PAYWALL"
    assert db.query(Job).count() == 0


def test_featured_requires_pro_plan(client, make_user, headers):
    standard = make_user(role="recruiter", plan="standard")
    pro = make_user(role="recruiter", plan="pro")
    payload = dict(JOB_PAYLOAD, is_featured=True)

    assert client.post("/jobs", json=payload, headers=headers(standard)).status_code == 403

    response = client.post("/jobs", json=payload, headers=headers(pro))
    assert response.status_code == 201
    assert response.json()["is_featured"] is True


def test_listing_shows_open_jobs_featured_first(client, make_user, make_job):
    recruiter = make_user(role="recruiter")
    older = make_job(recruiter, title="Ancienne offre")
    featured = make_job(recruiter, title="Offre en avant", is_featured=True)
    newer = make_job(recruiter, title="Nouvelle offre")
    make_job(recruiter, title="Offre fermée", status="closed")

    response = client.get("/jobs")

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 3
    ids = [item["id"] for item in data["items"]]
    assert ids == [featured.id, newer.id, older.id]
    for item in data["items"]:
        assert "contact_phone" not in item
        assert "contact_whatsapp" not in item


def test_listing_filters(client, make_user, make_job):
    recruiter = make_user(role="recruiter")
    make_job(recruiter, title="Livreur", location="Abidjan", commune="Yopougon", amount=10000, category="livraison")
    make_job(recruiter, title="Plombier", location="Bouaké", amount=40000, category="plomberie")
    make_job(recruiter, title="Cuisinier", description="Restaurant à Marcory", location="Abidjan", commune="Marcory", amount=30000)

    assert client.get("/jobs", params={"location": "bouaké"}).json()["total"] == 1
    assert client.get("/jobs", params={"commune": "Yopougon"}).json()["total"] == 1
    assert client.get("/jobs", params={"category": "plomberie"}).json()["total"] == 1
    assert client.get("/jobs", params={"search": "restaurant"}).json()["total"] == 1
    assert client.get("/jobs", params={"min_amount": 25000}).json()["total"] == 2
    assert client.get("/jobs", params={"max_amount": 25000}).json()["total"] == 1


def test_listing_pagination(client, make_user, make_job):
    recruiter = make_user(role="recruiter")
    for i in range(5):
        make_job(recruiter, title=f"Offre {i}")

    data = client.get("/jobs", params={"page": 2, "page_size": 2}).json()

    assert data["total"] == 5
    assert data["page"] == 2
    assert len(data["items"]) == 2


def test_viewing_job_counts_views(client, db, make_user, make_job):
    job = make_job(make_user(role="recruiter"))

    client.get(f"/jobs/{job.id}")
    response = client.get(f"/jobs/{job.id}")

    assert response.status_code == 200
    assert response.json()["views_count"] == 2


def test_unknown_job_404(client):
    assert client.get("/jobs/999").status_code == 404


def test_my_jobs_lists_only_own(client, make_user, make_job, headers):
    recruiter = make_user(role="recruiter")
    other = make_user(role="recruiter")
    mine = make_job(recruiter)
    make_job(other)

    response = client.get("/jobs/mine", headers=headers(recruiter))

    assert response.status_code == 200
    assert [job["id"] for job in response.json()] == [mine.id]


class TestContactVisibility:
    def test_owner_sees_contact(self, client, make_user, make_job, headers):
        recruiter = make_user(role="recruiter")
        job = make_job(recruiter)

        response = client.get(f"/jobs/{job.id}/contact", headers=headers(recruiter))

        assert response.status_code == 200
        assert response.json() == {
            "contact_phone": "+2250700000001",
            "contact_whatsapp": "+2250700000002",
        }

    def test_admin_sees_contact(self, client, make_user, make_job, headers):
        job = make_job(make_user(role="recruiter"))
        admin = make_user(role="admin")

        assert client.get(f"/jobs/{job.id}/contact", headers=headers(admin)).status_code == 200

    def test_candidate_without_application_is_refused(self, client, make_user, make_job, headers):
        job = make_job(make_user(role="recruiter"))
        candidate = make_user(role="candidate")

        response = client.get(f"/jobs/{job.id}/contact", headers=headers(candidate))

        assert response.status_code == 403

    def test_pending_and_rejected_candidates_are_refused(self, client, db, make_user, make_job, headers):
        job = make_job(make_user(role="recruiter"))
        pending = make_user(role="candidate")
        rejected = make_user(role="candidate")
        db.add_all([
            Application(candidate_id=pending.id, job_id=job.id, status="pending"),
            Application(candidate_id=rejected.id, job_id=job.id, status="rejected"),
        ])
        db.commit()

        assert client.get(f"/jobs/{job.id}/contact", headers=headers(pending)).status_code == 403
        assert client.get(f"/jobs/{job.id}/contact", headers=headers(rejected)).status_code == 403

    def test_accepted_and_accomplished_candidates_see_contact(self, client, db, make_user, make_job, headers):
        job = make_job(make_user(role="recruiter"))
        accepted = make_user(role="candidate")
        accomplished = make_user(role="candidate")
        db.add_all([
            Application(candidate_id=accepted.id, job_id=job.id, status="accepted"),
            Application(candidate_id=accomplished.id, job_id=job.id, status="accomplished"),
        ])
        db.commit()

        response = client.get(f"/jobs/{job.id}/contact", headers=headers(accepted))
        assert response.status_code == 200
        assert response.json()["contact_phone"] == "+2250700000001"
        assert client.get(f"/jobs/{job.id}/contact", headers=headers(accomplished)).status_code == 200

    def test_other_recruiter_is_refused(self, client, make_user, make_job, headers):
        job = make_job(make_user(role="recruiter"))
        other = make_user(role="recruiter")

        assert client.get(f"/jobs/{job.id}/contact", headers=headers(other)).status_code == 403


def test_owner_updates_job(client, make_user, make_job, headers):
    recruiter = make_user(role="recruiter")
    job = make_job(recruiter)

    response = client.patch(f"/jobs/{job.id}", json={"title": "Livreur confirmé", "amount": 20000}, headers=headers(recruiter))

    assert response.status_code == 200
    assert response.json()["title"] == "Livreur confirmé"
    assert response.json()["amount"] == 20000


def test_non_owner_cannot_update(client, make_user, make_job, headers):
    job = make_job(make_user(role="recruiter"))
    other = make_user(role="recruiter")

    response = client.patch(f"/jobs/{job.id}", json={"title": "Piraté"}, headers=headers(other))

    assert response.status_code == 403


def test_status_change_hides_job_from_board(client, make_user, make_job, headers):
    recruiter = make_user(role="recruiter")
    job = make_job(recruiter)

    response = client.patch(f"/jobs/{job.id}/status", json={"status": "closed"}, headers=headers(recruiter))

    assert response.status_code == 200
    assert response.json()["status"] == "closed"
    assert client.get("/jobs").json()["total"] == 0


def test_invalid_job_status_rejected(client, make_user, make_job, headers):
    recruiter = make_user(role="recruiter")
    job = make_job(recruiter)

    response = client.patch(f"/jobs/{job.id}/status", json={"status": "archived"}, headers=headers(recruiter))

    assert response.status_code == 422


def test_featured_toggle(client, make_user, make_job, headers):
    free = make_user(role="recruiter")
    pro = make_user(role="recruiter", plan="pro")
    free_job = make_job(free)
    pro_job = make_job(pro)

    assert client.patch(f"/jobs/{free_job.id}/featured", json={"is_featured": True}, headers=headers(free)).status_code == 403
    # Un-featuring is always allowed
    assert client.patch(f"/jobs/{free_job.id}/featured", json={"is_featured": False}, headers=headers(free)).status_code == 200

    response = client.patch(f"/jobs/{pro_job.id}/featured", json={"is_featured": True}, headers=headers(pro))
    assert response.status_code == 200
    assert response.json()["is_featured"] is True


def test_delete_job(client, db, make_user, make_job, headers):
    recruiter = make_user(role="recruiter")
    job = make_job(recruiter)
    other = make_user(role="recruiter")

    assert client.delete(f"/jobs/{job.id}", headers=headers(other)).status_code == 403
    assert client.delete(f"/jobs/{job.id}", headers=headers(recruiter)).status_code == 204

    db.expire_all()
    assert db.query(Job).filter(Job.id == job.id).first() is None


def test_deleting_job_removes_its_applications(client, db, make_user, make_job, headers):
    recruiter = make_user(role="recruiter")
    candidate = make_user(role="candidate")
    job = make_job(recruiter)
    kept_job = make_job(recruiter)
    application_id = client.post("/applications", json={"job_id": job.id}, headers=headers(candidate)).json()["id"]
    client.post("/applications", json={"job_id": kept_job.id}, headers=headers(candidate))
    client.patch(f"/applications/{application_id}/status", json={"status": "accepted"}, headers=headers(recruiter))
    assert db.query(Conversation).count() == 1

    assert client.delete(f"/jobs/{job.id}", headers=headers(recruiter)).status_code == 204

    db.expire_all()
    assert db.query(Application).filter(Application.job_id == job.id).count() == 0
    assert db.query(Conversation).count() == 0
    response = client.get("/applications/mine", headers=headers(candidate))
    assert response.status_code == 200
    assert [application["job_id"] for application in response.json()] == [kept_job.id]


@pytest.mark.parametrize("field", ["title", "description", "location", "amount", "currency", "status"])
def test_update_rejects_null_for_required_fields(client, db, make_user, make_job, headers, field):
    recruiter = make_user(role="recruiter")
    job = make_job(recruiter, title="Plombier")

    response = client.patch(f"/jobs/{job.id}", json={field: None}, headers=headers(recruiter))

    assert response.status_code == 422
    db.expire_all()
    assert db.query(Job).filter(Job.id == job.id).one().title == "Plombier"


def test_update_can_clear_optional_fields(client, make_user, make_job, headers):
    recruiter = make_user(role="recruiter")
    job = make_job(recruiter, commune="Cocody")

    response = client.patch(f"/jobs/{job.id}", json={"commune": None}, headers=headers(recruiter))

    assert response.status_code == 200
    assert response.json()["commune"] is None
