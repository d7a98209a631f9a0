import pytest

API = "/api/v1"


@pytest.fixture
def job_id(client, employer):
    r = client.post(f"{API}/jobs", json={
        "title": "Data Analyst",
        "description": "Crunch numbers",
        "location": "New York",
        "job_type": "contract",
        "category": "finance",
        "skills": ["SQL", "Excel"],
    }, headers=employer["headers"])
    assert r.status_code == 201
    return r.json()["id"]


class TestApply:
    def test_apply(self, client, seeker, job_id):
        r = client.post(f"{API}/jobs/{job_id}/applications", json={
            "cover_letter": "I love numbers",
        }, headers=seeker["headers"])
        assert r.status_code == 201
        data = r.json()
        assert data["status"] == "pending"
        assert data["cover_letter"] == "I love numbers"
        assert data["job_seeker_id"] == seeker["id"]

    def test_apply_twice_conflicts(self, client, seeker, job_id):
        client.post(f"{API}/jobs/{job_id}/applications", json={}, headers=seeker["headers"])
        r = client.post(f"{API}/jobs/{job_id}/applications", json={}, headers=seeker["headers"])
        assert r.status_code == 409

    def test_only_job_seekers_apply(self, client, employer, job_id):
        r = client.post(f"{API}/jobs/{job_id}/applications", json={}, headers=employer["headers"])
        assert r.status_code == 403
        assert r.json()["detail"] == "Only job seekers can do this"

    def test_anonymous_redirected_to_sign_in(self, client, job_id):
        r = client.post(f"{API}/jobs/{job_id}/applications", json={})
        assert r.status_code == 401
        assert r.headers["X-Redirect-To"] == "/auth"

    def test_apply_to_missing_job(self, client, seeker):
        r = client.post(f"{API}/jobs/nope/applications", json={}, headers=seeker["headers"])
        assert r.status_code == 404

    def test_apply_to_closed_job(self, client, employer, seeker, job_id):
        client.put(f"{API}/jobs/{job_id}", json={"status": "closed"}, headers=employer["headers"])
        r = client.post(f"{API}/jobs/{job_id}/applications", json={}, headers=seeker["headers"])
        assert r.status_code == 400

    def test_has_applied_check(self, client, seeker, job_id):
        r = client.get(f"{API}/jobs/{job_id}/applications/mine", headers=seeker["headers"])
        assert r.json()["has_applied"] is False

        client.post(f"{API}/jobs/{job_id}/applications", json={}, headers=seeker["headers"])

        r = client.get(f"{API}/jobs/{job_id}/applications/mine", headers=seeker["headers"])
        assert r.json()["has_applied"] is True
        assert r.json()["status"] == "pending"
        r = client.get(f"{API}/jobs/{job_id}", headers=seeker["headers"])
        assert r.json()["has_applied"] is True


class TestSeekerDashboard:
    def test_lists_own_applications_with_job(self, client, seeker, job_id, signup):
        client.post(f"{API}/jobs/{job_id}/applications", json={}, headers=seeker["headers"])
        someone_else = signup("other@example.com")
        client.post(f"{API}/jobs/{job_id}/applications", json={}, headers=someone_else["headers"])

        r = client.get(f"{API}/me/applications", headers=seeker["headers"])
        assert r.status_code == 200
        apps = r.json()
        assert len(apps) == 1
        assert apps[0]["job"]["title"] == "Data Analyst"
        assert apps[0]["job"]["employer"]["company_name"] == "Acme Corp"

    def test_employer_redirected_to_own_dashboard(self, client, employer):
        r = client.get(f"{API}/me/applications", headers=employer["headers"])
        assert r.status_code == 403
        assert r.headers["X-Redirect-To"] == "/employer"


class TestApplicantReview:
    def test_employer_sees_applicants(self, client, employer, seeker, job_id):
        client.put(f"{API}/auth/me", json={"phone": "555-0100"}, headers=seeker["headers"])
        client.post(f"{API}/jobs/{job_id}/applications", json={"cover_letter": "Hi"},
                    headers=seeker["headers"])

        r = client.get(f"{API}/employer/jobs/{job_id}/applicants", headers=employer["headers"])
        assert r.status_code == 200
        applicants = r.json()
        assert len(applicants) == 1
        assert applicants[0]["applicant"]["full_name"] == "Sam Seeker"
        assert applicants[0]["applicant"]["email"] == "seeker@example.com"
        assert applicants[0]["applicant"]["phone"] == "555-0100"
        assert applicants[0]["cover_letter"] == "Hi"

    def test_other_employer_cannot_view_applicants(self, client, job_id, signup):
        rival = signup("rival@example.com", role="employer", approved=True)
        r = client.get(f"{API}/employer/jobs/{job_id}/applicants", headers=rival["headers"])
        assert r.status_code == 403

    def test_update_status(self, client, employer, seeker, job_id):
        app_id = client.post(f"{API}/jobs/{job_id}/applications", json={},
                             headers=seeker["headers"]).json()["id"]

        r = client.put(f"{API}/applications/{app_id}/status", json={"status": "accepted"},
                       headers=employer["headers"])
        assert r.status_code == 200
        assert r.json()["status"] == "accepted"

        r = client.get(f"{API}/me/applications", headers=seeker["headers"])
        assert r.json()[0]["status"] == "accepted"

    def test_update_status_rejects_unknown_value(self, client, employer, seeker, job_id):
        app_id = client.post(f"{API}/jobs/{job_id}/applications", json={},
                             headers=seeker["headers"]).json()["id"]
        r = client.put(f"{API}/applications/{app_id}/status", json={"status": "hired"},
                       headers=employer["headers"])
        assert r.status_code == 422

    def test_seeker_cannot_update_status(self, client, seeker, job_id):
        app_id = client.post(f"{API}/jobs/{job_id}/applications", json={},
                             headers=seeker["headers"]).json()["id"]
        r = client.put(f"{API}/applications/{app_id}/status", json={"status": "accepted"},
                       headers=seeker["headers"])
        assert r.status_code == 403

    def test_deleting_job_removes_applications(self, client, employer, seeker, job_id):
        client.post(f"{API}/jobs/{job_id}/applications", json={}, headers=seeker["headers"])
        client.delete(f"{API}/jobs/{job_id}", headers=employer["headers"])

        r = client.get(f"{API}/me/applications", headers=seeker["headers"])
        assert r.json() == []
