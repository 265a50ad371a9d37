"""
Integration tests for API endpoints using a SQLite DB.
"""
import pytest

from conftest import job_payload, register_payload


class TestHealth:
    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"


class TestAuth:
    def test_first_account_is_admin(self, admin):
        r = admin.get("/users/current-user")
        assert r.status_code == 200
        user = r.json()["user"]
        assert user["role"] == "admin"
        assert user["email"] == "admin@mail.com"
        assert user["lastName"] == "Lopez"
        assert "password" not in user
        assert "passwordHash" not in user

    def test_later_accounts_are_users(self, owner):
        r = owner.get("/users/current-user")
        assert r.json()["user"]["role"] == "user"

    def test_wrong_password_rejected(self, client, admin):
        r = client.post("/auth/login", json={"email": "admin@mail.com", "password": "wrong-pass"})
        assert r.status_code == 401
        assert r.json()["code"] == "UNAUTHENTICATED"

    def test_login_sets_session(self, client):
        client.post("/auth/register", json=register_payload("s@mail.com"))
        assert client.get("/users/current-user").status_code == 401
        r = client.post("/auth/login", json={"email": "s@mail.com", "password": "secret123"})
        assert r.json() == {"msg": "user logged in"}
        assert client.get("/users/current-user").status_code == 200

    def test_logout_clears_session(self, owner):
        r = owner.get("/auth/logout")
        assert r.status_code == 200
        assert owner.get("/users/current-user").status_code == 401


class TestUsers:
    def test_app_stats_for_admin(self, admin, owned_job):
        r = admin.get("/users/admin/app-stats")
        assert r.status_code == 200
        assert r.json() == {"users": 2, "jobs": 1}

    def test_app_stats_forbidden_for_users(self, owner):
        r = owner.get("/users/admin/app-stats")
        assert r.status_code == 403
        assert r.json()["code"] == "UNAUTHORIZED"

    def test_update_user_persists(self, owner):
        r = owner.patch("/users/update-user", json={
            "name": "Bea",
            "lastName": "Silva",
            "email": "bea@mail.com",
            "location": "Faro",
        })
        assert r.status_code == 200
        user = owner.get("/users/current-user").json()["user"]
        assert user["name"] == "Bea"
        assert user["lastName"] == "Silva"
        assert user["email"] == "bea@mail.com"
        assert user["location"] == "Faro"


class TestJobsCrud:
    def test_create_returns_job(self, owner):
        r = owner.post("/jobs", json=job_payload(jobStatus="interview", jobType="part-time"))
        assert r.status_code == 201
        job = r.json()["job"]
        assert job["company"] == "Acme"
        assert job["jobLocation"] == "Remote"
        assert job["jobStatus"] == "interview"
        assert job["jobType"] == "part-time"
        assert job["id"] > 0

    def test_get_one(self, owner, owned_job):
        r = owner.get(f"/jobs/{owned_job['id']}")
        assert r.json()["job"]["position"] == "Backend Engineer"

    def test_update(self, owner, owned_job):
        r = owner.patch(
            f"/jobs/{owned_job['id']}",
            json=job_payload(position="Staff Engineer", jobStatus="declined"),
        )
        assert r.status_code == 200
        body = r.json()
        assert body["msg"] == "job modified"
        assert body["job"]["position"] == "Staff Engineer"
        assert body["job"]["jobStatus"] == "declined"

    def test_admin_can_update_any_job(self, admin, owned_job):
        r = admin.patch(f"/jobs/{owned_job['id']}", json=job_payload(company="Globex"))
        assert r.status_code == 200
        assert r.json()["job"]["company"] == "Globex"

    def test_delete(self, owner, owned_job):
        r = owner.delete(f"/jobs/{owned_job['id']}")
        assert r.status_code == 200
        assert r.json()["msg"] == "job deleted"
        assert owner.get(f"/jobs/{owned_job['id']}").status_code == 404


class TestJobsList:
    @pytest.fixture()
    def seeded(self, owner, stranger):
        owner.post("/jobs", json=job_payload(position="Data Analyst", company="Initech"))
        owner.post("/jobs", json=job_payload(position="Backend Engineer", jobStatus="interview"))
        owner.post("/jobs", json=job_payload(
            position="Intern", company="Umbrella", jobType="internship", jobStatus="declined",
        ))
        stranger.post("/jobs", json=job_payload(position="Not yours"))
        return owner

    def test_only_own_jobs_listed(self, seeded):
        body = seeded.get("/jobs").json()
        assert body["totalJobs"] == 3
        assert body["currentPage"] == 1
        assert body["numOfPages"] == 1
        assert all(j["position"] != "Not yours" for j in body["jobs"])

    def test_search_matches_position_or_company(self, seeded):
        assert seeded.get("/jobs?search=analyst").json()["totalJobs"] == 1
        assert seeded.get("/jobs?search=umbrella").json()["totalJobs"] == 1

    def test_filter_by_status_and_type(self, seeded):
        assert seeded.get("/jobs?jobStatus=interview").json()["totalJobs"] == 1
        assert seeded.get("/jobs?jobType=internship").json()["totalJobs"] == 1
        assert seeded.get("/jobs?jobStatus=all&jobType=all").json()["totalJobs"] == 3

    def test_unknown_filter_value_is_bad_request(self, seeded):
        r = seeded.get("/jobs?jobStatus=hired")
        assert r.status_code == 400

    def test_sort_alphabetical(self, seeded):
        positions = [j["position"] for j in seeded.get("/jobs?sort=a-z").json()["jobs"]]
        assert positions == ["Backend Engineer", "Data Analyst", "Intern"]
        positions = [j["position"] for j in seeded.get("/jobs?sort=z-a").json()["jobs"]]
        assert positions == ["Intern", "Data Analyst", "Backend Engineer"]

    def test_pagination(self, seeded):
        body = seeded.get("/jobs?limit=2&page=2&sort=a-z").json()
        assert body["numOfPages"] == 2
        assert body["currentPage"] == 2
        assert [j["position"] for j in body["jobs"]] == ["Intern"]


class TestJobStats:
    def test_stats_count_by_status(self, owner):
        owner.post("/jobs", json=job_payload())
        owner.post("/jobs", json=job_payload())
        owner.post("/jobs", json=job_payload(jobStatus="interview"))
        body = owner.get("/jobs/stats").json()
        assert body["defaultStats"] == {"pending": 2, "interview": 1, "declined": 0}
        monthly = body["monthlyApplications"]
        assert len(monthly) == 6
        assert sum(m["count"] for m in monthly) == 3

    def test_stats_empty(self, owner):
        body = owner.get("/jobs/stats").json()
        assert body["defaultStats"] == {"pending": 0, "interview": 0, "declined": 0}
        assert all(m["count"] == 0 for m in body["monthlyApplications"])
