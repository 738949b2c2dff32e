from fastapi.testclient import TestClient

from careerscraper.pagescan.models import BoardPosting, BoardResponse
from careerscraper.web import server


client = TestClient(server.app)


def test_api_test_endpoint():
    r = client.get("/api/test")
    assert r.status_code == 200
    assert r.json() == {"message": "Server is running!"}


def test_fetch_jobs_requires_url():
    r = client.post("/api/fetch-jobs", json={})
    assert r.status_code == 400
    assert r.json() == {"success": False, "error": "URL is required"}


def test_fetch_jobs_success(monkeypatch):
    def fake_fetch_jobs(url):
        return BoardResponse(success=True, platform="Lever",
                             jobs=[BoardPosting(id="a1", title="Data Analyst", location="Remote", url="https://jobs.lever.co/x/a1")])
    monkeypatch.setattr(server, "fetch_jobs", fake_fetch_jobs)
    r = client.post("/api/fetch-jobs", json={"url": "https://jobs.lever.co/x"})
    assert r.status_code == 200
    body = r.json()
    assert body["jobCount"] == 1
    assert body["platform"] == "Lever"
    assert body["jobs"][0] == {"id": "a1", "title": "Data Analyst", "location": "Remote", "url": "https://jobs.lever.co/x/a1"}


def test_fetch_jobs_failure_status(monkeypatch):
    monkeypatch.setattr(server, "fetch_jobs", lambda url: BoardResponse(success=False, status_code=400, error="Unable to detect company name"))
    r = client.post("/api/fetch-jobs", json={"url": "https://boards.greenhouse.io/"})
    assert r.status_code == 400
    assert r.json() == {"success": False, "error": "Unable to detect company name"}


def test_health():
    assert client.get("/health").json() == {"status": "ok"}


def test_fetch_jobs_adapter_crash_returns_json_500(monkeypatch):
    from careerscraper.pagescan.sources.greenhouse_source import GreenhouseSource

    def broken(self):
        raise KeyError("jobs")
    monkeypatch.setattr(GreenhouseSource, "fetch", broken)
    r = client.post("/api/fetch-jobs", json={"url": "https://boards.greenhouse.io/examplecompany"})
    assert r.status_code == 500
    assert r.headers["content-type"].startswith("application/json")
    assert r.json()["success"] is False
