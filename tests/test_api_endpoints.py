"""
API Endpoint Tests

Tests for the HTTP surface with a scripted console and a mocked crawl
backend. Clients are used as context managers so the lifespan runs.
"""

import time

import httpx

JOB = {
    "id": "job-1",
    "url": "https://example.com",
    "status": "running",
    "createdAt": "2024-01-01T00:00:00Z",
    "updatedAt": "2024-01-01T00:05:00Z",
}


def backend_ok(request: httpx.Request) -> httpx.Response:
    """Minimal healthy crawl backend"""
    path = request.url.path
    if path == "/api/health":
        return httpx.Response(200, json={"status": "ok"})
    if path == "/api/crawl" and request.method == "GET":
        return httpx.Response(200, json=[JOB, {**JOB, "id": "job-2", "status": "completed"}])
    if path == "/api/crawl" and request.method == "POST":
        return httpx.Response(200, json={**JOB, "id": "job-3", "status": "pending"})
    if path == "/api/crawl/job-1/stop":
        return httpx.Response(200, json={"success": True})
    if path == "/api/crawl/job-1":
        return httpx.Response(200, json={**JOB, "status": "completed", "resultsCount": 4})
    if path == "/api/validate":
        return httpx.Response(200, json=[{"url": "https://example.com", "isValid": True}])
    if path == "/api/export":
        return httpx.Response(200, content=b'[{"url": "https://example.com"}]')
    return httpx.Response(404)


def backend_down(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("Connection refused", request=request)


def backend_empty(request: httpx.Request) -> httpx.Response:
    """Backend answering 200 with no body"""
    return httpx.Response(200)


class TestHealth:
    def test_health(self, test_client):
        with test_client(handler=backend_ok) as client:
            assert client.get("/health").json() == {"status": "ok"}
            assert client.get("/health/live").json() == {"status": "ok"}
            assert client.get("/api/v1/health").json() == {"status": "ok"}

    def test_ready(self, test_client):
        with test_client(handler=backend_ok) as client:
            response = client.get("/health/ready")
        assert response.status_code == 200
        assert response.json()["checks"] == {"history_store": "ok", "backend": "ok"}

    def test_ready_with_backend_down(self, test_client):
        with test_client(handler=backend_down) as client:
            response = client.get("/health/ready")
        assert response.status_code == 200
        assert response.json()["checks"]["backend"] == "unreachable"

    def test_request_id_header(self, test_client):
        with test_client(handler=backend_ok) as client:
            response = client.get("/health", headers={"X-Request-ID": "abc-123"})
        assert response.headers["X-Request-ID"] == "abc-123"


class TestSessionEndpoints:
    def test_initial_snapshot(self, test_client):
        with test_client() as client:
            data = client.get("/api/v1/session").json()
        assert data["progress"]["status"] == "idle"
        assert data["progress_percentage"] == 0.0
        assert data["available_commands"] == ["start"]

    def test_invalid_url_rejected_without_history(self, test_client):
        with test_client() as client:
            response = client.post("/api/v1/session/start", json={"url": "not a url"})
            assert response.status_code == 400
            assert response.json()["detail"] == "Invalid URL format"
            assert client.get("/api/v1/session").json()["progress"]["status"] == "idle"
            assert client.get("/api/v1/history").json() == []

    def test_empty_url_rejected(self, test_client):
        with test_client() as client:
            response = client.post("/api/v1/session/start", json={"url": ""})
        assert response.status_code == 400
        assert response.json()["detail"] == "URL is required"

    def test_start_records_history(self, test_client):
        with test_client() as client:
            response = client.post(
                "/api/v1/session/start", json={"url": "https://example.com"}
            )
            assert response.status_code == 200
            data = response.json()
            assert data["command"] == "start"
            assert data["changed"] is True
            assert data["snapshot"]["progress"]["status"] == "running"
            assert data["snapshot"]["progress"]["total_pages"] == 50
            assert client.get("/api/v1/history").json() == ["https://example.com"]

    def test_resubmitting_does_not_duplicate_history(self, test_client):
        with test_client() as client:
            client.post("/api/v1/session/start", json={"url": "https://example.com"})
            client.post("/api/v1/session/stop")
            client.post("/api/v1/session/start", json={"url": "https://example.org"})
            client.post("/api/v1/session/stop")
            client.post("/api/v1/session/start", json={"url": "https://example.com"})
            history = client.get("/api/v1/history").json()
        assert history == ["https://example.org", "https://example.com"]

    def test_start_while_running_is_noop(self, test_client):
        with test_client() as client:
            client.post("/api/v1/session/start", json={"url": "https://example.com"})
            response = client.post(
                "/api/v1/session/start", json={"url": "https://example.org"}
            )
        data = response.json()
        assert data["changed"] is False
        assert data["snapshot"]["progress"]["target_url"] == "https://example.com"

    def test_pause_resume_stop(self, test_client):
        with test_client() as client:
            client.post("/api/v1/session/start", json={"url": "https://example.com"})

            paused = client.post("/api/v1/session/pause").json()
            assert paused["changed"] is True
            assert paused["snapshot"]["progress"]["status"] == "paused"
            assert paused["snapshot"]["available_commands"] == ["resume", "stop"]

            assert client.post("/api/v1/session/pause").json()["changed"] is False

            resumed = client.post("/api/v1/session/resume").json()
            assert resumed["snapshot"]["progress"]["status"] == "running"

            stopped = client.post("/api/v1/session/stop").json()
            assert stopped["changed"] is True
            assert stopped["snapshot"]["progress"]["status"] == "idle"
            assert stopped["snapshot"]["progress"]["total_pages"] == 50

            assert client.post("/api/v1/session/stop").json()["changed"] is False

    def test_start_uses_current_config(self, test_client):
        with test_client() as client:
            client.patch("/api/v1/config", json={"max_pages": 7})
            data = client.post(
                "/api/v1/session/start", json={"url": "https://example.com"}
            ).json()
        assert data["snapshot"]["progress"]["total_pages"] == 7
        assert data["snapshot"]["progress"]["queue_size"] == 7


class TestConfigEndpoints:
    def test_get_defaults(self, test_client):
        with test_client() as client:
            data = client.get("/api/v1/config").json()
        assert data["max_pages"] == 50
        assert data["content_types"] == ["text/html"]
        assert data["user_agent"] == "JumboWebCrawler/1.0"

    def test_patch_clamps(self, test_client):
        with test_client() as client:
            data = client.patch(
                "/api/v1/config",
                json={"max_pages": 5000, "crawl_delay_ms": "abc", "max_depth": 0},
            ).json()
        assert data["max_pages"] == 1000
        assert data["crawl_delay_ms"] == 1000
        assert data["max_depth"] == 1
        assert data["timeout_ms"] == 10000

    def test_patch_unknown_field(self, test_client):
        with test_client() as client:
            response = client.patch("/api/v1/config", json={"max_pagez": 5})
        assert response.status_code == 422

    def test_reset(self, test_client):
        with test_client() as client:
            client.patch("/api/v1/config", json={"max_pages": 5, "user_agent": "X/1"})
            data = client.post("/api/v1/config/reset").json()
        assert data["max_pages"] == 50
        assert data["user_agent"] == "JumboWebCrawler/1.0"


class TestUrlInputEndpoints:
    def test_change_is_validated_after_delay(self, test_client):
        with test_client(debounce=0.01) as client:
            response = client.put("/api/v1/url-input", json={"value": "ftp://example.com"})
            assert response.status_code == 202
            assert response.json()["pending"] is True

            time.sleep(0.1)
            data = client.get("/api/v1/url-input").json()
        assert data["pending"] is False
        assert data["check"] == {
            "state": "invalid",
            "message": "URL must start with http:// or https://",
        }

    def test_validate_now(self, test_client):
        with test_client(debounce=10) as client:
            client.put("/api/v1/url-input", json={"value": "https://example.com"})
            data = client.post("/api/v1/url-input/validate").json()
        assert data["pending"] is False
        assert data["check"]["state"] == "valid"

    def test_submit_invalid_draft(self, test_client):
        with test_client(debounce=10) as client:
            client.put("/api/v1/url-input", json={"value": "not a url"})
            response = client.post("/api/v1/url-input/submit")
            assert response.status_code == 400
            assert client.get("/api/v1/history").json() == []

    def test_submit_valid_draft(self, test_client):
        with test_client(debounce=10) as client:
            client.put("/api/v1/url-input", json={"value": "https://example.com"})
            data = client.post("/api/v1/url-input/submit").json()
            assert data["changed"] is True
            assert data["snapshot"]["progress"]["status"] == "running"
            assert client.get("/api/v1/history").json() == ["https://example.com"]

    def test_select_from_history(self, test_client):
        with test_client() as client:
            missing = client.post(
                "/api/v1/url-input/select", json={"url": "https://example.com"}
            )
            assert missing.status_code == 404

            client.post("/api/v1/session/start", json={"url": "https://example.com"})
            data = client.post(
                "/api/v1/url-input/select", json={"url": "https://example.com"}
            ).json()
        assert data["value"] == "https://example.com"
        assert data["check"]["state"] == "valid"


class TestJobEndpoints:
    def test_list_jobs_camel_case(self, test_client):
        with test_client(handler=backend_ok) as client:
            data = client.get("/api/v1/jobs").json()
        assert [job["id"] for job in data] == ["job-1", "job-2"]
        assert "createdAt" in data[0]

    def test_list_jobs_backend_down(self, test_client):
        with test_client(handler=backend_down) as client:
            response = client.get("/api/v1/jobs")
        assert response.status_code == 502
        assert response.json()["detail"] == "Crawl backend error: Connection refused"

    def test_summary_reports_error(self, test_client):
        with test_client(handler=backend_down) as client:
            response = client.get("/api/v1/jobs/summary")
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 0
        assert data["error"] == "Connection refused"

    def test_summary(self, test_client):
        with test_client(handler=backend_ok) as client:
            data = client.get("/api/v1/jobs/summary").json()
        assert data["total"] == 2
        assert data["active"] == 1
        assert data["completed"] == 1
        assert data["error"] is None

    def test_launch(self, test_client):
        with test_client(handler=backend_ok) as client:
            response = client.post("/api/v1/jobs", json={"urls": ["https://example.com"]})
        assert response.status_code == 200
        assert response.json()["id"] == "job-3"

    def test_launch_requires_urls(self, test_client):
        with test_client(handler=backend_ok) as client:
            response = client.post("/api/v1/jobs", json={"urls": []})
        assert response.status_code == 422

    def test_get_and_stop_job(self, test_client):
        with test_client(handler=backend_ok) as client:
            job = client.get("/api/v1/jobs/job-1").json()
            assert job["resultsCount"] == 4

            response = client.post("/api/v1/jobs/job-1/stop")
        assert response.json() == {"status": "stopped", "job_id": "job-1"}

    def test_unknown_job(self, test_client):
        with test_client(handler=backend_ok) as client:
            response = client.get("/api/v1/jobs/nope")
        assert response.status_code == 502
        assert response.json()["detail"] == "Crawl backend error: HTTP 404: Not Found"

    def test_validate(self, test_client):
        with test_client(handler=backend_ok) as client:
            data = client.post(
                "/api/v1/jobs/validate", json={"urls": ["https://example.com"]}
            ).json()
        assert data[0]["isValid"] is True

    def test_export(self, test_client):
        with test_client(handler=backend_ok) as client:
            response = client.post(
                "/api/v1/jobs/export", json={"format": "json", "jobId": "job-1"}
            )
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")
        assert 'filename="crawl-job-1.json"' in response.headers["content-disposition"]
        assert response.content == b'[{"url": "https://example.com"}]'

    def test_export_non_latin1_filename(self, test_client):
        with test_client(handler=backend_ok) as client:
            response = client.post(
                "/api/v1/jobs/export",
                json={"format": "csv", "jobId": "job-1", "filename": "結果.csv"},
            )
        assert response.status_code == 200
        disposition = response.headers["content-disposition"]
        assert 'filename="__.csv"' in disposition
        assert "filename*=UTF-8''%E7%B5%90%E6%9E%9C.csv" in disposition

    def test_export_filename_cannot_break_header(self, test_client):
        with test_client(handler=backend_ok) as client:
            response = client.post(
                "/api/v1/jobs/export",
                json={"format": "csv", "jobId": "job-1", "filename": 'a"b\r\nc.csv'},
            )
        assert response.status_code == 200
        disposition = response.headers["content-disposition"]
        assert 'filename="a_b__c.csv"' in disposition
        assert "filename*=UTF-8''a%22b%0D%0Ac.csv" in disposition

    def test_get_job_empty_backend_body(self, test_client):
        with test_client(handler=backend_empty) as client:
            response = client.get("/api/v1/jobs/job-1")
        assert response.status_code == 502
        assert response.json()["detail"] == "Crawl backend error: empty response"

    def test_launch_empty_backend_body(self, test_client):
        with test_client(handler=backend_empty) as client:
            response = client.post("/api/v1/jobs", json={"urls": ["https://example.com"]})
            assert client.get("/api/v1/jobs/summary").json()["total"] == 0
        assert response.status_code == 502
        assert response.json()["detail"] == "Crawl backend error: empty response"
