"""HTTP surface, driven through FastAPI's TestClient."""

from core.review_engine.engine import ReviewAnalyzer


def post_analysis(api_client, code="var x = 1;", language="javascript"):
    return api_client.post("/api/analyze", json={"code": code, "language": language})


class TestAnalyze:
    def test_returns_result_with_id(self, api_client):
        resp = post_analysis(api_client)
        assert resp.status_code == 200
        body = resp.json()
        assert body["id"] == 1
        assert body["qualityScore"] == 77
        assert body["summary"]["totalIssues"] == len(body["issues"])
        assert body["optimizedCode"] == "const x = 1;"
        assert {"type", "severity", "line", "message", "category"} == set(body["issues"][0])

    def test_python_has_no_optimized_code(self, api_client):
        body = post_analysis(api_client, code="x = 1", language="python").json()
        assert "optimizedCode" not in body

    def test_empty_code_rejected_before_storage(self, api_client, store):
        resp = post_analysis(api_client, code="")
        assert resp.status_code == 500
        assert "code" in resp.json()["message"]
        assert len(store) == 0

    def test_unknown_language_rejected(self, api_client, store):
        resp = post_analysis(api_client, language="rust")
        assert resp.status_code == 500
        assert "language" in resp.json()["message"]
        assert len(store) == 0

    def test_missing_fields_rejected(self, api_client, store):
        resp = api_client.post("/api/analyze", json={"language": "python"})
        assert resp.status_code == 500
        assert resp.json()["message"]
        assert len(store) == 0

    def test_malformed_json_rejected(self, api_client, store):
        resp = api_client.post(
            "/api/analyze",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 500
        assert "message" in resp.json()
        assert len(store) == 0

    def test_analysis_failure_stores_nothing(self, api_client, store, monkeypatch):
        def boom(self, code):
            raise RuntimeError("analyzer exploded")

        monkeypatch.setattr(ReviewAnalyzer, "analyze", boom)
        resp = post_analysis(api_client)
        assert resp.status_code == 500
        assert resp.json() == {"message": "analyzer exploded"}
        assert len(store) == 0


class TestGetAnalysis:
    def test_round_trip(self, api_client):
        created = post_analysis(api_client).json()
        resp = api_client.get(f"/api/analysis/{created['id']}")
        assert resp.status_code == 200
        stored = resp.json()
        assert stored["code"] == "var x = 1;"
        assert stored["language"] == "javascript"
        assert stored["qualityScore"] == created["qualityScore"]
        assert stored["issues"] == created["issues"]
        assert stored["optimizedCode"] == created["optimizedCode"]
        assert "createdAt" in stored

    def test_not_found(self, api_client):
        resp = api_client.get("/api/analysis/99")
        assert resp.status_code == 404
        assert resp.json() == {"message": "Analysis not found"}

    def test_non_numeric_id_is_not_found(self, api_client):
        post_analysis(api_client)
        assert api_client.get("/api/analysis/abc").status_code == 404

    def test_leading_digits_are_parsed(self, api_client):
        post_analysis(api_client)
        resp = api_client.get("/api/analysis/1abc")
        assert resp.status_code == 200
        assert resp.json()["id"] == 1


class TestRecent:
    def test_limit_two_returns_newest_first(self, api_client):
        for code in ("var a = 1;", "var b = 2;", "var c = 3;"):
            post_analysis(api_client, code=code)
        resp = api_client.get("/api/analyses/recent", params={"limit": 2})
        assert resp.status_code == 200
        assert [a["code"] for a in resp.json()] == ["var c = 3;", "var b = 2;"]

    def test_default_limit_is_ten(self, api_client):
        for _ in range(12):
            post_analysis(api_client)
        assert len(api_client.get("/api/analyses/recent").json()) == 10

    def test_unparseable_limit_falls_back_to_default(self, api_client):
        for _ in range(11):
            post_analysis(api_client)
        assert len(api_client.get("/api/analyses/recent?limit=lots").json()) == 10
        assert len(api_client.get("/api/analyses/recent?limit=0").json()) == 10

    def test_empty_store(self, api_client):
        assert api_client.get("/api/analyses/recent").json() == []


def test_health(api_client):
    assert api_client.get("/health").json() == {"status": "ok", "storage": "memory"}
