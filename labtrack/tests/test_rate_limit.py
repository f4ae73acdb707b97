from labtrack.utils.rate_limit import limiter


def test_extract_is_rate_limited(client, monkeypatch):
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    limiter.reset()
    files = [("files", ("labs.txt", b"Glucose 5.1 mmol/L " * 5, "text/plain"))]
    for _ in range(10):
        # no API key configured -> 400, but each call still counts
        assert client.post("/api/analyses/extract", files=files).status_code == 400
    r = client.post("/api/analyses/extract", files=files)
    assert r.status_code == 429
    assert "Retry-After" in r.headers
    j = r.json()
    assert j["code"] == "TOO_MANY_REQUESTS"
    assert "trace_id" in j


def test_reset_clears_counters(client, monkeypatch):
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    files = [("files", ("labs.txt", b"Glucose 5.1 mmol/L " * 5, "text/plain"))]
    for _ in range(10):
        client.post("/api/analyses/extract", files=files)
    limiter.reset()
    assert client.post("/api/analyses/extract", files=files).status_code == 400
