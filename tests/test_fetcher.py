import httpx

from careerscraper.pagescan.fetcher import fetch_with_timeout


class DummyClient:
    def __init__(self, outcome, *a, **k):
        self.outcome = outcome
        self.closed = False
        self.calls = []
    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome
    def close(self):
        self.closed = True


def test_fetch_ok():
    client = DummyClient(httpx.Response(200, text="<html>ok</html>"))
    res = fetch_with_timeout("https://example.com", client=client)
    assert res.success and res.data == "<html>ok</html>"
    assert client.calls[0][1].read == 5.0
    # caller-owned client is left open
    assert client.closed is False


def test_fetch_http_error_status():
    res = fetch_with_timeout("https://example.com/missing", client=DummyClient(httpx.Response(404)))
    assert res.success is False
    assert res.error == "HTTP 404: Not Found"


def test_fetch_timeout():
    res = fetch_with_timeout("https://slow.example.com", timeout_ms=50, client=DummyClient(httpx.ReadTimeout("timed out")))
    assert res.success is False
    assert res.error == "Request timed out"


def test_fetch_transport_error():
    res = fetch_with_timeout("https://down.example.com", client=DummyClient(httpx.ConnectError("Connection refused")))
    assert res.success is False
    assert res.error == "Connection refused"


def test_fetch_owns_and_closes_default_client(monkeypatch):
    created = []

    def factory(*a, **k):
        c = DummyClient(httpx.Response(200, text="[]"))
        created.append((c, k))
        return c
    monkeypatch.setattr("careerscraper.pagescan.fetcher.httpx.Client", factory)
    res = fetch_with_timeout("https://api.example.com", timeout_ms=2500)
    assert res.success
    client, kwargs = created[0]
    assert client.closed is True
    assert kwargs["headers"]["User-Agent"].startswith("Mozilla/5.0")


def test_fetch_default_timeout_comes_from_settings(monkeypatch):
    from careerscraper.pagescan.settings import SETTINGS
    monkeypatch.setattr("careerscraper.pagescan.fetcher.SETTINGS", SETTINGS.replace(fetch_timeout_ms=1234))
    client = DummyClient(httpx.Response(200, text="ok"))
    fetch_with_timeout("https://example.com", client=client)
    assert client.calls[0][1].read == 1.234
