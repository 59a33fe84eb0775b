import asyncio
import json

import httpx

from scripts.debug_fetch import fetch_data


def _run(transport, question_id=1379):
    return asyncio.run(fetch_data(question_id, "http://localhost:3000", transport=transport))


def test_prints_pretty_json(capsys):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        return httpx.Response(200, json={"question_id": 1379, "source": "database"})

    data = _run(httpx.MockTransport(handler))

    assert seen["url"] == "http://localhost:3000/api/questions/1379"
    assert data == {"question_id": 1379, "source": "database"}
    out = capsys.readouterr().out
    assert json.loads(out) == data
    assert '\n  "question_id": 1379' in out


def test_network_error_goes_to_stderr(capsys):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    assert _run(httpx.MockTransport(handler)) is None
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Error fetching data" in captured.err


def test_invalid_json_goes_to_stderr(capsys):
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>oops</html>"))

    assert _run(transport) is None
    assert "Error fetching data" in capsys.readouterr().err
