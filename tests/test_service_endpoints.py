from __future__ import annotations

from fastapi.testclient import TestClient

from recording_check import (
    EventType,
    EventTypeCatalog,
    InMemoryRecordingRegistry,
    Recording,
    create_app,
)


def _client() -> TestClient:
    registry = InMemoryRecordingRegistry(
        [
            Recording(id=1, name="startup", state="running", settings={"jdk.CPULoad#enabled": "true"}),
            Recording(id=2, name="continuous", state="new", max_age="6h"),
        ]
    )
    catalog = EventTypeCatalog([EventType(name="jdk.CPULoad", label="CPU Load", setting_descriptors=("enabled",))])
    return TestClient(create_app(registry, catalog))


def test_service_check_endpoint_returns_report() -> None:
    resp = _client().get("/check")

    assert resp.status_code == 200
    payload = resp.json()
    assert payload["lines"] == [
        "Recording 1: name=startup (running)",
        "",
        "Recording 2: name=continuous maxage=6h (new)",
    ]
    assert payload["report"] == "\n".join(payload["lines"]) + "\n"


def test_service_check_endpoint_verbose_named_recording() -> None:
    resp = _client().get("/check", params={"recording": "startup", "verbose": "true"})

    assert resp.status_code == 200
    assert resp.json()["lines"] == [
        "Recording 1: name=startup (running)",
        "",
        " CPU Load (jdk.CPULoad)",
        "   enabled=true",
    ]


def test_service_check_endpoint_unknown_recording_is_404() -> None:
    resp = _client().get("/check", params={"recording": "42"})

    assert resp.status_code == 404
    assert "Could not find 42." in resp.json()["detail"]


def test_service_lists_recordings_and_health() -> None:
    client = _client()

    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/recordings").json() == {
        "recordings": [
            {"id": 1, "name": "startup", "state": "running"},
            {"id": 2, "name": "continuous", "state": "new"},
        ]
    }


def test_service_without_recordings_returns_hint() -> None:
    resp = TestClient(create_app()).get("/check")

    assert resp.json()["lines"] == ["No available recordings.", "", "Use JFR.start to start a recording."]
