"""Tests for the FastAPI service mode."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from uibind.errors import ParseError
from uibind.orchestrator import GenerationOutcome
from uibind.service import create_app

from tests._fixtures.project_builder import ProjectBuilder, uxml


class _StubOrchestrator:
    def __init__(self) -> None:
        self.generate_calls: list[dict[str, object]] = []
        self.preview_on_event_loop: list[bool] = []

    def generate_bindings(self, path: str, *, dry_run: bool = False) -> GenerationOutcome:
        self.generate_calls.append({"path": path, "dry_run": dry_run})
        if dry_run:
            return GenerationOutcome(path, Path("UIBind/MainMenu.g.cs"), written=False, diff="diff", dry_run=True)
        return GenerationOutcome(path, Path("UIBind/MainMenu.g.cs"), written=True)

    def generate_script(self, path: str, *, dry_run: bool = False) -> GenerationOutcome:
        return GenerationOutcome(path, Path("UIBind/MainMenu.cs"), written=False)

    def preview(self, markup: str, **_: object) -> str:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            self.preview_on_event_loop.append(False)
        else:
            self.preview_on_event_loop.append(True)
        if markup == "<UXML>":
            raise ParseError("not well-formed", source="inline", line=1, column=2)
        return "// preview"


@pytest.fixture
def stub() -> _StubOrchestrator:
    return _StubOrchestrator()


@pytest.fixture
def client(stub: _StubOrchestrator) -> TestClient:
    return TestClient(create_app(lambda: stub))


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_generate_endpoint(client: TestClient, stub: _StubOrchestrator) -> None:
    response = client.post("/generate", json={"path": "Assets/UI/MainMenu.uxml"})

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "written"
    assert data["output_path"].endswith("MainMenu.g.cs")
    assert data["diff"] is None
    assert stub.generate_calls == [{"path": "Assets/UI/MainMenu.uxml", "dry_run": False}]


def test_generate_dry_run_endpoint(client: TestClient) -> None:
    response = client.post("/generate", json={"path": "Assets/UI/MainMenu.uxml", "dry_run": True})

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "dry-run"
    assert data["dry_run"] is True
    assert data["diff"] == "diff"


def test_script_endpoint_reports_unchanged(client: TestClient) -> None:
    response = client.post("/script", json={"path": "Assets/UI/MainMenu.uxml"})
    assert response.status_code == 200
    assert response.json()["status"] == "unchanged"


def test_parse_errors_map_to_bad_request(client: TestClient) -> None:
    response = client.post("/preview", json={"markup": "<UXML>", "name": "Hud"})
    assert response.status_code == 400
    assert "line 1" in response.json()["detail"]


def test_preview_runs_in_worker_thread(client: TestClient, stub: _StubOrchestrator) -> None:
    response = client.post("/preview", json={"markup": "<UXML />", "name": "Hud"})

    assert response.status_code == 200
    assert response.json() == {"source": "// preview"}
    assert stub.preview_on_event_loop == [False]


def test_project_backed_preview_and_unconfigured_generate(project_builder: ProjectBuilder) -> None:
    project_builder.write({"Assets/UI/MainMenu.uxml": uxml('<ui:Button name="Play" />')})
    client = TestClient(create_app(project_builder.orchestrator))

    preview = client.post(
        "/preview",
        json={"markup": uxml('<ui:Button name="Play" />'), "name": "Hud", "shape": "EditorWindow"},
    )
    missing = client.post("/generate", json={"path": "Assets/UI/MainMenu.uxml"})

    assert preview.status_code == 200
    assert "public partial class Hud : EditorWindow" in preview.json()["source"]
    assert missing.status_code == 404
    assert "uibind configure" in missing.json()["detail"]
