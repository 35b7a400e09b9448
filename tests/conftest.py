from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from innforum.api.deps import get_referer
from innforum.common import errors
from innforum.infra.config import Settings
from innforum.main import create_app
from innforum.web.forms import FormModel, ValidatedForm, validated_form


class SignupForm(FormModel):
    username: str
    age: int
    tags: List[str] = []

    def validate_form(self):
        problems = {}
        if not 1 <= len(self.username) <= 32:
            problems["username"] = ["length must be between 1 and 32"]
        if self.age < 0:
            problems["age"] = ["must not be negative"]
        return problems


@pytest.fixture()
def conf(tmp_path: Path) -> Settings:
    return Settings(
        SERVE_DIR=[
            ("/static/imgs", str(tmp_path / "imgs"), ""),
            ("/static/docs", str(tmp_path / "docs"), "Docs"),
        ],
        VERSION="1.2.3",
        GIT_COMMIT="abcdef0123456789",
        BUILD_SHA256="f" * 64,
        SITE_NAME="testforum",
    )


def _add_demo_routes(app: FastAPI) -> None:
    @app.get("/boom/{kind}")
    def boom(kind: str):
        raise getattr(errors, kind)()

    @app.get("/crash")
    def crash():
        raise RuntimeError("kaput")

    @app.post("/signup")
    def signup(form: ValidatedForm[SignupForm] = Depends(validated_form(SignupForm))):
        return {"username": form.value.username, "age": form.value.age, "tags": form.value.tags}

    @app.get("/search")
    def search(form: ValidatedForm[SignupForm] = Depends(validated_form(SignupForm))):
        return {"username": form.value.username}

    @app.get("/referer")
    def referer(value: Optional[str] = Depends(get_referer)):
        return {"referer": value}


@pytest.fixture()
def app(conf: Settings) -> FastAPI:
    app = create_app(conf)
    _add_demo_routes(app)
    return app


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False, follow_redirects=False)
