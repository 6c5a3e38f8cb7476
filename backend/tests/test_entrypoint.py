"""Entry point — `python -m app` / `adslot-api` serve app.main:app with uvicorn."""

import uvicorn

from app.__main__ import main
from app.config import get_settings


def test_main_runs_uvicorn_with_settings(monkeypatch):
    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda *args, **kwargs: calls.append((args, kwargs)))

    main()

    settings = get_settings()
    assert calls == [(
        ("app.main:app",),
        {"host": settings.api_host, "port": settings.api_port, "log_config": None},
    )]
