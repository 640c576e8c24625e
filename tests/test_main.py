import logging
from unittest.mock import patch

import pytest
import uvicorn
from fastapi import FastAPI

from order_services import main as entrypoint
from order_services.config import Config


@pytest.fixture(autouse=True)
def restore_root_level():
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)


@pytest.mark.parametrize("log_level", ["WARN", "FATAL", "debug", "INFO"])
def test_main_starts_uvicorn_with_accepted_log_level(log_level):
    config = Config(_env_file=None, log_level=log_level)
    started = []

    def fake_run(app, **kwargs):
        # building uvicorn's config resolves the log level name
        uvicorn.Config(app, **kwargs)
        started.append((app, kwargs))

    with (
        patch.object(entrypoint, "get_settings", return_value=config),
        patch.object(entrypoint.uvicorn, "run", side_effect=fake_run),
    ):
        entrypoint.main(["payment"])

    app, kwargs = started[0]
    assert isinstance(app, FastAPI)
    assert app.title == "Payment Service"
    assert kwargs["host"] == "0.0.0.0"
    assert kwargs["port"] == 8080
    assert kwargs["log_level"] == config.log_level.lower()


def test_main_host_and_port_override_settings():
    config = Config(_env_file=None)

    with (
        patch.object(entrypoint, "get_settings", return_value=config),
        patch.object(entrypoint.uvicorn, "run") as run,
    ):
        entrypoint.main(["shipping", "--host", "127.0.0.1", "--port", "9090"])

    app = run.call_args.args[0]
    assert app.title == "Shipping Service"
    assert run.call_args.kwargs["host"] == "127.0.0.1"
    assert run.call_args.kwargs["port"] == 9090


def test_main_rejects_unknown_service():
    with pytest.raises(SystemExit):
        entrypoint.main(["billing"])
