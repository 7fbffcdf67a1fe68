import pytest
from jsreflect.env import ENV_JSREFLECT_TRACE_TRAPS


@pytest.fixture(autouse=True)
def _no_trap_tracing(monkeypatch: pytest.MonkeyPatch):  # pyright: ignore[reportUnusedFunction]
	monkeypatch.delenv(ENV_JSREFLECT_TRACE_TRAPS, raising=False)
	yield
