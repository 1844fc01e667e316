import os
import tempfile
from pathlib import Path

import pytest

# The app reads its settings at import time, so point it at a throwaway
# settings file before any test module imports linktester.main.
_TMP_DIR = Path(tempfile.mkdtemp(prefix="linktester-tests-"))
_SETTINGS_PATH = _TMP_DIR / "settings.yml"
_SETTINGS_PATH.write_text(
    """
app:
  name: "Universal Link Test"
security:
  session_secret: "test-session-secret"
logging:
  level: "INFO"
  dir: ""
""".lstrip(),
    encoding="utf-8",
)
os.environ["LINKTESTER_SETTINGS"] = str(_SETTINGS_PATH)


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from linktester.main import app

    return TestClient(app)
