import os
import tempfile
from dataclasses import replace
from datetime import datetime

import pytest

# Keep the import-time settings (log file, default storage) out of the project tree.
_SESSION_DIR = tempfile.mkdtemp(prefix="report_generator_tests_")
os.environ["LOG_FILE"] = os.path.join(_SESSION_DIR, "test.log")
os.environ["REPORTS_DIR"] = os.path.join(_SESSION_DIR, "reports")
os.environ.pop("CORS_ORIGINS", None)
os.environ.pop("REPORT_FILE_PREFIX", None)

from fastapi.testclient import TestClient  # noqa: E402

from app.core.logging_config import configure_logging  # noqa: E402
from app.core.settings import get_settings  # noqa: E402
from app.report.service import ReportGenerationService  # noqa: E402
from app.report.storage import ReportStorage  # noqa: E402


configure_logging(get_settings())

FIXED_NOW = datetime(2024, 3, 5, 14, 7, 9)


@pytest.fixture
def reports_dir(tmp_path):
    return tmp_path / "reports"


@pytest.fixture
def storage(reports_dir):
    return ReportStorage(root=reports_dir)


@pytest.fixture
def service(storage):
    return ReportGenerationService(storage=storage, clock=lambda: FIXED_NOW)


@pytest.fixture
def client(reports_dir):
    from app.main import app

    settings = replace(get_settings(), reports_dir=reports_dir)
    app.dependency_overrides[get_settings] = lambda: settings
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
