import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'moderation_schedule' and tests/ importable for 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from moderation_schedule.core.config.site import CONFIG_ENV_VAR
from moderation_schedule.core.stdlib_logging import reset_stdlib_logging_for_tests
from helpers.factories import editorial_workflow, make_validator, site_config_dict
from helpers.io_utils import write_yaml


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch):
    """Keep a developer's config env var from leaking into tests."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    yield
    reset_stdlib_logging_for_tests()


@pytest.fixture
def workflow():
    return editorial_workflow()


@pytest.fixture
def validator():
    return make_validator()


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    path = tmp_path / "site.yaml"
    write_yaml(path, site_config_dict())
    return path
