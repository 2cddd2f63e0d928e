import os
import tempfile

import pytest

# Point storage at a throwaway database before the package is imported.
_TMP_DIR = tempfile.mkdtemp(prefix="malta-auctions-tests-")
os.environ["MALTA_AUCTIONS_DB_PATH"] = os.path.join(_TMP_DIR, "test.db")
os.environ.setdefault("MALTA_AUCTIONS_LOG_JSON", "false")

from malta_auctions import config
from malta_auctions.db import init_db, reset_db
from malta_auctions.main import _startup

config.DB_PATH = os.environ["MALTA_AUCTIONS_DB_PATH"]
init_db()
_startup()


@pytest.fixture(autouse=True)
def _reset_db():
    reset_db()
    yield


def make_asset(**overrides):
    """Build a minimal valid asset in its JSON (camelCase) form."""
    data = {
        "type": "vehicle",
        "seizureReason": "debt",
        "legalStatus": {"unSanctionsCompliance": True, "localCourtOrder": None},
        "description": "Grey hatchback",
        "source": "Customs Department",
        "dateAdded": "2025-03-01T10:00:00Z",
    }
    data.update(overrides)
    return data
