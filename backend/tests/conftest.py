import os
import tempfile

# must run before storefront.config builds its Settings
_TMP = tempfile.mkdtemp(prefix="storefront-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP, 'test.db')}"
os.environ["LOCK_DIR"] = os.path.join(_TMP, "locks")
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SECRET_KEY"] = "test-secret-key-that-is-long-enough-for-hs256"
os.environ["RESET_DB"] = "false"

import pytest

from storefront.db import SessionLocal, init_db


@pytest.fixture(autouse=True)
def fresh_db():
    # every test starts from empty tables
    init_db(reset=True)
    yield


@pytest.fixture
def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()
