import mongomock
import pytest
from fastapi.testclient import TestClient

from demokrat import config
from demokrat.database import ensure_indexes, get_database
from demokrat.election_state import ElectionStateManager
from demokrat.ledger import VoteLedger
from demokrat.main import app
from demokrat.models.admin_model import AdminSession, PrivilegeLevel
from demokrat.security import pwd_context
from demokrat.session_version import MongoVersionCounter
from demokrat.storage_mongo import MongoAttendanceLog, MongoCredentialStore

ADMINS = [
    {"identity": "root", "secret": "rootpw", "privilege_level": "superadmin"},
    {"identity": "nominations", "secret": "valpw", "privilege_level": "valberedning"},
    {"identity": "viewer", "secret": "viewpw", "privilege_level": "results"},
    {"identity": "nobody", "secret": "nopw", "privilege_level": ""},
]

VOTERS = [
    {"identity": "alice@example.com", "secret": "1234"},
    {"identity": "bob@example.com", "secret": "5678"},
    {"identity": "carol@example.com", "secret": "9012"},
]


@pytest.fixture
def db():
    database = mongomock.MongoClient()["demokrat_test"]
    ensure_indexes(database)
    database[config.ADMINS_COLLECTION_NAME].insert_many([dict(a) for a in ADMINS])
    database[config.VOTERS_COLLECTION_NAME].insert_many([dict(v) for v in VOTERS])
    return database


@pytest.fixture
def counter(db):
    return MongoVersionCounter(db)


@pytest.fixture
def credentials(db):
    return MongoCredentialStore(db)


@pytest.fixture
def attendance(db):
    return MongoAttendanceLog(db)


@pytest.fixture
def elections(db):
    return ElectionStateManager(db)


@pytest.fixture
def ledger(db, elections):
    return VoteLedger(db, elections)


@pytest.fixture
def hashed_voter(db):
    db[config.VOTERS_COLLECTION_NAME].insert_one(
        {"identity": "dave@example.com", "secret": pwd_context.hash("4321")}
    )
    return "dave@example.com"


def make_session(level, identity="tester", version=1):
    return AdminSession(identity=identity, privilege_level=PrivilegeLevel.parse(level), issued_version=version)


@pytest.fixture
def superadmin():
    return make_session(PrivilegeLevel.SUPERADMIN, identity="root")


@pytest.fixture
def open_election(elections, superadmin):
    elections.set_active(superadmin, "President")
    for name in ("CandidateX", "CandidateY", "CandidateZ"):
        elections.add_candidate(superadmin, name)
    return elections


@pytest.fixture
def client(db):
    app.dependency_overrides[get_database] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()
