import pytest

from ceelo.allocator import MAX_ALLOCATION_ATTEMPTS
from ceelo.config import DEFAULT_DB_PATH, Settings


def test_defaults():
    s = Settings.from_env({})
    assert s.port == 3000
    assert s.db_path == DEFAULT_DB_PATH
    assert s.reset_secret == ""
    assert s.admin_password == "buck"
    assert s.max_attempts == MAX_ALLOCATION_ATTEMPTS
    assert s.friends is None


def test_from_env():
    s = Settings.from_env(
        {
            "PORT": "8080",
            "CEELO_DB_PATH": "",
            "RESET_SECRET": "s3",
            "ADMIN_PASSWORD": "pw",
            "ADMIN_TOKEN_TTL": "30",
            "CEELO_MAX_ATTEMPTS": "10",
            "LOG_LEVEL": "debug",
            "CEELO_FRIENDS": " Ann, Bob ,,",
        }
    )
    assert s.port == 8080
    assert s.db_path == ""
    assert s.reset_secret == "s3"
    assert s.admin_password == "pw"
    assert s.admin_token_ttl == 30
    assert s.max_attempts == 10
    assert s.log_level == "debug"
    assert s.friends == ("Ann", "Bob")


def test_bad_integer():
    with pytest.raises(ValueError):
        Settings.from_env({"PORT": "http"})


@pytest.mark.parametrize("name", ["CEELO_MAX_ATTEMPTS", "ADMIN_TOKEN_TTL"])
@pytest.mark.parametrize("raw", ["0", "-5"])
def test_non_positive_limits_rejected(name, raw):
    with pytest.raises(ValueError, match=name):
        Settings.from_env({name: raw})
