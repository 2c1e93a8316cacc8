from parking_radar.config import (
    TOKEN_CANDIDATES,
    TOKEN_COOKIE_NAMES,
    TOKEN_HEADER_NAMES,
    Settings,
)


def test_default_settings(monkeypatch):
    for name in ("TARGET_ORIGIN", "PARKS_PATH", "REQUEST_TIMEOUT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    s = Settings()
    assert s.target_origin == "https://itaipeiparking.pma.gov.taipei"
    assert s.parks_path == "/w1/GetParks"
    assert s.request_timeout == 8.0
    assert s.log_level == "INFO"
    assert "ParkingRadar/1.0" in s.user_agent


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("TARGET_ORIGIN", "https://parking.example.com/")
    monkeypatch.setenv("PARKS_PATH", "api/parks/")
    monkeypatch.setenv("REQUEST_TIMEOUT", "2.5")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("USER_AGENT", "test-agent")
    s = Settings()
    assert s.target_origin == "https://parking.example.com"
    assert s.parks_path == "/api/parks"
    assert s.request_timeout == 2.5
    assert s.log_level == "DEBUG"
    assert s.user_agent == "test-agent"


def test_candidate_order():
    assert TOKEN_CANDIDATES[0] == "/antiforgery/token"
    assert TOKEN_CANDIDATES[-1] == "/w1/InitToken"
    assert len(TOKEN_CANDIDATES) == len(set(TOKEN_CANDIDATES)) == 8


def test_cookie_and_header_names():
    assert TOKEN_COOKIE_NAMES[0] == "XSRF-TOKEN"
    assert len(TOKEN_COOKIE_NAMES) == 5
    assert set(TOKEN_HEADER_NAMES) == {
        "X-CSRF-TOKEN",
        "RequestVerificationToken",
        "X-XSRF-TOKEN",
        "__RequestVerificationToken",
    }
