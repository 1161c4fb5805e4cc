import httpx
import pytest

from app.core.errors import RemoteUnavailableError
from app.core.settings import settings
from app.models.weather import WeatherForecast
from app.services import weather_service as ws

CURRENT = {
    "weather": [{"main": "Clouds", "description": "broken clouds"}],
    "main": {"temp": 29.5, "humidity": 78},
    "wind": {"speed": 5.0},
    "clouds": {"all": 80},
    "visibility": 9000,
}

FORECAST = {
    "list": [
        {"dt_txt": "2026-10-18 09:00:00", "main": {"temp": 27.4, "humidity": 70}, "wind": {"speed": 2.0},
         "pop": 0.35, "weather": [{"main": "Rain", "description": "light rain"}]},
        {"dt_txt": "2026-10-18 12:00:00", "main": {"temp": 31.6, "humidity": 60}, "wind": {"speed": 3.0},
         "pop": 0.1, "weather": [{"main": "Clear", "description": "clear sky"}]},
        {"dt_txt": "2026-10-19 09:00:00", "main": {"temp": 26.0, "humidity": 80}, "wind": {"speed": 1.0},
         "pop": 0.0, "weather": [{"main": "Thunderstorm", "description": "thunderstorm"}]},
    ]
}


def _owm(request: httpx.Request) -> httpx.Response:
    if request.url.path.endswith("/weather"):
        return httpx.Response(200, json=CURRENT)
    return httpx.Response(200, json=FORECAST)


@pytest.mark.parametrize(
    "main,clouds,expected",
    [
        ("Clear", 0, "sunny"),
        ("Clouds", 80, "cloudy"),
        ("Clouds", 40, "partly-cloudy"),
        ("Drizzle", 0, "rainy"),
        ("Thunderstorm", 0, "stormy"),
        ("Mist", 0, "partly-cloudy"),
    ],
)
def test_map_condition(main, clouds, expected):
    assert ws.map_condition(main, clouds) == expected


def test_alerts():
    assert ws.derive_alerts(36, 15, "thunderstorm") == [
        "Heat Warning: Extreme temperatures",
        "High Wind Warning",
        "Thunderstorm Warning",
    ]
    assert ws.derive_alerts(30, 2, "clear") == []


def test_current_from_payload():
    out = ws.current_from_payload(CURRENT)
    assert out["temperature"] == 30
    assert out["wind_speed"] == 18
    assert out["visibility"] == 9
    assert out["condition"] == "cloudy"


def test_forecast_groups_by_day():
    days = ws.forecast_from_payload(FORECAST, days=5)
    assert len(days) == 2
    first = days[0]
    assert (first["temperature_high"], first["temperature_low"]) == (32, 27)
    assert first["icon"] == "rainy"
    assert first["precipitation"] == 35
    assert days[1]["icon"] == "stormy"


def test_sync_replaces_active_forecast(db, monkeypatch):
    monkeypatch.setattr(settings, "OPENWEATHER_API_KEY", "k")
    with httpx.Client(transport=httpx.MockTransport(_owm)) as c:
        ws.sync_weather(db, client=c)
        db.commit()
        out = ws.sync_weather(db, client=c)
        db.commit()

    assert out.success is True
    assert db.query(WeatherForecast).count() == 4
    assert db.query(WeatherForecast).filter(WeatherForecast.is_active == True).count() == 2  # noqa: E712
    latest = ws.get_weather(db)
    assert latest.current.condition == "cloudy"
    assert [f.date.isoformat() for f in latest.forecast] == ["2026-10-18", "2026-10-19"]


def test_sync_without_key_fails(db, monkeypatch):
    monkeypatch.setattr(settings, "OPENWEATHER_API_KEY", None)
    with pytest.raises(RemoteUnavailableError) as ei:
        ws.sync_weather(db, client=httpx.Client(transport=httpx.MockTransport(_owm)))
    assert ei.value.status_code == 500


def test_sync_upstream_error(db, monkeypatch):
    monkeypatch.setattr(settings, "OPENWEATHER_API_KEY", "k")
    with httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(401))) as c:
        with pytest.raises(RemoteUnavailableError) as ei:
            ws.sync_weather(db, client=c)
    assert "401" in ei.value.message


def test_sync_endpoint_requires_staff(client, editor_headers, mock_http, monkeypatch):
    monkeypatch.setattr(settings, "OPENWEATHER_API_KEY", "k")
    seen = mock_http(_owm)
    assert client.post("/api/v1/weather/sync").status_code == 401

    r = client.post("/api/v1/weather/sync", headers=editor_headers)
    assert r.status_code == 200
    assert seen[0].url.params["units"] == "metric"
    assert client.get("/delivery/v1/weather").json()["current"]["temperature"] == 30
