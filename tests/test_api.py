import pytest
from httpx import ASGITransport, AsyncClient

from mlbdfs.api import create_app
from mlbdfs.config import ProjectionSettings

from tests.samples import batter_entry, pitcher_entry


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def client():
    app = create_app(settings=ProjectionSettings())
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client


def _player_body(entry: dict) -> dict:
    body = dict(entry)
    body.pop("kind")
    body.pop("lineup_slot", None)
    return body


@pytest.mark.anyio
async def test_health(client):
    resp = await client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


@pytest.mark.anyio
async def test_scoring_tables(client):
    resp = await client.get("/scoring-tables")

    assert resp.status_code == 200
    tables = {table["site"]: table for table in resp.json()}
    assert tables["DK"]["batter"]["home_run"] == 10
    assert tables["FD"]["pitcher"]["out"] == 1


@pytest.mark.anyio
async def test_normalize_batter(client):
    resp = await client.post("/normalize/batter", json={"AB": "100", "H": "30", "BB": "-.--"})

    assert resp.status_code == 200
    payload = resp.json()
    assert payload["avg"] == pytest.approx(0.3)
    assert payload["walks"] == 0


@pytest.mark.anyio
async def test_normalize_pitcher_reports_estimate(client):
    resp = await client.post("/normalize/pitcher", json={"inningsPitched": "6.2", "earnedRuns": 2})

    assert resp.status_code == 200
    payload = resp.json()
    assert payload["outs"] == 20
    assert payload["batters_faced_estimated"] is True


@pytest.mark.anyio
async def test_unknown_kind_is_404(client):
    resp = await client.post("/normalize/coach", json={})

    assert resp.status_code == 404


@pytest.mark.anyio
async def test_career(client):
    resp = await client.post(
        "/career/batter",
        json={
            "splits": [
                {"season": "2022", "stat": {"atBats": 10, "hits": 4}},
                {"season": "2023", "stat": {"atBats": 500, "hits": 100}},
            ]
        },
    )

    assert resp.status_code == 200
    payload = resp.json()
    assert list(payload["seasons"]) == ["2022", "2023"]
    assert payload["career"]["avg"] == pytest.approx(104 / 510)


@pytest.mark.anyio
async def test_single_projection(client):
    resp = await client.post("/projections/batter", json=_player_body(batter_entry()))

    assert resp.status_code == 200
    payload = resp.json()
    assert payload["kind"] == "batter"
    assert payload["site"] == "DK"
    assert payload["floor"]["total_points"] <= payload["expected"]["total_points"] <= payload["ceiling"]["total_points"]
    assert 0 <= payload["confidence"] <= 100


@pytest.mark.anyio
async def test_single_projection_site_and_errors(client):
    body = _player_body(pitcher_entry())

    fanduel = await client.post("/projections/pitcher", params={"site": "fd"}, json=body)
    assert fanduel.status_code == 200
    assert fanduel.json()["site"] == "FD"

    missing = await client.post("/projections/pitcher", params={"site": "ZZ"}, json=body)
    assert missing.status_code == 404

    body["factors"] = [{"kind": "ballpark", "value": 1.1}, {"kind": "ballpark", "value": 0.9}]
    duplicate = await client.post("/projections/pitcher", json=body)
    assert duplicate.status_code == 422


@pytest.mark.anyio
async def test_slate_projection(client):
    resp = await client.post(
        "/projections/slate",
        json={"players": [batter_entry(), pitcher_entry(), "junk"], "sort_by": "value"},
    )

    assert resp.status_code == 200
    payload = resp.json()
    assert payload["site"] == "DK"
    assert payload["pool_summary"]["available"] == 2
    assert [item["rank"] for item in payload["projections"]] == [1, 2]
    assert payload["skipped"] == [{"index": 2, "player_id": None, "reason": "entry is not an object"}]
    for item in payload["projections"]:
        assert item["tier"] in {"top", "mid", "low"}


@pytest.mark.anyio
async def test_slate_projection_filters(client):
    resp = await client.post(
        "/projections/slate",
        json={"players": [batter_entry(), pitcher_entry()], "kind": "pitcher"},
    )

    assert resp.status_code == 200
    payload = resp.json()
    assert [item["projection"]["context"]["player_id"] for item in payload["projections"]] == ["p1"]
    assert payload["summary"]["selected"] == 1


@pytest.mark.anyio
async def test_slate_projection_custom_scoring(client):
    bad = await client.post(
        "/projections/slate",
        json={"players": [batter_entry()], "scoring": {"site": "HOME", "batter": {"single": 3}}},
    )
    assert bad.status_code == 400

    unknown_site = await client.post("/projections/slate", params={"site": "ZZ"}, json={"players": []})
    assert unknown_site.status_code == 404


@pytest.mark.anyio
async def test_slate_projection_skips_invalid_factors(client):
    context = batter_entry()["context"]
    duplicate = batter_entry(
        context=dict(context, player_id="dup"),
        factors=[{"kind": "ballpark", "value": 1.1}, {"kind": "ballpark", "value": 0.9}],
    )
    negative = batter_entry(context=dict(context, player_id="neg"), factors=[{"kind": "opponent", "value": -1}])

    resp = await client.post("/projections/slate", json={"players": [batter_entry(), duplicate, negative, pitcher_entry()]})

    assert resp.status_code == 200
    payload = resp.json()
    assert sorted(item["projection"]["context"]["player_id"] for item in payload["projections"]) == ["b1", "p1"]
    assert [(item["index"], item["player_id"]) for item in payload["skipped"]] == [(1, "dup"), (2, "neg")]
