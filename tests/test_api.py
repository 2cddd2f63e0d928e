from fastapi.testclient import TestClient

from malta_auctions.main import app

from conftest import make_asset

client = TestClient(app)


def create(asset):
    r = client.post("/api/assets", json=asset)
    assert r.status_code == 201, r.text
    return r.json()["id"]


def test_create_returns_id():
    r = client.post("/api/assets", json=make_asset())
    assert r.status_code == 201
    body = r.json()
    assert body["success"] is True
    assert isinstance(body["id"], int)


def test_create_rejects_malformed_body():
    r = client.post("/api/assets", json={"type": "spaceship", "description": "x"})
    assert r.status_code == 400
    assert r.json()["detail"] == "INVALID_ASSET_DATA"


def test_create_rejects_non_json_body():
    r = client.post("/api/assets", content=b"not json", headers={"content-type": "application/json"})
    assert r.status_code == 400


def test_list_applies_display_pipeline():
    create(make_asset(
        type="currency",
        seizureReason="sanctions",
        description="Cash belonging to Mr. Omar Saleh, account 9988776655",
        origin="Libya",
        serialNumbers=["LY00112233445", "LY9"],
    ))
    assets = client.get("/api/assets").json()
    assert len(assets) == 1
    a = assets[0]
    assert a["sanctionStatus"] == "BLOCKED"
    assert a["complianceDisclaimer"].startswith("WARNING")
    assert a["description"] == "Cash belonging to [REDACTED NAME], account #REDACTED"
    assert a["serialNumbers"] == ["LY00XXXX3445", "XXX"]


def test_storage_pipeline_sets_compliance_flag():
    clear_id = create(make_asset(legalStatus={"unSanctionsCompliance": False, "localCourtOrder": None}))
    review_id = create(make_asset(origin="Syria", legalStatus={"unSanctionsCompliance": True, "localCourtOrder": None}))

    clear = client.get(f"/api/assets/{clear_id}").json()
    review = client.get(f"/api/assets/{review_id}").json()
    assert clear["legalStatus"]["unSanctionsCompliance"] is True
    assert review["legalStatus"]["unSanctionsCompliance"] is False


def test_display_fields_are_not_persisted():
    asset_id = create(make_asset(sanctionStatus="CLEAR", complianceDisclaimer="stale", origin="Iran"))
    shown = client.get(f"/api/assets/{asset_id}").json()
    assert shown["sanctionStatus"] == "REVIEW"
    assert shown["complianceDisclaimer"].startswith("NOTICE")


def test_list_by_type():
    create(make_asset(type="vessel", description="Fishing boat"))
    create(make_asset(type="vehicle"))
    vessels = client.get("/api/assets/type/vessel").json()
    assert [a["type"] for a in vessels] == ["vessel"]


def test_list_by_invalid_type():
    r = client.get("/api/assets/type/spaceship")
    assert r.status_code == 400
    assert r.json()["detail"] == "INVALID_ASSET_TYPE"


def test_list_by_sanctions_flag():
    create(make_asset())
    create(make_asset(origin="Belarus"))
    compliant = client.get("/api/assets/sanctions", params={"compliant": "true"}).json()
    flagged = client.get("/api/assets/sanctions", params={"compliant": "false"}).json()
    assert len(compliant) == 1 and compliant[0]["sanctionStatus"] == "CLEAR"
    assert len(flagged) == 1 and flagged[0]["origin"] == "Belarus"


def test_get_unknown_asset():
    r = client.get("/api/assets/999999")
    assert r.status_code == 404


def test_eligibility_endpoint():
    asset_id = create(make_asset(seizureReason="sanctions"))
    ok = client.post(f"/api/assets/{asset_id}/eligibility", json={
        "verificationLevel": 4, "country": "Malta", "sanctionsChecked": True,
    }).json()
    assert ok == {"canBid": True}

    denied = client.post(f"/api/assets/{asset_id}/eligibility", json={
        "verificationLevel": 3, "country": "Malta", "sanctionsChecked": True,
    }).json()
    assert denied["canBid"] is False
    assert "Level 4" in denied["message"]


def test_eligibility_rejects_bad_bidder():
    asset_id = create(make_asset())
    r = client.post(f"/api/assets/{asset_id}/eligibility", json={"country": "Malta"})
    assert r.status_code == 400
    assert r.json()["detail"] == "INVALID_REQUEST"


def test_health():
    create(make_asset())
    body = client.get("/health").json()
    assert body["status"] == "ok"
    assert body["config"]["compliance_lists"] is True
    assert body["db"]["auction_assets_count"] == 1


def test_request_id_header_echoed():
    r = client.get("/api/assets", headers={"x-request-id": "req-123"})
    assert r.headers["x-request-id"] == "req-123"
