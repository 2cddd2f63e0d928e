import requests

from malta_auctions.connectors import parse_seizure_report, parse_warrant_notices, scrape_arrest_warrants
from malta_auctions.connectors.customs import create_description, determine_asset_type, determine_contraband_type
from malta_auctions.models import AssetType, ContrabandType, SeizureReason


CUSTOMS_CSV = """type,origin,value,date,serials,make,model,year,length
currency,Russia,926000000,2025-02-10,RU12345678;RU87654321,,,,
vehicle,Italy,95000,2025-02-11,,Toyota,Land Cruiser,2021,
firearms,Smuggled via Tunisia,12000,,,,,,
fishing vessel,Turkey,,2025-02-12,,,,,18
"""

NOTICES_HTML = """
<html><body>
<div class="header"><p>Warrant of Arrest MT/ARR/2025-001 outside content</p></div>
<div class="content-inner main">
  <h3>Official Notices</h3>
  <p>Warrant of Arrest MT/ARR/2025-087 issued against the vessel "Sea Breeze" IMO 9456782 for &euro; 214,500 in unpaid wages.</p>
  <div class="note"><p>Warrant of Arrest MT/ARR/2025-092 on vessel Horizon for a claim of €175,000</p></div>
  <p>Warrant of Arrest lifted, no reference.</p>
  <p>Harbour closures for the regatta.</p>
</div>
</body></html>
"""


def test_customs_report_maps_rows():
    assets = parse_seizure_report(CUSTOMS_CSV)
    assert len(assets) == 4

    cash, car, guns, boat = assets
    assert cash.type == AssetType.CURRENCY
    assert cash.seizure_reason == SeizureReason.SANCTIONS
    assert cash.legal_status.un_sanctions_compliance is False
    assert cash.serial_numbers == ["RU12345678", "RU87654321"]
    assert cash.contraband_type == ContrabandType.CURRENCY
    assert cash.value == "€926000000"
    assert cash.description == "Russia currency shipment (€926000000)"

    assert car.type == AssetType.VEHICLE
    assert car.seizure_reason == SeizureReason.CONTRABAND
    assert car.legal_status.un_sanctions_compliance is True
    assert car.description == "Toyota Land Cruiser 2021 (Italy)"

    assert guns.contraband_type == ContrabandType.WEAPONS
    assert guns.date_added  # defaulted to now
    assert guns.source == "Customs Department"

    assert boat.type == AssetType.VESSEL
    assert boat.value == "Unknown"
    assert boat.description == "18m fishing vessel from Turkey"


def test_customs_empty_report():
    assert parse_seizure_report("type,origin,value\n") == []


def test_asset_type_defaults_to_vehicle():
    assert determine_asset_type("pallet of sneakers") == AssetType.VEHICLE
    assert determine_asset_type("Beach House") == AssetType.REAL_ESTATE
    assert determine_contraband_type("narcotics") == ContrabandType.DRUGS
    assert determine_contraband_type("tiles") is None


def test_generic_description():
    assert create_description({"type": "jewellery", "origin": ""}) == "jewellery from unknown origin"


def test_warrant_notices_parsed_from_content_only():
    assets = parse_warrant_notices(NOTICES_HTML)
    assert [a.arrest_warrant_id for a in assets] == ["MT/ARR/2025-087", "MT/ARR/2025-092"]

    first, second = assets
    assert first.type == AssetType.VESSEL
    assert first.seizure_reason == SeizureReason.DEBT
    assert first.legal_status.local_court_order == "MT/ARR/2025-087"
    assert first.imo_number == "9456782"
    assert first.description == "Sea Breeze (IMO: 9456782)"
    assert first.debt_amount == "€214,500"

    assert second.description == "Horizon"
    assert second.imo_number is None
    assert second.debt_amount == "€175,000"


class _FakeResponse:
    def __init__(self, text, status=200):
        self.text = text
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class _FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        if self.error:
            raise self.error
        return self.response


def test_scrape_uses_session():
    session = _FakeSession(_FakeResponse(NOTICES_HTML))
    assets = scrape_arrest_warrants("https://example.test/notices", session=session)
    assert len(assets) == 2
    assert session.calls[0][0] == "https://example.test/notices"


def test_scrape_network_error_returns_empty():
    session = _FakeSession(error=requests.ConnectionError("unreachable"))
    assert scrape_arrest_warrants("https://example.test/notices", session=session) == []


def test_scrape_http_error_returns_empty():
    session = _FakeSession(_FakeResponse("", status=503))
    assert scrape_arrest_warrants("https://example.test/notices", session=session) == []
