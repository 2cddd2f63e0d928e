"""
Customs Department seizure reports.

Reports arrive as CSV with a header row. Recognised columns:
type, origin, value, date, serials (';'-separated), make, model, year, length.
"""

import csv
import io
import logging
from typing import Dict, List, Optional

from pydantic import ValidationError

from ..compliance import ComplianceLists, load_compliance_lists
from ..logging_config import audit_log
from ..models import AssetType, AuctionAsset, ContrabandType, SeizureReason
from ..util import utc_now_iso

logger = logging.getLogger(__name__)

SOURCE = "Customs Department"

_TYPE_WORDS = (
    (AssetType.VESSEL, ("vessel", "boat", "ship")),
    (AssetType.CURRENCY, ("currency", "money", "cash")),
    (AssetType.VEHICLE, ("car", "vehicle", "truck")),
    (AssetType.REAL_ESTATE, ("property", "house", "land")),
)

_CONTRABAND_WORDS = (
    (ContrabandType.DRUGS, ("drug", "narcotic")),
    (ContrabandType.WEAPONS, ("weapon", "firearm", "ammunition")),
    (ContrabandType.CURRENCY, ("currency", "money", "cash")),
)


def determine_asset_type(raw_type: str) -> AssetType:
    """Unknown types default to vehicle."""
    raw_type = (raw_type or "").lower()
    for asset_type, words in _TYPE_WORDS:
        if any(w in raw_type for w in words):
            return asset_type
    return AssetType.VEHICLE


def determine_contraband_type(raw_type: str) -> Optional[ContrabandType]:
    raw_type = (raw_type or "").lower()
    for contraband, words in _CONTRABAND_WORDS:
        if any(w in raw_type for w in words):
            return contraband
    return None


def determine_seizure_reason(origin: str, lists: ComplianceLists) -> SeizureReason:
    # Customs seizures are contraband unless the origin is sanctioned.
    if lists.origin_is_sanctioned(origin):
        return SeizureReason.SANCTIONS
    return SeizureReason.CONTRABAND


def create_description(row: Dict[str, str]) -> str:
    raw_type = row.get("type") or ""
    origin = row.get("origin") or ""
    lowered = raw_type.lower()

    if "currency" in lowered:
        value = f"€{row['value']}" if row.get("value") else "value unknown"
        return f"{origin or 'Unknown origin'} currency shipment ({value})"
    if "vehicle" in lowered:
        parts = [row.get("make") or "", row.get("model") or "", row.get("year") or ""]
        return f"{' '.join(parts)} ({origin or 'Unknown origin'})".strip()
    if "vessel" in lowered:
        length = f"{row['length']}m " if row.get("length") else ""
        return f"{length}{raw_type or 'Vessel'} from {origin or 'unknown origin'}"
    return f"{raw_type or 'Item'} from {origin or 'unknown origin'}"


def _row_to_asset(row: Dict[str, str], lists: ComplianceLists) -> AuctionAsset:
    origin = (row.get("origin") or "").strip()
    asset_type = determine_asset_type(row.get("type", ""))

    asset = AuctionAsset(
        type=asset_type,
        seizure_reason=determine_seizure_reason(origin, lists),
        legal_status={
            "un_sanctions_compliance": not lists.origin_is_sanctioned(origin),
            # Customs seizures have no court order when first reported.
            "local_court_order": None,
        },
        description=create_description(row),
        value=f"€{row['value']}" if row.get("value") else "Unknown",
        origin=origin or "Unknown",
        source=SOURCE,
        date_added=row.get("date") or utc_now_iso(),
        contraband_type=determine_contraband_type(row.get("type", "")),
    )

    serials = row.get("serials")
    if asset_type == AssetType.CURRENCY and serials:
        asset.serial_numbers = [s.strip() for s in serials.split(";") if s.strip()]

    return asset


def parse_seizure_report(csv_text: str, lists: Optional[ComplianceLists] = None) -> List[AuctionAsset]:
    """
    Parse a Customs seizure report into assets.

    Rows that cannot be turned into a valid asset are logged and skipped.
    """
    lists = lists or load_compliance_lists()
    assets: List[AuctionAsset] = []
    errors: List[str] = []

    reader = csv.DictReader(io.StringIO(csv_text.strip()))
    try:
        for line_no, row in enumerate(reader, start=2):
            row = {(k or "").strip(): (v or "").strip() for k, v in row.items() if k is not None}
            try:
                assets.append(_row_to_asset(row, lists))
            except ValidationError as e:
                logger.error("Skipping customs report line %d: %s", line_no, e)
                errors.append(f"line {line_no}: invalid asset")
    except csv.Error as e:
        logger.error("Malformed customs report: %s", e)
        errors.append(f"csv: {e}")

    audit_log.ingestion_complete("customs", len(assets), errors)
    return assets
