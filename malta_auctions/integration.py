"""
Compliance pipelines wrapped around storage and display.

Display copies are redacted and annotated before they leave the service.
Stored assets carry the UN-compliance flag derived from screening.
"""

from typing import List, Optional

from .compliance import ComplianceLists, check_eligibility, classify, disclaimer, load_compliance_lists, redact
from .logging_config import audit_log
from .models import AuctionAsset, BidderInfo, BidResponse, Disposition


def prepare_for_display(asset: AuctionAsset, lists: Optional[ComplianceLists] = None) -> AuctionAsset:
    lists = lists or load_compliance_lists()
    # Screen the original; redaction can remove the text that matched.
    status = classify(asset, lists)
    notice = disclaimer(asset, lists)

    shown = redact(asset, lists)
    shown.compliance_disclaimer = notice
    shown.sanction_status = status
    return shown


def process_assets_for_display(
    assets: List[AuctionAsset],
    lists: Optional[ComplianceLists] = None
) -> List[AuctionAsset]:
    """Redact, attach the disclaimer and the sanction status."""
    lists = lists or load_compliance_lists()
    return [prepare_for_display(asset, lists) for asset in assets]


def prepare_for_storage(asset: AuctionAsset, lists: Optional[ComplianceLists] = None) -> AuctionAsset:
    lists = lists or load_compliance_lists()
    status = classify(asset, lists)
    audit_log.asset_classified(asset.type.value, asset.source, status.value, purpose="storage")

    stored = asset.model_copy(deep=True)
    stored.legal_status.un_sanctions_compliance = status == Disposition.CLEAR
    # Display-only fields are never persisted.
    stored.sanction_status = None
    stored.compliance_disclaimer = None
    return stored


def process_assets_for_storage(
    assets: List[AuctionAsset],
    lists: Optional[ComplianceLists] = None
) -> List[AuctionAsset]:
    """Set legalStatus.unSanctionsCompliance from the screening verdict."""
    lists = lists or load_compliance_lists()
    return [prepare_for_storage(asset, lists) for asset in assets]


def can_user_bid_on_asset(
    asset: AuctionAsset,
    bidder: BidderInfo,
    lists: Optional[ComplianceLists] = None
) -> BidResponse:
    result = check_eligibility(asset, bidder, lists)
    audit_log.eligibility_decision(
        asset_type=asset.type.value,
        disposition=result.disposition.value if result.disposition else "",
        eligible=result.eligible,
        verification_level=bidder.verification_level,
        reason=result.reason,
    )
    if not result.eligible:
        return BidResponse(can_bid=False, message=result.reason)
    return BidResponse(can_bid=True)
