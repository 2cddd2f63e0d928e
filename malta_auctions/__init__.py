"""
Malta Government Auctions

Catalog of government-seized assets in Malta (vessels, currency,
vehicles, real estate) with sanctions screening applied before assets
are stored or shown to bidders.

Usage:
    from malta_auctions import AuctionAsset, BidderInfo, classify, check_eligibility

    asset = AuctionAsset.model_validate({...})
    status = classify(asset)            # Disposition.BLOCKED / REVIEW / CLEAR
    shown = redact(asset)               # new, redacted copy
    notice = disclaimer(asset)
    result = check_eligibility(asset, BidderInfo.model_validate({...}))

Run the API with:
    uvicorn malta_auctions.main:app
"""

__version__ = "0.1.0"

from .models import (
    AssetType,
    AuctionAsset,
    BidderInfo,
    BidResponse,
    ContrabandType,
    Disposition,
    LegalStatus,
    SeizureReason,
)

from .compliance import (
    ComplianceLists,
    EligibilityResult,
    load_compliance_lists,
    classify,
    redact,
    disclaimer,
    check_eligibility,
    is_sanctioned_region,
    check_sanctions,
    redact_sensitive_fields,
    generate_compliance_disclaimer,
    verify_bidder_eligibility,
)

from .integration import (
    process_assets_for_display,
    process_assets_for_storage,
    can_user_bid_on_asset,
)


__all__ = [
    "__version__",

    # Models
    "AssetType",
    "AuctionAsset",
    "BidderInfo",
    "BidResponse",
    "ContrabandType",
    "Disposition",
    "LegalStatus",
    "SeizureReason",

    # Compliance
    "ComplianceLists",
    "EligibilityResult",
    "load_compliance_lists",
    "classify",
    "redact",
    "disclaimer",
    "check_eligibility",
    "is_sanctioned_region",
    "check_sanctions",
    "redact_sensitive_fields",
    "generate_compliance_disclaimer",
    "verify_bidder_eligibility",

    # Pipelines
    "process_assets_for_display",
    "process_assets_for_storage",
    "can_user_bid_on_asset",
]
