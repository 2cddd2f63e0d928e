"""
Malta Auctions Compliance Screening

Rule-based screening applied to every seized asset before it is stored
or displayed:

- classify: sanctions disposition (BLOCKED / REVIEW / CLEAR)
- redact: masks serials and personal identifiers on a copy of the asset
- disclaimer: notice text derived from the disposition and asset type
- check_eligibility: gates a bidder on verification level and jurisdiction

All functions are pure and deterministic for a given ComplianceLists.
The keyword lists are hard-coded screening data, not a sanctions list
lookup. Redaction is best-effort pattern matching over fixed honorific,
passport and account-number forms; it does not guarantee PII removal.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from .config import load_compliance_lists_data
from .models import AuctionAsset, AssetType, BidderInfo, Disposition, SeizureReason
from .util import mask_serial


DISCLAIMER_KEYS = ("blocked", "review", "currency", "vessel", "contraband", "generic")
REASON_KEYS = ("verification", "region", "sanctions_check")
DEFAULT_RULE_ORDER = ("blocked_entity", "sanctions_seizure", "sanctioned_origin", "sanctioned_keyword")

PASSPORT_PATTERN = re.compile(r'passport\s+#?\s*(?=[A-Z0-9_]*[0-9])[A-Z0-9_]+', re.IGNORECASE)
ACCOUNT_PATTERN = re.compile(r'account\s+#?\s*[0-9]{6,}', re.IGNORECASE)
NAME_PATTERN = re.compile(r'(?:Mr\.|Mrs\.|Ms\.|Dr\.)\s+[A-Z][a-z]+\s+[A-Z][a-z]+')
VESSEL_NAME_PATTERN = re.compile(r'(vessel|ship|boat)\s+"([^"]+)"', re.IGNORECASE)

PASSPORT_MARKER = "passport #REDACTED"
ACCOUNT_MARKER = "account #REDACTED"
NAME_MARKER = "[REDACTED NAME]"
VESSEL_MARKER = r'\1 "[REDACTED]"'


def _contains_any(text: Optional[str], terms: Iterable[str]) -> bool:
    haystack = (text or "").lower()
    if not haystack:
        return False
    return any(term.lower() in haystack for term in terms)


@dataclass(frozen=True)
class ComplianceLists:
    """
    Screening configuration.

    sanctioned_origins screens where an asset came from; sanctioned_regions
    screens where a bidder is. They overlap but are kept apart because
    bidder jurisdictions include sub-national regions (Crimea, Donetsk,
    Luhansk) that never appear as an asset origin.
    """
    blocked_entities: List[str]
    sanctioned_origins: List[str]
    sanctioned_keywords: List[str]
    sanctioned_regions: List[str]
    disclaimers: Dict[str, str]
    eligibility_reasons: Dict[str, str]
    blocked_min_verification_level: int = 4
    serial_mask: str = "XXXX"
    rule_order: List[str] = field(default_factory=lambda: list(DEFAULT_RULE_ORDER))
    version: str = "0.0.0"

    def __post_init__(self):
        self._validate()

    def _validate(self):
        for name in ("blocked_entities", "sanctioned_origins",
                     "sanctioned_keywords", "sanctioned_regions"):
            terms = getattr(self, name)
            if not isinstance(terms, list) or not all(isinstance(t, str) and t.strip() for t in terms):
                raise ValueError(f"{name} must be a list of non-empty strings")

        missing = [k for k in DISCLAIMER_KEYS if not self.disclaimers.get(k)]
        if missing:
            raise ValueError(f"Missing disclaimer text: {', '.join(missing)}")

        missing = [k for k in REASON_KEYS if not self.eligibility_reasons.get(k)]
        if missing:
            raise ValueError(f"Missing eligibility reason: {', '.join(missing)}")

        if self.blocked_min_verification_level < 0:
            raise ValueError("blocked_min_verification_level must be >= 0")

        unknown = [r for r in self.rule_order if r not in CLASSIFIER_RULES]
        if unknown:
            raise ValueError(f"Unknown classifier rule: {', '.join(unknown)}")
        if len(set(self.rule_order)) != len(self.rule_order):
            raise ValueError("Duplicate classifier rule in rule_order")

    def origin_is_sanctioned(self, origin: Optional[str]) -> bool:
        return _contains_any(origin, self.sanctioned_origins)

    def region_is_sanctioned(self, place: Optional[str]) -> bool:
        return _contains_any(place, self.sanctioned_regions)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "blocked_entities": list(self.blocked_entities),
            "sanctioned_origins": list(self.sanctioned_origins),
            "sanctioned_keywords": list(self.sanctioned_keywords),
            "sanctioned_regions": list(self.sanctioned_regions),
            "blocked_min_verification_level": self.blocked_min_verification_level,
            "serial_mask": self.serial_mask,
            "rule_order": list(self.rule_order),
            "disclaimers": dict(self.disclaimers),
            "eligibility_reasons": dict(self.eligibility_reasons),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ComplianceLists':
        """Create ComplianceLists from a configuration document."""
        try:
            return cls(
                blocked_entities=list(data["blocked_entities"]),
                sanctioned_origins=list(data["sanctioned_origins"]),
                sanctioned_keywords=list(data["sanctioned_keywords"]),
                sanctioned_regions=list(data["sanctioned_regions"]),
                disclaimers=dict(data["disclaimers"]),
                eligibility_reasons=dict(data["eligibility_reasons"]),
                blocked_min_verification_level=int(data.get("blocked_min_verification_level", 4)),
                serial_mask=str(data.get("serial_mask", "XXXX")),
                rule_order=list(data.get("rule_order", DEFAULT_RULE_ORDER)),
                version=str(data.get("version", "0.0.0")),
            )
        except KeyError as e:
            raise ValueError(f"Compliance lists missing field: {e.args[0]}") from e


def load_compliance_lists(path: Optional[str] = None) -> ComplianceLists:
    """Load the configured lists (cached, reloaded after the config TTL)."""
    return ComplianceLists.from_dict(load_compliance_lists_data(path))


def _lists(lists: Optional[ComplianceLists]) -> ComplianceLists:
    return lists if lists is not None else load_compliance_lists()


# =============================================================================
# CLASSIFIER
# =============================================================================

def _blocked_entity(asset: AuctionAsset, lists: ComplianceLists) -> bool:
    return _contains_any(asset.description, lists.blocked_entities)


def _sanctions_seizure(asset: AuctionAsset, lists: ComplianceLists) -> bool:
    return asset.seizure_reason == SeizureReason.SANCTIONS


def _sanctioned_origin(asset: AuctionAsset, lists: ComplianceLists) -> bool:
    return lists.origin_is_sanctioned(asset.origin)


def _sanctioned_keyword(asset: AuctionAsset, lists: ComplianceLists) -> bool:
    return _contains_any(asset.description, lists.sanctioned_keywords)


CLASSIFIER_RULES: Dict[str, Tuple[Callable[[AuctionAsset, 'ComplianceLists'], bool], Disposition]] = {
    "blocked_entity": (_blocked_entity, Disposition.BLOCKED),
    "sanctions_seizure": (_sanctions_seizure, Disposition.BLOCKED),
    "sanctioned_origin": (_sanctioned_origin, Disposition.REVIEW),
    "sanctioned_keyword": (_sanctioned_keyword, Disposition.REVIEW),
}


def classify(asset: AuctionAsset, lists: Optional[ComplianceLists] = None) -> Disposition:
    """
    Sanctions disposition for an asset.

    Rules run in lists.rule_order and the first match wins; no match is
    CLEAR. The default order is:

    1. description names a blocked entity      -> BLOCKED
    2. seized under sanctions                  -> BLOCKED
    3. origin is a sanctioned origin           -> REVIEW
    4. description has a sanctioned keyword    -> REVIEW

    A sanctions seizure short-circuits ahead of origin screening, so a
    sanctions-seized asset from a sanctioned origin is BLOCKED rather
    than REVIEW.
    """
    lists = _lists(lists)

    for name in lists.rule_order:
        predicate, disposition = CLASSIFIER_RULES[name]
        if predicate(asset, lists):
            return disposition

    return Disposition.CLEAR


# =============================================================================
# REDACTOR
# =============================================================================

def redact_description(
    text: str,
    redact_names: bool,
    redact_vessel_names: bool
) -> str:
    """Apply the description patterns in order; every pattern may fire."""
    text = PASSPORT_PATTERN.sub(PASSPORT_MARKER, text)
    text = ACCOUNT_PATTERN.sub(ACCOUNT_MARKER, text)
    if redact_names:
        text = NAME_PATTERN.sub(NAME_MARKER, text)
    if redact_vessel_names:
        text = VESSEL_NAME_PATTERN.sub(VESSEL_MARKER, text)
    return text


def redact(asset: AuctionAsset, lists: Optional[ComplianceLists] = None) -> AuctionAsset:
    """
    Return a redacted copy of the asset; the input is never modified.

    Currency serials keep their first and last four characters. Serials
    shorter than eight characters are masked in full.
    """
    lists = _lists(lists)
    redacted = asset.model_copy(deep=True)

    if asset.type == AssetType.CURRENCY and asset.serial_numbers:
        redacted.serial_numbers = [mask_serial(s, lists.serial_mask) for s in asset.serial_numbers]

    non_compliant = not asset.legal_status.un_sanctions_compliance
    if asset.description:
        redacted.description = redact_description(
            asset.description,
            redact_names=asset.seizure_reason == SeizureReason.SANCTIONS or non_compliant,
            redact_vessel_names=asset.type == AssetType.VESSEL and non_compliant,
        )

    return redacted


# =============================================================================
# DISCLAIMER
# =============================================================================

def disclaimer(asset: AuctionAsset, lists: Optional[ComplianceLists] = None) -> str:
    """Compliance notice for an asset. Always non-empty."""
    lists = _lists(lists)
    status = classify(asset, lists)

    if status == Disposition.BLOCKED:
        key = "blocked"
    elif status == Disposition.REVIEW:
        key = "review"
    elif asset.type == AssetType.CURRENCY:
        key = "currency"
    elif asset.type == AssetType.VESSEL:
        key = "vessel"
    elif asset.contraband_type:
        key = "contraband"
    else:
        key = "generic"

    return lists.disclaimers[key]


# =============================================================================
# ELIGIBILITY
# =============================================================================

@dataclass
class EligibilityResult:
    """Outcome of a bidder eligibility check."""
    eligible: bool
    reason: Optional[str] = None
    disposition: Optional[Disposition] = field(default=None, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"eligible": self.eligible}
        if self.reason:
            d["reason"] = self.reason
        return d


def is_sanctioned_region(
    country: str,
    region: Optional[str] = None,
    lists: Optional[ComplianceLists] = None
) -> bool:
    """True if the bidder's country or region matches a sanctioned region."""
    lists = _lists(lists)
    return lists.region_is_sanctioned(country) or lists.region_is_sanctioned(region)


def check_eligibility(
    asset: AuctionAsset,
    bidder: BidderInfo,
    lists: Optional[ComplianceLists] = None
) -> EligibilityResult:
    """
    Decide whether a bidder may bid on an asset. First failure wins:

    1. BLOCKED asset and verification below the configured tier
    2. bidder country or region is sanctioned
    3. asset not CLEAR and bidder has no sanctions check on file
    """
    lists = _lists(lists)
    status = classify(asset, lists)

    if status == Disposition.BLOCKED and bidder.verification_level < lists.blocked_min_verification_level:
        return EligibilityResult(False, lists.eligibility_reasons["verification"], status)

    if is_sanctioned_region(bidder.country, bidder.region, lists):
        return EligibilityResult(False, lists.eligibility_reasons["region"], status)

    if status != Disposition.CLEAR and not bidder.sanctions_checked:
        return EligibilityResult(False, lists.eligibility_reasons["sanctions_check"], status)

    return EligibilityResult(True, None, status)


# Names used by the rest of the system and the JSON API docs.
check_sanctions = classify
redact_sensitive_fields = redact
generate_compliance_disclaimer = disclaimer
verify_bidder_eligibility = check_eligibility
