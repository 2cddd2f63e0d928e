from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class AssetType(str, Enum):
    REAL_ESTATE = "real_estate"
    VESSEL = "vessel"
    CURRENCY = "currency"
    VEHICLE = "vehicle"


class SeizureReason(str, Enum):
    SANCTIONS = "sanctions"
    DEBT = "debt"
    CONTRABAND = "contraband"


class ContrabandType(str, Enum):
    DRUGS = "drugs"
    WEAPONS = "weapons"
    CURRENCY = "currency"


class Disposition(str, Enum):
    """Sanctions verdict on an asset."""
    BLOCKED = "BLOCKED"
    REVIEW = "REVIEW"
    CLEAR = "CLEAR"


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class LegalStatus(_CamelModel):
    un_sanctions_compliance: bool = Field(alias="unSanctionsCompliance")
    local_court_order: Optional[str] = Field(default=None, alias="localCourtOrder")


class AuctionAsset(_CamelModel):
    type: AssetType
    seizure_reason: SeizureReason = Field(alias="seizureReason")
    legal_status: LegalStatus = Field(alias="legalStatus")
    description: str = ""
    source: str
    date_added: str = Field(alias="dateAdded")

    contraband_type: Optional[ContrabandType] = Field(default=None, alias="contrabandType")
    imo_number: Optional[str] = Field(default=None, alias="imoNumber")
    arrest_warrant_id: Optional[str] = Field(default=None, alias="arrestWarrantId")
    debt_amount: Optional[str] = Field(default=None, alias="debtAmount")
    value: Optional[str] = None
    origin: Optional[str] = None
    serial_numbers: Optional[List[str]] = Field(default=None, alias="serialNumbers")

    # Populated on display copies only; never persisted.
    sanction_status: Optional[Disposition] = Field(default=None, alias="sanctionStatus")
    compliance_disclaimer: Optional[str] = Field(default=None, alias="complianceDisclaimer")

    id: Optional[int] = None

    def to_json_dict(self) -> Dict[str, Any]:
        """Wire form: camelCase keys, absent optionals omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class BidderInfo(_CamelModel):
    verification_level: int = Field(alias="verificationLevel", ge=0)
    country: str
    region: Optional[str] = None
    sanctions_checked: bool = Field(alias="sanctionsChecked")


class BidResponse(_CamelModel):
    can_bid: bool = Field(alias="canBid")
    message: Optional[str] = None
