"""
Display and storage pipeline tests.
"""

import unittest

from malta_auctions import (
    AssetType,
    AuctionAsset,
    BidderInfo,
    Disposition,
    can_user_bid_on_asset,
    load_compliance_lists,
    process_assets_for_display,
    process_assets_for_storage,
)

from conftest import make_asset


class TestDisplayPipeline(unittest.TestCase):

    def setUp(self):
        self.assets = [
            AuctionAsset.model_validate(make_asset(
                type="currency",
                seizureReason="sanctions",
                description="Russian-Minted Libyan Dinar",
                origin="Russia",
                serialNumbers=["RU12345", "RU1234567890"],
            )),
            AuctionAsset.model_validate(make_asset(type="vessel", description="Seized Tanker (IMO: 9456782)")),
        ]

    def test_annotates_every_asset(self):
        shown = process_assets_for_display(self.assets)
        self.assertEqual([a.sanction_status for a in shown], [Disposition.BLOCKED, Disposition.CLEAR])
        self.assertTrue(all(a.compliance_disclaimer for a in shown))
        self.assertEqual(shown[0].serial_numbers, ["XXXXXXX", "RU12XXXX7890"])

    def test_parsed_fields_keep_enum_types(self):
        shown = process_assets_for_display(self.assets)[0]
        self.assertIsInstance(shown.type, AssetType)
        self.assertIsInstance(shown.sanction_status, Disposition)
        self.assertEqual(shown.to_json_dict()["type"], "currency")

    def test_originals_untouched(self):
        process_assets_for_display(self.assets)
        self.assertIsNone(self.assets[0].sanction_status)
        self.assertEqual(self.assets[0].serial_numbers, ["RU12345", "RU1234567890"])

    def test_blocked_entity_hidden_by_name_redaction_stays_blocked(self):
        villa = AuctionAsset.model_validate(make_asset(
            type="real_estate",
            description="Villa owned by Mr. Khalifa Haftar",
            legalStatus={"unSanctionsCompliance": False, "localCourtOrder": None},
        ))
        shown = process_assets_for_display([villa])[0]
        self.assertEqual(shown.description, "Villa owned by [REDACTED NAME]")
        self.assertEqual(shown.sanction_status, Disposition.BLOCKED)
        self.assertEqual(shown.compliance_disclaimer, load_compliance_lists().disclaimers["blocked"])

    def test_blocked_entity_in_vessel_name_stays_blocked(self):
        tanker = AuctionAsset.model_validate(make_asset(
            type="vessel",
            description='Oil vessel "LNA Spirit" (IMO: 9123456)',
            legalStatus={"unSanctionsCompliance": False, "localCourtOrder": None},
        ))
        shown = process_assets_for_display([tanker])[0]
        self.assertEqual(shown.description, 'Oil vessel "[REDACTED]" (IMO: 9123456)')
        self.assertEqual(shown.sanction_status, Disposition.BLOCKED)
        self.assertTrue(shown.compliance_disclaimer.startswith("WARNING"))

    def test_wire_form_uses_camel_case(self):
        shown = process_assets_for_display(self.assets)[1].to_json_dict()
        self.assertEqual(shown["sanctionStatus"], "CLEAR")
        self.assertIn("MARITIME NOTICE", shown["complianceDisclaimer"])
        self.assertNotIn("serialNumbers", shown)


class TestStoragePipeline(unittest.TestCase):

    def test_compliance_flag_follows_disposition(self):
        assets = [
            AuctionAsset.model_validate(make_asset(legalStatus={"unSanctionsCompliance": False, "localCourtOrder": "C-1"})),
            AuctionAsset.model_validate(make_asset(description="restricted goods")),
        ]
        stored = process_assets_for_storage(assets, load_compliance_lists())
        self.assertTrue(stored[0].legal_status.un_sanctions_compliance)
        self.assertEqual(stored[0].legal_status.local_court_order, "C-1")
        self.assertFalse(stored[1].legal_status.un_sanctions_compliance)
        # input copies are not modified
        self.assertFalse(assets[0].legal_status.un_sanctions_compliance)
        self.assertTrue(assets[1].legal_status.un_sanctions_compliance)


class TestCanUserBid(unittest.TestCase):

    def test_message_carries_reason(self):
        asset = AuctionAsset.model_validate(make_asset())
        bidder = BidderInfo.model_validate({"verificationLevel": 2, "country": "Belarus", "sanctionsChecked": True})
        response = can_user_bid_on_asset(asset, bidder)
        self.assertFalse(response.can_bid)
        self.assertIn("sanctioned regions", response.message)

    def test_eligible_has_no_message(self):
        asset = AuctionAsset.model_validate(make_asset())
        bidder = BidderInfo.model_validate({"verificationLevel": 0, "country": "Malta", "sanctionsChecked": False})
        response = can_user_bid_on_asset(asset, bidder)
        self.assertTrue(response.can_bid)
        self.assertIsNone(response.message)


if __name__ == "__main__":
    unittest.main()
