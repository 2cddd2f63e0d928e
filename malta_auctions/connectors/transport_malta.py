"""
Transport Malta warrant-of-arrest notices.

The notices page lists each warrant as a paragraph or heading inside
div.content-inner. Every block naming a warrant id (MT/ARR/yyyy-nnn)
becomes a vessel asset seized for debt.
"""

import logging
import re
from html.parser import HTMLParser
from typing import List, Optional

import requests

from .. import config
from ..logging_config import audit_log
from ..models import AssetType, AuctionAsset, SeizureReason
from ..util import utc_now_iso

logger = logging.getLogger(__name__)

SOURCE = "Transport Malta"

WARRANT_ID_PATTERN = re.compile(r'MT/ARR/\d{4}-\d{3}')
QUOTED_VESSEL_PATTERN = re.compile(r'vessel\s+"([^"]+)"', re.IGNORECASE)
BARE_VESSEL_PATTERN = re.compile(r'vessel\s+([^\s]+)', re.IGNORECASE)
IMO_PATTERN = re.compile(r'IMO\s+(\d+)', re.IGNORECASE)
DEBT_PATTERN = re.compile(r'€\s*([0-9,.]+)')


class _NoticeTextParser(HTMLParser):
    """Collects the text of <p> and <h3> elements nested in div.content-inner."""

    _BLOCK_TAGS = ("p", "h3")

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.blocks: List[str] = []
        self._div_stack: List[bool] = []
        self._inside_content = 0
        self._block_depth = 0
        self._buffer: List[str] = []

    def handle_starttag(self, tag, attrs):
        if tag == "div":
            classes = (dict(attrs).get("class") or "").split()
            is_content = "content-inner" in classes
            self._div_stack.append(is_content)
            if is_content:
                self._inside_content += 1
        elif tag in self._BLOCK_TAGS and self._inside_content:
            if self._block_depth == 0:
                self._buffer = []
            self._block_depth += 1

    def handle_endtag(self, tag):
        if tag == "div" and self._div_stack:
            if self._div_stack.pop():
                self._inside_content -= 1
        elif tag in self._BLOCK_TAGS and self._block_depth:
            self._block_depth -= 1
            if self._block_depth == 0:
                text = " ".join("".join(self._buffer).split())
                if text:
                    self.blocks.append(text)

    def handle_data(self, data):
        if self._block_depth:
            self._buffer.append(data)


def extract_notice_blocks(html: str) -> List[str]:
    parser = _NoticeTextParser()
    parser.feed(html)
    parser.close()
    return parser.blocks


def parse_warrant_text(text: str) -> Optional[AuctionAsset]:
    """Build an asset from one notice block, or None if it names no warrant."""
    if "Warrant of Arrest" not in text and "MT/ARR" not in text:
        return None

    warrant = WARRANT_ID_PATTERN.search(text)
    if not warrant:
        return None
    warrant_id = warrant.group(0)

    name_match = QUOTED_VESSEL_PATTERN.search(text) or BARE_VESSEL_PATTERN.search(text)
    vessel_name = name_match.group(1) if name_match else "Unknown Vessel"

    imo_match = IMO_PATTERN.search(text)
    imo_number = imo_match.group(1) if imo_match else None

    debt_match = DEBT_PATTERN.search(text)

    description = vessel_name
    if imo_number:
        description += f" (IMO: {imo_number})"

    return AuctionAsset(
        type=AssetType.VESSEL,
        seizure_reason=SeizureReason.DEBT,
        legal_status={
            # Arrests for debt are assumed compliant until screened.
            "un_sanctions_compliance": True,
            "local_court_order": warrant_id,
        },
        imo_number=imo_number,
        arrest_warrant_id=warrant_id,
        description=description,
        debt_amount=f"€{debt_match.group(1)}" if debt_match else "Unknown",
        source=SOURCE,
        date_added=utc_now_iso(),
    )


def parse_warrant_notices(html: str) -> List[AuctionAsset]:
    assets = []
    for block in extract_notice_blocks(html):
        asset = parse_warrant_text(block)
        if asset is not None:
            assets.append(asset)
    return assets


def scrape_arrest_warrants(
    url: Optional[str] = None,
    session: Optional[requests.Session] = None
) -> List[AuctionAsset]:
    """
    Fetch the notices page and parse it.

    Network and HTTP errors are logged and produce an empty list.
    """
    url = url or config.TRANSPORT_MALTA_URL
    http = session or requests.Session()
    try:
        response = http.get(url, timeout=config.HTTP_TIMEOUT_SECONDS)
        response.raise_for_status()
    except requests.RequestException as e:
        logger.error("Failed to fetch Transport Malta notices from %s: %s", url, e)
        audit_log.ingestion_complete("transport_malta", 0, [str(e)])
        return []

    assets = parse_warrant_notices(response.text)
    audit_log.ingestion_complete("transport_malta", len(assets))
    return assets
