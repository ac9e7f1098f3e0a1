"""
Catalog loading: normalizes stored or spreadsheet-exported card rows into
CardRecord values for the recommendation funnel.
"""

import csv
import logging
import re
from pathlib import Path
from typing import Iterable, List, Union

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.card_catalogue import CardCatalogue, split_list
from funnel.models import CardRecord, CardType

logger = logging.getLogger(__name__)


CSV_HEADERS = [
    "card_name",
    "bank",
    "card_type",
    "joining_fee",
    "annual_fee",
    "min_credit_score",
    "min_monthly_income",
    "reward_rate",
    "sign_up_bonus",
    "features",
    "spending_categories",
]

# Currency symbols, thousands separators, percent and multiplier suffixes
_AMOUNT_NOISE = re.compile(r"[₹$€¥,%x\s]")


def parse_amount(value, default: float = 0.0) -> float:
    """
    Parse a spreadsheet cell into a number.

    Examples: "5%" -> 5.0, "₹5,000" -> 5000.0, "3x" -> 3.0, "" -> default
    """
    if value is None:
        return default
    if isinstance(value, (int, float)):
        return float(value)
    cleaned = _AMOUNT_NOISE.sub("", str(value))
    if not cleaned:
        return default
    try:
        return float(cleaned)
    except ValueError:
        return default


def parse_card_type(value) -> CardType:
    try:
        return CardType.parse(value)
    except ValueError:
        logger.warning("Unknown card type %r; defaulting to %s", value, CardType.REWARDS.value)
        return CardType.REWARDS


def row_to_record(row: dict) -> CardRecord:
    """Build a CardRecord from a CSV/dict row. Raises ValueError on malformed rows."""
    return CardRecord(
        name=(row.get("card_name") or "").strip(),
        bank=(row.get("bank") or "").strip(),
        card_type=parse_card_type(row.get("card_type") or CardType.REWARDS.value),
        joining_fee=parse_amount(row.get("joining_fee")),
        annual_fee=parse_amount(row.get("annual_fee")),
        min_credit_score=int(parse_amount(row.get("min_credit_score"))),
        min_monthly_income=parse_amount(row.get("min_monthly_income")),
        reward_rate=parse_amount(row.get("reward_rate")),
        sign_up_bonus=parse_amount(row.get("sign_up_bonus")),
        features=split_list(row.get("features")),
        spending_categories=[c.lower() for c in split_list(row.get("spending_categories"))],
    )


def load_catalog_csv(path: Union[str, Path]) -> List[CardRecord]:
    """
    Load and normalize a catalog CSV.

    Rows that fail validation, and rows repeating an earlier (bank, card name)
    pair, are skipped with a warning. A missing file yields an empty catalog.
    """
    path = Path(path)
    records: List[CardRecord] = []
    seen = set()

    if not path.exists():
        logger.warning("Catalog CSV not found at %s", path)
        return records

    with open(path, "r", newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        for line_no, row in enumerate(reader, start=2):
            try:
                record = row_to_record(row)
            except ValueError as exc:
                logger.warning("Skipping catalog row %d in %s: %s", line_no, path, exc)
                continue

            key = (record.bank, record.name)
            if key in seen:
                logger.warning(
                    "Skipping catalog row %d in %s: duplicate card %r from %r", line_no, path, record.name, record.bank
                )
                continue
            seen.add(key)
            records.append(record)

    logger.info("Loaded %d cards from %s", len(records), path)
    return records


def seed_catalog(db: Session, records: Iterable[CardRecord]) -> int:
    """Insert records into an empty card_catalogue table. Returns rows inserted."""
    if db.query(CardCatalogue).first() is not None:
        return 0

    rows = [CardCatalogue.from_record(record) for record in records]
    try:
        db.add_all(rows)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise

    logger.info("Seeded card catalogue with %d cards", len(rows))
    return len(rows)


class CatalogService:
    def __init__(self, db: Session):
        self.db = db

    def list_rows(self) -> List[CardCatalogue]:
        """Retrieve all catalog rows from the database."""
        return self.db.query(CardCatalogue).order_by(CardCatalogue.card_id).all()

    def get_catalog(self) -> List[CardRecord]:
        """Retrieve the catalog as CardRecord values, skipping rows that fail validation."""
        records = []
        for row in self.list_rows():
            try:
                records.append(row.to_record())
            except ValueError as exc:
                logger.warning("Skipping catalog card %s: %s", row.card_id, exc)
        return records
