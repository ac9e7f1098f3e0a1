from decimal import Decimal

from pydantic import BaseModel, ConfigDict, field_validator
from sqlalchemy import Column, Integer, String, Text, Numeric, Enum as SAEnum, CheckConstraint, UniqueConstraint

from app.db.db import Base
from funnel.models import CardRecord, CardType


def split_list(value) -> list[str]:
    """Split a stored comma/semicolon separated cell into trimmed items."""
    if not value:
        return []
    return [item.strip() for item in str(value).replace(";", ",").split(",") if item.strip()]


def join_list(values) -> str:
    return ", ".join(str(v).strip() for v in values if str(v).strip())


# SQLAlchemy ORM Model
class CardCatalogue(Base):
    __tablename__ = "card_catalogue"

    card_id = Column(Integer, primary_key=True, index=True, unique=True)
    bank = Column(String(100), nullable=False)
    card_name = Column(String(255), nullable=False)
    card_type = Column(SAEnum(CardType), nullable=False, default=CardType.REWARDS)
    joining_fee = Column(Numeric(12, 2), nullable=False, default=0)
    annual_fee = Column(Numeric(12, 2), nullable=False, default=0)
    min_credit_score = Column(Integer, nullable=False, default=0)
    min_monthly_income = Column(Numeric(12, 2), nullable=False, default=0)
    reward_rate = Column(Numeric(10, 4), nullable=False, default=0)
    sign_up_bonus = Column(Numeric(12, 2), nullable=False, default=0)
    features = Column(Text, nullable=True)
    spending_categories = Column(Text, nullable=True)

    # Table-level constraints
    __table_args__ = (
        UniqueConstraint('bank', 'card_name', name='uq_bank_card_name'),
        CheckConstraint('joining_fee >= 0', name='ck_joining_fee_non_negative'),
        CheckConstraint('annual_fee >= 0', name='ck_annual_fee_non_negative'),
        CheckConstraint('min_credit_score >= 0', name='ck_min_credit_score_non_negative'),
        CheckConstraint('min_monthly_income >= 0', name='ck_min_monthly_income_non_negative'),
        CheckConstraint('reward_rate >= 0', name='ck_reward_rate_non_negative'),
        CheckConstraint('sign_up_bonus >= 0', name='ck_sign_up_bonus_non_negative'),
    )

    def to_record(self) -> CardRecord:
        """Convert the row into the engine's immutable CardRecord."""
        return CardRecord(
            name=self.card_name,
            bank=self.bank,
            card_type=self.card_type or CardType.REWARDS,
            joining_fee=float(self.joining_fee or 0),
            annual_fee=float(self.annual_fee or 0),
            min_credit_score=int(self.min_credit_score or 0),
            min_monthly_income=float(self.min_monthly_income or 0),
            reward_rate=float(self.reward_rate or 0),
            sign_up_bonus=float(self.sign_up_bonus or 0),
            features=split_list(self.features),
            spending_categories=split_list(self.spending_categories),
        )

    @classmethod
    def from_record(cls, record: CardRecord) -> "CardCatalogue":
        return cls(
            bank=record.bank,
            card_name=record.name,
            card_type=record.card_type,
            joining_fee=Decimal(str(record.joining_fee)),
            annual_fee=Decimal(str(record.annual_fee)),
            min_credit_score=int(record.min_credit_score),
            min_monthly_income=Decimal(str(record.min_monthly_income)),
            reward_rate=Decimal(str(record.reward_rate)),
            sign_up_bonus=Decimal(str(record.sign_up_bonus)),
            features=join_list(record.features),
            spending_categories=join_list(record.spending_categories),
        )


# Pydantic Models for Request/Response
class CardCatalogueBase(BaseModel):
    bank: str
    card_name: str
    card_type: CardType
    joining_fee: Decimal
    annual_fee: Decimal
    min_credit_score: int
    min_monthly_income: Decimal
    reward_rate: Decimal
    sign_up_bonus: Decimal

    @field_validator('card_name')
    @classmethod
    def card_name_not_empty(cls, v):
        if not v or not v.strip():
            raise ValueError('Card name cannot be empty')
        return v.strip()


class CardCatalogueResponse(CardCatalogueBase):
    """Schema for API responses"""
    model_config = ConfigDict(from_attributes=True)
    card_id: int
    features: list[str] = []
    spending_categories: list[str] = []

    @field_validator('features', 'spending_categories', mode='before')
    @classmethod
    def split_stored_list(cls, v):
        if isinstance(v, str) or v is None:
            return split_list(v)
        return v
