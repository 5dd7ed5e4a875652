"""SQLAlchemy models for goldbook database."""

from decimal import Decimal
from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session
from sqlalchemy.types import TypeDecorator

Base = declarative_base()


class DecimalString(TypeDecorator):
    """Decimal stored as its exact string form.

    Item inputs keep every digit the user typed; only derived totals are
    rounded, and only when a receipt is saved.
    """

    impl = String
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if not isinstance(value, Decimal):
            value = Decimal(str(value))
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Client(Base):
    """Workshop client model."""

    __tablename__ = "clients"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    shop_name = Column(String, nullable=True)
    phone_number = Column(String, nullable=True)
    address = Column(String, nullable=True)
    email = Column(String, nullable=True)
    balance = Column(Numeric(14, 2), default=0, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    receipts = relationship("Receipt", back_populates="client")


class Receipt(Base):
    """Work receipt model with flattened transaction totals."""

    __tablename__ = "receipts"

    id = Column(Integer, primary_key=True)
    kind = Column(String, nullable=False)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False)
    voucher_id = Column(String, unique=True, nullable=False)
    status = Column(String, nullable=False)
    operation = Column(String, nullable=False)

    given_date = Column(Date, nullable=True)
    given_total = Column(Numeric(14, 2), default=0, nullable=False)
    given_total_pure_weight = Column(Numeric(14, 2), default=0, nullable=False)

    received_date = Column(Date, nullable=True)
    received_total = Column(Numeric(14, 2), default=0, nullable=False)
    received_total_ornaments_wt = Column(Numeric(14, 2), default=0, nullable=False)
    received_total_stone_weight = Column(Numeric(14, 2), default=0, nullable=False)
    received_total_sub_total = Column(Numeric(14, 2), default=0, nullable=False)

    # Manual reconciliation, stored once the receipt has been saved
    manual_given_total = Column(Numeric(14, 2), nullable=True)
    manual_received_total = Column(Numeric(14, 2), nullable=True)
    manual_operation = Column(String, nullable=True)
    manual_result = Column(Numeric(14, 2), nullable=True)

    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    # Relationships
    client = relationship("Client", back_populates="receipts")
    given_items = relationship(
        "GivenItem",
        back_populates="receipt",
        cascade="all, delete-orphan",
        order_by="GivenItem.position",
    )
    received_items = relationship(
        "ReceivedItem",
        back_populates="receipt",
        cascade="all, delete-orphan",
        order_by="ReceivedItem.position",
    )


class GivenItem(Base):
    """Given line item model."""

    __tablename__ = "given_items"

    id = Column(Integer, primary_key=True)
    receipt_id = Column(Integer, ForeignKey("receipts.id"), nullable=False)
    position = Column(Integer, nullable=False)
    product_name = Column(String, nullable=False)
    pure_weight = Column(DecimalString(), nullable=False)
    pure_percent = Column(DecimalString(), nullable=False)
    melting = Column(DecimalString(), nullable=False)
    total = Column(Numeric(14, 2), nullable=False)
    date = Column(Date, nullable=True)

    # Relationships
    receipt = relationship("Receipt", back_populates="given_items")


class ReceivedItem(Base):
    """Received line item model."""

    __tablename__ = "received_items"

    id = Column(Integer, primary_key=True)
    receipt_id = Column(Integer, ForeignKey("receipts.id"), nullable=False)
    position = Column(Integer, nullable=False)
    product_name = Column(String, nullable=False)
    final_ornaments_wt = Column(DecimalString(), nullable=False)
    stone_weight = Column(DecimalString(), nullable=False)
    making_charge_percent = Column(DecimalString(), nullable=False)
    sub_total = Column(Numeric(14, 2), nullable=False)
    total = Column(Numeric(14, 2), nullable=False)
    date = Column(Date, nullable=True)

    # Relationships
    receipt = relationship("Receipt", back_populates="received_items")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
