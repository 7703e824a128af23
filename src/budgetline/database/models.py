"""SQLAlchemy models for budgetline database."""

from datetime import datetime, UTC
from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Table,
    create_engine,
    event,
)
from sqlalchemy.orm import declarative_base, declared_attr, relationship, sessionmaker, Session

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(UTC)


cost_center_business_lines = Table(
    "cost_center_business_lines",
    Base.metadata,
    Column(
        "cost_center_id",
        Integer,
        ForeignKey("cost_centers.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "business_line_id",
        Integer,
        ForeignKey("business_lines.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class BusinessLine(Base):
    """Business line model."""

    __tablename__ = "business_lines"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, nullable=True, onupdate=_utcnow)

    # Relationships
    cost_centers = relationship(
        "CostCenter",
        secondary=cost_center_business_lines,
        back_populates="business_lines",
        passive_deletes=True,
    )


class CostCenter(Base):
    """Cost center model."""

    __tablename__ = "cost_centers"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, nullable=True, onupdate=_utcnow)

    # Relationships
    business_lines = relationship(
        "BusinessLine",
        secondary=cost_center_business_lines,
        back_populates="cost_centers",
        order_by="BusinessLine.name",
        passive_deletes=True,
    )


class LedgerEntryMixin:
    """Columns shared by the budgets and expenses tables."""

    id = Column(Integer, primary_key=True)
    description = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    year = Column(Integer, nullable=False)
    month = Column(Integer, nullable=False)
    type = Column(String(5), nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, nullable=True, onupdate=_utcnow)

    @declared_attr
    def business_line_id(cls):
        return Column(
            Integer, ForeignKey("business_lines.id", ondelete="SET NULL"), nullable=True
        )

    @declared_attr
    def cost_center_id(cls):
        return Column(
            Integer, ForeignKey("cost_centers.id", ondelete="SET NULL"), nullable=True
        )

    @declared_attr
    def business_line(cls):
        return relationship("BusinessLine")

    @declared_attr
    def cost_center(cls):
        return relationship("CostCenter")

    @declared_attr
    def __table_args__(cls):
        table = cls.__tablename__
        return (
            CheckConstraint("type IN ('CAPEX', 'OPEX')", name=f"ck_{table}_type"),
            CheckConstraint("amount > 0", name=f"ck_{table}_amount_positive"),
            CheckConstraint("year BETWEEN 1900 AND 2100", name=f"ck_{table}_year"),
            CheckConstraint("month BETWEEN 1 AND 12", name=f"ck_{table}_month"),
        )


class Budget(LedgerEntryMixin, Base):
    """Planned spending line."""

    __tablename__ = "budgets"


class Expense(LedgerEntryMixin, Base):
    """Actual spending line."""

    __tablename__ = "expenses"


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """Turn on FK enforcement so ON DELETE rules apply on SQLite."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
