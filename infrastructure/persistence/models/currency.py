import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
	DECIMAL,
	Boolean,
	DateTime,
	ForeignKey,
	Index,
	String,
	UniqueConstraint,
	Uuid,
	func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
	pass


class UserDB(Base):
	__tablename__ = 'users'

	id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
	username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
	password_hash: Mapped[str] = mapped_column(String(100), nullable=False)
	created_at: Mapped[datetime] = mapped_column(
		DateTime, nullable=False, server_default=func.now()
	)


class CurrencyRateDB(Base):
	__tablename__ = 'currency_rates'

	id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
	code: Mapped[str] = mapped_column(String(3), unique=True, nullable=False)
	rate: Mapped[Decimal] = mapped_column(DECIMAL(precision=18, scale=6), nullable=False)
	is_base: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class UserRateDB(Base):
	__tablename__ = 'user_rates'

	id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
	user_id: Mapped[uuid.UUID] = mapped_column(
		Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False
	)
	currency_id: Mapped[uuid.UUID] = mapped_column(
		Uuid, ForeignKey('currency_rates.id'), nullable=False
	)
	rate: Mapped[Decimal] = mapped_column(DECIMAL(precision=18, scale=6), nullable=False)
	updated_at: Mapped[datetime] = mapped_column(
		DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
	)

	__table_args__ = (
		UniqueConstraint('user_id', 'currency_id', name='uq_user_currency'),
	)


class ConversionHistoryDB(Base):
	__tablename__ = 'conversion_history'

	id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
	user_id: Mapped[uuid.UUID] = mapped_column(
		Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False
	)
	amount: Mapped[Decimal] = mapped_column(DECIMAL(precision=18, scale=4), nullable=False)
	from_currency: Mapped[str] = mapped_column(String(3), nullable=False)
	to_currency: Mapped[str] = mapped_column(String(3), nullable=False)
	rate: Mapped[Decimal] = mapped_column(DECIMAL(precision=18, scale=6), nullable=False)
	result: Mapped[Decimal] = mapped_column(DECIMAL(precision=18, scale=4), nullable=False)
	converted_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

	__table_args__ = (Index('idx_history_user_converted', 'user_id', 'converted_at'),)
