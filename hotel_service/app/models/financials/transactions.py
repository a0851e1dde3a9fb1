import uuid
from sqlalchemy import Column, String, Text, Numeric, DateTime, ForeignKey, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from shared.core.database import Base


class Transaction(Base):
    """Ledger entry. Append-only: nothing updates or deletes rows."""
    __tablename__ = "transactions"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    hotel_id = Column(UUID(as_uuid=True), ForeignKey("hotels.id"), nullable=False)
    # nulled when the reservation is deleted
    reservation_id = Column(UUID(as_uuid=True), ForeignKey("reservations.id", ondelete="SET NULL"), nullable=True)
    processed_by_id = Column(UUID(as_uuid=True), ForeignKey("users.id"))
    type = Column(String(16), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    payment_method = Column(String(24), nullable=False, default="CASH")
    payment_status = Column(String(16), nullable=False, default="PAID")
    reference = Column(String(128))
    description = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    hotel = relationship("Hotel")
    reservation = relationship("Reservation", back_populates="transactions")
    processed_by = relationship("Users")
