import uuid
from sqlalchemy import Column, String, Text, Date, DateTime, Integer, Numeric, ForeignKey, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from shared.core.database import Base


class Reservation(Base):
    __tablename__ = "reservations"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    code = Column(String(32), unique=True, nullable=False)
    hotel_id = Column(UUID(as_uuid=True), ForeignKey("hotels.id"), nullable=False)
    guest_id = Column(UUID(as_uuid=True), ForeignKey("guests.id"), nullable=False)
    created_by_id = Column(UUID(as_uuid=True), ForeignKey("users.id"))
    status = Column(String(24), nullable=False, default="PENDING")
    check_in_date = Column(Date, nullable=False)
    check_out_date = Column(Date, nullable=False)
    actual_check_in = Column(DateTime(timezone=True))
    actual_check_out = Column(DateTime(timezone=True))
    adults = Column(Integer, nullable=False, default=1)
    children = Column(Integer, nullable=False, default=0)
    total_amount = Column(Numeric(12, 2), nullable=False, default=0)
    # only moved by ledger transactions
    paid_amount = Column(Numeric(12, 2), nullable=False, default=0)
    notes = Column(Text)
    special_requests = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    hotel = relationship("Hotel")
    guest = relationship("Guest", back_populates="reservations")
    created_by = relationship("Users")
    rooms = relationship("ReservationRoom", back_populates="reservation",
                         cascade="all, delete-orphan")
    charges = relationship("Charge", back_populates="reservation",
                           cascade="all, delete-orphan", order_by="Charge.created_at")
    transactions = relationship("Transaction", back_populates="reservation",
                                order_by="Transaction.created_at")

    @property
    def nights(self) -> int:
        return (self.check_out_date - self.check_in_date).days
