import uuid
from sqlalchemy import Column, Numeric, ForeignKey
from sqlalchemy.dialects.postgresql import UUID

from sqlalchemy.orm import relationship
from shared.core.database import Base


class ReservationRoom(Base):
    __tablename__ = "reservation_rooms"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    reservation_id = Column(UUID(as_uuid=True), ForeignKey("reservations.id", ondelete="CASCADE"), nullable=False)
    room_id = Column(UUID(as_uuid=True), ForeignKey("rooms.id"), nullable=False)
    # room type base rate at booking time
    daily_rate = Column(Numeric(12, 2), nullable=False)

    reservation = relationship("Reservation", back_populates="rooms")
    room = relationship("Room", back_populates="reservation_rooms")
