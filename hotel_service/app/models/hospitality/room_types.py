import uuid
from sqlalchemy import Column, String, Text, Integer, Numeric, JSON, DateTime, ForeignKey, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from shared.core.database import Base


class RoomType(Base):
    __tablename__ = "room_types"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    hotel_id = Column(UUID(as_uuid=True), ForeignKey("hotels.id"), nullable=False)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    base_rate = Column(Numeric(12, 2), nullable=False)
    max_occupancy = Column(Integer, nullable=False, default=2)
    amenities = Column(JSON, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    hotel = relationship("Hotel")
    rooms = relationship("Room", back_populates="room_type")
