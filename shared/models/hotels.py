import uuid
from sqlalchemy import Column, String, Text, Boolean, DateTime, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from shared.core.database import Base


class Hotel(Base):
    __tablename__ = "hotels"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False)
    code = Column(String(32), unique=True, nullable=False)
    address = Column(String(255))
    city = Column(String(100))
    state = Column(String(100))
    country = Column(String(100), default="Brazil")
    zip_code = Column(String(20))
    phone = Column(String(32))
    email = Column(String(200))
    description = Column(Text)
    image_url = Column(Text)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    users = relationship("Users", back_populates="hotel")
