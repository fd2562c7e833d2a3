import uuid

from sqlalchemy import Boolean, Column, Float, String, Text, Uuid
from sqlalchemy.orm import relationship

from ..database import Base, TimestampMixin


class Item(TimestampMixin, Base):
    __tablename__ = "items"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    # 'Equipment' | 'Consumable' | 'Vehicle' | 'Service' | 'Other' (configurable)
    type = Column(String, nullable=False, index=True, default="Other")
    # initials of the name unless given, always upper case
    code = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)

    uom = Column(String, nullable=False, index=True, default="unit")
    min_stock_allowed = Column(Float, nullable=False, default=0)
    max_stock_allowed = Column(Float, nullable=False, default=0)

    # follows type, see InventoryConfig.color_for
    color = Column(String, nullable=True)
    icon = Column(String, nullable=True)
    expirable = Column(Boolean, nullable=False, default=False, index=True)

    stocks = relationship("Stock", back_populates="item")
