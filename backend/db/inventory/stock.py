import uuid

from sqlalchemy import Column, Float, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from ..database import Base, TimestampMixin


class Stock(TimestampMixin, Base):
    __tablename__ = "stocks"
    __table_args__ = (
        UniqueConstraint("owner_id", "item_id", name="ux_stocks_owner_item"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    store_id = Column(Uuid, ForeignKey("features.id"), nullable=False, index=True)
    owner_id = Column(Uuid, ForeignKey("parties.id"), nullable=False, index=True)
    item_id = Column(Uuid, ForeignKey("items.id"), nullable=False, index=True)

    # changed through adjustments, read-only over HTTP
    quantity = Column(Float, nullable=False, default=0, index=True)
    min_allowed = Column(Float, nullable=False, default=0)
    max_allowed = Column(Float, nullable=False, default=0)

    store = relationship("Feature")
    owner = relationship("Party")
    item = relationship("Item", back_populates="stocks")
