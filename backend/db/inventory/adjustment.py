import uuid

from sqlalchemy import Column, DateTime, Float, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from ..database import Base, TimestampMixin


class Adjustment(TimestampMixin, Base):
    __tablename__ = "adjustments"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    # 'Addition' | 'Deduction'
    type = Column(String, nullable=False, index=True)
    reason = Column(String, nullable=False, index=True)

    # item and store default to the stock's
    item_id = Column(Uuid, ForeignKey("items.id"), nullable=False, index=True)
    stock_id = Column(Uuid, ForeignKey("stocks.id"), nullable=False, index=True)
    store_id = Column(Uuid, ForeignKey("features.id"), nullable=False, index=True)
    party_id = Column(Uuid, ForeignKey("parties.id"), nullable=False, index=True)

    quantity = Column(Float, nullable=False)
    cost = Column(Float, nullable=False)
    remarks = Column(Text, nullable=False)
    expired_at = Column(DateTime, nullable=True)

    item = relationship("Item")
    stock = relationship("Stock")
    store = relationship("Feature")
    party = relationship("Party")
