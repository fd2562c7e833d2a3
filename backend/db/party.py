import uuid

from sqlalchemy import Column, String, Uuid

from .database import Base, TimestampMixin


class Party(TimestampMixin, Base):
    """Institution or organization that owns stock (maintained by the stakeholder service)."""
    __tablename__ = "parties"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False, index=True)
    email = Column(String, nullable=True, index=True)
    mobile = Column(String, nullable=True, index=True)
