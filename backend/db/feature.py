import uuid

from sqlalchemy import Column, DateTime, String, Text, Uuid

from .database import Base, TimestampMixin

WAREHOUSE_CATEGORY = "Building"
WAREHOUSE_TYPE = "Warehouse"


class Feature(TimestampMixin, Base):
    """
    Physical feature (building, facility, ...) maintained by the feature service.

    Warehouses are features with category 'Building' and type 'Warehouse';
    they are soft deleted through deleted_at.
    """
    __tablename__ = "features"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    # 'Building' | ...
    category = Column(String, nullable=False, index=True)
    # 'Warehouse' | ...
    type = Column(String, nullable=False, index=True)

    name = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=True)

    deleted_at = Column(DateTime, nullable=True, index=True)
