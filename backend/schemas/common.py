from datetime import datetime
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    data: List[T]
    total: int
    size: int
    limit: int
    skip: int
    page: int
    pages: int
    last_modified: Optional[datetime] = None
