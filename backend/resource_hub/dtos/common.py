"""Response envelope shared by every endpoint."""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

DataT = TypeVar("DataT")


class ApiResponse(BaseModel, Generic[DataT]):
    """``{success, message?, data?}``"""

    success: bool = True
    message: Optional[str] = None
    data: Optional[DataT] = None


class ListResponse(ApiResponse[DataT], Generic[DataT]):
    """Envelope for collections; ``count`` is the number of items returned."""

    count: int


class PagedResponse(ListResponse[DataT], Generic[DataT]):
    total: int
    page: int
    pages: int
