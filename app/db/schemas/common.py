from pydantic import BaseModel

class Pagination(BaseModel):
    total: int
    page: int
    limit: int
    pages: int

def paginate(total: int, page: int, limit: int) -> Pagination:
    return Pagination(total=total, page=page, limit=limit, pages=(total + limit - 1) // limit)

def not_null(value):
    """Reject an explicit null for a column that cannot be cleared."""
    if value is None:
        raise ValueError("may not be null")
    return value
