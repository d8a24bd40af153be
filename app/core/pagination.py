"""
Pagination utilities for reusable offset pagination.

Provides helper functions to paginate SQLAlchemy queries and format the
`pagination` block of list responses.
"""

import math
from typing import Tuple, List, Any
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.selectable import Select


async def paginate_query(
    db: AsyncSession,
    query: Select,
    page: int = 1,
    limit: int = 10,
) -> Tuple[List[Any], int]:
    """
    Apply offset-based pagination to a SQLAlchemy query.

    IMPORTANT: Query should already have:
    - WHERE clauses
    - Eager loading to prevent N+1 queries
    - A deterministic ORDER BY clause, otherwise pages may overlap

    This function:
    1. Counts total matching records (before pagination)
    2. Applies OFFSET and LIMIT
    3. Executes and returns (items, total_count)

    Args:
        db: SQLAlchemy async session
        query: Base query with filters and ordering already applied
        page: Page number (1-indexed, default 1)
        limit: Items per page (default 10)

    Returns:
        Tuple of (paginated_items, total_count)
    """
    # Count total records BEFORE pagination
    # Using subquery to preserve all WHERE clauses and joins
    count_query = select(func.count()).select_from(query.order_by(None).subquery())
    total = (await db.execute(count_query)).scalar() or 0

    offset = (page - 1) * limit
    result = await db.execute(query.offset(offset).limit(limit))
    items = result.scalars().all()

    return list(items), total


def build_pagination_meta(total: int, page: int, limit: int) -> dict:
    """
    Build the pagination block of a list response.

    Returns:
        Dict with keys: page, limit, total, totalPages
    """
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "totalPages": math.ceil(total / limit) if limit else 0,
    }
