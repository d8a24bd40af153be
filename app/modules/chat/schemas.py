"""
Chat-with-data DTOs
"""

from typing import Optional
from pydantic import BaseModel, Field, StrictStr


class ChatQueryDto(BaseModel):
    """Natural-language question forwarded to the NL-to-SQL service"""

    query: Optional[StrictStr] = Field(None, description="Question about the invoice data")
