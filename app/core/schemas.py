"""
Shared pydantic building blocks for response DTOs.
"""

from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel

from app.core.utils import to_amount, to_number


# Currency values leave the API as JSON numbers, never as Decimal strings
Amount = Annotated[float, BeforeValidator(to_amount)]

# Unrounded figures such as averages
Average = Annotated[float, BeforeValidator(to_number)]


class CamelModel(BaseModel):
    """Response model serialized with camelCase keys (invoice_id -> invoiceId)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
