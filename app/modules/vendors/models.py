from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING

from app.core.db.base import BaseModel

if TYPE_CHECKING:
    from app.modules.invoices.models import Invoice


class Vendor(BaseModel):
    """
    Vendor model - the supplier an invoice is billed by.
    Extends BaseModel which provides: id, created_at, updated_at

    `category` is a free-text label used to group spend.
    """

    __tablename__ = "vendors"

    vendor_id: Mapped[str] = mapped_column(
        String(100), nullable=False, unique=True, index=True
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    # Relationships
    invoices: Mapped[list["Invoice"]] = relationship(
        "Invoice",
        back_populates="vendor",
        cascade="all",
        passive_deletes=True,  # ON DELETE CASCADE in the schema
    )

    def __repr__(self) -> str:
        return f"<Vendor(id={self.id}, vendor_id='{self.vendor_id}', name='{self.name}', category='{self.category}')>"
