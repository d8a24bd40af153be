from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING

from app.core.db.base import BaseModel

if TYPE_CHECKING:
    from app.modules.invoices.models import Invoice


class Customer(BaseModel):
    """
    Customer model - the party an invoice is issued to.
    Extends BaseModel which provides: id, created_at, updated_at
    """

    __tablename__ = "customers"

    customer_id: Mapped[str] = mapped_column(
        String(100), nullable=False, unique=True, index=True
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    email: Mapped[str] = mapped_column(String(255), nullable=False)

    # Relationships
    invoices: Mapped[list["Invoice"]] = relationship(
        "Invoice",
        back_populates="customer",
        cascade="all",
        passive_deletes=True,  # ON DELETE CASCADE in the schema
    )

    def __repr__(self) -> str:
        return f"<Customer(id={self.id}, customer_id='{self.customer_id}', name='{self.name}')>"
