"""Registration model and its payment confirmation hook."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    event,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from registrar.db import Base, utcnow
from registrar.status import STATUS_VALUES, RegistrationStatus, derive_status

_STATUS_LIST = ", ".join(f"'{value}'" for value in STATUS_VALUES)


class Registration(Base):
    """A student's enrollment in a batch."""

    __tablename__ = "registrations"
    __table_args__ = (
        UniqueConstraint("student_id", "batch_id", name="uq_registrations_student_batch"),
        CheckConstraint("payment > 0", name="ck_registrations_payment"),
        CheckConstraint(f"status IN ({_STATUS_LIST})", name="ck_registrations_status"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    student_id: Mapped[int] = mapped_column(
        ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True
    )
    batch_id: Mapped[int] = mapped_column(
        ForeignKey("batches.id", ondelete="CASCADE"), nullable=False
    )
    payment: Mapped[int] = mapped_column(Integer, nullable=False)
    registration_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=RegistrationStatus.PENDING.value,
        server_default=RegistrationStatus.PENDING.value,
    )

    student: Mapped["Student"] = relationship("Student", back_populates="registrations")
    batch: Mapped["Batch"] = relationship("Batch", back_populates="registrations")

    def __repr__(self) -> str:  # pragma: no cover
        return f"Registration(id={self.id!r}, status={self.status!r})"


@event.listens_for(Registration, "before_insert")
@event.listens_for(Registration, "before_update")
def apply_payment_rule(mapper, connection, target: Registration) -> None:
    """Confirm registrations whose payment crosses the threshold on every flush."""
    target.status = derive_status(target.payment, target.status).value
