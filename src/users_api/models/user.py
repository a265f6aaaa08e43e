"""SQLAlchemy User model."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Shared declarative base for all ORM models."""


class User(Base):
    """A customer billing / contact record.

    ``state`` holds a state name and is joined against ``State.name``
    by the per-state aggregate; there is no foreign key between them.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(256), nullable=False, unique=True)

    # ── Shipping ─────────────────────────────────────────
    address: Mapped[str] = mapped_column(String(256), nullable=False)
    city: Mapped[str] = mapped_column(String(128), nullable=False)
    state: Mapped[str] = mapped_column(String(128), nullable=False)
    zip: Mapped[str] = mapped_column(String(32), nullable=False)

    # ── Billing ──────────────────────────────────────────
    billing_name: Mapped[str] = mapped_column(String(256), nullable=False)
    billing_address: Mapped[str] = mapped_column(String(256), nullable=False)
    billing_city: Mapped[str] = mapped_column(String(128), nullable=False)
    billing_state: Mapped[str] = mapped_column(String(128), nullable=False)
    billing_zip: Mapped[str] = mapped_column(String(32), nullable=False)

    # ── Phones ───────────────────────────────────────────
    work_phone: Mapped[str] = mapped_column(String(32), nullable=False)
    home_phone: Mapped[str] = mapped_column(String(32), nullable=False)
    mobile_phone: Mapped[str] = mapped_column(String(32), nullable=False)

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r} state={self.state!r}>"
