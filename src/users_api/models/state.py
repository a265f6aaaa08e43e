"""SQLAlchemy State lookup model."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from users_api.models.user import Base


class State(Base):
    """A distinct state name seen on a user record.

    Rows are created lazily by the state-lookup helper and never
    updated or deleted by the service.
    """

    __tablename__ = "state"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<State id={self.id} name={self.name!r}>"
