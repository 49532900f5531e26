"""Profile ORM model: display data for an identity."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from noticeboard.infrastructure.persistence.database import Base
from noticeboard.infrastructure.persistence.models.mixins import TimestampMixin


class Profile(TimestampMixin, Base):
    """One row per identity; id is the identity provider's user id."""

    __tablename__ = "profile"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    email: Mapped[str | None] = mapped_column(String, nullable=True)
    full_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(String, nullable=True)
