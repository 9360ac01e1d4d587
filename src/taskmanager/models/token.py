"""Token model for authentication."""
from datetime import UTC, datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, func, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskmanager.database import Base
from taskmanager.types import BigIntegerID


class Token(Base):
    """Issued access token, kept as the allow-list for bearer authentication."""

    __tablename__ = "tokens"

    id: Mapped[int] = mapped_column(BigIntegerID, primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(
        BigIntegerID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    access_token: Mapped[str] = mapped_column(String(2048), unique=True, nullable=False)
    # Reserved for refresh tokens; never issued
    refresh_token: Mapped[str | None] = mapped_column(String(2048), unique=True, nullable=True)
    logged_out: Mapped[bool] = mapped_column(nullable=False, default=False, server_default="0")
    inserted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        default=lambda: datetime.now(UTC),
    )

    # At most one valid token per user
    __table_args__ = (
        Index(
            "idx_tokens_user_active",
            "user_id",
            unique=True,
            postgresql_where=text("NOT logged_out"),
            sqlite_where=text("logged_out = 0"),
        ),
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="tokens")

    @property
    def is_valid(self) -> bool:
        """Whether the token has not been logged out."""
        return not self.logged_out

    def __repr__(self) -> str:
        return f"<Token(id={self.id}, user_id={self.user_id}, logged_out={self.logged_out})>"
