# src/tunein_stage/models/user.py
"""SQLAlchemy model for identities issued by the authentication provider."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from tunein_stage.db.session import Base
from tunein_stage.db.time import utcnow


class User(Base):
    """External identity; stored only so that foreign keys resolve.

    Credentials live with the authentication provider. This table mirrors the
    identifier and e-mail it hands out.
    """

    __tablename__ = "app_user"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    email: Mapped[str | None] = mapped_column(Text, unique=True, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
