"""
Environment and Variable models.

An environment is a named variable set. The same request template can be
resolved against different environments (development, staging,
production) by selecting another one.
"""

from datetime import datetime
from typing import List

from sqlalchemy import String, Boolean, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..database import Base


class Environment(Base):
    """
    SQLAlchemy model for environments.

    At most one environment is active; it is used when a caller does not
    pick an environment explicitly. Deleting an environment cascades to
    all its variables.

    Attributes:
        id: Unique identifier for the environment
        name: Human-readable name for the environment
        base_url: Prefix joined in front of relative request URLs
        is_active: Whether this environment is the default selection
        created_at: Timestamp when the environment was created
        updated_at: Timestamp when the environment was last updated
        variables: List of variables in this environment
    """
    __tablename__ = "environments"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255))
    base_url: Mapped[str] = mapped_column(String(1000), default="")
    is_active: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)

    variables: Mapped[List["Variable"]] = relationship(
        "Variable",
        back_populates="environment",
        cascade="all, delete-orphan",
        passive_deletes=True
    )


class Variable(Base):
    """
    SQLAlchemy model for environment variables.

    Keys keep the casing the user typed; lookups from {{placeholders}}
    ignore case.

    Attributes:
        id: Unique identifier for the variable
        environment_id: Reference to parent environment
        key: Variable name, letters, digits and underscores only
        value: Value substituted for {{key}}
        environment: Parent environment relationship
    """
    __tablename__ = "variables"

    id: Mapped[int] = mapped_column(primary_key=True)
    environment_id: Mapped[int] = mapped_column(
        ForeignKey("environments.id", ondelete="CASCADE")
    )
    key: Mapped[str] = mapped_column(String(255))
    value: Mapped[str] = mapped_column(String(1000))

    environment: Mapped["Environment"] = relationship(
        "Environment",
        back_populates="variables"
    )
