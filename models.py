from sqlalchemy import Column, Integer, String, DateTime, Text, UniqueConstraint
from sqlalchemy.sql import func

from config import ACCOUNTS_TABLE, DEFAULT_ROLE
from database import Base


class Account(Base):
    """
    A registered platform user.

    Columns keep the camelCase names used on the wire. `skills` is stored
    as a JSON-encoded list of strings and `password` holds a passlib hash.
    """

    __tablename__ = ACCOUNTS_TABLE
    __table_args__ = (
        UniqueConstraint("username", name=f"uq_{ACCOUNTS_TABLE}_username"),
        UniqueConstraint("email", name=f"uq_{ACCOUNTS_TABLE}_email"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    username = Column(String(64), nullable=False, index=True)
    password = Column(String(256), nullable=False)
    first_name = Column("firstName", String(128), nullable=False)
    last_name = Column("lastName", String(128), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    role = Column(String(32), nullable=False, default=DEFAULT_ROLE, server_default=DEFAULT_ROLE)
    skills = Column(Text, nullable=False, default="[]")  # JSON-encoded list
    linkedin_profile = Column("linkedinProfile", String(512), nullable=True)
    github_profile = Column("githubProfile", String(512), nullable=True)
    created_at = Column("createdAt", DateTime(timezone=True), server_default=func.now())
