"""ORM model for issued bearer tokens."""

from sqlalchemy import BigInteger, Column, ForeignKey, Integer, String

from warden.models.base import Base


class Token(Base):
    """
    One row per successful login. Never updated.

    Privilege is not stored here; it is read from the owning user at validation time.
    """

    __tablename__ = "tokens"

    token_string = Column(String(255), primary_key=True)
    user_id = Column(
        Integer,
        ForeignKey("users.user_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    creation_time = Column(BigInteger, nullable=False)
