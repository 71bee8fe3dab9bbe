"""ORM model for application users."""

from sqlalchemy import BigInteger, Boolean, Column, Integer, String, false

from warden.models.base import Base


class User(Base):
    """
    User account for opaque-token authentication.

    username is stored lowercased, so the unique index makes it case-insensitive unique.
    creation_time and last_login_time are epoch milliseconds.
    is_admin is never set through the API; admins are provisioned with the create_user script.
    """

    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    email_address = Column(String(320), nullable=True)
    creation_time = Column(BigInteger, nullable=False)
    last_login_time = Column(BigInteger, nullable=False)
    is_admin = Column(Boolean, nullable=False, default=False, server_default=false())
