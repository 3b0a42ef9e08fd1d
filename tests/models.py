"""SQLAlchemy declarative models for the adapter tests (no database needed)."""

import enum

from sqlalchemy import JSON, BigInteger, Column, DateTime, Float, ForeignKey, Integer, Numeric, String
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import DeclarativeBase, relationship


class Base(DeclarativeBase):
    pass


class PostStatus(enum.Enum):
    draft = 'draft'
    published = 'published'


class Author(Base):
    """Blog authors"""

    __tablename__ = 'authors'

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False, comment='Display name')
    nickname = Column(String(50), info={'deprecated': 'Use name'})
    posts = relationship('Post', back_populates='author')


class Post(Base):
    __tablename__ = 'posts'

    id = Column(Integer, primary_key=True)
    title = Column(String(200), nullable=False)
    status = Column(SAEnum(PostStatus), nullable=False, default=PostStatus.draft)
    views = Column(BigInteger, nullable=False, server_default='0')
    score = Column(Float)
    price = Column(Numeric(10, 2))
    extra = Column(JSON)
    created_at = Column(DateTime)
    api_token = Column(String(64), info={'private': True})
    author_id = Column(Integer, ForeignKey('authors.id'), nullable=False)
    author = relationship('Author', back_populates='posts')


class SiteSettings(Base):
    __tablename__ = 'site_settings'
    __modelql_kind__ = 'singleType'

    id = Column(Integer, primary_key=True)
    title = Column(String(100))
