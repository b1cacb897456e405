"""
Portfolio content tables rendered on the public site.
Bilingual text is stored as _zh/_en column pairs; every table is ordered by sort_order.
"""
from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text

from portfolio.app.db.base import Base
from portfolio.app.utils.timeutil import utcnow


class Project(Base):
    __tablename__ = "projects"

    id = Column(String(100), primary_key=True)
    slug = Column(String(150), nullable=False)
    title_zh = Column(String(255), nullable=False, default="")
    title_en = Column(String(255), nullable=False, default="")
    description_zh = Column(Text, default="")
    description_en = Column(Text, default="")
    detail_zh = Column(Text, default="")
    detail_en = Column(Text, default="")
    links_json = Column(Text, default="[]")  # [{title: {zh, en}, url, icon?}]
    category = Column(String(50), default="website")
    tags = Column(Text, default="[]")  # JSON-encoded list of strings
    image = Column(String(1024), nullable=True)
    link = Column(String(1024), nullable=True)
    source = Column(String(1024), nullable=True)
    date = Column(String(50), default="")
    featured = Column(Boolean, default=False)
    sort_order = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, default=utcnow)


class Award(Base):
    __tablename__ = "awards"

    id = Column(String(100), primary_key=True)
    slug = Column(String(150), nullable=False)
    title_zh = Column(String(255), nullable=False, default="")
    title_en = Column(String(255), nullable=False, default="")
    description_zh = Column(Text, default="")
    description_en = Column(Text, default="")
    detail_zh = Column(Text, default="")
    detail_en = Column(Text, default="")
    org_zh = Column(String(255), default="")
    org_en = Column(String(255), default="")
    date = Column(String(50), default="")
    level = Column(String(100), nullable=True)
    image = Column(String(1024), nullable=True)
    official_links = Column(Text, nullable=True)  # JSON-encoded [{title, url}]
    sort_order = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, default=utcnow)


class Experience(Base):
    __tablename__ = "experiences"

    id = Column(String(100), primary_key=True)
    title_zh = Column(String(255), nullable=False, default="")
    title_en = Column(String(255), nullable=False, default="")
    org_zh = Column(String(255), default="")
    org_en = Column(String(255), default="")
    description_zh = Column(Text, default="")
    description_en = Column(Text, default="")
    start_date = Column(String(50), default="")
    end_date = Column(String(50), nullable=True)
    icon = Column(String(255), nullable=True)
    sort_order = Column(Integer, nullable=False, default=0)


class Skill(Base):
    __tablename__ = "skills"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    icon = Column(String(255), default="")
    category = Column(String(100), default="")
    sort_order = Column(Integer, nullable=False, default=0)


class Site(Base):
    __tablename__ = "sites"

    id = Column(String(100), primary_key=True)
    title_zh = Column(String(255), nullable=False, default="")
    title_en = Column(String(255), nullable=False, default="")
    description_zh = Column(Text, default="")
    description_en = Column(Text, default="")
    url = Column(String(1024), default="#")
    icon = Column(String(255), nullable=True)
    since = Column(String(50), nullable=True)
    tags = Column(Text, default="[]")
    sort_order = Column(Integer, nullable=False, default=0)


class SocialLink(Base):
    __tablename__ = "social_links"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    icon = Column(String(255), default="")
    url = Column(String(1024), nullable=True)
    link_type = Column(String(20), default="link")  # link | text
    text_content = Column(String(255), nullable=True)
    color = Column(String(20), default="#ffffff")
    visible = Column(Boolean, default=True)
    sort_order = Column(Integer, nullable=False, default=0)


class Game(Base):
    __tablename__ = "games"

    id = Column(String(100), primary_key=True)
    title_zh = Column(String(255), nullable=False, default="")
    title_en = Column(String(255), nullable=False, default="")
    icon = Column(String(255), nullable=True)
    hours_played = Column(Integer, nullable=True)
    max_level = Column(String(50), nullable=True)
    account_name = Column(String(255), nullable=True)
    show_account = Column(Boolean, default=False)
    url = Column(String(1024), nullable=True)
    sort_order = Column(Integer, nullable=False, default=0)


# entity name (as used in /api/admin/order/{entity}) -> model
SORTABLE_MODELS = {
    "projects": Project,
    "awards": Award,
    "experiences": Experience,
    "skills": Skill,
    "sites": Site,
    "social-links": SocialLink,
    "games": Game,
}
