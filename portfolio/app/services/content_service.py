"""
Content service - public site payload, project upserts, site config and batch reordering
"""
from __future__ import annotations

import json
from typing import Any

from sqlalchemy.orm import Session

from portfolio.app.core.logging_config import get_logger
from portfolio.app.models.content import (
    SORTABLE_MODELS,
    Award,
    Experience,
    Game,
    Project,
    Site,
    Skill,
    SocialLink,
)
from portfolio.app.models.site_config import SiteConfig

logger = get_logger("services.content")


class UnknownEntityError(LookupError):
    pass


class DuplicateItemsError(ValueError):
    def __init__(self, entity: str, ids: list[Any]):
        super().__init__(f"{entity}: duplicate ids {ids}")
        self.entity = entity
        self.ids = ids


class MissingItemsError(LookupError):
    def __init__(self, entity: str, ids: list[Any]):
        super().__init__(f"{entity}: unknown ids {ids}")
        self.entity = entity
        self.ids = ids


def parse_json_list(raw: Any) -> list:
    """Tags / links columns hold JSON text; tolerate lists, blanks and junk."""
    if not raw:
        return []
    if isinstance(raw, list):
        return raw
    if isinstance(raw, str):
        try:
            parsed = json.loads(raw)
        except ValueError:
            return []
        return parsed if isinstance(parsed, list) else []
    return []


def _bi(zh: str | None, en: str | None) -> dict[str, str]:
    return {"zh": zh or "", "en": en or ""}


def _row_dict(obj: Any) -> dict[str, Any]:
    return {c.name: getattr(obj, c.name) for c in obj.__table__.columns}


# --- Public site payload ---

def build_public_data(db: Session) -> dict[str, Any]:
    """All ordered content in the shape the public pages render."""
    projects = db.query(Project).order_by(Project.sort_order.asc(), Project.created_at.desc()).all()
    experiences = db.query(Experience).order_by(Experience.sort_order.asc()).all()
    skills = db.query(Skill).order_by(Skill.sort_order.asc()).all()
    sites = db.query(Site).order_by(Site.sort_order.asc()).all()
    awards = db.query(Award).order_by(Award.sort_order.asc(), Award.created_at.desc()).all()
    social_links = (
        db.query(SocialLink)
        .filter(SocialLink.visible.is_(True))
        .order_by(SocialLink.sort_order.asc(), SocialLink.id.asc())
        .all()
    )
    games = db.query(Game).order_by(Game.sort_order.asc()).all()

    return {
        "projects": [
            {
                "id": p.id,
                "slug": p.slug or p.id,
                "title": _bi(p.title_zh, p.title_en),
                "description": _bi(p.description_zh, p.description_en),
                "detail": _bi(p.detail_zh, p.detail_en),
                "links": parse_json_list(p.links_json),
                "category": p.category or "website",
                "tags": parse_json_list(p.tags),
                "image": p.image,
                "link": p.link,
                "source": p.source,
                "date": p.date or "",
                "featured": bool(p.featured),
            }
            for p in projects
        ],
        "experiences": [
            {
                "id": e.id,
                "title": _bi(e.title_zh, e.title_en),
                "org": _bi(e.org_zh, e.org_en),
                "description": _bi(e.description_zh, e.description_en),
                "startDate": e.start_date or "",
                "endDate": e.end_date,
                "icon": e.icon,
            }
            for e in experiences
        ],
        "skills": [{"name": s.name, "icon": s.icon, "category": s.category} for s in skills],
        "sites": [
            {
                "id": s.id,
                "title": _bi(s.title_zh, s.title_en),
                "description": _bi(s.description_zh, s.description_en),
                "url": s.url or "#",
                "since": s.since or "",
                "tags": parse_json_list(s.tags),
            }
            for s in sites
        ],
        "awards": [
            {
                "id": a.id,
                "slug": a.slug or a.id,
                "title": _bi(a.title_zh, a.title_en),
                "description": _bi(a.description_zh, a.description_en),
                "detail": _bi(a.detail_zh, a.detail_en),
                "org": _bi(a.org_zh, a.org_en),
                "date": a.date or "",
                "level": a.level,
                "image": a.image,
                "officialLinks": parse_json_list(a.official_links),
            }
            for a in awards
        ],
        "socialLinks": [
            {
                "name": s.name,
                "icon": s.icon,
                "url": s.url or "#",
                "color": s.color or "#fff",
                "linkType": s.link_type or "link",
                "textContent": s.text_content,
            }
            for s in social_links
        ],
        "games": [
            {
                "id": g.id,
                "title": _bi(g.title_zh, g.title_en),
                "icon": g.icon,
                "hoursPlayed": g.hours_played,
                "maxLevel": g.max_level,
                "accountName": g.account_name if g.show_account else None,
                "showAccount": bool(g.show_account),
                "url": g.url,
            }
            for g in games
        ],
        "source": "database",
    }


# --- Site config ---

def get_site_config(db: Session) -> dict[str, str]:
    return {row.key: row.value for row in db.query(SiteConfig).all()}


def update_site_config(db: Session, values: dict[str, Any]) -> dict[str, str]:
    """Upsert every key; other keys are left alone."""
    for key, value in values.items():
        row = db.query(SiteConfig).filter(SiteConfig.key == key).first()
        text = "" if value is None else str(value)
        if row:
            row.value = text
        else:
            db.add(SiteConfig(key=key, value=text))
    db.commit()
    logger.info("Site config updated keys=%s", sorted(values))
    return get_site_config(db)


# --- Projects ---

def list_projects(db: Session) -> list[dict[str, Any]]:
    rows = db.query(Project).order_by(Project.sort_order.asc(), Project.created_at.desc()).all()
    return [_row_dict(p) for p in rows]


def upsert_project(db: Session, data: dict[str, Any]) -> Project:
    """Insert or update by id. `tags` arrives as a list and is stored as JSON text."""
    project = db.query(Project).filter(Project.id == data["id"]).first()
    if project is None:
        project = Project(id=data["id"])
        db.add(project)
    project.slug = data.get("slug") or data["id"]
    project.title_zh = data.get("title_zh") or ""
    project.title_en = data.get("title_en") or ""
    project.description_zh = data.get("description_zh") or ""
    project.description_en = data.get("description_en") or ""
    project.detail_zh = data.get("detail_zh") or ""
    project.detail_en = data.get("detail_en") or ""
    project.links_json = data.get("links_json") or "[]"
    project.category = data.get("category") or "website"
    project.tags = json.dumps(data.get("tags") or [], ensure_ascii=False)
    project.image = data.get("image") or None
    project.link = data.get("link") or None
    project.source = data.get("source") or None
    project.date = data.get("date") or ""
    project.featured = bool(data.get("featured"))
    project.sort_order = data.get("sort_order") or 0
    db.commit()
    db.refresh(project)
    return project


def delete_project(db: Session, project_id: str) -> bool:
    deleted = db.query(Project).filter(Project.id == project_id).delete(synchronize_session=False)
    db.commit()
    return bool(deleted)


# --- Ordering ---

def _coerce_id(model: Any, raw_id: Any) -> Any:
    if model.__table__.c.id.type.python_type is int:
        return int(raw_id)
    return str(raw_id)


def apply_sort_order(db: Session, entity: str, items: list[dict[str, Any]]) -> int:
    """
    Write sort_order for every {id, sort_order} in one transaction.
    Ids are compared after conversion to the table's id type. Nothing is written
    if the entity is unknown, an id repeats or any id is missing.
    """
    model = SORTABLE_MODELS.get(entity)
    if model is None:
        raise UnknownEntityError(entity)

    orders: dict[Any, int] = {}
    duplicates = []
    for item in items:
        key = _coerce_id(model, item["id"])
        if key in orders:
            duplicates.append(key)
        orders[key] = int(item["sort_order"])
    if duplicates:
        raise DuplicateItemsError(entity, duplicates)

    rows = db.query(model).filter(model.id.in_(list(orders))).all()
    found = {row.id for row in rows}
    missing = [i for i in orders if i not in found]
    if missing:
        raise MissingItemsError(entity, missing)

    for row in rows:
        row.sort_order = orders[row.id]
    db.commit()
    logger.info("Sort order saved entity=%s items=%d", entity, len(rows))
    return len(rows)
