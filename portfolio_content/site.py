"""Content collections of the personal website.

This is the single place the site's collection schemas are declared. The
timeline shape (company, role, period) is shared by the experience list and
the education block.

Examples
--------
>>> from portfolio_content.site import build_site_registry
>>> build_site_registry().names()
['blog', 'experience', 'skills', 'projects']
"""

from __future__ import annotations

from .schema import (
    Schema,
    SchemaRegistry,
    array_of,
    boolean,
    date,
    enum_of,
    object_of,
    optional,
    string,
    with_default,
)

PROJECT_CATEGORIES: tuple[str, ...] = ("automation", "testing", "development")


def blog_schema() -> Schema:
    return Schema(
        title=string(),
        date=date(),
        author=optional(string()),
        tags=optional(array_of(string())),
        excerpt=optional(string()),
    )


def timeline_schema() -> Schema:
    """Company, role and period of one position or degree."""
    return Schema(company=string(), role=string(), period=string())


def experience_schema() -> Schema:
    timeline = timeline_schema()
    return Schema(
        title=string(),
        experiences=array_of(timeline),
        education=object_of(timeline),
    )


def skills_schema() -> Schema:
    return Schema(
        title=string(),
        skills=array_of(Schema(category=string(), items=array_of(string()))),
    )


def projects_schema() -> Schema:
    return Schema(
        title=string(),
        description=string(),
        image=object_of(url=string(), alt=string()),
        technologies=array_of(string()),
        github=optional(string()),
        demo=optional(string()),
        featured=with_default(boolean(), value=False),
        completed=date(),
        category=enum_of(PROJECT_CATEGORIES),
    )


def build_site_registry() -> SchemaRegistry:
    """Return the frozen registry of every collection the site publishes."""
    return SchemaRegistry(
        {
            "blog": blog_schema(),
            "experience": experience_schema(),
            "skills": skills_schema(),
            "projects": projects_schema(),
        }
    ).freeze()


__all__ = [
    "PROJECT_CATEGORIES",
    "blog_schema",
    "build_site_registry",
    "experience_schema",
    "projects_schema",
    "skills_schema",
]
