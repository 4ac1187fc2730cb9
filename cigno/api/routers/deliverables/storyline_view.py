"""
Server-rendered storyline page for a deliverable.

Dependencies: html (stdlib)
System role: Read-only HTML view of deliverable storylines
"""

from html import escape
from typing import Any


def _render_section(section: dict[str, Any]) -> str:
    key_points = section.get("key_points") or []
    points = "".join(f"<li>{escape(str(point))}</li>" for point in key_points)
    return (
        '<section class="storyline-section">'
        f"<h3>{escape(section.get('title') or '')}</h3>"
        f"<p>{escape(section.get('description') or '')}</p>"
        + (f"<ul>{points}</ul>" if points else "")
        + "</section>"
    )


def _render_storyline(storyline: dict[str, Any]) -> str:
    sections = sorted(storyline.get("sections") or [], key=lambda item: item.get("order") or 0)
    summary = storyline.get("executive_summary")
    return (
        f'<article class="storyline" data-storyline-id="{escape(storyline["id"])}">'
        f"<h2>{escape(storyline.get('title') or '')}</h2>"
        f'<p class="status">Status: {escape(storyline.get("status") or "")}</p>'
        + (f'<p class="summary">{escape(summary)}</p>' if summary else "")
        + "".join(_render_section(section) for section in sections)
        + "</article>"
    )


def render_storyline_page(deliverable: dict[str, Any], storylines: list[dict[str, Any]]) -> str:
    """
    Render the storylines of one deliverable as a standalone HTML page.

    Args:
        deliverable: Deliverable fields
        storylines: Storylines belonging to that deliverable

    Returns:
        str: HTML document
    """
    name = escape(deliverable.get("name") or "")
    if storylines:
        body = "".join(_render_storyline(storyline) for storyline in storylines)
    else:
        body = '<p class="empty">No storyline has been created for this deliverable yet.</p>'
    return (
        "<!DOCTYPE html>"
        '<html lang="en"><head><meta charset="utf-8">'
        f"<title>Storyline - {name}</title></head>"
        f"<body><h1>{name}</h1>{body}</body></html>"
    )
