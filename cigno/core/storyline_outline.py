"""
Storyline outline generation.

Builds a presentation storyline (executive summary, ordered sections, flow
and call to action) from a topic and a few presentation preferences, and
normalises section lists returned by the storyline agent into the same
shape.

Dependencies: None (stdlib only)
System role: Local storyline generation used when the agent is unavailable
"""

from typing import Any

DEFAULT_SECTIONS_COUNT = 6
MAX_SECTIONS_COUNT = 20

INDUSTRY_TEMPLATES: dict[str, dict[str, list[str]]] = {
    "financial-services": {
        "sections": [
            "Executive Summary", "Market Analysis", "Regulatory Landscape",
            "Strategic Recommendations", "Implementation Roadmap", "Risk Assessment",
        ],
        "content_blocks": [
            "BCG Matrix", "Regulatory Timeline", "SWOT Analysis", "Financial Projections", "Risk Matrix",
        ],
    },
    "technology": {
        "sections": [
            "Executive Summary", "Technical Overview", "Market Opportunity",
            "Product Strategy", "Implementation Plan", "Scaling Strategy",
        ],
        "content_blocks": [
            "Technical Architecture", "User Journey", "Product Roadmap", "Market Analysis", "Growth Metrics",
        ],
    },
    "healthcare": {
        "sections": [
            "Executive Summary", "Clinical Context", "Market Analysis",
            "Solution Framework", "Implementation Strategy", "Outcomes Measurement",
        ],
        "content_blocks": [
            "Clinical Workflow", "Patient Journey", "Outcome Metrics", "Compliance Framework", "Care Pathway",
        ],
    },
}
DEFAULT_CONTENT_BLOCKS = ["Key Insights", "Process Flow", "MECE Framework", "Timeline", "Success Metrics"]

SECTION_DESCRIPTIONS = {
    "Executive Summary": "High-level overview of the {topic} initiative, key findings, and strategic recommendations.",
    "Market Analysis": "Comprehensive analysis of market conditions, trends, and opportunities related to {topic}.",
    "Strategic Framework": "Structured approach and methodology for implementing {topic} solutions.",
    "Implementation Strategy": "Detailed implementation plan with timelines, resources, and key milestones for {topic}.",
    "Technical Overview": "Technical specifications, architecture, and system requirements for {topic}.",
    "Risk Assessment": "Identification and mitigation strategies for potential risks in {topic} implementation.",
}

KEY_POINTS_BY_COMPLEXITY = {"beginner": 3, "intermediate": 4, "advanced": 5, "expert": 6}
SLIDES_BY_COMPLEXITY = {"beginner": 3, "intermediate": 4, "advanced": 5, "expert": 6}

PRESENTATION_FLOWS = {
    "consulting": "Structured consulting methodology: Situation, Complication, Question, Answer, Implementation",
    "academic": "Research-based approach: Literature review, Methodology, Findings, Discussion, Conclusions",
    "sales": "Sales methodology: Problem identification, Solution presentation, Value demonstration, Call to action",
    "technical": "Technical progression: Requirements, Architecture, Implementation, Testing, Deployment",
    "strategic": "Strategic framework: Vision, Analysis, Strategy, Execution, Measurement",
}
DEFAULT_FLOW = "Logical progression from context setting to strategic recommendations and implementation planning."

CALLS_TO_ACTION = {
    "consulting": "Immediate next steps: stakeholder alignment, resource allocation, and implementation timeline finalization.",
    "sales": "Ready to move forward: contract finalization, implementation planning, and success metrics establishment.",
    "strategic": "Strategic priorities: board approval, resource commitment, and execution roadmap development.",
    "technical": "Technical next steps: detailed technical specification, development planning, and testing strategy.",
    "academic": "Research implications: further investigation areas, practical applications, and publication opportunities.",
}
DEFAULT_CALL_TO_ACTION = "Next steps include stakeholder review, resource planning, and implementation timeline development."

MINUTES_PER_SLIDE = 2


def clamp_sections_count(value: Any) -> int:
    """Coerce a requested section count into 1..MAX_SECTIONS_COUNT."""
    try:
        count = int(value)
    except (TypeError, ValueError):
        return DEFAULT_SECTIONS_COUNT
    return max(1, min(MAX_SECTIONS_COUNT, count))


def section_description(title: str, topic: str, industry: str | None) -> str:
    for key, template in SECTION_DESCRIPTIONS.items():
        if key in title:
            return template.format(topic=topic)
    suffix = f" in the {industry} industry" if industry else ""
    return f"Detailed analysis and recommendations for {title.lower()} as it relates to {topic}{suffix}."


def section_key_points(title: str, topic: str, complexity: str | None) -> list[str]:
    if "Executive Summary" in title:
        points = ["Strategic overview and objectives", "Key findings and insights",
                  "Primary recommendations", "Expected outcomes"]
    elif "Market" in title or "Analysis" in title:
        points = ["Market trends and drivers", "Competitive landscape", "Growth opportunities", "Market challenges"]
    elif "Implementation" in title or "Strategy" in title:
        points = ["Implementation phases", "Resource requirements", "Timeline and milestones", "Success metrics"]
    elif "Technical" in title:
        points = ["Technical architecture", "System requirements", "Integration points",
                  "Performance considerations"]
    else:
        points = [f"{topic} overview", "Current state analysis", "Strategic recommendations", "Next steps"]
    return points[: KEY_POINTS_BY_COMPLEXITY.get(complexity or "", 4)]


def call_to_action(objectives: str | None, style: str | None) -> str:
    if objectives:
        return (
            f'Based on the outlined objectives: "{objectives}", the recommended next steps focus on '
            "immediate implementation priorities and stakeholder alignment."
        )
    return CALLS_TO_ACTION.get(style or "", DEFAULT_CALL_TO_ACTION)


def generate_storyline_outline(
    topic: str,
    industry: str | None = None,
    audience: str | None = None,
    objectives: str | None = None,
    sections_count: Any = DEFAULT_SECTIONS_COUNT,
    presentation_style: str = "consulting",
    complexity: str = "intermediate",
) -> dict[str, Any]:
    """
    Build a storyline outline without calling any agent.

    Known industries ("financial-services", "technology", "healthcare") get
    their own section titles; any other value uses a topic-based default.
    When more sections are requested than the template holds, numbered
    topic sections are appended.

    Args:
        topic: Subject of the presentation
        industry: Industry key selecting a section template
        audience: Target audience, used in the executive summary
        objectives: Objectives, used in the call to action
        sections_count: Number of sections to produce
        presentation_style: consulting, academic, sales, technical or strategic
        complexity: beginner, intermediate, advanced or expert

    Returns:
        dict: {executive_summary, sections, presentation_flow, call_to_action,
        total_sections, estimated_duration}
    """
    count = clamp_sections_count(sections_count)
    template = INDUSTRY_TEMPLATES.get(industry or "")
    if template is None:
        titles = [
            "Executive Summary",
            f"{topic} Landscape Analysis",
            "Current State Assessment",
            "Strategic Framework",
            "Implementation Strategy",
            "Expected Outcomes & Next Steps",
        ]
        blocks = DEFAULT_CONTENT_BLOCKS
    else:
        titles, blocks = template["sections"], template["content_blocks"]

    slides = SLIDES_BY_COMPLEXITY.get(complexity, 4)
    sections = []
    for index in range(count):
        title = titles[index] if index < len(titles) else f"{topic} - Section {index + 1}"
        sections.append(
            {
                "title": title,
                "description": section_description(title, topic, industry),
                "status": "draft",
                "key_points": section_key_points(title, topic, complexity),
                "content_blocks": [{"type": blocks[index % len(blocks)], "items": []}],
                "estimated_slides": slides,
                "order": index,
            }
        )

    sector = f" in the {industry} sector" if industry else ""
    return {
        "executive_summary": (
            f"Comprehensive {presentation_style} presentation on {topic}{sector}. This storyline provides "
            "a structured approach to presenting key insights, strategic recommendations, and actionable "
            f"next steps for {audience or 'stakeholders'}."
        ),
        "sections": sections,
        "presentation_flow": PRESENTATION_FLOWS.get(presentation_style, DEFAULT_FLOW),
        "call_to_action": call_to_action(objectives, presentation_style),
        "total_sections": len(sections),
        "estimated_duration": sum(section["estimated_slides"] for section in sections) * MINUTES_PER_SLIDE,
    }


def _first(data: dict, *keys: str) -> Any:
    for key in keys:
        value = data.get(key)
        if value not in (None, "", []):
            return value
    return None


def _text_list(value: Any) -> list[str]:
    if isinstance(value, str):
        return [line.strip(" -*\t") for line in value.splitlines() if line.strip(" -*\t")]
    if isinstance(value, list):
        return [str(item).strip() for item in value if str(item).strip()]
    return []


def normalize_agent_sections(value: Any) -> list[dict[str, Any]]:
    """
    Convert an agent's section list into outline sections.

    Entries that are not objects or carry no title are dropped. Sections
    are renumbered in the order received.
    """
    if not isinstance(value, list):
        return []
    sections = []
    for item in value:
        if not isinstance(item, dict):
            continue
        title = _first(item, "title", "name", "heading")
        if not isinstance(title, str) or not title.strip():
            continue
        blocks = item.get("content_blocks") or item.get("contentBlocks")
        slides = _first(item, "estimated_slides", "estimatedSlides")
        sections.append(
            {
                "title": title.strip(),
                "description": str(_first(item, "description", "summary", "core_message") or ""),
                "status": str(item.get("status") or "draft"),
                "key_points": _text_list(_first(item, "key_points", "keyPoints", "points")),
                "content_blocks": blocks if isinstance(blocks, list) else [],
                "estimated_slides": slides if isinstance(slides, int) and not isinstance(slides, bool) else None,
                "order": len(sections),
            }
        )
    return sections


def outline_from_agent(data: dict[str, Any], fallback: dict[str, Any]) -> dict[str, Any] | None:
    """
    Build an outline from an agent's JSON object.

    The sections may sit at the top level or under "storyline". Fields the
    agent leaves out are taken from fallback.

    Returns:
        The outline, or None when the agent produced no usable section
    """
    body = data.get("storyline") if isinstance(data.get("storyline"), dict) else data
    sections = normalize_agent_sections(body.get("sections"))
    if not sections:
        return None
    duration = _first(body, "estimated_duration", "estimatedDuration")
    return {
        "executive_summary": str(
            _first(body, "executive_summary", "executiveSummary") or fallback["executive_summary"]
        ),
        "sections": sections,
        "presentation_flow": str(
            _first(body, "presentation_flow", "presentationFlow") or fallback["presentation_flow"]
        ),
        "call_to_action": str(_first(body, "call_to_action", "callToAction") or fallback["call_to_action"]),
        "total_sections": len(sections),
        "estimated_duration": duration if isinstance(duration, (int, float)) else None,
    }
