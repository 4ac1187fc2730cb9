"""
Heuristic brief evaluation.

Scores a deliverable brief from 0 to 10 by checking its length and whether
it names objectives, an audience, a geography, the core strategic analyses
and a concrete outcome. Agent scores are folded into the same shape.

Dependencies: None (stdlib only)
System role: Local brief scoring and agent score normalisation
"""

import math
import re
from typing import Any

BASE_SCORE = 5.0
MIN_WORDS = 180
MAX_WORDS = 900
BALANCED_WORDS = (300, 600)

GEOGRAPHY_KEYWORDS = (
    "switzerland", "swiss", "emea", "europe", "north america", "latin america",
    "latam", "asia", "middle east", "africa", "apac", "global",
)

STRATEGIC_CONTENT_CHECKS = (
    (
        "Market sizing",
        re.compile(r"market sizing|size of the market|total addressable market|\btam\b|\bsam\b|\bsom\b"),
        "Quantify the market size, growth, and value pools to anchor the commercial opportunity.",
    ),
    (
        "Competitive analysis",
        re.compile(r"competitive|competitor|benchmark|landscape|peer set"),
        "Benchmark incumbents and disruptors to pinpoint the client's differentiation gaps.",
    ),
    (
        "Capability assessment",
        re.compile(r"capabilit|operating model|internal strength|delivery model"),
        "Assess the client's current capabilities and enablers to surface structural execution gaps.",
    ),
    (
        "Gap analysis",
        re.compile(r"gap analysis|capability gap|versus|delta vs|performance gap"),
        "Highlight the critical gaps versus market leaders and what needs to change.",
    ),
    (
        "Strategic options",
        re.compile(r"strategic option|scenario|buy vs build|partner|acquisition|roadmap|transformation"),
        "Lay out the strategic moves (build, partner, buy) and the roadmap or phasing required.",
    ),
)

OUTCOME_PATTERN = re.compile(
    r"roadmap|next step|implementation|phasing|so what|recommendation|playbook|action plan|sequencing"
)
AUDIENCE_PATTERN = re.compile(r"audienc|stakeholder|client|board|executive|leadership")
OBJECTIVE_PATTERN = re.compile(r"objective|goal|aim|success metric|kpi|north star")
NUMBER_PATTERN = re.compile(r"-?\d+(?:\.\d+)?")
LIST_SPLIT_PATTERN = re.compile(r"\n+|;+|•|\*")


def merge_unique(values: list[str]) -> list[str]:
    """Drop empty and repeated entries, keeping first occurrences in order."""
    return list(dict.fromkeys(value for value in values if value))


def normalize_text_list(value: Any) -> list[str]:
    """Turn a list or a bullet/semicolon separated string into clean strings."""
    if not value:
        return []
    if isinstance(value, list):
        return [item.strip() if isinstance(item, str) else str(item) for item in value if item]
    if isinstance(value, str):
        return [part.strip() for part in LIST_SPLIT_PATTERN.split(value) if part.strip()]
    return [str(value)]


def normalize_score(value: Any) -> float | None:
    """
    Read an agent score as a 0-10 value with one decimal.

    Strings contribute their first number. Scores above 10 are treated as
    percentages and divided by 10.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        match = NUMBER_PATTERN.search(value)
        if match is None:
            return None
        value = match.group(0)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    if number > 10:
        number /= 10
    return round(number, 1)


def derive_brief_insights(brief: str | None) -> dict[str, Any]:
    """
    Score a brief with keyword and length checks.

    Returns:
        dict: {score, strengths, improvements, suggestions, summary}
    """
    text = (brief or "").strip()
    lower = text.lower()
    word_count = len(text.split())
    strengths: list[str] = []
    improvements: list[str] = []
    suggestions: list[str] = []
    score = BASE_SCORE

    if word_count == 0:
        return {
            "score": 0.0,
            "strengths": [],
            "improvements": ["Draft the brief so it provides context, objectives, and required outputs."],
            "suggestions": [],
            "summary": "Brief is empty; add content before scoring.",
        }

    if word_count < MIN_WORDS:
        improvements.append(f"Expand the brief beyond ~{MIN_WORDS} words so the team has adequate context.")
        score -= 1.5
    elif word_count > MAX_WORDS:
        suggestions.append(f"Tighten the draft to under ~{MAX_WORDS} words so executives can scan it quickly.")
        score -= 1
    elif BALANCED_WORDS[0] <= word_count <= BALANCED_WORDS[1]:
        strengths.append("Balanced length gives enough colour without overwhelming the reader.")
        score += 1
    else:
        score += 0.25

    if OBJECTIVE_PATTERN.search(lower):
        strengths.append("References objectives or success metrics.")
        score += 0.8
    else:
        improvements.append("Define the concrete objectives and how success will be measured.")
        score -= 0.8

    if AUDIENCE_PATTERN.search(lower):
        strengths.append("Identifies the audience or stakeholder focus.")
        score += 0.6
    else:
        improvements.append("Clarify the target stakeholders so the storyline and tone can be tailored.")
        score -= 0.6

    if any(keyword in lower for keyword in GEOGRAPHY_KEYWORDS):
        strengths.append("Specifies the geography or market focus.")
        score += 0.6
    else:
        improvements.append(
            "Anchor the strategy to a specific geography or market (e.g., Switzerland) and note regulatory context."
        )
        score -= 0.6

    for name, pattern, improvement in STRATEGIC_CONTENT_CHECKS:
        if pattern.search(lower):
            strengths.append(f"{name} is called out.")
            score += 0.7
        else:
            improvements.append(improvement)
            score -= 0.7

    if OUTCOME_PATTERN.search(lower):
        strengths.append('Includes the "so what": roadmap, sequencing, or tangible actions.')
        score += 0.8
    else:
        improvements.append(
            'Spell out the "so what": a roadmap, sequencing, or the tactical/strategic moves expected.'
        )
        score -= 0.8

    improvements = merge_unique(improvements)
    summary = (
        f"Key gaps detected: {' '.join(improvements[:2])}"
        if improvements
        else "Brief covers the core evaluation checks for length, structure, and strategic content."
    )
    return {
        "score": max(0.0, min(10.0, round(score, 1))),
        "strengths": merge_unique(strengths),
        "improvements": improvements,
        "suggestions": merge_unique(suggestions),
        "summary": summary,
    }


def merge_agent_evaluation(payload: Any, heuristic: dict[str, Any]) -> dict[str, Any]:
    """
    Combine an agent's evaluation with the heuristic one.

    The agent's score wins when it can be read; its lists come first and
    the heuristic entries are appended without repeats.

    Returns:
        dict: {quality_score, strengths, improvements, suggestions, summary}
    """
    payload = payload if isinstance(payload, dict) else {}
    raw_score = next(
        (payload[key] for key in ("qualityScore", "quality_score", "score", "total_score") if key in payload),
        None,
    )
    score = normalize_score(raw_score)
    return {
        "quality_score": heuristic["score"] if score is None else score,
        "strengths": merge_unique(
            normalize_text_list(payload.get("strengths") or payload.get("highlights")) + heuristic["strengths"]
        ),
        "improvements": merge_unique(
            normalize_text_list(payload.get("improvements") or payload.get("gaps")) + heuristic["improvements"]
        ),
        "suggestions": merge_unique(
            normalize_text_list(payload.get("suggestions") or payload.get("nextSteps")) + heuristic["suggestions"]
        ),
        "summary": str(payload.get("summary") or payload.get("notes") or heuristic["summary"]),
    }
