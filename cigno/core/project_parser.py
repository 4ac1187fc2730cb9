"""
Project description parser.

Turns a free-form project brief (e-mail, meeting notes, pasted JSON) into a
structured project record: dates, budget, status, priority, owners, tags and
a list of deliverables with due dates and dependencies.

The parser is deterministic and side-effect free. JSON objects embedded in
the text and the caller's partial record are merged first and always win
over values inferred from prose.

Dependencies: None (stdlib only)
System role: Local project analysis used by the intake endpoint
"""

import json
import re
from datetime import date, datetime, timedelta
from typing import Any

STATUS_VALUES = ["Planning", "Active", "In Progress", "Completed", "Cancelled", "On Hold"]
PRIORITY_VALUES = ["low", "medium", "high", "critical"]
PROJECT_TYPE_VALUES = ["consulting", "development", "design", "analysis", "strategy", "research", "other"]
BUDGET_TYPE_VALUES = ["Fixed", "Hourly", "Retainer", "Milestone"]
CURRENCY_VALUES = ["USD", "EUR", "GBP", "CHF", "CAD", "AUD"]
DELIVERABLE_TYPE_VALUES = [
    "Report", "Dashboard", "API", "Presentation", "Brief",
    "Analysis", "Storyline", "Documentation", "Other",
]
DELIVERABLE_STATUS_VALUES = ["Planned", "In Progress", "Completed", "Pending Review"]
DELIVERABLE_FORMAT_VALUES = ["pdf", "docx", "pptx", "json", "markdown", "html", "other"]

MONTH_PATTERN = re.compile(
    r"(January|February|March|April|May|June|July|August|September|October|November|December"
    r"|Jan\.?|Feb\.?|Mar\.?|Apr\.?|Jun\.?|Jul\.?|Aug\.?|Sep\.?|Sept\.?|Oct\.?|Nov\.?|Dec\.?)"
    r"\s+\d{1,2}(?:st|nd|rd|th)?(?:,?\s*\d{2,4})?",
    re.IGNORECASE,
)
ISO_DATE_PATTERN = re.compile(r"(?:20\d{2}|19\d{2})[-/ ]\d{1,2}[-/ ]\d{1,2}")
NUMERIC_DATE_PATTERN = re.compile(r"\b\d{1,2}[/\-]\d{1,2}(?:[/\-](?:20\d{2}|19\d{2}))?")
JSON_DECODER = json.JSONDecoder()
MONEY_PATTERN = re.compile(
    r"(budget|cost|fee|investment|spend|spending|price|priced)[:\-]?\s*(?:is|of|:)?\s*"
    r"([$€£]|CHF|USD|EUR|GBP|CAD|AUD)?\s*([0-9]+(?:[.,][0-9]{3})*(?:[.,][0-9]{2})?)",
    re.IGNORECASE,
)
CURRENCY_FALLBACK_PATTERN = re.compile(
    r"(USD|EUR|GBP|CHF|CAD|AUD|dollar|euro|pound|franc|swiss franc|canadian dollar|australian dollar)",
    re.IGNORECASE,
)
BUDGET_TYPE_PATTERN = re.compile(r"(fixed|hourly|retainer|milestone)s?", re.IGNORECASE)
STATUS_HINT_PATTERN = re.compile(
    r"(completed|complete|finished|done|launched|delivered|in progress|ongoing|active"
    r"|kick[- ]?off|planning|planned|cancelled|canceled|on hold|paused|suspended)",
    re.IGNORECASE,
)
PRIORITY_PATTERN = re.compile(
    r"(critical|high priority|medium priority|low priority|urgent|time-sensitive|time sensitive)",
    re.IGNORECASE,
)
_NAME = r"([A-Z][A-Za-z\-']+(?:\s+[A-Z][A-Za-z\-']+)*)"
OWNER_PATTERN = re.compile(r"(?i:client|stakeholder|contact|owner)[:\-]\s*" + _NAME)
INTERNAL_OWNER_PATTERN = re.compile(
    r"(?i:internal|project|engagement) (?i:lead|owner|manager|contact)[:\-]\s*" + _NAME
)
DEPENDENCY_PATTERN = re.compile(r"depends on|after completion of|following the")
SENTENCE_SPLIT_PATTERN = re.compile(r"(?<=[.!?])\s+|\n|·|•")

DELIVERABLE_VERBS = [
    "create", "build", "develop", "deliver", "produce", "prepare",
    "design", "launch", "implement", "generate", "draft", "compile",
]
DELIVERABLE_STOP_PHRASES = [
    "using", "with", "including", "leveraging", "featuring", "supported by",
    "integrating", "built on", "utilising", "utilizing", "powered by",
    "to", "for", "and", "that", "which",
]
TAG_KEYWORDS = [
    "ai", "automation", "dashboard", "api", "strategy",
    "presentation", "report", "analytics", "content", "research",
]

DEFAULT_DELIVERABLE_INTERVAL_DAYS = 14
MIN_DELIVERABLE_INTERVAL_DAYS = 7
DEFAULT_PROJECT_SPAN_DAYS = 30


def normalize_whitespace(value: str | None) -> str:
    return re.sub(r"\s+", " ", value).strip() if value else ""


def safe_string(value: Any) -> str:
    """Render scalars and containers as text; None becomes an empty string."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (dict, list)):
        try:
            return json.dumps(value)
        except (TypeError, ValueError, RecursionError):
            return ""
    return str(value)


def to_title_case(value: str) -> str:
    return " ".join(segment[0].upper() + segment[1:] for segment in value.split(" ") if segment)


def slugify(value: Any, fallback: str = "deliverable") -> str:
    base = re.sub(r"[^a-z0-9]+", "-", normalize_whitespace(safe_string(value)).lower()).strip("-")
    return base or fallback


def iter_embedded_objects(text: str | None):
    """
    Yield the JSON objects embedded in free text, left to right.

    Each "{" is handed to the JSON decoder, so braces and quotes inside
    string values are handled. Objects nested deeper than the interpreter's
    recursion limit end the scan.
    """
    if not text:
        return
    index = text.find("{")
    while index != -1:
        try:
            value, end = JSON_DECODER.raw_decode(text, index)
        except ValueError:
            index = text.find("{", index + 1)
            continue
        except RecursionError:
            return
        yield value
        index = text.find("{", end)


def merge_objects(base: dict | None, addition: Any) -> dict:
    """
    Merge addition into a copy of base.

    Lists are concatenated, nested mappings merged recursively, and None
    values in addition never overwrite what base already has.
    """
    merged = dict(base or {})
    if not isinstance(addition, dict):
        return merged
    for key, value in addition.items():
        if value is None:
            continue
        if isinstance(value, list):
            existing = merged.get(key)
            merged[key] = (list(existing) if isinstance(existing, list) else []) + list(value)
        elif isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_objects(merged[key], value)
        else:
            merged[key] = value
    return merged


def sanitize_number(value: Any, fallback: Any = 0) -> Any:
    """Coerce numbers and numeric-looking strings; integral values become int."""
    if isinstance(value, bool):
        return fallback
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        try:
            number = float(re.sub(r"[^0-9.\-]", "", value))
        except ValueError:
            return fallback
    else:
        return fallback
    if isinstance(number, float):
        if number != number or number in (float("inf"), float("-inf")):
            return fallback
        if number.is_integer():
            return int(number)
    return number


def sanitize_enum(value: Any, valid_values: list[str], fallback: str) -> str:
    """Case-insensitively map value onto one of valid_values."""
    if not value:
        return fallback
    candidate = safe_string(value).strip().lower()
    for option in valid_values:
        if option.lower() == candidate:
            return option
    return fallback


def pick_best_string(*values: Any) -> str:
    for value in values:
        candidate = normalize_whitespace(safe_string(value))
        if candidate:
            return candidate
    return ""


def _build_date(year: int, month: int, day: int) -> str:
    try:
        return date(year, month, day).isoformat()
    except ValueError:
        return ""


def parse_date_candidate(raw_value: str | None, reference_year: int | None, today: date) -> str:
    """
    Normalise one date token to YYYY-MM-DD.

    Tokens without a year borrow reference_year, falling back to the year
    of today. Returns an empty string when the token cannot be read.
    """
    if not raw_value:
        return ""
    candidate = re.sub(r"(\d+)(st|nd|rd|th)", r"\1", raw_value, flags=re.IGNORECASE)
    candidate = normalize_whitespace(candidate)
    year = reference_year or today.year

    iso_match = re.match(r"^(\d{4})[-/ ](\d{1,2})[-/ ](\d{1,2})", candidate)
    if iso_match:
        return _build_date(*(int(part) for part in iso_match.groups()))

    numeric_match = re.fullmatch(r"(\d{1,2})[/\-](\d{1,2})(?:[/\-](\d{4}))?", candidate)
    if numeric_match:
        first, second, explicit_year = numeric_match.groups()
        target_year = int(explicit_year) if explicit_year else year
        # month/day first, then day/month
        return (
            _build_date(target_year, int(first), int(second))
            or _build_date(target_year, int(second), int(first))
        )

    cleaned = re.sub(r"\bsept\b", "sep", candidate.replace(".", ""), flags=re.IGNORECASE)
    if not re.search(r"\d{4}", cleaned):
        # two-digit years give way to the reference year
        cleaned = re.sub(r"(\s\d{1,2}),?\s*\d{2}$", r"\1", cleaned)
        cleaned = f"{cleaned} {year}"
    for date_format in ("%B %d %Y", "%b %d %Y", "%B %d, %Y", "%b %d, %Y"):
        try:
            return datetime.strptime(cleaned, date_format).date().isoformat()
        except ValueError:
            continue
    return ""


def _find_tokens(pattern: re.Pattern, text: str) -> list[str]:
    return [match.group(0) for match in pattern.finditer(text)]


def _reference_year(tokens: list[str]) -> int | None:
    for token in tokens:
        match = re.search(r"(\d{4})", token)
        if match:
            return int(match.group(1))
    return None


def extract_dates(text: str, merged: dict, today: date) -> dict[str, str]:
    """
    Pick project start and end dates.

    Explicit values from merged data win. Otherwise the first two date
    tokens in the text are used (ISO, then month-name, then numeric), and
    a lone date is padded to a thirty-day span.
    """
    dates = {
        "start_date": normalize_whitespace(safe_string(merged.get("start_date") or merged.get("startDate"))),
        "end_date": normalize_whitespace(safe_string(merged.get("end_date") or merged.get("endDate"))),
    }

    tokens = list(dict.fromkeys(
        _find_tokens(ISO_DATE_PATTERN, text)
        + _find_tokens(MONTH_PATTERN, text)
        + _find_tokens(NUMERIC_DATE_PATTERN, text)
    ))
    if not tokens:
        return dates

    reference_year = _reference_year(tokens)

    if not dates["start_date"]:
        dates["start_date"] = parse_date_candidate(tokens[0], reference_year, today)
    if not dates["end_date"] and len(tokens) > 1:
        dates["end_date"] = parse_date_candidate(tokens[1], reference_year, today)

    start = _to_date(dates["start_date"])
    end = _to_date(dates["end_date"])
    if not dates["end_date"] and start:
        dates["end_date"] = (start + timedelta(days=DEFAULT_PROJECT_SPAN_DAYS)).isoformat()
    if not dates["start_date"] and end:
        dates["start_date"] = (end - timedelta(days=DEFAULT_PROJECT_SPAN_DAYS)).isoformat()
    return dates


def _to_date(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def infer_project_status(text: str) -> str:
    match = STATUS_HINT_PATTERN.search(text or "")
    if not match:
        return "Planning"
    token = match.group(0).lower()
    if any(word in token for word in ("completed", "finished", "done", "delivered")):
        return "Completed"
    if any(word in token for word in ("in progress", "ongoing", "active")):
        return "In Progress"
    if "cancelled" in token or "canceled" in token:
        return "Cancelled"
    if any(word in token for word in ("on hold", "paused", "suspended")):
        return "On Hold"
    return "Planning"


def infer_priority(text: str) -> str:
    match = PRIORITY_PATTERN.search(text or "")
    if not match:
        return "medium"
    token = match.group(0).lower()
    if any(word in token for word in ("critical", "urgent", "time-sensitive", "time sensitive")):
        return "critical"
    if "high" in token:
        return "high"
    if "low" in token:
        return "low"
    return "medium"


def infer_project_type(text: str) -> str:
    if not text:
        return "other"
    lower = text.lower()
    rules = [
        ("design", r"ui|ux|design|branding|prototype|visual"),
        ("development", r"dashboard|build|develop|api|integration|automation|platform|application|app|engineer|engine"),
        ("analysis", r"analysis|analytics|research|study|assessment"),
        ("strategy", r"strategy|roadmap|planning|transformation|advisory"),
        ("research", r"research|investigate|survey|discovery"),
        ("consulting", r"consulting|engagement"),
    ]
    for project_type, pattern in rules:
        if re.search(pattern, lower):
            return project_type
    return "other"


def infer_budget_type(text: str) -> str:
    match = BUDGET_TYPE_PATTERN.search(text or "")
    if not match:
        return "Fixed"
    token = match.group(0).lower()
    for keyword, budget_type in (("hourly", "Hourly"), ("retainer", "Retainer"), ("milestone", "Milestone")):
        if keyword in token:
            return budget_type
    return "Fixed"


def infer_currency(text: str) -> str:
    if not text:
        return "USD"
    if "$" in text or re.search(r"dollar", text, re.IGNORECASE):
        return "USD"
    if "€" in text or re.search(r"eur|euro", text, re.IGNORECASE):
        return "EUR"
    if "£" in text or re.search(r"gbp|pound", text, re.IGNORECASE):
        return "GBP"
    if re.search(r"chf|franc", text, re.IGNORECASE):
        return "CHF"
    if re.search(r"cad|canadian", text, re.IGNORECASE):
        return "CAD"
    if re.search(r"aud|australian", text, re.IGNORECASE):
        return "AUD"
    return "USD"


def extract_budget_details(text: str, merged: dict) -> dict[str, Any]:
    if merged.get("budget_amount"):
        return {
            "budget_amount": sanitize_number(merged["budget_amount"], merged["budget_amount"]),
            "currency": sanitize_enum(merged.get("currency") or merged.get("budget_currency"), CURRENCY_VALUES, "USD"),
            "budget_type": sanitize_enum(merged.get("budget_type"), BUDGET_TYPE_VALUES, "Fixed"),
        }
    if not text:
        return {"budget_amount": 0, "currency": "USD", "budget_type": "Fixed"}

    match = MONEY_PATTERN.search(text)
    if match:
        _, currency_symbol, numeric_value = match.groups()
        return {
            "budget_amount": sanitize_number(numeric_value, 0),
            "currency": infer_currency(currency_symbol) if currency_symbol else infer_currency(text),
            "budget_type": infer_budget_type(text),
        }

    fallback = CURRENCY_FALLBACK_PATTERN.search(text)
    return {
        "budget_amount": 0,
        "currency": infer_currency(fallback.group(0)) if fallback else "USD",
        "budget_type": infer_budget_type(text),
    }


def extract_owners(text: str, merged: dict) -> dict[str, str]:
    owners = {
        "client_owner": normalize_whitespace(safe_string(merged.get("client_owner") or merged.get("clientOwner"))),
        "internal_owner": normalize_whitespace(safe_string(merged.get("internal_owner") or merged.get("internalOwner"))),
    }
    if text and not owners["client_owner"]:
        match = OWNER_PATTERN.search(text)
        if match:
            owners["client_owner"] = match.group(1)
    if text and not owners["internal_owner"]:
        match = INTERNAL_OWNER_PATTERN.search(text)
        if match:
            owners["internal_owner"] = match.group(1)
    return owners


def sentence_tokenise(text: str) -> list[str]:
    if not text:
        return []
    return [s for s in (normalize_whitespace(part) for part in SENTENCE_SPLIT_PATTERN.split(text)) if s]


def extract_deliverable_title(trigger: str, phrase: str) -> str:
    working = re.sub(rf"^.*?\b{re.escape(trigger)}\b", "", phrase, count=1, flags=re.IGNORECASE).strip()
    working = re.sub(r"^(an?|the)\s+", "", working, flags=re.IGNORECASE)
    for stop_phrase in DELIVERABLE_STOP_PHRASES:
        match = re.search(rf"\s{re.escape(stop_phrase)}\s", working, re.IGNORECASE)
        if match:
            working = working[:match.start()]
            break
    working = re.sub(r"[.,;:]$", "", working).strip()
    return to_title_case(working or "Key Deliverable")


def infer_deliverable_type(title: str, sentence: str) -> str:
    source = f"{title} {sentence}".lower()
    rules = [
        ("Dashboard", ("dashboard",)),
        ("API", ("api", "integration")),
        ("Presentation", ("presentation", "deck", "slides")),
        ("Storyline", ("storyline",)),
        ("Brief", ("brief",)),
        ("Analysis", ("analysis", "assessment")),
        ("Report", ("report", "summary")),
        ("Documentation", ("documentation", "specification", "playbook", "manual")),
        ("Analysis", ("roadmap", "plan")),
    ]
    for deliverable_type, keywords in rules:
        if any(keyword in source for keyword in keywords):
            return deliverable_type
    return "Other"


def infer_deliverable_format(title: str, sentence: str) -> str:
    source = f"{title} {sentence}".lower()
    rules = [
        ("pptx", ("ppt", "deck")),
        ("pdf", ("pdf",)),
        ("docx", ("docx", "word")),
        ("html", ("html", "web")),
        ("markdown", ("markdown",)),
        ("json", ("json",)),
    ]
    for deliverable_format, keywords in rules:
        if any(keyword in source for keyword in keywords):
            return deliverable_format
    return "other"


def _find_due_date(sentence: str, reference_year: int | None, today: date) -> str:
    for pattern in (MONTH_PATTERN, ISO_DATE_PATTERN, NUMERIC_DATE_PATTERN):
        match = pattern.search(sentence or "")
        if match:
            return parse_date_candidate(match.group(0), reference_year, today)
    return ""


def _explicit_deliverables(merged: dict, project_dates: dict, today: date) -> list[dict]:
    deliverables = []
    items = merged.get("deliverables")
    if not isinstance(items, list):
        return deliverables

    year_source = project_dates.get("end_date") or project_dates.get("start_date")
    reference_year = int(year_source[:4]) if year_source and year_source[:4].isdigit() else None

    for index, item in enumerate(items):
        if not isinstance(item, dict):
            continue
        title = pick_best_string(item.get("title"), item.get("name"), f"Deliverable {index + 1}")
        raw_due = normalize_whitespace(safe_string(item.get("due_date") or item.get("dueDate")))
        metadata = item.get("metadata") if isinstance(item.get("metadata"), dict) else {}
        description = normalize_whitespace(safe_string(item.get("description") or item.get("brief") or title))
        dependencies = item.get("dependencies")
        deliverables.append({
            "id": slugify(item.get("id") or title, f"deliverable-{index + 1}"),
            "title": title,
            "type": sanitize_enum(
                item.get("type"), DELIVERABLE_TYPE_VALUES,
                infer_deliverable_type(title, safe_string(item.get("description"))),
            ),
            "description": description,
            "status": sanitize_enum(item.get("status"), DELIVERABLE_STATUS_VALUES, "Planned"),
            "due_date": parse_date_candidate(raw_due, reference_year, today) if raw_due else "",
            "quality_score": sanitize_number(item.get("quality_score") or item.get("qualityScore") or 0, 0),
            "dependencies": [dep for dep in dependencies if dep] if isinstance(dependencies, list) else [],
            "metadata": {
                "format": sanitize_enum(metadata.get("format"), DELIVERABLE_FORMAT_VALUES, "other"),
                "assigned_to": normalize_whitespace(
                    safe_string(metadata.get("assigned_to") or metadata.get("assignedTo"))
                ),
                "expected_output": normalize_whitespace(safe_string(
                    metadata.get("expected_output") or metadata.get("expectedOutput")
                    or item.get("description") or title
                )),
            },
        })
    return deliverables


def _clause_for_verb(sentence: str, verb: str) -> str | None:
    lower_sentence = sentence.lower()
    index = lower_sentence.find(f"{verb} ")
    if index == -1:
        return None

    boundary = len(sentence)
    for mark in (".", ";", "!", "?"):
        marker_index = sentence.find(mark, index)
        if marker_index != -1:
            boundary = min(boundary, marker_index)
    clause = sentence[index:boundary]

    # stop where the next verb-led clause begins
    for other_verb in DELIVERABLE_VERBS:
        if other_verb == verb:
            continue
        separators = [f", {other_verb} ", f"; {other_verb} ", f". {other_verb} ", f" and {other_verb} "]
        cut = next((clause.lower().find(s) for s in separators if s in clause.lower()), -1)
        if cut != -1:
            clause = clause[:cut]
            break

    return re.sub(r"^[,\s]+", "", clause).strip()


def _phrased_deliverables(text: str, deliverables: list[dict], today: date) -> None:
    year_match = re.search(r"(20\d{2}|19\d{2})", text)
    reference_year = int(year_match.group(1)) if year_match else None

    for sentence in sentence_tokenise(text):
        for verb in DELIVERABLE_VERBS:
            clause = _clause_for_verb(sentence, verb)
            if clause is None:
                continue
            title = extract_deliverable_title(verb, clause)
            slug = slugify(title)
            if any(item["id"] == slug or item["title"].lower() == title.lower() for item in deliverables):
                continue
            description = clause[:1].upper() + clause[1:]
            deliverables.append({
                "id": slug,
                "title": title,
                "type": infer_deliverable_type(title, clause),
                "description": description,
                "status": "Planned",
                "due_date": _find_due_date(clause, reference_year, today),
                "quality_score": 0,
                "dependencies": [],
                "metadata": {
                    "format": infer_deliverable_format(title, clause),
                    "assigned_to": "",
                    "expected_output": description,
                },
            })


def _spread_due_dates(deliverables: list[dict], project_dates: dict, today: date) -> None:
    if not deliverables:
        return
    start = _to_date(project_dates.get("start_date"))
    end = _to_date(project_dates.get("end_date"))

    interval = DEFAULT_DELIVERABLE_INTERVAL_DAYS
    if start and end:
        span = max((end - start).days, 1)
        interval = max(span // (len(deliverables) + 1), MIN_DELIVERABLE_INTERVAL_DAYS)

    base = start or today
    for index, deliverable in enumerate(deliverables):
        if not deliverable["due_date"]:
            deliverable["due_date"] = (base + timedelta(days=interval * (index + 1))).isoformat()


def _resolve_unique_id(initial_id: str, deliverables: list[dict], current_index: int) -> str:
    candidate = slugify(initial_id, f"deliverable-{current_index + 1}")
    seen = {item["id"] for index, item in enumerate(deliverables) if item.get("id") and index != current_index}
    suffix = 1
    while candidate in seen:
        candidate = f"{candidate}-{suffix}"
        suffix += 1
    return candidate


def _map_dependency_id(dependency: Any, id_map: dict[str, str]) -> str:
    raw = normalize_whitespace(safe_string(dependency))
    if not raw:
        return ""
    slug = slugify(raw)
    for key in (raw, raw.lower(), slug):
        if key in id_map:
            return id_map[key]
    return ""


def _find_by_fragment(fragment: str, deliverables: list[dict]) -> dict | None:
    cleaned = normalize_whitespace(fragment).lower()
    if not cleaned:
        return None
    for item in deliverables:
        if item["id"] in cleaned or slugify(item["title"]) in cleaned:
            return item

    best_match = None
    best_score = 0
    for item in deliverables:
        tokens = [token for token in item["title"].lower().split() if len(token) > 2]
        score = sum(min(len(token), 10) for token in tokens if token in cleaned)
        if score > best_score:
            best_score = score
            best_match = item
    return best_match


def _finalise_deliverables(text: str, deliverables: list[dict]) -> None:
    id_map: dict[str, str] = {}
    for index, deliverable in enumerate(deliverables):
        original_id = deliverable.get("id") or slugify(deliverable["title"], f"deliverable-{index + 1}")
        resolved_id = _resolve_unique_id(original_id, deliverables, index)
        id_map[original_id] = resolved_id
        id_map[original_id.lower()] = resolved_id
        if deliverable["title"]:
            id_map[deliverable["title"].lower()] = resolved_id
            id_map[slugify(deliverable["title"])] = resolved_id

        metadata = deliverable.setdefault("metadata", {})
        deliverable["id"] = resolved_id
        deliverable["type"] = sanitize_enum(deliverable["type"], DELIVERABLE_TYPE_VALUES, "Other")
        deliverable["status"] = sanitize_enum(deliverable["status"], DELIVERABLE_STATUS_VALUES, "Planned")
        metadata["format"] = sanitize_enum(metadata.get("format"), DELIVERABLE_FORMAT_VALUES, "other")
        metadata["assigned_to"] = normalize_whitespace(metadata.get("assigned_to"))
        metadata["expected_output"] = normalize_whitespace(metadata.get("expected_output")) or deliverable["description"]
        deliverable["quality_score"] = sanitize_number(deliverable["quality_score"], 0)
        deliverable["dependencies"] = [dep for dep in dict.fromkeys(deliverable["dependencies"]) if dep]

    for deliverable in deliverables:
        mapped = (_map_dependency_id(dep, id_map) for dep in deliverable["dependencies"])
        deliverable["dependencies"] = [dep for dep in mapped if dep]

    for sentence in sentence_tokenise(text):
        parts = DEPENDENCY_PATTERN.split(sentence.lower(), maxsplit=1)
        if len(parts) != 2 or not parts[0] or not parts[1]:
            continue
        source = _find_by_fragment(parts[0], deliverables)
        target = _find_by_fragment(parts[1], deliverables)
        if source and target and target["id"] not in source["dependencies"]:
            source["dependencies"].append(target["id"])


def extract_deliverables(text: str, merged: dict, project_dates: dict, today: date) -> list[dict]:
    """
    Collect deliverables from explicit data and verb-led phrases.

    Deliverables without a due date are spread across the project span,
    ids are made unique, and dependencies are remapped to final ids and
    extended from "depends on" style sentences.
    """
    deliverables = _explicit_deliverables(merged, project_dates, today)
    _phrased_deliverables(text, deliverables, today)
    _spread_due_dates(deliverables, project_dates, today)
    _finalise_deliverables(text, deliverables)
    return deliverables


def derive_project_tags(text: str, deliverables: list[dict], merged: dict) -> list[str]:
    tags: dict[str, None] = {}
    explicit = merged.get("tags") if isinstance(merged.get("tags"), list) else []
    for tag in explicit:
        cleaned = normalize_whitespace(safe_string(tag)).lower()
        if cleaned:
            tags[cleaned] = None

    lower = text.lower()
    for keyword in TAG_KEYWORDS:
        if keyword in lower:
            tags[keyword] = None

    for deliverable in deliverables:
        for fragment in deliverable["title"].lower().split(" "):
            if len(fragment) > 3:
                tags[fragment] = None
        if deliverable["type"] != "Other":
            tags[deliverable["type"].lower()] = None
    return list(tags)


def clean_description(text: str) -> str:
    return re.sub(r"\s*Forwarded message:?\s*", "", normalize_whitespace(text), count=1, flags=re.IGNORECASE)


def parse_project_description(
    raw_text: Any,
    existing: dict | None = None,
    today: date | None = None,
) -> dict[str, Any]:
    """
    Derive a structured project record from free text.

    Args:
        raw_text: Project brief; JSON objects inside it are merged in
        existing: Partial project data that takes precedence over inference
        today: Reference date for year defaults and due-date spreading

    Returns:
        dict: name, description, start_date, end_date, status, budget_amount,
        currency, budget_currency, budget_type, client_owner, internal_owner,
        priority, project_type, tags and deliverables
    """
    today = today or date.today()
    text = safe_string(raw_text)
    cleaned_text = clean_description(text)

    fragments: dict = {}
    for fragment in iter_embedded_objects(text):
        try:
            fragments = merge_objects(fragments, fragment)
        except RecursionError:
            continue
    merged = merge_objects(existing if isinstance(existing, dict) else {}, fragments)

    dates = extract_dates(cleaned_text, merged, today)
    budget = extract_budget_details(cleaned_text, merged)
    owners = extract_owners(cleaned_text, merged)
    project_type = sanitize_enum(
        pick_best_string(merged.get("project_type"), infer_project_type(cleaned_text)),
        PROJECT_TYPE_VALUES, "other",
    )
    deliverables = extract_deliverables(cleaned_text, merged, dates, today)

    name = pick_best_string(merged.get("name"), merged.get("projectName"))
    if not name:
        name = f"{to_title_case(project_type)} Project" if project_type != "other" else "Project Intake"
    currency = sanitize_enum(budget["currency"], CURRENCY_VALUES, "USD")

    return {
        "name": name,
        "description": pick_best_string(merged.get("description"), cleaned_text) or "Project description not provided.",
        "start_date": dates["start_date"],
        "end_date": dates["end_date"],
        "status": sanitize_enum(
            pick_best_string(merged.get("status"), infer_project_status(cleaned_text)),
            STATUS_VALUES, "Planning",
        ),
        "budget_amount": budget["budget_amount"],
        "currency": currency,
        "budget_currency": currency,
        "budget_type": sanitize_enum(budget["budget_type"], BUDGET_TYPE_VALUES, "Fixed"),
        "client_owner": owners["client_owner"],
        "internal_owner": owners["internal_owner"],
        "priority": sanitize_enum(
            pick_best_string(merged.get("priority"), infer_priority(cleaned_text)),
            PRIORITY_VALUES, "medium",
        ),
        "project_type": project_type,
        "tags": derive_project_tags(cleaned_text, deliverables, merged),
        "deliverables": deliverables,
    }
