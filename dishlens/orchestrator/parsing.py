"""
Model reply normalization.

The model is prompted for one JSON object but replies are free text, so the
reply goes through three tiers and the first one that yields a result wins:

  1. strict JSON  greedy `{...}` substring, json.loads, shape check
  2. scrape       `name:` / `region:` label lines plus bulleted sections
  3. placeholder  fixed "unable to identify" result (never an error)
"""
import json
import re
from typing import List, Optional, Tuple

from dishlens.orchestrator.contracts import (
    DEFAULT_REGION,
    UNKNOWN_DISH,
    DishResult,
    unidentified_result,
)

PATH_JSON = "json"
PATH_SCRAPE = "scrape"
PATH_PLACEHOLDER = "placeholder"

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")

# <decoration> label [:] value, or <words> label : value ("Dish Name: ...")
_LABEL_LINE = (
    r"^(?:[ \t*#_]*{label}\b[ \t*_]*:?|[^\n]*?\b{label}\b[ \t*_]*:)"
    r"[ \t*_]*(?P<value>[^\n]*)$"
)
_NAME_LINE = re.compile(_LABEL_LINE.format(label="name"), re.IGNORECASE | re.MULTILINE)
_REGION_LINE = re.compile(_LABEL_LINE.format(label="region"), re.IGNORECASE | re.MULTILINE)

_LIST_MARKER = re.compile(r"^(?:[-•]|\d+\.)")

SECTION_INGREDIENTS = "Ingredients"
SECTION_INSTRUCTIONS = "Instructions"
SECTION_FUN_FACTS = "Fun Facts"


def parse_strict_json(text: str) -> Optional[DishResult]:
    match = _JSON_OBJECT.search(text)
    if not match:
        return None
    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError:
        return None
    if not _has_dish_shape(data):
        return None
    return DishResult(
        name=data["name"].strip() or UNKNOWN_DISH,
        region=data.get("region") or DEFAULT_REGION,
        ingredients=[str(item) for item in data["ingredients"]],
        instructions=[str(item) for item in data["instructions"]],
        fun_facts=[str(item) for item in data["funFacts"]],
    )


def _has_dish_shape(data) -> bool:
    return (
        isinstance(data, dict)
        and isinstance(data.get("name"), str)
        and ("region" not in data or isinstance(data["region"], str))
        and isinstance(data.get("ingredients"), list)
        and isinstance(data.get("instructions"), list)
        and isinstance(data.get("funFacts"), list)
    )


def extract_label(text: str, pattern: re.Pattern) -> Optional[str]:
    for match in pattern.finditer(text):
        value = match.group("value").strip().strip("*_").strip()
        if value:
            return value
    return None


def extract_section(text: str, label: str) -> List[str]:
    """Bulleted or numbered lines following the first occurrence of `label`.

    Leading blank lines are skipped; the first non-list line ends the run.
    """
    start = text.find(label)
    if start == -1:
        return []

    lines = text[start + len(label):].split("\n")[1:]
    items: List[str] = []
    for raw in lines:
        line = raw.strip()
        if not line:
            continue
        marker = _LIST_MARKER.match(line)
        if not marker:
            break
        item = line[marker.end():].strip()
        if item:
            items.append(item)
    return items


def scrape_sections(text: str) -> DishResult:
    return DishResult(
        name=extract_label(text, _NAME_LINE) or UNKNOWN_DISH,
        region=extract_label(text, _REGION_LINE) or DEFAULT_REGION,
        ingredients=extract_section(text, SECTION_INGREDIENTS),
        instructions=extract_section(text, SECTION_INSTRUCTIONS),
        fun_facts=extract_section(text, SECTION_FUN_FACTS),
    )


def normalize_with_path(text: str) -> Tuple[DishResult, str]:
    result = parse_strict_json(text)
    if result is not None:
        return result, PATH_JSON

    result = scrape_sections(text)
    if result.name != UNKNOWN_DISH or result.ingredients or result.instructions:
        return result, PATH_SCRAPE

    return unidentified_result(), PATH_PLACEHOLDER
