"""
Content index provider.

Loads content/projects/*.mdx and content/blog/*.mdx, validates their frontmatter
against the collection schema, and writes the JSON indexes consumed by the page
renderers. Records are flat dicts: every frontmatter field, then ``slug`` (the file
stem) and ``content`` (the MDX body), which always take precedence.
"""
from __future__ import annotations

import json
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, NamedTuple, Tuple

PROJECT_SCHEMA = {
    "title": "string",
    "date": "date",
    "tags": "string[]",
    "summary": "string",
    "caseStudyData": "string",
    "caseStudyMethods": "string",
    "caseStudyResults": "string",
    "caseStudyReproducibility": "string",
    "caseStudyReflection": "string",
    "tech": "string[]",
    "repo": "string",
    "cover": "string",
    "gallery": "string[]",
    "status": "string",
}

BLOG_SCHEMA = {
    "title": "string",
    "date": "date",
    "tags": "string[]",
    "summary": "string",
    "readingTime": "number",
}

_KEY_LINE = re.compile(r"^([A-Za-z][\w-]*):(?:\s*(.*))?$")
_LIST_ITEM = re.compile(r"^\s+-\s+")
_NUMBER = re.compile(r"^-?\d+(\.\d+)?$")
_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class ContentError(ValueError):
    """Malformed MDX source or frontmatter that violates its schema"""


class ContentIndex(NamedTuple):
    projects: List[Dict[str, Any]]
    blog: List[Dict[str, Any]]


def parse_scalar(value: str):
    trimmed = value.strip()
    if len(trimmed) >= 2 and trimmed[0] == trimmed[-1] and trimmed[0] in "\"'":
        return trimmed[1:-1]
    if trimmed == "true":
        return True
    if trimmed == "false":
        return False
    if _NUMBER.match(trimmed):
        return float(trimmed) if "." in trimmed else int(trimmed)
    if trimmed.startswith("[") and trimmed.endswith("]"):
        inner = trimmed[1:-1].strip()
        if not inner:
            return []
        return [str(parse_scalar(part)) for part in inner.split(",")]
    return trimmed


def parse_frontmatter(block: str) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    active_list_key = None

    for line in block.split("\n"):
        if not line.strip():
            continue

        if _LIST_ITEM.match(line):
            if not active_list_key:
                raise ContentError(f'Invalid list entry without a key: "{line}"')
            data[active_list_key].append(str(parse_scalar(_LIST_ITEM.sub("", line, count=1))))
            continue

        match = _KEY_LINE.match(line)
        if not match:
            raise ContentError(f'Invalid frontmatter line: "{line}"')

        key, raw_value = match.group(1), (match.group(2) or "").strip()
        if not raw_value:
            data[key] = []
            active_list_key = key
            continue

        data[key] = parse_scalar(raw_value)
        active_list_key = None

    return data


def split_frontmatter(source: str) -> Tuple[str, str]:
    lines = source.split("\n")
    if not lines or lines[0].strip() != "---":
        raise ContentError("MDX file must start with a frontmatter block delimited by ---")

    for index in range(1, len(lines)):
        if lines[index].strip() == "---":
            return "\n".join(lines[1:index]), "\n".join(lines[index + 1:]).strip()

    raise ContentError("Frontmatter closing delimiter (---) not found")


def _is_valid_date(value) -> bool:
    if not isinstance(value, str) or not _DATE.match(value):
        return False
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        return False
    return True


def assert_schema(entry: Dict[str, Any], schema: Dict[str, str], source: str):
    for field, expected in schema.items():
        if field not in entry:
            raise ContentError(f'{source}: missing required frontmatter field "{field}"')
        value = entry[field]

        if expected == "string":
            if not isinstance(value, str) or not value.strip():
                raise ContentError(f'{source}: field "{field}" must be a non-empty string')
        elif expected == "number":
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                raise ContentError(f'{source}: field "{field}" must be a positive number')
        elif expected == "date":
            if not _is_valid_date(value):
                raise ContentError(f'{source}: field "{field}" must use YYYY-MM-DD format')
        elif expected == "string[]":
            if (
                not isinstance(value, list)
                or not value
                or any(not isinstance(item, str) or not item.strip() for item in value)
            ):
                raise ContentError(f'{source}: field "{field}" must be a non-empty string array')


def parse_mdx_file(path: Path) -> Tuple[Dict[str, Any], str]:
    frontmatter, body = split_frontmatter(path.read_text(encoding="utf-8"))
    if not body:
        raise ContentError(f"{path}: MDX body must not be empty")
    return parse_frontmatter(frontmatter), body


def load_collection(collection_dir: Path, schema: Dict[str, str]) -> List[Dict[str, Any]]:
    """Validated records from ``collection_dir``, newest first"""
    collection_dir = Path(collection_dir)
    if not collection_dir.is_dir():
        logging.warning(f"⚠ Content collection not found: {collection_dir}")
        return []

    entries = []
    for path in sorted(collection_dir.glob("*.mdx")):
        frontmatter, body = parse_mdx_file(path)
        assert_schema(frontmatter, schema, str(path))
        entries.append({**frontmatter, "slug": path.stem, "content": body})

    return sorted(entries, key=lambda entry: entry["date"], reverse=True)


def generate_content_indexes(content_root, output_dir) -> ContentIndex:
    """Load both collections and write projects-index.json / blog-index.json"""
    content_root = Path(content_root)
    output_dir = Path(output_dir)

    projects = load_collection(content_root / "projects", PROJECT_SCHEMA)
    blog = load_collection(content_root / "blog", BLOG_SCHEMA)

    output_dir.mkdir(parents=True, exist_ok=True)
    for name, records in (("projects-index.json", projects), ("blog-index.json", blog)):
        with open(output_dir / name, "w", encoding="utf-8") as f:
            f.write(json.dumps(records, indent=2, ensure_ascii=False) + "\n")

    logging.info(f"✓ Content indexes: {len(projects)} projects, {len(blog)} posts -> {output_dir}")
    return ContentIndex(projects=projects, blog=blog)
