"""
sections:
    Managed sections inside aggregate markdown files (e.g. ~/.codex/AGENTS.md).

Merged templates live inside a managed region:

    <!-- mindkit:start -->
    <!-- mindkit:commands:create-prd:start -->
    ## PRD Creation

    ...content...
    <!-- mindkit:commands:create-prd:end -->
    <!-- mindkit:end -->

Text outside the region belongs to the user and is never touched.
Sections are kept sorted by template name. Anything inside the region that
is not a complete section is kept verbatim after the sections.
"""

from __future__ import annotations

import re

REGION_START = "<!-- mindkit:start -->"
REGION_END = "<!-- mindkit:end -->"
SECTION_START_FMT = "<!-- mindkit:{component_type}:{name}:start -->"
SECTION_END_FMT = "<!-- mindkit:{component_type}:{name}:end -->"

# Names may hold spaces or colons; the matching end marker is found literally.
START_MARKER_PATTERN = re.compile(r"<!-- mindkit:([a-z]+):([^\n]+?):start -->")


def _markers(component_type: str, name: str) -> tuple[str, str]:
    start = SECTION_START_FMT.format(component_type=component_type, name=name)
    end = SECTION_END_FMT.format(component_type=component_type, name=name)
    return start, end


def _parse_region(region: str) -> tuple[dict[str, tuple[str, str]], list[str]]:
    """
    Split a region body into complete sections and leftover text.

    Returns:
        Tuple of (name -> (component type, full marked block), leftover chunks)
    """
    sections: dict[str, tuple[str, str]] = {}
    leftovers: list[str] = []
    consumed = 0
    search_from = 0

    while True:
        match = START_MARKER_PATTERN.search(region, search_from)
        if match is None:
            break
        component_type, name = match.groups()
        _, end = _markers(component_type, name)
        end_idx = region.find(end, match.end())
        if end_idx == -1:
            search_from = match.end()
            continue

        before = region[consumed : match.start()].strip()
        if before:
            leftovers.append(before)
        block_end = end_idx + len(end)
        sections[name] = (component_type, region[match.start() : block_end])
        consumed = search_from = block_end

    tail = region[consumed:].strip()
    if tail:
        leftovers.append(tail)
    return sections, leftovers


def extract_sections(content: str) -> dict[str, tuple[str, str]]:
    """
    Extract managed sections from file content.

    Returns:
        Dict of name -> (component type, full marked block)
    """
    region = _region_body(content)
    if region is None:
        return {}
    sections, _ = _parse_region(region)
    return sections


def list_sections(content: str, component_type: str | None = None) -> list[str]:
    """List section names, optionally only those of one component type."""
    return sorted(
        name
        for name, (ctype, _) in extract_sections(content).items()
        if component_type is None or ctype == component_type
    )


def _region_body(content: str) -> str | None:
    if REGION_START not in content or REGION_END not in content:
        return None
    start_idx = content.index(REGION_START) + len(REGION_START)
    end_idx = content.index(REGION_END)
    return content[start_idx:end_idx]


def upsert_section(
    content: str,
    component_type: str,
    name: str,
    header: str,
    body: str,
) -> str:
    """Insert or replace one named section, leaving the others intact."""
    start, end = _markers(component_type, name)
    block = f"{start}\n## {header}\n\n{body.strip()}\n{end}"

    region_body = _region_body(content)
    parsed, leftovers = _parse_region(region_body) if region_body is not None else ({}, [])
    sections = {n: b for n, (_, b) in parsed.items()}
    sections[name] = block
    blocks = [sections[n] for n in sorted(sections)] + leftovers
    region = REGION_START + "\n" + "\n\n".join(blocks) + "\n" + REGION_END

    if region_body is not None:
        start_idx = content.index(REGION_START)
        end_idx = content.index(REGION_END) + len(REGION_END)
        return content[:start_idx] + region + content[end_idx:]

    prefix = content.rstrip()
    if prefix:
        return f"{prefix}\n\n{region}\n"
    return f"{region}\n"
