"""README marker-block patching.

The stats block lives between a start and an end marker comment. The block
written back carries both markers, so repeated runs replace the same region.
"""

import re


class MissingMarkersError(Exception):
    """Raised when the host document lacks the start or end marker."""


def render_readme_block(image_path: str, start_marker: str, end_marker: str) -> str:
    """Build the marker-wrapped block that references the stats card."""
    return (
        f"{start_marker}\n"
        '<p align="center">\n'
        f'  <img src="{image_path}" alt="GitHub stats preview" />\n'
        "</p>\n"
        f"{end_marker}"
    )


def inject_block(content: str, block: str, start_marker: str, end_marker: str) -> str:
    """Replace the first start..end marker region of content with block.

    Raises:
        MissingMarkersError: If either marker is absent from content
    """
    if start_marker not in content or end_marker not in content:
        raise MissingMarkersError(
            f"Document is missing required markers {start_marker} / {end_marker}."
        )

    pattern = re.compile(
        f"{re.escape(start_marker)}.*?{re.escape(end_marker)}", flags=re.DOTALL
    )
    updated, replaced = pattern.subn(lambda _: block, content, count=1)
    if not replaced:
        # Both markers exist but the end marker only appears before the start
        raise MissingMarkersError(
            f"Document has {end_marker} before {start_marker}; no region to replace."
        )
    return updated
