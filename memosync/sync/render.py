"""Turn a memo into the markdown body written to the vault."""

import re

from loguru import logger

from memosync.memos.types import MemoItem, MemoResource
from memosync.sync.paths import format_datetime, is_image_file, relative_path

# A tag is "#name" closed by a second "#", whitespace, or the end of the text.
# "name" cannot contain "#" or whitespace, so markdown headings never match.
TAG_PATTERN = re.compile(r"#([^#\s]+)(?:#|(?=\s)|$)")


def normalize_tags(content: str) -> str:
    """Rewrite ``#tag#`` to ``#tag``; everything else is left untouched."""
    return TAG_PATTERN.sub(lambda m: f"#{m.group(1)}", content)


def extract_tags(content: str) -> list[str]:
    """Tag names found in raw content, in order of first appearance."""
    tags: list[str] = []
    for match in TAG_PATTERN.finditer(content):
        tag = match.group(1)
        if tag not in tags:
            tags.append(tag)
    return tags


def split_resources(resources: list[MemoResource]) -> tuple[list[MemoResource], list[MemoResource]]:
    """Partition attachments into (images, other files), keeping order."""
    images = [r for r in resources if is_image_file(r.filename)]
    others = [r for r in resources if not is_image_file(r.filename)]
    return images, others


def render_memo(memo: MemoItem, file_path: str, local_paths: dict[str, str | None]) -> str:
    """
    Build the complete document for one memo.

    Args:
        memo: The memo record.
        file_path: Vault path the document will be written to.
        local_paths: Resource name -> vault path of the downloaded file, or
            None when the download failed.

    Returns:
        Markdown body: normalized content, image embeds, an attachment list
        and a folded properties callout.
    """
    document = normalize_tags(memo.content)

    if memo.resources:
        images, others = split_resources(memo.resources)

        if images:
            document += "\n\n"
            for image in images:
                link = _link_target(file_path, image, local_paths)
                if link is None:
                    logger.warning(f"Failed to download image: {image.filename}")
                    continue
                document += f"![{image.filename}]({link})\n"

        if others:
            document += "\n\n### Attachments\n"
            for attachment in others:
                link = _link_target(file_path, attachment, local_paths)
                if link is None:
                    logger.warning(f"Failed to download file: {attachment.filename}")
                    continue
                document += f"- [{attachment.filename}]({link})\n"

    return document + render_properties(memo)


def render_properties(memo: MemoItem) -> str:
    """Folded Obsidian callout recording where the document came from."""
    tags = extract_tags(memo.content)

    lines = [
        "",
        "",
        "---",
        "> [!note]- Memo Properties",
        f"> - Created: {format_datetime(memo.create_time)}",
        f"> - Updated: {format_datetime(memo.update_time)}",
        "> - Type: memo",
    ]
    if tags:
        lines.append(f"> - Tags: [{', '.join(tags)}]")
    lines.append(f"> - ID: {memo.name}")
    lines.append(f"> - Visibility: {memo.visibility.lower()}")
    return "\n".join(lines) + "\n"


def _link_target(file_path: str, resource: MemoResource, local_paths: dict[str, str | None]) -> str | None:
    local_path = local_paths.get(resource.name)
    if not local_path:
        return None
    return relative_path(file_path, local_path)
