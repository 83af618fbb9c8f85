"""Tests for vault path and file name derivation."""

from datetime import datetime, timezone

import pytest

from conftest import make_memo, make_resource
from memosync.memos.types import MemoItem, MemoResource
from memosync.sync.paths import (
    format_datetime,
    is_image_file,
    join_vault_path,
    memo_file_name,
    month_directory,
    relative_path,
    resource_file_name,
    sanitize_file_name,
    year_directory,
)


def _memo(**kwargs) -> MemoItem:
    return MemoItem.model_validate(make_memo(1, **kwargs))


# ============================================================================
# Sanitizing
# ============================================================================


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ('a\\b/c:d*e?f"g<h>i|j#k', "a_b_c_d_e_f_g_h_i_j_k"),
        ("  lots   of\n\tspace  ", "lots of space"),
        ("#tag# done", "_tag_ done"),
        ("plain", "plain"),
    ],
)
def test_sanitize_file_name(raw, expected):
    assert sanitize_file_name(raw) == expected


# ============================================================================
# Dates and directories
# ============================================================================


def test_format_datetime_styles():
    dt = datetime(2024, 3, 5, 7, 8, 9, tzinfo=timezone.utc)
    assert format_datetime(dt, "filename") == "2024-03-05 07-08"
    assert format_datetime(dt) == "2024-03-05 07:08:09"


def test_month_directory_zero_pads():
    assert month_directory("memos", datetime(2024, 3, 15)) == "memos/2024/03"
    assert month_directory("notes/memos", datetime(2023, 11, 1)) == "notes/memos/2023/11"


def test_month_directory_uses_timestamp_as_given():
    """A UTC timestamp late on the 31st stays in that month."""
    memo = _memo(create_time="2024-01-31T23:30:00Z")
    assert month_directory("memos", memo.create_time) == "memos/2024/01"


@pytest.mark.parametrize("root", ["", "/"])
def test_empty_root_means_vault_root(root):
    created = datetime(2024, 3, 15)
    assert year_directory(root, created) == "2024"
    assert month_directory(root, created) == "2024/03"


def test_join_vault_path_drops_empty_segments():
    assert join_vault_path("memos/", "2024", "", "03") == "memos/2024/03"
    assert join_vault_path("", "2024/03", "note.md") == "2024/03/note.md"


# ============================================================================
# Memo file names
# ============================================================================


def test_memo_file_name_from_content():
    memo = _memo(content="Meeting notes #work#", create_time="2024-03-15T10:30:00Z")
    assert memo_file_name(memo) == "Meeting notes _work_ (2024-03-15 10-30).md"


def test_memo_file_name_truncates_preview_to_50_chars():
    memo = _memo(content="x" * 80, create_time="2024-03-15T10:30:00Z")
    assert memo_file_name(memo) == "x" * 50 + " (2024-03-15 10-30).md"


def test_memo_file_name_collapses_newlines():
    memo = _memo(content="line one\n\nline two", create_time="2024-03-15T10:30:00Z")
    assert memo_file_name(memo) == "line one line two (2024-03-15 10-30).md"


def test_memo_file_name_falls_back_to_memo_id():
    memo = _memo(content="", create_time="2024-03-15T10:30:00Z")
    assert memo_file_name(memo) == "1 (2024-03-15 10-30).md"


def test_same_preview_different_time_gives_distinct_names():
    first = _memo(content="Daily standup", create_time="2024-03-15T10:30:00Z")
    second = _memo(content="Daily standup", create_time="2024-03-16T10:30:00Z")
    assert memo_file_name(first) != memo_file_name(second)


# ============================================================================
# Resources
# ============================================================================


def test_resource_file_name_prefixes_short_id():
    resource = MemoResource.model_validate(make_resource("abc123", "my photo?.jpg"))
    assert resource.short_id == "abc123"
    assert resource_file_name(resource) == "abc123_my photo_.jpg"


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("photo.jpg", True),
        ("PHOTO.JPEG", True),
        ("scan.webp", True),
        ("anim.GIF", True),
        ("report.pdf", False),
        ("archive.tar.gz", False),
        ("noextension", False),
    ],
)
def test_is_image_file(filename, expected):
    assert is_image_file(filename) is expected


# ============================================================================
# Relative paths
# ============================================================================


def test_relative_path_same_directory_tree():
    assert (
        relative_path("root/2024/05/note.md", "root/2024/05/resources/r1_pic.png")
        == "resources/r1_pic.png"
    )


def test_relative_path_other_month():
    assert (
        relative_path("root/2024/05/note.md", "root/2024/04/resources/r1_pic.png")
        == "../04/resources/r1_pic.png"
    )


def test_relative_path_other_year():
    assert (
        relative_path("root/2024/01/note.md", "root/2023/12/resources/r1_pic.png")
        == "../../2023/12/resources/r1_pic.png"
    )


def test_relative_path_sibling_file():
    assert relative_path("root/2024/05/a.md", "root/2024/05/b.md") == "b.md"
