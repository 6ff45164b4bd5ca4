import pytest

from toolfilter.allowlist import TOOLS_TO_KEEP, load_allowlist_csv


def test_core_allowlist():
    assert len(TOOLS_TO_KEEP) == 49
    assert "crm_get_company" in TOOLS_TO_KEEP
    assert "tasks_batch_archive" in TOOLS_TO_KEEP
    assert "crm_list_emails" not in TOOLS_TO_KEEP
    assert "products_list" not in TOOLS_TO_KEEP


def test_load_csv_name_column(tmp_path):
    p = tmp_path / "keep.csv"
    p.write_text("group,name\ncompanies, crm_get_company \nnotes,notes_get\nnotes,\n", encoding="utf-8")
    assert load_allowlist_csv(p) == frozenset({"crm_get_company", "notes_get"})


def test_load_csv_first_column_fallback(tmp_path):
    p = tmp_path / "keep.csv"
    p.write_text("Tools To Keep\nmeetings_list\ntasks_get\n", encoding="utf-8")
    assert load_allowlist_csv(p) == frozenset({"meetings_list", "tasks_get"})


def test_load_csv_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_allowlist_csv(tmp_path / "nope.csv")


def test_load_csv_empty(tmp_path):
    p = tmp_path / "keep.csv"
    p.write_text("name\n\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_allowlist_csv(p)


def test_load_csv_headerless_keeps_first_name(tmp_path):
    p = tmp_path / "keep.csv"
    p.write_text("crm_get_company\nnotes_get\n", encoding="utf-8")
    assert load_allowlist_csv(p) == frozenset({"crm_get_company", "notes_get"})


def test_load_csv_tool_header_column(tmp_path):
    p = tmp_path / "keep.csv"
    p.write_text("Tool,owner\ntasks_list,ops\n", encoding="utf-8")
    assert load_allowlist_csv(p) == frozenset({"tasks_list"})
