from __future__ import annotations

import re
from pathlib import Path
from typing import FrozenSet

import pandas as pd


# Core CRM tools: batch operations + search/get/list.
# Products, emails, communications, calls and engagements are filtered out.
TOOLS_TO_KEEP: FrozenSet[str] = frozenset({
    # Batch - associations
    "crm_batch_create_associations",

    # Batch - companies
    "crm_batch_create_companies",
    "crm_batch_update_companies",

    # Batch - contacts
    "crm_batch_create_contacts",
    "crm_batch_update_contacts",

    # Batch - deals
    "crm_batch_create_deals",
    "crm_batch_update_deals",

    # Batch - leads
    "crm_batch_create_leads",
    "crm_batch_update_leads",

    # Batch - objects
    "crm_batch_create_objects",
    "crm_batch_read_objects",
    "crm_batch_update_objects",

    # Batch - meetings
    "meetings_batch_archive",
    "meetings_batch_create",
    "meetings_batch_update",

    # Batch - notes
    "notes_batch_archive",
    "notes_batch_create",
    "notes_batch_read",
    "notes_batch_update",

    # Batch - tasks
    "tasks_batch_archive",
    "tasks_batch_create",
    "tasks_batch_read",
    "tasks_batch_update",

    # Search/get/list - companies
    "crm_get_company",
    "crm_search_companies",
    "crm_get_company_properties",

    # Search/get/list - objects
    "crm_list_objects",
    "crm_get_object",
    "crm_search_objects",

    # Search/get/list - associations
    "crm_list_association_types",
    "crm_get_associations",

    # Search/get/list - contacts
    "crm_get_contact",
    "crm_search_contacts",
    "crm_get_contact_properties",

    # Search/get/list - leads
    "crm_get_lead",
    "crm_search_leads",
    "crm_get_lead_properties",

    # Search/get/list - deals
    "crm_get_deal",
    "crm_search_deals",
    "crm_get_deal_properties",

    # Search/get/list - meetings
    "meetings_list",
    "meetings_get",
    "meetings_search",

    # Search/get/list - notes
    "notes_get",
    "notes_list",
    "notes_search",

    # Search/get/list - tasks
    "tasks_get",
    "tasks_list",
    "tasks_search",
})

NAME_COLUMNS = ("name", "tool")
TOOL_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def load_allowlist_csv(path: Path) -> FrozenSet[str]:
    """
    Read tool names from a CSV.

    Accepts a "name" or "tool" column, otherwise the first column is used.
    The first row is a header unless it looks like a tool name, so a bare
    one-column list of names keeps its first entry.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Keep-list not found: {path}")

    df = pd.read_csv(path, dtype=str, header=None)
    first = ["" if pd.isna(v) else str(v).strip() for v in df.iloc[0]] if not df.empty else []

    col = 0
    if first and (any(v.lower() in NAME_COLUMNS for v in first) or not TOOL_NAME.match(first[0])):
        lowered = [v.lower() for v in first]
        col = next((lowered.index(c) for c in NAME_COLUMNS if c in lowered), 0)
        df = df.iloc[1:]

    names = df.iloc[:, col].dropna().astype(str).str.strip() if not df.empty else pd.Series(dtype=str)
    names = names[names != ""]
    if names.empty:
        # an empty keep-list would comment out every tool
        raise ValueError(f"Keep-list has no tool names: {path}")
    return frozenset(names)
