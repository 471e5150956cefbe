"""Domain services package."""

from .finance import (
    chart_title,
    format_currency,
    group_for_chart,
    month_label,
    parse_date_text,
    summarize,
)
from .hierarchy import (
    ChildMatcher,
    ParentLinkChildMatcher,
    TitlePrefixChildMatcher,
    child_title,
    children_of,
    is_splittable_parent,
    line_items,
)
from .normalization import (
    cell_to_text,
    check_setup,
    classify_kind,
    normalize_record,
    normalize_records,
)
from .products import dedupe_products, resolve_products, to_raw_products
from .reprocessing import ReprocessingGuard
from .splitting import (
    build_split_writes,
    edit_allocation_amount,
    is_split_candidate,
    select_for_split,
    split_candidates,
    validate_before_commit,
)

__all__ = [
    "chart_title",
    "format_currency",
    "group_for_chart",
    "month_label",
    "parse_date_text",
    "summarize",
    "ChildMatcher",
    "ParentLinkChildMatcher",
    "TitlePrefixChildMatcher",
    "child_title",
    "children_of",
    "is_splittable_parent",
    "line_items",
    "cell_to_text",
    "check_setup",
    "classify_kind",
    "normalize_record",
    "normalize_records",
    "dedupe_products",
    "resolve_products",
    "to_raw_products",
    "ReprocessingGuard",
    "build_split_writes",
    "edit_allocation_amount",
    "is_split_candidate",
    "select_for_split",
    "split_candidates",
    "validate_before_commit",
]
