"""Domain constants for datasheet finance records."""

REVENUE = "Revenue"
EXPENSE = "Expense"
TRANSACTION_KINDS = (REVENUE, EXPENSE)

DEFAULT_TITLE = "Untitled"
DEFAULT_CATEGORY = "Other"
DEFAULT_MERCHANT = "Unknown"
DEFAULT_DATE = ""
UNKNOWN_DATE_LABEL = "Unknown Date"

ROLE_TITLE = "title"
ROLE_TYPE = "type"
ROLE_AMOUNT = "amount"
ROLE_CATEGORY = "category"
ROLE_MERCHANT = "merchant"
ROLE_DATE = "date"
ROLE_PRODUCT = "product"
ROLE_RECONCILED = "reconciled"

FIELD_ROLES = (
    ROLE_TITLE,
    ROLE_TYPE,
    ROLE_AMOUNT,
    ROLE_CATEGORY,
    ROLE_MERCHANT,
    ROLE_DATE,
    ROLE_PRODUCT,
    ROLE_RECONCILED,
)

SUMMARY_REQUIRED_ROLES = (ROLE_TITLE, ROLE_TYPE, ROLE_AMOUNT)
SPLIT_REQUIRED_ROLES = (ROLE_TITLE, ROLE_TYPE, ROLE_AMOUNT, ROLE_PRODUCT)

GROUP_BY_OPTIONS = ("type", "merchant", "category", "date")
DEFAULT_GROUP_BY = "type"

# Link objects expose their display name and identifier under varying keys.
LINK_NAME_KEYS = ("title", "name", "text", "value")
LINK_ID_KEYS = ("id", "recordId", "key", "_id")

CHILD_TITLE_SEPARATOR = " - "


__all__ = [
    "REVENUE",
    "EXPENSE",
    "TRANSACTION_KINDS",
    "DEFAULT_TITLE",
    "DEFAULT_CATEGORY",
    "DEFAULT_MERCHANT",
    "DEFAULT_DATE",
    "UNKNOWN_DATE_LABEL",
    "ROLE_TITLE",
    "ROLE_TYPE",
    "ROLE_AMOUNT",
    "ROLE_CATEGORY",
    "ROLE_MERCHANT",
    "ROLE_DATE",
    "ROLE_PRODUCT",
    "ROLE_RECONCILED",
    "FIELD_ROLES",
    "SUMMARY_REQUIRED_ROLES",
    "SPLIT_REQUIRED_ROLES",
    "GROUP_BY_OPTIONS",
    "DEFAULT_GROUP_BY",
    "LINK_NAME_KEYS",
    "LINK_ID_KEYS",
    "CHILD_TITLE_SEPARATOR",
]
