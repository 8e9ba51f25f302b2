"""Domain constants for cash-flow forecasting."""

FREQUENCY_ONCE = "once"

RECURRENCE_FREQUENCIES = (
    "daily",
    "weekly",
    "biweekly",
    "monthly",
    "quarterly",
    "semiannually",
    "annually",
)

BILL_FREQUENCIES = (
    FREQUENCY_ONCE,
    *(frequency for frequency in RECURRENCE_FREQUENCIES if frequency != "daily"),
)

FORECAST_ITEM_TYPES = (
    "balance",
    "income",
    "bill",
    "expense",
    "adjustment",
)

ANCHOR_ITEM_ID = "initial-balance"
ANCHOR_NAME = "Current Balance"
ANCHOR_DESCRIPTION = "Starting balance"

DEFAULT_FORECAST_DAYS = 30

EXPENSE_CATEGORIES = (
    "Housing",
    "Transportation",
    "Food",
    "Utilities",
    "Insurance",
    "Healthcare",
    "Debt Payments",
    "Personal",
    "Entertainment",
    "Education",
    "Clothing",
    "Gifts/Donations",
    "Travel",
    "Miscellaneous",
)

BILL_CATEGORIES = (
    "Housing",
    "Utilities",
    "Insurance",
    "Subscriptions",
    "Debt",
    "Services",
    "Taxes",
    "Other",
)


__all__ = [
    "FREQUENCY_ONCE",
    "RECURRENCE_FREQUENCIES",
    "BILL_FREQUENCIES",
    "FORECAST_ITEM_TYPES",
    "ANCHOR_ITEM_ID",
    "ANCHOR_NAME",
    "ANCHOR_DESCRIPTION",
    "DEFAULT_FORECAST_DAYS",
    "EXPENSE_CATEGORIES",
    "BILL_CATEGORIES",
]
