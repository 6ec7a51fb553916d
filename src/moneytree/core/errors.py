"""Error codes and user-friendly messages.

This module defines the error catalog for category and transaction
operations. Each error has:
- code: Unique identifier
- message: Technical description (passed through to API clients and logs)
- user_message: User-friendly explanation
- suggestion: Actionable guidance for the user
- retry_allowed: Whether the error is retryable
"""

# Error catalog for domain operations
ERROR_CATALOG: dict[str, dict] = {
    "CAT_001": {
        "code": "CAT_001",
        "message": "Parent category not found",
        "user_message": "The parent category doesn't exist.",
        "suggestion": "Refresh your categories and pick another parent.",
        "retry_allowed": False,
    },
    "CAT_002": {
        "code": "CAT_002",
        "message": "Cannot create category under this parent",
        "user_message": "You can't add a category under someone else's category.",
        "suggestion": "Choose Income, Expense, or one of your own categories as the parent.",
        "retry_allowed": False,
    },
    "CAT_003": {
        "code": "CAT_003",
        "message": "Cannot create root categories",
        "user_message": "Every category needs a parent.",
        "suggestion": "Place the category under Income, Expense, or one of your categories.",
        "retry_allowed": False,
    },
    "CAT_004": {
        "code": "CAT_004",
        "message": "Cannot modify system categories",
        "user_message": "Income and Expense are built-in and can't be changed.",
        "suggestion": "Create your own category underneath them instead.",
        "retry_allowed": False,
    },
    "CAT_005": {
        "code": "CAT_005",
        "message": "Category not found or not owned by user",
        "user_message": "We couldn't find this category.",
        "suggestion": "Refresh your categories and try again.",
        "retry_allowed": False,
    },
    "CAT_006": {
        "code": "CAT_006",
        "message": "Cannot delete category with children",
        "user_message": "This category still has subcategories.",
        "suggestion": "Delete its subcategories first.",
        "retry_allowed": False,
    },
    "CAT_007": {
        "code": "CAT_007",
        "message": "Category not found",
        "user_message": "We couldn't find this category.",
        "suggestion": "Refresh your categories and try again.",
        "retry_allowed": False,
    },
    "CAT_008": {
        "code": "CAT_008",
        "message": "Cannot use this category",
        "user_message": "You don't have permission to use this category.",
        "suggestion": "Pick one of your own categories.",
        "retry_allowed": False,
    },
    "CAT_009": {
        "code": "CAT_009",
        "message": "Must select a leaf category",
        "user_message": "Transactions can only be filed under a category without subcategories.",
        "suggestion": "Pick the most specific category available.",
        "retry_allowed": False,
    },
    "CAT_010": {
        "code": "CAT_010",
        "message": "Cannot delete category with transactions",
        "user_message": "This category is still used by transactions.",
        "suggestion": "Move or delete those transactions first.",
        "retry_allowed": False,
    },
    "TXN_001": {
        "code": "TXN_001",
        "message": "Transaction not found",
        "user_message": "We couldn't find this transaction.",
        "suggestion": "Please refresh and try again.",
        "retry_allowed": False,
    },
    "AUTH_001": {
        "code": "AUTH_001",
        "message": "Email already registered",
        "user_message": "An account with this email already exists.",
        "suggestion": "Log in instead, or register with a different email.",
        "retry_allowed": False,
    },
    "VAL_001": {
        "code": "VAL_001",
        "message": "Request validation failed",
        "user_message": "Invalid input data",
        "suggestion": "Please check your input and try again",
        "retry_allowed": True,
    },
    "DB_001": {
        "code": "DB_001",
        "message": "Database operation failed",
        "user_message": "A database error occurred",
        "suggestion": "Please try again later",
        "retry_allowed": True,
    },
    "DB_002": {
        "code": "DB_002",
        "message": "Resource already exists",
        "user_message": "This record already exists",
        "suggestion": "Please check if the record was already created",
        "retry_allowed": False,
    },
    "SYS_001": {
        "code": "SYS_001",
        "message": "Internal server error",
        "user_message": "An unexpected error occurred",
        "suggestion": "Please try again later or contact support",
        "retry_allowed": True,
    },
}


def get_error(error_code: str) -> dict:
    """Get error definition by code.

    Args:
        error_code: Error code from the catalog

    Returns:
        Dict with error details (a generic definition for unknown codes)
    """
    if error_code not in ERROR_CATALOG:
        return {
            "code": "UNKNOWN",
            "message": f"Unknown error code: {error_code}",
            "user_message": "An unexpected error occurred.",
            "suggestion": "Please try again. Contact support if the problem persists.",
            "retry_allowed": True,
        }
    return ERROR_CATALOG[error_code]

