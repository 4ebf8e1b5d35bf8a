"""Error codes and user-friendly messages.

Each error has:
- code: Unique identifier
- message: Technical description (for logs)
- user_message: User-friendly explanation
- suggestion: Actionable guidance for the user
- retry_allowed: Whether the error is retryable
"""

ERROR_CATALOG: dict[str, dict] = {
    "API_001": {
        "code": "API_001",
        "message": "Invalid request: expense IDs must be a non-empty list",
        "user_message": "Please provide valid expense IDs.",
        "suggestion": "Select at least one expense and try again.",
        "retry_allowed": False,
    },
    "API_002": {
        "code": "API_002",
        "message": "Expense not found",
        "user_message": "We couldn't find this expense.",
        "suggestion": "Please refresh and try again.",
        "retry_allowed": False,
    },
    "LLM_001": {
        "code": "LLM_001",
        "message": "Semantic categorization provider failed",
        "user_message": "The AI categorization service is unavailable.",
        "suggestion": "Expenses were categorized with keyword rules instead.",
        "retry_allowed": True,
    },
    "CAT_001": {
        "code": "CAT_001",
        "message": "No categories available for categorization",
        "user_message": "There are no categories to choose from.",
        "suggestion": "Create at least one category and try again.",
        "retry_allowed": False,
    },
    "DB_001": {
        "code": "DB_001",
        "message": "Database write failed",
        "user_message": "We couldn't save your changes due to a database error.",
        "suggestion": "Please try again in a few moments.",
        "retry_allowed": True,
    },
    "VAL_001": {
        "code": "VAL_001",
        "message": "Request data failed validation",
        "user_message": "Invalid input data",
        "suggestion": "Please check your input and try again",
        "retry_allowed": True,
    },
}


def get_error(error_code: str) -> dict:
    """Get error definition by code.

    Unknown codes return a generic definition instead of raising.

    Args:
        error_code: Error code from the catalog

    Returns:
        Dict with error details
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

