class Replies:
    """Fixed user-facing reply text."""

    QUERY_RATE_LIMIT = (
        "🛑 **Rate Limit Reached**\n"
        "You have exceeded the daily limit (3 queries) for checking bills."
    )
    SYSTEM_RATE_LIMIT = "🛑 **System Rate Limit Reached**\nPlease try again later."
    UNRECOGNIZED = '🤖 Command not recognized. Try "Check my bill" or "Pay bill".'
    NO_DETAILED_BILLS = "📭 No detailed bills found."
    DETAILED_BILLS_FAILED = "Cannot retrieve detailed bills"
    PAYMENT_FAILED = "Payment processing failed. Please try again."
    PAYMENT_STATUS_DEFAULT = "Processing Complete"
    CONNECTIVITY = "❌ Cannot reach the billing service. Please try again later."
    PROCESSING_ERROR = "❌ **PROCESSING ERROR**\nError: {error}"
