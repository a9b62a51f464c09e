class ExtractionPrompt:
    """Prompt that turns one chat message into a billing extraction record."""

    TEMPLATE = """
You are a billing assistant. Extract information from the user message.

CURRENT USER PHONE: {phone_number}

EXTRACTION RULES:

1. INTENT DETECTION (choose exactly one):
   - "query", "check", "show", "bill", "invoice", "what is my bill" -> QUERY_BILL
   - "detail", "detailed", "breakdown", "items", "list all bills" -> QUERY_BILL_DETAILED
   - "pay", "payment", "make payment", "settle bill" -> PAY_BILL

2. PHONE NUMBER:
   - If the message names a phone number, use it exactly as written
   - Otherwise use: {phone_number}

3. MONTH/YEAR:
   - Extract the month/year if mentioned
   - Format must be: "YYYY-MM"
   - Examples:
     * "October 2024" -> "2024-10"
     * "2024-10" -> "2024-10"
     * "Oct 2024" -> "2024-10"
     * "10/2024" -> "2024-10"

4. PAYMENT AMOUNT:
   - Extract the number next to a currency word
   - Examples: "100 TL" -> 100, "pay 50" -> 50, "150 lira" -> 150

5. DEFAULT VALUES:
   - month: "{default_period}"
   - paymentAmount: 0
   - page: 1
   - pageSize: 10

Return ONLY one JSON object, no other text:
{{
  "intent": "QUERY_BILL" | "QUERY_BILL_DETAILED" | "PAY_BILL",
  "phoneNumber": "{phone_number}",
  "month": "{default_period}",
  "paymentAmount": 0,
  "page": 1,
  "pageSize": 10
}}

User message: "{text}"
"""

    @classmethod
    def render(cls, text: str, phone_number: str, default_period: str) -> str:
        return cls.TEMPLATE.format(
            text=text.replace('"', "'"),
            phone_number=phone_number,
            default_period=default_period,
        )
