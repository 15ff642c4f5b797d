"""Question intent classification.

Maps a student's question onto a small, fixed set of intent categories,
each with a template that nudges the model toward a suitable answer
structure (steps, a definition, a comparison, and so on).
"""

from enum import Enum


class QueryIntent(str, Enum):
    """Categories of student questions."""

    HOW_TO = "how_to"
    DEFINITION = "definition"
    COMPARISON = "comparison"
    TROUBLESHOOTING = "troubleshooting"
    BEST_PRACTICE = "best_practice"
    GENERIC = "generic"


# Checked in order; the first intent with a matching keyword wins.
INTENT_KEYWORDS: tuple[tuple[QueryIntent, tuple[str, ...]], ...] = (
    (QueryIntent.HOW_TO, ("help", "how to")),
    (QueryIntent.DEFINITION, ("explain", "what is")),
    (QueryIntent.COMPARISON, ("compare", "difference")),
    (QueryIntent.TROUBLESHOOTING, ("problem", "error", "issue")),
    (QueryIntent.BEST_PRACTICE, ("best practice", "recommend")),
)

INTENT_TEMPLATES: dict[QueryIntent, str] = {
    QueryIntent.HOW_TO: "Please provide step-by-step instructions for: {question}",
    QueryIntent.DEFINITION: (
        "Please explain in simple terms, with an example if relevant: {question}"
    ),
    QueryIntent.COMPARISON: "Please compare and contrast, using a clear structure: {question}",
    QueryIntent.TROUBLESHOOTING: (
        "Please provide a troubleshooting approach for: {question}\n\n"
        "Include:\n"
        "1. Potential causes\n"
        "2. Step-by-step solutions\n"
        "3. Prevention tips"
    ),
    QueryIntent.BEST_PRACTICE: (
        "Please provide best practices and recommendations for: {question}\n\n"
        "Include:\n"
        "1. Industry standards\n"
        "2. Common pitfalls to avoid\n"
        "3. Practical examples"
    ),
    QueryIntent.GENERIC: "{question}",
}


def classify_intent(question: str) -> QueryIntent:
    """Classify a question by keyword, case-insensitively."""
    if not question:
        return QueryIntent.GENERIC

    lowered = question.lower()
    for intent, keywords in INTENT_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return intent
    return QueryIntent.GENERIC


def enhance_question(question: str, intent: QueryIntent | None = None) -> str:
    """Wrap a question in the template for its intent.

    Args:
        question: Original question
        intent: Precomputed intent (classified from the question if omitted)

    Returns:
        The templated question, the question itself for generic intent,
        or an empty string for an empty question
    """
    if not question:
        return ""
    intent = intent or classify_intent(question)
    return INTENT_TEMPLATES[intent].format(question=question)
