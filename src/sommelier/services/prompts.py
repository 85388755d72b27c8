from typing import List, Optional, Tuple

from sommelier.models.brand import BrandConfig, DEFAULT_BRAND
from sommelier.services.projection import FieldSet

SELECTED_MODE = "selected"
ALL_MODE = "all"

SELECTED_MODE_PROMPTS = (
    "What food pairs best with this wine?",
    "Explain this wine like I’m new to wine.",
    "How should I serve this (temp, glass, decant)?",
    "Is this better for a dinner party or a cozy night in?",
    "What’s one similar wine on your list I should try next?",
)

ALL_MODE_PROMPTS = (
    "I’m making steak tonight — which wine should I choose?",
    "Recommend a wine under $30 for a gift.",
    "I like fruity, not too sweet — what should I buy?",
    "Which wine is the best crowd-pleaser for a dinner party?",
    "I usually drink white — suggest an easy red to start with.",
)


def suggested_prompts(mode: Optional[str] = None) -> Tuple[str, List[str]]:
    """Return the requested mode (lowercased) and its starter questions.

    Anything other than "all" gets the selected-wine questions.
    """
    mode = (mode or SELECTED_MODE).strip().lower() or SELECTED_MODE
    if mode == ALL_MODE:
        return mode, list(ALL_MODE_PROMPTS)
    return mode, list(SELECTED_MODE_PROMPTS)


def build_sommelier_instructions(
    brand: BrandConfig = DEFAULT_BRAND,
    catalog_fields: FieldSet = FieldSet.CATALOG,
    wine_fields: FieldSet = FieldSet.FULL,
) -> str:
    """Build the system instructions sent with every question.

    The field lists are taken from the same field sets used to build the
    payload, so the model is told exactly which keys it will receive.
    """
    return "\n".join([
        f"You are the AI Sommelier for {brand.winery_name}.",
        f"Brand tagline: {brand.short_tagline}",
        f"Voice/tone: {brand.tone}",
        "",
        "VOICE GUIDELINES:",
        *[f"- {guideline}" for guideline in brand.voice_guidelines],
        "",
        "GOALS:",
        *[f"- {goal}" for goal in brand.goals],
        "",
        "DATA RULES:",
        "- You will receive JSON with two keys: catalog (array) and current_wine (object or null).",
        f"- Each catalog entry has: {', '.join(catalog_fields.fields)}.",
        f"- current_wine, when present, has: {', '.join(wine_fields.fields)}.",
        "- Use ONLY this data. If something is missing, say you don’t have that info.",
        "- Never invent critic scores, exact oak %, soil, appellation rules, production size, etc. unless provided.",
        "",
        "MODE BEHAVIOR:",
        "- If the question is about 'this wine' and current_wine is present: focus on current_wine.",
        "- If the question is general (food/occasion/budget/style): consider the full catalog and recommend 1–3 wines by name.",
        "- If you recommend multiple wines, keep each recommendation short and clearly labeled.",
        "",
        "OUTPUT FORMAT (always use this structure):",
        "1) Direct answer (one sentence).",
        "2) Recommendation(s):",
        "   - If single wine: 2–4 sentences describing taste/style + why it fits the question.",
        "   - If 2–3 wines: bullet list with 1–2 sentences each.",
        "3) Food pairing ideas (2–4 specific dishes) if relevant.",
        "4) Serving tips (temp, glass, decant if useful). Keep it brief.",
        "5) Optional gentle upsell: suggest one upgrade or add-on choice when appropriate (e.g., Reserve for a special occasion).",
    ])
