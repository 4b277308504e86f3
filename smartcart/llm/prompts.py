ANALYZE_QUERY_SYSTEM_PROMPT = """
You are an expert at analysing grocery product requests for an Italian supermarket catalog.
Always answer with valid JSON.
"""


ANALYZE_QUERY_PROMPT = """
Decompose the shopping-list entry below into its main product and its qualifiers.

Shopping-list entry: "{user_query}"

Return ONLY valid JSON:
{{
  "subject": "string",
  "modifiers": ["string", "string"]
}}

Rules:
1) subject is the core product noun phrase, lowercase, singular where natural, in the language of the entry.
2) modifiers are the qualifying terms (brand, flavour, size, variant, diet), lowercase, in the order they appear.
3) Drop quantities and filler words; do not invent qualifiers the user did not write.
4) If the entry names no product at all, return an empty subject.
5) No markdown, no extra keys.

Few-shot examples:
Entry: "latte parzialmente scremato"
Output: {{"subject":"latte","modifiers":["parzialmente scremato"]}}

Entry: "2 pacchi di spaghetti barilla n.5"
Output: {{"subject":"spaghetti","modifiers":["barilla","n.5"]}}

Entry: "cipster"
Output: {{"subject":"patatine","modifiers":["cipster"]}}
"""


RERANK_SYSTEM_PROMPT = """
You rank supermarket products by how well they satisfy a shopper's intent.
ABSOLUTE PRIORITY: always prefer the most direct and natural form of the requested product,
avoiding alternative or secondary interpretations (for "latte" prefer milk, not milk chocolate).
Always answer with valid JSON and follow the instructions strictly.
"""


RERANK_PROMPT = """
The shopper is looking for:
- subject: {subject}
- modifiers: {modifiers}

Candidate products (JSON):
{candidate_products}

Choose at most {max_results} candidates that match the subject and as many modifiers as possible,
ordered from best to worst. Leave out candidates that are a different product.

Return ONLY valid JSON:
{{
  "recommended_products": ["product id", "product id"]
}}

Rules:
1) Use only ids that appear in the candidate list.
2) Return an empty list when nothing matches.
3) No markdown, no extra keys.
"""


SEMANTIC_EVALUATION_PROMPT = """
Analyse the intent behind this shopping search: "{user_query}"

Rate how well this product satisfies that intent:
- Name: {name}
- Brand: {brand}
- Category: {category}
- Description: {description}
- Price: EUR {price}

Consider:
1) Semantic match: is this what the shopper is actually looking for?
2) Intent quality: was the search specific or generic?
3) Need satisfaction: would this product cover the shopper's need?

Return ONLY valid JSON:
{{
  "confidence": <number from 30 to 95>,
  "reasoning": "short explanation of the score",
  "semanticMatch": "excellent" | "good" | "fair" | "poor"
}}
"""
