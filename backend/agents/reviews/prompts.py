"""
Review Pipeline Prompt Templates

Contains the prompt builders for the three Gemini calls made by the
review pipeline.

Architecture:
- Pattern: Prompt Chaining (three sequential single-shot calls)
- Model: Gemini 2.5 Flash
- Stage 1: Product extraction (free-form query -> product name or "None")
- Stage 2: Search query planning (product name -> 3 search queries)
- Stage 3: Review summarization (numbered snippets -> cited 3-paragraph text)

All prompts return plain text. Parsing and normalization live in the
service layer (backend/services/).
"""

from typing import Sequence

from backend.schemas.reviews import ReviewSnippet

# Literal the extraction prompt asks Gemini to emit when no product is found
NO_PRODUCT_SENTINEL = "None"


# =============================================================================
# STAGE 1: PRODUCT EXTRACTION
# =============================================================================

def build_product_extraction_prompt(query: str) -> str:
    """Build the prompt that pulls brand + model names out of a user query."""
    return f"""
You are a product name extractor.

Your task: Identify the exact product name(s) mentioned in the user's query, even if the phrasing is indirect or conversational.

Guidelines:
- Focus on brand + model combinations (e.g., "Tesla Model S", "iPhone 17", "Samsung Galaxy S24").
- Output only the product name(s), exactly as they appear in the query (preserve capitalization).
- If multiple products are mentioned, list them separated by commas.
- If no clear product name is present, output "{NO_PRODUCT_SENTINEL}".
- Do NOT include any explanations, reasoning, or extra text.

Search Query:
"{query}"

Output:
"""


# =============================================================================
# STAGE 2: SEARCH QUERY PLANNING
# =============================================================================

def build_search_queries_prompt(product_name: str, query_count: int = 3) -> str:
    """
    Build the prompt asking for review-oriented web search queries.

    The queries are biased toward a marketplace (Amazon), a community forum
    (Reddit) and a video platform (YouTube).
    """
    example_lines = "\n".join(f"search query {i}" for i in range(1, query_count + 1))

    return f"""
You are an intelligent AI assistant. Generate {query_count} concise Google search queries
that would help find product reviews for "{product_name}" across multiple sources.
Focus on Reddit, Amazon, Youtube.
Suggest only popular sources for reviews.
Do not generate any other text except the search queries.
The output format should be:
{example_lines}
Output each query on a new line.
"""


# =============================================================================
# STAGE 3: REVIEW SUMMARIZATION
# =============================================================================

def build_review_context(snippets: Sequence[ReviewSnippet]) -> str:
    """
    Render snippets as the numbered list the summary cites.

    Line i (1-based) reads "(i) {title} - {snippet} [{link}]".
    """
    return "\n".join(
        f"({index}) {item.title} - {item.snippet} [{item.link}]"
        for index, item in enumerate(snippets, start=1)
    )


def build_review_summary_prompt(product_name: str, snippets: Sequence[ReviewSnippet]) -> str:
    """Build the summarization prompt around the numbered review context."""
    context = build_review_context(snippets)

    return f"""
You are an intelligent product review summarizer. Your goal is to create a clear, natural, and professional summary of the reviews provided.

Instructions:
1. Summarize the reviews of "{product_name}" in **three consecutive paragraphs**:
   - The first paragraph should naturally highlight the **common positive aspects** mentioned in the reviews.
   - The second paragraph should naturally highlight the **common negative aspects**.
   - The third paragraph should provide a **recommendation** on whether the user should buy, consider, or ignore the product.
2. Write in **full sentences** with smooth transitions. Do **not** use headings, bullet points, or lists. The text should flow like a human-written article.
3. Cite review sources by their numbers in parentheses corresponding to the numbered list below (e.g., (1, 3, 5)).
4. Keep it concise, informative, and professional. Include only relevant information from the reviews.

Reviews:
{context}

Output example:
"Most reviewers praise the iPhone 15's camera and battery life (1, 3), but note its high price (2, 4). Based on these reviews, potential buyers should consider the iPhone 15 if photography and battery performance are important, but be aware of the cost (1, 2, 3, 4)."
"""
