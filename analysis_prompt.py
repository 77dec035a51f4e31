from models import PageSignals


SEO_SYSTEM_PROMPT = """You are an SEO expert. Analyze websites and provide a score from 1-100 where 100 is perfect SEO. Score based on these criteria:
- Title (20 points): Exists, 50-60 chars, relevant
- Meta Description (20 points): Exists, 150-160 chars, informative
- H1 Usage (20 points): Exactly one H1 tag
- Images (20 points): All images have alt text
- Link Structure (20 points): Reasonable number of internal/external links

Respond ONLY with valid JSON: {"score": number, "analysis": string[]}"""


def get_seo_prompt(signals: PageSignals) -> str:
    """
    Build the user message describing the extracted page signals.

    Args:
        signals: PageSignals extracted from the page

    Returns:
        Prompt text embedding the signal values
    """
    return f"""Analyze the following SEO data and respond ONLY with valid JSON in the following format: {{"score": number, "analysis": string[]}}:
Title: {signals.title}
Meta Description: {signals.meta_description or 'Not found'}
Number of H1 Tags: {signals.h1_count}
Images without Alt Text: {signals.images_without_alt}
Internal Links: {signals.internal_links}
External Links: {signals.external_links}"""


def get_seo_messages(signals: PageSignals) -> tuple[str, list]:
    """Return the (system, messages) pair for the Messages API"""
    return SEO_SYSTEM_PROMPT, [{"role": "user", "content": get_seo_prompt(signals)}]
