"""
Prompt construction for LLM-backed providers.

Translations go into UI string files, so the prompt insists on a complete,
single-language answer with no commentary.
"""

from i18ntrans.core.languages import get_language_name

SYSTEM_TEMPLATE = """You are a professional translator. Follow these rules strictly:
- Translate EVERYTHING from {source} to {target}, no words should be left untranslated
- Technical terms and common suffixes must be fully translated
- Keep placeholders such as {{name}}, %s, {{{{count}}}} and HTML tags unchanged
- Maintain special characters (emojis, symbols) only
- Return only the translated text, without explanations or quotes
- Never mix languages in the output

Examples (Chinese to English):
- "Token使用量" -> "Token usage" (not "Token使用量")
- "API密钥" -> "API key"
- "Webhook配置" -> "Webhook configuration"
"""

USER_TEMPLATE = "Translate this text completely to {target}: {text}"


def build_system_prompt(source_lang: str, target_lang: str) -> str:
    return SYSTEM_TEMPLATE.format(
        source=get_language_name(source_lang),
        target=get_language_name(target_lang),
    )


def build_user_prompt(text: str, target_lang: str) -> str:
    return USER_TEMPLATE.format(target=get_language_name(target_lang), text=text)

