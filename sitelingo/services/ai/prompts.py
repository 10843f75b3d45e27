"""
System prompts for provider tasks.

Each task (translate, extend, optimize, shorten) gets its own rules. All
prompts end with the instruction to return only the transformed text,
because the result is written straight into the site.
"""

from __future__ import annotations

from dataclasses import dataclass

from sitelingo.core.languages import Language, get_language_name
from sitelingo.core.models import Operation


DEFAULT_DOMAIN = "architecture and construction"


@dataclass(frozen=True)
class SystemPrompt:
    """A system message plus the sampling parameters that go with it."""
    
    content: str
    task: Operation
    language: str  # Target language for translate, working language otherwise
    temperature: float = 0.3
    max_tokens: int = 2000


def _context_line(context: str) -> str:
    return f"\nContext: {context}" if context else ""


def build_translation_prompt(
    source: Language,
    target: Language,
    context: str = "",
    domain: str = DEFAULT_DOMAIN,
    temperature: float = 0.3,
    max_tokens: int = 2000,
) -> SystemPrompt:
    """Prompt for translating site content between two languages."""
    source_name = get_language_name(source.value)
    target_name = get_language_name(target.value)
    
    content = f"""You are a professional translator specializing in {domain} terminology.
Translate the user's text from {source_name} to {target_name}.

Requirements:
1. Perfect grammar and spelling in {target_name}
2. Keep established professional terminology where appropriate
3. Formal, professional tone
4. Keep technical terms that are commonly used as-is in {target_name}
5. Return ONLY the translated text, without quotes, explanations or notes{_context_line(context)}"""
    
    return SystemPrompt(
        content=content,
        task=Operation.TRANSLATE,
        language=target.value,
        temperature=temperature,
        max_tokens=max_tokens,
    )


# Rules per optimization mode, appended to the shared header
_OPTIMIZATION_RULES: dict[Operation, tuple[str, list[str]]] = {
    Operation.EXTEND: (
        "content writer",
        [
            "Add relevant details and context",
            "Make the text 2-3 times longer",
            "Make the text more engaging and descriptive",
            "Keep technical terms accurate",
        ],
    ),
    Operation.OPTIMIZE: (
        "content editor",
        [
            "Improve clarity and readability",
            "Fix grammar and spelling errors",
            "Keep the length similar",
            "Do not change the meaning",
        ],
    ),
    Operation.SHORTEN: (
        "content editor",
        [
            "Keep all key information",
            "Remove redundancy and filler words",
            "Make the text 30-50% shorter",
            "Ensure perfect grammar and spelling",
        ],
    ),
}


def build_optimization_prompt(
    operation: Operation,
    language: Language,
    context: str = "",
    domain: str = DEFAULT_DOMAIN,
    temperature: float = 0.7,
    max_tokens: int = 2000,
) -> SystemPrompt:
    """Prompt for rewriting text in its own language."""
    role, rules = _OPTIMIZATION_RULES[operation]
    lang_name = get_language_name(language.value)
    
    numbered = [
        f"Keep the same language ({lang_name}), do not translate",
        "Keep the professional tone",
        *rules,
        "Return ONLY the resulting text, no titles, labels or commentary",
        "Do not describe what was changed",
    ]
    body = "\n".join(f"{i}. {rule}" for i, rule in enumerate(numbered, start=1))
    
    content = f"""You are a professional {role} specializing in {domain}.
Your task is to {operation.value} the user's {lang_name} text.

Requirements:
{body}{_context_line(context)}"""
    
    return SystemPrompt(
        content=content,
        task=operation,
        language=language.value,
        temperature=temperature,
        max_tokens=max_tokens,
    )
