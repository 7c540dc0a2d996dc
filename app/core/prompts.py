"""System prompt composition for the village guide.

The final system message is assembled in a fixed order:
mission → tone (persona or default voice) → language directive → retrieved context.
"""

from app.core.schemas_conversations import Persona
from app.core.schemas_knowledge import KnowledgePassage

LANGUAGE_NAMES = {
    "en": "English",
    "it": "Italian",
    "es": "Spanish",
}

DEFAULT_LANGUAGE = "en"

MISSION = """You are an AI tourism assistant for Muro Lucano and the Italian villages of Basilicata. Your role is to tell stories, explain monuments, answer questions about culture and history, and create memorable experiences for tourists.

Guidelines:
- Be engaging and conversational, like a friendly local guide
- Tell stories that bring history to life
- Share legends, cultural insights, and interesting details
- Be factual but entertaining
- When given context, use it to provide accurate information
- Mention specific monuments, dates, and historical figures from the context
- If you don't have enough context, offer to tell them about other attractions
- Create a personal connection with the place
- Write plain spoken sentences with no markdown, lists or emoji, because replies may be read aloud"""

DEFAULT_TONE = """Voice: a professional, warm local guide. Speak with quiet pride about the village, welcome the visitor personally, and keep answers clear and friendly."""

CONTEXT_HEADER = "Relevant information from knowledge base:"

FALLBACK_MESSAGES = {
    "en": "I'm having trouble connecting right now, but I'd love to help you explore this place. Could you tell me more about what you'd like to know?",
    "it": "Al momento ho difficoltà di connessione, ma mi piacerebbe aiutarti a esplorare questo luogo. Puoi dirmi di più su cosa vorresti sapere?",
    "es": "Estoy teniendo problemas de conexión en este momento, pero me encantaría ayudarte a explorar este lugar. ¿Puedes contarme más sobre lo que te gustaría saber?",
}


def language_name(code: str) -> str:
    """Human-readable language name; unknown codes fall back to English."""
    return LANGUAGE_NAMES.get(code, LANGUAGE_NAMES[DEFAULT_LANGUAGE])


def build_tone_section(persona: Persona | None) -> str:
    """Persona name and verbatim tone instructions, or the default voice."""
    if persona is None:
        return DEFAULT_TONE

    lines = [f"Persona: {persona.name}"]
    if persona.tone_instructions.strip():
        lines.append(persona.tone_instructions.strip())
    return "\n".join(lines)


def build_language_directive(response_language: str, corpus_language: str = "it") -> str:
    """
    Strict response-language rule.

    The knowledge context is authored in ``corpus_language``; the model must
    convey it in ``response_language`` rather than quote it.
    """
    target = language_name(response_language)
    source = LANGUAGE_NAMES.get(corpus_language, corpus_language)

    directive = f"Language: You MUST respond only in {target}, whatever language the visitor writes in."
    if corpus_language == response_language:
        return directive

    return f"""{directive}

IMPORTANT: The knowledge base context provided to you is in {source}. When you use it:
1. Understand the visitor's question
2. Use the {source} context provided
3. Respond naturally in {target}
4. DO NOT quote the {source} text or translate it word-for-word; convey the meaning naturally"""


def build_system_prompt(
    persona: Persona | None,
    response_language: str,
    corpus_language: str = "it",
) -> str:
    """
    Compose the guide's system instruction without retrieved context.

    Args:
        persona: Selected persona, or None for the default voice
        response_language: Language code the reply must be written in
        corpus_language: Language code the knowledge base is written in

    Returns:
        System prompt text
    """
    sections = [
        MISSION,
        build_tone_section(persona),
        build_language_directive(response_language, corpus_language),
    ]
    return "\n\n".join(sections)


def format_passage(passage: KnowledgePassage) -> str:
    """Render a passage as a context snippet tagged with category and location."""
    tag = passage.category
    if passage.location:
        tag = f"{tag}, {passage.location}"
    return f"{passage.title} ({tag}): {passage.content}"


def build_context_block(snippets: list[str]) -> str:
    """The "Relevant information" block, or an empty string when nothing was retrieved."""
    if not snippets:
        return ""
    return f"{CONTEXT_HEADER}\n" + "\n\n".join(snippets)


def compose_system_message(system_prompt: str, snippets: list[str]) -> str:
    """System prompt followed by the context block, when there is one."""
    context_block = build_context_block(snippets)
    if not context_block:
        return system_prompt
    return f"{system_prompt}\n\n{context_block}"


def fallback_message(language: str) -> str:
    """Canned reply used when the LLM cannot be reached."""
    return FALLBACK_MESSAGES.get(language, FALLBACK_MESSAGES[DEFAULT_LANGUAGE])
