"""Multilingual greeting tool."""

GREETINGS: dict[str, str] = {
    "korean": "안녕하세요",
    "english": "Hello",
    "spanish": "Hola",
    "french": "Bonjour",
    "japanese": "こんにちは",
    "chinese": "你好",
    "german": "Guten Tag",
    "italian": "Ciao",
    "russian": "Привет",
    "portuguese": "Olá",
}

SUPPORTED_LANGUAGES: tuple[str, ...] = tuple(GREETINGS)


def greet(name: str, language: str) -> str:
    """Greet someone by name in one of the supported languages.

    The language is constrained to SUPPORTED_LANGUAGES at validation time,
    so the lookup cannot miss.
    """
    return f"{GREETINGS[language]}, {name}!"


__all__ = ["GREETINGS", "SUPPORTED_LANGUAGES", "greet"]
