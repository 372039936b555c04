from .text import capitalize_with_acronyms, normalize_acronyms, normalize_text, replace_dashes

__all__ = [
    "capitalize_with_acronyms",
    "normalize_acronyms",
    "normalize_text",
    "replace_dashes",
]
