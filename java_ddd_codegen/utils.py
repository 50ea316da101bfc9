"""
Utility functions for the Java DDD code generator.
"""

import re

# Regex pattern to split text into words, handling camelCase boundaries
_WORD_PATTERN = re.compile(r"[a-z]+|[A-Z][a-z]*|[0-9]+")

# Already a Java-style identifier: letters and digits only, starting with a letter
_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9]*$")

JAVA_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

JAVA_RESERVED_KEYWORDS = frozenset(
    {
        "abstract",
        "assert",
        "boolean",
        "break",
        "byte",
        "case",
        "catch",
        "char",
        "class",
        "const",
        "continue",
        "default",
        "do",
        "double",
        "else",
        "enum",
        "extends",
        "false",
        "final",
        "finally",
        "float",
        "for",
        "goto",
        "if",
        "implements",
        "import",
        "instanceof",
        "int",
        "interface",
        "long",
        "native",
        "new",
        "null",
        "package",
        "private",
        "protected",
        "public",
        "return",
        "short",
        "static",
        "strictfp",
        "super",
        "switch",
        "synchronized",
        "this",
        "throw",
        "throws",
        "transient",
        "true",
        "try",
        "void",
        "volatile",
        "while",
    }
)


def _normalize_separators(text: str) -> str:
    """Normalize separators (underscores, hyphens) to spaces."""
    return text.replace("_", " ").replace("-", " ")


def _split_into_words(text: str) -> list[str]:
    """Split text into words, handling camelCase boundaries."""
    return _WORD_PATTERN.findall(text)


def to_pascal_case(text: str) -> str:
    """Convert a lower-camel business name to a Java class name.

    Names that are already plain identifiers keep their inner casing, so
    acronyms survive. Anything with separators is split into words.

    Examples:
        "order" -> "Order"
        "orderMoney" -> "OrderMoney"
        "orderSN" -> "OrderSN"
        "order_money" -> "OrderMoney"
        "place-order time" -> "PlaceOrderTime"

    Args:
        text: The business name

    Returns:
        PascalCase string
    """
    if not text:
        return ""
    if _IDENTIFIER_PATTERN.match(text):
        return text[0].upper() + text[1:]
    words = _split_into_words(_normalize_separators(text))
    return "".join(word[0].upper() + word[1:] for word in words if word)


def to_lower_camel_case(text: str) -> str:
    """Convert a business name to a Java field name.

    Examples:
        "orderMoney" -> "orderMoney"
        "OrderMoney" -> "orderMoney"
        "order_money" -> "orderMoney"
    """
    pascal = to_pascal_case(text)
    if not pascal:
        return ""
    return pascal[0].lower() + pascal[1:]


def is_java_identifier(text: str) -> bool:
    """Check that text can be used as a Java identifier."""
    return bool(JAVA_IDENTIFIER_PATTERN.match(text)) and text not in JAVA_RESERVED_KEYWORDS


def escape_java_string(text: str) -> str:
    """Escape text for use inside a Java string literal."""
    return text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n").replace("\r", "\\r")


def simple_name(qualified_name: str) -> str:
    """Return the simple class name of a fully qualified Java name."""
    return qualified_name.rsplit(".", 1)[-1]
