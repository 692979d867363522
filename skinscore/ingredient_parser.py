import re
from typing import List

MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 80

LABEL_PATTERN = r"\b(ingredients|inci|состав)\s*:"

# Label text and OCR leftovers that are never ingredients
INVALID_PATTERNS = [
    'click here', 'read more', 'see more', 'show more', 'full list',
    'http', 'www.', '.com', 'may contain', 'free from', 'made with',
    'formulated with', 'directions', 'how to use', 'warning', 'caution',
    'keep out of reach', 'for external use', 'best before', 'made in',
    'ingredients:',
]

SENTENCE_INDICATORS = [
    ' is ', ' are ', ' was ', ' the ', ' if ', ' when ', ' because ', ' should ',
]


def clean_ingredient_name(ingredient_name: str) -> str:
    """Normalize whitespace and strip connective words and trailing punctuation."""
    if not ingredient_name:
        return ""

    cleaned = re.sub(r'\s+', ' ', ingredient_name.strip())
    # Second label section glued to its first ingredient, e.g. "Inactive ingredients: Aqua"
    cleaned = re.sub(r'^.*' + LABEL_PATTERN + r'\s*', '', cleaned, flags=re.I)
    cleaned = re.sub(r'^(and\s+|or\s+|also\s+)', '', cleaned, flags=re.I)
    cleaned = re.sub(r'(\s+and|\s+or)$', '', cleaned, flags=re.I)
    cleaned = cleaned.strip(' .*•-–:')

    # Drop long parenthetical explanations, keep short INCI qualifiers
    paren_content = re.search(r'\(([^)]+)\)', cleaned)
    if paren_content and len(paren_content.group(1)) > 30:
        cleaned = re.sub(r'\([^)]+\)', '', cleaned).strip()

    return cleaned


def is_valid_ingredient(ingredient_name: str) -> bool:
    if not ingredient_name or not isinstance(ingredient_name, str):
        return False

    ingredient_lower = ingredient_name.lower().strip()
    if len(ingredient_lower) < MIN_NAME_LENGTH or len(ingredient_lower) > MAX_NAME_LENGTH:
        return False

    for pattern in INVALID_PATTERNS:
        if pattern in ingredient_lower:
            return False

    padded = f' {ingredient_lower} '
    for indicator in SENTENCE_INDICATORS:
        if indicator in padded:
            return False

    if ingredient_name.count('(') != ingredient_name.count(')'):
        return False
    if ingredient_name.count('[') != ingredient_name.count(']'):
        return False

    # Mostly symbols, or no letters at all: OCR noise
    alphanumeric_chars = len([c for c in ingredient_name if c.isalnum()])
    if alphanumeric_chars < len(ingredient_name) * 0.4:
        return False
    if not any(c.isalpha() for c in ingredient_name):
        return False

    return True


def parse_ingredient_text(text: str) -> List[str]:
    """Split a raw ingredient block (pasted or OCR'd) into ingredient names.

    Keeps the label order, which is the concentration order, and drops
    duplicates case-insensitively.
    """
    if not text or not isinstance(text, str):
        return []

    text = re.sub(r'^.*?' + LABEL_PATTERN, '', text, count=1, flags=re.I | re.S)
    parts = re.split(r'[,;\n•·|]+', text)

    ingredients = []
    seen = set()
    for part in parts:
        cleaned = clean_ingredient_name(part)
        if not is_valid_ingredient(cleaned):
            continue
        key = cleaned.lower()
        if key in seen:
            continue
        seen.add(key)
        ingredients.append(cleaned)

    return ingredients
