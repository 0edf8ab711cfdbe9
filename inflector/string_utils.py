import re
from typing import Tuple

BACK_REFERENCE = re.compile(r'\\(\d|\\)')


def expand_template(template: str, match: re.Match) -> str:
    """
    Expand a replacement template using the groups of a regex match.

    :param template: The replacement text, with ``\\0`` to ``\\9`` back-references.
    :param match: The match the back-references refer to.
    :return: The expanded text.

    ``\\0`` is the whole match. A group that did not participate in the match,
    or that does not exist in the pattern, expands to an empty string.
    ``\\\\`` produces a single backslash.
    """
    def replace(reference):
        token = reference.group(1)
        if token == '\\':
            return '\\'

        index = int(token)
        if index > match.re.groups:
            return ''
        return match.group(index) or ''

    return BACK_REFERENCE.sub(replace, template)


def split_initial(word: str) -> Tuple[str, str]:
    """Split a word into its first character and the rest."""
    return word[:1], word[1:]


def match_case(text: str, model: str) -> str:
    """Return ``text`` upper-cased when ``model`` is entirely upper case."""
    if model.isupper():
        return text.upper()
    return text
