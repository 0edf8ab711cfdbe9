import re
from typing import Iterable, List, NamedTuple, Optional, Union

from .exceptions import PatternError
from .string_utils import expand_template, split_initial, match_case

# Used as acronym matcher while no acronym is registered
NEVER_MATCH = re.compile(r'(?=a)b')


class Rule(NamedTuple):
    pattern: re.Pattern
    replacement: str

    def expand(self, match: re.Match) -> str:
        return expand_template(self.replacement, match)

    def apply(self, word: str) -> Optional[str]:
        """
        Replace the first match of the pattern in ``word``.

        :param word: The word to transform.
        :return: The transformed word, or ``None`` if the pattern does not match.
        """
        match = self.pattern.search(word)
        if not match:
            return None
        return word[:match.start()] + self.expand(match) + word[match.end():]

    def __repr__(self):
        return f'<{self.__class__.__name__} {self.pattern.pattern!r} -> {self.replacement!r}>'


class CaseMatchingRule(Rule):
    """A rule whose expansion is upper-cased when the matched text is all upper case."""
    __slots__ = ()

    def expand(self, match: re.Match) -> str:
        return match_case(super().expand(match), match.group(0))


def compile_pattern(pattern: Union[str, re.Pattern], flags=0) -> re.Pattern:
    """
    Return ``pattern`` as a compiled regular expression.

    A string is compiled as regex source, so a plain word matches itself.

    :raises PatternError: If the string is not a valid regular expression.
    :raises TypeError: If ``pattern`` is neither a string nor a compiled pattern.
    """
    if isinstance(pattern, re.Pattern):
        return pattern

    if isinstance(pattern, str):
        try:
            return re.compile(pattern, flags)
        except re.error as e:
            raise PatternError(f'Invalid rule pattern "{pattern}": {e}') from e

    raise TypeError(f'A rule pattern must be a string or a compiled regular expression, not {type(pattern).__name__}')


def _ending(initial: str, rest: str) -> re.Pattern:
    # initial is case sensitive, the rest is not
    return re.compile(f'{re.escape(initial)}(?i:{re.escape(rest)})$')


def _captured_ending(initial: str, rest: str) -> re.Pattern:
    return re.compile(f'({re.escape(initial)}){re.escape(rest)}$', re.IGNORECASE)


def irregular_plural_rules(singular: str, plural: str) -> List[Rule]:
    """
    Build the pluralization rules for an irregular pair, in insertion order.

    When both words start with the same letter, the initial is captured and reused, so
    the case of the matched initial is preserved (``Octopus`` -> ``Octopi``).
    Otherwise the target initial is hardcoded once for each case of the source initial.

    All the rules upper-case their expansion when the matched text is all upper case
    (``PERSON`` -> ``PEOPLE``).
    """
    if not singular or not plural:
        return []

    s0, srest = split_initial(singular)
    p0, prest = split_initial(plural)

    if s0.upper() == p0.upper():
        return [
            CaseMatchingRule(_captured_ending(s0, srest), '\\1' + prest),
            CaseMatchingRule(_captured_ending(p0, prest), '\\1' + prest),
        ]

    return [
        CaseMatchingRule(_ending(s0.upper(), srest), p0.upper() + prest),
        CaseMatchingRule(_ending(s0.lower(), srest), p0.lower() + prest),
        CaseMatchingRule(_ending(p0.upper(), prest), p0.upper() + prest),
        CaseMatchingRule(_ending(p0.lower(), prest), p0.lower() + prest),
    ]


def irregular_singular_rules(singular: str, plural: str) -> List[Rule]:
    """Build the singularization rules for an irregular pair, in insertion order."""
    if not singular or not plural:
        return []

    s0, srest = split_initial(singular)
    p0, prest = split_initial(plural)

    if s0.upper() == p0.upper():
        return [
            CaseMatchingRule(_captured_ending(s0, srest), '\\1' + srest),
            CaseMatchingRule(_captured_ending(p0, prest), '\\1' + srest),
        ]

    return [
        CaseMatchingRule(_ending(s0.upper(), srest), s0.upper() + srest),
        CaseMatchingRule(_ending(s0.lower(), srest), s0.lower() + srest),
        CaseMatchingRule(_ending(p0.upper(), prest), s0.upper() + srest),
        CaseMatchingRule(_ending(p0.lower(), prest), s0.lower() + srest),
    ]


def build_acronym_regex(acronyms: Iterable[str]) -> re.Pattern:
    """Compile the alternation of all the acronyms, or a regex that never matches if there are none."""
    alternatives = [re.escape(acronym) for acronym in acronyms if acronym]
    if not alternatives:
        return NEVER_MATCH
    return re.compile('|'.join(alternatives))
