import logging
import re
import threading
from typing import Callable, Dict, List, Optional

from .exceptions import InvalidConfiguration, UnknownRuleChain
from .rules import Rule, NEVER_MATCH, compile_pattern, irregular_plural_rules, irregular_singular_rules, build_acronym_regex
from .utils import apply_config, read_config

logger = logging.getLogger('Inflector')


class Scope:
    All = 'all'
    Plurals = 'plurals'
    Singulars = 'singulars'
    Uncountables = 'uncountables'
    Humans = 'humans'
    Acronyms = 'acronyms'


CHAIN_NAMES = {
    'plural':    Scope.Plurals,
    'plurals':   Scope.Plurals,
    'singular':  Scope.Singulars,
    'singulars': Scope.Singulars,
    'human':     Scope.Humans,
    'humans':    Scope.Humans,
}


class Inflections:
    """
    The inflection rules of one locale.

    New rules are added at the top of their chain, so they run before any rule that
    was already loaded, including the default ones::

        with registry.get('en') as inflect:
            inflect.plural(re.compile(r'^(ox)$', re.IGNORECASE), '\\1en')
            inflect.singular(re.compile(r'^(ox)en', re.IGNORECASE), '\\1')
            inflect.irregular('octopus', 'octopi')
            inflect.uncountable('equipment')

    Here the irregular rules for octopus are the first pluralization and
    singularization rules that run.

    The ``with`` block holds the lock of the instance, so other threads never see
    half of a block of registrations. Every method also holds the lock on its own.
    """

    def __init__(self, locale: str = 'en'):
        self.locale = locale
        self._lock = threading.RLock()
        self._plurals: List[Rule] = []
        self._singulars: List[Rule] = []
        self._uncountables: List[str] = []
        self._humans: List[Rule] = []
        self._acronyms: Dict[str, str] = {}
        self._acronym_regex = NEVER_MATCH

    def __enter__(self):
        self._lock.acquire()
        return self

    def __exit__(self, exc_type, value, traceback):
        self._lock.release()

    @property
    def plurals(self) -> List[Rule]:
        with self._lock:
            return list(self._plurals)

    @property
    def singulars(self) -> List[Rule]:
        with self._lock:
            return list(self._singulars)

    @property
    def humans(self) -> List[Rule]:
        with self._lock:
            return list(self._humans)

    @property
    def uncountables(self) -> List[str]:
        with self._lock:
            return list(self._uncountables)

    @property
    def acronyms(self) -> Dict[str, str]:
        with self._lock:
            return dict(self._acronyms)

    @property
    def acronym_regex(self) -> re.Pattern:
        """The alternation of all the acronyms, used to find acronym boundaries when changing case."""
        with self._lock:
            return self._acronym_regex

    def get_chain(self, kind: str) -> List[Rule]:
        """
        Return a copy of a rule chain, the rule to try first at index 0.

        :param kind: ``plural``, ``singular`` or ``human`` (the plural forms are accepted too).
        :raises UnknownRuleChain: If ``kind`` is not a rule chain.
        """
        with self._lock:
            return list(self._chain(kind))

    def is_uncountable(self, word: str) -> bool:
        with self._lock:
            return word.lower() in self._uncountables

    def get_acronym(self, word: str) -> Optional[str]:
        """Return the canonical form of an acronym given its lowercase form, or ``None``."""
        with self._lock:
            return self._acronyms.get(word)

    def _chain(self, kind: str) -> List[Rule]:
        name = CHAIN_NAMES.get(kind)
        if name is None:
            raise UnknownRuleChain(f'Unknown rule chain "{kind}". Valid chains are: plural, singular, human')
        return getattr(self, '_' + name)

    def _forget_uncountable(self, word):
        self._uncountables[:] = [w for w in self._uncountables if w != word]

    def _insert(self, chain: List[Rule], rule: Rule):
        self._forget_uncountable(rule.replacement)
        chain.insert(0, rule)

    def add_rule(self, kind: str, pattern, replacement: str):
        """
        Add a rule at the top of a chain.

        :param kind: ``plural``, ``singular`` or ``human``.
        :param pattern: A compiled regular expression, or a string compiled as one.
        :param replacement: The replacement, which may refer to the groups of the match as ``\\1``.
        :raises UnknownRuleChain: If ``kind`` is not a rule chain.
        :raises PatternError: If ``pattern`` is a string and not a valid regular expression.

        Declaring a rule for a word (as pattern string or replacement) removes it from the uncountable words.
        Human rules never affect the uncountable words.
        """
        name = CHAIN_NAMES.get(kind)
        if name == Scope.Humans:
            self.human(pattern, replacement)
        elif name == Scope.Plurals:
            self.plural(pattern, replacement)
        elif name == Scope.Singulars:
            self.singular(pattern, replacement)
        else:
            raise UnknownRuleChain(f'Unknown rule chain "{kind}". Valid chains are: plural, singular, human')

    def plural(self, pattern, replacement: str):
        """Specify a new pluralization rule and its replacement."""
        compiled = compile_pattern(pattern)
        with self._lock:
            if isinstance(pattern, str):
                self._forget_uncountable(pattern)
            self._insert(self._plurals, Rule(compiled, replacement))
        logger.debug(f'{self.locale}: plural {compiled.pattern!r} -> {replacement!r}')

    def singular(self, pattern, replacement: str):
        """Specify a new singularization rule and its replacement."""
        compiled = compile_pattern(pattern)
        with self._lock:
            if isinstance(pattern, str):
                self._forget_uncountable(pattern)
            self._insert(self._singulars, Rule(compiled, replacement))
        logger.debug(f'{self.locale}: singular {compiled.pattern!r} -> {replacement!r}')

    def irregular(self, singular: str, plural: str):
        """
        Specify an irregular pair that applies to both pluralization and singularization.

        Only strings are accepted, not regular expressions::

            irregular('octopus', 'octopi')
            irregular('person', 'people')
        """
        with self._lock:
            self._forget_uncountable(singular)
            self._forget_uncountable(plural)

            for rule in irregular_plural_rules(singular, plural):
                self._insert(self._plurals, rule)
            for rule in irregular_singular_rules(singular, plural):
                self._insert(self._singulars, rule)
        logger.debug(f'{self.locale}: irregular {singular!r} / {plural!r}')

    def uncountable(self, *words):
        """
        Specify words that are uncountable and should not be inflected::

            uncountable('money')
            uncountable('money', 'information')
            uncountable(['foo', 'bar'])
        """
        flat = []
        for word in words:
            if isinstance(word, str):
                flat.append(word)
            else:
                flat.extend(word)

        with self._lock:
            self._uncountables.extend(word.lower() for word in flat)
        logger.debug(f'{self.locale}: uncountable {flat}')

    def human(self, pattern, replacement: str):
        """
        Specify a humanized form of a string by a regular expression rule or by a string mapping::

            human(re.compile('_cnt$', re.IGNORECASE), '_count')
            human('legacy_col_person_name', 'Name')
        """
        compiled = compile_pattern(pattern)
        with self._lock:
            self._humans.insert(0, Rule(compiled, replacement))
        logger.debug(f'{self.locale}: human {compiled.pattern!r} -> {replacement!r}')

    def acronym(self, word: str):
        """
        Specify a new acronym, as it appears in a camelized string::

            acronym('HTML')
            acronym('RESTful')

        The plural of an acronym is a different word and must be registered on its own
        (``acronym('APIs')``) to be recognized.
        """
        if not word:
            return

        with self._lock:
            self._acronyms[word.lower()] = word
            self._acronym_regex = build_acronym_regex(self._acronyms.values())
        logger.debug(f'{self.locale}: acronym {word!r}')

    def clear(self, scope: str = Scope.All):
        """
        Clear the loaded inflections within a scope.

        The scopes are ``all``, ``plurals``, ``singulars``, ``uncountables``, ``humans`` and ``acronyms``.
        ``all`` does not clear the acronyms, they are only cleared when ``acronyms`` is given.
        """
        with self._lock:
            if scope == Scope.All:
                self._plurals.clear()
                self._singulars.clear()
                self._uncountables.clear()
                self._humans.clear()
            elif scope == Scope.Plurals:
                self._plurals.clear()
            elif scope == Scope.Singulars:
                self._singulars.clear()
            elif scope == Scope.Uncountables:
                self._uncountables.clear()
            elif scope == Scope.Humans:
                self._humans.clear()
            elif scope == Scope.Acronyms:
                self._acronyms.clear()
                self._acronym_regex = NEVER_MATCH
            else:
                logger.warning(f'{self.locale}: unknown inflection scope "{scope}", nothing cleared')
                return
        logger.debug(f'{self.locale}: cleared {scope}')

    def copy(self) -> 'Inflections':
        """Return an independent duplicate, used to save and restore the rules around a test."""
        duplicate = Inflections(self.locale)
        with self._lock:
            duplicate._plurals = list(self._plurals)
            duplicate._singulars = list(self._singulars)
            duplicate._uncountables = list(self._uncountables)
            duplicate._humans = list(self._humans)
            duplicate._acronyms = dict(self._acronyms)
            duplicate._acronym_regex = self._acronym_regex
        return duplicate

    def __repr__(self):
        with self._lock:
            items = [
                f'{name} {len(getattr(self, "_" + name))}'
                for name in [Scope.Plurals, Scope.Singulars, Scope.Uncountables, Scope.Humans, Scope.Acronyms]
                if getattr(self, '_' + name)
            ]
        items_txt = ', '.join(items) or 'empty'
        return f'<Inflections {self.locale}: {items_txt}>'


class InflectionRegistry:
    """
    Map each locale to its ``Inflections``.

    Each locale gets its instance on first access. The instances live as long
    as the registry, which is passed around explicitly.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._instances: Dict[str, Inflections] = {}

    def get(self, locale='en') -> Inflections:
        key = str(locale)
        with self._lock:
            instance = self._instances.get(key)
            if instance is None:
                instance = self._instances[key] = Inflections(key)
                logger.debug(f'Created inflections for locale "{key}"')
            return instance

    def __getitem__(self, locale) -> Inflections:
        return self.get(locale)

    def __contains__(self, locale):
        with self._lock:
            return str(locale) in self._instances

    def locales(self) -> List[str]:
        with self._lock:
            return list(self._instances)

    def clear(self):
        """Clear all the rules of every locale, except the acronyms."""
        with self._lock:
            instances = list(self._instances.values())
        for instance in instances:
            instance.clear()

    def reload(self, seed: Callable[['InflectionRegistry'], None] = None):
        """Clear every locale, then let ``seed`` register the default rules again."""
        self.clear()
        if seed:
            seed(self)

    def configure(self, config: dict):
        """
        Register the rules of a configuration document, ``{locale: {kind: [...]}}``.

        :raises InvalidConfiguration: If the document contains unknown kinds or malformed entries.
        """
        if not isinstance(config, dict):
            raise InvalidConfiguration(f'A configuration must be a dictionary with one entry per locale, found {config!r}.')

        for locale, rules in config.items():
            apply_config(self.get(locale), rules)

    def load_json(self, file_name: str):
        self.configure(read_config(file_name))

    def __repr__(self):
        return f'<{self.__class__.__name__} {", ".join(self.locales()) or "empty"}>'
