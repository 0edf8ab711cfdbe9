import json
import os

from .exceptions import InvalidConfiguration

RULE_KINDS = ['plurals', 'singulars', 'humans']


def read_config(file_name):
    if not os.path.exists(file_name):
        raise InvalidConfiguration(f'Configuration file "{file_name}" does not exist.')

    with open(file_name, 'r', encoding='utf-8') as f:
        config = json.load(f)

    if not isinstance(config, dict):
        raise InvalidConfiguration(f'Configuration file "{file_name}" must contain an object with one entry per locale.')

    return config


def _pairs(kind, entries):
    if isinstance(entries, dict):
        entries = list(entries.items())
    elif not isinstance(entries, (list, tuple)):
        raise InvalidConfiguration(f'"{kind}" must be a list of pairs, found {entries!r}.')

    pairs = []
    for entry in entries:
        if not isinstance(entry, (list, tuple)) or len(entry) != 2:
            raise InvalidConfiguration(f'Each entry of "{kind}" must be a pair, found {entry!r}.')
        if not all(isinstance(item, str) for item in entry):
            raise InvalidConfiguration(f'Each entry of "{kind}" must be a pair of strings, found {entry!r}.')
        pairs.append(tuple(entry))
    return pairs


def _words(kind, entries):
    if isinstance(entries, str):
        return [entries]
    if not isinstance(entries, (list, tuple)) or not all(isinstance(entry, str) for entry in entries):
        raise InvalidConfiguration(f'"{kind}" must be a list of words, found {entries!r}.')
    return list(entries)


def apply_config(inflections, rules: dict):
    """
    Register the rules of one locale, in the order of the keys.

    :param inflections: The ``Inflections`` to add the rules to.
    :param rules: A dictionary with any of the keys ``plurals``, ``singulars``, ``humans``
        (lists of ``[pattern, replacement]``), ``irregulars`` (list of ``[singular, plural]``
        or a dictionary), ``uncountables`` and ``acronyms`` (lists of words).
    :raises InvalidConfiguration: If a key is unknown or an entry is malformed.

    The patterns are strings compiled as regular expressions, so ``"(?i)^(ox)$"`` can
    be used for a case-insensitive rule.
    """
    if not isinstance(rules, dict):
        raise InvalidConfiguration(f'The rules of locale "{inflections.locale}" must be a dictionary, found {rules!r}.')

    for kind, entries in rules.items():
        if kind in RULE_KINDS:
            for pattern, replacement in _pairs(kind, entries):
                inflections.add_rule(kind, pattern, replacement)
        elif kind == 'irregulars':
            for singular, plural in _pairs(kind, entries):
                inflections.irregular(singular, plural)
        elif kind == 'uncountables':
            inflections.uncountable(_words(kind, entries))
        elif kind == 'acronyms':
            for word in _words(kind, entries):
                inflections.acronym(word)
        else:
            valid_kinds = ', '.join(RULE_KINDS + ['irregulars', 'uncountables', 'acronyms'])
            raise InvalidConfiguration(f'Unknown rule kind "{kind}". Valid kinds are: {valid_kinds}')
