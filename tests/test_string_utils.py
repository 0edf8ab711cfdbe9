import re

from inflector.string_utils import expand_template, split_initial, match_case


def test_expand_template():
    match = re.search(r'(ox)', 'box')
    assert expand_template(r'\1en', match) == 'oxen'
    assert expand_template(r'[\0]', match) == '[ox]'
    assert expand_template('no references', match) == 'no references'
    assert expand_template('', match) == ''


def test_expand_template_missing_groups():
    match = re.search(r'(a)|(b)', 'b')
    assert expand_template(r'\1-\2', match) == '-b'
    assert expand_template(r'\7x', match) == 'x'


def test_expand_template_escaped_backslash():
    match = re.search(r'(a)', 'a')
    assert expand_template('\\\\1', match) == '\\1'


def test_split_initial():
    assert split_initial('person') == ('p', 'erson')
    assert split_initial('x') == ('x', '')
    assert split_initial('') == ('', '')


def test_match_case():
    assert match_case('People', 'PERSON') == 'PEOPLE'
    assert match_case('People', 'Person') == 'People'
    assert match_case('people', 'person') == 'people'
