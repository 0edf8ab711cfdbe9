import threading

from inflector.inflections import InflectionRegistry, Inflections


def test_get_creates_once():
    registry = InflectionRegistry()
    assert 'en' not in registry

    en = registry.get()
    assert isinstance(en, Inflections)
    assert en.locale == 'en'
    assert registry.get('en') is en
    assert registry['en'] is en
    assert 'en' in registry

    fr = registry['fr']
    assert fr is not en
    assert registry.locales() == ['en', 'fr']


def test_locales_are_independent():
    registry = InflectionRegistry()
    registry['en'].uncountable('rice')
    assert registry['en'].is_uncountable('rice')
    assert not registry['it'].is_uncountable('rice')


def test_concurrent_first_access():
    registry = InflectionRegistry()
    barrier = threading.Barrier(8)
    found = []

    def worker():
        barrier.wait()
        found.append(registry.get('de'))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(found) == 8
    assert all(instance is found[0] for instance in found)
    assert registry.locales() == ['de']


def test_clear_every_locale():
    registry = InflectionRegistry()
    for locale in ['en', 'es']:
        registry[locale].plural('cow', 'kine')
        registry[locale].acronym('HTML')

    registry.clear()

    for locale in ['en', 'es']:
        assert registry[locale].plurals == []
        assert registry[locale].get_acronym('html') == 'HTML'


def test_reload():
    registry = InflectionRegistry()
    registry['en'].plural('cow', 'kine')

    def seed(r):
        r['en'].uncountable('rice')

    registry.reload(seed)
    assert registry['en'].plurals == []
    assert registry['en'].uncountables == ['rice']

    registry.reload()
    assert registry['en'].uncountables == []


def test_repr():
    registry = InflectionRegistry()
    assert repr(registry) == '<InflectionRegistry empty>'
    registry.get('en')
    registry.get('fr')
    assert repr(registry) == '<InflectionRegistry en, fr>'
