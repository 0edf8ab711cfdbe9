class PatternError(Exception):
    pass


class UnknownRuleChain(Exception):
    pass


class InvalidConfiguration(Exception):
    pass
