class StutterError(Exception):
    """ Base class for all Stutter errors"""
    pass

class StutterLexError(StutterError):
    """ Raised when the source ends in the middle of a raw token"""
    pass

class StutterSyntaxError(StutterError):
    """ Raised when parentheses or the shape of a form are wrong"""
    pass

class StutterUnboundSymbol(StutterError):
    """ Raised when a symbol is used before it is bound"""
    pass

class StutterTypeError(StutterError):
    """ Raised when an operator is applied to operands it does not define"""

class StutterIndexError(StutterError):
    """ Raised when index, take or drop is given an offset outside the list"""

class StutterArithmeticError(StutterError):
    """ Raised when a numeric value cannot be represented or divided"""

class StutterResourceExhausted(StutterError):
    """ Raised when evaluation nests deeper than the configured limit"""

class StutterBootstrapError(StutterError):
    """ Raised when a standard library form fails to evaluate"""
