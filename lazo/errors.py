
class LazoError(Exception):
    """ Base class for all Lazo errors"""
    pass

class LazoSyntaxError(LazoError):
    """ Raised for malformed source text or a malformed expression shape"""

    def __str__(self):
        return f"Syntax Error! {self.args[0]}"

class LazoRuntimeError(LazoError):
    """ Raised when a builtin fails in its own domain, or on an explicit (error ...)"""

    def __str__(self):
        return f"Runtime Error! {self.args[0]}"

class LazoArityError(LazoError):
    """ Raised when the number of arguments passed to a function is incorrect"""

    def __init__(self, supplied: int, expected: int):
        super().__init__(supplied, expected)
        self.supplied = supplied
        self.expected = expected

    def __str__(self):
        return (
            f"Function Error! the passed arguments length {self.supplied} is different "
            f"to expected length {self.expected} of the function's arguments"
        )
