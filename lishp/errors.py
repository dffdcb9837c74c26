
class LishpError(Exception):
    """ Base class for all lishp errors"""
    pass

class LishpSyntaxError(LishpError):
    """ Raised when the input cannot be tokenized or parsed"""
    pass

class LishpIncompleteInput(LishpSyntaxError):
    """ Raised when the input ends before its expression is complete"""

class LishpArityError(LishpError):
    """ Raised when the number of arguments passed to a builtin or function is incorrect"""

class LishpTypeError(LishpError):
    """ Raised when an argument has the wrong shape, e.g. text that is not a number"""

class LishpIOError(LishpError):
    """ Raised when a file or directory operation fails"""

class LishpCommandNotFound(LishpError):
    """ Raised when a call head is neither a builtin, a function nor an executable"""
