class SymkitException(Exception):
    """Base class for every error raised by symkit."""


class UnsupportedShapeError(SymkitException, NotImplementedError):
    """The equation or inequality has a structure no solver handles yet.

    Distinct from a mathematically empty solution set: callers must never
    read this as "no roots".
    """

    def __init__(self, message: str, expr=None):
        super().__init__(message)
        self.expr = expr


class CannotEvalError(SymkitException):
    """An expression cannot be collapsed into a number or a boolean.

    Raised when numeric evaluation meets free variables, booleans or sets,
    or when boolean evaluation meets a non-boolean tree. Check
    ``Entity.evaluable_numerical`` / ``Entity.evaluable_boolean`` first to
    stay off this path.
    """

    def __init__(self, message: str, expr=None):
        super().__init__(message)
        self.expr = expr


class SymkitZ3Exception(SymkitException):
    pass
