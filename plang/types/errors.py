class PlangError(Exception):
    """ Base class for all Plang errors"""

    def __init__(self, message: str, line: int | None = None):
        super().__init__(message)
        self.message = message
        self.line = line

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"[line {self.line}] {self.message}"


# ----------------- Parse time -----------------

class PlangSyntaxError(PlangError):
    """ Raised for a single lexical or grammatical problem"""


class PlangParseError(PlangError):
    """ Raised once per source text with every syntax error collected"""

    def __init__(self, errors: list[PlangSyntaxError]):
        self.errors = list(errors)
        super().__init__("\n".join(str(e) for e in self.errors))

    def __str__(self) -> str:
        return self.message


# ----------------- Resolve time -----------------

class PlangResolveError(PlangError):
    """ Base class for scoping rule violations found before execution"""

class PlangDuplicateDeclaration(PlangResolveError):
    """ Raised when a name is declared twice in the same local scope"""

class PlangSelfReferenceInInitializer(PlangResolveError):
    """ Raised when a local variable is read in its own initializer"""

class PlangReturnOutsideFunction(PlangResolveError):
    """ Raised when 'return' appears at top level"""

class PlangThisOutsideMethod(PlangResolveError):
    """ Raised when 'this' appears outside a class method"""

class PlangSuperOutsideMethod(PlangResolveError):
    """ Raised when 'super' appears outside a class method"""

class PlangInvalidSuperUsage(PlangResolveError):
    """ Raised when 'super' is used in a class without a superclass"""

class PlangSelfInheritingClass(PlangResolveError):
    """ Raised when a class names itself as its superclass"""


# ----------------- Run time -----------------

class PlangRuntimeError(PlangError):
    """ Base class for errors raised while executing a program"""

class PlangUndefinedVariable(PlangRuntimeError):
    """ Raised when a name is read or assigned before it is defined"""

class PlangUndefinedProperty(PlangRuntimeError):
    """ Raised when an instance has neither a field nor a method of that name"""

class PlangUndefinedMethod(PlangRuntimeError):
    """ Raised when 'super.name' finds no such method on the superclass"""

class PlangTypeError(PlangRuntimeError):
    """ Raised when an operation is applied to values of the wrong type"""

class PlangArityError(PlangRuntimeError):
    """ Raised when the number of arguments passed to a function is incorrect"""

class PlangNotCallable(PlangRuntimeError):
    """ Raised when something other than a function or class is called"""

class PlangClassDefinitionFailed(PlangRuntimeError):
    """ Raised when a class value cannot be bound to its declared name"""

class PlangStackOverflow(PlangRuntimeError):
    """ Raised when calls nest deeper than the host stack allows"""


class PlangInternalError(Exception):
    """ Raised when the resolver and interpreter disagree about scope nesting.

    Not a PlangError: this is a bug in the implementation, never a user error.
    """
