from typing import TYPE_CHECKING

from .utils import camel_to_snake

if TYPE_CHECKING:
    from .symbols import Symbol


class HandlerNotFoundException(Exception):
    """
    A specific handler (method) is not found
    """
    pass


class Visitor:
    """
    Conceptually, Visitor is an interface/abstract class; a concrete
    visitor, e.g. the virtual machine, implements a `visit_<symbol>`
    handler for each symbol class it can process.

    See following for visitor design pattern in python:
     https://refactoring.guru/design-patterns/visitor/python/example
    """

    def visit(self, symbol: 'Symbol'):
        """
        this will determine which specific handler to invoke; dispatch
        """
        # NB: this requires the class and handler have the
        # same name in PascalCase and snake_case, respectively
        handler = f'visit_{camel_to_snake(symbol.__class__.__name__)}'
        if not hasattr(self, handler):
            raise HandlerNotFoundException(f"{self.__class__.__name__} does not have {handler}")
        return getattr(self, handler)(symbol)
