'''Instrumented wrappers for mappings presumed to be injective'''

__author__ = 'Timotej Bernat'
__email__ = 'timotej.bernat@colorado.edu'

import logging
LOGGER = logging.getLogger(__name__)

from typing import (
    Callable,
    Generic,
    Hashable,
    Optional,
    TypeVar,
)
X = TypeVar('X', bound=Hashable)
Y = TypeVar('Y', bound=Hashable)


# Custom Exceptions
class NonInjectiveError(Exception):
    '''Raised when a mapping presumed to be injective is observed sending two distinct inputs to the same output'''
    pass

# Instrumented mappings
class Injection(Generic[X, Y]):
    '''
    A callable wrapping a mapping which is presumed (but not proven) to be injective

    Records every input-output pair observed during evaluation, so that any violation
    of injectivity encountered over the course of a construction is reported rather than
    silently producing a mapping which is not one-to-one

    Parameters
    ----------
    func : Callable[[X], Y]
        The underlying mapping
    strict : bool, default True
        If True, raise NonInjectiveError as soon as a violation is observed
        If False, violations are logged and collected in the "violations" attribute
    name : str, optional
        Name to refer to the mapping by in messages; inferred from the wrapped callable if not provided
    '''
    def __init__(
        self,
        func : Callable[[X], Y],
        strict : bool=True,
        name : Optional[str]=None,
    ) -> None:
        if not callable(func):
            raise TypeError(f'Injection must wrap a callable, not {type(func)}')
        if isinstance(func, Injection): # DEV: unwrap to avoid double-recording
            func = func.func

        self.func = func
        self.strict = strict
        self.name = name if (name is not None) else getattr(func, '__name__', repr(func))
        self._preimages : dict[Y, X] = {}
        self.violations : list[tuple[X, X, Y]] = []

    def __call__(self, x : X) -> Y:
        y = self.func(x)
        if (seen := self._preimages.setdefault(y, x)) != x:
            self.violations.append((seen, x, y))
            message = f'Mapping "{self.name}" is not injective: {seen!r} and {x!r} both map to {y!r}'
            if self.strict:
                raise NonInjectiveError(message)
            LOGGER.warning(message)

        return y

    @property
    def is_violated(self) -> bool:
        '''Whether any violation of injectivity has been observed so far'''
        return bool(self.violations)

    @property
    def num_evaluations_recorded(self) -> int:
        '''Number of distinct outputs observed so far'''
        return len(self._preimages)

    def observed_preimage(self, y : Y) -> Optional[X]:
        '''The input previously observed to produce the given output, if any'''
        return self._preimages.get(y, None)

    def reset(self) -> None:
        '''Forget all observed evaluations and violations'''
        self._preimages.clear()
        self.violations.clear()

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}({self.name}, strict={self.strict})'
