'''Named registers of interchangeable components.

A register maps names to component callables (functions or classes) so that
configuration can refer to them by a string. There should normally be no
need to use these functions directly.
'''

from typing import Any, Callable, Dict, Tuple, Union


def register_functions(register: Dict[str, Callable],
                       kind: str,
                       ) -> Tuple[Callable, Callable, Callable]:
    '''Build the marker, getter and constructor functions for a register.

    :param register: The dictionary to hold the components.
    :param kind: Human-readable name of the component kind, for errors.
    :returns: A 3-tuple of functions:

        -   a decorator adding a component to the register under its name
            (``__name__`` converted to lowercase),
        -   a getter returning a component by name, raising KeyError for
            unknown names,
        -   a constructor that passes callables through unchanged and looks
            up strings by the getter.
    '''
    def mark(component: Callable) -> Callable:
        register[component.__name__.lower()] = component
        return component

    def get(name: str) -> Callable:
        try:
            return register[name]
        except (KeyError, TypeError):
            raise KeyError(f'unknown {kind}: {name!r}, available: '
                           + ', '.join(register.keys()))

    def construct(definition: Union[str, Callable, Any]) -> Callable:
        if callable(definition):
            return definition
        return get(definition)

    return mark, get, construct
