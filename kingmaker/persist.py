'''Serialization of election setups and results to JSON-ready dictionaries.

Candidates, preference models, tactics, strategies, methods, voting blocs and
outcomes all provide a ``to_dict()`` method, mostly courtesy of the
:func:`simple_serialization` decorator. The output only contains builtin
types so it can be passed to :func:`json.dumps` directly.
'''

import inspect
from fractions import Fraction
from typing import Any, List, Dict, Callable


ZERO_PARAMS: List[str] = ['args', 'kwargs']


def simple_serialization(class_: type) -> type:
    '''A decorator to provide a simple to_dict() serialization method.

    The resulting method will serialize all object attributes corresponding
    to the class's constructor parameter names. Therefore, this decorator
    is only useful when the class stores all its original parameters
    under the same names (a read-only property is fine).

    :param class_: The class to add the method to.
    '''
    if hasattr(class_, 'serialize_params'):
        param_names = class_.serialize_params
    else:
        param_names = list(inspect.signature(
            class_.__init__
        ).parameters.keys())
        if 'self' in param_names:
            param_names.remove('self')
        if param_names == ZERO_PARAMS and class_.__init__ == object.__init__:
            param_names = []

    def to_dict(self) -> Dict[str, Any]:
        out_dict = {'class': scoped_class_name(self)}
        for attr in param_names:
            out_dict[attr] = serialize_value(getattr(self, attr))
        return out_dict

    class_.to_dict = to_dict
    return class_


def serialize_value(value: Any) -> Any:
    if hasattr(value, 'to_dict') and not isinstance(value, type):
        return value.to_dict()
    elif isinstance(value, tuple(ATOMIC_TYPES)):
        return value
    elif isinstance(value, type):
        return {'type': '.'.join((value.__module__, value.__name__))}
    elif type(value) in CONVERTIBLE_TYPES:
        return CONVERTIBLE_TYPES[type(value)](value)
    elif hasattr(value, '__iter__'):
        if hasattr(value, 'items') and hasattr(value, 'keys'):
            if all(isinstance(key, str) for key in value.keys()):
                return {
                    key: serialize_value(val)
                    for key, val in value.items()
                }
            else:
                return {
                    'type': 'dict',
                    'keys': [serialize_value(key) for key in value.keys()],
                    'values': [serialize_value(val) for val in value.values()]
                }
        elif isinstance(value, (set, frozenset)):
            return [serialize_value(val) for val in sorted(value)]
        else:
            return [serialize_value(val) for val in value]
    elif hasattr(value, '__call__'):
        return {'callable': '.'.join((value.__module__, value.__name__))}
    else:
        raise ValueError(f'cannot serialize {value!r} to dict format')


def to_dict(obj: Any) -> Any:
    """Serialize a kingmaker object to a JSON-ready structure.

    :param obj: An election, method, preference model, outcome or similar.
        It should provide a `to_dict()` method (all the standard objects
        from kingmaker have it, courtesy of the simple_serialization
        decorator); plain containers of such objects are also accepted.
    """
    return serialize_value(obj)


def scoped_class_name(value: Any) -> str:
    cls = value.__class__
    return '.'.join((cls.__module__, cls.__name__))


def fraction_to_json(f: Fraction) -> Dict[str, Any]:
    return {'type': 'Fraction', 'arguments': list(f.as_integer_ratio())}


ATOMIC_TYPES: List[type] = [
    str, int, float, bool, type(None),
]

CONVERTIBLE_TYPES: Dict[type, Callable] = {
    Fraction: fraction_to_json,
}
