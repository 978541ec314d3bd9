'''Conversion of rcvlib objects to and from JSON-ready dictionaries.

The tally machinery itself never serializes anything; this module is for the
code around it that needs to store or transmit options, ballots, results or
the algorithm used to compute them.
'''

import uuid
import inspect
import importlib
from fractions import Fraction
from decimal import Decimal
from typing import Any, List, Dict, Callable


ZERO_PARAMS: List[str] = ['args', 'kwargs']


def simple_serialization(class_: type) -> type:
    '''A decorator to provide a simple to_dict() serialization method.

    The resulting method will serialize all object attributes corresponding
    to the class's constructor parameter names, so the class must keep its
    constructor arguments under the same attribute names (dataclasses do).

    :param class_: The class to add the method to.
    '''
    param_names = list(inspect.signature(class_.__init__).parameters.keys())
    if 'self' in param_names:
        param_names.remove('self')
    # classes without a constructor of their own (algorithms) have no params
    if param_names == ZERO_PARAMS and class_.__init__ == object.__init__:
        param_names = []

    def to_dict(self) -> Dict[str, Any]:
        out_dict = {'class': scoped_class_name(self)}
        for attr in param_names:
            out_dict[attr] = serialize_value(getattr(self, attr))
        return out_dict

    class_.to_dict = to_dict
    class_._serializable = True
    return class_


def serialize_value(value: Any) -> Any:
    if hasattr(value, 'to_dict'):
        return value.to_dict()
    elif isinstance(value, tuple(ATOMIC_TYPES)):
        return value
    elif type(value) in CONVERTIBLE_TYPES:
        return CONVERTIBLE_TYPES[type(value)](value)
    elif hasattr(value, 'items') and hasattr(value, 'keys'):
        if all(isinstance(key, str) for key in value.keys()):
            return {key: serialize_value(val) for key, val in value.items()}
        else:
            # option ids are often ints or UUIDs, which JSON keys cannot be
            return {
                'type': 'dict',
                'keys': [serialize_value(key) for key in value.keys()],
                'values': [serialize_value(val) for val in value.values()]
            }
    elif hasattr(value, '__iter__'):
        return [serialize_value(val) for val in value]
    else:
        raise ValueError(f'cannot serialize {value!r} to dict format')


def deserialize_value(value: Any) -> Any:
    if isinstance(value, dict):
        if 'type' in value and is_scoped_identifier(value['type']):
            return deserialize_typed(value)
        elif 'class' in value and is_scoped_identifier(value['class']):
            return deserialize_class(value)
        else:
            return {key: deserialize_value(val) for key, val in value.items()}
    elif isinstance(value, tuple(ATOMIC_TYPES)):
        return value
    elif isinstance(value, list):
        return [deserialize_value(val) for val in value]
    else:
        raise ValueError(f'cannot deserialize {value!r}, type unknown')


def deserialize_typed(typedef: Dict[str, Any]) -> Any:
    typename = typedef['type']
    if typename == 'dict':
        return dict(zip(
            [deserialize_value(key) for key in typedef.get('keys', [])],
            [deserialize_value(val) for val in typedef.get('values', [])]
        ))
    elif typename not in TYPED_LOADERS:
        raise ValueError(f'unknown value type {typename!r}')
    elif 'value' in typedef:
        return TYPED_LOADERS[typename](deserialize_value(typedef['value']))
    elif 'arguments' in typedef:
        return TYPED_LOADERS[typename](*[
            deserialize_value(val) for val in typedef['arguments']
        ])
    else:
        raise ValueError(f'invalid typed value contents: {typedef!r}')


def deserialize_class(clsdef: Dict[str, Any]) -> Any:
    cls = get_class(clsdef['class'])
    params = {
        key: deserialize_value(val)
        for key, val in clsdef.items() if key != 'class'
    }
    return cls(**params)


def get_class(identifier: Any) -> type:
    '''Look up an rcvlib class that can be recreated from a dictionary.

    Only classes defined in rcvlib and decorated with
    :func:`simple_serialization` are accepted; the documents might come from
    untrusted sources.

    :raises ValueError: If the identifier names anything else.
    '''
    if not is_scoped_identifier(identifier) or '.' not in identifier:
        raise ValueError(f'invalid rcvlib class def: {identifier!r}')
    module_name, name = identifier.rsplit('.', 1)
    if module_name.split('.')[0] != ROOT_PACKAGE:
        raise ValueError(f'refusing to load non-rcvlib class {identifier!r}')
    try:
        module = importlib.import_module(module_name)
    except ImportError as err:
        raise ValueError(f'unknown rcvlib module {module_name!r}') from err
    cls = getattr(module, name, None)
    if not (
        isinstance(cls, type)
        and cls.__module__ == module_name
        and getattr(cls, '_serializable', False)
    ):
        raise ValueError(f'{identifier!r} is not a serializable rcvlib class')
    return cls


def from_dict(value: Dict[str, Any]) -> Any:
    """Recreate an rcvlib object from a JSON-like dictionary.

    Only rcvlib classes and the value types produced by :func:`to_dict` are
    ever instantiated, so documents from untrusted sources cannot be used to
    call arbitrary code.

    :param value: A dictionary created by :func:`to_dict`.
    :raises ValueError: If the dictionary does not describe an rcvlib object.
    """
    if not isinstance(value, dict):
        raise ValueError('invalid rcvlib object def: dict expected,'
                         f' got {value!r}')
    elif 'class' not in value:
        raise ValueError('invalid rcvlib object def: must have a class key')
    else:
        return deserialize_class(value)


def to_dict(obj: Any) -> Dict[str, Any]:
    """Serialize an rcvlib object to a JSON-ready dictionary.

    :param obj: An option, ballot, round summary, election result, tally
        algorithm or the like. It should provide a `to_dict()` method, which
        all of them get from the :func:`simple_serialization` decorator.
    """
    return serialize_value(obj)


def is_scoped_identifier(value: Any) -> bool:
    return (
        isinstance(value, str)
        and all(chunk.isidentifier() for chunk in value.split('.'))
    )


def scoped_class_name(value: Any) -> str:
    cls = value.__class__
    return '.'.join((cls.__module__, cls.__name__))


def fraction_to_json(f: Fraction) -> Dict[str, Any]:
    return {'type': 'Fraction', 'arguments': f.as_integer_ratio()}


def decimal_to_json(d: Decimal) -> Dict[str, Any]:
    return {'type': 'Decimal', 'value': str(d)}


def uuid_to_json(u: uuid.UUID) -> Dict[str, Any]:
    return {'type': 'uuid.UUID', 'value': str(u)}


def tuple_to_json(seq: tuple) -> Dict[str, Any]:
    return {'type': 'tuple', 'value': [serialize_value(v) for v in seq]}


ROOT_PACKAGE = __name__.split('.')[0]

ATOMIC_TYPES: List[type] = [
    str, int, float, bool, type(None),
]

CONVERTIBLE_TYPES: Dict[type, Callable] = {
    Fraction: fraction_to_json,
    Decimal: decimal_to_json,
    uuid.UUID: uuid_to_json,
    tuple: tuple_to_json,
}

# the only types a typed value may be loaded as, by their names in dicts
TYPED_LOADERS: Dict[str, Callable] = {
    'Fraction': Fraction,
    'Decimal': Decimal,
    'uuid.UUID': uuid.UUID,
    'tuple': tuple,
}
