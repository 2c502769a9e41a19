'''
Machinery behind the declarative records: the metaclass collects the fields
declared in a Chunk body, in order, and puts a descriptor in their place so
that every chunk instance works on its own copy of them.
'''
import copy
import logging
from typing import List


logger = logging.getLogger(__name__)


class FieldDescriptor(object):
    """Class-level stand-in for a declared field; the first access from an
    instance copies the field into it, with the instance as father."""

    def __init__(self, field, name: str):
        self.field = field
        self.field.name = name

    def __get__(self, instance, owner=None):
        if instance is None:
            return self.field

        data = instance.__dict__
        name = self.field.name

        if name not in data:
            data[name] = self.field.create(father=instance)

        return data[name]


class FieldBase(object):

    def contribute_to_chunk(self, cls, name):
        if getattr(cls, name, None) is not None:
            raise AttributeError(f'{cls.__name__}.{name} is already defined')

        setattr(cls, name, FieldDescriptor(self, name))

    def create(self, father):
        instance = copy.deepcopy(self)
        instance.father = father
        return instance


class Meta(object):
    """Layout of a record: the names of its fields in unpacking order."""

    def __init__(self, fields=None):
        self.fields: List[str] = list(fields or [])


class MetaChunk(type):

    def __new__(mcs, name, bases, attrs):
        '''Fields of the parents come first, then the ones declared here, Django-style.'''
        declared = {_k: attrs.pop(_k) for _k in list(attrs) if isinstance(attrs[_k], FieldBase)}

        new_cls = super().__new__(mcs, name, bases, attrs)

        inherited = [_ for base in bases if isinstance(base, MetaChunk) for _ in base._meta.fields]
        new_cls._meta = Meta(inherited)

        for field_name, field in declared.items():
            logger.debug('field \'%s\' declared in %s', field_name, name)
            new_cls._meta.fields.append(field_name)
            field.contribute_to_chunk(new_cls, field_name)

        return new_cls
