import logging
from typing import List


def get_root_from_chunk(instance):
    return get_instance_from_chunk(instance, condition=lambda x: x.father is None)


def get_instance_from_chunk(instance, condition):
    father = instance

    while not condition(father):
        father = father.father

    return father


class Dependency:
    '''This makes the relation between fields possible.

    In practice this class allows to write something like

        class Simple(Chunk):
            length = fields.StructField('I')
            data = fields.StringField(Dependency('.length'))

    and have the length of the string contained in the field named 'data'
    read from the field named 'length' at unpack time.

    The syntax of the expression is inspired from module resolution: a
    leading '.' indicates a field at the same level, otherwise the path
    starts from the root chunk.
    '''
    def __init__(self, expression):
        self.expression = expression
        self.logger = logging.getLogger(__name__)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.expression})>'

    def resolve_field(self, instance):
        fields_path: List[str] = self.expression.split('.')
        # '.miao'.split(".") -> ['', 'miao']
        # 'miao'.split(".") -> ['miao']

        if fields_path[0] != '':
            field = get_root_from_chunk(instance)
            self.logger.debug(' resolve from root: \'%s\'' % field.__class__.__name__)
        else:  # we have a relative dependency
            field = instance.father
            fields_path = fields_path[1:]

        if field is None:
            raise AttributeError(f"cannot resolve '{self.expression}' for a field without father")

        for component_name in fields_path:
            field = getattr(field, component_name)

        return field

    def resolve(self, instance):
        '''With this method we resolve the attribute with respect to the instance
        passed as argument.'''
        value = self.resolve_field(instance).value

        self.logger.debug(' resolved \'%s\' with value %s' % (self.expression, value))

        return value


class PropertyDescriptor(object):
    """This the glue for dependency management: the attribute can be
    a plain value or a Dependency resolved on access."""

    def __init__(self, name: str, _type: type):
        self.name = name
        self.type = _type

    def __get__(self, instance, owner):
        if instance is None:
            return self

        data = instance.__dict__
        if self.name not in data:
            raise AttributeError(f"no '{self.name}' here!")

        value = data[self.name]

        if isinstance(value, Dependency):
            return value.resolve(instance)

        return value

    def __set__(self, instance, value):
        if not isinstance(value, (self.type, Dependency)):
            raise ValueError(f"A property must be of type {self.type} or a Dependency")

        instance.__dict__[self.name] = value
