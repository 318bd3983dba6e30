"""factorik - A blueprint registry for building test fixture objects."""

from .attributes import AttributeSpec as AttributeSpec
from .attributes import Producer as Producer
from .attributes import Static as Static
from .attributes import attribute as attribute
from .blueprints import Blueprint as Blueprint
from .errors import DuplicateTraitDefinition as DuplicateTraitDefinition
from .errors import EmptyEnumeration as EmptyEnumeration
from .errors import FactoryError as FactoryError
from .errors import UndefinedBlueprint as UndefinedBlueprint
from .interpolate import Template as Template
from .registry import Registry as Registry
from .resolve import Resolver as Resolver
from .sequence import Sequence as Sequence

default_registry = Registry()

attributes_for = default_registry.attributes_for
blueprint = default_registry.blueprint
build = default_registry.build
build_list = default_registry.build_list
clear = default_registry.clear
count = default_registry.count
define = default_registry.define
extend = default_registry.extend
has = default_registry.has
rand = default_registry.rand
seq = default_registry.seq
