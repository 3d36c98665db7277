# resolver.py: relationship resolution
#
# For every relation declared by a resource, the resolver determines:
# - the relation kind (HasOne, BelongsTo, BelongsToMany, ...)
# - the target resource and its model
# - the foreign key
# - the linkage values for a given model instance (relationshipId and resourceId)
#
from dataclasses import dataclass, field
from typing import Any, Optional, Union
import otter
from .errors import SystemValidationError
from .resource import available_fields
from .store import RelationKind


@dataclass(frozen=True)
class Instance:
    """
    Reference to a model instance that has already been loaded
    """

    model: Any


@dataclass(frozen=True)
class Key:
    """
    Reference to a model instance by its route key
    """

    value: Any


ModelRef = Union[Instance, Key]


def model_ref(obj, model: type) -> Optional[ModelRef]:
    """
    :param obj: None, Instance, Key, an instance of `model` or a route key
    :param model: the model class of the resource
    :return: ModelRef or None
    """
    if obj is None or isinstance(obj, (Instance, Key)):
        return obj
    if isinstance(obj, model):
        return Instance(obj)
    return Key(obj)


def parse_relation(declaration) -> tuple:
    """
    :param declaration: "Target" or ["Target", "foreign_key"]
    :return: (target base name, foreign key or None)
    """
    if isinstance(declaration, str):
        return declaration, None
    if isinstance(declaration, (list, tuple)) and len(declaration) == 2 and all(isinstance(item, str) for item in declaration):
        return declaration[0], declaration[1]
    raise SystemValidationError(f"Invalid relation declaration {declaration!r}")


@dataclass
class RelationDescriptor:
    """
    Description of one declared relation of a resource
    """

    name: str
    kind: RelationKind
    model: type
    foreign_key: str
    resource_name: str
    resource_title: str
    resource_fields: dict = field(default_factory=dict)
    relationship_id: Any = None
    resource_id: Any = None

    def to_dict(self) -> dict:
        """
        :return: the serialized descriptor, as used by the dashboard
        """
        return {
            "relationshipName": self.name,
            "relationshipType": self.kind.value,
            "relationshipModel": f"{self.model.__module__}.{self.model.__qualname__}",
            "relationshipForeignKey": self.foreign_key,
            "relationshipId": self.relationship_id,
            "resourceName": self.resource_name,
            "resourceTitle": self.resource_title,
            "resourceFields": self.resource_fields,
            "resourceId": self.resource_id,
        }


class RelationResolver:
    """
    :param registry: ResourceRegistry used to look up the relation targets
    :param store: ModelStore used to read the models
    """

    def __init__(self, registry, store) -> None:
        self.registry = registry
        self.store = store

    def resolve(self, resource, obj=None) -> dict:
        """
        Retrieve the descriptors of all the relations declared by the resource

        :param resource: OtterResource subclass
        :param obj: model instance, route key, ModelRef, or None for the instance independent descriptors
        :return: dict of relation name => RelationDescriptor
        """
        instance = self.load(resource, obj)
        result = {}
        for name, declaration in resource.relations().items():
            target_name, foreign_key = parse_relation(declaration)
            target = self.registry.get(target_name)
            info = self.store.relation(resource.model, name)
            if info.target is not None and info.target is not target.model:
                otter.log.warning(
                    f'Relation "{name}" of {resource.__name__} maps to {info.target.__name__}, '
                    f'but its resource "{target.__name__}" wraps {getattr(target.model, "__name__", target.model)}'
                )
            if foreign_key is None:
                foreign_key = self.store.foreign_key(target.model)

            descriptor = RelationDescriptor(
                name=name,
                kind=info.kind,
                model=target.model,
                foreign_key=foreign_key,
                resource_name=target.route_name,
                resource_title=target.title,
                resource_fields=available_fields(target),
            )
            if instance is not None:
                self.link(descriptor, instance)
            result[name] = descriptor

        return result

    def load(self, resource, obj=None):
        """
        :return: the model instance referenced by obj, or None
        """
        ref = model_ref(obj, resource.model)
        if ref is None:
            return None
        if isinstance(ref, Instance):
            return ref.model
        return self.store.find(resource.model, ref.value)

    def link(self, descriptor: RelationDescriptor, instance) -> None:
        """
        Set the linkage values of the descriptor for the given instance

        - HasOne, BelongsTo: relationship_id is the foreign key value, resource_id the route key of the related instance
        - BelongsToMany: relationship_id is the list of related keys (None if there are none)
        - other kinds aren't linked
        """
        kind = descriptor.kind
        if kind.singular:
            descriptor.relationship_id = getattr(instance, descriptor.foreign_key, None)
            related = self.store.related(instance, descriptor.name)
            descriptor.resource_id = self.store.route_key(related) if related is not None else None
        elif kind is RelationKind.BELONGS_TO_MANY:
            descriptor.relationship_id = self.store.related_ids(instance, descriptor.name) or None
        else:
            otter.log.debug(f'No linkage for {kind.value} relation "{descriptor.name}" of {type(instance).__name__}')
