# envelope.py: the serialized representation of a single model instance
#
# {
#     <field>: <value>, ...            # fields() - hidden()
#     "route_key": 1,
#     "relations": { <name>: <RelationDescriptor.to_dict()> } or None,
#     "created_at": "2020-01-01 10:00:00",
#     "updated_at": null,
#     "deleted_at": null
# }
#
from .config import get_config
from .resource import TIMESTAMP_FIELDS
from .resolver import Instance

DEFAULT_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_timestamp(value):
    """
    :param value: datetime or None
    :return: formatted datetime string or None
    """
    if not value:
        return None
    return value.strftime(get_config("OTTER_DATETIME_FORMAT", DEFAULT_DATETIME_FORMAT))


class EnvelopeBuilder:
    """
    :param resolver: RelationResolver
    :param store: ModelStore, defaults to the store of the resolver
    """

    def __init__(self, resolver, store=None) -> None:
        self.resolver = resolver
        self.store = store if store is not None else resolver.store

    def build(self, resource, instance) -> dict:
        """
        :param resource: OtterResource subclass
        :param instance: model instance
        :return: envelope dict
        """
        result = resource.project(instance)
        result["route_key"] = self.store.route_key(instance)
        relations = None
        if resource.relations():
            descriptors = self.resolver.resolve(resource, Instance(instance))
            relations = {name: descriptor.to_dict() for name, descriptor in descriptors.items()}
        result["relations"] = relations
        for attr_name in TIMESTAMP_FIELDS:
            # not all models have timestamp or soft delete columns
            result[attr_name] = format_timestamp(getattr(instance, attr_name, None))
        return result

    def build_collection(self, resource, instances) -> list:
        return [self.build(resource, instance) for instance in instances]
