from .resolver import parse_relation


class RelationCollectionFetcher:
    """
    Loads all the rows that can be selected for the relations of a resource,
    f.i. to populate the options of a dropdown in the create and edit forms

    :param registry: ResourceRegistry
    :param store: ModelStore
    :param builder: EnvelopeBuilder used to serialize the rows
    """

    def __init__(self, registry, store, builder) -> None:
        self.registry = registry
        self.store = store
        self.builder = builder

    def fetch(self, resource) -> dict:
        """
        :param resource: OtterResource subclass
        :return: dict of relation name => list of target resource envelopes
        """
        result = {}
        for name, declaration in resource.relations().items():
            target_name, _ = parse_relation(declaration)
            target = self.registry.get(target_name)
            result[name] = self.builder.build_collection(target, self.store.all(target.model))
        return result
