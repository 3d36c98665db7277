# registry.py: lookup table of the exposed resources
#
# Resources are registered by their base (class) name, relations refer to their target using this name
#
import importlib
import inspect
import pkgutil
import otter
from .errors import UnresolvedResourceError
from .naming import class_name_from_route_name, pretty_name
from .resource import OtterResource


class ResourceRegistry:
    """
    Maps resource base names to OtterResource subclasses

    :param resources: OtterResource subclasses to register
    :param namespace: module the resources were loaded from, used in error messages
    """

    def __init__(self, resources=(), namespace: str = "") -> None:
        self.namespace = namespace
        self._resources = {}
        for resource in resources:
            self.register(resource)

    def register(self, resource):
        """
        Add a resource to the registry, can be used as a class decorator

        :param resource: OtterResource subclass
        :return: resource
        """
        if not (inspect.isclass(resource) and issubclass(resource, OtterResource)):
            raise TypeError(f"{resource} is not an OtterResource subclass")
        name = resource.__name__
        if name in self._resources and self._resources[name] is not resource:
            otter.log.warning(f'Resource "{name}" registered twice, replacing {self._resources[name]} with {resource}')
        self._resources[name] = resource
        return resource

    def get(self, name: str):
        """
        :param name: resource base name, eg. "UserAddress"
        :return: OtterResource subclass, UnresolvedResourceError is raised if the resource isn't registered
        """
        try:
            return self._resources[name]
        except KeyError:
            raise UnresolvedResourceError(name, self.namespace)

    def by_route_name(self, route_name: str):
        """
        :param route_name: resource route name, eg. "user_addresses"
        :return: OtterResource subclass whose route_name matches, UnresolvedResourceError is raised if there's none
        """
        for resource in self._resources.values():
            if resource.route_name == route_name:
                return resource
        raise UnresolvedResourceError(class_name_from_route_name(route_name), self.namespace)

    def resource_names(self, pretty: bool = False) -> list:
        """
        Retrieve the names of the registered resources

        :param pretty: return display names ("User Addresses") instead of route names ("user_addresses")
        :return: list of names, sorted by resource base name
        """
        resources = [self._resources[name] for name in sorted(self._resources)]
        if pretty:
            return [pretty_name(resource.__name__) for resource in resources]
        return [resource.route_name for resource in resources]

    def __contains__(self, name: str) -> bool:
        return name in self._resources

    def __iter__(self):
        return iter(self._resources.values())

    def __len__(self) -> int:
        return len(self._resources)

    @classmethod
    def from_namespace(cls, namespace: str) -> "ResourceRegistry":
        """
        Create a registry with all OtterResource subclasses defined in the `namespace` module,
        if the namespace is a package, its submodules are searched as well

        :param namespace: dotted module name, eg. "app.otter"
        :return: ResourceRegistry
        """
        registry = cls(namespace=namespace)
        module = importlib.import_module(namespace)
        modules = [module]
        if hasattr(module, "__path__"):
            for module_info in pkgutil.walk_packages(module.__path__, prefix=f"{namespace}."):
                modules.append(importlib.import_module(module_info.name))

        for mod in modules:
            for _, member in inspect.getmembers(mod, inspect.isclass):
                if member is OtterResource or not issubclass(member, OtterResource):
                    continue
                if member.__module__ != mod.__name__ or member.model is None:
                    # imported from elsewhere or abstract
                    continue
                registry.register(member)

        otter.log.debug(f'Loaded {len(registry)} Otter resources from "{namespace}"')
        return registry
