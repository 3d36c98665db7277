# flake8: noqa: F401
#
# The modules refer to the logger and the db through the package (otter.log, otter.DB),
# so these are imported first
#
from .otter_init import DB, log, Otter
from .errors import (
    OtterError,
    ValidationError,
    GenericError,
    UnAuthorizedError,
    NotFoundError,
    UnresolvedResourceError,
    UnresolvedRelationError,
    SystemValidationError,
)
from .naming import class_name_from_route_name, route_name_from_class_name, base_class_name, pretty_name
from .resource import OtterResource, available_fields
from .registry import ResourceRegistry
from .store import ModelStore, RelationKind, RelationInfo
from .resolver import RelationResolver, RelationDescriptor, Instance, Key, model_ref
from .envelope import EnvelopeBuilder
from .fetcher import RelationCollectionFetcher
from .json_encoder import OtterJSONProvider
from .util import gravatar_link
from . import api
from .__about__ import __version__, __description__

__all__ = (
    "__version__",
    "__description__",
    #
    "Otter",
    "DB",
    "log",
    # resources:
    "OtterResource",
    "ResourceRegistry",
    "available_fields",
    # resolution:
    "ModelStore",
    "RelationKind",
    "RelationInfo",
    "RelationResolver",
    "RelationDescriptor",
    "Instance",
    "Key",
    "model_ref",
    "EnvelopeBuilder",
    "RelationCollectionFetcher",
    "OtterJSONProvider",
    # naming:
    "class_name_from_route_name",
    "route_name_from_class_name",
    "base_class_name",
    "pretty_name",
    "gravatar_link",
    # Errors:
    "OtterError",
    "ValidationError",
    "GenericError",
    "UnAuthorizedError",
    "NotFoundError",
    "UnresolvedResourceError",
    "UnresolvedRelationError",
    "SystemValidationError",
)
