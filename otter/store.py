# store.py: model lookups and relation introspection on top of a Flask-SQLAlchemy session
#
# The resolver doesn't touch sqlalchemy directly, everything it needs to know about
# the models (keys, rows, relation kinds and values) goes through a ModelStore
#
import enum
from dataclasses import dataclass
from typing import Any, Optional
import sqlalchemy
from sqlalchemy import inspect as sqla_inspect
from sqlalchemy.orm.interfaces import ONETOMANY, MANYTOONE, MANYTOMANY
import otter
from .errors import NotFoundError, GenericError, UnresolvedRelationError
from .naming import snake_case


# string route keys accepted for boolean key columns
BOOLEAN_KEYS = {"true": True, "1": True, "false": False, "0": False}


class RelationKind(enum.Enum):
    """
    Relation kinds, the value is the name used in the serialized descriptors
    """

    HAS_ONE = "HasOne"
    HAS_MANY = "HasMany"
    BELONGS_TO = "BelongsTo"
    BELONGS_TO_MANY = "BelongsToMany"
    UNSUPPORTED = "Unsupported"

    @property
    def singular(self) -> bool:
        """
        :return: whether the relation holds at most one related instance
        """
        return self in (RelationKind.HAS_ONE, RelationKind.BELONGS_TO)


@dataclass(frozen=True)
class RelationInfo:
    """
    Static shape of a relation: this doesn't depend on any model instance
    """

    name: str
    kind: RelationKind
    target: Optional[type] = None


def relation_kind(relationship) -> RelationKind:
    """
    :param relationship: sqla RelationshipProperty
    :return: the kind of the relationship
    """
    if relationship.direction == MANYTOONE:
        return RelationKind.BELONGS_TO
    if relationship.direction == MANYTOMANY:
        return RelationKind.BELONGS_TO_MANY
    if relationship.direction == ONETOMANY:
        return RelationKind.HAS_MANY if relationship.uselist else RelationKind.HAS_ONE
    return RelationKind.UNSUPPORTED  # pragma: no cover


class ModelStore:
    """
    Read access to the models
    :param db: Flask-SQLAlchemy instance, `otter.DB` if not provided
    """

    def __init__(self, db=None) -> None:
        self._db = db

    @property
    def db(self):
        return self._db if self._db is not None else otter.DB

    @property
    def session(self):
        return self.db.session

    @staticmethod
    def key_name(model: type) -> str:
        """
        :return: the name of the (first) primary key attribute
        """
        mapper = sqla_inspect(model)
        return mapper.get_property_by_column(mapper.primary_key[0]).key

    def route_key_name(self, model: type) -> str:
        """
        :return: the attribute used to identify instances in urls,
        set `__route_key__` on the model to use something other than the primary key
        """
        return getattr(model, "__route_key__", None) or self.key_name(model)

    def route_key(self, instance) -> Any:
        """
        :return: the route key value of the instance
        """
        return getattr(instance, self.route_key_name(type(instance)))

    def foreign_key(self, model: type) -> str:
        """
        Default foreign key name used to refer to the model, eg. UserAddress => user_address_id
        set `__foreign_key__` on the model to override the convention
        """
        return getattr(model, "__foreign_key__", None) or f"{snake_case(model.__name__)}_{self.key_name(model)}"

    def _coerce_key(self, model: type, key_name: str, key: Any) -> Any:
        """
        Convert the key (f.i. an url parameter) to the python type of the key column
        """
        if not isinstance(key, str):
            return key
        column = sqla_inspect(model).get_property(key_name).columns[0]
        try:
            python_type = column.type.python_type
        except NotImplementedError:
            return key
        if python_type is str:
            return key
        if python_type is bool:
            # bool("false") is True
            lowered = key.strip().lower()
            if lowered in BOOLEAN_KEYS:
                return BOOLEAN_KEYS[lowered]
            raise NotFoundError(f'Invalid "{model.__name__}" key "{key}"')
        try:
            return python_type(key)
        except (TypeError, ValueError):
            raise NotFoundError(f'Invalid "{model.__name__}" key "{key}"')

    def find(self, model: type, key: Any):
        """
        :param model: mapped class
        :param key: route key value
        :return: the instance with the given route key, NotFoundError is raised if it doesn't exist
        """
        key_name = self.route_key_name(model)
        value = self._coerce_key(model, key_name, key)
        try:
            instance = self.session.query(model).filter_by(**{key_name: value}).first()
        except sqlalchemy.exc.SQLAlchemyError as exc:
            otter.log.error(f"Failed to get {model.__name__} with {key_name}={key}")
            raise GenericError(f"find : {exc}")
        if instance is None:
            raise NotFoundError(f'Invalid "{model.__name__}" key "{key}"')
        return instance

    def all(self, model: type) -> list:
        """
        :return: all rows of the model
        """
        return self.session.query(model).all()

    def relation(self, model: type, name: str) -> RelationInfo:
        """
        :param model: mapped class
        :param name: relation attribute name
        :return: RelationInfo describing the relation

        Attributes that aren't sqla relationships (hybrids, association proxies, ...) have an UNSUPPORTED kind,
        names that aren't attributes at all raise UnresolvedRelationError
        """
        relationships = sqla_inspect(model).relationships
        if name in relationships:
            relationship = relationships[name]
            return RelationInfo(name, relation_kind(relationship), relationship.mapper.class_)
        if hasattr(model, name):
            return RelationInfo(name, RelationKind.UNSUPPORTED)
        raise UnresolvedRelationError(model, name)

    @staticmethod
    def related(instance, name: str):
        """
        :return: the related instance (or None) for the "to one" relations, a collection for the "to many" relations
        """
        return getattr(instance, name)

    def related_ids(self, instance, name: str) -> list:
        """
        :return: primary keys of all the instances in the relation
        """
        result = []
        for related in getattr(instance, name):
            identity = sqla_inspect(type(related)).primary_key_from_instance(related)
            result.append(identity[0] if len(identity) == 1 else tuple(identity))
        return result

    def page(self, model: type, offset: int = 0, limit: Optional[int] = None) -> tuple:
        """
        :return: (total row count, rows of the requested page)
        """
        query = self.session.query(model)
        count = query.count()
        query = query.order_by(*sqla_inspect(model).primary_key).offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return count, query.all()
