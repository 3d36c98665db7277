# resource.py: implements the OtterResource metadata contract
#
# pylint: disable=no-self-argument,line-too-long
#
"""
OtterResource class customizable attributes and methods, override these to describe a resource.

model:
Type: SQLAlchemy mapped class
Description: The model that is wrapped by the resource.


title:
Type: str (classproperty)
Description: Display name of the resource, defaults to the spaced class name, eg. UserAddress => "User Address".


fields:
Type: classmethod
Description: Ordered mapping of field name => field type tag, defines what's exposed.
By default the tags are derived from the model columns (primary keys and timestamps excluded).


hidden:
Type: classmethod
Description: Field names that are left out of the projection.


relations:
Type: classmethod
Description: Mapping of relation name => target resource base name,
or relation name => [target resource base name, foreign key]


route_name:
Type: classproperty
Description: Name of the resource in urls, eg. UserAddress => "user_addresses"
"""
import sqlalchemy
from sqlalchemy import inspect as sqla_inspect
import otter
from .naming import pretty_name, route_name_from_class_name
from .util import classproperty

#
# Map SQLA types to the field type tags used by the dashboard
# If a type isn't found in the table, "string" will be used
#
SQLALCHEMY_FIELD_TYPE = {
    "INTEGER": "integer",
    "SMALLINT": "integer",
    "BIGINT": "integer",
    "TINYINT": "integer",
    "MEDIUMINT": "integer",
    "YEAR": "integer",
    "NUMERIC": "number",
    "DECIMAL": "number",
    "FLOAT": "number",
    "REAL": "number",
    "BOOLEAN": "boolean",
    "VARCHAR": "string",
    "NVARCHAR": "string",
    "CHAR": "string",
    "ENUM": "string",
    "UUID": "string",
    "TEXT": "text",
    "TINYTEXT": "text",
    "MEDIUMTEXT": "text",
    "LONGTEXT": "text",
    "CLOB": "text",
    "DATE": "date",
    "DATETIME": "datetime",
    "TIMESTAMP": "datetime",
    "TIME": "time",
    "JSON": "json",
}

# columns that are part of the envelope rather than the field projection
TIMESTAMP_FIELDS = ("created_at", "updated_at", "deleted_at")


def column_field_type(column) -> str:
    """
    :param column: sqla column
    :return: field type tag for the column
    """
    try:
        column_type = str(column.type)
    except sqlalchemy.exc.CompileError:
        column_type = type(column.type).__name__.upper()
    # Take care of extended column type declarations, eg. TEXT COLLATE "utf8mb4_unicode_ci" > TEXT
    column_type = column_type.split("(")[0].split(" ")[0]
    field_type = SQLALCHEMY_FIELD_TYPE.get(column_type, None)
    if field_type is None:
        otter.log.debug(f'Could not match field type for db column type `{column_type}`, using "string" for {column.name}')
        field_type = "string"
    return field_type


class OtterResource:
    """
    Resources are static descriptions of a model: they're never instantiated,
    all of the contract is implemented with class attributes and classmethods
    """

    model = None

    @classproperty
    def title(cls) -> str:
        return pretty_name(cls.__name__, plural=False)

    @classproperty
    def route_name(cls) -> str:
        return route_name_from_class_name(cls.__name__)

    @classmethod
    def fields(cls) -> dict:
        """
        :return: the fields and types used by the resource
        """
        if cls.model is None:
            return {}
        mapper = sqla_inspect(cls.model)
        primary_keys = {column.name for column in mapper.primary_key}
        result = {}
        for prop in mapper.column_attrs:
            column = prop.columns[0]
            if column.name in primary_keys or prop.key in TIMESTAMP_FIELDS:
                continue
            result[prop.key] = column_field_type(column)
        return result

    @classmethod
    def hidden(cls) -> list:
        """
        :return: the fields to be hidden in the index
        """
        return []

    @classmethod
    def relations(cls) -> dict:
        """
        :return: the relations used by the resource
        """
        return {}

    @classmethod
    def project(cls, instance) -> dict:
        """
        :param instance: model instance
        :return: dict of available field name => attribute value
        """
        return {name: getattr(instance, name, None) for name in available_fields(cls)}


def available_fields(resource) -> dict:
    """
    Retrieve all the fields that are not hidden in the resource

    :param resource: OtterResource subclass
    :return: ordered dict of field name => field type tag
    """
    hidden = set(resource.hidden())
    return {name: field_type for name, field_type in resource.fields().items() if name not in hidden}
