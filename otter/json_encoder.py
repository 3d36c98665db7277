# otter to json encoding

import datetime
import decimal
from flask.json.provider import DefaultJSONProvider
from uuid import UUID
import otter
from .config import is_debug
from .envelope import format_timestamp
from .resolver import RelationDescriptor


class OtterJSONProvider(DefaultJSONProvider):
    """
    Flask JSON encoding for the envelopes and the values of the projected fields
    """

    sort_keys = False

    # pylint: disable=too-many-return-statements,arguments-differ
    @staticmethod
    def default(obj):
        """
        override the default json encoding
        :param obj: object to be encoded
        :return: encoded/serialized object
        """
        if isinstance(obj, RelationDescriptor):
            return obj.to_dict()
        if isinstance(obj, datetime.timedelta):
            return str(obj)
        if isinstance(obj, datetime.datetime):
            return format_timestamp(obj)
        if isinstance(obj, (datetime.date, datetime.time)):
            return obj.isoformat()
        if isinstance(obj, set):
            return list(obj)
        if isinstance(obj, UUID):
            return str(obj)
        if isinstance(obj, decimal.Decimal):
            return float(obj)
        if isinstance(obj, bytes):
            if obj == b"":
                return ""
            otter.log.debug("OtterJSONProvider: serializing bytes obj")
            return obj.hex()

        if not is_debug():
            otter.log.warning(f'JSON Encoding Error: Unknown object type "{type(obj)}" for {obj}')
            return {"error": "OtterJSONProvider invalid object"}

        return str(obj)
