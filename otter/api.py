#  This file contains the flask-restful "Resource" objects of the dashboard api:
#  - ResourceIndexAPI: names of the exposed resources
#  - ResourceCollectionAPI: paginated envelopes of a resource
#  - ResourceInstanceAPI: envelope of a single instance
#  - RelationsAPI: relation descriptors of a single instance
#  - RelationalDataAPI: all selectable related rows, for the create/edit forms
#
# pylint: disable=redefined-builtin,invalid-name,line-too-long
#
import logging
from functools import wraps
from http import HTTPStatus
from typing import Callable
import werkzeug
from flask import Blueprint, current_app, jsonify, request
from flask_restful import Api, Resource as RestfulResource, abort
import otter
from .config import get_int_config
from .errors import NotFoundError, OtterError, UnAuthorizedError, UnresolvedResourceError, ValidationError


def http_method_decorator(fun: Callable) -> Callable:
    """Decorator for the supported HTTP methods
    - convert all exceptions to a JSON serializable error

    :param fun:
    :return: wrapped fun
    """

    @wraps(fun)
    def method_wrapper(*args, **kwargs):
        """Wrap the method and perform error handling
        :return: result of the wrapped method
        """
        otter_exception = None
        status_code = HTTPStatus.INTERNAL_SERVER_ERROR.value
        message = ""
        try:
            return fun(*args, **kwargs)

        except werkzeug.exceptions.NotFound as exc:
            # this also catches otter.errors.NotFoundError
            status_code = HTTPStatus.NOT_FOUND.value
            otter_exception = exc
            message = HTTPStatus.NOT_FOUND.description

        except OtterError as exc:
            otter.log.exception(exc)
            otter_exception = exc

        except werkzeug.exceptions.HTTPException as exc:
            status_code = exc.code
            message = exc.description
            otter.log.error(message)

        except Exception as exc:
            otter.log.exception(exc)
            otter_exception = exc
            if otter.log.getEffectiveLevel() > logging.DEBUG:
                message = "Logging Disabled"
            else:
                message = str(exc)

        status_code = getattr(otter_exception, "status_code", status_code)
        api_code = getattr(otter_exception, "api_code", status_code)
        title = getattr(otter_exception, "message", message) or message
        detail = getattr(otter_exception, "detail", title)

        errors = dict(title=title, detail=detail, code=str(api_code))
        abort(status_code, errors=[errors])

    return method_wrapper


def dashboard_gate(fun: Callable) -> Callable:
    """
    Deny access to the api when Otter.check fails for the current request
    """

    @wraps(fun)
    def gate_wrapper(*args, **kwargs):
        if not otter.Otter.check(request):
            raise UnAuthorizedError(f"Dashboard access denied for {request.remote_addr}")
        return fun(*args, **kwargs)

    return gate_wrapper


def get_otter():
    """
    :return: the Otter extension of the current app
    """
    return current_app.extensions["otter"]


class Resource(RestfulResource):
    """
    Superclass for the exposed endpoints, the gate is checked within the error handling
    """

    method_decorators = [dashboard_gate, http_method_decorator]

    @staticmethod
    def get_resource(route_name):
        """
        :param route_name: resource route name from the url
        :return: OtterResource subclass, NotFoundError is raised for unknown resources
        """
        try:
            return get_otter().registry.by_route_name(route_name)
        except UnresolvedResourceError:
            raise NotFoundError(f"Unknown resource \"{route_name}\"")


class ResourceIndexAPI(Resource):
    def get(self):
        """
        Retrieve the names of the Otter resources
        """
        registry = get_otter().registry
        return jsonify(data=registry.resource_names(), meta=dict(names=registry.resource_names(pretty=True)))


class ResourceCollectionAPI(Resource):
    def get(self, route_name):
        """
        Retrieve a page of envelopes, the page is selected with the page[offset] and page[limit] query args
        """
        ext = get_otter()
        resource = self.get_resource(route_name)
        offset, limit = self.page_args()
        count, instances = ext.store.page(resource.model, offset, limit)
        data = ext.builder.build_collection(resource, instances)
        meta = dict(count=count, offset=offset, limit=limit, title=resource.title, fields=otter.available_fields(resource))
        return jsonify(data=data, meta=meta)

    @staticmethod
    def page_args():
        """
        :return: (offset, limit) requested by the client
        """
        max_limit = get_int_config("MAX_PAGE_LIMIT", otter.Otter.MAX_PAGE_LIMIT)
        default_limit = get_int_config("DEFAULT_PAGE_LIMIT", otter.Otter.DEFAULT_PAGE_LIMIT)
        try:
            offset = int(request.args.get("page[offset]", 0))
            limit = int(request.args.get("page[limit]", default_limit))
        except ValueError:
            raise ValidationError("Pagination Error: page[offset] and page[limit] should be integers")
        if offset < 0 or limit < 0:
            raise ValidationError("Pagination Error: negative page[offset] or page[limit]")
        return offset, min(limit, max_limit)


class RelationalDataAPI(Resource):
    def get(self, route_name):
        """
        Retrieve all the rows that can be selected for the relations of the resource
        """
        resource = self.get_resource(route_name)
        return jsonify(data=get_otter().fetch_relation_collections(resource))


class ResourceInstanceAPI(Resource):
    def get(self, route_name, key):
        """
        Retrieve the envelope of the instance with the given route key
        """
        ext = get_otter()
        resource = self.get_resource(route_name)
        instance = ext.store.find(resource.model, key)
        return jsonify(data=ext.serialize(resource, instance))


class RelationsAPI(Resource):
    def get(self, route_name, key):
        """
        Retrieve the relation descriptors of the instance with the given route key
        """
        resource = self.get_resource(route_name)
        descriptors = get_otter().resolve_relations(resource, otter.Key(key))
        return jsonify(data={name: descriptor.to_dict() for name, descriptor in descriptors.items()})


def create_blueprint(name: str = "otter_api") -> Blueprint:
    """
    :param name: blueprint name
    :return: Blueprint with the Otter api endpoints
    """
    blueprint = Blueprint(name, __name__)
    api = Api(blueprint)
    api.add_resource(ResourceIndexAPI, "/", endpoint="index")
    api.add_resource(ResourceCollectionAPI, "/<string:route_name>", endpoint="collection")
    # no instance url ends in /relational-data, so route keys never shadow this endpoint
    api.add_resource(RelationalDataAPI, "/<string:route_name>/-/relational-data", endpoint="relational_data")
    api.add_resource(ResourceInstanceAPI, "/<string:route_name>/<string:key>", endpoint="instance")
    api.add_resource(RelationsAPI, "/<string:route_name>/<string:key>/relations", endpoint="relations")
    return blueprint
