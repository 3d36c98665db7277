import logging
import os
import sys
from flask import Flask, current_app
from flask_sqlalchemy import SQLAlchemy
import otter
import flask.app
from typing import Callable, Optional
from .config import get_config
from .envelope import EnvelopeBuilder
from .fetcher import RelationCollectionFetcher
from .json_encoder import OtterJSONProvider
from .registry import ResourceRegistry
from .resolver import RelationResolver
from .store import ModelStore


class Otter:
    """This class configures the Flask application to serve the Otter resources
    :param app: a Flask application.
    :param registry: ResourceRegistry, if not set the resources are loaded from OTTER_RESOURCE_NAMESPACE on first use
    :param kwargs: passed to init_app, f.i. prefix
    """

    # Configuration settings are stored as class variables
    OTTER_RESOURCE_NAMESPACE = "app.otter"
    OTTER_URL_PREFIX = "/otter/api"
    OTTER_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
    DEFAULT_PAGE_LIMIT = 250
    MAX_PAGE_LIMIT = 100000
    LOGLEVEL = logging.WARNING

    # The callback that should be used to authenticate Otter users
    auth_using: Optional[Callable] = None

    def __init__(self, app: Optional[flask.app.Flask] = None, registry=None, *args, **kwargs) -> None:
        """
        Constructor
        """
        self.app = app
        self.db = None
        self._registry = registry
        if app is not None:
            self.init_app(app, *args, **kwargs)

    def init_app(
        self,
        app: flask.app.Flask,
        prefix: Optional[str] = None,
        app_db: Optional[SQLAlchemy] = None,
        expose_api: bool = True,
        **kwargs,
    ) -> None:
        """
        Application initialization

        :param app: a Flask application
        :param prefix: URL prefix of the api, defaults to OTTER_URL_PREFIX ('/otter/api')
        :param app_db: Flask-SQLAlchemy instance, defaults to the one registered on the app
        :param expose_api: register the api blueprint
        :param kwargs: configuration settings, these override the Otter class attributes
        """
        if not isinstance(app, Flask):  # pragma: no cover
            raise TypeError("'app' should be Flask.")

        if app_db is None:
            app_db = app.extensions["sqlalchemy"]

        otter.DB = self.db = app_db
        app.extensions["otter"] = self
        app.json = OtterJSONProvider(app)

        if app.config.get("DEBUG", False):
            log.setLevel(logging.DEBUG)

        for conf_name, conf_val in kwargs.items():
            setattr(Otter, conf_name, conf_val)

        if expose_api:
            if prefix is None:
                prefix = app.config.get("OTTER_URL_PREFIX", Otter.OTTER_URL_PREFIX)
            app.register_blueprint(otter.api.create_blueprint(), url_prefix=prefix)

        # pylint: disable=unused-argument,unused-variable
        @app.teardown_appcontext
        def shutdown_session(exception=None):
            """cfr. http://flask.pocoo.org/docs/0.12/patterns/sqlalchemy/"""
            self.db.session.remove()

    @property
    def registry(self):
        """
        :return: the ResourceRegistry, loaded from the configured namespace when it's first used
        """
        if self._registry is None:
            namespace = get_config("OTTER_RESOURCE_NAMESPACE", Otter.OTTER_RESOURCE_NAMESPACE)
            self._registry = ResourceRegistry.from_namespace(namespace)
        return self._registry

    @property
    def store(self):
        return ModelStore(self.db)

    @property
    def resolver(self):
        return RelationResolver(self.registry, self.store)

    @property
    def builder(self):
        return EnvelopeBuilder(self.resolver)

    def get_resource(self, resource):
        """
        :param resource: OtterResource subclass or resource base name
        :return: OtterResource subclass
        """
        if isinstance(resource, str):
            return self.registry.get(resource)
        return resource

    def serialize(self, resource, instance) -> dict:
        """
        :param resource: OtterResource subclass or base name
        :param instance: model instance
        :return: envelope dict
        """
        return self.builder.build(self.get_resource(resource), instance)

    def resolve_relations(self, resource, instance_or_key=None) -> dict:
        """
        :param resource: OtterResource subclass or base name
        :param instance_or_key: model instance or route key
        :return: dict of relation name => RelationDescriptor
        """
        return self.resolver.resolve(self.get_resource(resource), instance_or_key)

    def fetch_relation_collections(self, resource) -> dict:
        """
        :param resource: OtterResource subclass or base name
        :return: dict of relation name => list of envelopes
        """
        builder = self.builder
        fetcher = RelationCollectionFetcher(self.registry, builder.store, builder)
        return fetcher.fetch(self.get_resource(resource))

    @classmethod
    def auth(cls, callback: Callable) -> "Otter":
        """
        Set the callback that should be used to authenticate Otter users.

        :param callback: function that takes the request and returns whether it may access the dashboard
        """
        cls.auth_using = staticmethod(callback)
        return cls()

    @classmethod
    def check(cls, request) -> bool:
        """
        Determine if the given request can access the Otter dashboard.
        Without an auth callback, access is only allowed when the app runs in debug mode
        """
        if cls.auth_using is not None:
            return bool(cls.auth_using(request))
        return bool(current_app.debug)

    @staticmethod
    def init_logging(loglevel: int = logging.WARNING) -> logging.Logger:
        """
        Specify the log format used in the webserver logs
        """
        log = logging.getLogger("otter")
        if log.level == logging.NOTSET:
            handler = logging.StreamHandler(sys.stderr)
            formatter = logging.Formatter("[%(asctime)s] %(levelname)s: %(message)s")
            handler.setFormatter(formatter)
            log.setLevel(loglevel)
            log.addHandler(handler)
        return log


#
# DB and logging initialization
#
DB = SQLAlchemy()

try:
    DEBUG = os.getenv("DEBUG", logging.WARNING)
    LOGLEVEL = int(DEBUG)
except ValueError:  # pragma: no cover
    print(f'Invalid LogLevel in DEBUG Environment Variable! "{DEBUG}"')
    LOGLEVEL = logging.INFO

log = Otter.init_logging(LOGLEVEL)
