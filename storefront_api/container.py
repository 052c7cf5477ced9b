# storefront_api/container.py
from dependency_injector import containers, providers

from storefront_api.config import Settings
from storefront_api.db.session import build_engine, build_session_factory
from storefront_api.services.admin_service import AdminService
from storefront_api.services.auth_service import AuthService
from storefront_api.services.catalog_service import CatalogService
from storefront_api.services.newsletter_service import NewsletterService
from storefront_api.services.notifier import build_notifier
from storefront_api.services.order_service import OrderService


class Container(containers.DeclarativeContainer):
    """
    Dependency Injection Container.

    One container is built per application by ``create_app``. Tests swap
    collaborators with ``container.notifier.override(fake)``.
    """

    # 1. Configuration
    settings = providers.Dependency(instance_of=Settings)

    # 2. Infrastructure (Singletons: one pool, one HTTP client per process)
    engine = providers.Singleton(build_engine, settings=settings)

    session_factory = providers.Singleton(build_session_factory, engine=engine)

    notifier = providers.Singleton(build_notifier, settings=settings)

    # 3. Services
    # Factory: a new instance per request; the caller supplies ``session``.
    catalog_service = providers.Factory(CatalogService)

    auth_service = providers.Factory(AuthService, settings=settings)

    order_service = providers.Factory(OrderService)

    admin_service = providers.Factory(AdminService)

    newsletter_service = providers.Factory(
        NewsletterService,
        notifier=notifier,
        service_slug=settings.provided.EMMISOR_SERVICE_SLUG,
    )


def build_container(settings: Settings) -> Container:
    container = Container()
    container.settings.override(providers.Object(settings))
    return container


__all__ = ["Container", "build_container"]
