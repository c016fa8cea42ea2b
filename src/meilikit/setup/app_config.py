import inject

from meilikit.application.client import Client
from meilikit.domain.repositories import HttpTransport
from meilikit.setup.client_config import ClientSettings, get_client_settings


def configure_di(settings: ClientSettings | None = None) -> Client:
    """Build a client from settings and bind it, and its transport, into the injector."""
    if settings is None:
        settings = get_client_settings()
    client = Client.from_settings(settings)

    def _config(binder: inject.Binder) -> None:
        binder.bind(Client, client)
        binder.bind(HttpTransport, client.http)

    inject.configure(_config, clear=True)
    return client


def get_client() -> Client:
    """Return the client bound by ``configure_di``."""
    return inject.instance(Client)
